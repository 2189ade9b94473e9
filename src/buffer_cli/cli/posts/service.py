"""Stateless service for post (update) operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

from ..core.parsers import format_timestamp, truncate_text
from ..core.session import ApiSession
from ..core.types import Failure, Result, Success
from .params import PostCreateParams, PostUpdateParams

UpdateStatus = Literal["pending", "sent"]

TEXT_PREVIEW_LENGTH = 80


@dataclass
class UpdatesPage:
    """One page of posts plus the server-side total."""

    rows: list[dict[str, Any]]
    total: int


@dataclass
class CreatedPosts:
    """Posts created by /updates/create.json."""

    rows: list[dict[str, Any]]
    buffer_count: int | None = None


def update_row(update: dict[str, Any]) -> dict[str, Any]:
    """Project a post into a display row."""
    return {
        "id": update.get("id"),
        "text": truncate_text(update.get("text"), TEXT_PREVIEW_LENGTH),
        "status": update.get("status"),
        "profile_id": update.get("profile_id"),
        "created_at": format_timestamp(update.get("created_at")),
        "due_at": format_timestamp(update.get("due_at")),
    }


async def list_updates(
    session: ApiSession,
    profile_id: str,
    status: UpdateStatus,
    count: int = 20,
    page: int = 1,
) -> UpdatesPage:
    """List pending or sent posts for a profile."""
    result = await session.get(
        f"/profiles/{profile_id}/updates/{status}.json",
        {"count": str(count), "page": str(page)},
    )
    updates = result.get("updates") or []
    return UpdatesPage(
        rows=[update_row(u) for u in updates],
        total=result.get("total", len(updates)),
    )


async def create_post(session: ApiSession, params: PostCreateParams) -> Result[CreatedPosts]:
    """Create a post on one or more profiles."""
    result = await session.post("/updates/create.json", params.to_form())
    if not result.get("success"):
        return Failure("CREATE_FAILED", result.get("message") or "Failed to create post")
    return Success(CreatedPosts(
        rows=[update_row(u) for u in result.get("updates") or []],
        buffer_count=result.get("buffer_count"),
    ))


async def update_post(session: ApiSession, params: PostUpdateParams) -> Result[dict[str, Any]]:
    """Edit the text, media or schedule of an existing post."""
    result = await session.post(f"/updates/{params.post_id}/update.json", params.to_form())
    if not result.get("success"):
        return Failure("UPDATE_FAILED", result.get("message") or "Failed to update post")
    return Success(update_row(result.get("update") or {}))


async def _post_action(
    session: ApiSession,
    post_id: str,
    action: Literal["destroy", "share"],
    failure_code: str,
    failure_message: str,
) -> Result[dict[str, Any]]:
    result = await session.post(f"/updates/{post_id}/{action}.json")
    if not result.get("success"):
        return Failure(failure_code, result.get("message") or failure_message)
    return Success({"success": True, "post_id": post_id})


async def delete_post(session: ApiSession, post_id: str) -> Result[dict[str, Any]]:
    """Delete a post."""
    return await _post_action(session, post_id, "destroy", "DELETE_FAILED", "Failed to delete post")


async def share_post(session: ApiSession, post_id: str) -> Result[dict[str, Any]]:
    """Share a post immediately instead of waiting for its slot."""
    return await _post_action(session, post_id, "share", "SHARE_FAILED", "Failed to share post")
