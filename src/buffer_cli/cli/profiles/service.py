"""Stateless service for social profile operations."""

from __future__ import annotations

from typing import Any

from ..core.parsers import format_timestamp
from ..core.session import ApiSession


def _counts(profile: dict[str, Any]) -> dict[str, Any]:
    return profile.get("counts") or {}


def profile_row(profile: dict[str, Any]) -> dict[str, Any]:
    """Project a profile into a list row."""
    counts = _counts(profile)
    return {
        "id": profile.get("id"),
        "service": profile.get("service"),
        "username": profile.get("formatted_username"),
        "pending": counts.get("pending", 0),
        "sent": counts.get("sent", 0),
        "drafts": counts.get("drafts", 0),
        "default": profile.get("default"),
    }


def profile_detail(profile: dict[str, Any]) -> dict[str, Any]:
    """Project a profile into a detail record."""
    counts = _counts(profile)
    return {
        "id": profile.get("id"),
        "service": profile.get("service"),
        "username": profile.get("formatted_username"),
        "avatar": profile.get("avatar"),
        "default": profile.get("default"),
        "pending": counts.get("pending", 0),
        "sent": counts.get("sent", 0),
        "drafts": counts.get("drafts", 0),
        "created_at": format_timestamp(profile.get("created_at")),
    }


async def list_profiles(session: ApiSession) -> list[dict[str, Any]]:
    """List all connected social profiles."""
    profiles = await session.get("/profiles.json")
    return [profile_row(p) for p in profiles]


async def get_profile(session: ApiSession, profile_id: str) -> dict[str, Any]:
    """Get details for one profile."""
    profile = await session.get(f"/profiles/{profile_id}.json")
    return profile_detail(profile)
