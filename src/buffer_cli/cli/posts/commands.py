"""Post CLI commands - thin wrappers orchestrating params, validation, service and output."""

from __future__ import annotations

from typing import List, Optional

import typer

from ...output import OutputFormat, print_output
from ..core.console import console, print_info
from ..core.options import (
    AccessTokenOption,
    CountOption,
    DryRunOption,
    OutputOption,
    PageOption,
    PostIdOption,
    ProfileIdOption,
    QuietOption,
    VerboseOption,
)
from ..core.runner import emit_result, require_session, run_api
from ..core.types import Failure
from .params import PostCreateParams, PostUpdateParams, validate_scheduled_at, validate_text
from .service import (
    UpdateStatus,
    create_post,
    delete_post,
    list_updates,
    share_post,
    update_post,
)

MediaLinkOption = typer.Option(None, "--media-link", help="URL to attach as media")
MediaDescriptionOption = typer.Option(
    None, "--media-description", help="Description for the media attachment"
)
ScheduledAtOption = typer.Option(None, "--scheduled-at", help="Schedule time (ISO 8601 format)")


def _check(*results: object, output: OutputFormat) -> None:
    for result in results:
        if isinstance(result, Failure):
            emit_result(result, output)


def _list(
    ctx: typer.Context,
    status: UpdateStatus,
    profile_id: str,
    count: int,
    page: int,
    access_token: Optional[str],
    output: OutputFormat,
    quiet: bool,
    verbose: bool,
) -> None:
    session = require_session(ctx, access_token, verbose)
    result = run_api(list_updates(session, profile_id, status, count, page), output)
    if not quiet:
        print_info(f"Total {status}: {result.total}")
    emit_result(result.rows, output)


def list_command(
    ctx: typer.Context,
    profile_id: str = ProfileIdOption,
    count: int = CountOption,
    page: int = PageOption,
    access_token: Optional[str] = AccessTokenOption,
    output: OutputFormat = OutputOption,
    quiet: bool = QuietOption,
    verbose: bool = VerboseOption,
) -> None:
    """List pending posts for a profile."""
    _list(ctx, "pending", profile_id, count, page, access_token, output, quiet, verbose)


def sent_command(
    ctx: typer.Context,
    profile_id: str = ProfileIdOption,
    count: int = CountOption,
    page: int = PageOption,
    access_token: Optional[str] = AccessTokenOption,
    output: OutputFormat = OutputOption,
    quiet: bool = QuietOption,
    verbose: bool = VerboseOption,
) -> None:
    """List sent posts for a profile."""
    _list(ctx, "sent", profile_id, count, page, access_token, output, quiet, verbose)


def create_command(
    ctx: typer.Context,
    profile_id: List[str] = typer.Option(..., "--profile-id", help="Profile ID(s) to post to (repeatable)"),
    text: str = typer.Option(..., "--text", help="Post text content"),
    media_link: Optional[str] = MediaLinkOption,
    media_description: Optional[str] = MediaDescriptionOption,
    scheduled_at: Optional[str] = ScheduledAtOption,
    now: bool = typer.Option(False, "--now", help="Share immediately instead of adding to queue"),
    dry_run: bool = DryRunOption,
    access_token: Optional[str] = AccessTokenOption,
    output: OutputFormat = OutputOption,
    quiet: bool = QuietOption,
    verbose: bool = VerboseOption,
) -> None:
    """Create a new post on one or more profiles."""
    session = require_session(ctx, access_token, verbose)
    _check(validate_text(text), validate_scheduled_at(scheduled_at), output=output)

    params = PostCreateParams.from_cli(
        profile_ids=profile_id,
        text=text,
        media_link=media_link,
        media_description=media_description,
        scheduled_at=scheduled_at,
        now=now,
    )

    if dry_run:
        console.print("Dry run - would send:", markup=False)
        print_output(params.to_form(), output)
        return

    result = run_api(create_post(session, params), output)
    _check(result, output=output)

    created = result.value
    if not quiet:
        print_info(f"Post created successfully. Buffer count: {created.buffer_count}")
    emit_result(created.rows, output)


def update_command(
    ctx: typer.Context,
    post_id: str = PostIdOption,
    text: str = typer.Option(..., "--text", help="New text content"),
    media_link: Optional[str] = MediaLinkOption,
    media_description: Optional[str] = MediaDescriptionOption,
    scheduled_at: Optional[str] = typer.Option(None, "--scheduled-at", help="New schedule time (ISO 8601 format)"),
    dry_run: bool = DryRunOption,
    access_token: Optional[str] = AccessTokenOption,
    output: OutputFormat = OutputOption,
    quiet: bool = QuietOption,
    verbose: bool = VerboseOption,
) -> None:
    """Update an existing post."""
    session = require_session(ctx, access_token, verbose)
    _check(validate_text(text), validate_scheduled_at(scheduled_at), output=output)

    params = PostUpdateParams(
        post_id=post_id,
        text=text,
        media_link=media_link,
        media_description=media_description,
        scheduled_at=scheduled_at,
    )

    if dry_run:
        console.print("Dry run - would send:", markup=False)
        print_output({"post_id": post_id, **params.to_form()}, output)
        return

    result = run_api(update_post(session, params), output)
    if not quiet and not isinstance(result, Failure):
        print_info("Post updated successfully.")
    emit_result(result, output)


def delete_command(
    ctx: typer.Context,
    post_id: str = PostIdOption,
    dry_run: bool = typer.Option(False, "--dry-run", help="Show what would be deleted without making the request"),
    access_token: Optional[str] = AccessTokenOption,
    output: OutputFormat = OutputOption,
    quiet: bool = QuietOption,
    verbose: bool = VerboseOption,
) -> None:
    """Delete a post."""
    session = require_session(ctx, access_token, verbose)

    if dry_run:
        console.print(f"Dry run - would delete post: {post_id}", markup=False)
        return

    result = run_api(delete_post(session, post_id), output)
    if not quiet and not isinstance(result, Failure):
        print_info(f"Post {post_id} deleted.")
    emit_result(result, output)


def share_command(
    ctx: typer.Context,
    post_id: str = PostIdOption,
    dry_run: bool = typer.Option(False, "--dry-run", help="Show what would be shared without making the request"),
    access_token: Optional[str] = AccessTokenOption,
    output: OutputFormat = OutputOption,
    quiet: bool = QuietOption,
    verbose: bool = VerboseOption,
) -> None:
    """Share a post immediately (move to front of queue)."""
    session = require_session(ctx, access_token, verbose)

    if dry_run:
        console.print(f"Dry run - would share post immediately: {post_id}", markup=False)
        return

    result = run_api(share_post(session, post_id), output)
    if not quiet and not isinstance(result, Failure):
        print_info(f"Post {post_id} shared immediately.")
    emit_result(result, output)
