"""Immutable parameter dataclasses for post commands."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence, Union

from ..core.types import Failure, Result, Success

FormData = dict[str, Union[str, list[str]]]


def _media_fields(link: Optional[str], description: Optional[str]) -> FormData:
    fields: FormData = {}
    if link:
        fields["media[link]"] = link
    if description:
        fields["media[description]"] = description
    return fields


@dataclass(frozen=True)
class PostCreateParams:
    """Immutable parameters for creating a post on one or more profiles."""

    profile_ids: tuple[str, ...]
    text: str
    media_link: Optional[str] = None
    media_description: Optional[str] = None
    scheduled_at: Optional[str] = None
    now: bool = False

    @classmethod
    def from_cli(
        cls,
        profile_ids: Sequence[str],
        text: str,
        media_link: Optional[str] = None,
        media_description: Optional[str] = None,
        scheduled_at: Optional[str] = None,
        now: bool = False,
    ) -> "PostCreateParams":
        """Create from CLI arguments."""
        return cls(
            profile_ids=tuple(profile_ids),
            text=text,
            media_link=media_link,
            media_description=media_description,
            scheduled_at=scheduled_at,
            now=now,
        )

    def to_form(self) -> FormData:
        """Form fields for /updates/create.json, in Buffer's bracket notation."""
        form: FormData = {
            "profile_ids[]": list(self.profile_ids),
            "text": self.text,
        }
        form.update(_media_fields(self.media_link, self.media_description))
        if self.scheduled_at:
            form["scheduled_at"] = self.scheduled_at
        if self.now:
            form["now"] = "true"
        return form


@dataclass(frozen=True)
class PostUpdateParams:
    """Immutable parameters for editing an existing post."""

    post_id: str
    text: str
    media_link: Optional[str] = None
    media_description: Optional[str] = None
    scheduled_at: Optional[str] = None

    def to_form(self) -> FormData:
        """Form fields for /updates/{id}/update.json."""
        form: FormData = {"text": self.text}
        form.update(_media_fields(self.media_link, self.media_description))
        if self.scheduled_at:
            form["scheduled_at"] = self.scheduled_at
        return form


def validate_scheduled_at(scheduled_at: Optional[str]) -> Result[Optional[str]]:
    """Check that a schedule time is ISO 8601 (e.g. 2024-05-01T09:30:00Z).

    Pure function - no side effects.
    """
    if not scheduled_at:
        return Success(scheduled_at)
    try:
        datetime.fromisoformat(scheduled_at)
    except ValueError:
        return Failure(
            "INVALID_ARGUMENT",
            f"Invalid --scheduled-at value: {scheduled_at!r} (expected ISO 8601)",
        )
    return Success(scheduled_at)


def validate_text(text: str) -> Result[str]:
    """Reject empty post text."""
    if not text.strip():
        return Failure("INVALID_ARGUMENT", "Post text must not be empty")
    return Success(text)
