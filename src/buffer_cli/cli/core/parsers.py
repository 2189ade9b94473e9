"""Pure helpers for shaping API values for display."""

from __future__ import annotations

from datetime import datetime, timezone

NOT_AVAILABLE = "N/A"


def format_timestamp(timestamp: int | float | None) -> str:
    """Convert a Unix timestamp (seconds) to ISO-8601 UTC, or N/A when missing.

    Example: 1700000000 -> "2023-11-14T22:13:20.000Z"
    """
    if not timestamp:
        return NOT_AVAILABLE
    moment = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def truncate_text(text: str | None, limit: int) -> str | None:
    """Shorten text to `limit` characters, ending with '...' when cut."""
    if text is None or len(text) <= limit:
        return text
    return text[: limit - 3] + "..."
