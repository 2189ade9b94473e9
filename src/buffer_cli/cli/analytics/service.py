"""Stateless service for post analytics."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..core.parsers import format_timestamp, truncate_text
from ..core.session import ApiSession

TEXT_PREVIEW_LENGTH = 60
STAT_FIELDS = ("reach", "clicks", "retweets", "favorites", "mentions")


@dataclass
class AnalyticsReport:
    """Interaction statistics for a page of sent posts."""

    rows: list[dict[str, Any]]
    total: int


def analytics_row(update: dict[str, Any]) -> dict[str, Any]:
    """Flatten a sent post and its statistics into one row. Missing stats count as 0."""
    statistics = update.get("statistics") or {}
    row = {
        "id": update.get("id"),
        "text": truncate_text(update.get("text"), TEXT_PREVIEW_LENGTH),
        "sent_at": format_timestamp(update.get("sent_at")),
    }
    for name in STAT_FIELDS:
        row[name] = statistics.get(name) or 0
    return row


async def get_analytics(
    session: ApiSession,
    profile_id: str,
    count: int = 20,
    page: int = 1,
) -> AnalyticsReport:
    """Collect interaction statistics from a profile's sent posts."""
    result = await session.get(
        f"/profiles/{profile_id}/updates/sent.json",
        {"count": str(count), "page": str(page)},
    )
    updates = result.get("updates") or []
    return AnalyticsReport(
        rows=[analytics_row(u) for u in updates],
        total=result.get("total", len(updates)),
    )
