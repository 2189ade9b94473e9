"""Stateless service for authentication status."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from ...api import BufferAPIError
from ..core.session import ApiSession

_api_logger = logging.getLogger("buffer_api")

TOKEN_PREVIEW_LENGTH = 8


def _unverified_status(session: ApiSession, config_path: Path) -> dict[str, Any]:
    return {
        "authenticated": True,
        "token_present": True,
        "token_preview": f"{session.token[:TOKEN_PREVIEW_LENGTH]}...",
        "config_path": str(config_path),
        "note": "Could not verify token with API (may be offline)",
    }


async def get_auth_status(session: ApiSession, config_path: Path) -> dict[str, Any]:
    """Describe the current credentials, verifying them against /user.json.

    An unreachable or rejecting API, or an unexpected /user.json payload,
    still yields a record (with a note) since the token itself is present.
    """
    try:
        user = await session.get("/user.json")
    except BufferAPIError as e:
        _api_logger.warning(f"Could not verify token: {e.code.value} {e.message}")
        return _unverified_status(session, config_path)

    if not isinstance(user, dict):
        _api_logger.warning(f"Could not verify token: unexpected /user.json payload {type(user).__name__}")
        return _unverified_status(session, config_path)

    return {
        "authenticated": True,
        "user_id": user.get("id"),
        "name": user.get("name"),
        "email": user.get("email") or "N/A",
        "plan": user.get("plan") or "N/A",
        "config_path": str(config_path),
    }
