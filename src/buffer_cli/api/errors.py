"""Error types raised by the Buffer API request layer."""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Classification of a failed API call."""

    RATE_LIMITED = "RATE_LIMITED"
    AUTH_FAILED = "AUTH_FAILED"
    API_ERROR = "API_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"
    TIMEOUT = "TIMEOUT"


RATE_LIMIT_MESSAGE = "Rate limit exceeded. Buffer allows 60 requests per minute."
AUTH_FAILED_MESSAGE = (
    "Authentication failed. Check your access token or run: buffer auth login"
)
DEFAULT_RETRY_AFTER = 60


class BufferAPIError(Exception):
    """A classified failure from the Buffer API.

    Attributes:
        message: Human-readable description.
        code: One of ErrorCode.
        status: HTTP status, 0 when no response was received.
        retry_after: Seconds to wait before retrying (rate limiting only).
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        status: int = 0,
        retry_after: int | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status = status
        self.retry_after = retry_after

    @property
    def is_rate_limited(self) -> bool:
        return self.code == ErrorCode.RATE_LIMITED

    @property
    def is_auth_error(self) -> bool:
        return self.code == ErrorCode.AUTH_FAILED

    @property
    def is_transport_error(self) -> bool:
        """True when the request never produced an HTTP response."""
        return self.code in (ErrorCode.NETWORK_ERROR, ErrorCode.TIMEOUT)

    def to_dict(self) -> dict[str, Any]:
        """Flat `{code, message, retry_after}` record for display."""
        data: dict[str, Any] = {"code": self.code.value, "message": self.message}
        if self.retry_after is not None:
            data["retry_after"] = self.retry_after
        return data

    def __repr__(self) -> str:
        return (
            f"BufferAPIError(code={self.code.value!r}, status={self.status}, "
            f"message={self.message!r})"
        )
