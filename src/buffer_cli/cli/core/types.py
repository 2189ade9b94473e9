"""Core types for CLI - immutable data structures and Result type."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from ...config import BufferSettings, ConfigStore

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    """Successful result containing a value."""

    value: T

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False


@dataclass(frozen=True)
class Failure:
    """Operation the API accepted but reported as unsuccessful (`success: false`)."""

    code: str
    error: str

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.error}


# Result type - either Success[T] or Failure
Result = Union[Success[T], Failure]


@dataclass(frozen=True)
class AppContext:
    """Per-invocation state shared by all commands."""

    settings: BufferSettings
    store: ConfigStore
