"""Core utilities for CLI - shared types, options and API session."""

from .console import console, err_console
from .parsers import format_timestamp, truncate_text
from .session import ApiSession
from .types import AppContext, Failure, Result, Success

__all__ = [
    # Types
    "AppContext",
    "Result",
    "Success",
    "Failure",
    # Parsers
    "format_timestamp",
    "truncate_text",
    # Session
    "ApiSession",
    # Console
    "console",
    "err_console",
]
