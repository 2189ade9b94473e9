"""Analytics feature - interaction statistics for sent posts."""

from .commands import get_command

__all__ = ["get_command"]
