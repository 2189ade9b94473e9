"""Profile feature - list and inspect connected social profiles."""

from .commands import get_command, list_command

__all__ = ["list_command", "get_command"]
