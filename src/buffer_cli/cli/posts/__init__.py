"""Post feature - list, create, edit, delete and share scheduled posts."""

from .commands import (
    create_command,
    delete_command,
    list_command,
    sent_command,
    share_command,
    update_command,
)

__all__ = [
    "list_command",
    "sent_command",
    "create_command",
    "update_command",
    "delete_command",
    "share_command",
]
