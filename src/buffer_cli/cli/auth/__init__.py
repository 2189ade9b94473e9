"""Auth feature - store, inspect and remove the access token."""

from .commands import login_command, logout_command, status_command

__all__ = ["login_command", "status_command", "logout_command"]
