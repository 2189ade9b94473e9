"""CLI package - feature-based, stateless command modules.

This package provides a clean separation of concerns:
- core/: Shared utilities (types, options, session, runner, console)
- auth/: Access token management
- profiles/: Social profile listing
- posts/: Scheduled post management
- analytics/: Sent post statistics

Usage:
    buffer --help
    buffer profiles list -o table
    buffer posts create --profile-id <id> --text "Hello"
"""

from .app import app, main

__all__ = ["app", "main"]
