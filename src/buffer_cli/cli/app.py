"""Typer app configuration and logging setup."""

from __future__ import annotations

import logging
from pathlib import Path

import typer

from .. import __version__
from ..config import BufferSettings, ConfigStore
from .core.types import AppContext

# Create Typer app
app = typer.Typer(
    name="buffer",
    help="Command-line interface for the Buffer social media management API",
    add_completion=False,
    no_args_is_help=True,
)

auth_app = typer.Typer(help="Manage authentication", no_args_is_help=True)
profiles_app = typer.Typer(help="Manage Buffer social profiles", no_args_is_help=True)
posts_app = typer.Typer(help="Manage Buffer posts (updates)", no_args_is_help=True)
analytics_app = typer.Typer(
    help="View profile analytics and post interactions", no_args_is_help=True
)


def register_commands() -> None:
    """Register all commands from feature modules."""
    from .auth.commands import login_command, logout_command, status_command

    auth_app.command(name="login")(login_command)
    auth_app.command(name="status")(status_command)
    auth_app.command(name="logout")(logout_command)

    from .profiles.commands import get_command as get_profile_command
    from .profiles.commands import list_command as list_profiles_command

    profiles_app.command(name="list")(list_profiles_command)
    profiles_app.command(name="get")(get_profile_command)

    from .posts.commands import (
        create_command,
        delete_command,
        list_command,
        sent_command,
        share_command,
        update_command,
    )

    posts_app.command(name="list")(list_command)
    posts_app.command(name="sent")(sent_command)
    posts_app.command(name="create")(create_command)
    posts_app.command(name="update")(update_command)
    posts_app.command(name="delete")(delete_command)
    posts_app.command(name="share")(share_command)

    from .analytics.commands import get_command as get_analytics_command

    analytics_app.command(name="get")(get_analytics_command)

    app.add_typer(auth_app, name="auth")
    app.add_typer(profiles_app, name="profiles")
    app.add_typer(posts_app, name="posts")
    app.add_typer(analytics_app, name="analytics")


def setup_logging(log_dir: Path, level: str = "INFO") -> None:
    """Configure logging for CLI.

    - Suppresses console output from libraries
    - Writes API calls and failures to <log_dir>/buffer_api.log
    """
    log_dir.mkdir(parents=True, exist_ok=True)

    # Remove any default console handlers from root logger
    root_logger = logging.getLogger()
    root_logger.handlers = []
    root_logger.setLevel(logging.CRITICAL)

    # Suppress loggers that might print to console
    for logger_name in ["httpx", "httpcore", "asyncio"]:
        logger = logging.getLogger(logger_name)
        logger.setLevel(logging.WARNING)
        logger.propagate = False

    api_logger = logging.getLogger("buffer_api")
    api_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    api_logger.propagate = False
    for handler in api_logger.handlers:
        handler.close()
    api_logger.handlers = []  # Clear any existing handlers
    file_handler = logging.FileHandler(log_dir / "buffer_api.log", encoding="utf-8")
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s | %(levelname)s | %(message)s")
    )
    api_logger.addHandler(file_handler)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def root(
    ctx: typer.Context,
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version"
    ),
) -> None:
    """Load settings, set up logging and share the config store with subcommands."""
    settings = BufferSettings()
    setup_logging(settings.config_dir, settings.log_level)
    ctx.obj = AppContext(settings=settings, store=ConfigStore.from_settings(settings))


# Register all commands
register_commands()


def main() -> None:
    """CLI entry point."""
    app()
