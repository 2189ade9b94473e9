"""Authentication CLI commands."""

from __future__ import annotations

import asyncio

import typer

from ...auth import clear_auth, resolve_token, save_token
from ...config import ConfigError
from ...output import OutputFormat
from ..core.console import console, err_console, print_success
from ..core.options import OutputOption
from ..core.runner import emit_result, get_app_context
from ..core.session import ApiSession
from .service import get_auth_status


def login_command(
    ctx: typer.Context,
    token: str = typer.Argument(..., help="Buffer OAuth2 access token"),
) -> None:
    """Save a Buffer access token."""
    app_ctx = get_app_context(ctx)
    try:
        save_token(app_ctx.store, token)
    except ConfigError as e:
        err_console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    print_success("Access token saved successfully.")
    console.print(f"Config stored at: {app_ctx.store.path}", markup=False)


def status_command(
    ctx: typer.Context,
    output: OutputFormat = OutputOption,
) -> None:
    """Show current authentication status."""
    app_ctx = get_app_context(ctx)
    try:
        token = resolve_token(app_ctx.store, None, app_ctx.settings.access_token)
    except ConfigError as e:
        err_console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if not token:
        console.print("Not authenticated. Run: buffer auth login <token>", markup=False)
        return

    session = ApiSession(token=token, timeout=app_ctx.settings.timeout)
    status = asyncio.run(get_auth_status(session, app_ctx.store.path))
    emit_result(status, output)


def logout_command(ctx: typer.Context) -> None:
    """Remove stored credentials."""
    app_ctx = get_app_context(ctx)
    try:
        clear_auth(app_ctx.store)
    except ConfigError as e:
        err_console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    print_success("Credentials removed.")
