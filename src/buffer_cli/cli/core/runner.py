"""Glue between typer commands and async services.

This is the only place API errors are caught: they are rendered on stderr
in the selected output format and turned into exit code 1.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Coroutine, TypeVar

import typer

from ...api import BufferAPIError
from ...auth import MISSING_TOKEN_MESSAGE, resolve_token
from ...config import ConfigError
from ...output import OutputFormat, print_error, print_output
from .console import err_console
from .session import ApiSession
from .types import AppContext, Failure, Success

T = TypeVar("T")

_logger = logging.getLogger("buffer_api")


def get_app_context(ctx: typer.Context) -> AppContext:
    """Return the AppContext created by the root callback."""
    app_ctx = ctx.find_object(AppContext)
    if app_ctx is None:
        raise RuntimeError("AppContext missing - commands must run under the buffer app")
    return app_ctx


def require_session(
    ctx: typer.Context,
    access_token: str | None,
    verbose: bool = False,
) -> ApiSession:
    """Resolve the access token and build an ApiSession, or exit 1."""
    app_ctx = get_app_context(ctx)
    try:
        token = resolve_token(app_ctx.store, access_token, app_ctx.settings.access_token)
    except ConfigError as e:
        err_console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if not token:
        err_console.print(MISSING_TOKEN_MESSAGE, markup=False, soft_wrap=True)
        raise typer.Exit(1)

    settings = app_ctx.settings
    return ApiSession(
        token=token,
        timeout=settings.timeout,
        max_retries=settings.max_retries,
        retry_delay=settings.retry_delay,
        verbose=verbose,
    )


def run_api(coro: Coroutine[Any, Any, T], output: OutputFormat) -> T:
    """Run a service coroutine, mapping BufferAPIError to a rendered error and exit 1."""
    try:
        return asyncio.run(coro)
    except BufferAPIError as e:
        _logger.error(f"{e.code.value} (HTTP {e.status}): {e.message}")
        print_error(e, output)
        raise typer.Exit(1)


def emit_result(value: Any, output: OutputFormat) -> None:
    """Print a service value, or render a Failure as an error and exit 1."""
    if isinstance(value, Failure):
        _logger.error(f"{value.code}: {value.error}")
        print_error(value.to_dict(), output)
        raise typer.Exit(1)
    if isinstance(value, Success):
        value = value.value
    print_output(value, output)
