"""Profile CLI commands - thin wrappers orchestrating session, service and output."""

from __future__ import annotations

from typing import Optional

import typer

from ...output import OutputFormat
from ..core.options import (
    AccessTokenOption,
    OutputOption,
    ProfileIdOption,
    QuietOption,
    VerboseOption,
)
from ..core.runner import emit_result, require_session, run_api
from .service import get_profile, list_profiles


def list_command(
    ctx: typer.Context,
    access_token: Optional[str] = AccessTokenOption,
    output: OutputFormat = OutputOption,
    quiet: bool = QuietOption,
    verbose: bool = VerboseOption,
) -> None:
    """List all connected social profiles."""
    session = require_session(ctx, access_token, verbose)
    rows = run_api(list_profiles(session), output)
    emit_result(rows, output)


def get_command(
    ctx: typer.Context,
    profile_id: str = ProfileIdOption,
    access_token: Optional[str] = AccessTokenOption,
    output: OutputFormat = OutputOption,
    quiet: bool = QuietOption,
    verbose: bool = VerboseOption,
) -> None:
    """Get details for a specific profile."""
    session = require_session(ctx, access_token, verbose)
    profile = run_api(get_profile(session, profile_id), output)
    emit_result(profile, output)
