"""Analytics CLI commands."""

from __future__ import annotations

from typing import Optional

import typer

from ...output import OutputFormat
from ..core.console import print_info
from ..core.options import (
    AccessTokenOption,
    OutputOption,
    PageOption,
    ProfileIdOption,
    QuietOption,
    VerboseOption,
)
from ..core.runner import emit_result, require_session, run_api
from .service import get_analytics


def get_command(
    ctx: typer.Context,
    profile_id: str = ProfileIdOption,
    count: int = typer.Option(20, "--count", min=1, help="Number of sent posts to analyze"),
    page: int = PageOption,
    access_token: Optional[str] = AccessTokenOption,
    output: OutputFormat = OutputOption,
    quiet: bool = QuietOption,
    verbose: bool = VerboseOption,
) -> None:
    """Get analytics for sent posts on a profile (interaction statistics)."""
    session = require_session(ctx, access_token, verbose)
    report = run_api(get_analytics(session, profile_id, count, page), output)
    if not quiet:
        print_info(f"Analyzing {len(report.rows)} sent posts (total: {report.total})")
    emit_result(report.rows, output)
