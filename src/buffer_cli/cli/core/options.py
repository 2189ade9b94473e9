"""Typer option definitions shared by data commands."""

from __future__ import annotations

import typer

from ...output import OutputFormat

AccessTokenOption = typer.Option(None, "--access-token", help="Buffer access token")
OutputOption = typer.Option(
    OutputFormat.JSON, "--output", "-o", help="Output format (json, table, csv)"
)
QuietOption = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output")
VerboseOption = typer.Option(False, "--verbose", "-v", help="Enable verbose output")
ProfileIdOption = typer.Option(..., "--profile-id", help="Profile ID")
PostIdOption = typer.Option(..., "--post-id", help="Post/update ID")
CountOption = typer.Option(20, "--count", min=1, help="Number of posts to return")
PageOption = typer.Option(1, "--page", min=1, help="Page number (starting from 1)")
DryRunOption = typer.Option(
    False, "--dry-run", help="Show what would be sent without making the request"
)
