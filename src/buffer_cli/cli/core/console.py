"""Rich consoles for CLI messages."""

import sys
from rich.console import Console

# Use safe_box on Windows to avoid Unicode encoding errors
_safe_box = sys.platform == "win32"

# Human-readable messages go to stdout, diagnostics to stderr.
# Rendered data is written by buffer_cli.output, not through these consoles.
console = Console(safe_box=_safe_box, highlight=False)
err_console = Console(stderr=True, safe_box=_safe_box, highlight=False)


def print_warning(message: str) -> None:
    """Print a warning message to stderr."""
    err_console.print(f"[yellow]Warning: {message}[/yellow]")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{message}[/green]")


def print_info(message: str) -> None:
    """Print an informational diagnostic to stderr.

    Args:
        message: Plain text (not interpreted as markup)
    """
    err_console.print(message, markup=False, soft_wrap=True)
