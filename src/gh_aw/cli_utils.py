"""Shared CLI helpers: exit codes, console, logging setup and message output."""

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

# Exit codes
EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_CONFIG_ERROR = 2

# Shared console for output
console = Console()

# Errors and log records (stderr)
error_console = Console(stderr=True)


def _setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure root logging with a rich handler.

    Args:
        verbose: Log at DEBUG level.
        quiet: Log errors only. Ignored when ``verbose`` is set.

    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=error_console, rich_tracebacks=verbose, show_path=verbose)],
        force=True,
    )


def _error(message: str) -> None:
    """Print an error message."""
    error_console.print(f"[red]Error:[/red] {escape(message)}")
