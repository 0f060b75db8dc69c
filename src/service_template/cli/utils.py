"""Shared utilities for CLI commands."""

from __future__ import annotations

import logging
import sys
import traceback
from typing import TYPE_CHECKING

from service_template.exceptions import ServiceTemplateError

if TYPE_CHECKING:
    from rich.console import Console

__all__ = ["configure_logging", "format_error", "print_error", "get_error_console"]

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Module-level console for error output, created lazily
_error_console: Console | None = None


def configure_logging(level: str | int = logging.INFO) -> None:
    """Send log records to stderr with timestamps.

    Unknown level names fall back to INFO.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)
    logging.getLogger().setLevel(level)


def get_error_console() -> Console:
    """Get or create the Rich console for error output.

    The console is created lazily and cached for reuse.
    """
    global _error_console
    if _error_console is None:
        from rich.console import Console

        _error_console = Console(stderr=True, force_terminal=None)
    return _error_console


def print_error(
    e: Exception,
    verbose: bool = False,
    use_rich: bool | None = None,
) -> None:
    """
    Print an exception with Rich formatting when available.

    Uses the Rich console on TTY terminals and falls back to plain text
    for pipes and redirected output.

    Args:
        e: The exception to print
        verbose: If True, include full stack trace
        use_rich: Override automatic TTY detection (None = auto-detect)
    """
    if verbose:
        print(format_error(e, verbose=True), file=sys.stderr)
        return

    console = get_error_console()
    if use_rich is None:
        use_rich = console.is_terminal

    if use_rich:
        from rich.markup import escape

        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
    else:
        print(format_error(e, verbose=False), file=sys.stderr)


def format_error(e: Exception, verbose: bool = False) -> str:
    """
    Format an exception for user-friendly display (plain text).

    Args:
        e: The exception to format
        verbose: If True, include full stack trace

    Returns:
        Formatted error message string
    """
    if verbose:
        return "".join(traceback.format_exception(type(e), e, e.__traceback__))

    if isinstance(e, ServiceTemplateError):
        return f"Error: {e}"

    # For other exceptions, show type and message
    return f"Error: {type(e).__name__}: {e}"
