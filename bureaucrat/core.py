"""Core utilities for bureaucrat.

Shared functions for logging setup and path display.
"""

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

LOG_LEVELS = {
    "off": logging.CRITICAL + 10,
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": logging.DEBUG,
}


def configure_logging(level: str = "info") -> None:
    """Send log records to stderr through rich.

    Git shows hook output to the user, so stdout is left untouched.

    Parameters
    ----------
    level : str
        One of off, error, warn, info, debug, trace (case-insensitive)
    """
    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
    )
    logging.basicConfig(
        level=LOG_LEVELS[level.lower()],
        format="%(message)s",
        handlers=[handler],
        force=True,
    )


def truncate_path(path: Path) -> Path:
    """Show path relative to the current directory when it lies inside it."""
    try:
        cwd = Path.cwd()
    except OSError:
        return path
    try:
        return path.relative_to(cwd)
    except ValueError:
        return path
