"""Centralized logging configuration for postloom."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Final, cast

from rich.console import Console
from rich.logging import RichHandler

__all__ = ["configure_logging", "console"]

_LOG_LEVEL_ENV: Final[str] = "POSTLOOM_LOG_LEVEL"
_DEFAULT_LEVEL_NAME: Final[str] = "INFO"

console = Console(stderr=True)

if TYPE_CHECKING:

    class _ManagedRichHandler(RichHandler):
        _postloom_managed: bool

else:
    _ManagedRichHandler = RichHandler


def _resolve_level(level_name: str | None) -> int:
    """Return the logging level from the argument or the environment."""
    name = (level_name or os.getenv(_LOG_LEVEL_ENV, _DEFAULT_LEVEL_NAME)).upper()
    return getattr(logging, name, logging.INFO)


def configure_logging(level_name: str | None = None) -> None:
    """Configure logging once with a Rich handler.

    Calling it again only adjusts the level; the managed handler is reused.
    """
    root_logger = logging.getLogger()
    level = _resolve_level(level_name)

    managed_handler: _ManagedRichHandler | None = None
    for handler in root_logger.handlers:
        if isinstance(handler, RichHandler) and getattr(handler, "_postloom_managed", False):
            managed_handler = cast(_ManagedRichHandler, handler)
            break

    if managed_handler is None:
        root_logger.handlers.clear()
        handler = _ManagedRichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        handler._postloom_managed = True
        root_logger.addHandler(handler)

    root_logger.setLevel(level)

    # Pillow logs every plugin it probes at DEBUG.
    logging.getLogger("PIL").setLevel(logging.WARNING)
    logging.captureWarnings(True)
