"""Logging setup — one RichHandler on the ``leakgate`` logger, writing to stderr."""

from __future__ import annotations

import logging
import os
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOG_LEVEL_ENV = "LEAKGATE_LOG_LEVEL"

_LEVELS = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


def parse_level(name: Optional[str]) -> int:
    """Map a level name to a ``logging`` level; anything unknown means ERROR."""
    return _LEVELS.get((name or "").strip().lower(), logging.ERROR)


def setup_logging(level: Optional[str] = None, debug: bool = False) -> logging.Logger:
    """Configure the package logger. Safe to call more than once.

    *level* falls back to ``$LEAKGATE_LOG_LEVEL``, then to ``error``.
    ``debug`` forces DEBUG whatever the level says.
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "error")

    logger = logging.getLogger("leakgate")
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=debug,
        markup=False,
        rich_tracebacks=debug,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if debug else parse_level(level))
    return logger
