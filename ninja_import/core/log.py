"""
Package-wide logging configuration.

Installs a NullHandler on the package logger so importing the library stays
quiet until the application (or the CLI) configures logging.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

__all__ = [
    "PACKAGE_LOGGER_NAME",
    "configure_logging",
    "get_logger",
]

PACKAGE_LOGGER_NAME = "ninja_import"

_DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logging.getLogger(PACKAGE_LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger scoped to ninja_import (the package logger by default)."""
    return logging.getLogger(name or PACKAGE_LOGGER_NAME)


def configure_logging(
    *,
    level: int | str = logging.INFO,
    stream: TextIO | None = None,
    fmt: str | None = None,
) -> logging.Logger:
    """
    Attach a single stream handler to the package logger.

    Calling this again replaces the handler installed by a previous call
    instead of stacking a second one.

    Args:
        level: Logging level or level name
        stream: Target stream (defaults to stderr)
        fmt: Log format string

    Returns:
        The configured package logger
    """
    logger = get_logger()

    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        if getattr(handler, "_ninja_import_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(fmt or _DEFAULT_FORMAT))
    handler._ninja_import_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)

    return logger
