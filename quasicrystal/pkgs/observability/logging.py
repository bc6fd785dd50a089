"""Logging configuration for the quasicrystal package loggers."""

import logging
import sys
from typing import IO, Optional

PACKAGE_LOGGER = "quasicrystal"

FORMATS = {
    "structured": '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    "compact": '%(levelname)s [%(name)s] %(message)s',
    "plain": '%(levelname)s - %(message)s',
}


def setup_logging(level: str = "INFO", format_type: str = "structured",
                  stream: Optional[IO] = None) -> logging.Logger:
    """
    Configure the package logger.

    Every module logs through logging.getLogger(__name__), so a single handler
    on the 'quasicrystal' logger covers engines, builder, service and CLI.
    Calling this again replaces the handler instead of stacking a second one.
    Unknown levels fall back to INFO, unknown formats to 'plain'.
    """
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(logging.Formatter(FORMATS.get(format_type, FORMATS["plain"])))

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(log_level)
    logger.handlers.clear()
    logger.addHandler(handler)
    # root handlers (e.g. logging.basicConfig in the CLI) would print twice
    logger.propagate = False

    return logger
