"""Logging setup for the command-line entry point.

Library modules only create loggers under the "patscan" namespace. The
CLI attaches a single stderr handler to that namespace; nothing is
configured on import and the root logger is left alone.
"""

from __future__ import annotations

import logging
import os

LOG_LEVEL_ENV = "PATSCAN_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_handler: logging.Handler | None = None


def resolve_level(level: str | None = None) -> int:
    """Level from the argument, else $PATSCAN_LOG_LEVEL, else WARNING.

    Unknown names resolve to WARNING.
    """
    name = (level or os.environ.get(LOG_LEVEL_ENV, "")).strip().upper()
    return logging.getLevelNamesMapping().get(name, logging.WARNING)


def setup_logging(level: str | None = None) -> logging.Handler:
    """Attach the stderr handler to the "patscan" logger and set its level.

    The handler is created on the first call; later calls only change the level.
    """
    global _handler
    package_logger = logging.getLogger("patscan")
    if _handler is None:
        _handler = logging.StreamHandler()
        _handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(_handler)
    package_logger.setLevel(resolve_level(level))
    return _handler


def verbosity_level(verbose: int) -> str | None:
    """Map a repeated -v count to a level name (None keeps the default)."""
    if verbose >= 2:
        return "DEBUG"
    if verbose == 1:
        return "INFO"
    return None
