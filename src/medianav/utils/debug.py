"""Logging setup for medianav.

Every module logs through ``logging.getLogger(__name__)``, so all module
loggers are children of the ``medianav`` package logger configured here. The
CLI calls :func:`setup_logger` once per invocation.

Verbosity is controlled by environment variables:
- ``MEDIANAV_DEBUG=1`` enables debug output.
- ``MEDIANAV_LOG_LEVEL`` takes any standard level name (``INFO``, ``ERROR``).
Without either, only warnings and errors are shown.
"""

import logging
import os
from typing import Optional

PACKAGE_LOGGER = "medianav"
LOG_FORMAT = "[%(levelname)s] %(asctime)s %(name)s: %(message)s"

_logger: Optional[logging.Logger] = None


def debug_enabled() -> bool:
    """Return True when ``MEDIANAV_DEBUG`` is set to 1."""
    return os.getenv("MEDIANAV_DEBUG", "0") == "1"


def resolve_level(verbose: bool = False) -> int:
    """Pick the package log level.

    Args:
        verbose: Force debug output (the CLI ``--verbose`` flag).

    Returns:
        A ``logging`` level; unknown level names fall back to WARNING.
    """
    if verbose or debug_enabled():
        return logging.DEBUG
    level = logging.getLevelName(os.getenv("MEDIANAV_LOG_LEVEL", "WARNING").upper())
    return level if isinstance(level, int) else logging.WARNING


def setup_logger(verbose: bool = False) -> logging.Logger:
    """Configure and return the ``medianav`` package logger.

    The stream handler is installed once; the level is re-resolved on every
    call so a later ``--verbose`` still takes effect.
    """
    global _logger
    logger = logging.getLogger(PACKAGE_LOGGER)
    if _logger is None and not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(resolve_level(verbose))
    _logger = logger
    return logger
