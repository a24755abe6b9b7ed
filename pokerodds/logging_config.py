"""Logging configuration."""

import logging
import os
from typing import Optional

DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"


def configure_logging(
    level: Optional[str] = None,
    format: str = DEFAULT_FORMAT,
    datefmt: str = DEFAULT_DATEFMT,
) -> logging.Logger:
    """
    Configure logging for the package.

    Args:
        level: Explicit log level. Falls back to the ``POKERODDS_LOG_LEVEL``
            env var, then WARNING.
        format: Log format string.
        datefmt: Date format string.

    Returns:
        The package logger (``pokerodds``).
    """
    raw_level = level if level is not None else os.getenv("POKERODDS_LOG_LEVEL")
    resolved_level = (raw_level or "WARNING").upper()
    logging.basicConfig(level=resolved_level, format=format, datefmt=datefmt)

    logger = logging.getLogger("pokerodds")
    logger.setLevel(resolved_level)
    logger.debug("Logging configured at %s", resolved_level)
    return logger
