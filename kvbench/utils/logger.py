"""Logging setup shared by all kvbench components."""

import logging
import sys
from typing import Optional, Set

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_default_level = "INFO"
_managed_loggers: Set[str] = set()


def set_default_level(level: str) -> None:
    """Set the level of every kvbench logger, including ones created later.

    Args:
        level: Level name such as "INFO" or "DEBUG"

    Raises:
        ValueError: If ``level`` is not a logging level name
    """
    global _default_level
    level = level.upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"Unknown logging level: {level}")
    _default_level = level
    for name in _managed_loggers:
        logging.getLogger(name).setLevel(_default_level)


def setup_logger(name: str, level: Optional[str] = None, verbose: bool = False) -> logging.Logger:
    """Create (or fetch) a logger writing to stderr.

    stdout carries the JSON documents, so log records always go to stderr.

    Args:
        name: Logger name
        level: Log level name; falls back to the default level
        verbose: Shortcut for DEBUG level

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)

    if verbose:
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel((level or _default_level).upper())

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False

    _managed_loggers.add(name)
    return logger
