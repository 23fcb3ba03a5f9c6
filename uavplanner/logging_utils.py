"""Mini README: Application-wide logging helpers for the UAV flight planner.

Structure:
    * get_logger - factory returning module loggers with baseline configuration.
    * configure_root_logger - install the shared handler and apply a level.

Usage:
    Modules import ``get_logger`` and keep a module-level ``LOGGER``. The
    root handler is installed exactly once, so building several web
    applications in one test session never duplicates log lines. Entry
    points call ``configure_root_logger(settings.log_level)`` afterwards to
    switch the level (names such as ``"debug"`` or numeric levels).
"""

from __future__ import annotations

import logging
from typing import Optional, Union

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_handler: Optional[logging.Handler] = None


def _resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


def configure_root_logger(level: Optional[Union[int, str]] = None) -> logging.Handler:
    """Install the planner's stream handler once and optionally set the level.

    Without ``level`` the first call sets INFO and later calls leave the
    level alone.
    """

    global _handler
    root_logger = logging.getLogger()
    if _handler is None:
        _handler = logging.StreamHandler()
        _handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        root_logger.addHandler(_handler)
        root_logger.setLevel(logging.INFO)
    if level is not None:
        root_logger.setLevel(_resolve_level(level))
    return _handler


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger ensuring baseline configuration."""

    configure_root_logger()
    return logging.getLogger(name)
