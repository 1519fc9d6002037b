"""Logging setup for applications embedding :mod:`graphvault`."""
from __future__ import annotations

import logging
from typing import Optional

from graphvault.config import get_log_level

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: Optional[int] = None) -> logging.Logger:
    """Attach a stream handler to the package logger.

    ``level`` defaults to the value configured through ``LOG_LEVEL``.
    Calling the function again only adjusts the level.
    """

    package_logger = logging.getLogger("graphvault")
    package_logger.setLevel(level if level is not None else get_log_level())
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)
    return package_logger


__all__ = ["configure_logging"]
