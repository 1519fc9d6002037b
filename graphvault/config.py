"""Configuration helpers for loading environment variables.

This module ensures that variables defined in a project-level ``.env`` file
are loaded before attempting to access them.  Consumers should rely on the
accessors below instead of using :func:`os.getenv` directly so that the
configuration is loaded in a single, well-defined place.

Recognised variables:

``MAX_MEM_USAGE``
    Memory ceiling for a store, in MiB (fractions allowed).  Used by the
    memory watcher and by the persistence loader.
``LOG_LEVEL``
    One of ``trace``, ``debug``, ``info``, ``warn``, ``error``.
``CSV_DELIMITER``
    Single character used by the CSV exporter/importer.
"""

from __future__ import annotations

import logging
import math
import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

MAX_MEM_USAGE = "MAX_MEM_USAGE"
LOG_LEVEL = "LOG_LEVEL"
CSV_DELIMITER = "CSV_DELIMITER"

DEFAULT_MAX_MEM_USAGE = 25 * 1024 * 1024
DEFAULT_LOG_LEVEL = logging.ERROR
DEFAULT_CSV_DELIMITER = ";"

_LOG_LEVELS = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "err": logging.ERROR,
    "error": logging.ERROR,
}


@lru_cache(maxsize=1)
def _load_environment() -> None:
    """Load environment variables from the project's ``.env`` file.

    The loader first attempts to read ``.env`` from the repository root.  If the
    file does not exist we still call :func:`load_dotenv` to allow the default
    discovery mechanism to run (e.g., for users who store the file elsewhere).
    Subsequent calls are cached so the file is only read once per process.
    """

    project_root = Path(__file__).resolve().parents[1]
    env_path = project_root / ".env"

    if env_path.exists():
        load_dotenv(env_path, override=False)
    else:
        load_dotenv(override=False)


def get_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """Return the value for ``key`` from the environment.

    Parameters
    ----------
    key:
        The name of the environment variable to look up.
    default:
        The value to return when ``key`` is not present.
    """

    _load_environment()
    return os.environ.get(key, default)


def get_max_mem_usage() -> int:
    """Return the configured memory ceiling in bytes.

    ``MAX_MEM_USAGE`` is expressed in MiB.  Missing or unparseable values
    fall back to 25 MiB, and so do values that are not finite or
    round down to less than one byte.
    """

    value = get_env(MAX_MEM_USAGE)
    if value is None:
        logger.debug(
            "No config for %s, using default value: %s", MAX_MEM_USAGE, DEFAULT_MAX_MEM_USAGE
        )
        return DEFAULT_MAX_MEM_USAGE
    try:
        mebibytes = float(value)
    except ValueError:
        logger.warning(
            "Invalid value %r for %s, using default value: %s",
            value,
            MAX_MEM_USAGE,
            DEFAULT_MAX_MEM_USAGE,
        )
        return DEFAULT_MAX_MEM_USAGE
    if not math.isfinite(mebibytes) or int(mebibytes * 1024 * 1024) < 1:
        logger.warning(
            "Unusable value %r for %s, using default value: %s",
            value,
            MAX_MEM_USAGE,
            DEFAULT_MAX_MEM_USAGE,
        )
        return DEFAULT_MAX_MEM_USAGE
    return int(mebibytes * 1024 * 1024)


def get_log_level() -> int:
    """Return the :mod:`logging` level configured through ``LOG_LEVEL``."""

    value = get_env(LOG_LEVEL)
    if value is None:
        return DEFAULT_LOG_LEVEL
    return _LOG_LEVELS.get(value.strip().lower(), DEFAULT_LOG_LEVEL)


def get_csv_delimiter() -> str:
    """Return the single character delimiter for CSV files."""

    value = get_env(CSV_DELIMITER)
    if not value:
        return DEFAULT_CSV_DELIMITER
    return value[0]


__all__ = [
    "get_csv_delimiter",
    "get_env",
    "get_log_level",
    "get_max_mem_usage",
]
