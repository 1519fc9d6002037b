"""Observability helpers: logging setup and the memory watcher."""

from .logger import configure_logging
from .memory import MemoryPressure, MemoryWatcher

__all__ = ["MemoryPressure", "MemoryWatcher", "configure_logging"]
