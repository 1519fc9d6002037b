"""Memory pressure policy applied after every store mutation.

The pressure of a store is its encoded size as a percentage of the
configured ceiling (``MAX_MEM_USAGE``).  Reaching the critical band saves
the store to disk and, by default, stops the process.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

from graphvault.config import get_max_mem_usage
from graphvault.errors import GraphVaultError

if TYPE_CHECKING:  # pragma: no cover - import for type checking only
    from graphvault.graph.store import GraphStore

logger = logging.getLogger(__name__)

HIGH_THRESHOLD = 80.0
WARN_THRESHOLD = 95.0
CRITICAL_THRESHOLD = 99.0


class MemoryPressure(str, Enum):
    """Pressure bands reported by :class:`MemoryWatcher`."""

    OK = "ok"
    HIGH = "high"
    WARN = "warn"
    CRITICAL = "critical"

    @classmethod
    def from_percentage(cls, percentage: float) -> "MemoryPressure":
        if percentage >= CRITICAL_THRESHOLD:
            return cls.CRITICAL
        if percentage >= WARN_THRESHOLD:
            return cls.WARN
        if percentage >= HIGH_THRESHOLD:
            return cls.HIGH
        return cls.OK


@dataclass
class MemoryWatcher:
    """Measure a store against the memory ceiling and apply the policy.

    ``max_mem`` overrides the configured ceiling (bytes).  With
    ``abort_on_critical`` disabled the watcher still saves the store on
    critical pressure but hands the decision back to the caller by
    returning :attr:`MemoryPressure.CRITICAL`.
    """

    max_mem: Optional[int] = None
    abort_on_critical: bool = True
    persist_path: Optional[str] = None

    def __post_init__(self) -> None:
        if self.max_mem is not None and self.max_mem < 1:
            raise ValueError(f"max_mem must be a positive number of bytes, got {self.max_mem}")

    def limit(self) -> int:
        return self.max_mem if self.max_mem is not None else get_max_mem_usage()

    def pressure(self, store: "GraphStore") -> float:
        """Return the encoded size of ``store`` as a percentage of the limit."""

        return store.get_mem() * 100.0 / self.limit()

    def check(self, store: "GraphStore") -> MemoryPressure:
        """Classify the pressure of ``store`` and log it."""

        percentage = self.pressure(store)
        logger.debug("memory pressure: %.2f", percentage)
        level = MemoryPressure.from_percentage(percentage)
        if level is MemoryPressure.OK:
            logger.debug("memory ok: %.2f", percentage)
        elif level is MemoryPressure.HIGH:
            logger.info("memory high: %.2f", percentage)
        elif level is MemoryPressure.WARN:
            logger.warning("memory close to the limit: %.2f", percentage)
        else:
            logger.error("memory usage critical: %.2f", percentage)
        return level

    def watch(self, store: "GraphStore") -> MemoryPressure:
        """Check ``store`` and act on critical pressure."""

        level = self.check(store)
        if level is not MemoryPressure.CRITICAL:
            return level

        logger.error(
            "auto persisting current graphs: %s, and stopping execution", store.get_label()
        )
        try:
            store.save(self.persist_path)
        except (OSError, GraphVaultError) as exc:
            logger.error("failed to persist graphs %s: %s", store.get_label(), exc)
        if self.abort_on_critical:
            raise SystemExit(1)
        return level


__all__ = ["MemoryPressure", "MemoryWatcher"]
