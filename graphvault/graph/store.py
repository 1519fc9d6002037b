"""In-memory store of named vaults, each an ordered list of edges."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from graphvault.errors import EdgeNotFound, VaultEmpty, VaultNotExists
from graphvault.obs.memory import MemoryPressure, MemoryWatcher

from .ids import new_id
from .model import Edge
from .query import StoreQueries
from .stats import GraphStats

logger = logging.getLogger(__name__)


@dataclass
class GraphStore(StoreQueries):
    """Collection of vaults keyed by name.

    ``label`` names the current vault, used whenever an operation is called
    without an explicit vault name, and also names the persisted file.
    Edges are cloned on insertion while their vertices stay shared, and
    every mutation is followed by a memory check through ``watcher``.
    """

    label: str
    vaults: Dict[str, List[Edge]] = field(default_factory=dict)
    id: str = field(default_factory=new_id)
    watcher: MemoryWatcher = field(default_factory=MemoryWatcher, compare=False, repr=False)

    def __post_init__(self) -> None:
        self.vaults.setdefault(self.label, [])

    @classmethod
    def init(cls, label: str, **kwargs) -> "GraphStore":
        """Create a store holding a single empty vault named ``label``."""

        return cls(label=label, **kwargs)

    @classmethod
    def init_with(cls, label: str, edge: Edge, **kwargs) -> "GraphStore":
        """Create a store whose first vault already holds ``edge``."""

        store = cls.init(label, **kwargs)
        store.add_edge(edge)
        return store

    # ------------------------------------------------------------------ #
    # Vaults
    # ------------------------------------------------------------------ #
    def get_label(self) -> str:
        return self.label

    def set_label(self, name: str) -> None:
        """Make the existing vault ``name`` the current one."""

        if name not in self.vaults:
            raise VaultNotExists(name)
        self.label = name

    def insert(self, name: str) -> MemoryPressure:
        """Create an empty vault ``name`` and make it current.

        An existing vault with the same name is replaced by an empty one.
        """

        self.vaults[name] = []
        self.label = name
        logger.debug("inserted vault '%s'", name)
        return self.watcher.watch(self)

    def insert_with(self, name: str, edge: Edge) -> MemoryPressure:
        """Create vault ``name``, make it current and add ``edge`` to it."""

        self.vaults[name] = []
        self.label = name
        return self.add_edge(edge, name)

    def delete_vault(self, name: str) -> None:
        if name not in self.vaults:
            raise VaultNotExists(name)
        if name == self.label:
            raise ValueError(f"Cannot delete the current vault '{name}'")
        del self.vaults[name]
        logger.debug("deleted vault '%s'", name)

    def get_vaults(self) -> Dict[str, List[Edge]]:
        """Shallow copy of every vault, for exporters."""

        return {name: list(edges) for name, edges in self.vaults.items()}

    def get_edges(self, vault_name: Optional[str] = None) -> List[Edge]:
        return list(self._select_vault(vault_name))

    def len_vaults(self) -> int:
        return len(self.vaults)

    def __len__(self) -> int:
        return sum(len(edges) for edges in self.vaults.values())

    def is_empty(self) -> bool:
        return len(self) == 0

    def _resolve_vault(self, vault_name: Optional[str]) -> str:
        return vault_name if vault_name is not None else self.label

    def _select_vault(self, vault_name: Optional[str]) -> List[Edge]:
        name = self._resolve_vault(vault_name)
        edges = self.vaults.get(name)
        if edges is None:
            logger.warning("vault %s does not exist", name)
            raise VaultNotExists(name)
        if not edges:
            raise VaultEmpty(name)
        return edges

    # ------------------------------------------------------------------ #
    # Edges
    # ------------------------------------------------------------------ #
    def add_edge(self, edge: Edge, vault_name: Optional[str] = None) -> Optional[MemoryPressure]:
        """Append a clone of ``edge`` to the vault.

        A missing vault is not created: the call only logs an error and
        returns ``None``.
        """

        return self.add_edges([edge], vault_name)

    def add_edges(
        self, edges: Iterable[Edge], vault_name: Optional[str] = None
    ) -> Optional[MemoryPressure]:
        name = self._resolve_vault(vault_name)
        vault = self.vaults.get(name)
        if vault is None:
            logger.error("vault '%s' does not exist, edges not added", name)
            return None
        vault.extend(edge.clone() for edge in edges)
        return self.watcher.watch(self)

    def update_edge(self, edge: Edge, vault_name: Optional[str] = None) -> MemoryPressure:
        """Replace the stored edge sharing ``edge.id``.

        The replacement is appended at the end of the vault.
        """

        edges = self._select_vault(vault_name)
        for index, current in enumerate(edges):
            if current.id == edge.id:
                break
        else:
            logger.error("edge to update with id: [%s] not found", edge.id)
            raise EdgeNotFound(f"Edge '{edge.id}' not found")
        del edges[index]
        edges.append(edge.clone())
        return self.watcher.watch(self)

    def delete_edge_by_id(self, edge_id: str, vault_name: Optional[str] = None) -> None:
        edges = self._select_vault(vault_name)
        for index, current in enumerate(edges):
            if current.id == edge_id:
                del edges[index]
                logger.debug("deleted edge [%s]", edge_id)
                return
        logger.error("edge [%s] to delete not found", edge_id)
        raise EdgeNotFound(f"Edge '{edge_id}' not found")

    # ------------------------------------------------------------------ #
    # Size, stats and persistence
    # ------------------------------------------------------------------ #
    def get_mem(self) -> int:
        """Size in bytes of the encoded store."""

        from graphvault.persist.codec import encode_store

        return len(encode_store(self))

    def get_stats(self) -> GraphStats:
        return GraphStats.generate(self)

    def save(self, path: Union[str, Path, None] = None) -> Path:
        """Write the store to ``{path}/{label}.grphst`` and return the file path."""

        from graphvault.persist.snapshot import save

        return save(self, path)

    @classmethod
    def load(cls, file_path: Union[str, Path], *, max_mem: Optional[int] = None) -> "GraphStore":
        from graphvault.persist.snapshot import load

        return load(file_path, max_mem=max_mem)


__all__ = ["GraphStore"]
