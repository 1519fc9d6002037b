"""Summary counters derived from a :class:`GraphStore`."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - import for type checking only
    from .store import GraphStore


@dataclass(frozen=True)
class GraphStats:
    """Read-only snapshot of store counters."""

    mem: int
    total_edges: int
    total_vaults: int
    total_vertices: int
    total_attr: int
    uniq_rel: int

    @classmethod
    def generate(cls, store: "GraphStore") -> "GraphStats":
        """Scan ``store`` and count its content.

        Vertices are counted once even when shared by several edges.
        Attribute counts include binary attributes.
        """

        vertices = store.get_uniq_vertices_on_graphs()
        attr_count = sum(v.attr_len() + v.attributes.bytes_len() for v in vertices)
        for edges in store.vaults.values():
            for edge in edges:
                attr_count += edge.attr_len() + edge.attributes.bytes_len()

        return cls(
            mem=store.get_mem(),
            total_edges=len(store),
            total_vaults=store.len_vaults(),
            total_vertices=len(vertices),
            total_attr=attr_count,
            uniq_rel=len(store.uniq_relations()),
        )

    def to_payload(self) -> dict:
        return {
            "mem": self.mem,
            "total_edges": self.total_edges,
            "total_vaults": self.total_vaults,
            "total_vertices": self.total_vertices,
            "total_attr": self.total_attr,
            "uniq_rel": self.uniq_rel,
        }


__all__ = ["GraphStats"]
