"""Lookup and predicate scans over the vaults of a :class:`GraphStore`.

Every scan takes an optional vault name and falls back to the current
vault.  An empty result is reported as an error, never as an empty list,
so callers can tell "vault missing" (:class:`VaultNotExists`) from
"nothing matched" (:class:`EdgeNotFound` / :class:`VertexNotFound`).
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

from graphvault.errors import (
    EdgeNotFound,
    NoRelationsForEdges,
    VaultEmpty,
    VertexNotFound,
)

from .model import Edge, Vertex

logger = logging.getLogger(__name__)


class StoreQueries:
    """Read-only queries mixed into :class:`graphvault.graph.store.GraphStore`."""

    vaults: Dict[str, List[Edge]]

    def _select_vault(self, vault_name: Optional[str]) -> List[Edge]:  # pragma: no cover
        raise NotImplementedError

    def _filter_edges(
        self,
        predicate: Callable[[Edge], bool],
        vault_name: Optional[str],
        description: str,
    ) -> List[Edge]:
        edges = [edge for edge in self._select_vault(vault_name) if predicate(edge)]
        if not edges:
            logger.error("no edge found for %s", description)
            raise EdgeNotFound(f"No edge found for {description}")
        return edges

    # ------------------------------------------------------------------ #
    # Relations
    # ------------------------------------------------------------------ #
    def find_edges_by_relation(self, relation: str, vault_name: Optional[str] = None) -> List[Edge]:
        """Return edges whose relation equals ``relation``."""

        edges = [e for e in self._select_vault(vault_name) if e.relation == relation]
        if not edges:
            logger.error("no edge found for relation: %s", relation)
            raise NoRelationsForEdges(relation)
        return edges

    def find_edges_by_relations(
        self, relations: Iterable[str], vault_name: Optional[str] = None
    ) -> List[Edge]:
        """Return edges whose relation is one of ``relations``."""

        wanted = set(relations)
        edges = [e for e in self._select_vault(vault_name) if e.relation in wanted]
        if not edges:
            logger.error("no edge found for relations: %s", sorted(wanted))
            raise NoRelationsForEdges(", ".join(sorted(wanted)))
        return edges

    def uniq_graph_relations(self, vault_name: Optional[str] = None) -> List[str]:
        """Sorted unique relations of a single vault."""

        return sorted({edge.relation for edge in self._select_vault(vault_name)})

    def uniq_relations(self) -> List[str]:
        """Sorted unique relations across the whole store."""

        return sorted({edge.relation for edges in self.vaults.values() for edge in edges})

    # ------------------------------------------------------------------ #
    # Identifiers
    # ------------------------------------------------------------------ #
    def find_edge_by_id(self, identifier: str, vault_name: Optional[str] = None) -> Edge:
        """Return the first edge whose id, or one of its endpoint ids, matches."""

        for edge in self._select_vault(vault_name):
            if edge.matches_id(identifier):
                return edge
        logger.error("edge with id [%s] not found", identifier)
        raise EdgeNotFound(f"Edge '{identifier}' not found")

    def find_edge_by_id_in_graphs(self, identifier: str) -> Edge:
        """Like :meth:`find_edge_by_id` but searching every vault."""

        for edges in self.vaults.values():
            for edge in edges:
                if edge.matches_id(identifier):
                    return edge
        logger.error("edge with id [%s] not found in any vault", identifier)
        raise EdgeNotFound(f"Edge '{identifier}' not found")

    def find_vertex_by_id(self, vertex_id: str, vault_name: Optional[str] = None) -> Vertex:
        for edge in self._select_vault(vault_name):
            try:
                return edge.find_vertex_by_id(vertex_id)
            except VertexNotFound:
                continue
        raise VertexNotFound(f"Vertex '{vertex_id}' not found")

    def find_vertex_by_id_in_graphs(self, vertex_id: str) -> Vertex:
        for name in list(self.vaults):
            try:
                return self.find_vertex_by_id(vertex_id, name)
            except (VaultEmpty, VertexNotFound):
                continue
        raise VertexNotFound(f"Vertex '{vertex_id}' not found")

    # ------------------------------------------------------------------ #
    # Vertex attribute predicates
    # ------------------------------------------------------------------ #
    def find_edges_with_vertex_attr_key(
        self, key: str, vault_name: Optional[str] = None
    ) -> List[Edge]:
        """Edges with an endpoint holding ``key`` as a string or binary attribute."""

        return self._filter_edges(
            lambda edge: edge.has_vertex_with_attr_key(key), vault_name, f"attribute '{key}'"
        )

    def find_edges_with_vertex_attr_key_like(
        self, fragment: str, vault_name: Optional[str] = None
    ) -> List[Edge]:
        return self._filter_edges(
            lambda edge: edge.has_vertex_with_attr_key_like(fragment),
            vault_name,
            f"attribute like '{fragment}'",
        )

    def find_edges_with_vertex_attr_str_key(
        self, key: str, vault_name: Optional[str] = None
    ) -> List[Edge]:
        return self._filter_edges(
            lambda edge: edge.has_vertex_with_attr_str_key(key),
            vault_name,
            f"string attribute '{key}'",
        )

    def find_edges_with_vertex_attr_str_key_like(
        self, fragment: str, vault_name: Optional[str] = None
    ) -> List[Edge]:
        return self._filter_edges(
            lambda edge: edge.has_vertex_with_attr_str_key_like(fragment),
            vault_name,
            f"string attribute like '{fragment}'",
        )

    def find_edges_with_vertex_attr_equals_to(
        self, key: str, value: Any, vault_name: Optional[str] = None
    ) -> List[Edge]:
        """Edges with an endpoint whose ``key`` displays as ``value``."""

        return self._filter_edges(
            lambda edge: edge.has_vertex_with_attr_equals_to(key, value),
            vault_name,
            f"attribute '{key}' equal to '{value}'",
        )

    def find_edges_with_vertex_attr_bytes_key(
        self, key: str, vault_name: Optional[str] = None
    ) -> List[Edge]:
        return self._filter_edges(
            lambda edge: edge.has_vertex_with_attr_bytes_key(key),
            vault_name,
            f"binary attribute '{key}'",
        )

    def find_edges_with_vertex_attr_bytes_key_like(
        self, fragment: str, vault_name: Optional[str] = None
    ) -> List[Edge]:
        return self._filter_edges(
            lambda edge: edge.has_vertex_with_attr_bytes_key_like(fragment),
            vault_name,
            f"binary attribute like '{fragment}'",
        )

    def find_edges_with_vertex_attr_bytes_equals_to(
        self, key: str, value: Iterable[int], vault_name: Optional[str] = None
    ) -> List[Edge]:
        value = bytes(value)
        return self._filter_edges(
            lambda edge: edge.has_vertex_with_attr_bytes_equals_to(key, value),
            vault_name,
            f"binary attribute '{key}' equal to {value!r}",
        )

    # ------------------------------------------------------------------ #
    # One-hop relations
    # ------------------------------------------------------------------ #
    def find_vertices_with_relation_in(
        self, relation: str, vault_name: Optional[str] = None
    ) -> List[Vertex]:
        """Targets of every ``relation`` edge, deduplicated in first-seen order."""

        return self._collect_endpoints(relation, vault_name, incoming=True)

    def find_vertices_with_relation_out(
        self, relation: str, vault_name: Optional[str] = None
    ) -> List[Vertex]:
        """Sources of every ``relation`` edge, deduplicated in first-seen order."""

        return self._collect_endpoints(relation, vault_name, incoming=False)

    def _collect_endpoints(
        self, relation: str, vault_name: Optional[str], *, incoming: bool
    ) -> List[Vertex]:
        found: List[Vertex] = []
        for edge in self._select_vault(vault_name):
            if edge.relation != relation:
                continue
            vertex = edge.to_vertex if incoming else edge.from_vertex
            if vertex not in found:
                found.append(vertex)
        if not found:
            direction = "in" if incoming else "out"
            logger.error("no vertex found with relation %s: %s", direction, relation)
            raise VertexNotFound(f"No vertex found with relation {direction} '{relation}'")
        return found

    # ------------------------------------------------------------------ #
    # Vertices
    # ------------------------------------------------------------------ #
    def get_uniq_vertices(self, vault_name: Optional[str] = None) -> List[Vertex]:
        """Unique vertices (by id) of one vault, in first-seen order."""

        return _unique_vertices(self._select_vault(vault_name))

    def get_uniq_vertices_on_graphs(self) -> List[Vertex]:
        """Unique vertices (by id) across every vault."""

        return _unique_vertices(edge for edges in self.vaults.values() for edge in edges)


def _unique_vertices(edges: Iterable[Edge]) -> List[Vertex]:
    seen: Dict[str, Vertex] = {}
    for edge in edges:
        for vertex in edge.vertices():
            seen.setdefault(vertex.id, vertex)
    return list(seen.values())


__all__ = ["StoreQueries"]
