"""Vertices and edges of the labelled multigraph.

A :class:`Vertex` is never copied into an :class:`Edge`: edges keep a
reference to the vertex object, so a vertex shared by several edges shows
every mutation through all of them.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

from graphvault.errors import VertexNotFound

from .attributes import AttributeBag, AttributeHolder
from .ids import new_id

logger = logging.getLogger(__name__)

_hasher = PasswordHasher()


class Vertex(AttributeHolder):
    """Labelled node carrying an attribute bag."""

    __slots__ = ("_id", "label", "_attributes")

    def __init__(
        self,
        label: str = "",
        *,
        vertex_id: Optional[str] = None,
        attributes: Optional[AttributeBag] = None,
    ) -> None:
        self._id = vertex_id or new_id()
        self.label = label
        self._attributes = attributes if attributes is not None else AttributeBag()
        logger.debug("created vertex [%s] with label '%s'", self._id, label)

    @property
    def id(self) -> str:
        return self._id

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(label={self.label!r}, id={self._id!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vertex):
            return NotImplemented
        return (
            self._id == other._id
            and self.label == other.label
            and self._attributes == other._attributes
        )

    def __hash__(self) -> int:
        return hash(self._id)

    def set_hash(self, key: str, plain_text: str) -> None:
        """Store an Argon2 hash of ``plain_text`` as the string attribute ``key``."""

        self.set_attr(key, _hasher.hash(plain_text))

    def is_hash_valid(self, key: str, plain_text: str) -> bool:
        """Check ``plain_text`` against the hash stored under ``key``.

        A missing ``key`` raises :class:`AttributeNotFound`; a value that is
        not an Argon2 hash never matches.
        """

        try:
            return _hasher.verify(self.get_attr(key), plain_text)
        except (VerificationError, InvalidHashError):
            return False


class Edge(AttributeHolder):
    """Directed, labelled relation between two vertices."""

    __slots__ = ("_id", "relation", "_from", "_to", "_attributes")

    def __init__(
        self,
        relation: str = "",
        *,
        edge_id: Optional[str] = None,
        from_vertex: Optional[Vertex] = None,
        to_vertex: Optional[Vertex] = None,
        attributes: Optional[AttributeBag] = None,
    ) -> None:
        self._id = edge_id or new_id()
        self.relation = relation
        self._from = from_vertex if from_vertex is not None else Vertex()
        self._to = to_vertex if to_vertex is not None else Vertex()
        self._attributes = attributes if attributes is not None else AttributeBag()

    @classmethod
    def create(cls, from_vertex: Vertex, relation: str, to_vertex: Vertex) -> "Edge":
        """Return a new edge ``from_vertex -[relation]-> to_vertex``."""

        edge = cls(relation, from_vertex=from_vertex, to_vertex=to_vertex)
        logger.debug(
            "created edge [%s] %s -[%s]-> %s", edge.id, from_vertex.id, relation, to_vertex.id
        )
        return edge

    @property
    def id(self) -> str:
        return self._id

    @property
    def label(self) -> str:
        return self.relation

    @label.setter
    def label(self, value: str) -> None:
        self.relation = value

    @property
    def from_vertex(self) -> Vertex:
        return self._from

    @from_vertex.setter
    def from_vertex(self, vertex: Vertex) -> None:
        self._from = vertex

    @property
    def to_vertex(self) -> Vertex:
        return self._to

    @to_vertex.setter
    def to_vertex(self, vertex: Vertex) -> None:
        self._to = vertex

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}({self._from.label!r} -[{self.relation!r}]-> "
            f"{self._to.label!r}, id={self._id!r})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Edge):
            return NotImplemented
        return (
            self._id == other._id
            and self.relation == other.relation
            and self._from == other._from
            and self._to == other._to
            and self._attributes == other._attributes
        )

    __hash__ = None  # type: ignore[assignment]

    def add_relation(self, from_vertex: Vertex, relation: str, to_vertex: Vertex) -> None:
        """Point the edge at new endpoints and relation in one step."""

        self.relation = relation
        self._from = from_vertex
        self._to = to_vertex
        logger.debug("added relation to edge [%s]: %s", self._id, relation)

    def update_from(self, vertex: Vertex) -> None:
        logger.debug("updated edge [%s] from vertex: %s", self._id, vertex.id)
        self._from = vertex

    def update_to(self, vertex: Vertex) -> None:
        logger.debug("updated edge [%s] to vertex: %s", self._id, vertex.id)
        self._to = vertex

    def clone(self) -> "Edge":
        """Copy the edge itself; the endpoint vertices stay shared."""

        return Edge(
            self.relation,
            edge_id=self._id,
            from_vertex=self._from,
            to_vertex=self._to,
            attributes=self._attributes.copy(),
        )

    def vertices(self) -> tuple[Vertex, Vertex]:
        return self._from, self._to

    def matches_id(self, identifier: str) -> bool:
        """Return ``True`` when ``identifier`` is the edge id or an endpoint id."""

        return identifier in (self._id, self._from.id, self._to.id)

    def find_vertex_by_id(self, vertex_id: str) -> Vertex:
        """Return whichever endpoint has ``vertex_id``."""

        if self._from.id == vertex_id:
            return self._from
        if self._to.id == vertex_id:
            return self._to
        raise VertexNotFound(f"Vertex '{vertex_id}' not found on edge '{self._id}'")

    # ------------------------------------------------------------------ #
    # Endpoint predicates, true when either endpoint matches
    # ------------------------------------------------------------------ #
    def has_vertex_with_attr_key(self, key: str) -> bool:
        return any(v.has_attr_key(key) or v.has_attr_bytes_key(key) for v in self.vertices())

    def has_vertex_with_attr_key_like(self, fragment: str) -> bool:
        return any(
            v.has_attr_key_like(fragment) or v.has_attr_bytes_key_like(fragment)
            for v in self.vertices()
        )

    def has_vertex_with_attr_str_key(self, key: str) -> bool:
        return any(v.has_attr_key(key) for v in self.vertices())

    def has_vertex_with_attr_str_key_like(self, fragment: str) -> bool:
        return any(v.has_attr_key_like(fragment) for v in self.vertices())

    def has_vertex_with_attr_equals_to(self, key: str, value: Any) -> bool:
        return any(v.attr_equals_to(key, value) for v in self.vertices())

    def has_vertex_with_attr_bytes_key(self, key: str) -> bool:
        return any(v.has_attr_bytes_key(key) for v in self.vertices())

    def has_vertex_with_attr_bytes_key_like(self, fragment: str) -> bool:
        return any(v.has_attr_bytes_key_like(fragment) for v in self.vertices())

    def has_vertex_with_attr_bytes_equals_to(self, key: str, value: Iterable[int]) -> bool:
        value = bytes(value)
        return any(v.attr_bytes_equals_to(key, value) for v in self.vertices())


__all__ = ["Edge", "Vertex"]
