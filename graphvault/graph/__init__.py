"""Graph subpackage containing the data model, the vault store and queries."""

from .attributes import AttributeBag
from .model import Edge, Vertex
from .stats import GraphStats
from .store import GraphStore

__all__ = [
    "AttributeBag",
    "Edge",
    "GraphStats",
    "GraphStore",
    "Vertex",
]
