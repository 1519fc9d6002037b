"""GraphVault package initialization.

Exposes the in-memory graph store together with its persistence helpers
and error kinds.
"""

from .errors import (
    AttributeNotFound,
    AttributesEmpty,
    CsvEdgeMissingRelation,
    CsvEmpty,
    DecodeFailure,
    EdgeNotFound,
    FileNotFound,
    GraphVaultError,
    InvalidFilenamePath,
    NoRelationsForEdges,
    PersistenceSizeExceeded,
    Unknown,
    VaultEmpty,
    VaultNotExists,
    VertexNotFound,
)
from .graph import AttributeBag, Edge, GraphStats, GraphStore, Vertex
from .obs import MemoryPressure, MemoryWatcher, configure_logging
from .persist import GraphExporter, import_csv, load, save

__all__ = [
    "AttributeBag",
    "AttributeNotFound",
    "AttributesEmpty",
    "CsvEdgeMissingRelation",
    "CsvEmpty",
    "DecodeFailure",
    "Edge",
    "EdgeNotFound",
    "FileNotFound",
    "GraphExporter",
    "GraphStats",
    "GraphStore",
    "GraphVaultError",
    "InvalidFilenamePath",
    "MemoryPressure",
    "MemoryWatcher",
    "NoRelationsForEdges",
    "PersistenceSizeExceeded",
    "Unknown",
    "VaultEmpty",
    "VaultNotExists",
    "Vertex",
    "VertexNotFound",
    "configure_logging",
    "import_csv",
    "load",
    "save",
]
