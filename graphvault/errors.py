"""Exception hierarchy raised by the graph store and its persistence layer."""
from __future__ import annotations


class GraphVaultError(Exception):
    """Base class for every error raised by :mod:`graphvault`."""


class AttributeNotFound(GraphVaultError, LookupError):
    """An attribute key is not present on a vertex or edge."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Attribute '{key}' not found")
        self.key = key


class AttributesEmpty(AttributeNotFound):
    """The attribute bag holds no attributes at all."""

    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.args = (f"Attribute '{key}' not found, attributes are empty",)


class VertexNotFound(GraphVaultError, LookupError):
    """No vertex matched the lookup."""

    def __init__(self, message: str = "Vertex not found") -> None:
        super().__init__(message)


class EdgeNotFound(GraphVaultError, LookupError):
    """No edge matched the lookup."""

    def __init__(self, message: str = "Edge not found") -> None:
        super().__init__(message)


class NoRelationsForEdges(EdgeNotFound):
    """No edge carries the requested relation label(s)."""

    def __init__(self, relation: str) -> None:
        super().__init__(f"No edges found for relation '{relation}'")
        self.relation = relation


class VaultEmpty(GraphVaultError, LookupError):
    """The selected vault exists but holds no edges."""

    def __init__(self, name: str | None = None) -> None:
        message = "Vault is empty" if name is None else f"Vault '{name}' is empty"
        super().__init__(message)
        self.name = name


class VaultNotExists(GraphVaultError, LookupError):
    """The selected vault is not part of the store."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Vault '{name}' does not exist")
        self.name = name


class PersistenceSizeExceeded(GraphVaultError, ValueError):
    """A persisted file is larger than the configured memory ceiling."""

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(
            f"Persistence file of {size} bytes exceeds the configured limit of {limit} bytes"
        )
        self.size = size
        self.limit = limit


class DecodeFailure(GraphVaultError, ValueError):
    """Persisted bytes could not be turned back into a store."""


class FileNotFound(GraphVaultError, FileNotFoundError):
    """The persisted file to load does not exist."""


class InvalidFilenamePath(GraphVaultError, ValueError):
    """A path cannot be used to read or write a store file."""


class CsvEmpty(GraphVaultError, ValueError):
    """A CSV file contained no edge rows."""


class CsvEdgeMissingRelation(GraphVaultError, ValueError):
    """A CSV row has a blank relation column."""


class Unknown(GraphVaultError):
    """Unexpected failure wrapped with its original cause."""


__all__ = [
    "AttributeNotFound",
    "AttributesEmpty",
    "CsvEdgeMissingRelation",
    "CsvEmpty",
    "DecodeFailure",
    "EdgeNotFound",
    "FileNotFound",
    "GraphVaultError",
    "InvalidFilenamePath",
    "NoRelationsForEdges",
    "PersistenceSizeExceeded",
    "Unknown",
    "VaultEmpty",
    "VaultNotExists",
    "VertexNotFound",
]
