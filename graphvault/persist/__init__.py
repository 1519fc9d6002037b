"""Persistence utilities for GraphVault."""

from .codec import decode_store, encode_store
from .export import GraphExporter, import_csv
from .snapshot import load, save

__all__ = ["GraphExporter", "decode_store", "encode_store", "import_csv", "load", "save"]
