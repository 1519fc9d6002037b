"""Whole-store snapshot files (``*.grphst``)."""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Union

from graphvault.config import get_max_mem_usage
from graphvault.errors import (
    FileNotFound,
    InvalidFilenamePath,
    PersistenceSizeExceeded,
    Unknown,
)
from graphvault.graph.store import GraphStore

from .codec import decode_store, encode_store

logger = logging.getLogger(__name__)

EXTENSION = ".grphst"

PathLike = Union[str, Path]


def snapshot_filename(store: GraphStore) -> str:
    """Return the file name used for ``store``: its label with ``_`` for spaces."""

    name = store.get_label().replace(" ", "_")
    if not name or os.sep in name or (os.altsep and os.altsep in name):
        raise InvalidFilenamePath(f"Cannot build a file name from label {store.get_label()!r}")
    return f"{name}{EXTENSION}"


def save(store: GraphStore, path: Optional[PathLike] = None) -> Path:
    """Write every vault of ``store`` to ``{path}/{label}.grphst``.

    ``path`` is a directory and defaults to the working directory.  An
    existing file is truncated and overwritten.
    """

    directory = Path(path) if path is not None else Path()
    if directory.exists() and not directory.is_dir():
        raise InvalidFilenamePath(f"'{directory}' is not a directory")
    directory.mkdir(parents=True, exist_ok=True)

    file_path = directory / snapshot_filename(store)
    data = encode_store(store)
    file_path.write_bytes(data)
    logger.info(
        "current graphs persisted at %s file with %d bytes written", file_path, len(data)
    )
    return file_path


def load(file_path: PathLike, *, max_mem: Optional[int] = None) -> GraphStore:
    """Read a store written by :func:`save`.

    The raw file size is compared with the memory ceiling before anything
    is decoded.
    """

    path = Path(file_path)
    try:
        size = path.stat().st_size
    except FileNotFoundError as exc:
        raise FileNotFound(f"Persisted graphs file '{path}' does not exist") from exc
    if path.is_dir():
        raise InvalidFilenamePath(f"'{path}' is a directory")

    limit = max_mem if max_mem is not None else get_max_mem_usage()
    if size > limit:
        logger.error("persisted file %s of %d bytes is over the limit %d", path, size, limit)
        raise PersistenceSizeExceeded(size, limit)

    try:
        data = path.read_bytes()
    except OSError as exc:
        raise Unknown(f"Unable to read '{path}': {exc}") from exc

    store = decode_store(data)
    logger.info("graphs %s loaded from %s", store.get_label(), path)
    return store


__all__ = ["EXTENSION", "load", "save", "snapshot_filename"]
