"""Utility helpers for generating identifiers."""
from __future__ import annotations

import uuid


def new_id() -> str:
    """Return a fresh random identifier in canonical UUID form."""

    return str(uuid.uuid4())
