"""Tests for :mod:`graphvault.graph.ids`."""

from __future__ import annotations

import uuid

from graphvault.graph.ids import new_id


def test_new_id_is_canonical_uuid():
    identifier = new_id()

    assert str(uuid.UUID(identifier)) == identifier


def test_new_id_is_unique():
    assert len({new_id() for _ in range(100)}) == 100
