"""Shared fixtures for the graphvault test-suite."""

from __future__ import annotations

import pytest

from graphvault.graph.model import Edge, Vertex
from graphvault.graph.store import GraphStore


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch):
    for key in ("MAX_MEM_USAGE", "LOG_LEVEL", "CSV_DELIMITER"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def people():
    """Alice, Bob and Fred with the attributes used across the suite."""

    alice = Vertex("Alice")
    alice.set_attr("phone", "555-555-555")
    alice.set_attr("address", "Elm street")
    bob = Vertex("Bob")
    bob.set_attr("age", 42)
    fred = Vertex("Fred")
    fred.set_attr_bytes("code", [3, 1, 3, 3, 7])
    return alice, bob, fred


@pytest.fixture
def friends_store(people):
    """Store ``friends`` with four edges sharing three vertices."""

    alice, bob, fred = people
    store = GraphStore.init("friends")
    store.add_edges(
        [
            Edge.create(alice, "friend of", bob),
            Edge.create(bob, "friend of", alice),
            Edge.create(fred, "relative of", alice),
            Edge.create(fred, "friend of", bob),
        ]
    )
    return store
