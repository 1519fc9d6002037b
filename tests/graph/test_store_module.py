"""Tests for :mod:`graphvault.graph.store`."""

from __future__ import annotations

import pytest

from graphvault.errors import EdgeNotFound, PersistenceSizeExceeded, VaultEmpty, VaultNotExists
from graphvault.graph.model import Edge, Vertex
from graphvault.graph.store import GraphStore
from graphvault.obs.memory import MemoryPressure


def make_edge(relation: str = "friend of") -> Edge:
    return Edge.create(Vertex("Alice"), relation, Vertex("Bob"))


def test_init_creates_single_empty_vault():
    store = GraphStore.init("friends")

    assert store.get_label() == "friends"
    assert store.len_vaults() == 1
    assert len(store) == 0
    assert store.is_empty()
    with pytest.raises(VaultEmpty):
        store.get_edges()


def test_init_with_adds_first_edge():
    edge = make_edge()
    store = GraphStore.init_with("friends", edge)

    assert len(store) == 1
    assert store.get_edges() == [edge]


def test_add_edge_stores_a_clone():
    edge = make_edge()
    store = GraphStore.init("friends")

    assert store.add_edge(edge) is MemoryPressure.OK

    stored = store.get_edges()[0]
    assert stored == edge
    assert stored is not edge
    assert stored.from_vertex is edge.from_vertex

    edge.set_attr("since", 2020)
    assert not store.get_edges()[0].has_attr_key("since")


def test_add_edge_to_missing_vault_is_a_noop():
    store = GraphStore.init("friends")

    assert store.add_edge(make_edge(), "unknown") is None
    assert len(store) == 0
    assert "unknown" not in store.vaults


def test_insert_switches_current_vault_and_replaces_existing():
    store = GraphStore.init("friends")
    store.add_edge(make_edge())

    store.insert("family")
    assert store.get_label() == "family"
    assert store.len_vaults() == 2

    store.add_edge(make_edge("relative of"))
    store.insert("friends")
    assert store.get_label() == "friends"
    with pytest.raises(VaultEmpty):
        store.get_edges()
    assert len(store.get_edges("family")) == 1


def test_insert_with_adds_edge_to_new_vault():
    store = GraphStore.init("friends")
    edge = make_edge("relative of")

    store.insert_with("family", edge)

    assert store.get_label() == "family"
    assert store.get_edges() == [edge]


def test_set_label_requires_existing_vault():
    store = GraphStore.init("friends")
    store.insert("family")

    store.set_label("friends")
    assert store.get_label() == "friends"
    with pytest.raises(VaultNotExists):
        store.set_label("work")


def test_selecting_unknown_vault_raises():
    store = GraphStore.init("friends")

    with pytest.raises(VaultNotExists):
        store.get_edges("work")


def test_update_edge_replaces_and_moves_to_end():
    store = GraphStore.init("friends")
    first = make_edge()
    second = make_edge("relative of")
    store.add_edges([first, second])

    first.set_attr("since", 2020)
    store.update_edge(first)

    edges = store.get_edges()
    assert [edge.id for edge in edges] == [second.id, first.id]
    assert edges[-1].get_attr("since") == "2020"


def test_update_missing_edge_raises():
    store = GraphStore.init("friends")
    store.add_edge(make_edge())

    with pytest.raises(EdgeNotFound):
        store.update_edge(make_edge())


def test_delete_edge_by_id():
    store = GraphStore.init("friends")
    edge = make_edge()
    store.add_edges([edge, make_edge()])

    store.delete_edge_by_id(edge.id)

    assert len(store) == 1
    with pytest.raises(EdgeNotFound):
        store.delete_edge_by_id(edge.id)


def test_delete_vault():
    store = GraphStore.init("friends")
    store.insert("family")

    store.delete_vault("friends")
    assert list(store.vaults) == ["family"]
    with pytest.raises(ValueError):
        store.delete_vault("family")
    with pytest.raises(VaultNotExists):
        store.delete_vault("work")


def test_get_vaults_is_a_shallow_copy(friends_store):
    vaults = friends_store.get_vaults()
    vaults["friends"].clear()

    assert len(friends_store) == 4


def test_get_mem_grows_with_content():
    store = GraphStore.init("friends")
    empty = store.get_mem()
    store.add_edge(make_edge())

    assert 0 < empty < store.get_mem()


def test_save_and_load_round_trip(friends_store, tmp_path):
    path = friends_store.save(tmp_path)

    assert path == tmp_path / "friends.grphst"
    assert GraphStore.load(path) == friends_store


def test_load_honours_explicit_ceiling(friends_store, tmp_path):
    path = friends_store.save(tmp_path)

    with pytest.raises(PersistenceSizeExceeded):
        GraphStore.load(path, max_mem=10)
    assert GraphStore.load(path, max_mem=10 * 1024 * 1024) == friends_store
