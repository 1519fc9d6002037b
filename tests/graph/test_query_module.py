"""Tests for :mod:`graphvault.graph.query`."""

from __future__ import annotations

import pytest

from graphvault.errors import (
    EdgeNotFound,
    NoRelationsForEdges,
    VaultEmpty,
    VaultNotExists,
    VertexNotFound,
)
from graphvault.graph.model import Edge, Vertex


def test_find_edges_by_relation(friends_store):
    edges = friends_store.find_edges_by_relation("friend of")

    assert len(edges) == 3
    with pytest.raises(NoRelationsForEdges):
        friends_store.find_edges_by_relation("enemy of")


def test_find_edges_by_relations(friends_store):
    edges = friends_store.find_edges_by_relations(["friend of", "relative of"])

    assert len(edges) == 4
    with pytest.raises(NoRelationsForEdges):
        friends_store.find_edges_by_relations(["enemy of", "boss of"])


def test_uniq_relations(friends_store):
    friends_store.insert_with("work", Edge.create(Vertex("Ann"), "boss of", Vertex("Tom")))

    assert friends_store.uniq_graph_relations("friends") == ["friend of", "relative of"]
    assert friends_store.uniq_graph_relations() == ["boss of"]
    assert friends_store.uniq_relations() == ["boss of", "friend of", "relative of"]


def test_find_edge_by_id_matches_endpoints(friends_store, people):
    alice, bob, fred = people
    first = friends_store.get_edges()[0]

    assert friends_store.find_edge_by_id(first.id) == first
    assert friends_store.find_edge_by_id(fred.id).relation == "relative of"
    with pytest.raises(EdgeNotFound):
        friends_store.find_edge_by_id("missing")


def test_find_edge_by_id_in_graphs(friends_store):
    other = Edge.create(Vertex("Ann"), "boss of", Vertex("Tom"))
    friends_store.insert_with("work", other)
    friends_store.set_label("friends")

    assert friends_store.find_edge_by_id_in_graphs(other.id) == other
    with pytest.raises(EdgeNotFound):
        friends_store.find_edge_by_id_in_graphs("missing")


def test_find_vertex_by_id(friends_store, people):
    alice, bob, fred = people

    assert friends_store.find_vertex_by_id(bob.id) is bob
    with pytest.raises(VertexNotFound):
        friends_store.find_vertex_by_id("missing")


def test_find_vertex_by_id_in_graphs_skips_empty_vaults(friends_store):
    tom = Vertex("Tom")
    friends_store.insert_with("work", Edge.create(Vertex("Ann"), "boss of", tom))
    friends_store.insert("empty")

    assert friends_store.find_vertex_by_id_in_graphs(tom.id) is tom
    with pytest.raises(VertexNotFound):
        friends_store.find_vertex_by_id_in_graphs("missing")


def test_attribute_scans(friends_store, people):
    alice, bob, fred = people

    edges = friends_store.find_edges_with_vertex_attr_str_key("age")
    assert len(edges) == 3
    assert edges[0].to_vertex is bob

    assert len(friends_store.find_edges_with_vertex_attr_str_key_like("PHONE")) == 3
    assert len(friends_store.find_edges_with_vertex_attr_equals_to("age", 42)) == 3
    assert len(friends_store.find_edges_with_vertex_attr_key("code")) == 2
    assert len(friends_store.find_edges_with_vertex_attr_key_like("ddr")) == 3
    assert len(friends_store.find_edges_with_vertex_attr_bytes_key("code")) == 2
    assert len(friends_store.find_edges_with_vertex_attr_bytes_key_like("CO")) == 2
    assert (
        len(friends_store.find_edges_with_vertex_attr_bytes_equals_to("code", [3, 1, 3, 3, 7]))
        == 2
    )


def test_attribute_scans_raise_when_nothing_matches(friends_store):
    with pytest.raises(EdgeNotFound):
        friends_store.find_edges_with_vertex_attr_str_key("code")
    with pytest.raises(EdgeNotFound):
        friends_store.find_edges_with_vertex_attr_equals_to("age", 43)
    with pytest.raises(EdgeNotFound):
        friends_store.find_edges_with_vertex_attr_bytes_equals_to("code", [1, 2])


def test_scans_report_vault_state(friends_store):
    friends_store.insert("empty")

    with pytest.raises(VaultEmpty):
        friends_store.find_edges_with_vertex_attr_key("age")
    with pytest.raises(VaultNotExists):
        friends_store.find_edges_by_relation("friend of", "work")


def test_find_vertices_with_relation(friends_store, people):
    alice, bob, fred = people

    assert friends_store.find_vertices_with_relation_in("friend of") == [bob, alice]
    assert friends_store.find_vertices_with_relation_out("friend of") == [alice, bob, fred]
    assert friends_store.find_vertices_with_relation_in("relative of") == [alice]
    with pytest.raises(VertexNotFound):
        friends_store.find_vertices_with_relation_out("enemy of")


def test_unique_vertices(friends_store, people):
    alice, bob, fred = people
    friends_store.insert_with("work", Edge.create(alice, "boss of", Vertex("Tom")))

    assert friends_store.get_uniq_vertices("friends") == [alice, bob, fred]
    assert [v.label for v in friends_store.get_uniq_vertices()] == ["Alice", "Tom"]
    assert len(friends_store.get_uniq_vertices_on_graphs()) == 4
