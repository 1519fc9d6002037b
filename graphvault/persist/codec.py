"""Binary encoding of a whole :class:`GraphStore` with msgpack.

Layout of the top level map::

    format    "grphst"
    version   schema version (int)
    id        store id
    label     current vault name
    vertices  [{"id": str, "label": str, "attributes": bag}, ...]
    vaults    {vault_name: [edge, ...]}

Each edge is ``{"id", "relation", "from", "to", "attributes"}`` where
``from``/``to`` are positions in the vertex table.  The table holds one
entry per vertex object, so a vertex shared by several edges is written
once and is shared again after decoding, while distinct objects that
happen to carry the same id stay distinct.  A bag is
``{"id", "values", "blobs"}``.
"""
from __future__ import annotations

from typing import Any, Dict, List

import msgpack

from graphvault.errors import DecodeFailure
from graphvault.graph.attributes import AttributeBag
from graphvault.graph.model import Edge, Vertex
from graphvault.graph.store import GraphStore

FORMAT = "grphst"
VERSION = 2


def _pack_bag(bag: AttributeBag) -> Dict[str, Any]:
    return {"id": bag.id, "values": bag.as_dict(), "blobs": bag.bytes_as_dict()}


def _unpack_bag(payload: Dict[str, Any]) -> AttributeBag:
    return AttributeBag(payload["values"], blobs=payload["blobs"], bag_id=payload["id"])


def _store_payload(store: GraphStore) -> Dict[str, Any]:
    vertices: List[Dict[str, Any]] = []
    positions: Dict[int, int] = {}
    vaults: Dict[str, List[Dict[str, Any]]] = {}
    for name, edges in store.vaults.items():
        packed_edges = []
        for edge in edges:
            for vertex in edge.vertices():
                if id(vertex) not in positions:
                    positions[id(vertex)] = len(vertices)
                    vertices.append(
                        {
                            "id": vertex.id,
                            "label": vertex.label,
                            "attributes": _pack_bag(vertex.attributes),
                        }
                    )
            packed_edges.append(
                {
                    "id": edge.id,
                    "relation": edge.relation,
                    "from": positions[id(edge.from_vertex)],
                    "to": positions[id(edge.to_vertex)],
                    "attributes": _pack_bag(edge.attributes),
                }
            )
        vaults[name] = packed_edges
    return {
        "format": FORMAT,
        "version": VERSION,
        "id": store.id,
        "label": store.label,
        "vertices": vertices,
        "vaults": vaults,
    }


def encode_store(store: GraphStore) -> bytes:
    """Serialize every vault of ``store`` into a single binary blob."""

    return msgpack.packb(_store_payload(store), use_bin_type=True)


def decode_store(data: bytes) -> GraphStore:
    """Rebuild a :class:`GraphStore` from :func:`encode_store` output."""

    try:
        payload = msgpack.unpackb(data, raw=False)
    except (msgpack.exceptions.UnpackException, ValueError, TypeError) as exc:
        raise DecodeFailure(f"Unable to decode persisted graphs: {exc}") from exc

    if not isinstance(payload, dict) or payload.get("format") != FORMAT:
        raise DecodeFailure("Persisted data is not a graphs file")
    if payload.get("version") != VERSION:
        raise DecodeFailure(f"Unsupported persisted graphs version: {payload.get('version')!r}")

    try:
        vertices = [
            Vertex(
                entry["label"],
                vertex_id=entry["id"],
                attributes=_unpack_bag(entry["attributes"]),
            )
            for entry in payload["vertices"]
        ]
        vaults: Dict[str, List[Edge]] = {}
        for name, edges in payload["vaults"].items():
            vaults[name] = [
                Edge(
                    edge["relation"],
                    edge_id=edge["id"],
                    from_vertex=vertices[edge["from"]],
                    to_vertex=vertices[edge["to"]],
                    attributes=_unpack_bag(edge["attributes"]),
                )
                for edge in edges
            ]
        return GraphStore(label=payload["label"], vaults=vaults, id=payload["id"])
    except (KeyError, IndexError, TypeError, ValueError, AttributeError) as exc:
        raise DecodeFailure(f"Malformed persisted graphs: {exc!r}") from exc


__all__ = ["decode_store", "encode_store"]
