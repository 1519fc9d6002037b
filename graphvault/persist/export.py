"""Graph export and import utilities.

CSV files hold one edge per row::

    graphs_vault;from_label;from_attributes;relation;to_label;to_attributes
    shire-friends;gandalf;name: Gandalf | known as: Gandalf the Gray;friend of;frodo;name: Frodo

Graphviz files (``.gv.txt``) contain a ``digraph`` with one node per unique
vertex and one arrow per edge.
"""
from __future__ import annotations

import csv
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Literal, Optional, Union

import networkx as nx

from graphvault.config import get_csv_delimiter
from graphvault.errors import (
    CsvEdgeMissingRelation,
    CsvEmpty,
    FileNotFound,
    InvalidFilenamePath,
    VaultEmpty,
)
from graphvault.graph.attributes import AttributeBag
from graphvault.graph.model import Edge, Vertex
from graphvault.graph.store import GraphStore

logger = logging.getLogger(__name__)

CSV_EXTENSION = ".csv"
GRAPHVIZ_EXTENSION = ".gv.txt"
CSV_FIELDS = (
    "graphs_vault",
    "from_label",
    "from_attributes",
    "relation",
    "to_label",
    "to_attributes",
)
ATTRIBUTE_SEPARATOR = " | "

PathLike = Union[str, Path]


def attributes_to_str(bag: AttributeBag) -> str:
    """Render string attributes as ``key: value | key: value``."""

    return ATTRIBUTE_SEPARATOR.join(f"{key}: {value}" for key, value in bag.as_dict().items())


def parse_attributes(text: str) -> Dict[str, str]:
    """Inverse of :func:`attributes_to_str`; pairs without ``:`` are skipped."""

    attributes: Dict[str, str] = {}
    for chunk in text.split("|"):
        if not chunk.strip():
            continue
        key, sep, value = chunk.partition(":")
        if not sep:
            logger.warning("skipping malformed attribute '%s'", chunk.strip())
            continue
        attributes[key.strip()] = value.strip()
    return attributes


def _quote(text: str) -> str:
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


@dataclass
class GraphExporter:
    """Serialize the vaults of a store to portable representations."""

    store: GraphStore

    def to_networkx(self, vault_name: Optional[str] = None) -> nx.MultiDiGraph:
        """Project one vault, or every vault when ``vault_name`` is ``None``."""

        if vault_name is None:
            vaults = self.store.get_vaults()
        else:
            vaults = {vault_name: self.store.get_edges(vault_name)}

        graph = nx.MultiDiGraph(name=self.store.get_label())
        for name, edges in vaults.items():
            for edge in edges:
                for vertex in edge.vertices():
                    graph.add_node(
                        vertex.id,
                        label=vertex.label,
                        attributes=vertex.attributes.as_dict(),
                    )
                graph.add_edge(
                    edge.from_vertex.id,
                    edge.to_vertex.id,
                    key=edge.id,
                    relation=edge.relation,
                    vault=name,
                    attributes=edge.attributes.as_dict(),
                )
        return graph

    def export(
        self,
        *,
        format: Literal["csv", "graphviz"] = "csv",
        path: Optional[PathLike] = None,
        filename: Optional[str] = None,
    ) -> Path:
        """Export the store to the requested ``format`` and return the file path."""

        if format == "csv":
            extension = CSV_EXTENSION
        elif format == "graphviz":
            extension = GRAPHVIZ_EXTENSION
        else:
            raise ValueError(f"Unsupported export format: {format}")
        if self.store.is_empty():
            raise VaultEmpty()

        directory = Path(path) if path is not None else Path()
        directory.mkdir(parents=True, exist_ok=True)
        target = directory / f"{filename or self.store.get_label()}{extension}"

        if format == "csv":
            self._write_csv(target)
        else:
            self._write_graphviz(target)
        logger.info("graphs %s exported to %s", self.store.get_label(), target)
        return target

    def _write_csv(self, target: Path) -> None:
        with target.open("w", newline="", encoding="utf-8") as handle:
            writer = csv.DictWriter(handle, fieldnames=CSV_FIELDS, delimiter=get_csv_delimiter())
            writer.writeheader()
            for vault_name, edges in self.store.get_vaults().items():
                for edge in edges:
                    writer.writerow(
                        {
                            "graphs_vault": vault_name,
                            "from_label": edge.from_vertex.label,
                            "from_attributes": attributes_to_str(edge.from_vertex.attributes),
                            "relation": edge.relation,
                            "to_label": edge.to_vertex.label,
                            "to_attributes": attributes_to_str(edge.to_vertex.attributes),
                        }
                    )

    def _write_graphviz(self, target: Path) -> None:
        graph = self.to_networkx()
        lines = ["digraph {"]
        for node_id, data in graph.nodes(data=True):
            tooltip = ATTRIBUTE_SEPARATOR.join(
                f"{key}: {value}" for key, value in data["attributes"].items()
            )
            lines.append(
                f"\t{_quote(node_id)} [label={_quote(data['label'])} tooltip={_quote(tooltip)}];"
            )
        for source, target_id, data in graph.edges(data=True):
            lines.append(
                f"\t{_quote(source)} -> {_quote(target_id)} [label={_quote(data['relation'])}];"
            )
        lines.append("}")
        target.write_text("\n".join(lines) + "\n", encoding="utf-8")


def import_csv(csv_path: PathLike) -> GraphStore:
    """Build a store named after the CSV file from its rows.

    Every vault named in the file is created first, then each row becomes
    an edge between two new vertices.
    """

    path = Path(csv_path)
    name = path.name[: -len(CSV_EXTENSION)] if path.name.endswith(CSV_EXTENSION) else path.stem
    if not name:
        raise InvalidFilenamePath(f"Cannot derive a graphs name from '{csv_path}'")
    if not path.is_file():
        raise FileNotFound(f"CSV file '{path}' does not exist")

    with path.open(newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle, delimiter=get_csv_delimiter(), skipinitialspace=True)
        rows = []
        for row in reader:
            relation = (row.get("relation") or "").strip()
            if not relation:
                raise CsvEdgeMissingRelation(f"Row {reader.line_num} of '{path}' has no relation")
            normalized = {field: (row.get(field) or "").strip() for field in CSV_FIELDS}
            normalized["graphs_vault"] = normalized["graphs_vault"] or name
            rows.append(normalized)
    if not rows:
        raise CsvEmpty(f"CSV file '{path}' has no edges")

    store = GraphStore.init(name)
    for vault_name in dict.fromkeys(row["graphs_vault"] for row in rows):
        store.insert(vault_name)
    for row in rows:
        from_vertex = Vertex(row["from_label"])
        for key, value in parse_attributes(row["from_attributes"]).items():
            from_vertex.set_attr(key, value)
        to_vertex = Vertex(row["to_label"])
        for key, value in parse_attributes(row["to_attributes"]).items():
            to_vertex.set_attr(key, value)
        store.add_edge(Edge.create(from_vertex, row["relation"], to_vertex), row["graphs_vault"])
    return store


__all__ = ["GraphExporter", "attributes_to_str", "import_csv", "parse_attributes"]
