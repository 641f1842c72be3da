# src/graph/exporters/json_exporter.py - v1
"""graphology JSON exporter (same document shape the loader reads)."""

from __future__ import annotations

import json
from pathlib import Path

import networkx as nx

from clusterability.graph.base_graph_exporter import BaseGraphExporter
from clusterability.graph.graphology import graph_to_graphology


class JsonExporter(BaseGraphExporter):
    """Export graph to graphology's serialized JSON format."""

    @property
    def format_name(self) -> str:
        return "json"

    @property
    def file_extension(self) -> str:
        return ".json"

    def export(self, graph: nx.Graph, output_path: str | Path) -> str:
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        data = graph_to_graphology(graph)
        path.write_text(json.dumps(data, ensure_ascii=False, default=str), encoding="utf-8")
        return str(path)
