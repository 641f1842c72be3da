# src/graph/exporters/graphml_exporter.py - v1
"""GraphML exporter for standard interchange."""

from __future__ import annotations

from pathlib import Path

import networkx as nx

from clusterability.graph.base_graph_exporter import BaseGraphExporter, xml_safe_copy


class GraphMLExporter(BaseGraphExporter):
    """Export graph to GraphML format."""

    @property
    def format_name(self) -> str:
        return "graphml"

    @property
    def file_extension(self) -> str:
        return ".graphml"

    def export(self, graph: nx.Graph, output_path: str | Path) -> str:
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        nx.write_graphml(xml_safe_copy(graph), str(path))
        return str(path)
