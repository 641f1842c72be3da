# src/graph/exporters/gexf_exporter.py - v1
"""GEXF exporter for Gephi."""

from __future__ import annotations

from pathlib import Path

import networkx as nx

from clusterability.graph.base_graph_exporter import BaseGraphExporter, xml_safe_copy

# Node attribute the GEXF writer serializes itself (position, size, colour)
_VIZ_KEYS = frozenset({"viz"})


class GexfExporter(BaseGraphExporter):
    """Export graph to GEXF format (Gephi compatible)."""

    @property
    def format_name(self) -> str:
        return "gexf"

    @property
    def file_extension(self) -> str:
        return ".gexf"

    def export(self, graph: nx.Graph, output_path: str | Path) -> str:
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        nx.write_gexf(xml_safe_copy(graph, _VIZ_KEYS), str(path))
        return str(path)
