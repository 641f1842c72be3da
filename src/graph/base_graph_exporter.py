# src/graph/base_graph_exporter.py - v1
"""Abstract graph export interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

import networkx as nx

from clusterability.graph.graphology import EDGE_KEY, OPTIONS_KEY, UNDIRECTED_KEY

_RESERVED_KEYS = frozenset({OPTIONS_KEY, EDGE_KEY, UNDIRECTED_KEY})
# Per-attribute defaults networkx readers store and writers read back
_WRITER_GRAPH_KEYS = frozenset({"node_default", "edge_default"})


class BaseGraphExporter(ABC):
    """Unified interface for annotated graph export formats."""

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Export format identifier (e.g., 'json', 'graphml')."""

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Output file extension (e.g., '.json', '.graphml')."""

    @abstractmethod
    def export(self, graph: nx.Graph, output_path: str | Path) -> str:
        """Export graph to file, return path to exported file."""


def xml_safe_copy(
    graph: nx.Graph,
    structured_node_keys: frozenset[str] = frozenset(),
) -> nx.Graph:
    """Copy of ``graph`` for XML writers: reserved keys dropped, values primitive.

    Dict values the writers read themselves are left alone: ``node_default`` /
    ``edge_default`` on the graph and any of ``structured_node_keys`` on nodes
    (GEXF ``viz``). Every other non-primitive value is stringified.
    """

    def _clean(data: dict, structured: frozenset[str] = frozenset()) -> None:
        for k in [k for k in data if k in _RESERVED_KEYS]:
            del data[k]
        for k, v in list(data.items()):
            if v is None:
                del data[k]
            elif k in structured and isinstance(v, dict):
                continue
            elif not isinstance(v, (str, int, float, bool)):
                data[k] = str(v)

    g = graph.copy()
    _clean(g.graph, _WRITER_GRAPH_KEYS)
    for _, data in g.nodes(data=True):
        _clean(data, structured_node_keys)
    for *_, data in g.edges(data=True):
        _clean(data)
    return g
