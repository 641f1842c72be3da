# src/graph/graphology.py - v1
"""Codec for graphology's serialized graph format.

Document shape (as produced by graphology's ``graph.export()``)::

    {
      "options": {"type": "mixed", "multi": false, "allowSelfLoops": true},
      "attributes": {...},
      "nodes": [{"key": "a", "attributes": {...}}, ...],
      "edges": [{"key": "e0", "source": "a", "target": "b",
                 "attributes": {...}, "undirected": true}, ...]
    }

Graph type mapping: "undirected" -> Graph/MultiGraph, "directed" and "mixed"
-> DiGraph/MultiDiGraph. Bookkeeping that networkx has no slot for (the
declared options, explicit edge keys, the per-edge undirected flag of mixed
graphs) is kept under reserved keys and stripped again on export.
"""

from __future__ import annotations

import logging
from typing import Any

import networkx as nx

logger = logging.getLogger(__name__)

OPTIONS_KEY = "__graphology_options__"
EDGE_KEY = "__graphology_key__"
UNDIRECTED_KEY = "__graphology_undirected__"

_GRAPH_TYPES = ("mixed", "directed", "undirected")


class GraphologyFormatError(ValueError):
    """Raised when a document does not follow the graphology format."""


def graph_from_graphology(data: Any) -> nx.Graph:
    """Build a networkx graph from a parsed graphology document."""
    if not isinstance(data, dict):
        raise GraphologyFormatError(
            f"Expected a JSON object at top level, got {type(data).__name__}"
        )

    options = data.get("options") or {}
    if not isinstance(options, dict):
        raise GraphologyFormatError("'options' must be an object")
    graph_type = options.get("type", "mixed")
    if graph_type not in _GRAPH_TYPES:
        raise GraphologyFormatError(f"Unknown graph type {graph_type!r}")

    nodes = data.get("nodes", [])
    edges = data.get("edges", [])
    if not isinstance(nodes, list) or not isinstance(edges, list):
        raise GraphologyFormatError("'nodes' and 'edges' must be arrays")

    multi = bool(options.get("multi", False)) or _has_parallel_edges(edges, graph_type)
    if multi and not options.get("multi", False):
        logger.warning("Document declares a simple graph but has parallel edges; loading as multigraph")

    directed = graph_type != "undirected"
    if directed:
        graph: nx.Graph = nx.MultiDiGraph() if multi else nx.DiGraph()
    else:
        graph = nx.MultiGraph() if multi else nx.Graph()

    attributes = data.get("attributes") or {}
    if not isinstance(attributes, dict):
        raise GraphologyFormatError("'attributes' must be an object")
    graph.graph.update(attributes)
    graph.graph[OPTIONS_KEY] = {
        "type": graph_type,
        "multi": bool(options.get("multi", False)),
        "allowSelfLoops": bool(options.get("allowSelfLoops", True)),
    }

    for i, record in enumerate(nodes):
        if not isinstance(record, dict) or "key" not in record:
            raise GraphologyFormatError(f"Node #{i} has no 'key'")
        graph.add_node(record["key"], **(record.get("attributes") or {}))

    for i, record in enumerate(edges):
        if not isinstance(record, dict) or "source" not in record or "target" not in record:
            raise GraphologyFormatError(f"Edge #{i} needs 'source' and 'target'")
        source, target = record["source"], record["target"]
        for endpoint in (source, target):
            if endpoint not in graph:
                raise GraphologyFormatError(
                    f"Edge #{i} references unknown node {endpoint!r}"
                )
        attrs = dict(record.get("attributes") or {})
        if "key" in record:
            attrs[EDGE_KEY] = record["key"]
        if graph_type == "mixed" and record.get("undirected"):
            attrs[UNDIRECTED_KEY] = True
        graph.add_edge(source, target, **attrs)

    return graph


def graph_to_graphology(graph: nx.Graph) -> dict[str, Any]:
    """Serialize a networkx graph to a graphology document."""
    stored = graph.graph.get(OPTIONS_KEY)
    if stored:
        options = dict(stored)
        options["multi"] = bool(options.get("multi")) or graph.is_multigraph()
    else:
        options = {
            "type": "directed" if graph.is_directed() else "undirected",
            "multi": graph.is_multigraph(),
            "allowSelfLoops": True,
        }

    attributes = {k: v for k, v in graph.graph.items() if k != OPTIONS_KEY}

    nodes = [
        {"key": node, "attributes": dict(data)}
        for node, data in graph.nodes(data=True)
    ]

    edges: list[dict[str, Any]] = []
    for source, target, data in graph.edges(data=True):
        record: dict[str, Any] = {}
        attrs = dict(data)
        if EDGE_KEY in attrs:
            record["key"] = attrs.pop(EDGE_KEY)
        undirected = attrs.pop(UNDIRECTED_KEY, False)
        record["source"] = source
        record["target"] = target
        record["attributes"] = attrs
        if options["type"] == "undirected" or undirected:
            record["undirected"] = True
        edges.append(record)

    return {
        "options": options,
        "attributes": attributes,
        "nodes": nodes,
        "edges": edges,
    }


def _has_parallel_edges(edges: list, graph_type: str) -> bool:
    seen: set[tuple] = set()
    for record in edges:
        if not isinstance(record, dict):
            continue
        source, target = record.get("source"), record.get("target")
        undirected = graph_type == "undirected" or record.get("undirected")
        key = tuple(sorted((str(source), str(target)))) if undirected else (str(source), str(target))
        if key in seen:
            return True
        seen.add(key)
    return False
