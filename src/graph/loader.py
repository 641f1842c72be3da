# src/graph/loader.py - v1
"""Read a graph document from disk, choosing the reader by file extension.

Supported: graphology JSON (.json), GEXF (.gexf), GraphML (.graphml).
Any failure surfaces as GraphLoadError so callers have one fatal error to
report.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from xml.etree.ElementTree import ParseError

import networkx as nx

from clusterability.graph.graphology import GraphologyFormatError, graph_from_graphology

logger = logging.getLogger(__name__)

FORMAT_BY_SUFFIX: dict[str, str] = {
    ".json": "json",
    ".gexf": "gexf",
    ".graphml": "graphml",
}


class GraphLoadError(Exception):
    """Raised when an input graph document cannot be read or parsed."""


def detect_format(path: Path) -> str | None:
    """Graph format name for ``path``'s extension, or None if unsupported."""
    return FORMAT_BY_SUFFIX.get(path.suffix.lower())


def load_graph(path: str | Path) -> nx.Graph:
    """Load a graph document.

    Raises:
        GraphLoadError: If the file is missing, unreadable, of an unsupported
            type, or malformed.
    """
    path = Path(path)
    fmt = detect_format(path)
    if fmt is None:
        raise GraphLoadError(
            f"Unsupported graph format {path.suffix!r} for {path} "
            f"(expected one of {', '.join(sorted(FORMAT_BY_SUFFIX))})"
        )
    if not path.is_file():
        raise GraphLoadError(f"Graph file not found: {path}")

    try:
        if fmt == "json":
            with path.open(encoding="utf-8") as fh:
                graph = graph_from_graphology(json.load(fh))
        elif fmt == "gexf":
            graph = nx.read_gexf(path)
        else:
            graph = nx.read_graphml(path)
    except (OSError, UnicodeDecodeError) as exc:
        raise GraphLoadError(f"Cannot read {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise GraphLoadError(f"Invalid JSON in {path}: {exc}") from exc
    except (GraphologyFormatError, ParseError, nx.NetworkXError) as exc:
        raise GraphLoadError(f"Malformed graph document {path}: {exc}") from exc

    logger.info(
        "Loaded %s graph from %s: %d nodes, %d edges",
        fmt, path.name, graph.number_of_nodes(), graph.number_of_edges(),
    )
    return graph
