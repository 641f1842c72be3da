# src/stability/topology.py - v1
"""Positional view of a graph's neighbourhood structure.

Captures the node order once per run and exposes the undirected neighbour
relation as parallel index arrays. Direction is ignored, parallel edges are
collapsed and self loops are dropped, so the same structure serves both the
proximity ratios and the adjacent-pair enumeration.
"""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass

import networkx as nx
import numpy as np

from clusterability.core.models import NodePair


@dataclass(frozen=True)
class GraphIndex:
    """Stable node ordering plus the deduplicated undirected adjacency.

    ``src[k] -> dst[k]`` lists every neighbour relation in both directions.
    ``edge_pairs`` lists every adjacent pair once, in first-seen edge order.
    """

    nodes: list[Hashable]
    positions: dict[Hashable, int]
    src: np.ndarray
    dst: np.ndarray
    degree: np.ndarray
    edge_pairs: list[NodePair]

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def pair_capacity(self) -> int:
        """Number of distinct unordered non-self pairs."""
        n = self.node_count
        return n * (n - 1) // 2


def build_graph_index(graph: nx.Graph) -> GraphIndex:
    """Index ``graph`` nodes by iteration order and collect adjacent pairs."""
    nodes = list(graph.nodes())
    positions = {node: i for i, node in enumerate(nodes)}

    seen: set[NodePair] = set()
    edge_pairs: list[NodePair] = []
    for u, v in graph.edges():
        if u == v:
            continue
        pair = NodePair.of(positions[u], positions[v])
        if pair not in seen:
            seen.add(pair)
            edge_pairs.append(pair)

    if edge_pairs:
        low = np.fromiter((p.low for p in edge_pairs), dtype=np.int64, count=len(edge_pairs))
        high = np.fromiter((p.high for p in edge_pairs), dtype=np.int64, count=len(edge_pairs))
        src = np.concatenate([low, high])
        dst = np.concatenate([high, low])
    else:
        src = np.empty(0, dtype=np.int64)
        dst = np.empty(0, dtype=np.int64)

    degree = np.bincount(src, minlength=len(nodes)).astype(np.int64)

    return GraphIndex(
        nodes=nodes,
        positions=positions,
        src=src,
        dst=dst,
        degree=degree,
        edge_pairs=edge_pairs,
    )
