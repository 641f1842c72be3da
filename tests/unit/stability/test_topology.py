# tests/unit/stability/test_topology.py - v1
"""Tests for stability/topology.py: GraphIndex construction."""

from __future__ import annotations

import networkx as nx

from clusterability.core.models import NodePair
from clusterability.stability.topology import build_graph_index


class TestBuildGraphIndex:
    def test_positions_follow_iteration_order(self):
        g = nx.Graph()
        g.add_nodes_from(["z", "a", "m"])
        index = build_graph_index(g)
        assert index.nodes == ["z", "a", "m"]
        assert index.positions == {"z": 0, "a": 1, "m": 2}

    def test_ring_degrees_and_pairs(self, ring_graph):
        index = build_graph_index(ring_graph)
        assert index.degree.tolist() == [2] * 10
        assert len(index.edge_pairs) == 10
        assert len(index.src) == len(index.dst) == 20

    def test_parallel_edges_collapsed(self):
        g = nx.MultiGraph()
        g.add_edge("a", "b")
        g.add_edge("a", "b")
        g.add_edge("b", "a")
        index = build_graph_index(g)
        assert index.edge_pairs == [NodePair.of(0, 1)]
        assert index.degree.tolist() == [1, 1]

    def test_directed_both_orientations_collapsed(self):
        g = nx.DiGraph()
        g.add_edge("a", "b")
        g.add_edge("b", "a")
        g.add_edge("c", "a")
        index = build_graph_index(g)
        assert len(index.edge_pairs) == 2
        # predecessors count as neighbours
        assert index.degree.tolist() == [2, 1, 1]

    def test_self_loops_ignored(self):
        g = nx.Graph()
        g.add_edge(1, 1)
        g.add_edge(1, 2)
        index = build_graph_index(g)
        assert index.edge_pairs == [NodePair.of(0, 1)]
        assert index.degree.tolist() == [1, 1]

    def test_isolated_nodes(self):
        g = nx.empty_graph(4)
        index = build_graph_index(g)
        assert index.edge_pairs == []
        assert index.degree.tolist() == [0, 0, 0, 0]
        assert index.pair_capacity == 6

    def test_empty_graph(self):
        index = build_graph_index(nx.Graph())
        assert index.node_count == 0
        assert index.pair_capacity == 0
        assert index.degree.tolist() == []
