# tests/conftest.py - v1
"""Shared test fixtures: small graphs, deterministic stub detectors, settings.

No test here depends on a stochastic detector except the integration suite.
"""

from __future__ import annotations

from collections.abc import Hashable

import networkx as nx
import pytest

from clusterability.config.settings import Settings
from clusterability.detection.base_detector import BaseCommunityDetector
from clusterability.logging.context import clear_context


# === Stub detectors ===


class ConstantDetector(BaseCommunityDetector):
    """Puts every node in the same community on every pass."""

    def __init__(self) -> None:
        self.calls: list[int | None] = []

    @property
    def algorithm_name(self) -> str:
        return "constant"

    def detect(self, graph: nx.Graph, seed: int | None = None) -> dict[Hashable, int]:
        self.calls.append(seed)
        return {node: 0 for node in graph.nodes}


class SingletonDetector(BaseCommunityDetector):
    """Puts every node in its own community on every pass."""

    @property
    def algorithm_name(self) -> str:
        return "singleton"

    def detect(self, graph: nx.Graph, seed: int | None = None) -> dict[Hashable, str]:
        return {node: f"c{node}" for node in graph.nodes}


class AlternatingRingDetector(BaseCommunityDetector):
    """Alternates between one community and a two-colouring of the ring.

    Even calls: every node in community 0. Odd calls: node i in community i % 2,
    so on an even ring every adjacent pair is split. Over an even number of
    passes each adjacent pair agrees exactly half of the time.
    """

    def __init__(self) -> None:
        self._calls = 0

    @property
    def algorithm_name(self) -> str:
        return "alternating"

    def detect(self, graph: nx.Graph, seed: int | None = None) -> dict[Hashable, int]:
        together = self._calls % 2 == 0
        self._calls += 1
        return {node: 0 if together else node % 2 for node in graph.nodes}


class FixedLabelingDetector(BaseCommunityDetector):
    """Replays a fixed sequence of labelings, one per call."""

    def __init__(self, labelings: list[dict[Hashable, Hashable]]) -> None:
        self._labelings = labelings
        self._calls = 0

    @property
    def algorithm_name(self) -> str:
        return "fixed"

    def detect(self, graph: nx.Graph, seed: int | None = None) -> dict[Hashable, Hashable]:
        labeling = self._labelings[self._calls % len(self._labelings)]
        self._calls += 1
        return labeling


# === Fixtures ===


@pytest.fixture(autouse=True)
def _reset_log_context():
    clear_context()
    yield
    clear_context()


@pytest.fixture
def settings() -> Settings:
    """Settings with small, deterministic values and no layout."""
    return Settings(_env_file=None, passes=10, seed=1234, layout_iterations=0)


@pytest.fixture
def ring_graph() -> nx.Graph:
    """Undirected ring of 10 nodes labelled 0..9."""
    return nx.cycle_graph(10)


@pytest.fixture
def two_cliques() -> nx.Graph:
    """Two 5-cliques joined by a single bridge edge (4 - 5)."""
    g = nx.Graph()
    g.add_edges_from((a, b) for a in range(5) for b in range(a + 1, 5))
    g.add_edges_from((a, b) for a in range(5, 10) for b in range(a + 1, 10))
    g.add_edge(4, 5)
    return g


@pytest.fixture
def graphology_document() -> dict:
    """Small mixed multigraph in graphology's export format."""
    return {
        "options": {"type": "mixed", "multi": True, "allowSelfLoops": True},
        "attributes": {"name": "sample"},
        "nodes": [
            {"key": "a", "attributes": {"label": "A", "size": 3}},
            {"key": "b", "attributes": {"label": "B"}},
            {"key": "c", "attributes": {"label": "C"}},
            {"key": "d"},
        ],
        "edges": [
            {"key": "e0", "source": "a", "target": "b", "attributes": {"weight": 2}},
            {"key": "e1", "source": "a", "target": "b", "attributes": {"weight": 1}},
            {"key": "e2", "source": "b", "target": "c", "undirected": True},
            {"source": "c", "target": "a"},
        ],
    }
