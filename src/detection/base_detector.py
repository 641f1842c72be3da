# src/detection/base_detector.py - v1
"""Abstract community detector interface.

A detector is a one-shot, randomized clustering call: given a graph and an
optional seed it returns a mapping from every node to a community label.
Labels only carry meaning inside one call (co-membership), never across calls.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Hashable, Mapping
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import networkx as nx

Labeling = Mapping[Hashable, Hashable]


class DetectionError(Exception):
    """Raised when a detector returns a labeling that breaks its contract."""


class BaseCommunityDetector(ABC):
    """Unified interface for community detection backends."""

    @property
    @abstractmethod
    def algorithm_name(self) -> str:
        """Algorithm identifier (e.g., 'louvain', 'leiden')."""

    @abstractmethod
    def detect(self, graph: nx.Graph, seed: int | None = None) -> Labeling:
        """Partition ``graph`` and return ``{node: community_label}``."""


def communities_to_labeling(communities: list) -> dict[Hashable, int]:
    """Convert a list of node collections into ``{node: community_index}``."""
    labeling: dict[Hashable, int] = {}
    for cid, members in enumerate(communities):
        for node in members:
            labeling[node] = cid
    return labeling
