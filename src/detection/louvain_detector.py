# src/detection/louvain_detector.py - v1
"""Louvain modularity clustering via NetworkX.

Handles simple, multi- and directed graphs (NetworkX collapses parallel edges
into summed weights and uses directed modularity for digraphs).
"""

from __future__ import annotations

import logging
from collections.abc import Hashable

import networkx as nx

from clusterability.detection.base_detector import (
    BaseCommunityDetector,
    communities_to_labeling,
)

logger = logging.getLogger(__name__)


class LouvainDetector(BaseCommunityDetector):
    """Randomized Louvain detector.

    Args:
        resolution: Modularity resolution (higher = more, smaller communities).
        threshold: Minimum modularity gain to keep iterating.
        weight: Edge attribute holding weights (missing attribute counts as 1).
    """

    def __init__(
        self,
        resolution: float = 1.0,
        threshold: float = 1e-7,
        weight: str | None = "weight",
    ) -> None:
        self.resolution = resolution
        self.threshold = threshold
        self.weight = weight

    @property
    def algorithm_name(self) -> str:
        return "louvain"

    def detect(self, graph: nx.Graph, seed: int | None = None) -> dict[Hashable, int]:
        if graph.number_of_nodes() == 0:
            return {}

        communities = nx.community.louvain_communities(
            graph,
            weight=self.weight,
            resolution=self.resolution,
            threshold=self.threshold,
            seed=seed,
        )
        logger.debug("Louvain found %d communities (seed=%s)", len(communities), seed)
        return communities_to_labeling(communities)
