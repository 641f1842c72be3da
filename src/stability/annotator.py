# src/stability/annotator.py - v1
"""Write stability results back onto graph nodes.

Only merges node attributes; nodes and edges are never added or removed.
"""

from __future__ import annotations

import networkx as nx
import numpy as np

from clusterability.core.models import RatioSummary
from clusterability.stability.ambiguity import AmbiguityResult
from clusterability.stability.ensemble import EnsembleResult

SAME_COMMUNITY_PREFIX = "percentage_neighbors_in_same_community_"
DIVERSITY_PREFIX = "ratio_communities_neighbors_"
AMBIGUITY_ATTRIBUTE = "ambiguity"


def _ratio_attributes(prefix: str, summary: RatioSummary) -> dict[str, float]:
    return {
        f"{prefix}mean": summary.mean,
        f"{prefix}variance": summary.variance,
        f"{prefix}std_deviation": summary.std_deviation,
    }


def annotate_graph(
    graph: nx.Graph,
    ensemble: EnsembleResult,
    ambiguity: AmbiguityResult,
    *,
    pass_label_prefix: str | None = None,
) -> None:
    """Merge proximity statistics and ambiguity into node attributes.

    Args:
        graph: Graph the ensemble ran on.
        ensemble: Ensemble outcome (node order, label codes, proximity).
        ambiguity: Ambiguity scores by node position.
        pass_label_prefix: When set, also store each pass's community code as
            a string attribute ``<prefix><pass>``.
    """
    proximity = ensemble.proximity
    labels: np.ndarray | None = ensemble.labels if pass_label_prefix else None

    for i, node in enumerate(ensemble.index.nodes):
        attrs: dict[str, object] = {}
        attrs.update(_ratio_attributes(SAME_COMMUNITY_PREFIX, proximity.same_community[i]))
        attrs.update(_ratio_attributes(DIVERSITY_PREFIX, proximity.community_diversity[i]))
        attrs[AMBIGUITY_ATTRIBUTE] = float(ambiguity.scores[i])
        if labels is not None:
            for p in range(labels.shape[0]):
                attrs[f"{pass_label_prefix}{p}"] = str(labels[p, i])
        graph.nodes[node].update(attrs)
