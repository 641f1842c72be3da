# src/stability/proximity.py - v1
"""Node proximity statistics: per-pass ratios and their cross-pass reduction.

For one pass and one node v with neighbour set N(v):

    same_community_ratio      = |{u in N(v) : label(u) == label(v)}| / |N(v)|
                                (1 for an isolated node)
    community_diversity_ratio = |labels of N(v) + {v}| / (|N(v)| + 1)

ProximityAggregator folds these per pass into running moments so that only
O(nodes) state survives between passes.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from clusterability.core.models import RatioSummary
from clusterability.core.statistics import RunningMoments
from clusterability.stability.topology import GraphIndex


@dataclass(frozen=True)
class PassStatistics:
    """Per-node ratios for a single pass, indexed by node position."""

    same_community_ratio: np.ndarray
    community_diversity_ratio: np.ndarray


def compute_pass_statistics(index: GraphIndex, codes: np.ndarray) -> PassStatistics:
    """Compute both ratios for every node from one pass's label codes.

    Args:
        index: Graph positional index.
        codes: Non-negative integer community code per node position.
    """
    n = index.node_count
    degree = index.degree

    shared = np.bincount(
        index.src,
        weights=(codes[index.src] == codes[index.dst]).astype(np.float64),
        minlength=n,
    )
    same_ratio = np.ones(n, dtype=np.float64)
    np.divide(shared, degree, out=same_ratio, where=degree > 0)

    # Distinct labels in the closed neighbourhood: unique (node, label) keys
    width = int(codes.max()) + 1 if n else 1
    keys = np.concatenate([
        np.arange(n, dtype=np.int64) * width + codes,
        index.src * width + codes[index.dst],
    ])
    distinct = np.bincount(np.unique(keys) // width, minlength=n)
    diversity_ratio = distinct / (degree + 1)

    return PassStatistics(
        same_community_ratio=same_ratio,
        community_diversity_ratio=diversity_ratio.astype(np.float64),
    )


@dataclass(frozen=True)
class ProximitySummary:
    """Final per-node reduction of both ratio series."""

    same_community: list[RatioSummary]
    community_diversity: list[RatioSummary]


class ProximityAggregator:
    """Accumulates per-pass ratios and reduces them to mean/variance/std."""

    def __init__(self, node_count: int) -> None:
        self._same = RunningMoments(node_count)
        self._diversity = RunningMoments(node_count)

    @property
    def passes(self) -> int:
        return self._same.count

    def add_pass(self, stats: PassStatistics) -> None:
        self._same.update(stats.same_community_ratio)
        self._diversity.update(stats.community_diversity_ratio)

    def finalize(self) -> ProximitySummary:
        """Reduce the folded passes.

        Raises:
            ValueError: If no pass was folded.
        """
        return ProximitySummary(
            same_community=_summaries(self._same),
            community_diversity=_summaries(self._diversity),
        )


def _summaries(moments: RunningMoments) -> list[RatioSummary]:
    means = moments.mean
    variances = moments.variance
    stds = np.sqrt(variances)
    return [
        RatioSummary(mean=float(m), variance=float(v), std_deviation=float(s))
        for m, v, s in zip(means, variances, stds)
    ]
