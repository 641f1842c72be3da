# src/stability/ambiguity.py - v1
"""Pairwise ambiguity estimator.

For a node pair with share s = (passes where both share a community) / N,
the agreement index is the Herfindahl-Hirschman concentration of the
(together, apart) split:

    index = s**2 + (1 - s)**2 = 2 * (s - 1/2)**2 + 1/2

which is 1 for pairs that are always together or always apart and 1/2 for a
coin-flip pair. Each evaluated pair adds (1 - index) / node_count to both of
its endpoints.

Evaluated pairs are every adjacent pair plus a uniform sample of
non-adjacent pairs sized by a SamplingPolicy, so the cost stays near
O(n log n) instead of O(n^2).
"""

from __future__ import annotations

import itertools
import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from clusterability.core.models import NodePair, SamplingPolicy
from clusterability.stability.topology import GraphIndex

logger = logging.getLogger(__name__)

# Pairs per vectorised agreement batch (bounds the passes x batch temp array)
_BATCH_SIZE = 1 << 15


def agreement_index(agree_count: int, passes: int) -> float:
    """Agreement index in [1/2, 1] for one pair."""
    if passes < 1:
        raise ValueError(f"passes must be >= 1 (got {passes})")
    share = agree_count / passes
    return 2 * (share - 0.5) ** 2 + 0.5


def ambiguity_contribution(agree_count: int, passes: int, node_count: int) -> float:
    """Amount a single pair adds to each endpoint's ambiguity score."""
    return (1 - agreement_index(agree_count, passes)) / node_count


@dataclass(frozen=True)
class PairSelection:
    """Pairs chosen for evaluation."""

    edge_pairs: list[NodePair]
    sampled_pairs: list[NodePair]
    target: int

    @property
    def pairs(self) -> list[NodePair]:
        return self.edge_pairs + self.sampled_pairs


@dataclass(frozen=True)
class AmbiguityResult:
    """Per-node ambiguity scores (by node position) plus selection stats."""

    scores: np.ndarray
    edge_pairs: int
    sampled_pairs: int
    target: int


def select_pairs(
    index: GraphIndex,
    target: int,
    rng: random.Random,
) -> PairSelection:
    """Pick adjacent pairs plus up to ``target`` distinct non-adjacent pairs.

    The sample is capped at the number of pairs not already taken, so the
    selection always terminates, even on complete graphs.
    """
    edge_pairs = list(index.edge_pairs)
    taken: set[NodePair] = set(edge_pairs)
    remaining = index.pair_capacity - len(taken)
    want = min(max(target, 0), remaining)

    if want <= 0:
        if target > 0:
            logger.debug("No non-adjacent pairs left to sample (target=%d)", target)
        return PairSelection(edge_pairs=edge_pairs, sampled_pairs=[], target=target)

    n = index.node_count
    if 2 * want >= remaining:
        # Dense request: draw straight from the complement
        pool = [
            pair
            for pair in (NodePair(a, b) for a, b in itertools.combinations(range(n), 2))
            if pair not in taken
        ]
        sampled = rng.sample(pool, want)
    else:
        sampled = []
        while len(sampled) < want:
            a = rng.randrange(n)
            b = rng.randrange(n)
            if a == b:
                continue
            pair = NodePair.of(a, b)
            if pair in taken:
                continue
            taken.add(pair)
            sampled.append(pair)

    if want < target:
        logger.info(
            "Sample target %d exceeds available pairs; sampled %d", target, want
        )
    return PairSelection(edge_pairs=edge_pairs, sampled_pairs=sampled, target=target)


def agreement_counts(labels: np.ndarray, pairs: Sequence[NodePair]) -> np.ndarray:
    """Number of passes in which each pair shares a community.

    Args:
        labels: (passes, node_count) label codes.
        pairs: Pairs to score.
    """
    counts = np.empty(len(pairs), dtype=np.int64)
    for start in range(0, len(pairs), _BATCH_SIZE):
        batch = pairs[start:start + _BATCH_SIZE]
        low = np.fromiter((p.low for p in batch), dtype=np.int64, count=len(batch))
        high = np.fromiter((p.high for p in batch), dtype=np.int64, count=len(batch))
        counts[start:start + len(batch)] = (labels[:, low] == labels[:, high]).sum(axis=0)
    return counts


def pair_contributions(
    labels: np.ndarray, pairs: Sequence[NodePair], node_count: int
) -> np.ndarray:
    """Per-pair ambiguity contribution ``(1 - index) / node_count``."""
    passes = labels.shape[0]
    if passes < 1:
        raise ValueError("Ambiguity needs at least one pass")
    share = agreement_counts(labels, pairs) / passes
    index = 2 * (share - 0.5) ** 2 + 0.5
    return (1 - index) / node_count


def estimate_ambiguity(
    index: GraphIndex,
    labels: np.ndarray,
    policy: SamplingPolicy,
    rng: random.Random,
) -> AmbiguityResult:
    """Score every node's ambiguity from the ensemble's label codes."""
    n = index.node_count
    target = policy.target(n)
    selection = select_pairs(index, target, rng)
    pairs = selection.pairs

    scores = np.zeros(n, dtype=np.float64)
    if pairs:
        contrib = pair_contributions(labels, pairs, n)
        low = np.fromiter((p.low for p in pairs), dtype=np.int64, count=len(pairs))
        high = np.fromiter((p.high for p in pairs), dtype=np.int64, count=len(pairs))
        scores += np.bincount(low, weights=contrib, minlength=n)
        scores += np.bincount(high, weights=contrib, minlength=n)

    logger.info(
        "Evaluated %d pairs (%d adjacent, %d sampled, target %d)",
        len(pairs), len(selection.edge_pairs), len(selection.sampled_pairs), target,
    )
    return AmbiguityResult(
        scores=scores,
        edge_pairs=len(selection.edge_pairs),
        sampled_pairs=len(selection.sampled_pairs),
        target=target,
    )
