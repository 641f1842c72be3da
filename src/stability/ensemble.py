# src/stability/ensemble.py - v1
"""Ensemble runner: N independent detection passes over one graph.

Each pass gets its own seed spawned from a single SeedSequence. A pass's
labeling is encoded to integer codes and folded into the proximity aggregate
before the next pass is consumed; the only per-pass data kept is the compact
label-code row the pairwise estimator needs.

With ``workers > 1`` detection runs in a process pool; results are still
merged here, in pass order, one completed pass at a time.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Iterator
from concurrent.futures import ProcessPoolExecutor
from contextlib import closing
from dataclasses import dataclass
from itertools import repeat

import networkx as nx
import numpy as np

from clusterability.config.settings import ConfigurationError
from clusterability.detection.base_detector import (
    BaseCommunityDetector,
    DetectionError,
    Labeling,
)
from clusterability.logging.context import set_phase_context
from clusterability.stability.proximity import (
    ProximityAggregator,
    ProximitySummary,
    compute_pass_statistics,
)
from clusterability.stability.topology import GraphIndex, build_graph_index

logger = logging.getLogger(__name__)

_PROGRESS_EVERY = 50

# Community codes per pass never exceed the node count
LABEL_DTYPE = np.int32


@dataclass(frozen=True)
class EnsembleResult:
    """Outcome of the ensemble loop.

    ``labels`` has shape (passes, node_count); row i holds pass i's community
    codes by node position.
    """

    index: GraphIndex
    labels: np.ndarray
    proximity: ProximitySummary

    @property
    def passes(self) -> int:
        return self.labels.shape[0]


def spawn_seeds(seed: int | None, count: int) -> list[int]:
    """Derive ``count`` independent non-negative 31-bit seeds from ``seed``."""
    children = np.random.SeedSequence(seed).spawn(count)
    return [int(child.generate_state(1)[0] >> 1) for child in children]


def encode_labeling(nodes: list[Hashable], labeling: Labeling) -> np.ndarray:
    """Map a labeling onto dense integer codes in node order.

    Codes are assigned in order of first appearance; only equality between
    codes of the same pass is meaningful.

    Raises:
        DetectionError: If a node has no label.
    """
    codes = np.empty(len(nodes), dtype=np.int64)
    code_of: dict[Hashable, int] = {}
    for i, node in enumerate(nodes):
        try:
            label = labeling[node]
        except KeyError:
            missing = sum(1 for n in nodes if n not in labeling)
            raise DetectionError(
                f"Detector returned no community for {missing} node(s), e.g. {node!r}"
            ) from None
        codes[i] = code_of.setdefault(label, len(code_of))
    return codes


def run_ensemble(
    graph: nx.Graph,
    detector: BaseCommunityDetector,
    passes: int,
    *,
    seed: int | None = None,
    workers: int = 1,
) -> EnsembleResult:
    """Run ``passes`` detections and aggregate per-node proximity ratios.

    Args:
        graph: Graph to cluster (not modified).
        detector: Community detection backend.
        passes: Number of independent passes (>= 1).
        seed: Root seed for the per-pass seeds (None = OS entropy).
        workers: Number of worker processes for detection.

    Returns:
        EnsembleResult with label codes and the proximity summary.

    Raises:
        ConfigurationError: If ``passes`` or ``workers`` is below 1.
    """
    if passes < 1:
        raise ConfigurationError(f"passes must be >= 1 (got {passes})")
    if workers < 1:
        raise ConfigurationError(f"workers must be >= 1 (got {workers})")

    index = build_graph_index(graph)
    aggregator = ProximityAggregator(index.node_count)
    labels = np.empty((passes, index.node_count), dtype=LABEL_DTYPE)
    seeds = spawn_seeds(seed, passes)

    logger.info(
        "Running %d %s passes on %d nodes (workers=%d)",
        passes, detector.algorithm_name, index.node_count, workers,
    )

    with closing(_iter_labelings(graph, detector, seeds, workers)) as labelings:
        for i, labeling in enumerate(labelings):
            set_phase_context("ensemble", pass_index=i)
            codes = encode_labeling(index.nodes, labeling)
            aggregator.add_pass(compute_pass_statistics(index, codes))
            labels[i] = codes
            if (i + 1) % _PROGRESS_EVERY == 0 or i + 1 == passes:
                logger.debug("Completed pass %d/%d", i + 1, passes)

    set_phase_context("ensemble")
    return EnsembleResult(index=index, labels=labels, proximity=aggregator.finalize())


def _iter_labelings(
    graph: nx.Graph,
    detector: BaseCommunityDetector,
    seeds: list[int],
    workers: int,
) -> Iterator[Labeling]:
    """Yield one labeling per seed, in seed order."""
    if workers == 1:
        for s in seeds:
            yield detector.detect(graph, seed=s)
        return

    pool = ProcessPoolExecutor(max_workers=workers)
    try:
        yield from pool.map(
            _detect_one,
            repeat(detector),
            repeat(graph),
            seeds,
            chunksize=max(1, len(seeds) // (workers * 4)),
        )
    except BaseException:
        # Consumer stopped early (e.g. DetectionError): drop queued passes
        pool.shutdown(wait=False, cancel_futures=True)
        raise
    pool.shutdown()


def _detect_one(
    detector: BaseCommunityDetector, graph: nx.Graph, seed: int
) -> Labeling:
    return detector.detect(graph, seed=seed)
