# src/core/models.py - v1
"""Core domain models: NodePair, SamplingPolicy, RatioSummary, StabilityReport.

Pydantic models describe run configuration and results; hot-path value types
(NodePair) are frozen dataclasses.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from pydantic import BaseModel, Field


@dataclass(frozen=True, slots=True)
class NodePair:
    """Unordered pair of node positions in canonical (low, high) order.

    Positions index the run's stable node ordering, so two pairs built from
    the same nodes in either order compare and hash equal.
    """

    low: int
    high: int

    def __post_init__(self) -> None:
        if self.low == self.high:
            raise ValueError(f"Self pair is not a valid node pair: {self.low}")
        if self.low > self.high:
            raise ValueError(
                f"NodePair must be canonical (low < high), got ({self.low}, {self.high}); "
                "use NodePair.of()"
            )

    @classmethod
    def of(cls, a: int, b: int) -> NodePair:
        """Build the canonical pair for positions ``a`` and ``b``."""
        if a > b:
            a, b = b, a
        return cls(a, b)


class SamplingPolicy(BaseModel):
    """Sample-size policy for non-adjacent node pairs.

    target = ceil(min(max(floor, log_factor * ln(n)), n - 1) * n)
    """

    floor: float = Field(default=50.0, ge=0)
    log_factor: float = Field(default=10.0, ge=0)

    def target(self, node_count: int) -> int:
        """Number of non-adjacent pairs to sample for a graph of ``node_count`` nodes."""
        if node_count < 2:
            return 0
        per_node = min(max(self.floor, self.log_factor * math.log(node_count)), node_count - 1)
        return math.ceil(per_node * node_count)


class RatioSummary(BaseModel):
    """Mean / population variance / std deviation of one per-pass ratio series."""

    mean: float
    variance: float
    std_deviation: float


class PhaseTiming(BaseModel):
    """Wall-clock duration of one pipeline phase."""

    phase: str
    seconds: float


class StabilityReport(BaseModel):
    """Summary of one stability run."""

    run_id: str
    node_count: int
    edge_count: int
    density: float
    passes: int
    detector: str
    edge_pairs: int = 0
    sampled_pairs: int = 0
    sample_target: int = 0
    layout_iterations: int = 0
    timings: list[PhaseTiming] = Field(default_factory=list)
    output_paths: list[str] = Field(default_factory=list)

    @property
    def evaluated_pairs(self) -> int:
        return self.edge_pairs + self.sampled_pairs

    @property
    def total_seconds(self) -> float:
        return sum(t.seconds for t in self.timings)
