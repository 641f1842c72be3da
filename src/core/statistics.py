# src/core/statistics.py - v1
"""Mean / population variance / std deviation reductions.

Two flavours:
- series helpers (mean, variance, std_deviation) over a finished sequence,
- RunningMoments, a vectorised Welford accumulator that folds one value per
  node per pass so per-pass series never have to be kept.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean.

    Raises:
        ValueError: If ``values`` is empty.
    """
    if len(values) == 0:
        raise ValueError("mean() of an empty series is undefined")
    return math.fsum(values) / len(values)


def variance(values: Sequence[float], average: float | None = None) -> float:
    """Population variance (mean of squared deviations from the mean)."""
    if len(values) == 0:
        raise ValueError("variance() of an empty series is undefined")
    if average is None:
        average = mean(values)
    return mean([(v - average) ** 2 for v in values])


def std_deviation(values: Sequence[float], values_variance: float | None = None) -> float:
    """Population standard deviation."""
    if len(values) == 0:
        raise ValueError("std_deviation() of an empty series is undefined")
    if values_variance is None:
        values_variance = variance(values)
    return math.sqrt(values_variance)


class RunningMoments:
    """Welford running mean / population variance for ``size`` parallel series.

    Each ``update`` folds one observation per series. A series that only ever
    sees the same value keeps a variance of exactly 0.
    """

    def __init__(self, size: int) -> None:
        self._count = 0
        self._mean = np.zeros(size, dtype=np.float64)
        self._m2 = np.zeros(size, dtype=np.float64)

    @property
    def count(self) -> int:
        return self._count

    @property
    def size(self) -> int:
        return self._mean.shape[0]

    def update(self, values: np.ndarray) -> None:
        """Fold one observation for every series."""
        values = np.asarray(values, dtype=np.float64)
        if values.shape != self._mean.shape:
            raise ValueError(
                f"Expected {self._mean.shape[0]} values, got shape {values.shape}"
            )
        self._count += 1
        delta = values - self._mean
        self._mean += delta / self._count
        self._m2 += delta * (values - self._mean)

    def _require_observations(self) -> None:
        if self._count == 0:
            raise ValueError("No observations folded; moments are undefined")

    @property
    def mean(self) -> np.ndarray:
        self._require_observations()
        return self._mean.copy()

    @property
    def variance(self) -> np.ndarray:
        self._require_observations()
        return self._m2 / self._count

    @property
    def std_deviation(self) -> np.ndarray:
        return np.sqrt(self.variance)
