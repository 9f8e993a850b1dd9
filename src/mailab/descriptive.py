"""
Small descriptive statistics used by campaign diagnostics.

- coefficient_of_variation: how noisy a series is relative to its level,
  for example daily call counts across a campaign
- percentile: a point of the distribution, for example the 90th percentile
  of days from mail drop to signed contract
"""

from __future__ import annotations

import math
from typing import Iterable


def coefficient_of_variation(values: Iterable[float]) -> float:
    """
    Population standard deviation divided by the mean.

    Returns 0.0 for an empty series or a zero mean.
    """
    xs = [float(v) for v in values]
    if len(xs) == 0:
        return 0.0

    mean = sum(xs) / len(xs)
    if mean == 0.0:
        return 0.0

    variance = sum((x - mean) ** 2 for x in xs) / len(xs)
    return math.sqrt(variance) / mean


def percentile(values: Iterable[float], p: float) -> float:
    """
    p-th percentile (p from 0 to 100), interpolating linearly between ranks.

    Example:
        percentile([1, 2, 3, 4], 50) -> 2.5

    Returns 0.0 for an empty series.
    """
    xs = sorted(float(v) for v in values)
    if len(xs) == 0:
        return 0.0
    if not (0.0 <= p <= 100.0):
        raise ValueError("p must be between 0 and 100.")

    index = (p / 100.0) * (len(xs) - 1)
    lower = math.floor(index)
    upper = math.ceil(index)
    if lower == upper:
        return xs[lower]
    return xs[lower] + (index - lower) * (xs[upper] - xs[lower])
