"""
Multiple comparison corrections.

Why this matters
----------------
A mail experiment often tests more than one variant against the control:

- control letter vs. postcard
- control letter vs. handwritten-style letter
- control letter vs. letter with a higher offer percentage

Each comparison gets its own p-value. If each is judged against alpha = 0.05,
the chance that *at least one* variant looks like a winner purely by luck grows
with the number of variants.

Bonferroni keeps that family-wise error rate at alpha by splitting alpha
evenly across the m comparisons. Only comparisons against the control are
counted (m = variant_count - 1), not every pair of variants.

Two equivalent views are provided:
- bonferroni_alpha: shrink the threshold (used when planning sample sizes)
- bonferroni:       inflate the p-values (reported next to raw p-values)
"""

from __future__ import annotations

from typing import Iterable, List

from .errors import InvalidDesignError


def bonferroni_alpha(alpha: float, comparisons: int) -> float:
    """Per-comparison significance level: alpha / comparisons."""
    if comparisons < 1:
        raise InvalidDesignError("comparisons", comparisons, "must be at least 1")
    return alpha / comparisons


def _to_pvalues(p_values: Iterable[float]) -> List[float]:
    p = [float(x) for x in p_values]
    if len(p) == 0:
        raise ValueError("p_values must contain at least 1 value.")
    for x in p:
        if x < 0.0 or x > 1.0:
            raise ValueError("All p-values must be between 0 and 1.")
    return p


def bonferroni(p_values: Iterable[float]) -> List[float]:
    """
    Bonferroni-adjust p-values.

    If m tests are performed, Bonferroni multiplies each p-value by m:

        p_adj = min(1, p * m)

    Comparing p_adj to alpha is the same as comparing p to bonferroni_alpha(alpha, m).
    """
    p = _to_pvalues(p_values)
    m = len(p)
    return [min(1.0, x * m) for x in p]
