"""
Exceptions raised by mailab.

Everything here also inherits from ValueError, so code that already does
`except ValueError` around a calculation keeps working.

Only caller bugs raise. States that happen naturally at the start of a
campaign (nothing delivered yet, zero calls) are answered with fallback values
instead, see `mailab.proportions`.
"""

from __future__ import annotations


class ExperimentStatsError(Exception):
    """Base class for all mailab errors."""


class ProbabilityDomainError(ExperimentStatsError, ValueError):
    """A probability argument was outside the open interval (0, 1)."""

    def __init__(self, name: str, value: float):
        super().__init__(f"{name} must be between 0 and 1 (exclusive), got {value!r}.")
        self.name = name
        self.value = value


class UndefinedEffectSizeError(ExperimentStatsError, ValueError):
    """
    A sample size formula cannot be evaluated for the given rates.

    Attributes:
        baseline_rate: the baseline (control) rate used
        target_rate: baseline_rate * (1 + mde)
    """

    def __init__(self, message: str, baseline_rate: float, target_rate: float):
        super().__init__(message)
        self.baseline_rate = baseline_rate
        self.target_rate = target_rate


class NonPositiveEffectError(UndefinedEffectSizeError):
    """The absolute effect |target - baseline| is zero (mde == 0 or baseline == 0)."""


class DegenerateRateError(UndefinedEffectSizeError):
    """The pooled rate has no variance (it sits at or beyond 0 or 1)."""


class InvalidDesignError(ExperimentStatsError, ValueError):
    """An experiment or budget setting is structurally impossible."""

    def __init__(self, name: str, value: object, expected: str):
        super().__init__(f"{name} {expected}, got {value!r}.")
        self.name = name
        self.value = value
