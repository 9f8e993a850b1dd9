"""
Default experiment settings.

Callers usually leave confidence level, power and variant count unset.
The entry points (`calculate_required_sample_size`, `analyze_experiment`,
`plan_batch_strategy`) fill the gaps from an `ExperimentDefaults` instance,
so the formulas underneath always receive complete values.

To change a default for one call, pass a modified copy:

    from dataclasses import replace
    strict = replace(DEFAULTS, confidence_level=0.99)
    calculate_required_sample_size(request, defaults=strict)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .errors import InvalidDesignError


def _check_open_unit(name: str, value: float) -> None:
    if not (0.0 < value < 1.0):
        raise InvalidDesignError(name, value, "must be between 0 and 1 (exclusive)")


@dataclass(frozen=True)
class ExperimentDefaults:
    # design defaults applied when a request leaves them out
    confidence_level: float = 0.95
    power: float = 0.8
    variant_count: int = 2

    # fraction of the required sample that counts as "enough"
    sufficiency_threshold: float = 0.9

    # reference design used to judge whether the control arm has enough volume
    reference_mde: float = 0.2
    reference_power: float = 0.8

    # campaign-level batch planning fallbacks
    batch_baseline_rate: float = 0.015
    cost_per_piece: float = 1.5

    def __post_init__(self) -> None:
        _check_open_unit("confidence_level", self.confidence_level)
        _check_open_unit("power", self.power)
        _check_open_unit("reference_power", self.reference_power)
        _check_open_unit("batch_baseline_rate", self.batch_baseline_rate)
        if self.variant_count < 2:
            raise InvalidDesignError("variant_count", self.variant_count, "must be at least 2")
        if self.sufficiency_threshold <= 0.0:
            raise InvalidDesignError(
                "sufficiency_threshold", self.sufficiency_threshold, "must be positive"
            )
        if self.reference_mde <= 0.0:
            raise InvalidDesignError("reference_mde", self.reference_mde, "must be positive")
        if self.cost_per_piece <= 0.0:
            raise InvalidDesignError("cost_per_piece", self.cost_per_piece, "must be positive")

    def resolve_confidence(self, confidence_level: Optional[float]) -> float:
        return self.confidence_level if confidence_level is None else confidence_level

    def resolve_power(self, power: Optional[float]) -> float:
        return self.power if power is None else power

    def resolve_variant_count(self, variant_count: Optional[int]) -> int:
        return self.variant_count if variant_count is None else variant_count


DEFAULTS = ExperimentDefaults()
