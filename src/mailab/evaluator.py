"""
Experiment evaluation: is there a winner yet?

Given the current counts for the control and each variant, this module
compares every variant with the control and rolls the comparisons up into
one verdict:

- "conclusive":      at least one variant is significantly better or worse
- "need_more_data":  nothing significant, and the control has not reached
                     the volume needed to detect a 20% lift
- "inconclusive":    nothing significant even though volume is adequate

The verdict is recomputed from scratch on every call. Calling it again as
counts grow moves the status along as evidence accumulates; nothing is stored.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from .config import DEFAULTS, ExperimentDefaults
from .errors import UndefinedEffectSizeError
from .multiple_testing import bonferroni
from .proportions import (
    confidence_interval,
    is_significant,
    is_sufficiently_sampled,
    lift,
    p_value_two_proportion_z_test,
    rate,
    sample_size_per_group,
)
from .types import (
    CONCLUSIVE,
    INCONCLUSIVE,
    LOSER,
    NEED_MORE_DATA,
    WINNER,
    ControlSummary,
    ExperimentAnalysisResult,
    PowerAnalysis,
    VariantAnalysis,
    VariantObservation,
    WinnerRecommendation,
)

logger = logging.getLogger(__name__)


def _reference_sample_size(
    control_rate: float, alpha: float, defaults: ExperimentDefaults
) -> Optional[int]:
    try:
        return sample_size_per_group(
            control_rate, defaults.reference_mde, alpha, defaults.reference_power
        )
    except UndefinedEffectSizeError as exc:
        # No responses yet (or a saturated rate): the lift yardstick does not exist.
        logger.debug("cannot size reference design at control rate %r: %s", control_rate, exc)
        return None


def _power_analysis(
    control: VariantObservation,
    control_rate: float,
    alpha: float,
    defaults: ExperimentDefaults,
) -> PowerAnalysis:
    required = _reference_sample_size(control_rate, alpha, defaults)
    if required is None:
        return PowerAnalysis(
            is_adequately_sampled=False,
            required_sample=None,
            recommended_additional_sample=None,
        )

    adequate = is_sufficiently_sampled(
        control.sample_size, required, defaults.sufficiency_threshold
    )
    additional = 0 if adequate else max(0, required - control.sample_size)
    return PowerAnalysis(
        is_adequately_sampled=adequate,
        required_sample=required,
        recommended_additional_sample=additional,
    )


def _verdict(significant: bool, relative_lift: float) -> str:
    if not significant:
        return INCONCLUSIVE
    return WINNER if relative_lift > 0 else LOSER


def analyze_experiment(
    control: VariantObservation,
    variants: Sequence[VariantObservation],
    confidence_level: Optional[float] = None,
    *,
    defaults: ExperimentDefaults = DEFAULTS,
) -> ExperimentAnalysisResult:
    """
    Compare each variant with the control and pick a winner, if any.

    Inputs
    ------
    control:
        Counts for the status-quo mail piece.

    variants:
        Counts for each treatment arm, in display order. The order matters
        only to break exact ties between equally good winners (first wins).

    confidence_level:
        Defaults to 0.95. Each variant is significant when its p-value is below
        alpha = 1 - confidence_level (no multiple comparison correction; the
        Bonferroni-adjusted p-value is reported alongside for reference).

    Zero delivered pieces never raise: the affected rates are 0 and the
    experiment reports "need_more_data".
    """
    confidence_level = defaults.resolve_confidence(confidence_level)
    alpha = 1.0 - confidence_level

    control_rate = rate(control.conversions, control.sample_size)
    control_summary = ControlSummary(
        conversion_rate=control_rate,
        confidence_interval=confidence_interval(
            control.conversions, control.sample_size, confidence_level
        ),
    )

    power_analysis = _power_analysis(control, control_rate, alpha, defaults)

    p_values = [
        p_value_two_proportion_z_test(
            control.conversions, control.sample_size, v.conversions, v.sample_size
        )
        for v in variants
    ]
    adjusted = bonferroni(p_values) if p_values else []

    results = []
    for v, p_value, p_adjusted in zip(variants, p_values, adjusted):
        variant_rate = rate(v.conversions, v.sample_size)
        variant_lift = lift(control_rate, variant_rate)
        significant = is_significant(p_value, alpha)

        results.append(
            VariantAnalysis(
                id=v.id,
                name=v.name,
                conversion_rate=variant_rate,
                absolute_lift=variant_lift.absolute,
                relative_lift=variant_lift.relative,
                p_value=p_value,
                adjusted_p_value=p_adjusted,
                is_significant=significant,
                confidence_interval=confidence_interval(
                    v.conversions, v.sample_size, confidence_level
                ),
                recommendation=_verdict(significant, variant_lift.relative),
            )
        )

    winners = [r for r in results if r.recommendation == WINNER]
    decided = any(r.recommendation in (WINNER, LOSER) for r in results)

    if decided:
        overall_status = CONCLUSIVE
    elif not power_analysis.is_adequately_sampled:
        overall_status = NEED_MORE_DATA
    else:
        overall_status = INCONCLUSIVE

    recommendation = None
    if winners:
        # max() keeps the first of equal lifts
        best = max(winners, key=lambda r: r.relative_lift)
        recommendation = WinnerRecommendation(
            variant_id=best.id,
            variant_name=best.name,
            reason=f"{best.relative_lift * 100:.1f}% lift vs control (p={best.p_value:.4f})",
        )

    logger.debug(
        "experiment analysis: %d variants, status=%s, winner=%s",
        len(results),
        overall_status,
        recommendation.variant_id if recommendation else None,
    )

    return ExperimentAnalysisResult(
        control=control_summary,
        variants=tuple(results),
        overall_status=overall_status,
        recommendation=recommendation,
        power_analysis=power_analysis,
    )
