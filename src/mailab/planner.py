"""
Sample size and budget planning for mail experiments.

These helpers answer the questions a campaign manager asks before and during a test:

1) Sample size planning:
   "How many pieces do I need to deliver per variant to reliably detect a lift?"

2) Budget split:
   "Given this budget, how much should go to the test batch and how much
    should be held back to scale the winner?"

3) Progress:
   "How far along is the test, and roughly how many more days does it need?"

Key terms
-------------------------
- Confidence level:
  1 - alpha. 0.95 means about 5% false positives under the no-effect assumption.

- Power:
  The probability of detecting a real lift of the planned size. 0.8 is the usual target.

- Minimum detectable effect (MDE):
  The smallest *relative* lift worth detecting. 0.2 means a 2% response rate
  moving to 2.4%.

All sample sizes are "per variant" unless named total.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

from .config import DEFAULTS, ExperimentDefaults
from .errors import InvalidDesignError
from .multiple_testing import bonferroni_alpha
from .proportions import sample_size_per_group
from .types import (
    BatchSplitRecommendation,
    BatchStrategy,
    ExperimentProgress,
    SampleSizeRequest,
    SampleSizeResult,
)

logger = logging.getLogger(__name__)

LARGE_SAMPLE_THRESHOLD = 10_000
LOW_BASELINE_THRESHOLD = 0.01

# Reference design for budget sizing: 20% relative lift, 95% confidence, 80% power.
# Used as a yardstick only, whatever design the campaign actually targets.
BATCH_REFERENCE_MDE = 0.2
BATCH_REFERENCE_ALPHA = 0.05
BATCH_REFERENCE_POWER = 0.8


def calculate_required_sample_size(
    request: SampleSizeRequest,
    defaults: ExperimentDefaults = DEFAULTS,
) -> SampleSizeResult:
    """
    Required sample size for an experiment with one control and one or more variants.

    With more than two variants, every treatment arm is compared with the
    control, so alpha is split across those variant_count - 1 comparisons
    (Bonferroni). With the default two variants no correction applies.

    Example
    -------
        calculate_required_sample_size(
            SampleSizeRequest(baseline_rate=0.02, minimum_detectable_effect=0.2)
        )
        -> per_variant around 21,000 pieces, total twice that
    """
    confidence_level = defaults.resolve_confidence(request.confidence_level)
    power = defaults.resolve_power(request.power)
    variant_count = defaults.resolve_variant_count(request.variant_count)

    if variant_count < 2:
        raise InvalidDesignError(
            "variant_count", variant_count, "must be at least 2 (control plus one variant)"
        )

    alpha = 1.0 - confidence_level
    adjusted_alpha = bonferroni_alpha(alpha, variant_count - 1)

    per_variant = sample_size_per_group(
        request.baseline_rate,
        request.minimum_detectable_effect,
        adjusted_alpha,
        power,
    )

    notes = []
    if per_variant > LARGE_SAMPLE_THRESHOLD:
        notes.append(
            "Large sample size required. Consider increasing MDE or accepting lower confidence."
        )
    if request.baseline_rate < LOW_BASELINE_THRESHOLD:
        notes.append("Very low baseline rate. Results may take longer to become significant.")
    if variant_count > 2:
        notes.append(
            f"Multiple comparisons: Using Bonferroni correction (α = {adjusted_alpha:.4f})."
        )

    logger.debug(
        "sample size: baseline=%s mde=%s alpha=%.4f power=%s -> %d per variant x %d",
        request.baseline_rate,
        request.minimum_detectable_effect,
        adjusted_alpha,
        power,
        per_variant,
        variant_count,
    )

    return SampleSizeResult(
        per_variant=per_variant,
        total=per_variant * variant_count,
        baseline_rate=request.baseline_rate,
        target_rate=request.baseline_rate * (1.0 + request.minimum_detectable_effect),
        minimum_detectable_effect=request.minimum_detectable_effect,
        confidence_level=confidence_level,
        power=power,
        adjusted_alpha=adjusted_alpha,
        notes=tuple(notes),
    )


def recommend_batch_split(
    total_budget: float,
    cost_per_piece: float,
    baseline_rate: float,
    variant_count: int = 2,
) -> BatchSplitRecommendation:
    """
    Split a mail budget into a test batch and a scale batch.

    The budget is compared with the volume the reference design needs
    (required_total = per-variant requirement * variant_count):

    - at least 2x required_total:  test 30%, scale 70%, confidence 0.95
    - at least 1x required_total:  test 50%, scale 50%, confidence 0.95
    - less than required_total:    test 70%, scale 30%; confidence 0.8 if each
      variant still gets half of its requirement, otherwise 0.6

    This is a decision table, not an optimal allocation. The thresholds and
    percentages are fixed.
    """
    if cost_per_piece <= 0:
        raise InvalidDesignError("cost_per_piece", cost_per_piece, "must be positive")
    if variant_count < 1:
        raise InvalidDesignError("variant_count", variant_count, "must be at least 1")

    total_pieces = int(math.floor(total_budget / cost_per_piece))

    required_per_variant = sample_size_per_group(
        baseline_rate, BATCH_REFERENCE_MDE, BATCH_REFERENCE_ALPHA, BATCH_REFERENCE_POWER
    )
    required_total = required_per_variant * variant_count

    if total_pieces >= required_total * 2:
        test_batch_percent = 30
        expected_confidence = 0.95
    elif total_pieces >= required_total:
        test_batch_percent = 50
        expected_confidence = 0.95
    else:
        # Scarce volume: favour learning over scaling.
        test_batch_percent = 70
        actual_per_variant = (total_pieces * 0.7) / variant_count
        expected_confidence = 0.8 if actual_per_variant >= required_per_variant * 0.5 else 0.6

    test_pieces = (total_pieces * test_batch_percent) // 100
    pieces_per_variant = test_pieces // variant_count

    logger.debug(
        "batch split: %d pieces, %d required -> test %d%%, %d per variant",
        total_pieces,
        required_total,
        test_batch_percent,
        pieces_per_variant,
    )

    return BatchSplitRecommendation(
        test_batch_percent=test_batch_percent,
        scale_batch_percent=100 - test_batch_percent,
        pieces_per_variant=pieces_per_variant,
        expected_significance_confidence=expected_confidence,
    )


def plan_batch_strategy(
    total_recipients: int,
    variant_count: int,
    *,
    baseline_rate: Optional[float] = None,
    total_budget: Optional[float] = None,
    cost_per_piece: Optional[float] = None,
    defaults: ExperimentDefaults = DEFAULTS,
) -> BatchStrategy:
    """
    Apply the batch split to a campaign's recipient list.

    Campaigns often have no budget or baseline recorded yet. Missing (or zero)
    values fall back to the defaults: baseline 1.5%, $1.50 per piece, and a
    budget large enough to mail every recipient once.
    """
    if not baseline_rate:
        baseline_rate = defaults.batch_baseline_rate
    if cost_per_piece is None:
        cost_per_piece = defaults.cost_per_piece
    if not total_budget:
        total_budget = total_recipients * cost_per_piece

    split = recommend_batch_split(total_budget, cost_per_piece, baseline_rate, variant_count)

    notes = (
        f"Test batch: {split.test_batch_percent}% of volume "
        f"({split.pieces_per_variant} per variant)",
        f"Scale batch: Remaining {split.scale_batch_percent}% to winner",
        f"Expected confidence: {split.expected_significance_confidence * 100:.0f}%",
    )

    return BatchStrategy(
        total_recipients=total_recipients,
        variant_count=variant_count,
        baseline_rate=baseline_rate,
        recommendation=split,
        test_batch_size=(total_recipients * split.test_batch_percent) // 100,
        scale_batch_size=(total_recipients * split.scale_batch_percent) // 100,
        notes=notes,
    )


def estimate_days_remaining(
    current_sample: int,
    required_sample: int,
    days_running: int,
) -> Optional[int]:
    """
    Linear extrapolation of the days needed to reach required_sample.

    The delivery rate so far (current_sample / days_running) is assumed to hold.
    days_running counts as at least 1. Returns None when nothing has been
    delivered, since there is no rate to extrapolate.
    """
    if current_sample <= 0:
        return None

    per_day = current_sample / max(1, days_running)
    remaining = max(0, required_sample - current_sample)
    return int(math.ceil(remaining / per_day))


def experiment_progress(
    required_total: int,
    current_sample: int,
    days_running: Optional[int] = None,
) -> ExperimentProgress:
    """How much of the planned volume has been delivered, capped at 100%."""
    if required_total > 0:
        percent_complete = min(100.0, current_sample / required_total * 100.0)
    else:
        percent_complete = 0.0

    days_remaining = None
    if percent_complete < 100.0 and days_running is not None:
        days_remaining = estimate_days_remaining(current_sample, required_total, days_running)

    return ExperimentProgress(
        total_sample_required=required_total,
        current_sample=current_sample,
        percent_complete=percent_complete,
        estimated_days_remaining=days_remaining,
    )
