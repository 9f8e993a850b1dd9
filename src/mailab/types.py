from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

# Per-variant verdicts
WINNER = "winner"
LOSER = "loser"
INCONCLUSIVE = "inconclusive"

# Overall experiment status (INCONCLUSIVE is shared with the per-variant verdicts)
CONCLUSIVE = "conclusive"
NEED_MORE_DATA = "need_more_data"


@dataclass(frozen=True)
class SampleSizeRequest:
    """
    What the campaign manager wants to be able to detect before launching.

    Example
    -------
    "Our letters get a 2% response rate. I want to detect a variant that lifts
    that by 20% (to 2.4%), with 95% confidence and 80% power."

        SampleSizeRequest(baseline_rate=0.02, minimum_detectable_effect=0.2)

    minimum_detectable_effect is *relative*: 0.2 means +20% of the baseline,
    not +20 percentage points.

    confidence_level, power and variant_count may be left as None; the
    planner fills them from `mailab.config.DEFAULTS` (0.95, 0.8, 2).
    variant_count includes the control.
    """

    baseline_rate: float
    minimum_detectable_effect: float
    confidence_level: Optional[float] = None
    power: Optional[float] = None
    variant_count: Optional[int] = None


@dataclass(frozen=True)
class SampleSizeResult:
    """
    Required mail volume for an experiment design.

    per_variant is the number of delivered pieces each arm needs;
    total = per_variant * variant_count.

    adjusted_alpha is the per-comparison significance level after the
    Bonferroni correction (equal to 1 - confidence_level for two variants).

    notes holds advisory messages only; none of them means the design is invalid.
    """

    per_variant: int
    total: int

    baseline_rate: float
    target_rate: float  # baseline_rate * (1 + minimum_detectable_effect)
    minimum_detectable_effect: float

    confidence_level: float
    power: float
    adjusted_alpha: float

    notes: Tuple[str, ...] = ()


@dataclass(frozen=True)
class VariantObservation:
    """
    Current counts for one arm of a mail experiment.

    For a response-rate experiment, conversions would be inbound calls and
    sample_size the pieces delivered. Counts are not validated:
    conversions > sample_size gives a "rate" above 1, and analyze_experiment
    then raises ValueError (math domain error) from the confidence interval.
    """

    id: str
    name: str
    conversions: int
    sample_size: int


@dataclass(frozen=True)
class ConfidenceInterval:
    lower: float
    upper: float


@dataclass(frozen=True)
class Lift:
    absolute: float  # variant_rate - control_rate
    relative: float  # absolute / control_rate, 0.0 when control_rate is 0


@dataclass(frozen=True)
class ControlSummary:
    conversion_rate: float
    confidence_interval: ConfidenceInterval


@dataclass(frozen=True)
class VariantAnalysis:
    """
    One treatment arm compared with the control.

    p_value comes from a two-sided pooled z-test against the control.
    adjusted_p_value is the same p-value after a Bonferroni adjustment across
    every treatment arm in the analysis. It is reported for reference; the
    significance decision uses the raw p_value.

    recommendation:
      - "winner":       significant and better than control
      - "loser":        significant and not better than control
      - "inconclusive": not significant
    """

    id: str
    name: str
    conversion_rate: float
    absolute_lift: float
    relative_lift: float
    p_value: float
    adjusted_p_value: float
    is_significant: bool
    confidence_interval: ConfidenceInterval
    recommendation: str


@dataclass(frozen=True)
class WinnerRecommendation:
    variant_id: str
    variant_name: str
    reason: str


@dataclass(frozen=True)
class PowerAnalysis:
    """
    Whether the control arm has enough volume to trust a "no difference" reading.

    required_sample is the per-arm volume needed to detect a 20% relative lift
    at the control's observed rate. It is None when that cannot be computed
    (for example, no responses yet so the control rate is 0), and
    recommended_additional_sample is then None as well.
    """

    is_adequately_sampled: bool
    required_sample: Optional[int]
    recommended_additional_sample: Optional[int]


@dataclass(frozen=True)
class ExperimentAnalysisResult:
    control: ControlSummary
    variants: Tuple[VariantAnalysis, ...]
    overall_status: str  # "conclusive", "inconclusive" or "need_more_data"
    recommendation: Optional[WinnerRecommendation]
    power_analysis: PowerAnalysis


@dataclass(frozen=True)
class BatchSplitRecommendation:
    """
    How to divide a mail budget between a test phase and a scale phase.

    Example
    -------
    test_batch_percent=30, scale_batch_percent=70:
      mail 30% of the volume split evenly across variants, then send the
      remaining 70% with the winning variant.

    expected_significance_confidence is a rough label (0.95, 0.8 or 0.6) of how
    confident the test phase is likely to be, not a computed probability.
    """

    test_batch_percent: int
    scale_batch_percent: int
    pieces_per_variant: int
    expected_significance_confidence: float


@dataclass(frozen=True)
class BatchStrategy:
    """Batch split applied to an actual recipient list."""

    total_recipients: int
    variant_count: int
    baseline_rate: float
    recommendation: BatchSplitRecommendation
    test_batch_size: int
    scale_batch_size: int
    notes: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ExperimentProgress:
    total_sample_required: int
    current_sample: int
    percent_complete: float
    # None once complete, or when there is no delivery rate to extrapolate from
    estimated_days_remaining: Optional[int] = None
