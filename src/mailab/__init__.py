"""
mailab (Mail A/B)

Statistics for planning and judging A/B tests on direct-mail campaigns:
how many pieces to mail, how to split a budget between testing and scaling,
and whether a variant has beaten the control yet.
"""

import logging

from .config import DEFAULTS, ExperimentDefaults
from .descriptive import coefficient_of_variation, percentile
from .errors import (
    DegenerateRateError,
    ExperimentStatsError,
    InvalidDesignError,
    NonPositiveEffectError,
    ProbabilityDomainError,
    UndefinedEffectSizeError,
)
from .evaluator import analyze_experiment
from .multiple_testing import bonferroni, bonferroni_alpha
from .normal import inverse_normal_cdf, normal_cdf
from .planner import (
    calculate_required_sample_size,
    estimate_days_remaining,
    experiment_progress,
    plan_batch_strategy,
    recommend_batch_split,
)
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
    BatchSplitRecommendation,
    BatchStrategy,
    ConfidenceInterval,
    ControlSummary,
    ExperimentAnalysisResult,
    ExperimentProgress,
    Lift,
    PowerAnalysis,
    SampleSizeRequest,
    SampleSizeResult,
    VariantAnalysis,
    VariantObservation,
    WinnerRecommendation,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    "normal_cdf",
    "inverse_normal_cdf",
    "rate",
    "sample_size_per_group",
    "p_value_two_proportion_z_test",
    "confidence_interval",
    "lift",
    "is_significant",
    "is_sufficiently_sampled",
    "bonferroni",
    "bonferroni_alpha",
    "calculate_required_sample_size",
    "recommend_batch_split",
    "plan_batch_strategy",
    "estimate_days_remaining",
    "experiment_progress",
    "analyze_experiment",
    "coefficient_of_variation",
    "percentile",
    "DEFAULTS",
    "ExperimentDefaults",
    "ExperimentStatsError",
    "ProbabilityDomainError",
    "UndefinedEffectSizeError",
    "NonPositiveEffectError",
    "DegenerateRateError",
    "InvalidDesignError",
    "SampleSizeRequest",
    "SampleSizeResult",
    "VariantObservation",
    "ConfidenceInterval",
    "Lift",
    "ControlSummary",
    "VariantAnalysis",
    "WinnerRecommendation",
    "PowerAnalysis",
    "ExperimentAnalysisResult",
    "BatchSplitRecommendation",
    "BatchStrategy",
    "ExperimentProgress",
    "WINNER",
    "LOSER",
    "INCONCLUSIVE",
    "CONCLUSIVE",
    "NEED_MORE_DATA",
]
__version__ = "0.1.0"
