from dataclasses import replace

import pytest

from mailab.config import DEFAULTS, ExperimentDefaults
from mailab.errors import InvalidDesignError, NonPositiveEffectError
from mailab.planner import (
    calculate_required_sample_size,
    estimate_days_remaining,
    experiment_progress,
    plan_batch_strategy,
    recommend_batch_split,
)
from mailab.proportions import sample_size_per_group
from mailab.types import SampleSizeRequest


def test_required_sample_size_defaults():
    res = calculate_required_sample_size(
        SampleSizeRequest(baseline_rate=0.02, minimum_detectable_effect=0.2)
    )

    assert res.confidence_level == 0.95
    assert res.power == 0.8
    assert res.per_variant == sample_size_per_group(0.02, 0.2, 1.0 - 0.95, 0.8)
    assert res.total == res.per_variant * 2
    assert res.target_rate == pytest.approx(0.024)
    assert res.minimum_detectable_effect == 0.2

    # Two variants: one comparison, no correction.
    assert res.adjusted_alpha == pytest.approx(0.05)
    assert res.notes == (
        "Large sample size required. Consider increasing MDE or accepting lower confidence.",
    )


def test_bonferroni_correction_needs_more_pieces_per_variant():
    two = calculate_required_sample_size(
        SampleSizeRequest(baseline_rate=0.02, minimum_detectable_effect=0.2, variant_count=2)
    )
    three = calculate_required_sample_size(
        SampleSizeRequest(baseline_rate=0.02, minimum_detectable_effect=0.2, variant_count=3)
    )

    assert three.per_variant >= two.per_variant
    assert three.total == three.per_variant * 3
    assert three.adjusted_alpha == pytest.approx(0.025)
    assert "Multiple comparisons: Using Bonferroni correction (α = 0.0250)." in three.notes


def test_advisory_notes_are_conditional_and_ordered():
    quiet = calculate_required_sample_size(
        SampleSizeRequest(baseline_rate=0.1, minimum_detectable_effect=0.5)
    )
    assert quiet.per_variant < 10_000
    assert quiet.notes == ()

    noisy = calculate_required_sample_size(
        SampleSizeRequest(baseline_rate=0.005, minimum_detectable_effect=0.2, variant_count=4)
    )
    assert len(noisy.notes) == 3
    assert noisy.notes[0].startswith("Large sample size required.")
    assert noisy.notes[1].startswith("Very low baseline rate.")
    assert noisy.notes[2] == "Multiple comparisons: Using Bonferroni correction (α = 0.0167)."


def test_required_sample_size_uses_supplied_defaults():
    strict = replace(DEFAULTS, confidence_level=0.99, power=0.9)
    request = SampleSizeRequest(baseline_rate=0.02, minimum_detectable_effect=0.2)

    default_res = calculate_required_sample_size(request)
    strict_res = calculate_required_sample_size(request, defaults=strict)

    assert strict_res.confidence_level == 0.99
    assert strict_res.power == 0.9
    assert strict_res.per_variant > default_res.per_variant

    # Values on the request win over the defaults.
    explicit = calculate_required_sample_size(
        SampleSizeRequest(baseline_rate=0.02, minimum_detectable_effect=0.2, power=0.8),
        defaults=strict,
    )
    assert explicit.power == 0.8


def test_required_sample_size_rejects_bad_designs():
    with pytest.raises(InvalidDesignError):
        calculate_required_sample_size(
            SampleSizeRequest(baseline_rate=0.02, minimum_detectable_effect=0.2, variant_count=1)
        )

    with pytest.raises(NonPositiveEffectError):
        calculate_required_sample_size(
            SampleSizeRequest(baseline_rate=0.02, minimum_detectable_effect=0.0)
        )


def test_defaults_validate_their_ranges():
    with pytest.raises(InvalidDesignError):
        ExperimentDefaults(confidence_level=1.0)
    with pytest.raises(InvalidDesignError):
        ExperimentDefaults(variant_count=1)
    with pytest.raises(InvalidDesignError):
        ExperimentDefaults(cost_per_piece=0.0)


def test_batch_split_moderate_budget():
    """
    $100,000 at $1.50 per piece buys 66,666 pieces. At a 1.5% baseline the
    reference design needs roughly 28,000 per variant (about 56,600 for two),
    so the budget covers the test once but not twice: split 50/50.
    """
    res = recommend_batch_split(100_000, 1.5, 0.015, variant_count=2)

    assert res.test_batch_percent == 50
    assert res.scale_batch_percent == 50
    assert res.pieces_per_variant == 66_666 * 50 // 100 // 2
    assert res.expected_significance_confidence == 0.95


def test_batch_split_large_budget_scales_most_of_it():
    res = recommend_batch_split(1_000_000, 1.5, 0.015)

    assert res.test_batch_percent == 30
    assert res.scale_batch_percent == 70
    assert res.pieces_per_variant == 99_999
    assert res.expected_significance_confidence == 0.95


def test_batch_split_small_budget_favours_testing():
    # 45,000 pieces: 15,750 per variant, more than half of the ~28,000 needed.
    some = recommend_batch_split(67_500, 1.5, 0.015)
    assert some.test_batch_percent == 70
    assert some.pieces_per_variant == 15_750
    assert some.expected_significance_confidence == 0.8

    # 10,000 pieces: 3,500 per variant, well under half.
    scarce = recommend_batch_split(15_000, 1.5, 0.015)
    assert scarce.test_batch_percent == 70
    assert scarce.pieces_per_variant == 3_500
    assert scarce.expected_significance_confidence == 0.6


@pytest.mark.parametrize("budget", [0, 5_000, 60_000, 100_000, 250_000, 5_000_000])
@pytest.mark.parametrize("variant_count", [2, 3, 5])
def test_batch_split_percentages_always_add_up(budget, variant_count):
    res = recommend_batch_split(budget, 1.5, 0.015, variant_count)
    assert res.test_batch_percent + res.scale_batch_percent == 100
    assert res.test_batch_percent in (30, 50, 70)


def test_batch_split_rejects_non_positive_cost():
    with pytest.raises(InvalidDesignError):
        recommend_batch_split(10_000, 0.0, 0.015)


def test_batch_strategy_falls_back_to_recipient_budget():
    # No budget recorded: 100,000 recipients at $1.50 each -> 100,000 pieces.
    strategy = plan_batch_strategy(100_000, 2)

    assert strategy.baseline_rate == 0.015
    assert strategy.recommendation.test_batch_percent == 50
    assert strategy.test_batch_size == 50_000
    assert strategy.scale_batch_size == 50_000
    assert strategy.notes == (
        "Test batch: 50% of volume (25000 per variant)",
        "Scale batch: Remaining 50% to winner",
        "Expected confidence: 95%",
    )


def test_batch_strategy_treats_zero_baseline_as_unrecorded():
    # A stored 0% baseline means nothing has been measured yet.
    strategy = plan_batch_strategy(100_000, 2, baseline_rate=0.0)

    assert strategy.baseline_rate == 0.015
    assert strategy.recommendation == plan_batch_strategy(100_000, 2).recommendation


def test_batch_strategy_with_explicit_budget():
    strategy = plan_batch_strategy(
        20_000, 2, baseline_rate=0.015, total_budget=15_000, cost_per_piece=1.5
    )

    assert strategy.recommendation.test_batch_percent == 70
    assert strategy.test_batch_size == 14_000
    assert strategy.scale_batch_size == 6_000
    assert strategy.notes[-1] == "Expected confidence: 60%"


def test_estimate_days_remaining():
    # 5,000 delivered in 10 days -> 500 a day -> 15,000 to go takes 30 days.
    assert estimate_days_remaining(5_000, 20_000, 10) == 30

    # Less than a day counts as one day.
    assert estimate_days_remaining(100, 1_000, 0) == 9

    # Already there.
    assert estimate_days_remaining(2_000, 1_000, 5) == 0

    # Nothing delivered: no rate to extrapolate.
    assert estimate_days_remaining(0, 1_000, 5) is None


def test_experiment_progress():
    halfway = experiment_progress(20_000, 5_000, days_running=10)
    assert halfway.percent_complete == 25.0
    assert halfway.estimated_days_remaining == 30

    done = experiment_progress(20_000, 25_000, days_running=10)
    assert done.percent_complete == 100.0
    assert done.estimated_days_remaining is None

    no_clock = experiment_progress(20_000, 5_000)
    assert no_clock.estimated_days_remaining is None

    assert experiment_progress(0, 10).percent_complete == 0.0
