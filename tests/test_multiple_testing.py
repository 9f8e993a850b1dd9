import pytest

from mailab.errors import InvalidDesignError
from mailab.multiple_testing import bonferroni, bonferroni_alpha


def test_bonferroni_basic():
    p = [0.01, 0.02, 0.5]
    adj = bonferroni(p)
    assert adj == pytest.approx([0.03, 0.06, 1.0])


def test_bonferroni_rejects_bad_input():
    with pytest.raises(ValueError):
        bonferroni([])
    with pytest.raises(ValueError):
        bonferroni([0.01, 1.2])


def test_bonferroni_alpha_splits_across_comparisons_with_control():
    # Control plus two variants: two comparisons.
    assert bonferroni_alpha(0.05, 2) == 0.025

    # A single comparison is left alone.
    assert bonferroni_alpha(0.05, 1) == 0.05


def test_bonferroni_alpha_matches_adjusted_p_values():
    """
    Comparing adjusted p-values to alpha and comparing raw p-values to the
    adjusted alpha are the same decision.
    """
    p = [0.004, 0.02, 0.03]
    alpha = 0.05
    by_threshold = [x < bonferroni_alpha(alpha, len(p)) for x in p]
    by_p_values = [x < alpha for x in bonferroni(p)]
    assert by_threshold == by_p_values == [True, False, False]


def test_bonferroni_alpha_needs_a_comparison():
    with pytest.raises(InvalidDesignError):
        bonferroni_alpha(0.05, 0)
