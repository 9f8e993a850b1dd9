"""
Two-proportion statistics for mail response experiments (binary metrics).

Each delivered mail piece either produces a response (a call, a contract)
or it does not. That makes each piece a Bernoulli trial:
        •	1 with probability p (the recipient responded)
        •	0 with probability 1 − p

The response rate we observe is an estimate of p:

    p_hat = conversions / sample_size

This module holds the building blocks used to compare two such rates:

- rate:                            p_hat, with 0 delivered pieces giving 0.0
- sample_size_per_group:           pieces per arm needed to detect a relative lift
- p_value_two_proportion_z_test:   two-sided pooled z-test
- confidence_interval:             Wald interval for a single rate
- lift:                            absolute and relative difference
- is_significant / is_sufficiently_sampled: the two yes/no checks built on top

Zero counts
-----------
Campaigns start with nothing delivered. Rather than raising, every function
here treats a zero denominator as "no information": rate 0.0, p-value 1.0,
relative lift 0.0, interval (0, 0). A 0.0 rate is therefore not evidence of
anything; it may simply mean nothing has arrived yet.
"""

from __future__ import annotations

import math

from .errors import DegenerateRateError, NonPositiveEffectError
from .normal import inverse_normal_cdf, normal_cdf
from .types import ConfidenceInterval, Lift


def rate(conversions: int, sample_size: int) -> float:
    """Observed rate; 0.0 when nothing has been delivered."""
    if sample_size == 0:
        return 0.0
    return conversions / sample_size


def sample_size_per_group(
    baseline_rate: float,
    minimum_detectable_effect: float,
    alpha: float,
    power: float,
) -> int:
    """
    Pieces needed in each arm to detect a relative lift over the baseline.

    Parameters
    ----------
    baseline_rate:
        Expected response rate of the control, for example 0.02.

    minimum_detectable_effect:
        Relative lift to detect, for example 0.2 means the variant responds at
        0.02 * 1.2 = 0.024.

    alpha:
        Two-sided significance level for a single comparison.

    power:
        Desired probability of detecting the lift when it is real.

    Formula
    -------
        p2 = p1 * (1 + mde)
        p  = (p1 + p2) / 2                  pooled rate
        sd = sqrt(2 * p * (1 - p))          pooled standard deviation
        d  = |p2 - p1|                      absolute effect
        n  = ceil( ((z_alpha + z_beta) * sd / d) ^ 2 )

    with z_alpha = inverse_normal_cdf(1 - alpha / 2), z_beta = inverse_normal_cdf(power).

    Raises
    ------
    NonPositiveEffectError when d is 0 (mde of 0, or a baseline of 0).
    DegenerateRateError when the pooled rate leaves no variance.
    ProbabilityDomainError when alpha or power push a quantile outside (0, 1).
    """
    p1 = baseline_rate
    p2 = baseline_rate * (1.0 + minimum_detectable_effect)

    effect = abs(p2 - p1)
    if effect == 0.0:
        raise NonPositiveEffectError(
            f"Effect size is zero (baseline_rate={p1!r}, minimum_detectable_effect="
            f"{minimum_detectable_effect!r}); no sample size can detect it.",
            baseline_rate=p1,
            target_rate=p2,
        )

    p_bar = (p1 + p2) / 2.0
    pooled_variance = 2.0 * p_bar * (1.0 - p_bar)
    if pooled_variance <= 0.0:
        raise DegenerateRateError(
            f"Pooled rate {p_bar!r} leaves no variance; rates must lie between 0 and 1.",
            baseline_rate=p1,
            target_rate=p2,
        )

    z_alpha = inverse_normal_cdf(1.0 - alpha / 2.0)
    z_beta = inverse_normal_cdf(power)

    sd = math.sqrt(pooled_variance)
    n = ((z_alpha + z_beta) * sd / effect) ** 2

    return int(math.ceil(n))


def p_value_two_proportion_z_test(
    conversions_a: int,
    sample_a: int,
    conversions_b: int,
    sample_b: int,
) -> float:
    """
    Two-sided p-value for "A and B have the same true rate".

    If the two rates really were equal, the best estimate of the shared rate
    is the pooled rate across both arms:

        pooled = (conversions_a + conversions_b) / (sample_a + sample_b)

    The observed difference is compared to the variation expected under that
    shared rate:

        se = sqrt(pooled * (1 - pooled) * (1/sample_a + 1/sample_b))
        z  = (rate_b - rate_a) / se
        p  = 2 * (1 - normal_cdf(|z|))

    Swapping A and B gives the same p-value.

    Returns 1.0 (no evidence of a difference) when either arm is empty or
    when se is 0, which happens if every piece in both arms had the same outcome.
    """
    if sample_a == 0 or sample_b == 0:
        return 1.0

    rate_a = conversions_a / sample_a
    rate_b = conversions_b / sample_b

    pooled = (conversions_a + conversions_b) / (sample_a + sample_b)
    se = math.sqrt(pooled * (1.0 - pooled) * (1.0 / sample_a + 1.0 / sample_b))

    if se == 0.0:
        return 1.0

    z = (rate_b - rate_a) / se
    return min(1.0, 2.0 * (1.0 - normal_cdf(abs(z))))


def confidence_interval(
    conversions: int,
    sample_size: int,
    confidence: float = 0.95,
) -> ConfidenceInterval:
    """
    Wald (normal approximation) interval for a single rate:

        p_hat ± z * sqrt(p_hat * (1 - p_hat) / n),   z = inverse_normal_cdf((1 + confidence) / 2)

    clamped to [0, 1]. With 0 conversions the interval collapses to (0, 0).
    """
    if sample_size == 0:
        return ConfidenceInterval(lower=0.0, upper=0.0)

    p_hat = conversions / sample_size
    z = inverse_normal_cdf((1.0 + confidence) / 2.0)
    se = math.sqrt(p_hat * (1.0 - p_hat) / sample_size)

    return ConfidenceInterval(
        lower=max(0.0, p_hat - z * se),
        upper=min(1.0, p_hat + z * se),
    )


def lift(control_rate: float, variant_rate: float) -> Lift:
    """Variant minus control, absolute and relative; relative is 0.0 for a 0 control rate."""
    absolute = variant_rate - control_rate
    relative = absolute / control_rate if control_rate > 0 else 0.0
    return Lift(absolute=absolute, relative=relative)


def is_significant(p_value: float, alpha: float = 0.05) -> bool:
    """True when p_value is strictly below alpha."""
    return p_value < alpha


def is_sufficiently_sampled(actual: int, required: int, threshold: float = 0.9) -> bool:
    """True once actual reaches threshold (90% by default) of the required sample."""
    return actual >= required * threshold
