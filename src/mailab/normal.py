"""
Standard normal distribution helpers.

Every calculation in this package ends up asking one of two questions about the
standard normal distribution Z ~ Normal(0, 1):

1) "How likely is a value at most x?"        -> normal_cdf(x)      = P(Z <= x)
2) "Which x has probability p below it?"      -> inverse_normal_cdf(p)

Examples:
- a two-sided p-value for a z statistic of 2.0 is 2 * (1 - normal_cdf(2.0)) ~ 0.0455
- the critical value for a 95% two-sided test is inverse_normal_cdf(0.975) ~ 1.96

Neither function has a closed form, so both use well-known rational
approximations with fixed coefficient tables. The tables below are
mathematical constants, not settings.
"""

from __future__ import annotations

import math

from .errors import ProbabilityDomainError

# Abramowitz & Stegun 7.1.26 (erf approximation), max absolute error ~1.5e-7
_AS_P = 0.3275911
_AS_A = (
    0.254829592,
    -0.284496736,
    1.421413741,
    -1.453152027,
    1.061405429,
)

# Acklam's rational approximation of the normal quantile function
_ACKLAM_A = (
    -3.969683028665376e01,
    2.209460984245205e02,
    -2.759285104469687e02,
    1.383577518672690e02,
    -3.066479806614716e01,
    2.506628277459239e00,
)
_ACKLAM_B = (
    -5.447609879822406e01,
    1.615858368580409e02,
    -1.556989798598866e02,
    6.680131188771972e01,
    -1.328068155288572e01,
)
_ACKLAM_C = (
    -7.784894002430293e-03,
    -3.223964580411365e-01,
    -2.400758277161838e00,
    -2.549732539343734e00,
    4.374664141464968e00,
    2.938163982698783e00,
)
_ACKLAM_D = (
    7.784695709041462e-03,
    3.224671290700398e-01,
    2.445134137142996e00,
    3.754408661907416e00,
)

# Break-points between the tail and central regions.
_P_LOW = 0.02425
_P_HIGH = 1.0 - _P_LOW


def normal_cdf(x: float) -> float:
    """
    Cumulative distribution function of the standard normal distribution.

    Uses the Abramowitz-Stegun approximation of erf:

        t    = 1 / (1 + p * |x| / sqrt(2))
        poly = a1*t + a2*t^2 + a3*t^3 + a4*t^4 + a5*t^5
        cdf  = 0.5 * (1 + sign(x) * (1 - poly * exp(-x^2 / 2)))

    Deterministic, no iteration, absolute error around 1e-7.
    """
    sign = -1.0 if x < 0 else 1.0
    u = abs(x) / math.sqrt(2.0)

    t = 1.0 / (1.0 + _AS_P * u)
    a1, a2, a3, a4, a5 = _AS_A
    poly = ((((a5 * t + a4) * t + a3) * t + a2) * t + a1) * t
    y = 1.0 - poly * math.exp(-u * u)

    return 0.5 * (1.0 + sign * y)


def _tail_quantile(p: float) -> float:
    # Lower-tail formula; the upper tail is the same with p -> 1 - p and the sign flipped.
    c, d = _ACKLAM_C, _ACKLAM_D
    q = math.sqrt(-2.0 * math.log(p))
    return (((((c[0] * q + c[1]) * q + c[2]) * q + c[3]) * q + c[4]) * q + c[5]) / (
        (((d[0] * q + d[1]) * q + d[2]) * q + d[3]) * q + 1.0
    )


def inverse_normal_cdf(p: float) -> float:
    """
    Quantile function (inverse CDF) of the standard normal distribution.

    Returns z such that:
        P(Z <= z) = p   where Z ~ Normal(0, 1)

    Acklam's approximation splits the domain in three:
    - p < 0.02425:            lower tail, rational function of sqrt(-2 ln p)
    - 0.02425 <= p <= 0.97575: central region, rational function of (p - 0.5)
    - p > 0.97575:            upper tail, mirror image of the lower tail

    One polynomial cannot cover the whole domain accurately; near 0 and 1
    the quantile grows without bound.

    Input:
      p must be strictly between 0 and 1, otherwise ProbabilityDomainError.
    """
    if not (0.0 < p < 1.0):
        raise ProbabilityDomainError("p", p)

    if p < _P_LOW:
        return _tail_quantile(p)

    if p > _P_HIGH:
        return -_tail_quantile(1.0 - p)

    a, b = _ACKLAM_A, _ACKLAM_B
    q = p - 0.5
    r = q * q
    return ((((((a[0] * r + a[1]) * r + a[2]) * r + a[3]) * r + a[4]) * r + a[5]) * q) / (
        (((((b[0] * r + b[1]) * r + b[2]) * r + b[3]) * r + b[4]) * r + 1.0)
    )
