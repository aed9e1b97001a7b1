"""
Power of t-tests and the effect size a design could detect.

Used to set equivalence bounds from a previous study's design: the
"small telescopes" approach takes the standardized effect that study had
33% power to detect as the smallest effect of interest, then tests a
replication for equivalence against bounds of that size.

Power uses the noncentral t distribution with noncentrality
d * sqrt(n) (one sample) or d * sqrt(n1 * n2 / (n1 + n2)) (two samples).
"""

from __future__ import annotations

import math

from scipy import stats as sp_stats
from scipy.optimize import brentq

from pytost.core.exceptions import NumericalInstabilityError, ValidationError
from pytost.core.validation import (
    check_choice,
    check_finite_scalar,
    check_probability,
    check_sample_size,
)
from pytost.equivalence.backends._smd import nct_cdf, nct_sf

VALID_ALTERNATIVES = ("two.sided", "less", "greater")


def _df_and_scale(n1: int, n2: int | None) -> tuple[float, float]:
    if n2 is None:
        return float(n1 - 1), float(n1) ** 0.5
    return float(n1 + n2 - 2), (n1 * n2 / (n1 + n2)) ** 0.5


def t_test_power(
    d: float,
    n1: int,
    n2: int | None = None,
    *,
    alpha: float = 0.05,
    alternative: str = "two.sided",
) -> float:
    """
    Power of a one- or two-sample t-test to detect standardized effect d.

    Parameters
    ----------
    d : float
        True standardized mean difference (Cohen's d).
    n1 : int
        Sample size (group 1).
    n2 : int or None
        Group 2 size; None for a one-sample test.
    alpha : float
        Significance level.
    alternative : str
        "two.sided" (default), "less" or "greater".

    Returns
    -------
    float
        Probability of rejecting H0: d = 0.
    """
    d = check_finite_scalar(d, "d")
    n1 = check_sample_size(n1, "n1")
    if n2 is not None:
        n2 = check_sample_size(n2, "n2")
    alpha = check_probability(alpha, "alpha")
    alternative = check_choice(alternative, VALID_ALTERNATIVES, "alternative")

    df, scale = _df_and_scale(n1, n2)
    ncp = d * scale

    if alternative == "two.sided":
        t_crit = sp_stats.t.ppf(1.0 - alpha / 2.0, df)
        power = nct_sf(t_crit, df, ncp) + nct_cdf(-t_crit, df, ncp)
    elif alternative == "greater":
        t_crit = sp_stats.t.ppf(1.0 - alpha, df)
        power = nct_sf(t_crit, df, ncp)
    else:  # less
        t_crit = sp_stats.t.ppf(alpha, df)
        power = nct_cdf(t_crit, df, ncp)

    return float(power)


def effect_size_for_power(
    n1: int,
    n2: int | None = None,
    *,
    power: float = 0.33,
    alpha: float = 0.05,
    alternative: str = "two.sided",
) -> float:
    """
    Standardized effect a design had the given power to detect.

    Inverts t_test_power() in d. The result is positive, except for
    alternative="less" where it is the negative effect.

    Parameters
    ----------
    n1 : int
        Sample size (group 1).
    n2 : int or None
        Group 2 size; None for a one-sample design.
    power : float
        Target power, strictly between alpha and 1. Default 0.33.
    alpha : float
        Significance level of the original test.
    alternative : str
        "two.sided" (default), "less" or "greater".

    Raises
    ------
    ValidationError
        If power <= alpha (every effect, including zero, has at least
        that power) or inputs are malformed.
    """
    power = check_probability(power, "power")
    alpha = check_probability(alpha, "alpha")
    alternative = check_choice(alternative, VALID_ALTERNATIVES, "alternative")
    if power <= alpha:
        raise ValidationError(
            f"power must exceed alpha ({alpha}), got {power}"
        )

    direction = "greater" if alternative == "less" else alternative

    def f(d: float) -> float:
        return t_test_power(d, n1, n2, alpha=alpha, alternative=direction) - power

    hi = 1.0
    f_hi = f(hi)
    while not f_hi >= 0.0:
        if not math.isfinite(f_hi):
            raise NumericalInstabilityError(
                f"power at d = {hi:g} evaluated to {f_hi + power}",
                quantity="power",
                value=f_hi + power,
            )
        hi *= 2.0
        if hi > 1e6:
            raise NumericalInstabilityError(
                f"no effect size up to {hi:g} reaches power {power}",
                quantity="d",
                value=hi,
            )
        f_hi = f(hi)

    d = float(brentq(f, 0.0, hi, xtol=1e-12))
    return -d if alternative == "less" else d
