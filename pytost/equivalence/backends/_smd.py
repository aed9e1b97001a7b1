"""
Standardized mean difference with a noncentral-t confidence interval.

Estimate: Cohen's d = difference / standardizer. With bias correction,
Hedges's g = J * d where J is the exact small-sample correction

    J(df) = Gamma(df/2) / (sqrt(df/2) * Gamma((df - 1)/2))

Interval: the observed t = d / scale follows a noncentral t with df degrees
of freedom and noncentrality delta / scale. Inverting its CDF in the
noncentrality parameter gives an exact (1 - 2*alpha) interval for delta:

    P(T'(df, ncp_lo) <= t_obs) = 1 - alpha
    P(T'(df, ncp_hi) <= t_obs) = alpha
    CI = J * scale * (ncp_lo, ncp_hi)

scale is 1/sqrt(n) for one sample and sqrt(1/n1 + 1/n2) for two samples.
The interval is exact for Cohen's d under normality (equal variances for
two samples); multiplying by J shrinks it with the point estimate.
"""

from __future__ import annotations

import math

import numpy as np
from scipy import stats as sp_stats
from scipy.optimize import brentq
from scipy.special import gammaln

from pytost.core.exceptions import DegenerateVarianceError
from pytost.equivalence._common import SMDParams

_MAX_BRACKET_STEPS = 12


def hedges_correction(df: float) -> float:
    """Exact bias correction J(df) for a standardized mean difference."""
    if df <= 1.0:
        return 0.0
    return float(np.exp(
        gammaln(df / 2.0) - 0.5 * np.log(df / 2.0) - gammaln((df - 1.0) / 2.0)
    ))


def _clip_probability(p: float) -> float:
    return min(max(p, 0.0), 1.0)


def nct_cdf(t: float, df: float, ncp: float) -> float:
    """
    P(T'(df, ncp) <= t).

    scipy returns NaN far in the tails; there the CDF is resolved to its
    limit, 1 when ncp lies well below t and 0 when it lies well above.
    """
    p = float(sp_stats.nct.cdf(t, df, ncp))
    if math.isnan(p):
        return 1.0 if ncp < t else 0.0
    return _clip_probability(p)


def nct_sf(t: float, df: float, ncp: float) -> float:
    """P(T'(df, ncp) > t), with NaN tails resolved as in nct_cdf()."""
    p = float(sp_stats.nct.sf(t, df, ncp))
    if math.isnan(p):
        return 0.0 if ncp < t else 1.0
    return _clip_probability(p)


def _ncp_for_cdf(t_obs: float, df: float, prob: float) -> float:
    """
    Noncentrality at which the noncentral t CDF at t_obs equals prob.

    The CDF is decreasing in ncp. The starting bracket comes from the
    normal approximation T' ~ N(ncp, 1 + ncp**2 / (2*df)) and is widened
    until f(lo) >= 0 >= f(hi). Returns NaN if no root is found.
    """
    def f(ncp: float) -> float:
        return nct_cdf(t_obs, df, ncp) - prob

    z = float(sp_stats.norm.ppf(max(prob, 1.0 - prob)))
    width = (z + 2.0) * math.sqrt(1.0 + t_obs ** 2 / (2.0 * df))
    lo, hi = t_obs - width, t_obs + width
    for _ in range(_MAX_BRACKET_STEPS):
        if f(lo) >= 0.0 >= f(hi):
            try:
                return float(brentq(f, lo, hi, xtol=1e-12, maxiter=500))
            except (ValueError, RuntimeError):
                return math.nan
        lo -= width
        hi += width
        width *= 2.0
    return math.nan


def nct_conf_int(
    t_obs: float,
    df: float,
    alpha: float,
) -> tuple[float, float]:
    """
    (1 - 2*alpha) interval for the noncentrality parameter.

    Negative t is solved through T'(df, -ncp) = -T'(df, ncp), since
    scipy's CDF loses its lower tail for negative t sooner.
    """
    if t_obs < 0.0:
        ncp_lo, ncp_hi = nct_conf_int(-t_obs, df, alpha)
        return -ncp_hi, -ncp_lo
    ncp_lo = _ncp_for_cdf(t_obs, df, 1.0 - alpha)
    ncp_hi = _ncp_for_cdf(t_obs, df, alpha)
    return ncp_lo, ncp_hi


def standardized_difference(
    difference: float,
    standardizer: float,
    df: float,
    scale: float,
    alpha: float,
    *,
    bias_correction: bool = True,
    compute_ci: bool = True,
    sd_name: str = "pooled sd",
) -> tuple[SMDParams, list[str]]:
    """
    Standardized estimate of a raw difference and its interval.

    Parameters
    ----------
    difference : float
        Raw mean difference (or one-sample deviation from mu).
    standardizer : float
        Standard deviation dividing the difference.
    df : float
        Degrees of freedom of the standardizer.
    scale : float
        Converts between d and the t statistic: t = d / scale.
    alpha : float
        Each tail of the (1 - 2*alpha) interval.

    Raises
    ------
    DegenerateVarianceError
        If the standardizer is zero.
    """
    warnings_list: list[str] = []

    if not standardizer > 0.0:
        raise DegenerateVarianceError(
            f"{sd_name} is {standardizer}; cannot standardize the difference",
            sd_name=sd_name,
            value=standardizer,
        )

    cohen_d = difference / standardizer
    correction = hedges_correction(df) if bias_correction else 1.0
    name = "Hedges's g" if bias_correction else "Cohen's d"

    conf_int = None
    if compute_ci:
        t_obs = cohen_d / scale
        ncp_lo, ncp_hi = nct_conf_int(t_obs, df, alpha)
        if not (np.isfinite(ncp_lo) and np.isfinite(ncp_hi)):
            warnings_list.append(
                f"noncentral t interval for {name} did not converge "
                f"(t = {t_obs:.4g}, df = {df:.4g}); reporting NaN"
            )
        conf_int = np.array([ncp_lo, ncp_hi]) * scale * correction

    return SMDParams(
        name=name,
        estimate=float(cohen_d * correction),
        conf_int=conf_int,
        df=float(df),
        correction=float(correction),
        standardizer=float(standardizer),
    ), warnings_list
