"""
Two one-sided tests (TOST) from summary statistics.

Supports one sample against a reference value and two independent
samples (Welch by default, pooled with var_equal=True), under raw or
standardized (SMD) equivalence bounds.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any

import numpy as np
from scipy import stats as sp_stats

from pytost.core.exceptions import DegenerateVarianceError, NumericalInstabilityError
from pytost.equivalence._common import (
    CONCLUSION_DIFFERENT,
    CONCLUSION_EQUIVALENT,
    CONCLUSION_INCONCLUSIVE,
    CONCLUSION_TRIVIAL,
    SMD_WARNING,
    TOSTParams,
    VERDICT_EQUIVALENT,
    VERDICT_MINIMAL_EFFECT,
    VERDICT_NO_MINIMAL_EFFECT,
    VERDICT_NOT_EQUIVALENT,
)
from pytost.equivalence.backends._smd import standardized_difference

if TYPE_CHECKING:
    from pytost.equivalence.design import TOSTDesign


def tost_one_sample(design: TOSTDesign) -> tuple[TOSTParams, list[str]]:
    """One-sample TOST: is mean(x) - mu inside the bounds?"""
    x = design.x
    mu = design.mu
    bounds = design.bounds
    warnings_list: list[str] = []

    estimate = x.mean - mu
    se = x.sd / math.sqrt(x.n)
    df = float(x.n - 1)

    if bounds.is_smd:
        warnings_list.append(SMD_WARNING)
        eqbounds = bounds.as_array() * x.sd
    else:
        eqbounds = bounds.as_array() - mu

    core = _two_one_sided(estimate, se, df, eqbounds, design.alpha, design.hypothesis)

    smd, smd_warnings = standardized_difference(
        estimate,
        x.sd,
        df,
        1.0 / math.sqrt(x.n),
        design.alpha,
        bias_correction=design.bias_correction,
        compute_ci=design.smd_ci == "nct",
        sd_name="sd",
    )
    warnings_list.extend(smd_warnings)

    original_scale = {
        "mean": x.mean,
        "conf_int": mu + core["conf_int"],
        "eqbounds": mu + eqbounds,
    }

    return TOSTParams(
        **core,
        conf_level=design.conf_level,
        alpha=design.alpha,
        eqbounds=eqbounds,
        eqbounds_input=bounds.as_array(),
        eqbound_type=bounds.eqbound_type,
        mu=mu,
        original_scale=original_scale,
        smd=smd,
        method="One Sample t-test",
        data_name=design.data_name,
    ), warnings_list


def tost_two_sample(design: TOSTDesign) -> tuple[TOSTParams, list[str]]:
    """Two-sample TOST on m1 - m2: Welch (default) or pooled."""
    x, y = design.x, design.y
    bounds = design.bounds
    warnings_list: list[str] = []

    n1, n2 = x.n, y.n
    var1, var2 = x.sd ** 2, y.sd ** 2
    estimate = x.mean - y.mean

    df_pooled = float(n1 + n2 - 2)
    sd_pooled = math.sqrt(((n1 - 1) * var1 + (n2 - 1) * var2) / df_pooled)

    if design.var_equal:
        df = df_pooled
        se = sd_pooled * math.sqrt(1.0 / n1 + 1.0 / n2)
        method = "Two Sample t-test"
    else:
        v1 = var1 / n1
        v2 = var2 / n2
        se = math.sqrt(v1 + v2)
        # Welch-Satterthwaite, fractional
        denom = v1 ** 2 / (n1 - 1) + v2 ** 2 / (n2 - 1)
        df = (v1 + v2) ** 2 / denom if denom > 0.0 else math.nan
        method = "Welch Two Sample t-test"

    if bounds.is_smd:
        warnings_list.append(SMD_WARNING)
        if not sd_pooled > 0.0:
            raise DegenerateVarianceError(
                f"pooled sd is {sd_pooled}; cannot convert SMD bounds "
                f"({bounds.low:g}, {bounds.high:g}) to raw units",
                sd_name="pooled sd",
                value=sd_pooled,
            )
        eqbounds = bounds.as_array() * sd_pooled
    else:
        eqbounds = bounds.as_array()

    core = _two_one_sided(estimate, se, df, eqbounds, design.alpha, design.hypothesis)

    smd, smd_warnings = standardized_difference(
        estimate,
        sd_pooled,
        df_pooled,
        math.sqrt(1.0 / n1 + 1.0 / n2),
        design.alpha,
        bias_correction=design.bias_correction,
        compute_ci=design.smd_ci == "nct",
    )
    warnings_list.extend(smd_warnings)

    return TOSTParams(
        **core,
        conf_level=design.conf_level,
        alpha=design.alpha,
        eqbounds=eqbounds,
        eqbounds_input=bounds.as_array(),
        eqbound_type=bounds.eqbound_type,
        smd=smd,
        method=method,
        data_name=design.data_name,
    ), warnings_list


# --- Helpers ---

def _require_finite(value: float, quantity: str, positive: bool = False) -> None:
    if not np.isfinite(value) or (positive and value <= 0.0):
        raise NumericalInstabilityError(
            f"{quantity} evaluated to {value}; inputs are too extreme "
            f"for the t distribution",
            quantity=quantity,
            value=float(value),
        )


def _two_one_sided(
    estimate: float,
    se: float,
    df: float,
    eqbounds: np.ndarray,
    alpha: float,
    hypothesis: str,
) -> dict[str, Any]:
    """
    The shared TOST arithmetic on an estimate, its standard error and df.

    Returns the TOSTParams fields that do not depend on the design type.
    """
    _require_finite(se, "se", positive=True)
    _require_finite(df, "df", positive=True)

    low, high = float(eqbounds[0]), float(eqbounds[1])
    t_lower = (estimate - low) / se
    t_upper = (estimate - high) / se
    _require_finite(t_lower, "t_lower")
    _require_finite(t_upper, "t_upper")

    if hypothesis == "EQU":
        # H0: effect <= low  and  H0: effect >= high
        p_lower = float(sp_stats.t.sf(t_lower, df))
        p_upper = float(sp_stats.t.cdf(t_upper, df))
        p_tost = max(p_lower, p_upper)
        verdict = VERDICT_EQUIVALENT if p_tost < alpha else VERDICT_NOT_EQUIVALENT
    else:
        # H0: effect >= low  and  H0: effect <= high
        p_lower = float(sp_stats.t.cdf(t_lower, df))
        p_upper = float(sp_stats.t.sf(t_upper, df))
        p_tost = min(p_lower, p_upper)
        verdict = VERDICT_MINIMAL_EFFECT if p_tost < alpha else VERDICT_NO_MINIMAL_EFFECT

    _require_finite(p_lower, "p_lower")
    _require_finite(p_upper, "p_upper")

    t_crit = float(sp_stats.t.ppf(1.0 - alpha, df))
    _require_finite(t_crit, "t_crit")
    conf_int = np.array([estimate - t_crit * se, estimate + t_crit * se])

    t_nhst = estimate / se
    p_nhst = float(2.0 * sp_stats.t.sf(abs(t_nhst), df))

    return {
        "hypothesis": hypothesis,
        "t_lower": float(t_lower),
        "p_lower": p_lower,
        "t_upper": float(t_upper),
        "p_upper": p_upper,
        "df": float(df),
        "p_tost": float(p_tost),
        "verdict": verdict,
        "estimate": float(estimate),
        "se": float(se),
        "conf_int": conf_int,
        "t_nhst": float(t_nhst),
        "p_nhst": p_nhst,
        "conclusion": _conclusion(verdict, p_nhst < alpha),
    }


def _conclusion(verdict: str, nhst_significant: bool) -> str:
    """Cross the TOST verdict with the two-sided test against zero."""
    if verdict == VERDICT_EQUIVALENT:
        return CONCLUSION_TRIVIAL if nhst_significant else CONCLUSION_EQUIVALENT
    if verdict == VERDICT_MINIMAL_EFFECT:
        return CONCLUSION_DIFFERENT
    return CONCLUSION_DIFFERENT if nhst_significant else CONCLUSION_INCONCLUSIVE
