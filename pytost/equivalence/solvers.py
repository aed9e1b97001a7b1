"""
Solver dispatch for equivalence tests.

Provides TOSTER-named functions:
    tsum_tost() - from summary statistics (mean, sd, n)
    t_tost()    - from raw observations
"""

from __future__ import annotations

import warnings
from typing import Literal

from numpy.typing import ArrayLike

from pytost.core.exceptions import ValidationError
from pytost.equivalence._common import SMD_WARNING
from pytost.equivalence.design import (
    EquivalenceBounds,
    SampleSummary,
    TOSTDesign,
)
from pytost.equivalence.solution import TOSTSolution
from pytost.equivalence.backends.cpu import CPUEquivalenceBackend


def _get_backend(backend: str = 'cpu'):
    """Select backend. TOST is closed-form; only the CPU backend exists."""
    if backend in ('cpu', 'auto'):
        return CPUEquivalenceBackend()
    raise ValidationError(
        f"Unknown backend: {backend!r}. Use 'cpu'."
    )


def _solve(design: TOSTDesign, backend: str) -> TOSTSolution:
    be = _get_backend(backend)
    result = be.solve(design)
    for message in result.warnings:
        category = UserWarning if message == SMD_WARNING else RuntimeWarning
        warnings.warn(message, category, stacklevel=3)
    return TOSTSolution(_result=result, _design=design)


def _bounds(
    low_eqbound: float | None,
    high_eqbound: float | None,
    eqbound_type: str,
) -> EquivalenceBounds:
    if low_eqbound is None or high_eqbound is None:
        raise ValidationError(
            "both low_eqbound and high_eqbound are required"
        )
    return EquivalenceBounds(low_eqbound, high_eqbound, eqbound_type)


def tsum_tost(
    m1: float | TOSTDesign,
    sd1: float | None = None,
    n1: int | None = None,
    m2: float | None = None,
    sd2: float | None = None,
    n2: int | None = None,
    *,
    low_eqbound: float | None = None,
    high_eqbound: float | None = None,
    mu: float | None = None,
    hypothesis: Literal["EQU", "MET"] = "EQU",
    eqbound_type: Literal["raw", "SMD"] = "raw",
    alpha: float = 0.05,
    var_equal: bool = False,
    smd_ci: Literal["nct", "none"] = "nct",
    bias_correction: bool = True,
    backend: str = 'cpu',
) -> TOSTSolution:
    """
    TOST from summary statistics. Mirrors TOSTER tsum_TOST().

    With only group 1 given (m1, sd1, n1) this is a one-sample test
    against mu; with group 2 as well it is a two-sample test on m1 - m2.

    Parameters
    ----------
    m1, sd1, n1 : float, float, int
        Mean, standard deviation (ddof=1) and size of sample 1.
        m1 may instead be a pre-built TOSTDesign.
    m2, sd2, n2 : float, float, int, optional
        The same for sample 2.
    low_eqbound, high_eqbound : float
        Equivalence bounds. For one sample with eqbound_type="raw" these
        are absolute values on the data scale (e.g. 88 and 100 around
        mu=50), converted internally to offsets from mu. With
        eqbound_type="SMD" they are standardized mean differences.
    mu : float
        Reference value. Required for one sample, not used for two.
    hypothesis : str
        "EQU" (equivalence, default) or "MET" (minimal effect).
    eqbound_type : str
        "raw" (default) or "SMD".
    alpha : float
        Level of each one-sided test. Intervals are at 1 - 2*alpha.
    var_equal : bool
        Two samples only. False (default) uses Welch's t with
        Welch-Satterthwaite df; True uses the pooled-variance t.
    smd_ci : str
        "nct" (default) for a noncentral-t interval on the standardized
        effect, "none" to report only the point estimate.
    bias_correction : bool
        Report Hedges's g (default) rather than Cohen's d.
    backend : str
        'cpu' (default).

    Returns
    -------
    TOSTSolution
    """
    if isinstance(m1, TOSTDesign):
        return _solve(m1, backend)

    if sd1 is None or n1 is None:
        raise ValidationError("m1, sd1 and n1 are all required")
    bounds = _bounds(low_eqbound, high_eqbound, eqbound_type)
    x = SampleSummary(m1, sd1, n1)

    group2 = (m2, sd2, n2)
    if all(v is None for v in group2):
        if mu is None:
            raise ValidationError("mu is required for a one-sample test")
        design = TOSTDesign.for_one_sample(
            x, bounds,
            mu=mu,
            alpha=alpha,
            hypothesis=hypothesis,
            smd_ci=smd_ci,
            bias_correction=bias_correction,
            data_name="summary statistics",
        )
    elif any(v is None for v in group2):
        raise ValidationError(
            "m2, sd2 and n2 must be given together for a two-sample test"
        )
    else:
        if mu is not None:
            raise ValidationError(
                "mu is only used for one-sample tests; express a shifted "
                "comparison through the bounds instead"
            )
        y = SampleSummary(m2, sd2, n2)
        design = TOSTDesign.for_two_sample(
            x, y, bounds,
            alpha=alpha,
            hypothesis=hypothesis,
            var_equal=var_equal,
            smd_ci=smd_ci,
            bias_correction=bias_correction,
            data_name="summary statistics",
        )

    return _solve(design, backend)


def t_tost(
    x: ArrayLike | TOSTDesign,
    y: ArrayLike | None = None,
    *,
    low_eqbound: float | None = None,
    high_eqbound: float | None = None,
    mu: float | None = None,
    hypothesis: Literal["EQU", "MET"] = "EQU",
    eqbound_type: Literal["raw", "SMD"] = "raw",
    alpha: float = 0.05,
    var_equal: bool = False,
    smd_ci: Literal["nct", "none"] = "nct",
    bias_correction: bool = True,
    backend: str = 'cpu',
) -> TOSTSolution:
    """
    TOST from raw observations. Mirrors TOSTER t_TOST().

    NaN values are removed from each sample before summarizing. See
    tsum_tost() for the meaning of the remaining parameters.

    Parameters
    ----------
    x : array-like or TOSTDesign
        Sample 1 (1D numeric), or a pre-built TOSTDesign.
    y : array-like or None
        Sample 2 for a two-sample test; None for one sample against mu.
    """
    if isinstance(x, TOSTDesign):
        return _solve(x, backend)

    bounds = _bounds(low_eqbound, high_eqbound, eqbound_type)
    sx = SampleSummary.from_data(x, "x")

    if y is None:
        if mu is None:
            raise ValidationError("mu is required for a one-sample test")
        design = TOSTDesign.for_one_sample(
            sx, bounds,
            mu=mu,
            alpha=alpha,
            hypothesis=hypothesis,
            smd_ci=smd_ci,
            bias_correction=bias_correction,
            data_name="x",
        )
    else:
        if mu is not None:
            raise ValidationError(
                "mu is only used for one-sample tests; express a shifted "
                "comparison through the bounds instead"
            )
        sy = SampleSummary.from_data(y, "y")
        design = TOSTDesign.for_two_sample(
            sx, sy, bounds,
            alpha=alpha,
            hypothesis=hypothesis,
            var_equal=var_equal,
            smd_ci=smd_ci,
            bias_correction=bias_correction,
            data_name="x and y",
        )

    return _solve(design, backend)
