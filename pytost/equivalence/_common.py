"""
Common types for equivalence testing.

Defines the option vocabularies, the verdict strings, and the parameter
payloads (TOSTParams, SMDParams) produced by the backend.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray


# "EQU": equivalence (effect inside the bounds)
# "MET": minimal effect (effect outside the bounds)
VALID_HYPOTHESES = ("EQU", "MET")
VALID_EQBOUND_TYPES = ("raw", "SMD")
VALID_SMD_CI = ("nct", "none")

VERDICT_EQUIVALENT = "equivalent"
VERDICT_NOT_EQUIVALENT = "not equivalent"
VERDICT_MINIMAL_EFFECT = "minimal effect"
VERDICT_NO_MINIMAL_EFFECT = "no minimal effect"

# TOST verdict crossed with the two-sided test against zero difference
CONCLUSION_EQUIVALENT = "equivalent"
CONCLUSION_DIFFERENT = "different"
CONCLUSION_TRIVIAL = "trivially different"
CONCLUSION_INCONCLUSIVE = "inconclusive"

SMD_WARNING = (
    "setting bound type to SMD produces biased results; "
    "the raw-unit test is the one with nominal error rates"
)


@dataclass(frozen=True)
class SMDParams:
    """
    Standardized mean difference and its interval.

    Attributes
    ----------
    name : str
        "Hedges's g" (bias corrected) or "Cohen's d".
    estimate : float
        Point estimate in standardized units.
    conf_int : ndarray or None
        (1 - 2*alpha) interval from noncentral t inversion, shape (2,).
        None when smd_ci="none".
    df : float
        Degrees of freedom of the standardizer (n - 1 or n1 + n2 - 2).
    correction : float
        Multiplicative small-sample correction J (1.0 for Cohen's d).
    standardizer : float
        The standard deviation that divides the raw difference.
    """
    name: str
    estimate: float
    conf_int: NDArray[np.floating[Any]] | None
    df: float
    correction: float
    standardizer: float


@dataclass(frozen=True)
class TOSTParams:
    """
    Parameter payload for a two one-sided tests procedure.

    Attributes
    ----------
    hypothesis : str
        "EQU" or "MET".
    t_lower, p_lower : float
        Test against the lower bound. Under "EQU" the p-value is the
        upper tail P(T > t_lower); under "MET" the lower tail.
    t_upper, p_upper : float
        Test against the upper bound. Under "EQU" the p-value is the
        lower tail P(T < t_upper); under "MET" the upper tail.
    df : float
        Degrees of freedom (n - 1, Welch-Satterthwaite, or n1 + n2 - 2).
    p_tost : float
        max(p_lower, p_upper) for "EQU", min(...) for "MET".
    verdict : str
        One of the VERDICT_* strings.
    estimate : float
        Mean difference m1 - m2, or the one-sample deviation m - mu.
    se : float
        Standard error of the estimate.
    conf_int : ndarray
        (1 - 2*alpha) interval for the estimate, shape (2,).
    conf_level : float
        1 - 2*alpha.
    alpha : float
        Significance level of each one-sided test.
    eqbounds : ndarray
        Bounds actually tested, in raw units of the estimate, shape (2,).
    eqbounds_input : ndarray
        Bounds as the caller supplied them, shape (2,).
    eqbound_type : str
        "raw" or "SMD" (unit tag of eqbounds_input).
    t_nhst, p_nhst : float
        Two-sided t-test of the estimate against zero.
    conclusion : str
        One of the CONCLUSION_* strings.
    mu : float or None
        Reference value of a one-sample test; None for two samples.
    original_scale : dict or None
        One-sample only: {"mean": m, "conf_int": (mu + lo, mu + hi),
        "eqbounds": (mu + low', mu + high')}.
    smd : SMDParams or None
        Standardized estimate, if computed.
    method : str
        Human-readable method name.
    data_name : str
        Description of the data.
    """
    hypothesis: str
    t_lower: float
    p_lower: float
    t_upper: float
    p_upper: float
    df: float
    p_tost: float
    verdict: str
    estimate: float
    se: float
    conf_int: NDArray[np.floating[Any]]
    conf_level: float
    alpha: float
    eqbounds: NDArray[np.floating[Any]]
    eqbounds_input: NDArray[np.floating[Any]]
    eqbound_type: str
    t_nhst: float
    p_nhst: float
    conclusion: str
    mu: float | None = None
    original_scale: dict[str, Any] | None = None
    smd: SMDParams | None = None
    method: str = ""
    data_name: str = ""
