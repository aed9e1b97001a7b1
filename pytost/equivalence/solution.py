"""
Equivalence test solution types.

TOSTSolution wraps Result[TOSTParams] and renders the text report.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from pytost.core.result import Result
from pytost.equivalence._common import SMDParams, TOSTParams, VERDICT_EQUIVALENT

if TYPE_CHECKING:
    from pytost.equivalence.design import TOSTDesign


@dataclass
class TOSTSolution:
    """
    User-facing TOST results.

    All fields of the payload are available as properties. summary()
    gives a printable report and plot_data() the numbers a plotting
    routine needs to draw the estimate, its interval and the bounds.
    """
    _result: Result[TOSTParams]
    _design: 'TOSTDesign | None'

    # --- The two one-sided tests ---

    @property
    def hypothesis(self) -> str:
        return self._result.params.hypothesis

    @property
    def t_lower(self) -> float:
        """t statistic against the lower bound."""
        return self._result.params.t_lower

    @property
    def p_lower(self) -> float:
        """p-value of the test against the lower bound."""
        return self._result.params.p_lower

    @property
    def t_upper(self) -> float:
        """t statistic against the upper bound."""
        return self._result.params.t_upper

    @property
    def p_upper(self) -> float:
        """p-value of the test against the upper bound."""
        return self._result.params.p_upper

    @property
    def df(self) -> float:
        return self._result.params.df

    @property
    def p_value(self) -> float:
        """The TOST p-value (max of the two for EQU, min for MET)."""
        return self._result.params.p_tost

    @property
    def verdict(self) -> str:
        return self._result.params.verdict

    @property
    def equivalent(self) -> bool:
        return self._result.params.verdict == VERDICT_EQUIVALENT

    @property
    def conclusion(self) -> str:
        """Verdict crossed with the two-sided test against zero."""
        return self._result.params.conclusion

    # --- Estimates ---

    @property
    def estimate(self) -> float:
        """m1 - m2, or m - mu for one sample."""
        return self._result.params.estimate

    @property
    def se(self) -> float:
        return self._result.params.se

    @property
    def conf_int(self) -> NDArray[np.floating[Any]]:
        """(1 - 2*alpha) interval for the estimate."""
        return self._result.params.conf_int

    @property
    def conf_level(self) -> float:
        return self._result.params.conf_level

    @property
    def alpha(self) -> float:
        return self._result.params.alpha

    @property
    def eqbounds(self) -> NDArray[np.floating[Any]]:
        """Bounds actually tested, in raw units of the estimate."""
        return self._result.params.eqbounds

    @property
    def eqbounds_input(self) -> NDArray[np.floating[Any]]:
        return self._result.params.eqbounds_input

    @property
    def eqbound_type(self) -> str:
        return self._result.params.eqbound_type

    @property
    def t_nhst(self) -> float:
        return self._result.params.t_nhst

    @property
    def p_nhst(self) -> float:
        return self._result.params.p_nhst

    @property
    def mu(self) -> float | None:
        return self._result.params.mu

    @property
    def original_scale(self) -> dict[str, Any] | None:
        """One-sample only: mean, interval and bounds back on the data scale."""
        return self._result.params.original_scale

    @property
    def smd(self) -> SMDParams | None:
        return self._result.params.smd

    @property
    def method(self) -> str:
        return self._result.params.method

    @property
    def data_name(self) -> str:
        return self._result.params.data_name

    # --- Metadata ---

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    # --- Output for collaborators ---

    def plot_data(self) -> dict[str, Any]:
        """
        Numbers for a consonance-style plot of the result.

        Raw entries are on the estimate's scale; for one-sample tests the
        'original' entry repeats them on the data scale around mu.
        """
        p = self._result.params
        data: dict[str, Any] = {
            "estimate": p.estimate,
            "conf_int": tuple(float(v) for v in p.conf_int),
            "conf_level": p.conf_level,
            "eqbounds": tuple(float(v) for v in p.eqbounds),
            "verdict": p.verdict,
        }
        if p.original_scale is not None:
            data["original"] = {
                "mean": float(p.original_scale["mean"]),
                "conf_int": tuple(float(v) for v in p.original_scale["conf_int"]),
                "eqbounds": tuple(float(v) for v in p.original_scale["eqbounds"]),
                "mu": p.mu,
            }
        if p.smd is not None:
            data["smd"] = {
                "name": p.smd.name,
                "estimate": p.smd.estimate,
                "conf_int": (
                    None if p.smd.conf_int is None
                    else tuple(float(v) for v in p.smd.conf_int)
                ),
            }
        return data

    def summary(self) -> str:
        """
        Format as a printed TOST report.

        Produces output like:
            Welch Two Sample t-test

        data:  x and y
        The equivalence test was significant, t(114.8) = -3.764, p = 1.3210e-04
        The null hypothesis test was non-significant, t(114.8) = 0.5625, p = 0.5749
        NHST: do not reject null significance hypothesis that the difference in means is equal to 0
        TOST: reject null equivalence hypothesis

        TOST Results
                               t        df     p.value
        t-test            0.5625     114.8      0.5749
        TOST Lower          4.89     114.8  1.6340e-06
        TOST Upper        -3.764     114.8  1.3210e-04

        Effect Sizes
                        Estimate        SE   90% C.I.
        Raw                  1.3     2.311   [-2.532, 5.132]
        Hedges's g        0.1031        --   [-0.1999, 0.4065]
        Equivalence bounds (raw): [-10, 10]
        Conclusion: equivalent
        """
        p = self._result.params
        lines = []

        lines.append(f"\t{p.method}")
        lines.append("")
        lines.append(f"data:  {p.data_name}")

        test_name = "equivalence" if p.hypothesis == "EQU" else "minimal effect"
        tost_sig = p.p_tost < p.alpha
        nhst_sig = p.p_nhst < p.alpha
        t_tost = p.t_lower if p.p_lower == p.p_tost else p.t_upper
        lines.append(
            f"The {test_name} test was "
            f"{'significant' if tost_sig else 'non-significant'}, "
            f"t({p.df:.4g}) = {t_tost:.4g}, p = {_format_pvalue(p.p_tost)}"
        )
        lines.append(
            f"The null hypothesis test was "
            f"{'significant' if nhst_sig else 'non-significant'}, "
            f"t({p.df:.4g}) = {p.t_nhst:.4g}, p = {_format_pvalue(p.p_nhst)}"
        )
        null_text = "mean" if p.mu is not None else "difference in means"
        lines.append(
            f"NHST: {'reject' if nhst_sig else 'do not reject'} null "
            f"significance hypothesis that the {null_text} is equal to "
            f"{p.mu if p.mu is not None else 0:g}"
        )
        lines.append(
            f"TOST: {'reject' if tost_sig else 'do not reject'} null "
            f"{test_name} hypothesis"
        )
        lines.append("")

        lines.append("TOST Results")
        lines.append(f"{'':14s}{'t':>10s}{'df':>10s}{'p.value':>12s}")
        for label, t, pv in (
            ("t-test", p.t_nhst, p.p_nhst),
            ("TOST Lower", p.t_lower, p.p_lower),
            ("TOST Upper", p.t_upper, p.p_upper),
        ):
            lines.append(
                f"{label:14s}{t:>10.4g}{p.df:>10.4g}{_format_pvalue(pv):>12s}"
            )
        lines.append("")

        pct = f"{p.conf_level * 100:g}%"
        lines.append("Effect Sizes")
        lines.append(f"{'':14s}{'Estimate':>10s}{'SE':>10s}   {pct} C.I.")
        lo, hi = p.conf_int
        lines.append(
            f"{'Raw':14s}{p.estimate:>10.4g}{p.se:>10.4g}   "
            f"[{_format_number(lo)}, {_format_number(hi)}]"
        )
        if p.smd is not None:
            if p.smd.conf_int is None:
                ci_text = "--"
            else:
                s_lo, s_hi = p.smd.conf_int
                ci_text = f"[{_format_number(s_lo)}, {_format_number(s_hi)}]"
            lines.append(
                f"{p.smd.name:14s}{p.smd.estimate:>10.4g}{'--':>10s}   {ci_text}"
            )
        if p.original_scale is not None:
            o_lo, o_hi = p.original_scale["conf_int"]
            lines.append(
                f"{'Mean':14s}{p.original_scale['mean']:>10.4g}{p.se:>10.4g}   "
                f"[{_format_number(o_lo)}, {_format_number(o_hi)}]"
            )

        b_lo, b_hi = p.eqbounds_input
        lines.append(
            f"Equivalence bounds ({p.eqbound_type}): "
            f"[{_format_number(b_lo)}, {_format_number(b_hi)}]"
        )
        if p.eqbound_type == "SMD" or p.mu is not None:
            r_lo, r_hi = p.eqbounds
            lines.append(
                f"Tested as raw offsets: [{_format_number(r_lo)}, {_format_number(r_hi)}]"
            )
        lines.append(f"Conclusion: {p.conclusion}")

        lines.append("")
        return "\n".join(lines)

    def __repr__(self) -> str:
        p = self._result.params
        return (
            f"TOSTSolution(method={p.method!r}, verdict={p.verdict!r}, "
            f"p_value={p.p_tost:.4g})"
        )


def _format_pvalue(p: float) -> str:
    """Format p-value like R does."""
    if p < 2.2e-16:
        return "< 2.2e-16"
    if p < 0.001:
        return f"{p:.4e}"
    return f"{p:.4g}"


def _format_number(x: float) -> str:
    """Format a number, handling infinity and NaN."""
    if np.isnan(x):
        return "NA"
    if np.isinf(x):
        return "-Inf" if x < 0 else "Inf"
    return f"{x:.4g}"
