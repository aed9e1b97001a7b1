"""
Inputs for equivalence tests.

SampleSummary holds one group's descriptive statistics, EquivalenceBounds
holds the region of practical equivalence with its unit tag, and
TOSTDesign bundles them with the test configuration. TOSTDesign is built
through factory classmethods that validate everything up front; once
built it is immutable.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Sequence

import numpy as np
from numpy.typing import ArrayLike

from pytost.core.exceptions import ValidationError
from pytost.core.validation import (
    check_array,
    check_choice,
    check_finite_scalar,
    check_interval,
    check_positive,
    check_probability,
    check_sample_size,
)
from pytost.equivalence._common import (
    VALID_EQBOUND_TYPES,
    VALID_HYPOTHESES,
    VALID_SMD_CI,
)


@dataclass(frozen=True)
class SampleSummary:
    """
    Descriptive statistics of one sample: mean, standard deviation, size.

    The standard deviation is the ddof=1 (sample) estimate. A summary with
    sd == 0 can be built (constant data); the tests reject it.
    """
    mean: float
    sd: float
    n: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "mean", check_finite_scalar(self.mean, "mean"))
        sd = check_finite_scalar(self.sd, "sd")
        if sd < 0.0:
            raise ValidationError(f"sd: must be >= 0, got {sd}")
        object.__setattr__(self, "sd", sd)
        object.__setattr__(self, "n", check_sample_size(self.n, "n"))

    @property
    def se(self) -> float:
        """Standard error of the mean."""
        return self.sd / math.sqrt(self.n)

    @classmethod
    def from_data(cls, x: ArrayLike, name: str = "x") -> SampleSummary:
        """
        Reduce raw observations to a summary. NaN values are dropped.

        Parameters
        ----------
        x : array-like
            1D numeric observations (list, ndarray, pandas Series).
        name : str
            Used in error messages.
        """
        arr = check_array(x, name)
        arr = arr[~np.isnan(arr)]
        if len(arr) < 2:
            raise ValidationError(
                f"Need at least 2 non-missing observations in {name}, got {len(arr)}"
            )
        if not np.all(np.isfinite(arr)):
            raise ValidationError(f"{name}: contains infinite values")
        return cls(
            mean=float(np.mean(arr)),
            sd=float(np.std(arr, ddof=1)),
            n=len(arr),
        )


def _is_missing_label(label: Any) -> bool:
    if label is None:
        return True
    return isinstance(label, float) and math.isnan(label)


def summaries_by_group(
    values: ArrayLike,
    groups: ArrayLike,
    *,
    levels: Sequence[Any] | None = None,
) -> tuple[SampleSummary, SampleSummary]:
    """
    Split a numeric column by a two-level grouping column.

    Parameters
    ----------
    values : array-like
        Numeric outcome, one entry per observation. NaN rows are dropped.
    groups : array-like
        Condition label per observation (strings, ints, ...). Rows with a
        missing label (None or NaN) are dropped.
    levels : sequence of two labels, optional
        Which level is group 1 and which is group 2. Defaults to the
        order in which the levels first appear.

    Returns
    -------
    (SampleSummary, SampleSummary)
    """
    vals = check_array(values, "values")
    labels = np.asarray(groups, dtype=object).ravel().tolist()
    if len(labels) != len(vals):
        raise ValidationError(
            f"values and groups must have the same length, "
            f"got {len(vals)} and {len(labels)}"
        )

    keep = [
        i for i, lab in enumerate(labels)
        if not _is_missing_label(lab) and not np.isnan(vals[i])
    ]
    seen = list(dict.fromkeys(labels[i] for i in keep))

    if levels is None:
        if len(seen) != 2:
            raise ValidationError(
                f"groups must have exactly 2 levels, got {len(seen)}: {seen!r}"
            )
        levels = seen
    else:
        levels = list(levels)
        if len(levels) != 2 or levels[0] == levels[1]:
            raise ValidationError(
                f"levels must name 2 distinct groups, got {levels!r}"
            )
        missing = [lev for lev in levels if lev not in seen]
        if missing:
            raise ValidationError(f"levels not found in groups: {missing!r}")

    out = []
    for lev in levels:
        idx = [i for i in keep if labels[i] == lev]
        out.append(SampleSummary.from_data(vals[idx], name=f"group {lev!r}"))
    return out[0], out[1]


@dataclass(frozen=True)
class EquivalenceBounds:
    """
    Region considered practically equivalent, with its unit tag.

    eqbound_type is "raw" (units of the outcome) or "SMD" (standardized
    mean difference). For a one-sample test raw bounds are absolute target
    values and SMD bounds are offsets from mu in units of the sample sd.
    """
    low: float
    high: float
    eqbound_type: str = "raw"

    def __post_init__(self) -> None:
        low, high = check_interval(self.low, self.high, "eqbounds")
        object.__setattr__(self, "low", low)
        object.__setattr__(self, "high", high)
        check_choice(self.eqbound_type, VALID_EQBOUND_TYPES, "eqbound_type")

    @property
    def is_smd(self) -> bool:
        return self.eqbound_type == "SMD"

    def as_array(self) -> np.ndarray:
        return np.array([self.low, self.high], dtype=np.float64)


def _coerce_bounds(
    bounds: EquivalenceBounds | Sequence[float],
    eqbound_type: str,
) -> EquivalenceBounds:
    if isinstance(bounds, EquivalenceBounds):
        return bounds
    try:
        low, high = bounds
    except (TypeError, ValueError) as e:
        raise ValidationError(
            f"eqbounds must be a (low, high) pair, got {bounds!r}"
        ) from e
    return EquivalenceBounds(low, high, eqbound_type)


def _check_usable(summary: SampleSummary, name: str) -> SampleSummary:
    if not isinstance(summary, SampleSummary):
        raise ValidationError(
            f"{name} must be a SampleSummary, got {type(summary).__name__}"
        )
    check_positive(summary.sd, f"{name}.sd")
    return summary


def _check_alpha(alpha: float) -> float:
    """alpha in (0, 0.5): the reported interval is at 1 - 2*alpha."""
    alpha = check_probability(alpha, "alpha")
    if alpha >= 0.5:
        raise ValidationError(
            f"alpha must be < 0.5 so that the 1 - 2*alpha interval "
            f"is non-empty, got {alpha}"
        )
    return alpha


@dataclass(frozen=True)
class TOSTDesign:
    """
    Design for a two one-sided tests procedure.

    The `test_type` field is "tost_one_sample" or "tost_two_sample" and
    decides which fields are populated.

    Do not construct directly; use for_one_sample() / for_two_sample().
    """
    test_type: str

    _x: SampleSummary
    _y: SampleSummary | None
    _bounds: EquivalenceBounds
    _mu: float | None = None

    # Test configuration
    _alpha: float = 0.05
    _hypothesis: str = "EQU"
    _var_equal: bool = False
    _smd_ci: str = "nct"
    _bias_correction: bool = True

    # Metadata
    _data_name: str = ""

    # --- Properties ---

    @property
    def x(self) -> SampleSummary:
        return self._x

    @property
    def y(self) -> SampleSummary | None:
        return self._y

    @property
    def bounds(self) -> EquivalenceBounds:
        return self._bounds

    @property
    def mu(self) -> float | None:
        return self._mu

    @property
    def alpha(self) -> float:
        return self._alpha

    @property
    def conf_level(self) -> float:
        return 1.0 - 2.0 * self._alpha

    @property
    def hypothesis(self) -> str:
        return self._hypothesis

    @property
    def var_equal(self) -> bool:
        return self._var_equal

    @property
    def smd_ci(self) -> str:
        return self._smd_ci

    @property
    def bias_correction(self) -> bool:
        return self._bias_correction

    @property
    def data_name(self) -> str:
        return self._data_name

    # --- Factory classmethods ---

    @classmethod
    def for_one_sample(
        cls,
        x: SampleSummary,
        bounds: EquivalenceBounds | Sequence[float],
        *,
        mu: float,
        eqbound_type: str = "raw",
        alpha: float = 0.05,
        hypothesis: str = "EQU",
        smd_ci: str = "nct",
        bias_correction: bool = True,
        data_name: str = "x",
    ) -> TOSTDesign:
        """
        Build design for a one-sample test against reference value mu.

        Raw bounds are absolute target values (e.g. (88, 100) around
        mu=50); they are converted to offsets from mu by the backend.
        """
        x = _check_usable(x, "x")
        mu = check_finite_scalar(mu, "mu")
        bounds = _coerce_bounds(bounds, eqbound_type)
        alpha = _check_alpha(alpha)
        hypothesis = check_choice(hypothesis, VALID_HYPOTHESES, "hypothesis")
        smd_ci = check_choice(smd_ci, VALID_SMD_CI, "smd_ci")

        return cls(
            test_type="tost_one_sample",
            _x=x,
            _y=None,
            _bounds=bounds,
            _mu=mu,
            _alpha=alpha,
            _hypothesis=hypothesis,
            _smd_ci=smd_ci,
            _bias_correction=bool(bias_correction),
            _data_name=data_name,
        )

    @classmethod
    def for_two_sample(
        cls,
        x: SampleSummary,
        y: SampleSummary,
        bounds: EquivalenceBounds | Sequence[float],
        *,
        eqbound_type: str = "raw",
        alpha: float = 0.05,
        hypothesis: str = "EQU",
        var_equal: bool = False,
        smd_ci: str = "nct",
        bias_correction: bool = True,
        data_name: str = "x and y",
    ) -> TOSTDesign:
        """
        Build design for two independent samples, testing m1 - m2.

        Welch's unequal-variance t is the default; var_equal=True uses
        the pooled-variance Student t.
        """
        x = _check_usable(x, "x")
        y = _check_usable(y, "y")
        bounds = _coerce_bounds(bounds, eqbound_type)
        alpha = _check_alpha(alpha)
        hypothesis = check_choice(hypothesis, VALID_HYPOTHESES, "hypothesis")
        smd_ci = check_choice(smd_ci, VALID_SMD_CI, "smd_ci")

        return cls(
            test_type="tost_two_sample",
            _x=x,
            _y=y,
            _bounds=bounds,
            _alpha=alpha,
            _hypothesis=hypothesis,
            _var_equal=bool(var_equal),
            _smd_ci=smd_ci,
            _bias_correction=bool(bias_correction),
            _data_name=data_name,
        )

    def __repr__(self) -> str:
        b = self._bounds
        if self._y is not None:
            return (
                f"TOSTDesign(test_type={self.test_type!r}, "
                f"n_x={self._x.n}, n_y={self._y.n}, "
                f"eqbounds=({b.low:g}, {b.high:g}) {b.eqbound_type})"
            )
        return (
            f"TOSTDesign(test_type={self.test_type!r}, n={self._x.n}, "
            f"mu={self._mu:g}, eqbounds=({b.low:g}, {b.high:g}) {b.eqbound_type})"
        )
