"""
Equivalence testing module.

Two one-sided tests (TOST) for one sample against a reference value and
for two independent samples, with raw or standardized bounds.

Public API:
    tsum_tost(m1, sd1, n1, [m2, sd2, n2])  - TOST from summary statistics
    t_tost(x, [y])                         - TOST from raw observations
    summaries_by_group(values, groups)     - split a column into two summaries
    t_test_power(d, n1, [n2])              - power of a t-test
    effect_size_for_power(n1, [n2])        - effect detectable at a given power
"""

from pytost.equivalence.solvers import tsum_tost, t_tost
from pytost.equivalence.design import (
    EquivalenceBounds,
    SampleSummary,
    TOSTDesign,
    summaries_by_group,
)
from pytost.equivalence.power import t_test_power, effect_size_for_power
from pytost.equivalence._common import SMDParams, TOSTParams
from pytost.equivalence.solution import TOSTSolution

__all__ = [
    "tsum_tost",
    "t_tost",
    "summaries_by_group",
    "t_test_power",
    "effect_size_for_power",
    "EquivalenceBounds",
    "SampleSummary",
    "TOSTDesign",
    "SMDParams",
    "TOSTParams",
    "TOSTSolution",
]
