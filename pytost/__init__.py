"""
pytost: equivalence testing for Python.

Two one-sided tests (TOST) from summary statistics or raw data, with
raw or standardized equivalence bounds, following R's TOSTER.

Submodules:
    equivalence: TOST procedures, effect sizes, power helper
    core: Exceptions, result envelope, validation
"""

__version__ = "0.1.0"

from pytost import equivalence
from pytost.equivalence import (
    tsum_tost,
    t_tost,
    SampleSummary,
    EquivalenceBounds,
    summaries_by_group,
    effect_size_for_power,
)

__all__ = [
    "__version__",
    "equivalence",
    "tsum_tost",
    "t_tost",
    "SampleSummary",
    "EquivalenceBounds",
    "summaries_by_group",
    "effect_size_for_power",
]
