"""
CPU backend for equivalence tests.

Dispatches to the one- or two-sample implementation based on
design.test_type and wraps the payload in a Result.
"""

from __future__ import annotations

from pytost.core.result import Result
from pytost.core.compute.timing import Timer
from pytost.equivalence._common import TOSTParams
from pytost.equivalence.design import TOSTDesign
from pytost.equivalence.backends._tost import tost_one_sample, tost_two_sample


class CPUEquivalenceBackend:
    """CPU reference backend for TOST."""

    @property
    def name(self) -> str:
        return 'cpu_equivalence'

    def solve(self, design: TOSTDesign) -> Result[TOSTParams]:
        """Run the test described by design."""
        timer = Timer()
        timer.start()

        test_type = design.test_type

        with timer.section(test_type):
            if test_type == "tost_one_sample":
                params, warnings_list = tost_one_sample(design)
            elif test_type == "tost_two_sample":
                params, warnings_list = tost_two_sample(design)
            else:
                raise ValueError(f"Unknown test_type: {test_type!r}")

        timer.stop()

        return Result(
            params=params,
            info={
                'test_type': test_type,
                'hypothesis': design.hypothesis,
                'eqbound_type': design.bounds.eqbound_type,
                'var_equal': design.var_equal,
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )
