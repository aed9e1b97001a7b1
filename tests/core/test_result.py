"""
Tests for the generic Result envelope.
"""

from dataclasses import FrozenInstanceError, dataclass

import pytest

from pytost.core.result import Result


@dataclass(frozen=True)
class FakeParams:
    value: float


def _result(**kwargs):
    defaults = dict(
        params=FakeParams(value=1.0),
        info={},
        timing=None,
        backend_name="cpu",
    )
    defaults.update(kwargs)
    return Result(**defaults)


# ═══════════════════════════════════════════════════════════════════════
# Construction
# ═══════════════════════════════════════════════════════════════════════


class TestConstruction:

    def test_fields(self):
        result = _result(
            info={"test_type": "tost_two_sample", "hypothesis": "EQU"},
            timing={"total_seconds": 0.5, "tost_two_sample": 0.4},
            backend_name="cpu_equivalence",
        )
        assert result.params.value == 1.0
        assert result.info["hypothesis"] == "EQU"
        assert result.timing["tost_two_sample"] == 0.4
        assert result.backend_name == "cpu_equivalence"

    def test_timing_none(self):
        assert _result().timing is None


# ═══════════════════════════════════════════════════════════════════════
# Warnings
# ═══════════════════════════════════════════════════════════════════════


class TestWarnings:

    def test_default_empty_tuple(self):
        result = _result()
        assert result.warnings == ()
        assert isinstance(result.warnings, tuple)

    def test_has_warning_substring(self):
        result = _result(warnings=("setting bound type to SMD produces biased results",
                                   "no bracket for the upper ncp"))
        assert result.has_warning("biased")
        assert result.has_warning("ncp")
        assert not result.has_warning("convergence")

    def test_has_warning_on_empty(self):
        assert not _result().has_warning("")


# ═══════════════════════════════════════════════════════════════════════
# Immutability
# ═══════════════════════════════════════════════════════════════════════


class TestImmutability:
    """Result is frozen; no attribute mutation allowed."""

    @pytest.mark.parametrize("attr, value", [
        ("params", FakeParams(value=2.0)),
        ("backend_name", "gpu"),
        ("warnings", ("new warning",)),
        ("timing", None),
    ])
    def test_cannot_set(self, attr, value):
        result = _result(timing={"total_seconds": 0.5})
        with pytest.raises(FrozenInstanceError):
            setattr(result, attr, value)
