"""
Tests for the pytost exception hierarchy.

Validates:
    - Inheritance chain (all exceptions catchable via PyTostError)
    - Diagnostic attributes on DegenerateVarianceError and
      NumericalInstabilityError
    - Default attribute values (None for optional attributes)
"""

import pytest

from pytost.core.exceptions import (
    DegenerateVarianceError,
    NumericalError,
    NumericalInstabilityError,
    PyTostError,
    ValidationError,
)


# ═══════════════════════════════════════════════════════════════════════
# Inheritance hierarchy
# ═══════════════════════════════════════════════════════════════════════


class TestInheritance:
    """Every exception is catchable via PyTostError."""

    def test_validation_error_is_pytost_error(self):
        with pytest.raises(PyTostError):
            raise ValidationError("bad input")

    def test_numerical_errors_share_base(self):
        for exc in (DegenerateVarianceError("zero sd"),
                    NumericalInstabilityError("nan se")):
            assert isinstance(exc, NumericalError)
            assert isinstance(exc, PyTostError)
            assert not isinstance(exc, ValidationError)

    def test_not_value_error(self):
        """Library errors are not confused with builtin ValueError."""
        assert not issubclass(ValidationError, ValueError)


# ═══════════════════════════════════════════════════════════════════════
# Diagnostic attributes
# ═══════════════════════════════════════════════════════════════════════


class TestAttributes:

    def test_degenerate_variance_attributes(self):
        exc = DegenerateVarianceError("pooled sd is zero", sd_name="pooled sd", value=0.0)
        assert exc.sd_name == "pooled sd"
        assert exc.value == 0.0
        assert str(exc) == "pooled sd is zero"

    def test_degenerate_variance_defaults(self):
        exc = DegenerateVarianceError("zero")
        assert exc.sd_name is None
        assert exc.value is None

    def test_instability_attributes(self):
        exc = NumericalInstabilityError("se is not finite", quantity="se", value=float("inf"))
        assert exc.quantity == "se"
        assert exc.value == float("inf")
        assert "se" in str(exc)

    def test_instability_defaults(self):
        exc = NumericalInstabilityError("bad")
        assert exc.quantity is None
        assert exc.value is None


# ═══════════════════════════════════════════════════════════════════════
# Raised from the public API
# ═══════════════════════════════════════════════════════════════════════


class TestRaisedByTests:

    def test_bad_alpha_is_validation_error(self):
        from pytost import tsum_tost
        with pytest.raises(PyTostError):
            tsum_tost(m1=0, sd1=1, n1=10, mu=0, low_eqbound=-1,
                      high_eqbound=1, alpha=0.7)
