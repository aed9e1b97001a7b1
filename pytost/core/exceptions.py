"""
Exception hierarchy for pytost.

All exceptions inherit from PyTostError so callers can catch any
library-specific failure in one place. Input problems are ValidationError
and are raised before any computation starts; failures of the computation
itself are NumericalError subclasses.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages state the actual value next to the expected one
    - No partial result is ever returned alongside an exception
"""


class PyTostError(Exception):
    """Base exception for all pytost errors."""
    pass


class ValidationError(PyTostError):
    """
    Input validation failed.

    Raised for malformed statistical inputs: non-positive standard
    deviation, fewer than two observations, alpha outside (0, 1),
    or equivalence bounds with low >= high.
    """
    pass


class NumericalError(PyTostError):
    """
    Numerical computation failed.

    Base class for errors arising while evaluating the test, after the
    inputs have passed validation.
    """
    pass


class DegenerateVarianceError(NumericalError):
    """
    A standardizing standard deviation evaluated to zero.

    Raised when standardized (SMD) bounds or a standardized effect size
    were requested but the pooled standard deviation underflows to zero,
    so converting to or from SMD units would divide by zero.

    Attributes:
        sd_name: Which standard deviation was degenerate (e.g. 'pooled sd')
        value: The value it evaluated to
    """

    def __init__(
        self,
        message: str,
        sd_name: str | None = None,
        value: float | None = None,
    ):
        super().__init__(message)
        self.sd_name = sd_name
        self.value = value


class NumericalInstabilityError(NumericalError):
    """
    An intermediate quantity is not finite.

    Raised when the standard error, degrees of freedom, a t statistic or
    a p-value evaluates to NaN or Inf for extreme inputs. The value is
    surfaced instead of being masked.

    Attributes:
        quantity: Name of the offending quantity ('se', 'df', 't_lower', ...)
        value: The non-finite (or zero) value that was produced
    """

    def __init__(
        self,
        message: str,
        quantity: str | None = None,
        value: float | None = None,
    ):
        super().__init__(message)
        self.quantity = quantity
        self.value = value
