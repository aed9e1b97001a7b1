"""
Core infrastructure for pytost.

Shared abstractions used by the domain packages.

Key components:
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing
"""

from pytost.core.result import Result
from pytost.core.exceptions import (
    PyTostError,
    ValidationError,
    NumericalError,
    DegenerateVarianceError,
    NumericalInstabilityError,
)

__all__ = [
    # Result
    "Result",
    # Exceptions
    "PyTostError",
    "ValidationError",
    "NumericalError",
    "DegenerateVarianceError",
    "NumericalInstabilityError",
]
