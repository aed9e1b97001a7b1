"""
Input validation utilities for pytost.

These validators fail fast and loud: they raise immediately with the
offending value in the message rather than clamping, rounding or guessing
what the caller meant.

Design principles:
    - No silent coercion (except np.asarray on array-likes)
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import math
from numbers import Integral, Real

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pytost.core.exceptions import ValidationError


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to a 1D float64 array.

    Accepts lists, numpy arrays, pandas Series, or anything np.asarray
    understands. Rejects input that converts to object or non-numeric
    dtype.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        1D numpy.ndarray of float64 (NaN preserved)

    Raises:
        ValidationError: If input cannot be converted to a numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    if not (np.issubdtype(result.dtype, np.number) or result.dtype == np.bool_):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if result.ndim > 1:
        raise ValidationError(
            f"{name}: expected 1D data, got {result.ndim}D with shape {result.shape}"
        )

    return result.astype(np.float64).ravel()


def check_finite_scalar(value: Any, name: str) -> float:
    """
    Verify a scalar is a real, finite number and return it as float.

    Raises:
        ValidationError: If value is not a real number, or is NaN/Inf
    """
    if isinstance(value, bool) or not isinstance(value, (Real, np.number)):
        raise ValidationError(
            f"{name}: expected a real number, got {type(value).__name__}"
        )
    value = float(value)
    if not math.isfinite(value):
        raise ValidationError(f"{name}: must be finite, got {value}")
    return value


def check_positive(value: float, name: str) -> float:
    """
    Verify a scalar is finite and strictly positive.

    Raises:
        ValidationError: If value <= 0 or not finite
    """
    value = check_finite_scalar(value, name)
    if value <= 0.0:
        raise ValidationError(f"{name}: must be > 0, got {value}")
    return value


def check_probability(value: float, name: str) -> float:
    """
    Verify a scalar lies in the open interval (0, 1).

    Used for significance levels and power targets.

    Raises:
        ValidationError: If value is outside (0, 1)
    """
    value = check_finite_scalar(value, name)
    if not (0.0 < value < 1.0):
        raise ValidationError(f"{name} must be in (0, 1), got {value}")
    return value


def check_sample_size(n: Any, name: str, min_samples: int = 2) -> int:
    """
    Verify a sample size is an integer of at least min_samples.

    Integral floats (e.g. 57.0) are accepted; 57.5 is not.

    Raises:
        ValidationError: If n is not integral or n < min_samples
    """
    if isinstance(n, bool):
        raise ValidationError(f"{name}: expected an integer, got bool")
    if isinstance(n, (Integral, np.integer)):
        n_int = int(n)
    elif isinstance(n, (Real, np.floating)) and float(n).is_integer():
        n_int = int(n)
    else:
        raise ValidationError(f"{name}: expected an integer, got {n!r}")

    if n_int < min_samples:
        raise ValidationError(
            f"{name}: requires at least {min_samples} observations, got {n_int}"
        )
    return n_int


def check_interval(low: float, high: float, name: str) -> tuple[float, float]:
    """
    Verify (low, high) are finite and strictly ordered.

    Raises:
        ValidationError: If low >= high or either end is not finite
    """
    low = check_finite_scalar(low, f"{name} low")
    high = check_finite_scalar(high, f"{name} high")
    if low >= high:
        raise ValidationError(
            f"{name}: low must be < high, got low={low}, high={high}"
        )
    return low, high


def check_choice(value: str, choices: tuple[str, ...], name: str) -> str:
    """
    Verify value is one of the allowed option strings.

    Raises:
        ValidationError: If value is not in choices
    """
    if value not in choices:
        raise ValidationError(
            f"{name} must be one of {choices}, got {value!r}"
        )
    return value
