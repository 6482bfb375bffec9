"""
Input validation utilities for PySurvLab.

These validators follow the "fail fast, fail loud" principle for contract
violations: malformed arrays and out-of-domain parameters raise immediately
with clear error messages. Statistical degeneracies are NOT validated here;
the estimators handle those by omission.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import math
import numbers

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pysurvlab.core.exceptions import (
    DimensionError,
    InvalidParameterError,
    ValidationError,
)


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to a float64 numpy array.

    Rejects inputs that result in object dtype (mixed types) or in a
    non-numeric dtype. Booleans are accepted and converted to 0/1.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with float64 dtype

    Raises:
        ValidationError: If input cannot be converted to numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    if result.dtype != np.bool_ and not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    return result.astype(np.float64)


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array is 1-dimensional.

    Raises:
        DimensionError: If array is not 1D
    """
    if array.ndim != 1:
        raise DimensionError(
            f"{name}: expected 1D array, got {array.ndim}D with shape {array.shape}"
        )


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN values.

    +inf is allowed: an uncensored subject drawn with an infinite latent
    time is still a valid observation for the estimators.

    Raises:
        ValidationError: If array contains NaN
    """
    n_nan = int(np.sum(np.isnan(array)))
    if n_nan:
        raise ValidationError(f"{name}: contains {n_nan} NaN values")


def check_non_negative(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify every element is >= 0.

    Raises:
        ValidationError: If any element is negative
    """
    if np.any(array < 0):
        raise ValidationError(
            f"{name}: must be non-negative, got minimum {float(np.min(array))}"
        )


def check_consistent_length(
    *arrays: NDArray[np.floating[Any]],
    names: tuple[str, ...]
) -> None:
    """
    Verify all arrays have the same length (first dimension).

    Raises:
        ValueError: If number of names doesn't match number of arrays
        DimensionError: If arrays have inconsistent lengths
    """
    if len(arrays) != len(names):
        raise ValueError(
            f"Number of arrays ({len(arrays)}) must match number of names ({len(names)})"
        )

    if len(arrays) < 2:
        return

    lengths = [arr.shape[0] for arr in arrays]
    if len(set(lengths)) > 1:
        details = ", ".join(f"{name}={length}" for name, length in zip(names, lengths))
        raise DimensionError(f"Inconsistent lengths: {details}")


def check_count(value: Any, name: str) -> int:
    """
    Verify a sample size is a non-negative integer.

    Returns:
        The value as a Python int

    Raises:
        InvalidParameterError: If value is not an integer or is negative
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidParameterError(
            f"{name}: must be an integer, got {type(value).__name__}",
            parameter=name, value=value,
        )
    if value < 0:
        raise InvalidParameterError(
            f"{name}: must be >= 0, got {value}",
            parameter=name, value=value,
        )
    return int(value)


def check_positive(value: Any, name: str) -> float:
    """
    Verify a rate or shape parameter is finite and strictly positive.

    Returns:
        The value as a Python float

    Raises:
        InvalidParameterError: If value is not a finite number > 0
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidParameterError(
            f"{name}: must be a real number, got {type(value).__name__}",
            parameter=name, value=value,
        )
    value = float(value)
    if not math.isfinite(value) or value <= 0:
        raise InvalidParameterError(
            f"{name}: must be finite and > 0, got {value}",
            parameter=name, value=value,
        )
    return value


def check_non_negative_scalar(value: Any, name: str) -> float:
    """
    Verify a scalar is finite and >= 0.

    Raises:
        InvalidParameterError: If value is not a finite number >= 0
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidParameterError(
            f"{name}: must be a real number, got {type(value).__name__}",
            parameter=name, value=value,
        )
    value = float(value)
    if not math.isfinite(value) or value < 0:
        raise InvalidParameterError(
            f"{name}: must be finite and >= 0, got {value}",
            parameter=name, value=value,
        )
    return value


def check_censoring_rate(value: Any, name: str = "censoring_rate") -> float:
    """
    Verify a target censoring proportion lies in [0, 1).

    A rate of exactly 1 makes the censoring hazard λ·c/(1−c) undefined.

    Raises:
        InvalidParameterError: If value is outside [0, 1)
    """
    value = check_non_negative_scalar(value, name)
    if value >= 1.0:
        raise InvalidParameterError(
            f"{name}: must be in [0, 1), got {value}",
            parameter=name, value=value,
        )
    return value


def check_seed(value: Any, name: str = "seed") -> int | None:
    """
    Verify a seed is None or an integer.

    Raises:
        InvalidParameterError: If value is neither None nor an integer
    """
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidParameterError(
            f"{name}: must be an integer or None, got {type(value).__name__}",
            parameter=name, value=value,
        )
    return int(value)
