"""
Input validation utilities for curvefit.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import numbers

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from curvefit.core.exceptions import (
    ValidationError,
    DimensionError,
    InvalidParameterError,
    InsufficientSamplesError,
)


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to a float64 numpy array.

    Rejects inputs that convert to object dtype (mixed types) or to a
    non-numeric dtype (strings, datetimes).

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray of dtype float64

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

    if not np.issubdtype(result.dtype, np.number) or np.issubdtype(result.dtype, np.complexfloating):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected real numeric data"
        )

    return result.astype(np.float64, copy=False)


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_ndim(array: NDArray[np.floating[Any]], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 1-dimensional."""
    check_ndim(array, 1, name)


def check_2d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 2-dimensional."""
    check_ndim(array, 2, name)


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


def check_min_samples(array: NDArray[np.floating[Any]], min_samples: int, name: str) -> None:
    """
    Verify array has at least the minimum number of samples.

    Raises:
        InsufficientSamplesError: If array has fewer than min_samples rows
    """
    n = array.shape[0]
    if n < min_samples:
        raise InsufficientSamplesError(
            f"{name}: requires at least {min_samples} samples, got {n}",
            n_samples=n,
            required=min_samples,
        )


def check_int_param(value: object, name: str, minimum: int) -> int:
    """
    Verify a model parameter is an integer no smaller than `minimum`.

    Booleans are rejected even though bool is a subclass of int, and so
    are floats, even integral ones: a degree of 2.0 is almost always a
    parsing bug upstream.

    Returns:
        The value as a plain int

    Raises:
        InvalidParameterError: If value is not an int or is below minimum
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidParameterError(
            f"{name}: expected an integer, got {type(value).__name__} {value!r}",
            parameter=name,
            value=value,
        )
    if value < minimum:
        raise InvalidParameterError(
            f"{name}: must be >= {minimum}, got {value}",
            parameter=name,
            value=value,
        )
    return int(value)


def check_xy(x: ArrayLike, y: ArrayLike) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]]]:
    """
    Validate a sample set: two finite 1-D arrays of equal length N >= 2.

    Column vectors of shape (n, 1) are flattened; anything else that is
    not 1-D is a DimensionError (there is a single predictor).

    Returns:
        (x, y) as float64 arrays
    """
    x_arr = check_array(x, 'x')
    y_arr = check_array(y, 'y')

    if x_arr.ndim == 2 and x_arr.shape[1] == 1:
        x_arr = x_arr.ravel()
    if y_arr.ndim == 2 and y_arr.shape[1] == 1:
        y_arr = y_arr.ravel()

    check_1d(x_arr, 'x')
    check_1d(y_arr, 'y')
    check_finite(x_arr, 'x')
    check_finite(y_arr, 'y')
    check_consistent_length(x_arr, y_arr, names=('x', 'y'))
    check_min_samples(x_arr, 2, 'x')

    return x_arr, y_arr
