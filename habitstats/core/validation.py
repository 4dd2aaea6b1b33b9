"""
Input validation utilities for habitstats.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about caller intent. The regression service turns
the raised errors into a refusal; nothing here returns a sentinel.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

from collections.abc import Sized

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from habitstats.core.exceptions import ValidationError, DimensionError


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to a float64 numpy array.

    Accepts any array-like. Rejects inputs that result in object dtype
    (mixed types) or non-numeric dtypes (strings, bytes, datetimes).

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray of dtype float64

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

    if result.dtype == np.bool_:
        return result.astype(np.float64)

    if not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
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


def check_consistent_length(
    *sequences: Sized,
    names: tuple[str, ...]
) -> None:
    """
    Verify all sequences have the same length.

    Works on arrays and plain sequences alike (habit names are tuples of
    strings, the numeric inputs are arrays).

    Args:
        *sequences: Sequences to check
        names: Parameter names for error messages (must match number of sequences)

    Raises:
        ValueError: If number of names doesn't match number of sequences
        DimensionError: If sequences have inconsistent lengths
    """
    if len(sequences) != len(names):
        raise ValueError(
            f"Number of sequences ({len(sequences)}) must match number of names ({len(names)})"
        )

    if len(sequences) < 2:
        return

    lengths = [len(seq) for seq in sequences]
    if len(set(lengths)) > 1:
        details = ", ".join(f"{name}={length}" for name, length in zip(names, lengths))
        raise DimensionError(f"Inconsistent lengths: {details}")


def check_flat_size(
    array: NDArray[np.floating[Any]],
    n_rows: int,
    n_cols: int,
    name: str,
) -> None:
    """
    Verify a flat column-major buffer holds exactly n_rows * n_cols values.

    Raises:
        DimensionError: If the buffer size disagrees with the declared shape
    """
    expected = n_rows * n_cols
    if array.size != expected:
        raise DimensionError(
            f"{name}: expected {expected} values ({n_rows} rows x {n_cols} columns), "
            f"got {array.size}"
        )


def check_unit_interval(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify every value lies in [0, 1].

    Raises:
        ValidationError: If any value is outside the unit interval
    """
    outside = np.where((array < 0.0) | (array > 1.0))[0]
    if len(outside) > 0:
        raise ValidationError(
            f"{name}: values at positions {outside.tolist()} are outside [0, 1]"
        )


def check_nonempty_labels(labels: tuple[str, ...], name: str) -> None:
    """
    Verify there is at least one label and every label is a string.

    Raises:
        DimensionError: If no labels were given
        ValidationError: If a label is not a string
    """
    if len(labels) == 0:
        raise DimensionError(f"{name}: requires at least one entry, got 0")
    bad = [i for i, label in enumerate(labels) if not isinstance(label, str)]
    if bad:
        raise ValidationError(f"{name}: entries at positions {bad} are not strings")
