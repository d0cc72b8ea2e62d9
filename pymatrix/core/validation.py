"""
Input validation utilities for PyMatrix.

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

from pymatrix.core.exceptions import (
    ValidationError,
    DimensionMismatchError,
    NotSquareError,
)


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to a float64 numpy array.

    Accepts any array-like and converts to numpy array. Rejects inputs
    that result in object dtype (indicating ragged rows, mixed types or
    non-numeric data).

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
            f"{name}: converted to object dtype, indicating ragged rows, "
            f"mixed types or non-numeric data"
        )

    if np.issubdtype(result.dtype, np.complexfloating):
        raise ValidationError(f"{name}: complex dtype {result.dtype}, expected real data")

    # Reject non-numeric dtypes (strings, bytes, datetime, etc.)
    if not (np.issubdtype(result.dtype, np.number) or result.dtype == np.bool_):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    return result.astype(np.float64)


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Args:
        array: Array to check
        name: Parameter name for error messages

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_2d(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array is 2-dimensional.

    Args:
        array: Array to check
        name: Parameter name for error messages

    Raises:
        DimensionMismatchError: If array is not 2D
    """
    if array.ndim != 2:
        raise DimensionMismatchError(
            f"{name}: expected 2D array, got {array.ndim}D with shape {array.shape}",
            expected=2,
            actual=array.ndim,
        )


def check_positive_dims(rows: int, cols: int, name: str) -> None:
    """
    Verify a matrix has at least one row and one column.

    Raises:
        ValidationError: If rows or cols is not an integer
        DimensionMismatchError: If rows < 1 or cols < 1
    """
    for label, value in (('rows', rows), ('cols', cols)):
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise ValidationError(
                f"{name}: {label} must be an integer, got {type(value).__name__}"
            )
    if rows < 1 or cols < 1:
        raise DimensionMismatchError(
            f"{name}: dimensions must be positive, got {rows}x{cols}",
            actual=(rows, cols),
        )


def check_length(size: int, rows: int, cols: int, name: str) -> None:
    """
    Verify a flat data buffer holds exactly rows*cols values.

    Raises:
        DimensionMismatchError: If size != rows*cols
    """
    expected = rows * cols
    if size != expected:
        raise DimensionMismatchError(
            f"{name}: {rows}x{cols} matrix needs {expected} values, got {size}",
            expected=expected,
            actual=size,
        )


def check_same_shape(
    a_shape: tuple[int, int],
    b_shape: tuple[int, int],
    names: tuple[str, str],
) -> None:
    """
    Verify two operands have identical shapes (element-wise operations).

    Raises:
        DimensionMismatchError: If shapes differ
    """
    if a_shape != b_shape:
        raise DimensionMismatchError(
            f"{names[0]} and {names[1]} must have the same dimensions: "
            f"{names[0]}={a_shape[0]}x{a_shape[1]}, {names[1]}={b_shape[0]}x{b_shape[1]}",
            expected=a_shape,
            actual=b_shape,
        )


def check_inner_dims(
    a_shape: tuple[int, int],
    b_shape: tuple[int, int],
    names: tuple[str, str],
) -> None:
    """
    Verify cols(A) == rows(B) for a matrix product.

    Raises:
        DimensionMismatchError: If the inner dimensions differ
    """
    if a_shape[1] != b_shape[0]:
        raise DimensionMismatchError(
            f"Inner dimensions must match: {names[0]} has {a_shape[1]} columns, "
            f"{names[1]} has {b_shape[0]} rows",
            expected=a_shape[1],
            actual=b_shape[0],
        )


def check_same_rows(
    a_shape: tuple[int, int],
    b_shape: tuple[int, int],
    names: tuple[str, str],
) -> None:
    """
    Verify two operands have the same number of rows (A x = b).

    Raises:
        DimensionMismatchError: If row counts differ
    """
    if a_shape[0] != b_shape[0]:
        raise DimensionMismatchError(
            f"Inconsistent rows: {names[0]}={a_shape[0]}, {names[1]}={b_shape[0]}",
            expected=a_shape[0],
            actual=b_shape[0],
        )


def check_square(shape: tuple[int, int], name: str, operation: str) -> None:
    """
    Verify a matrix is square.

    Args:
        shape: (rows, cols) of the matrix
        name: Parameter name for error messages
        operation: Operation that requires the square input

    Raises:
        NotSquareError: If rows != cols
    """
    if shape[0] != shape[1]:
        raise NotSquareError(
            f"{operation} requires a square matrix, {name} is {shape[0]}x{shape[1]}",
            shape=shape,
            operation=operation,
        )


def check_integer(value: Any, name: str) -> int:
    """
    Verify a parameter is an integer (bools rejected) and return it as int.

    Raises:
        ValidationError: If value is not integral
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ValidationError(
            f"{name}: expected an integer, got {value!r} ({type(value).__name__})"
        )
    return int(value)
