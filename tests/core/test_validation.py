"""
Tests for input validation utilities.

Validates every function in core/validation.py:
    - check_array: conversion, dtype coercion, rejection of non-numeric data
    - check_finite: NaN/Inf detection
    - check_2d / check_positive_dims / check_length: grid shape
    - check_same_shape / check_inner_dims / check_same_rows: operand pairs
    - check_square, check_integer
"""

import numpy as np
import pytest

from pymatrix.core.exceptions import (
    DimensionMismatchError,
    NotSquareError,
    ValidationError,
)
from pymatrix.core.validation import (
    check_2d,
    check_array,
    check_finite,
    check_inner_dims,
    check_integer,
    check_length,
    check_positive_dims,
    check_same_rows,
    check_same_shape,
    check_square,
)


# ═══════════════════════════════════════════════════════════════════════
# check_array
# ═══════════════════════════════════════════════════════════════════════


class TestCheckArray:
    """check_array converts to float64 and rejects non-numeric data."""

    def test_list_to_float_array(self):
        result = check_array([1, 2, 3], "A")
        assert result.dtype == np.float64
        np.testing.assert_array_equal(result, [1.0, 2.0, 3.0])

    def test_int_array_promoted_to_float(self):
        result = check_array(np.array([[1, 2]], dtype=np.int32), "A")
        assert result.dtype == np.float64

    def test_bool_accepted(self):
        result = check_array([True, False], "A")
        np.testing.assert_array_equal(result, [1.0, 0.0])

    def test_ragged_rows_rejected(self):
        with pytest.raises(ValidationError, match="A"):
            check_array([[1, 2], [3]], "A")

    def test_strings_rejected(self):
        with pytest.raises(ValidationError, match="non-numeric"):
            check_array(["a", "b"], "A")

    def test_complex_rejected(self):
        with pytest.raises(ValidationError, match="complex"):
            check_array([1 + 2j, 3], "A")

    def test_returns_copy_independent_of_input_dtype(self):
        source = np.array([1.5, 2.5], dtype=np.float32)
        result = check_array(source, "A")
        assert result.dtype == np.float64


# ═══════════════════════════════════════════════════════════════════════
# check_finite
# ═══════════════════════════════════════════════════════════════════════


class TestCheckFinite:

    def test_finite_passes(self):
        check_finite(np.array([1.0, -2.0, 0.0]), "A")

    def test_nan_rejected(self):
        with pytest.raises(ValidationError, match="1 NaN"):
            check_finite(np.array([1.0, np.nan]), "A")

    def test_inf_rejected(self):
        with pytest.raises(ValidationError, match="2 Inf"):
            check_finite(np.array([np.inf, -np.inf]), "A")


# ═══════════════════════════════════════════════════════════════════════
# Grid shape
# ═══════════════════════════════════════════════════════════════════════


class TestGridShape:

    def test_check_2d_passes(self):
        check_2d(np.zeros((2, 3)), "A")

    def test_check_2d_rejects_1d(self):
        with pytest.raises(DimensionMismatchError) as exc_info:
            check_2d(np.zeros(3), "A")
        assert exc_info.value.actual == 1

    def test_positive_dims_pass(self):
        check_positive_dims(1, 1, "A")

    @pytest.mark.parametrize("rows,cols", [(0, 2), (2, 0), (-1, 3)])
    def test_non_positive_dims_rejected(self, rows, cols):
        with pytest.raises(DimensionMismatchError):
            check_positive_dims(rows, cols, "A")

    def test_non_integer_dims_rejected(self):
        with pytest.raises(ValidationError, match="rows must be an integer"):
            check_positive_dims(2.0, 2, "A")

    def test_bool_dims_rejected(self):
        with pytest.raises(ValidationError):
            check_positive_dims(True, 2, "A")

    def test_length_matches(self):
        check_length(6, 2, 3, "A")

    def test_length_mismatch(self):
        with pytest.raises(DimensionMismatchError, match="needs 6 values, got 5") as exc_info:
            check_length(5, 2, 3, "A")
        assert exc_info.value.expected == 6
        assert exc_info.value.actual == 5


# ═══════════════════════════════════════════════════════════════════════
# Operand pairs
# ═══════════════════════════════════════════════════════════════════════


class TestOperandPairs:

    def test_same_shape_passes(self):
        check_same_shape((2, 3), (2, 3), ("A", "B"))

    def test_same_shape_mismatch(self):
        with pytest.raises(DimensionMismatchError, match="same dimensions"):
            check_same_shape((2, 3), (3, 2), ("A", "B"))

    def test_inner_dims_pass(self):
        check_inner_dims((2, 3), (3, 4), ("A", "B"))

    def test_inner_dims_mismatch(self):
        with pytest.raises(DimensionMismatchError, match="A has 3 columns, B has 2 rows"):
            check_inner_dims((2, 3), (2, 3), ("A", "B"))

    def test_same_rows_pass(self):
        check_same_rows((3, 3), (3, 1), ("A", "b"))

    def test_same_rows_mismatch(self):
        with pytest.raises(DimensionMismatchError):
            check_same_rows((3, 3), (2, 1), ("A", "b"))


# ═══════════════════════════════════════════════════════════════════════
# check_square / check_integer
# ═══════════════════════════════════════════════════════════════════════


class TestCheckSquare:

    def test_square_passes(self):
        check_square((3, 3), "A", "inverse")

    def test_rectangular_rejected(self):
        with pytest.raises(NotSquareError) as exc_info:
            check_square((2, 3), "A", "inverse")
        assert exc_info.value.shape == (2, 3)
        assert exc_info.value.operation == "inverse"
        assert "2x3" in str(exc_info.value)


class TestCheckInteger:

    def test_int_returned(self):
        assert check_integer(3, "power") == 3

    def test_numpy_int_returned_as_int(self):
        value = check_integer(np.int64(-2), "power")
        assert value == -2
        assert type(value) is int

    @pytest.mark.parametrize("value", [2.0, 2.5, "2", None, True])
    def test_non_integers_rejected(self, value):
        with pytest.raises(ValidationError, match="expected an integer"):
            check_integer(value, "power")
