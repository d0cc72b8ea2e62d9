"""
Tests for operation tags and request validation.
"""

import pytest

from pymatrix import Matrix
from pymatrix.core.exceptions import (
    DimensionMismatchError,
    NotSquareError,
    ValidationError,
)
from pymatrix.operations.design import (
    DEFAULT_POWER,
    Operation,
    OperationDesign,
    coerce_operands,
    expected_operand_count,
)


class TestOperationParse:

    def test_member_passthrough(self):
        assert Operation.parse(Operation.QR) is Operation.QR

    def test_string_value(self):
        assert Operation.parse('inverse') is Operation.INVERSE

    def test_case_and_whitespace_insensitive(self):
        assert Operation.parse('  Determinant ') is Operation.DETERMINANT

    def test_unknown_name(self):
        with pytest.raises(ValidationError, match="Unknown operation: 'cholesky'"):
            Operation.parse('cholesky')

    def test_non_string(self):
        with pytest.raises(ValidationError):
            Operation.parse(42)

    def test_closed_set(self):
        assert {op.value for op in Operation} == {
            'add', 'subtract', 'multiply', 'transpose', 'inverse', 'determinant',
            'trace', 'rank', 'eigenvalues', 'lu', 'qr', 'svd', 'solve', 'power',
        }


class TestOperandCount:

    @pytest.mark.parametrize("op", ['add', 'subtract', 'multiply', 'solve'])
    def test_binary(self, op):
        assert expected_operand_count(Operation(op)) == 2

    @pytest.mark.parametrize("op", ['transpose', 'inverse', 'rank', 'svd', 'power'])
    def test_unary(self, op):
        assert expected_operand_count(Operation(op)) == 1


class TestCoerceOperands:

    def test_grids_named(self):
        A, B = coerce_operands(Operation.ADD, [[[1, 2]], [[3, 4]]])
        assert (A.name, B.name) == ('A', 'B')

    def test_solve_names(self):
        A, b = coerce_operands(Operation.SOLVE, [[[1, 0], [0, 1]], [[1], [2]]])
        assert (A.name, b.name) == ('A', 'b')

    def test_bare_matrix(self):
        M = Matrix.identity(2)
        assert coerce_operands(Operation.INVERSE, M) == (M,)

    def test_matrices_kept(self):
        M = Matrix.identity(2).renamed('Q')
        (result,) = coerce_operands(Operation.INVERSE, [M])
        assert result is M

    def test_invalid_grid(self):
        with pytest.raises(ValidationError):
            coerce_operands(Operation.TRANSPOSE, [[[1, 2], [3]]])


class TestOperationDesign:

    def test_wrong_count(self):
        with pytest.raises(ValidationError, match="requires 2 matrix"):
            OperationDesign.build(Operation.ADD, (Matrix.identity(2),))

    def test_add_shape_mismatch(self):
        with pytest.raises(DimensionMismatchError):
            OperationDesign.build(Operation.ADD, (Matrix.zeros(2, 2), Matrix.zeros(3, 3)))

    def test_multiply_inner_mismatch(self):
        with pytest.raises(DimensionMismatchError):
            OperationDesign.build(Operation.MULTIPLY, (Matrix.zeros(2, 3), Matrix.zeros(2, 3)))

    def test_multiply_rectangular_ok(self):
        design = OperationDesign.build(
            Operation.MULTIPLY, (Matrix.zeros(2, 3), Matrix.zeros(3, 4))
        )
        assert design.secondary.shape == (3, 4)

    @pytest.mark.parametrize("op", ['inverse', 'determinant', 'trace', 'eigenvalues', 'power'])
    def test_square_required(self, op):
        with pytest.raises(NotSquareError):
            OperationDesign.build(Operation(op), (Matrix.zeros(2, 3),))

    @pytest.mark.parametrize("op", ['transpose', 'rank', 'lu', 'qr', 'svd'])
    def test_rectangular_allowed(self, op):
        design = OperationDesign.build(Operation(op), (Matrix.zeros(2, 3),))
        assert design.primary.shape == (2, 3)

    def test_solve_checks(self):
        with pytest.raises(NotSquareError):
            OperationDesign.build(Operation.SOLVE, (Matrix.zeros(2, 3), Matrix.zeros(2, 1)))
        with pytest.raises(DimensionMismatchError):
            OperationDesign.build(Operation.SOLVE, (Matrix.identity(2), Matrix.zeros(3, 1)))

    def test_power_default(self):
        design = OperationDesign.build(Operation.POWER, (Matrix.identity(2),))
        assert design.exponent == DEFAULT_POWER == 2

    def test_power_param(self):
        design = OperationDesign.build(Operation.POWER, (Matrix.identity(2),), {'power': -3})
        assert design.exponent == -3

    def test_power_must_be_integer(self):
        with pytest.raises(ValidationError, match="expected an integer"):
            OperationDesign.build(Operation.POWER, (Matrix.identity(2),), {'power': 0.5})

    def test_unknown_param(self):
        with pytest.raises(ValidationError, match="does not accept"):
            OperationDesign.build(Operation.ADD, (Matrix.identity(2), Matrix.identity(2)),
                                  {'power': 2})

    def test_frozen(self):
        design = OperationDesign.build(Operation.TRANSPOSE, (Matrix.identity(2),))
        with pytest.raises(AttributeError):
            design.exponent = 3
