"""
Operation Design.

OperationDesign binds an operation tag to its operands and parameters and
checks that they fit together: operand count, shape compatibility, square
requirements and the power exponent. It knows which operation it is
preparing; Matrix doesn't.

Everything here raises before any arithmetic happens, so the engines can
trust the shapes they receive.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Sequence

from pymatrix.core.matrix import Matrix
from pymatrix.core.exceptions import ValidationError
from pymatrix.core.validation import (
    check_same_shape,
    check_inner_dims,
    check_same_rows,
    check_square,
    check_integer,
)


class Operation(str, Enum):
    """Closed set of operations the dispatcher can route."""
    ADD = 'add'
    SUBTRACT = 'subtract'
    MULTIPLY = 'multiply'
    TRANSPOSE = 'transpose'
    INVERSE = 'inverse'
    DETERMINANT = 'determinant'
    TRACE = 'trace'
    RANK = 'rank'
    EIGENVALUES = 'eigenvalues'
    LU = 'lu'
    QR = 'qr'
    SVD = 'svd'
    SOLVE = 'solve'
    POWER = 'power'

    @classmethod
    def parse(cls, value: Operation | str) -> Operation:
        """
        Convert a tag or its string value to an Operation.

        Raises:
            ValidationError: If the name is not a known operation
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        valid = ', '.join(op.value for op in cls)
        raise ValidationError(f"Unknown operation: {value!r}. Valid operations: {valid}")


BINARY_OPERATIONS = frozenset({
    Operation.ADD,
    Operation.SUBTRACT,
    Operation.MULTIPLY,
    Operation.SOLVE,
})

SQUARE_OPERATIONS = frozenset({
    Operation.INVERSE,
    Operation.DETERMINANT,
    Operation.TRACE,
    Operation.EIGENVALUES,
    Operation.POWER,
})

# Parameters each operation accepts; anything else is rejected
ACCEPTED_PARAMS: dict[Operation, frozenset[str]] = {
    Operation.POWER: frozenset({'power'}),
}

DEFAULT_POWER = 2

_OPERAND_NAMES = {
    Operation.SOLVE: ('A', 'b'),
}


def expected_operand_count(operation: Operation) -> int:
    """Two operands for add, subtract, multiply and solve; one otherwise."""
    return 2 if operation in BINARY_OPERATIONS else 1


def coerce_operands(
    operation: Operation,
    operands: Matrix | Sequence[Matrix | Sequence[Sequence[float]]],
) -> tuple[Matrix, ...]:
    """
    Turn caller operands into Matrix instances.

    A bare Matrix counts as a single operand. Nested numeric grids are
    converted with Matrix.from_rows and named A, B (or A, b for solve).

    Raises:
        ValidationError: If a grid is not a finite numeric 2D table
    """
    if isinstance(operands, Matrix):
        return (operands,)
    names = _OPERAND_NAMES.get(operation, ('A', 'B'))
    matrices = []
    for i, operand in enumerate(operands):
        if isinstance(operand, Matrix):
            matrices.append(operand)
        else:
            name = names[i] if i < len(names) else f"M{i + 1}"
            matrices.append(Matrix.from_rows(operand, name=name))
    return tuple(matrices)


@dataclass(frozen=True)
class OperationDesign:
    """
    Validated operation request.

    Construction:
        OperationDesign.build(Operation.ADD, (A, B))
        OperationDesign.build(Operation.POWER, (A,), {'power': -3})
    """
    operation: Operation
    operands: tuple[Matrix, ...]
    params: dict[str, Any] = field(default_factory=dict)
    exponent: int | None = None

    @property
    def primary(self) -> Matrix:
        """First operand; analysis and the stability score are based on it."""
        return self.operands[0]

    @property
    def secondary(self) -> Matrix:
        return self.operands[1]

    @classmethod
    def build(
        cls,
        operation: Operation,
        operands: tuple[Matrix, ...],
        params: Mapping[str, Any] | None = None,
    ) -> OperationDesign:
        """
        Validate operands and parameters for an operation.

        Raises:
            ValidationError: Wrong operand count, unknown parameter or a
                non-integer exponent
            DimensionMismatchError: Incompatible operand shapes
            NotSquareError: Square-only operation on a rectangular operand
        """
        params = dict(params or {})
        expected = expected_operand_count(operation)
        if len(operands) != expected:
            raise ValidationError(
                f"Operation '{operation.value}' requires {expected} matrix(es), "
                f"got {len(operands)}"
            )

        unknown = set(params) - ACCEPTED_PARAMS.get(operation, frozenset())
        if unknown:
            raise ValidationError(
                f"Operation '{operation.value}' does not accept parameter(s): "
                f"{', '.join(sorted(unknown))}"
            )

        A = operands[0]
        if operation in (Operation.ADD, Operation.SUBTRACT):
            check_same_shape(A.shape, operands[1].shape, (A.name, operands[1].name))
        elif operation is Operation.MULTIPLY:
            check_inner_dims(A.shape, operands[1].shape, (A.name, operands[1].name))
        elif operation is Operation.SOLVE:
            check_square(A.shape, A.name, operation.value)
            check_same_rows(A.shape, operands[1].shape, (A.name, operands[1].name))
        elif operation in SQUARE_OPERATIONS:
            check_square(A.shape, A.name, operation.value)

        exponent = None
        if operation is Operation.POWER:
            exponent = check_integer(params.get('power', DEFAULT_POWER), 'power')

        return cls(
            operation=operation,
            operands=tuple(operands),
            params=params,
            exponent=exponent,
        )
