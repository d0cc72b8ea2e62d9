"""
Element-wise arithmetic, products, trace and integer powers.

Shape checks run first and raise before any arithmetic. Every result passes
the overflow guard before it is wrapped as a Matrix.
"""

import numpy as np

from pymatrix.core.matrix import Matrix
from pymatrix.core.validation import (
    check_same_shape,
    check_inner_dims,
    check_square,
    check_integer,
)
from pymatrix.core.compute.precision import ensure_finite
from pymatrix.core.compute.linalg._common import to_matrix
from pymatrix.core.compute.linalg.lu import inverse


def add(A: Matrix, B: Matrix) -> Matrix:
    """
    Element-wise sum A + B.

    Raises:
        DimensionMismatchError: If shapes differ
        NumericOverflowError: If a sum leaves the float64 range
    """
    check_same_shape(A.shape, B.shape, (A.name, B.name))
    with np.errstate(over='ignore', invalid='ignore'):
        values = A.to_array() + B.to_array()
    return to_matrix(values, f"{A.name} + {B.name}", 'add')


def subtract(A: Matrix, B: Matrix) -> Matrix:
    """
    Element-wise difference A - B.

    Raises:
        DimensionMismatchError: If shapes differ
        NumericOverflowError: If a difference leaves the float64 range
    """
    check_same_shape(A.shape, B.shape, (A.name, B.name))
    with np.errstate(over='ignore', invalid='ignore'):
        values = A.to_array() - B.to_array()
    return to_matrix(values, f"{A.name} - {B.name}", 'subtract')


def multiply(A: Matrix, B: Matrix) -> Matrix:
    """
    Matrix product A·B.

    Raises:
        DimensionMismatchError: If cols(A) != rows(B)
        NumericOverflowError: If the product leaves the float64 range
    """
    check_inner_dims(A.shape, B.shape, (A.name, B.name))
    with np.errstate(over='ignore', invalid='ignore'):
        values = A.to_array() @ B.to_array()
    return to_matrix(values, f"{A.name}·{B.name}", 'multiply')


def transpose(A: Matrix) -> Matrix:
    return A.transpose()


def trace(A: Matrix) -> float:
    """
    Sum of the diagonal.

    Raises:
        NotSquareError: If A is not square
    """
    check_square(A.shape, A.name, 'trace')
    with np.errstate(over='ignore', invalid='ignore'):
        total = np.trace(A.to_array())
    ensure_finite(np.asarray(total), 'trace')
    return float(total)


def power(A: Matrix, exponent: int) -> Matrix:
    """
    Integer power Aⁿ by binary exponentiation.

    n = 0 gives the identity, n < 0 inverts first and raises the inverse
    to |n|. Needs about 2·log2(|n|) products.

    Raises:
        NotSquareError: If A is not square
        ValidationError: If exponent is not an integer
        SingularMatrixError: If n < 0 and A is singular
        NumericOverflowError: If an intermediate product overflows
    """
    check_square(A.shape, A.name, 'power')
    n = check_integer(exponent, 'exponent')
    name = f"{A.name}^{n}"
    if n == 0:
        return Matrix.identity(A.rows, name=name)

    base = (inverse(A) if n < 0 else A).to_array()
    remaining = abs(n)
    result = None
    with np.errstate(over='ignore', invalid='ignore'):
        while remaining:
            if remaining & 1:
                result = base.copy() if result is None else result @ base
            remaining >>= 1
            if remaining:
                base = base @ base
    return to_matrix(result, name, 'power')
