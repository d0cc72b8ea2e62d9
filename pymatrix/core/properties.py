"""
Structural property analysis.

Each predicate is a pure function of the matrix values. analyze() bundles
them into a MatrixProperties record; Matrix.properties caches that record
per instance, so repeated queries on a shared Matrix cost nothing.

Tolerances:
    - Symmetry compares A[i, j] with A[j, i] relative to max|A|
    - Orthogonality checks AᵀA against the identity
    - Zero / identity / diagonal / triangular use an absolute 1e-10 entry test
"""

from dataclasses import dataclass

import numpy as np

from pymatrix.core.matrix import Matrix
from pymatrix.core.compute.tolerances import DEFAULT, STRUCTURE
from pymatrix.core.compute.linalg._common import symmetric_within
from pymatrix.core.compute.linalg.stability import condition_number


@dataclass(frozen=True)
class MatrixProperties:
    """
    Structural facts about a matrix.

    Attributes:
        is_square .. is_orthogonal: Structural flags
        is_invertible: Square with full numerical rank
        rank: Numerical rank from Gaussian elimination
        determinant: Determinant via LU, None for rectangular input
        trace: Sum of the diagonal, None for rectangular input
        condition: 2-norm condition number (inf when singular)
    """
    is_square: bool
    is_symmetric: bool
    is_identity: bool
    is_zero: bool
    is_diagonal: bool
    is_upper_triangular: bool
    is_lower_triangular: bool
    is_orthogonal: bool
    is_invertible: bool
    rank: int
    determinant: float | None
    trace: float | None
    condition: float


def _negligible(values: np.ndarray) -> bool:
    return bool(np.all(np.abs(values) <= STRUCTURE.atol))


def is_symmetric(A: Matrix, rtol: float = DEFAULT.rtol) -> bool:
    """A[i, j] == A[j, i] within rtol * max|A| (floored at DEFAULT.atol)."""
    return symmetric_within(A.to_array(), rtol)


def is_zero(A: Matrix) -> bool:
    return _negligible(A.to_array())


def is_diagonal(A: Matrix) -> bool:
    if not A.is_square:
        return False
    values = A.to_array()
    return _negligible(values - np.diag(np.diag(values)))


def is_identity(A: Matrix) -> bool:
    if not A.is_square:
        return False
    return _negligible(A.to_array() - np.eye(A.rows))


def is_upper_triangular(A: Matrix) -> bool:
    if not A.is_square:
        return False
    return _negligible(np.tril(A.to_array(), k=-1))


def is_lower_triangular(A: Matrix) -> bool:
    if not A.is_square:
        return False
    return _negligible(np.triu(A.to_array(), k=1))


def is_orthogonal(A: Matrix) -> bool:
    """AᵀA ≈ I for a square matrix."""
    if not A.is_square:
        return False
    values = A.to_array()
    with np.errstate(over='ignore', invalid='ignore'):
        gram = values.T @ values
    tol = DEFAULT.rtol * A.rows
    return bool(np.all(np.abs(gram - np.eye(A.rows)) <= tol))


def trace(A: Matrix) -> float | None:
    if not A.is_square:
        return None
    return float(np.trace(A.to_array()))


def analyze(A: Matrix) -> MatrixProperties:
    """
    Compute the full property bundle.

    Rank and determinant come from the matrix's own cache, so they are
    shared with any earlier A.rank / A.determinant access.
    """
    rank = A.rank
    square = A.is_square
    return MatrixProperties(
        is_square=square,
        is_symmetric=is_symmetric(A),
        is_identity=is_identity(A),
        is_zero=is_zero(A),
        is_diagonal=is_diagonal(A),
        is_upper_triangular=is_upper_triangular(A),
        is_lower_triangular=is_lower_triangular(A),
        is_orthogonal=is_orthogonal(A),
        is_invertible=square and rank == A.rows,
        rank=rank,
        determinant=A.determinant,
        trace=trace(A),
        condition=condition_number(A),
    )
