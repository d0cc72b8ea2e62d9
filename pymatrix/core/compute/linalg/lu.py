"""
Gaussian elimination with partial pivoting.

Provides the LU factorization P·A = L·U and everything built on it:
determinant, numerical rank, linear solves and the inverse. At every step
the row holding the largest-magnitude candidate in the pivot column is
swapped into place, which bounds the growth of the multipliers in L by 1.

A pivot counts as zero when its magnitude is at or below
max(rows, cols) * eps * max|A|. All paths are O(n³) and need no iteration
cap.
"""

from dataclasses import dataclass
from typing import Any, NamedTuple
import numpy as np
from numpy.typing import NDArray
from scipy.linalg import solve_triangular

from pymatrix.core.matrix import Matrix
from pymatrix.core.exceptions import SingularMatrixError
from pymatrix.core.validation import check_square, check_same_rows
from pymatrix.core.compute.precision import relative_tolerance, ensure_finite
from pymatrix.core.compute.linalg._common import to_matrix


@dataclass(frozen=True)
class LUResult:
    """
    Result of LU decomposition with partial pivoting.

    Attributes:
        L: Unit lower triangular factor (m x m)
        U: Upper triangular factor (m x n)
        P: Permutation matrix with P·A = L·U (m x m)
        pivot_signum: +1 or -1, the sign of the row permutation
    """
    L: Matrix
    U: Matrix
    P: Matrix
    pivot_signum: int


class _Factors(NamedTuple):
    """Array form of an LU factorization, used internally for solves."""
    L: NDArray[np.floating[Any]]
    U: NDArray[np.floating[Any]]
    perm: NDArray[np.intp]
    signum: int
    tolerance: float


def pivot_tolerance(values: NDArray[np.floating[Any]]) -> float:
    """Magnitude at or below which a pivot is treated as zero."""
    scale = float(np.max(np.abs(values))) if values.size else 0.0
    return relative_tolerance(values.shape, scale)


def _factor(values: NDArray[np.floating[Any]]) -> _Factors:
    """
    Factor P·A = L·U for an m x n array.

    Elimination runs over min(m, n) columns. A column whose candidates are
    all exactly zero needs no elimination and is left as is; tiny but
    nonzero pivots are still used, the solve paths reject them afterwards.
    """
    m, n = values.shape
    U = np.array(values, dtype=np.float64, copy=True)
    L = np.eye(m)
    perm = np.arange(m)
    signum = 1

    with np.errstate(over='ignore', invalid='ignore'):
        for k in range(min(m, n)):
            p = k + int(np.argmax(np.abs(U[k:, k])))
            if U[p, k] == 0.0:
                continue
            if p != k:
                U[[k, p], :] = U[[p, k], :]
                L[[k, p], :k] = L[[p, k], :k]
                perm[[k, p]] = perm[[p, k]]
                signum = -signum
            if k + 1 < m:
                # Multiply before dividing: integer input stays exact where it can
                L[k + 1:, k] = U[k + 1:, k] / U[k, k]
                U[k + 1:, k:] -= np.outer(U[k + 1:, k], U[k, k:]) / U[k, k]
                U[k + 1:, k] = 0.0

    ensure_finite(U, 'lu_elimination')
    return _Factors(L=L, U=U, perm=perm, signum=signum, tolerance=pivot_tolerance(values))


def _require_nonsingular(factors: _Factors, name: str) -> None:
    """Raise SingularMatrixError at the first pivot at or below tolerance."""
    pivots = np.abs(np.diag(factors.U))
    small = np.flatnonzero(pivots <= factors.tolerance)
    if small.size:
        k = int(small[0])
        raise SingularMatrixError(
            f"{name} is singular: pivot {k} has magnitude {pivots[k]:.3e} "
            f"(tolerance {factors.tolerance:.3e})",
            matrix_name=name,
            pivot_index=k,
            pivot=float(pivots[k]),
            tolerance=factors.tolerance,
            rank=int(np.sum(pivots > factors.tolerance)),
        )


def _substitute(factors: _Factors, rhs: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
    """Solve L·U·x = P·rhs by forward then back substitution."""
    permuted = rhs[factors.perm]
    y = solve_triangular(factors.L, permuted, lower=True, unit_diagonal=True)
    return solve_triangular(factors.U, y, lower=False)


def lu_decompose(A: Matrix) -> LUResult:
    """
    LU decomposition with partial pivoting, P·A = L·U.

    Works for any shape: L is m x m unit lower triangular, U is m x n upper
    triangular (row echelon when A is rank deficient).

    Args:
        A: Matrix to factor

    Returns:
        LUResult with L, U, P and the permutation sign

    Raises:
        NumericOverflowError: If elimination overflows
    """
    factors = _factor(A.to_array())
    P = np.eye(A.rows)[factors.perm]
    return LUResult(
        L=to_matrix(factors.L, 'L', 'lu'),
        U=to_matrix(factors.U, 'U', 'lu'),
        P=to_matrix(P, 'P', 'lu'),
        pivot_signum=factors.signum,
    )


def determinant(A: Matrix) -> float:
    """
    Determinant as pivot_signum * prod(diag(U)).

    Raises:
        NotSquareError: If A is not square
        NumericOverflowError: If the product leaves the float64 range
    """
    check_square(A.shape, A.name, 'determinant')
    factors = _factor(A.to_array())
    with np.errstate(over='ignore', invalid='ignore'):
        det = factors.signum * np.prod(np.diag(factors.U))
    ensure_finite(np.asarray(det), 'determinant')
    return float(det)


def rank(A: Matrix) -> int:
    """
    Numerical rank: number of pivots above max(m, n) * eps * max|A|.

    Uses row-echelon elimination that skips a column whose best candidate
    is negligible, so rank-deficient rectangular matrices are counted
    correctly.
    """
    values = np.array(A.to_array(), dtype=np.float64, copy=True)
    m, n = values.shape
    tol = pivot_tolerance(values)
    row = 0
    for col in range(n):
        if row >= m:
            break
        p = row + int(np.argmax(np.abs(values[row:, col])))
        if abs(values[p, col]) <= tol:
            continue
        if p != row:
            values[[row, p], :] = values[[p, row], :]
        values[row + 1:, col:] -= np.outer(values[row + 1:, col], values[row, col:]) / values[row, col]
        row += 1
    return row


def solve(A: Matrix, b: Matrix) -> Matrix:
    """
    Solve A·x = b for square A.

    b may hold several right-hand sides as columns; x has the same shape.

    Raises:
        NotSquareError: If A is not square
        DimensionMismatchError: If rows(A) != rows(b)
        SingularMatrixError: If a pivot falls at or below tolerance
    """
    check_square(A.shape, A.name, 'solve')
    check_same_rows(A.shape, b.shape, (A.name, b.name))
    factors = _factor(A.to_array())
    _require_nonsingular(factors, A.name)
    x = _substitute(factors, b.to_array())
    return to_matrix(x, 'x', 'solve')


def inverse(A: Matrix) -> Matrix:
    """
    Inverse by solving A·X = I one column at a time.

    A single factorization is reused for every column.

    Raises:
        NotSquareError: If A is not square
        SingularMatrixError: If a pivot falls at or below tolerance
    """
    check_square(A.shape, A.name, 'inverse')
    n = A.rows
    factors = _factor(A.to_array())
    _require_nonsingular(factors, A.name)
    X = np.empty((n, n))
    identity = np.eye(n)
    for j in range(n):
        X[:, j] = _substitute(factors, identity[:, j])
    return to_matrix(X, f"{A.name}⁻¹", 'inverse')
