"""
Eigenvalue solvers.

Two algorithms, selected by structure:

Symmetric input (Jacobi eigenvalue algorithm):
    Repeatedly annihilate the largest off-diagonal entry with a plane
    rotation. Each rotation strictly lowers the off-diagonal sum of squares,
    so the iteration converges to a diagonal matrix; the accumulated
    rotations are the (orthogonal) eigenvectors.

General input (shifted QR algorithm):
    Reduce to upper Hessenberg form, then iterate A_{k+1} = R_k Q_k + μI
    where A_k - μI = Q_k R_k. Each step is a similarity transform, so the
    eigenvalues are unchanged. A Wilkinson shift accelerates convergence and
    the active window shrinks (deflation) whenever a sub-diagonal entry
    becomes negligible. A real matrix with complex eigenvalues leaves a
    2 x 2 block that cannot be deflated further; it is reported as a
    complex-conjugate pair.

Both iterations are capped and raise ConvergenceError when the cap is hit.

References:
    Golub, G. H. & Van Loan, C. F. (2013). Matrix Computations, 4th ed.,
    sections 7.4-7.5 (QR iteration) and 8.5 (Jacobi methods).
"""

import math
from dataclasses import dataclass
from typing import Any, Literal
import numpy as np
from numpy.typing import NDArray

from pymatrix.core.matrix import Matrix
from pymatrix.core.exceptions import ConvergenceError, ValidationError
from pymatrix.core.validation import check_square
from pymatrix.core.compute.precision import EPSILON_64, TINY_64, ensure_finite
from pymatrix.core.compute.tolerances import EngineConfig, DEFAULT_CONFIG
from pymatrix.core.compute.linalg._common import to_matrix, symmetric_within, frobenius
from pymatrix.core.compute.linalg.qr import householder_vector, householder_qr


Eigenvalue = float | complex


@dataclass(frozen=True)
class EigenResult:
    """
    Result of an eigenvalue computation.

    Attributes:
        values: Eigenvalues. Real values are floats; complex-conjugate pairs
            are adjacent complex numbers, positive imaginary part first.
            Symmetric path: sorted descending. General path: sorted by real
            part descending.
        vectors: Orthogonal eigenvector matrix (columns match values) on
            the symmetric path, None on the general path
        method: 'jacobi' or 'shifted_qr'
        iterations: Rotations (Jacobi) or QR steps (shifted QR) performed
    """
    values: tuple[Eigenvalue, ...]
    vectors: Matrix | None
    method: Literal['jacobi', 'shifted_qr']
    iterations: int

    @property
    def is_real(self) -> bool:
        return all(not isinstance(v, complex) for v in self.values)


# Symmetric path: Jacobi rotations


def _off_diagonal_mass(values: NDArray[np.floating[Any]]) -> float:
    upper = np.triu(values, k=1)
    return 2.0 * float(np.sum(upper * upper))


def jacobi_arrays(
    values: NDArray[np.floating[Any]],
    tolerance: float,
    max_rotations: int,
) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]], int]:
    """
    Classical Jacobi on a symmetric array.

    Converged once the off-diagonal Frobenius mass is at most
    tolerance * ||A||_F. The tolerance is floored just above the round-off
    level of the rotations themselves (4·n·eps) so tight requests still
    terminate.

    Returns:
        (eigenvalues, eigenvectors, rotations) with eigenvalues sorted
        descending and each eigenvector's largest component positive

    Raises:
        ConvergenceError: If max_rotations is exhausted
    """
    A = 0.5 * (values + values.T)
    n = A.shape[0]
    V = np.eye(n)
    scale = frobenius(A)
    tol = max(tolerance, 4.0 * n * EPSILON_64)
    threshold = (tol * scale) ** 2

    rotations = 0
    off = _off_diagonal_mass(A)
    while off > threshold:
        if rotations >= max_rotations:
            raise ConvergenceError(
                f"Jacobi eigenvalue iteration did not converge after {rotations} rotations",
                iterations=rotations,
                final_change=math.sqrt(off) / scale,
                reason='max_iterations',
                threshold=tol,
            )
        flat = int(np.argmax(np.abs(np.triu(A, k=1))))
        p, q = divmod(flat, n)
        apq = A[p, q]

        # Rotation angle from the symmetric 2 x 2 Schur decomposition
        theta = (A[q, q] - A[p, p]) / (2.0 * apq)
        t = math.copysign(1.0, theta) / (abs(theta) + math.sqrt(theta * theta + 1.0))
        c = 1.0 / math.sqrt(t * t + 1.0)
        s = t * c
        block = np.array([[c, s], [-s, c]])

        idx = [p, q]
        A[:, idx] = A[:, idx] @ block
        A[idx, :] = block.T @ A[idx, :]
        A[p, q] = A[q, p] = 0.0
        V[:, idx] = V[:, idx] @ block

        rotations += 1
        off = _off_diagonal_mass(A)

    eigenvalues = np.diag(A).copy()
    order = np.argsort(-eigenvalues, kind='stable')
    eigenvalues = eigenvalues[order]
    V = V[:, order]

    # Deterministic sign: largest-magnitude component of each vector positive
    pivots = np.argmax(np.abs(V), axis=0)
    signs = np.where(V[pivots, np.arange(n)] < 0.0, -1.0, 1.0)
    V = V * signs

    return eigenvalues, V, rotations


def eigh_jacobi(A: Matrix, config: EngineConfig = DEFAULT_CONFIG) -> EigenResult:
    """
    Eigen-decomposition of a symmetric matrix by Jacobi rotations.

    Args:
        A: Symmetric matrix
        config: Tolerance and sweep budget

    Returns:
        EigenResult with real eigenvalues (descending) and orthogonal vectors

    Raises:
        NotSquareError: If A is not square
        ValidationError: If A is not symmetric
        ConvergenceError: If the sweep budget is exhausted
    """
    check_square(A.shape, A.name, 'eigenvalues')
    values = A.to_array()
    if not symmetric_within(values, config.tolerance):
        raise ValidationError(f"{A.name}: Jacobi eigenvalue method requires a symmetric matrix")

    w, V, rotations = jacobi_arrays(
        values,
        tolerance=config.tolerance,
        max_rotations=config.max_jacobi_rotations(A.rows),
    )
    return EigenResult(
        values=tuple(float(x) for x in w),
        vectors=to_matrix(V, 'V', 'jacobi'),
        method='jacobi',
        iterations=rotations,
    )


# General path: Hessenberg reduction + shifted QR


def hessenberg(values: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
    """
    Upper Hessenberg form by Householder similarity transforms.

    H = QᵀAQ has zeros below the first sub-diagonal and the same
    eigenvalues as A.
    """
    H = np.array(values, dtype=np.float64, copy=True)
    n = H.shape[0]
    for k in range(n - 2):
        v = householder_vector(H[k + 1:, k])
        if v is None:
            continue
        H[k + 1:, k:] -= 2.0 * np.outer(v, v @ H[k + 1:, k:])
        H[:, k + 1:] -= 2.0 * np.outer(H[:, k + 1:] @ v, v)
        H[k + 2:, k] = 0.0
    return H


def _eigenvalues_2x2(block: NDArray[np.floating[Any]]) -> tuple[Eigenvalue, Eigenvalue]:
    """Eigenvalues of a real 2 x 2 block; a complex pair if the discriminant is negative."""
    a, b = float(block[0, 0]), float(block[0, 1])
    c, d = float(block[1, 0]), float(block[1, 1])
    half_trace = 0.5 * (a + d)
    delta = 0.5 * (a - d)
    disc = delta * delta + b * c
    if disc >= 0.0:
        root = math.sqrt(disc)
        first = half_trace + math.copysign(root, half_trace)
        det = a * d - b * c
        second = det / first if first != 0.0 else half_trace - math.copysign(root, half_trace)
        return first, second
    imag = math.sqrt(-disc)
    return complex(half_trace, imag), complex(half_trace, -imag)


def _wilkinson_shift(block: NDArray[np.floating[Any]]) -> float:
    """
    Eigenvalue of the trailing 2 x 2 block closest to its last diagonal entry.

    For a complex pair the common real part is used, which keeps the
    iteration in real arithmetic.
    """
    a, b = float(block[0, 0]), float(block[0, 1])
    c, d = float(block[1, 0]), float(block[1, 1])
    delta = 0.5 * (a - d)
    disc = delta * delta + b * c
    if disc < 0.0:
        return 0.5 * (a + d)
    denom = delta + math.copysign(math.sqrt(disc), delta)
    if denom == 0.0:
        return d
    return d - (b * c) / denom


def _split_point(H: NDArray[np.floating[Any]], lo: int, hi: int, tol: float) -> int:
    """
    Start of the unreduced block that ends at row hi.

    Scans the sub-diagonal upward from hi and zeroes the first negligible
    entry it meets.
    """
    for i in range(hi, lo, -1):
        sub = abs(H[i, i - 1])
        scale = abs(H[i - 1, i - 1]) + abs(H[i, i])
        if scale == 0.0:
            scale = frobenius(H[lo:hi + 1, lo:hi + 1])
        if sub <= tol * scale or sub < TINY_64:
            H[i, i - 1] = 0.0
            return i
    return lo


def _sort_general(values: list[Eigenvalue]) -> tuple[Eigenvalue, ...]:
    def key(v: Eigenvalue) -> tuple[float, float]:
        z = complex(v)
        return (-z.real, -z.imag)
    return tuple(sorted(values, key=key))


def eig_qr(A: Matrix, config: EngineConfig = DEFAULT_CONFIG) -> EigenResult:
    """
    Eigenvalues of a general real matrix by the shifted QR algorithm.

    Args:
        A: Square matrix
        config: Deflation tolerance, iteration cap and shift schedule

    Returns:
        EigenResult with real and complex-conjugate eigenvalues, no vectors

    Raises:
        NotSquareError: If A is not square
        ConvergenceError: If more than 100·n iterations are needed
    """
    check_square(A.shape, A.name, 'eigenvalues')
    n = A.rows
    H = hessenberg(A.to_array())
    ensure_finite(H, 'hessenberg')

    tol = config.deflation_tolerance
    max_iterations = config.max_qr_iterations(n)
    found: list[Eigenvalue] = []
    iterations = 0
    stagnant = 0
    hi = n - 1

    with np.errstate(over='ignore', invalid='ignore'):
        while hi >= 0:
            if hi == 0:
                found.append(float(H[0, 0]))
                break

            lo = _split_point(H, 0, hi, tol)
            if lo == hi:
                found.append(float(H[hi, hi]))
                hi -= 1
                stagnant = 0
                continue
            if lo == hi - 1:
                found.extend(_eigenvalues_2x2(H[hi - 1:hi + 1, hi - 1:hi + 1]))
                hi -= 2
                stagnant = 0
                continue

            if iterations >= max_iterations:
                raise ConvergenceError(
                    f"Shifted QR iteration did not converge after {iterations} iterations "
                    f"({hi + 1} eigenvalues outstanding)",
                    iterations=iterations,
                    final_change=float(abs(H[hi, hi - 1])),
                    reason='max_iterations',
                    threshold=tol,
                )

            iterations += 1
            stagnant += 1
            if stagnant % config.exceptional_shift_interval == 0:
                # Ad hoc shift breaks cycles the Wilkinson shift can fall into
                mu = H[hi, hi] + 0.75 * (abs(H[hi, hi - 1]) + abs(H[hi - 1, hi - 2]))
            else:
                mu = _wilkinson_shift(H[hi - 1:hi + 1, hi - 1:hi + 1])

            window = slice(lo, hi + 1)
            size = hi + 1 - lo
            shift = mu * np.eye(size)
            Q, R = householder_qr(H[window, window] - shift)
            H[window, window] = np.triu(R @ Q + shift, k=-1)
            ensure_finite(H, 'shifted_qr')

    return EigenResult(
        values=_sort_general(found),
        vectors=None,
        method='shifted_qr',
        iterations=iterations,
    )


def eigenvalues(A: Matrix, config: EngineConfig = DEFAULT_CONFIG) -> EigenResult:
    """
    Eigenvalues of a square matrix, choosing the algorithm by structure.

    Symmetric matrices (within config.tolerance) take the Jacobi path and
    also return eigenvectors; all others take the shifted QR path.
    """
    check_square(A.shape, A.name, 'eigenvalues')
    if symmetric_within(A.to_array(), config.tolerance):
        return eigh_jacobi(A, config)
    return eig_qr(A, config)
