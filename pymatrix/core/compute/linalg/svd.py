"""
Singular value decomposition from the symmetric eigenproblem.

For A (m x n, m >= n) the eigen-decomposition AᵀA = V·Λ·Vᵀ gives the right
singular vectors V. Forming AᵀA squares the condition number, so V is only
a starting point for the small singular values: the columns of W = A·V are
then made mutually orthogonal by one-sided Jacobi rotations (applied to W
and V together), after which σᵢ = ||wᵢ|| and uᵢ = wᵢ / σᵢ. These values
are accurate to about eps·σ_max instead of sqrt(eps)·σ_max. Directions
belonging to zero singular values are completed to an orthonormal basis by
Gram-Schmidt. A wide matrix is handled through its transpose with U and V
swapped.

A is scaled by a power of two near max|A| before AᵀA is formed, so
entries up to the float64 limit do not overflow the Gram matrix and
exactly representable results stay exact.
"""

import math
from dataclasses import dataclass
from typing import Any, NamedTuple
import numpy as np
from numpy.typing import NDArray

from pymatrix.core.matrix import Matrix
from pymatrix.core.exceptions import ConvergenceError
from pymatrix.core.compute.precision import EPSILON_64, relative_tolerance, ensure_finite
from pymatrix.core.compute.tolerances import EngineConfig, DEFAULT_CONFIG
from pymatrix.core.compute.linalg._common import to_matrix
from pymatrix.core.compute.linalg.eigen import jacobi_arrays


@dataclass(frozen=True)
class SVDResult:
    """
    Thin singular value decomposition A = U·diag(σ)·Vᵀ.

    Attributes:
        U: Left singular vectors (m x k, orthonormal columns)
        singular_values: σ₁ >= σ₂ >= ... >= σ_k >= 0, k = min(m, n)
        V: Right singular vectors (n x k, orthonormal columns)
    """
    U: Matrix
    singular_values: tuple[float, ...]
    V: Matrix

    @property
    def rank(self) -> int:
        """Number of singular values above max(m, n)·eps·σ₁."""
        sigma = np.asarray(self.singular_values)
        if sigma.size == 0 or sigma[0] == 0.0:
            return 0
        shape = (self.U.rows, self.V.rows)
        return int(np.sum(sigma > relative_tolerance(shape, float(sigma[0]))))

    def sigma(self) -> Matrix:
        """diag(σ) as a k x k Matrix."""
        return Matrix.diagonal(self.singular_values, name='Σ')


class _Spectrum(NamedTuple):
    """
    Scaled singular triplets of a tall array.

    A = scale · W·Vᵀ with W = U·diag(sigma); sigma and W are in scaled units.
    """
    sigma: NDArray[np.floating[Any]]
    V: NDArray[np.floating[Any]]
    W: NDArray[np.floating[Any]]
    scale: float


def complete_orthonormal(
    basis: NDArray[np.floating[Any]],
    count: int,
) -> NDArray[np.floating[Any]]:
    """
    Extend orthonormal columns with `count` further orthonormal columns.

    Candidates are the standard basis vectors in order, each orthogonalized
    twice against everything accepted so far (classical Gram-Schmidt with
    reorthogonalization). Deterministic: no random starts.
    """
    m = basis.shape[0]
    columns = [basis[:, j] for j in range(basis.shape[1])]
    added = 0
    for j in range(m):
        if added == count:
            break
        candidate = np.zeros(m)
        candidate[j] = 1.0
        for _ in range(2):
            for q in columns:
                candidate -= (q @ candidate) * q
        norm = float(np.linalg.norm(candidate))
        if norm > 1e-8:
            columns.append(candidate / norm)
            added += 1
    return np.column_stack(columns[basis.shape[1]:]) if added else np.zeros((m, 0))


def orthogonalize_columns(
    W: NDArray[np.floating[Any]],
    V: NDArray[np.floating[Any]],
    tolerance: float,
    max_sweeps: int,
) -> int:
    """
    One-sided Jacobi: rotate column pairs of W (and V alike) in place until
    every pair satisfies |wₚ·w_q| <= tolerance · ||wₚ||·||w_q||.

    Returns:
        Number of rotations applied

    Raises:
        ConvergenceError: If max_sweeps sweeps leave a pair unconverged
    """
    n = W.shape[1]
    rotations = 0
    sweeps = 0
    while True:
        rotated = False
        for p in range(n - 1):
            for q in range(p + 1, n):
                alpha = float(W[:, p] @ W[:, p])
                beta = float(W[:, q] @ W[:, q])
                gamma = float(W[:, p] @ W[:, q])
                if abs(gamma) <= tolerance * math.sqrt(alpha * beta):
                    continue
                zeta = (beta - alpha) / (2.0 * gamma)
                t = math.copysign(1.0, zeta) / (abs(zeta) + math.hypot(1.0, zeta))
                if t == 0.0:
                    continue
                if sweeps >= max_sweeps:
                    raise ConvergenceError(
                        f"One-sided Jacobi orthogonalization did not converge after {sweeps} sweeps",
                        iterations=rotations,
                        reason='max_iterations',
                        threshold=tolerance,
                    )
                c = 1.0 / math.hypot(1.0, t)
                s = c * t
                for M in (W, V):
                    left = M[:, p].copy()
                    M[:, p] = c * left - s * M[:, q]
                    M[:, q] = s * left + c * M[:, q]
                rotations += 1
                rotated = True
        if not rotated:
            return rotations
        sweeps += 1


def _gram_spectrum(tall: NDArray[np.floating[Any]], config: EngineConfig) -> _Spectrum:
    """
    Singular values, right singular vectors and A·V for a tall array.

    Negative eigenvalues of AᵀA are round-off and never reach the result:
    σ is measured on A·V. Values at or below max(m, n)·eps·σ_max are zero.
    """
    m, n = tall.shape
    largest = float(np.max(np.abs(tall)))
    if largest == 0.0:
        return _Spectrum(np.zeros(n), np.eye(n), np.zeros((m, n)), 1.0)

    # Power of two: scaling is exact
    scale = math.ldexp(1.0, math.frexp(largest)[1])
    scaled = tall / scale
    gram = scaled.T @ scaled
    ensure_finite(gram, 'svd_gram')

    _, V, _ = jacobi_arrays(
        gram,
        tolerance=config.svd_tolerance,
        max_rotations=config.max_jacobi_rotations(n),
    )
    W = scaled @ V
    orthogonalize_columns(
        W, V,
        tolerance=max(config.svd_tolerance, m * EPSILON_64),
        max_sweeps=config.jacobi_max_sweeps,
    )

    sigma = np.linalg.norm(W, axis=0)
    order = np.argsort(-sigma, kind='stable')
    sigma, V, W = sigma[order], V[:, order], W[:, order]
    sigma[sigma <= relative_tolerance(tall.shape, float(sigma[0]))] = 0.0
    return _Spectrum(sigma, V, W, scale)


def _rescale(spectrum: _Spectrum) -> NDArray[np.floating[Any]]:
    with np.errstate(over='ignore'):
        sigma = spectrum.sigma * spectrum.scale
    ensure_finite(sigma, 'svd')
    return sigma


def _svd_tall(
    values: NDArray[np.floating[Any]],
    config: EngineConfig,
) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]], NDArray[np.floating[Any]]]:
    """SVD of an m x n array with m >= n. Returns (U, sigma, V)."""
    m, n = values.shape
    spectrum = _gram_spectrum(values, config)

    nonzero = int(np.sum(spectrum.sigma > 0.0))
    U = np.empty((m, n))
    if nonzero:
        U[:, :nonzero] = spectrum.W[:, :nonzero] / spectrum.sigma[:nonzero]
    if nonzero < n:
        U[:, nonzero:] = complete_orthonormal(U[:, :nonzero], n - nonzero)
    return U, _rescale(spectrum), spectrum.V


def svd_decompose(A: Matrix, config: EngineConfig = DEFAULT_CONFIG) -> SVDResult:
    """
    Thin SVD of any matrix.

    Args:
        A: Matrix to decompose (m x n)
        config: Jacobi tolerance and sweep budget

    Returns:
        SVDResult with U (m x k), singular values (descending) and V (n x k)

    Raises:
        ConvergenceError: If a Jacobi step exhausts its budget
        NumericOverflowError: If σ_max exceeds the float64 range
    """
    values = A.to_array()
    if A.rows >= A.cols:
        U, sigma, V = _svd_tall(values, config)
    else:
        V, sigma, U = _svd_tall(values.T, config)
    return SVDResult(
        U=to_matrix(U, 'U', 'svd'),
        singular_values=tuple(float(s) for s in sigma),
        V=to_matrix(V, 'V', 'svd'),
    )


def singular_values(A: Matrix, config: EngineConfig = DEFAULT_CONFIG) -> tuple[float, ...]:
    """Singular values only, descending."""
    values = A.to_array()
    spectrum = _gram_spectrum(values if A.rows >= A.cols else values.T, config)
    return tuple(float(s) for s in _rescale(spectrum))
