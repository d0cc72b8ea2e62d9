"""
QR decomposition by Householder reflections.

Each step reflects the current column onto a multiple of e₁, zeroing its
sub-diagonal entries. Reflections are orthogonal to machine precision, so Q
stays orthogonal even when the columns of A are nearly dependent, which is
where classical Gram-Schmidt loses orthogonality.

The same reflector is reused by the eigen solver for the Hessenberg
reduction and inside every shifted QR step.
"""

from dataclasses import dataclass
from typing import Any, Literal
import numpy as np
from numpy.typing import NDArray

from pymatrix.core.matrix import Matrix
from pymatrix.core.compute.precision import ensure_finite
from pymatrix.core.compute.linalg._common import to_matrix, frobenius


@dataclass(frozen=True)
class QRResult:
    """
    Result of QR decomposition.

    Attributes:
        Q: Orthogonal matrix (m x m for complete mode, m x k for reduced,
           k = min(m, n))
        R: Upper triangular matrix (m x n complete, k x n reduced)
    """
    Q: Matrix
    R: Matrix


def householder_vector(x: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]] | None:
    """
    Unit vector v with (I - 2vvᵀ)x = -sign(x₀)·||x||·e₁.

    The sign choice avoids cancellation when forming x₀ + sign(x₀)||x||.

    Returns:
        The unit Householder vector, or None when x is already a multiple
        of e₁ (no reflection needed)
    """
    if x.size <= 1 or not np.any(x[1:]):
        return None
    norm = frobenius(x)
    v = np.array(x, dtype=np.float64, copy=True)
    v[0] += norm if x[0] >= 0.0 else -norm
    v_norm = frobenius(v)
    if v_norm == 0.0:
        return None
    return v / v_norm


def householder_qr(
    values: NDArray[np.floating[Any]],
) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]]]:
    """
    Complete Householder QR of an array.

    Returns:
        (Q, R) with Q m x m orthogonal and R m x n upper triangular
    """
    m, n = values.shape
    R = np.array(values, dtype=np.float64, copy=True)
    Q = np.eye(m)
    with np.errstate(over='ignore', invalid='ignore'):
        for k in range(min(m - 1, n)):
            v = householder_vector(R[k:, k])
            if v is None:
                continue
            # R <- H R,  Q <- Q H  with H = I - 2 v vᵀ acting on rows k..m-1
            R[k:, k:] -= 2.0 * np.outer(v, v @ R[k:, k:])
            Q[:, k:] -= 2.0 * np.outer(Q[:, k:] @ v, v)
            R[k + 1:, k] = 0.0
    ensure_finite(R, 'householder_qr')
    return Q, R


def qr_decompose(
    A: Matrix,
    mode: Literal['complete', 'reduced'] = 'complete',
) -> QRResult:
    """
    QR decomposition A = Q·R using Householder reflections.

    Args:
        A: Matrix to decompose (m x n)
        mode: 'complete' for Q m x m and R m x n,
              'reduced' for Q m x k and R k x n where k = min(m, n)

    Returns:
        QRResult with Q and R as Matrix instances
    """
    if mode not in ('complete', 'reduced'):
        raise ValueError(f"Unknown QR mode: {mode!r}")
    Q, R = householder_qr(A.to_array())
    if mode == 'reduced':
        k = min(A.rows, A.cols)
        Q, R = Q[:, :k], R[:k, :]
    return QRResult(
        Q=to_matrix(Q, 'Q', 'qr'),
        R=to_matrix(R, 'R', 'qr'),
    )
