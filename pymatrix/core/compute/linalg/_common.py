"""
Helpers shared by the linear algebra engines.

Engines compute on plain float64 arrays and convert back to Matrix only at
their public boundary, after the overflow guard has run.
"""

import numpy as np
from numpy.typing import NDArray
from typing import Any

from pymatrix.core.matrix import Matrix
from pymatrix.core.compute.precision import ensure_finite
from pymatrix.core.compute.tolerances import DEFAULT


def to_matrix(array: NDArray[np.floating[Any]], name: str, stage: str) -> Matrix:
    """
    Wrap an engine result as a Matrix.

    Raises:
        NumericOverflowError: If the result contains Inf or NaN
    """
    ensure_finite(array, stage)
    return Matrix.from_array(array, name=name)


def symmetric_within(values: NDArray[np.floating[Any]], rtol: float = DEFAULT.rtol) -> bool:
    """Square and |A - Aᵀ| <= max(rtol * max|A|, DEFAULT.atol) entry-wise."""
    if values.ndim != 2 or values.shape[0] != values.shape[1]:
        return False
    scale = float(np.max(np.abs(values)))
    tol = max(rtol * scale, DEFAULT.atol)
    return bool(np.all(np.abs(values - values.T) <= tol))


def frobenius(values: NDArray[np.floating[Any]]) -> float:
    """Frobenius norm without overflow for large entries."""
    scale = float(np.max(np.abs(values))) if values.size else 0.0
    if scale == 0.0:
        return 0.0
    scaled = values / scale
    return scale * float(np.sqrt(np.sum(scaled * scaled)))
