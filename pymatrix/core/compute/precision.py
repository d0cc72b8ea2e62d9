"""
Numerical precision constants and utilities.

Provides machine epsilon, the relative pivot/rank tolerance and the
overflow guard used across all engines.
"""

import numpy as np
from numpy.typing import NDArray
from typing import Any

from pymatrix.core.exceptions import NumericOverflowError


# Machine epsilon for float64
EPSILON_64: float = float(np.finfo(np.float64).eps)  # ~2.22e-16

# Smallest positive normal float64
TINY_64: float = float(np.finfo(np.float64).tiny)


def relative_tolerance(shape: tuple[int, ...], magnitude: float) -> float:
    """
    Tolerance for treating a pivot or singular value as zero.

    Computed as max(shape) * eps * magnitude, the same rule LAPACK-based
    rank estimators use. Floating point elimination almost never produces
    an exact zero, so an exact-zero test would report every matrix as
    full rank.

    Args:
        shape: Matrix shape
        magnitude: Scale of the matrix (max |a_ij| or the largest singular value)
    """
    return max(shape) * EPSILON_64 * magnitude


def ensure_finite(array: NDArray[np.floating[Any]], stage: str) -> None:
    """
    Verify an intermediate or final result stayed representable.

    Args:
        array: Result to check
        stage: Algorithm stage, reported on the exception

    Raises:
        NumericOverflowError: If array contains Inf or NaN
    """
    if not np.all(np.isfinite(array)):
        raise NumericOverflowError(
            f"{stage}: intermediate magnitude exceeded the float64 range",
            stage=stage,
        )
