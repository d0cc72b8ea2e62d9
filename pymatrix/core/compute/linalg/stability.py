"""
Norms, conditioning and the stability score attached to every operation.

The condition number is the 2-norm one, σ_max / σ_min over the min(m, n)
singular values. It is the factor by which relative perturbations of the
input can be amplified in the result; log10(cond) is roughly the number of
decimal digits lost. stability_score() maps that onto [0, 1] so callers
can compare operations without reading condition numbers.
"""

import math
from typing import Sequence

import numpy as np

from pymatrix.core.matrix import Matrix
from pymatrix.core.compute.tolerances import (
    STRUCTURE,
    NEAR_SINGULAR_THRESHOLD,
    EngineConfig,
    DEFAULT_CONFIG,
)
from pymatrix.core.compute.linalg._common import frobenius
from pymatrix.core.compute.linalg.svd import singular_values


def frobenius_norm(A: Matrix) -> float:
    """sqrt of the sum of squared entries."""
    return frobenius(A.to_array())


def one_norm(A: Matrix) -> float:
    """Maximum absolute column sum."""
    return float(np.max(np.sum(np.abs(A.to_array()), axis=0)))


def inf_norm(A: Matrix) -> float:
    """Maximum absolute row sum."""
    return float(np.max(np.sum(np.abs(A.to_array()), axis=1)))


def spectral_norm(A: Matrix, config: EngineConfig = DEFAULT_CONFIG) -> float:
    """Largest singular value."""
    return singular_values(A, config)[0]


def condition_number(A: Matrix, config: EngineConfig = DEFAULT_CONFIG) -> float:
    """
    2-norm condition number σ_max / σ_min.

    Returns inf when the smallest singular value is zero, which includes
    the all-zero matrix. Rectangular input uses its min(m, n) singular
    values.
    """
    return condition_from_singular_values(singular_values(A, config))


def condition_from_singular_values(sigma: Sequence[float]) -> float:
    """σ_max / σ_min of a descending sequence, inf when σ_min is zero."""
    smallest = sigma[-1]
    if smallest == 0.0:
        return math.inf
    return sigma[0] / smallest


def stability_score(condition: float) -> float:
    """
    Score in [0, 1]: 1 / (1 + log10(cond)), clamped.

    A perfectly conditioned operand (cond = 1) scores 1; singular operands
    (cond = inf) score 0.
    """
    if math.isnan(condition) or math.isinf(condition):
        return 0.0
    if condition <= 1.0:
        return 1.0
    return min(max(1.0 / (1.0 + math.log10(condition)), 0.0), 1.0)


def sparsity(A: Matrix, atol: float = STRUCTURE.atol) -> float:
    """Fraction of entries with magnitude below atol."""
    values = A.to_array()
    return float(np.count_nonzero(np.abs(values) < atol)) / values.size


def is_near_singular(condition: float, threshold: float = NEAR_SINGULAR_THRESHOLD) -> bool:
    """True when cond exceeds threshold (about four digits left in float64)."""
    return condition > threshold
