"""
Shared compute infrastructure for PyMatrix.

This module provides timing utilities, precision constants, tolerance tiers
and the dense linear algebra engines.

Submodules:
    timing: Execution timing utilities
    precision: Machine epsilon, pivot tolerance, overflow guard
    tolerances: Tolerance tiers and iteration budgets
    linalg: Elimination, QR, eigen, SVD and stability engines
"""

from pymatrix.core.compute.timing import Timer, timed
from pymatrix.core.compute.tolerances import (
    ToleranceTier,
    EngineConfig,
    DEFAULT_CONFIG,
)

__all__ = [
    # Timing
    "Timer",
    "timed",
    # Tolerances
    "ToleranceTier",
    "EngineConfig",
    "DEFAULT_CONFIG",
]
