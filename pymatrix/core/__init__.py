"""
Core infrastructure for PyMatrix.

Key components:
    exceptions: Exception hierarchy
    validation: Input validators
    matrix: Immutable Matrix value type
    properties: Structural property analysis
    compute: Timing, tolerances and the linear algebra engines
"""

from pymatrix.core.exceptions import (
    PyMatrixError,
    ValidationError,
    DimensionMismatchError,
    NotSquareError,
    NumericalError,
    SingularMatrixError,
    NumericOverflowError,
    ConvergenceError,
)
from pymatrix.core.matrix import Matrix
from pymatrix.core.properties import MatrixProperties, analyze

__all__ = [
    # Matrix
    "Matrix",
    "MatrixProperties",
    "analyze",
    # Exceptions
    "PyMatrixError",
    "ValidationError",
    "DimensionMismatchError",
    "NotSquareError",
    "NumericalError",
    "SingularMatrixError",
    "NumericOverflowError",
    "ConvergenceError",
]
