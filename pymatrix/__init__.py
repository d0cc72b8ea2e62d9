"""
PyMatrix: dense matrix operations with numerical-stability diagnostics.

Arithmetic, LU/QR/SVD decompositions, eigenvalues, linear solves, inverses
and integer powers on immutable float64 matrices. Every call through
apply() returns the result together with timing, a stability score and an
analysis of the operand.

Submodules:
    core: Matrix type, exceptions, validation and the linear algebra engines
    operations: apply() dispatcher, pre-flight checks and templates
"""

__version__ = "0.1.0"

from pymatrix.core import (
    Matrix,
    PyMatrixError,
    ValidationError,
    DimensionMismatchError,
    NotSquareError,
    NumericalError,
    SingularMatrixError,
    NumericOverflowError,
    ConvergenceError,
)
from pymatrix.core.compute.tolerances import EngineConfig
from pymatrix.operations import (
    apply,
    check_operation,
    Operation,
    MatrixOperation,
    Status,
    get_template,
    list_templates,
)

__all__ = [
    "__version__",
    "apply",
    "check_operation",
    "Operation",
    "MatrixOperation",
    "Status",
    "Matrix",
    "EngineConfig",
    "get_template",
    "list_templates",
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
