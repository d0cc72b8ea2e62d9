"""
Exception hierarchy for PyMatrix.

All exceptions inherit from PyMatrixError to allow catching any
library-specific error. Shape problems are ValidationErrors and are raised
before any arithmetic happens; numerical problems are NumericalErrors raised
from inside an engine; iteration budgets are ConvergenceErrors.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyMatrixError(Exception):
    """Base exception for all PyMatrix errors."""
    pass


class ValidationError(PyMatrixError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionMismatchError(ValidationError):
    """
    Operand shapes are incompatible with the requested operation.

    Raised when a matrix has an invalid size or when two operands have
    shapes that cannot be combined (e.g. cols(A) != rows(B) for a product).

    Attributes:
        expected: Expected shape or size, if applicable
        actual: Offending shape or size, if applicable
    """

    def __init__(
        self,
        message: str,
        expected: tuple[int, ...] | int | None = None,
        actual: tuple[int, ...] | int | None = None,
    ):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class NotSquareError(ValidationError):
    """
    A square-only operation received a rectangular matrix.

    Attributes:
        shape: Shape of the rectangular operand
        operation: Name of the operation that required a square input
    """

    def __init__(
        self,
        message: str,
        shape: tuple[int, int] | None = None,
        operation: str | None = None,
    ):
        super().__init__(message)
        self.shape = shape
        self.operation = operation


class NumericalError(PyMatrixError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or nearly singular.

    Raised when elimination meets a pivot whose magnitude is at or below
    the pivot tolerance, so the requested solve or inverse does not exist.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        pivot_index: Elimination step at which the pivot failed
        pivot: Magnitude of the failing pivot
        tolerance: Pivot tolerance that was not exceeded
        rank: Numerical rank, if computed
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        pivot_index: int | None = None,
        pivot: float | None = None,
        tolerance: float | None = None,
        rank: int | None = None,
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.pivot_index = pivot_index
        self.pivot = pivot
        self.tolerance = tolerance
        self.rank = rank


class NumericOverflowError(NumericalError):
    """
    An intermediate value left the representable float64 range.

    Attributes:
        stage: Algorithm stage where the non-finite value appeared
    """

    def __init__(self, message: str, stage: str | None = None):
        super().__init__(message)
        self.stage = stage


class ConvergenceError(PyMatrixError):
    """
    Iterative algorithm failed to converge.

    Raised when the Jacobi eigenvalue sweep or the shifted QR iteration
    exhausts its iteration budget. The engine never returns a partial
    result in that case.

    Attributes:
        iterations: Number of iterations completed
        final_change: Residual measure at the last iteration
        reason: Why convergence failed (e.g., 'max_iterations')
        threshold: The convergence threshold that was not met
    """

    def __init__(
        self,
        message: str,
        iterations: int,
        final_change: float | None = None,
        reason: str | None = None,
        threshold: float | None = None
    ):
        super().__init__(message)
        self.iterations = iterations
        self.final_change = final_change
        self.reason = reason
        self.threshold = threshold
