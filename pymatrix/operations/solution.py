"""
Operation result types.

Contains the metadata and analysis payloads and the MatrixOperation
envelope returned by apply().
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal, Union

from pymatrix.core.matrix import Matrix
from pymatrix.core.exceptions import PyMatrixError
from pymatrix.core.compute.linalg.lu import LUResult
from pymatrix.core.compute.linalg.qr import QRResult
from pymatrix.core.compute.linalg.svd import SVDResult
from pymatrix.core.compute.linalg.eigen import EigenResult
from pymatrix.operations.design import Operation


OperationResult = Union[Matrix, float, int, LUResult, QRResult, SVDResult, EigenResult]


class Status(str, Enum):
    DONE = 'done'
    FAILED = 'failed'


@dataclass(frozen=True)
class Decomposition:
    """
    Factor matrices of a decomposition, for display and export.

    Attributes:
        kind: 'LU', 'QR', 'SVD' or 'Eigenvalue'
        factors: Factor matrices in conventional order (L, U, P / Q, R /
            U, Σ, V / eigenvectors)
        info: Scalar facts about the factorization (pivot sign, method, ...)
    """
    kind: Literal['LU', 'QR', 'SVD', 'Eigenvalue']
    factors: tuple[Matrix, ...]
    info: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class OperationMetadata:
    """
    Cost and quality facts about one operation.

    Attributes:
        operation_time: Wall clock seconds for the whole call
        timing: Section breakdown ('validation', 'computation', 'analysis')
        complexity: Floating point operation estimate
        numerical_stability: Score in [0, 1] from the primary operand's
            condition number
        memory_usage: Bytes held by operands and matrix results (8 per value)
        algorithm: Name of the algorithm variant that ran
    """
    operation_time: float
    timing: dict[str, float]
    complexity: int
    numerical_stability: float
    memory_usage: int
    algorithm: str


@dataclass(frozen=True)
class OperationAnalysis:
    """
    Numerical profile of the primary operand.

    Attributes:
        dimensions: 'RxC'
        sparsity: Fraction of entries below 1e-10 in magnitude
        norm: Frobenius norm
        condition: 2-norm condition number, inf if singular
        singular_values: Descending singular values
        decomposition: Factors when the operation was a decomposition
    """
    dimensions: str
    sparsity: float
    norm: float
    condition: float
    singular_values: tuple[float, ...] | None = None
    decomposition: Decomposition | None = None


@dataclass(frozen=True)
class MatrixOperation:
    """
    Outcome of one dispatcher call.

    A failed operation carries the typed exception in `error` and no
    result, metadata or analysis. Call raise_for_error() to turn it back
    into an exception.
    """
    operation: Operation
    operands: tuple[Matrix, ...]
    params: dict[str, Any]
    result: OperationResult | None
    status: Status
    error: PyMatrixError | None = None
    metadata: OperationMetadata | None = None
    analysis: OperationAnalysis | None = None
    warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def succeeded(self) -> bool:
        return self.status is Status.DONE

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)

    def raise_for_error(self) -> None:
        """Re-raise the stored exception of a failed operation."""
        if self.error is not None:
            raise self.error

    def __repr__(self) -> str:
        if not self.succeeded:
            return f"MatrixOperation({self.operation.value}, failed: {self.error!r})"
        return f"MatrixOperation({self.operation.value}, result={self.result!r})"
