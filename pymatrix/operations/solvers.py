"""
Operation dispatch.

This module provides the apply() function (public API). Every request goes
through the same phases: validation, computation, analysis. Each phase is
timed, and a failure in any of them produces a MatrixOperation with
status 'failed' instead of an exception.
"""

import math
import warnings
from typing import Any, Callable, Mapping, Sequence

from pymatrix.core.matrix import Matrix
from pymatrix.core.exceptions import PyMatrixError
from pymatrix.core.compute.timing import Timer
from pymatrix.core.compute.tolerances import (
    EngineConfig,
    DEFAULT_CONFIG,
    HIGH_CONDITION_THRESHOLD,
)
from pymatrix.core.compute.linalg import lu, qr, eigen, svd, arithmetic
from pymatrix.core.compute.linalg.stability import (
    condition_from_singular_values,
    frobenius_norm,
    is_near_singular,
    sparsity,
    stability_score,
)
from pymatrix.operations.design import Operation, OperationDesign, coerce_operands
from pymatrix.operations.solution import (
    Decomposition,
    MatrixOperation,
    OperationAnalysis,
    OperationMetadata,
    OperationResult,
    Status,
)


BYTES_PER_VALUE = 8

# Operations whose result is only as accurate as the operand's conditioning
# allows; accepting a near-singular operand for these emits a RuntimeWarning.
CONDITION_SENSITIVE = frozenset({
    Operation.INVERSE,
    Operation.SOLVE,
    Operation.POWER,
    Operation.DETERMINANT,
})

Handler = Callable[[OperationDesign, EngineConfig], tuple[OperationResult, str]]


# Handlers: one per Operation, each returning (result, algorithm name)


def _add(design: OperationDesign, config: EngineConfig):
    return arithmetic.add(design.primary, design.secondary), 'Element-wise addition'


def _subtract(design: OperationDesign, config: EngineConfig):
    return arithmetic.subtract(design.primary, design.secondary), 'Element-wise subtraction'


def _multiply(design: OperationDesign, config: EngineConfig):
    return arithmetic.multiply(design.primary, design.secondary), 'Standard matrix multiplication'


def _transpose(design: OperationDesign, config: EngineConfig):
    return arithmetic.transpose(design.primary), 'Matrix transposition'


def _inverse(design: OperationDesign, config: EngineConfig):
    return lu.inverse(design.primary), 'Gaussian elimination with partial pivoting'


def _determinant(design: OperationDesign, config: EngineConfig):
    return lu.determinant(design.primary), 'LU decomposition'


def _trace(design: OperationDesign, config: EngineConfig):
    return arithmetic.trace(design.primary), 'Diagonal sum'


def _rank(design: OperationDesign, config: EngineConfig):
    return lu.rank(design.primary), 'Gaussian elimination'


def _eigenvalues(design: OperationDesign, config: EngineConfig):
    result = eigen.eigenvalues(design.primary, config)
    if result.method == 'jacobi':
        return result, 'Jacobi rotations'
    return result, 'Shifted QR (Hessenberg, Wilkinson shift)'


def _lu(design: OperationDesign, config: EngineConfig):
    return lu.lu_decompose(design.primary), 'Gaussian elimination with partial pivoting'


def _qr(design: OperationDesign, config: EngineConfig):
    return qr.qr_decompose(design.primary), 'Householder reflections'


def _svd(design: OperationDesign, config: EngineConfig):
    return svd.svd_decompose(design.primary, config), 'Jacobi eigendecomposition of AᵀA'


def _solve(design: OperationDesign, config: EngineConfig):
    x = lu.solve(design.primary, design.secondary)
    return x, 'LU forward and back substitution'


def _power(design: OperationDesign, config: EngineConfig):
    result = arithmetic.power(design.primary, design.exponent)
    if design.exponent < 0:
        return result, 'Binary exponentiation of the inverse'
    return result, 'Binary exponentiation'


_HANDLERS: dict[Operation, Handler] = {
    Operation.ADD: _add,
    Operation.SUBTRACT: _subtract,
    Operation.MULTIPLY: _multiply,
    Operation.TRANSPOSE: _transpose,
    Operation.INVERSE: _inverse,
    Operation.DETERMINANT: _determinant,
    Operation.TRACE: _trace,
    Operation.RANK: _rank,
    Operation.EIGENVALUES: _eigenvalues,
    Operation.LU: _lu,
    Operation.QR: _qr,
    Operation.SVD: _svd,
    Operation.SOLVE: _solve,
    Operation.POWER: _power,
}

_unrouted = set(Operation) - set(_HANDLERS)
if _unrouted:
    raise RuntimeError(
        f"No handler registered for: {', '.join(sorted(op.value for op in _unrouted))}"
    )


# Metadata and analysis


def estimate_complexity(design: OperationDesign) -> int:
    """
    Floating point operation estimate for an operation.

    Leading-order counts only: m·n for element-wise work, m·n·p for a
    product, n³ for elimination based work.
    """
    m, n = design.primary.shape
    op = design.operation
    if op in (Operation.ADD, Operation.SUBTRACT, Operation.TRANSPOSE):
        return m * n
    if op is Operation.MULTIPLY:
        return m * n * design.secondary.cols
    if op is Operation.TRACE:
        return n
    if op in (Operation.INVERSE, Operation.DETERMINANT, Operation.SOLVE):
        extra = n * n * design.secondary.cols if op is Operation.SOLVE else 0
        return n ** 3 + extra
    if op in (Operation.RANK, Operation.LU):
        return m * n * min(m, n)
    if op is Operation.QR:
        return 2 * m * n * min(m, n)
    if op is Operation.SVD:
        short, long = min(m, n), max(m, n)
        return long * short * short + short ** 3
    if op is Operation.EIGENVALUES:
        return 10 * n ** 3
    if op is Operation.POWER:
        k = abs(design.exponent)
        if k == 0:
            return n * n
        return n ** 3 * (2 * math.ceil(math.log2(k + 1)))
    return m * n


def _matrices_in(result: OperationResult | None) -> list[Matrix]:
    if isinstance(result, Matrix):
        return [result]
    if isinstance(result, lu.LUResult):
        return [result.L, result.U, result.P]
    if isinstance(result, qr.QRResult):
        return [result.Q, result.R]
    if isinstance(result, svd.SVDResult):
        return [result.U, result.V]
    if isinstance(result, eigen.EigenResult) and result.vectors is not None:
        return [result.vectors]
    return []


def estimate_memory(operands: Sequence[Matrix], result: OperationResult | None) -> int:
    """Bytes of operand and result matrices at 8 bytes per value."""
    values = sum(A.size for A in operands) + sum(M.size for M in _matrices_in(result))
    return values * BYTES_PER_VALUE


def _decomposition(result: OperationResult) -> Decomposition | None:
    if isinstance(result, lu.LUResult):
        return Decomposition('LU', (result.L, result.U, result.P),
                             {'pivot_signum': result.pivot_signum})
    if isinstance(result, qr.QRResult):
        return Decomposition('QR', (result.Q, result.R))
    if isinstance(result, svd.SVDResult):
        return Decomposition('SVD', (result.U, result.sigma(), result.V),
                             {'rank': result.rank})
    if isinstance(result, eigen.EigenResult):
        factors = (result.vectors,) if result.vectors is not None else ()
        return Decomposition('Eigenvalue', factors,
                             {'method': result.method, 'iterations': result.iterations})
    return None


def _analyze(
    design: OperationDesign,
    result: OperationResult,
    config: EngineConfig,
) -> OperationAnalysis:
    A = design.primary
    if isinstance(result, svd.SVDResult) and design.operation is Operation.SVD:
        sigma = result.singular_values
    else:
        sigma = svd.singular_values(A, config)
    return OperationAnalysis(
        dimensions=f"{A.rows}x{A.cols}",
        sparsity=sparsity(A),
        norm=frobenius_norm(A),
        condition=condition_from_singular_values(sigma),
        singular_values=tuple(sigma),
        decomposition=_decomposition(result),
    )


def _condition_warnings(design: OperationDesign, condition: float) -> tuple[str, ...]:
    """Warning strings for the primary operand's conditioning."""
    name = design.primary.name
    if is_near_singular(condition):
        message = (
            f"{name} is near-singular (condition number {condition:.3e}); "
            f"results may be numerically unstable"
        )
        if design.operation in CONDITION_SENSITIVE:
            warnings.warn(message, RuntimeWarning, stacklevel=3)
        return (message,)
    if condition > HIGH_CONDITION_THRESHOLD:
        return (
            f"{name} has a high condition number ({condition:.3e}); "
            f"be cautious of numerical errors",
        )
    return ()


# Public API


def apply(
    operation: Operation | str,
    operands: Matrix | Sequence[Matrix | Sequence[Sequence[float]]],
    params: Mapping[str, Any] | None = None,
    *,
    config: EngineConfig = DEFAULT_CONFIG,
) -> MatrixOperation:
    """
    Run one matrix operation.

    This is the primary public API. Operands are validated against the
    operation before anything is computed; engine failures (singular
    matrix, overflow, non-convergence) are captured on the returned
    MatrixOperation rather than raised.

    Args:
        operation: Operation member or its name ('add', 'inverse', ...)
        operands: One or two Matrix instances or nested numeric grids
        params: Operation parameters; only {'power': n} for Operation.POWER
            (default exponent 2)
        config: Tolerances and iteration budgets for the eigen and SVD
            engines

    Returns:
        MatrixOperation with status 'done' and result, metadata and
        analysis filled in, or status 'failed' with the typed error

    Raises:
        ValidationError: If operation is not a known operation name

    Example:
        >>> from pymatrix import apply
        >>> op = apply('determinant', [[[4, 3], [6, 3]]])
        >>> op.result
        -6.0
        >>> op = apply('inverse', [[[1, 2], [2, 4]]])
        >>> op.status
        <Status.FAILED: 'failed'>
    """
    # === Boundary conversion ===
    op = Operation.parse(operation)
    params = dict(params or {})

    timer = Timer()
    timer.start()
    matrices: tuple[Matrix, ...] = ()
    try:
        with timer.section('validation'):
            matrices = coerce_operands(op, operands)
            design = OperationDesign.build(op, matrices, params)

        with timer.section('computation'):
            result, algorithm = _HANDLERS[op](design, config)

        with timer.section('analysis'):
            analysis = _analyze(design, result, config)
    except PyMatrixError as exc:
        timer.stop()
        return MatrixOperation(
            operation=op,
            operands=matrices,
            params=params,
            result=None,
            status=Status.FAILED,
            error=exc,
        )
    timer.stop()

    timing = timer.result()
    metadata = OperationMetadata(
        operation_time=timing['total_seconds'],
        timing=timing,
        complexity=estimate_complexity(design),
        numerical_stability=stability_score(analysis.condition),
        memory_usage=estimate_memory(design.operands, result),
        algorithm=algorithm,
    )
    return MatrixOperation(
        operation=op,
        operands=design.operands,
        params=params,
        result=result,
        status=Status.DONE,
        metadata=metadata,
        analysis=analysis,
        warnings=_condition_warnings(design, analysis.condition),
    )
