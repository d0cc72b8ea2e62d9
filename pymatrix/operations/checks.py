"""
Pre-flight validation report.

check_operation() inspects an operation request without running it and
collects every problem it finds into a ValidationReport, together with
performance and conditioning advisories and a 0-100 quality score. Unlike
apply(), it does not stop at the first shape error.
"""

from dataclasses import dataclass, field
from typing import Any, Literal, Mapping, Sequence

from pymatrix.core.matrix import Matrix
from pymatrix.core.exceptions import (
    ValidationError,
    DimensionMismatchError,
    NotSquareError,
)
from pymatrix.core.compute.tolerances import (
    EngineConfig,
    DEFAULT_CONFIG,
    HIGH_CONDITION_THRESHOLD,
    NEAR_SINGULAR_THRESHOLD,
)
from pymatrix.core.compute.linalg.stability import condition_number, sparsity
from pymatrix.operations.design import (
    Operation,
    OperationDesign,
    coerce_operands,
    expected_operand_count,
)


# Quality score deductions
COUNT_PENALTY = 50
DIMENSION_PENALTY = 40
NUMERICAL_PENALTY = 30
LARGE_PENALTY = 5
SPARSE_PENALTY = 5
NEAR_SINGULAR_PENALTY = 15
HIGH_CONDITION_PENALTY = 10

LARGE_DIMENSION = 10
SPARSE_FRACTION = 0.8


@dataclass(frozen=True)
class ValidationIssue:
    """A single blocking problem with an operation request."""
    message: str
    kind: Literal['operation', 'dimension', 'numerical']
    severity: Literal['error'] = 'error'


@dataclass(frozen=True)
class ValidationReport:
    """
    Outcome of check_operation().

    Attributes:
        is_valid: False if any blocking issue was found
        errors: Blocking issues
        warnings: Non-blocking advisories (size, conditioning)
        suggestions: Hints, always ending with an overall quality remark
        quality_score: 100 minus deductions, floored at 0
    """
    is_valid: bool
    errors: tuple[ValidationIssue, ...] = field(default_factory=tuple)
    warnings: tuple[str, ...] = field(default_factory=tuple)
    suggestions: tuple[str, ...] = field(default_factory=tuple)
    quality_score: int = 100


def _quality_remark(score: int) -> str:
    if score >= 90:
        return 'Excellent matrix setup for computation'
    if score >= 70:
        return 'Good matrices with minor considerations'
    if score >= 50:
        return 'Matrices need improvement for optimal computation'
    return 'Matrices have significant issues'


def _needs_invertible(operation: Operation, design: OperationDesign) -> bool:
    if operation in (Operation.INVERSE, Operation.SOLVE):
        return True
    return operation is Operation.POWER and design.exponent is not None and design.exponent < 0


def check_operation(
    operation: Operation | str,
    operands: Matrix | Sequence[Matrix | Sequence[Sequence[float]]],
    params: Mapping[str, Any] | None = None,
    *,
    config: EngineConfig = DEFAULT_CONFIG,
) -> ValidationReport:
    """
    Validate an operation request and rate its numerical quality.

    Args:
        operation: Operation member or its name
        operands: Matrix instances or nested numeric grids
        params: Operation parameters, as for apply()
        config: Engine settings used for the condition estimates

    Returns:
        ValidationReport

    Raises:
        ValidationError: If the operation name is unknown or an operand is
            not a finite numeric grid
    """
    op = Operation.parse(operation)
    matrices = coerce_operands(op, operands)

    errors: list[ValidationIssue] = []
    warnings: list[str] = []
    suggestions: list[str] = []
    score = 100

    expected = expected_operand_count(op)
    if len(matrices) != expected:
        score -= COUNT_PENALTY
        errors.append(ValidationIssue(
            f"Operation '{op.value}' requires {expected} matrix(es), got {len(matrices)}",
            kind='operation',
        ))
        return ValidationReport(
            is_valid=False,
            errors=tuple(errors),
            quality_score=score,
        )

    design = None
    try:
        design = OperationDesign.build(op, matrices, params)
    except (DimensionMismatchError, NotSquareError) as exc:
        score -= DIMENSION_PENALTY
        errors.append(ValidationIssue(str(exc), kind='dimension'))
    except ValidationError as exc:
        score -= COUNT_PENALTY
        errors.append(ValidationIssue(str(exc), kind='operation'))

    if design is not None and _needs_invertible(op, design) and not design.primary.properties.is_invertible:
        score -= NUMERICAL_PENALTY
        errors.append(ValidationIssue(
            f"{design.primary.name} is not invertible (determinant is zero or near zero)",
            kind='numerical',
        ))

    for A in matrices:
        if A.rows > LARGE_DIMENSION or A.cols > LARGE_DIMENSION:
            score -= LARGE_PENALTY
            warnings.append(f"{A.name}: large matrices may impact performance")

        if sparsity(A) > SPARSE_FRACTION:
            score -= SPARSE_PENALTY
            suggestions.append(
                f"{A.name}: consider using sparse matrix algorithms for better performance"
            )

        cond = condition_number(A, config)
        if cond > NEAR_SINGULAR_THRESHOLD:
            score -= NEAR_SINGULAR_PENALTY
            warnings.append(
                f"{A.name} is ill-conditioned - results may be numerically unstable"
            )
        elif cond > HIGH_CONDITION_THRESHOLD:
            score -= HIGH_CONDITION_PENALTY
            warnings.append(
                f"{A.name} has a high condition number - be cautious of numerical errors"
            )

    score = max(score, 0)
    suggestions.append(_quality_remark(score))
    return ValidationReport(
        is_valid=not errors,
        errors=tuple(errors),
        warnings=tuple(warnings),
        suggestions=tuple(suggestions),
        quality_score=score,
    )
