"""
Matrix operations: the dispatcher and its request/result types.

Public API:
    apply(operation, operands, params=None) -> MatrixOperation
    check_operation(operation, operands, params=None) -> ValidationReport
    TEMPLATES, get_template(id), list_templates(category=None)
"""

from pymatrix.operations.design import Operation, OperationDesign
from pymatrix.operations.solution import (
    Decomposition,
    MatrixOperation,
    OperationAnalysis,
    OperationMetadata,
    Status,
)
from pymatrix.operations.solvers import apply
from pymatrix.operations.checks import ValidationIssue, ValidationReport, check_operation
from pymatrix.operations.templates import (
    MatrixTemplate,
    TEMPLATES,
    get_template,
    list_templates,
)

__all__ = [
    # Dispatch
    "apply",
    "Operation",
    "OperationDesign",
    # Results
    "MatrixOperation",
    "OperationMetadata",
    "OperationAnalysis",
    "Decomposition",
    "Status",
    # Pre-flight checks
    "check_operation",
    "ValidationReport",
    "ValidationIssue",
    # Templates
    "MatrixTemplate",
    "TEMPLATES",
    "get_template",
    "list_templates",
]
