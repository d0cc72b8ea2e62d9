"""
Catalogue of example operand sets.

Each template pairs operands with the operation they illustrate and can be
run directly through apply().
"""

import math
from dataclasses import dataclass, field
from typing import Any, Literal

from pymatrix.core.matrix import Matrix
from pymatrix.core.compute.tolerances import EngineConfig, DEFAULT_CONFIG
from pymatrix.operations.design import Operation
from pymatrix.operations.solution import MatrixOperation
from pymatrix.operations.solvers import apply


@dataclass(frozen=True)
class MatrixTemplate:
    id: str
    name: str
    description: str
    category: str
    operands: tuple[Matrix, ...]
    operation: Operation
    use_cases: tuple[str, ...]
    difficulty: Literal['simple', 'medium', 'complex']
    params: dict[str, Any] = field(default_factory=dict)

    def run(self, config: EngineConfig = DEFAULT_CONFIG) -> MatrixOperation:
        """Apply the template's operation to its operands."""
        return apply(self.operation, self.operands, self.params, config=config)


_C45 = math.cos(math.pi / 4)
_S45 = math.sin(math.pi / 4)

TEMPLATES: tuple[MatrixTemplate, ...] = (
    MatrixTemplate(
        id='basic-2x2',
        name='Basic 2×2 Matrices',
        description='Simple 2×2 matrices for basic operations',
        category='Basic',
        operands=(
            Matrix.from_rows([[1, 2], [3, 4]], name='A'),
            Matrix.from_rows([[5, 6], [7, 8]], name='B'),
        ),
        operation=Operation.ADD,
        use_cases=('Learning', 'Basic operations', 'Introduction to matrices'),
        difficulty='simple',
    ),
    MatrixTemplate(
        id='identity-matrices',
        name='Identity Matrices',
        description='Identity matrices for multiplication properties',
        category='Special',
        operands=(
            Matrix.from_rows([[2, 1, 0], [1, 3, 1], [0, 1, 2]], name='A'),
            Matrix.identity(3),
        ),
        operation=Operation.MULTIPLY,
        use_cases=('Identity properties', 'Matrix multiplication', 'Linear algebra'),
        difficulty='simple',
    ),
    MatrixTemplate(
        id='symmetric-matrix',
        name='Symmetric Matrix',
        description='Symmetric matrix for eigenvalue analysis',
        category='Special',
        operands=(Matrix.from_rows([[4, 1, 2], [1, 3, 0], [2, 0, 5]], name='S'),),
        operation=Operation.DETERMINANT,
        use_cases=('Eigenvalues', 'Symmetric properties', 'Quadratic forms'),
        difficulty='medium',
    ),
    MatrixTemplate(
        id='rotation-matrix',
        name='Rotation Matrix',
        description='2D rotation matrix (45 degrees)',
        category='Geometric',
        operands=(Matrix.from_rows([[_C45, -_S45], [_S45, _C45]], name='R'),),
        operation=Operation.INVERSE,
        use_cases=('Rotations', 'Computer graphics', 'Geometric transformations'),
        difficulty='medium',
    ),
    MatrixTemplate(
        id='singular-matrix',
        name='Singular Matrix',
        description='Non-invertible matrix for rank analysis',
        category='Special',
        operands=(Matrix.from_rows([[1, 2, 3], [2, 4, 6], [1, 2, 3]], name='A'),),
        operation=Operation.RANK,
        use_cases=('Rank analysis', 'Linear dependence', 'Null space'),
        difficulty='medium',
    ),
    MatrixTemplate(
        id='large-sparse',
        name='Large Sparse Matrix',
        description='Large matrix with many zeros',
        category='Performance',
        operands=(Matrix.from_rows([
            [1, 0, 0, 0, 2],
            [0, 3, 0, 0, 0],
            [0, 0, 4, 0, 0],
            [0, 0, 0, 5, 0],
            [6, 0, 0, 0, 7],
        ], name='A'),),
        operation=Operation.TRANSPOSE,
        use_cases=('Sparse matrices', 'Performance testing', 'Large systems'),
        difficulty='medium',
    ),
    MatrixTemplate(
        id='ill-conditioned',
        name='Ill-conditioned Matrix',
        description='Matrix with high condition number',
        category='Numerical',
        operands=(Matrix.from_rows([
            [1, 1, 1],
            [1, 1.0001, 1],
            [1, 1, 1.0001],
        ], name='A'),),
        operation=Operation.INVERSE,
        use_cases=('Numerical stability', 'Condition numbers', 'Error analysis'),
        difficulty='complex',
    ),
    MatrixTemplate(
        id='matrix-power',
        name='Matrix Powers',
        description='Matrix for exponentiation testing',
        category='Advanced',
        operands=(Matrix.from_rows([[2, 1], [0, 2]], name='A'),),
        operation=Operation.POWER,
        use_cases=('Matrix exponentiation', 'Markov chains', 'Recurrence relations'),
        difficulty='complex',
    ),
)

_BY_ID = {template.id: template for template in TEMPLATES}


def get_template(template_id: str) -> MatrixTemplate:
    """
    Look up a template by id.

    Raises:
        KeyError: If no template has that id
    """
    try:
        return _BY_ID[template_id]
    except KeyError:
        raise KeyError(
            f"Unknown template: {template_id!r}. Available: {', '.join(_BY_ID)}"
        ) from None


def list_templates(category: str | None = None) -> list[MatrixTemplate]:
    """All templates, or those in one category (case-insensitive)."""
    if category is None:
        return list(TEMPLATES)
    wanted = category.lower()
    return [t for t in TEMPLATES if t.category.lower() == wanted]
