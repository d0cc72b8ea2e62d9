"""
Immutable dense matrix.

Matrix is the value type every engine consumes and produces. Data is held
in a float64 NumPy buffer flagged read-only, so a Matrix can be shared by
reference between callers and threads without copying or locking. Every
operation returns a new Matrix.

Structural facts (symmetry, rank, determinant, ...) are computed lazily on
first access and cached on the instance.
"""

from __future__ import annotations

from functools import cached_property
from typing import Any, Iterable, Sequence, TYPE_CHECKING
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pymatrix.core.validation import (
    check_array,
    check_finite,
    check_2d,
    check_positive_dims,
    check_length,
)

if TYPE_CHECKING:
    from pymatrix.core.properties import MatrixProperties


class Matrix:
    """
    Immutable dense numeric grid.

    Construction:
        Matrix(2, 2, [1, 2, 3, 4])            # row-major values
        Matrix.from_rows([[1, 2], [3, 4]])    # nested rows
        Matrix.from_array(np.eye(3))          # any 2D array-like
        Matrix.identity(3), Matrix.zeros(2, 3), Matrix.diagonal([1, 2])

    Equality compares shape and values exactly; the name is a display label
    only.
    """

    def __init__(
        self,
        rows: int,
        cols: int,
        data: Iterable[float] | ArrayLike,
        name: str = 'A',
    ):
        check_positive_dims(rows, cols, name)
        values = check_array(data if isinstance(data, np.ndarray) else list(data), name)
        check_length(values.size, rows, cols, name)
        check_finite(values, name)
        grid = values.reshape(rows, cols).copy()
        grid.setflags(write=False)
        object.__setattr__(self, '_values', grid)
        object.__setattr__(self, 'name', name)

    # === Construction ===

    @classmethod
    def from_rows(cls, grid: Sequence[Sequence[float]], name: str = 'A') -> Matrix:
        """Build from a nested sequence of rows."""
        values = check_array(grid, name)
        check_2d(values, name)
        rows, cols = values.shape
        return cls(rows, cols, values.ravel(), name=name)

    @classmethod
    def from_array(cls, array: ArrayLike, name: str = 'A') -> Matrix:
        """Build from a 2D array-like (a 1D input becomes a column vector)."""
        values = check_array(array, name)
        if values.ndim == 1:
            values = values.reshape(-1, 1)
        check_2d(values, name)
        rows, cols = values.shape
        return cls(rows, cols, values.ravel(), name=name)

    @classmethod
    def identity(cls, n: int, name: str = 'I') -> Matrix:
        """n x n identity matrix."""
        check_positive_dims(n, n, name)
        return cls(n, n, np.eye(n).ravel(), name=name)

    @classmethod
    def zeros(cls, rows: int, cols: int, name: str = 'O') -> Matrix:
        """rows x cols zero matrix."""
        check_positive_dims(rows, cols, name)
        return cls(rows, cols, np.zeros(rows * cols), name=name)

    @classmethod
    def diagonal(cls, values: Sequence[float], name: str = 'D') -> Matrix:
        """Square matrix with the given values on the diagonal."""
        diag = check_array(values, name).ravel()
        n = diag.size
        return cls(n, n, np.diag(diag).ravel(), name=name)

    # === Immutability ===

    def __setattr__(self, key: str, value: Any) -> None:
        raise AttributeError(f"Matrix is immutable; cannot set {key!r}")

    def __delattr__(self, key: str) -> None:
        raise AttributeError(f"Matrix is immutable; cannot delete {key!r}")

    # === Shape and data ===

    @property
    def rows(self) -> int:
        return self._values.shape[0]

    @property
    def cols(self) -> int:
        return self._values.shape[1]

    @property
    def shape(self) -> tuple[int, int]:
        return self._values.shape

    @property
    def size(self) -> int:
        return self._values.size

    @property
    def data(self) -> NDArray[np.float64]:
        """Row-major flat view of the values (read-only)."""
        return self._values.reshape(-1)

    @property
    def is_square(self) -> bool:
        return self.rows == self.cols

    def to_array(self) -> NDArray[np.float64]:
        """Read-only 2D view of the values. Copy before mutating."""
        return self._values

    def to_list(self) -> list[list[float]]:
        """Nested Python lists, one per row."""
        return self._values.tolist()

    def to_grid(self) -> tuple[int, int, tuple[float, ...]]:
        """
        Plain (rows, cols, values) triple.

        This is the exporter contract: CSV/LaTeX/MathML/text emitters take
        the triple and never depend on engine types.
        """
        return self.rows, self.cols, tuple(float(v) for v in self.data)

    def __getitem__(self, index: tuple[int, int]) -> float:
        i, j = index
        return float(self._values[i, j])

    def __iter__(self):
        """Iterate over rows as tuples."""
        return (tuple(float(v) for v in row) for row in self._values)

    # === Derived matrices ===

    def transpose(self) -> Matrix:
        """Transposed copy; a pure relabeling of entries, exact."""
        return Matrix.from_array(self._values.T, name=f"{self.name}ᵀ")

    @property
    def T(self) -> Matrix:
        return self.transpose()

    def renamed(self, name: str) -> Matrix:
        """Same values under a different display label."""
        return Matrix(self.rows, self.cols, self._values, name=name)

    # === Cached structure ===

    @cached_property
    def rank(self) -> int:
        """Numerical rank by Gaussian elimination (cached)."""
        from pymatrix.core.compute.linalg.lu import rank
        return rank(self)

    @cached_property
    def determinant(self) -> float | None:
        """Determinant via LU, or None for a rectangular matrix (cached)."""
        if not self.is_square:
            return None
        from pymatrix.core.compute.linalg.lu import determinant
        return determinant(self)

    @cached_property
    def properties(self) -> MatrixProperties:
        """Structural property bundle (computed once, then cached)."""
        from pymatrix.core.properties import analyze
        return analyze(self)

    # === Comparison and display ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._values, other._values))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Matrix(name={self.name!r}, shape={self.rows}x{self.cols}, data={self.to_list()!r})"
