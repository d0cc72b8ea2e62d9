"""
Tests for the eigenvalue solvers.

Validates:
    - Jacobi path: values, orthogonal vectors, A·V = V·Λ, ordering
    - Shifted QR path: real spectra, complex-conjugate pairs, defective input
    - Algorithm selection by symmetry
    - Iteration caps raise ConvergenceError
"""

import math

import numpy as np
import pytest

from pymatrix import Matrix
from pymatrix.core.exceptions import ConvergenceError, NotSquareError, ValidationError
from pymatrix.core.compute.tolerances import EngineConfig
from pymatrix.core.compute.linalg.eigen import (
    eig_qr,
    eigenvalues,
    eigh_jacobi,
    hessenberg,
)


def sorted_complex(values):
    return sorted((complex(v) for v in values), key=lambda z: (z.real, z.imag))


# ═══════════════════════════════════════════════════════════════════════
# Symmetric path
# ═══════════════════════════════════════════════════════════════════════


class TestJacobi:

    def test_diagonal(self):
        result = eigh_jacobi(Matrix.diagonal([2, 3]))
        assert result.values == (3.0, 2.0)
        assert result.method == 'jacobi'
        assert result.iterations == 0

    def test_known_2x2(self):
        result = eigh_jacobi(Matrix.from_rows([[2, 1], [1, 2]]))
        np.testing.assert_allclose(result.values, [3.0, 1.0], atol=1e-12)

    def test_eigenpairs(self, random_symmetric):
        result = eigh_jacobi(random_symmetric)
        A = random_symmetric.to_array()
        V = result.vectors.to_array()
        np.testing.assert_allclose(A @ V, V @ np.diag(result.values), atol=1e-8)

    def test_vectors_orthogonal(self, random_symmetric):
        V = eigh_jacobi(random_symmetric).vectors.to_array()
        np.testing.assert_allclose(V.T @ V, np.eye(6), atol=1e-12)

    def test_sorted_descending(self, random_symmetric):
        values = eigh_jacobi(random_symmetric).values
        assert list(values) == sorted(values, reverse=True)

    def test_matches_numpy(self, random_symmetric):
        values = eigh_jacobi(random_symmetric).values
        expected = np.sort(np.linalg.eigvalsh(random_symmetric.to_array()))[::-1]
        np.testing.assert_allclose(values, expected, atol=1e-9)

    def test_trace_and_determinant(self, random_symmetric):
        values = np.array(eigh_jacobi(random_symmetric).values)
        A = random_symmetric.to_array()
        assert values.sum() == pytest.approx(np.trace(A), abs=1e-9)
        assert values.prod() == pytest.approx(np.linalg.det(A), rel=1e-8)

    def test_vector_sign_convention(self, random_symmetric):
        V = eigh_jacobi(random_symmetric).vectors.to_array()
        pivots = np.argmax(np.abs(V), axis=0)
        assert np.all(V[pivots, np.arange(V.shape[1])] > 0)

    def test_rejects_non_symmetric(self):
        with pytest.raises(ValidationError, match="symmetric"):
            eigh_jacobi(Matrix.from_rows([[1, 2], [3, 4]]))

    def test_rejects_rectangular(self):
        with pytest.raises(NotSquareError):
            eigh_jacobi(Matrix(2, 3, range(6)))

    def test_sweep_cap(self, random_symmetric):
        config = EngineConfig(jacobi_max_sweeps=0)
        with pytest.raises(ConvergenceError) as exc_info:
            eigh_jacobi(random_symmetric, config)
        assert exc_info.value.reason == 'max_iterations'


# ═══════════════════════════════════════════════════════════════════════
# General path
# ═══════════════════════════════════════════════════════════════════════


class TestHessenberg:

    def test_structure_and_spectrum(self, rng):
        A = rng.standard_normal((6, 6))
        H = hessenberg(A)
        assert not np.any(np.tril(H, k=-2))
        np.testing.assert_allclose(
            sorted_complex(np.linalg.eigvals(H)),
            sorted_complex(np.linalg.eigvals(A)),
            atol=1e-9,
        )


class TestShiftedQR:

    def test_upper_triangular(self):
        result = eig_qr(Matrix.from_rows([[1, 2, 3], [0, 4, 5], [0, 0, 6]]))
        np.testing.assert_allclose(result.values, [6.0, 4.0, 1.0], atol=1e-12)
        assert result.vectors is None
        assert result.method == 'shifted_qr'

    def test_real_spectrum(self):
        result = eig_qr(Matrix.from_rows([[4, 1], [2, 3]]))
        np.testing.assert_allclose(result.values, [5.0, 2.0], atol=1e-12)
        assert result.is_real

    def test_rotation_gives_conjugate_pair(self):
        result = eig_qr(Matrix.from_rows([[0, -1], [1, 0]]))
        assert not result.is_real
        assert result.values[0] == pytest.approx(1j)
        assert result.values[1] == pytest.approx(-1j)

    def test_conjugate_pair_ordering(self):
        c, s = math.cos(math.pi / 4), math.sin(math.pi / 4)
        result = eig_qr(Matrix.from_rows([[c, -s, 0], [s, c, 0], [0, 0, 3]]))
        assert result.values[0] == pytest.approx(3.0)
        first, second = result.values[1], result.values[2]
        assert first.imag > 0
        assert second == pytest.approx(first.conjugate())
        assert abs(first) == pytest.approx(1.0)

    def test_random_matches_numpy(self, rng):
        A = rng.standard_normal((7, 7))
        result = eig_qr(Matrix.from_array(A))
        np.testing.assert_allclose(
            sorted_complex(result.values),
            sorted_complex(np.linalg.eigvals(A)),
            atol=1e-8,
        )

    def test_defective_jordan_block(self):
        result = eig_qr(Matrix.from_rows([[2, 1], [0, 2]]))
        np.testing.assert_allclose(result.values, [2.0, 2.0], atol=1e-8)

    def test_companion_matrix(self):
        # x³ - 6x² + 11x - 6 = (x - 1)(x - 2)(x - 3)
        C = Matrix.from_rows([[6, -11, 6], [1, 0, 0], [0, 1, 0]])
        np.testing.assert_allclose(eig_qr(C).values, [3.0, 2.0, 1.0], atol=1e-9)

    def test_trace_preserved(self, rng):
        A = rng.standard_normal((5, 5))
        total = sum(complex(v) for v in eig_qr(Matrix.from_array(A)).values)
        assert total.real == pytest.approx(np.trace(A), abs=1e-9)
        assert abs(total.imag) < 1e-9

    def test_one_by_one(self):
        result = eig_qr(Matrix.from_rows([[7]]))
        assert result.values == (7.0,)

    def test_iteration_cap(self, rng):
        config = EngineConfig(qr_iterations_per_eigenvalue=0)
        with pytest.raises(ConvergenceError):
            eig_qr(Matrix.from_array(rng.standard_normal((4, 4))), config)


# ═══════════════════════════════════════════════════════════════════════
# Selection
# ═══════════════════════════════════════════════════════════════════════


class TestSelection:

    def test_symmetric_uses_jacobi(self, random_symmetric):
        assert eigenvalues(random_symmetric).method == 'jacobi'

    def test_general_uses_qr(self):
        assert eigenvalues(Matrix.from_rows([[1, 2], [3, 4]])).method == 'shifted_qr'

    def test_diagonal_values(self):
        result = eigenvalues(Matrix.diagonal([2, 3]))
        assert set(result.values) == {2.0, 3.0}

    def test_rectangular_rejected(self):
        with pytest.raises(NotSquareError):
            eigenvalues(Matrix(3, 2, range(6)))
