"""
Tests for Householder QR.
"""

import numpy as np
import pytest

from pymatrix import Matrix
from pymatrix.core.compute.linalg.qr import householder_vector, qr_decompose


class TestHouseholderVector:

    def test_reflects_onto_first_axis(self):
        x = np.array([3.0, 4.0, 0.0])
        v = householder_vector(x)
        reflected = x - 2.0 * v * (v @ x)
        np.testing.assert_allclose(reflected, [-5.0, 0.0, 0.0], atol=1e-14)

    def test_unit_length(self, rng):
        v = householder_vector(rng.standard_normal(6))
        assert np.linalg.norm(v) == pytest.approx(1.0)

    def test_negative_leading_entry(self):
        x = np.array([-1.0, 1.0])
        v = householder_vector(x)
        reflected = x - 2.0 * v * (v @ x)
        np.testing.assert_allclose(reflected, [np.sqrt(2.0), 0.0], atol=1e-14)

    def test_already_aligned_returns_none(self):
        assert householder_vector(np.array([2.0, 0.0, 0.0])) is None

    def test_scalar_returns_none(self):
        assert householder_vector(np.array([5.0])) is None


class TestQRDecompose:

    @pytest.mark.parametrize("shape", [(4, 4), (6, 3), (3, 6), (1, 3), (3, 1)])
    def test_reconstruction(self, rng, shape):
        A = Matrix.from_array(rng.standard_normal(shape))
        result = qr_decompose(A)
        np.testing.assert_allclose(
            result.Q.to_array() @ result.R.to_array(), A.to_array(), atol=1e-12
        )

    @pytest.mark.parametrize("shape", [(5, 5), (7, 3), (3, 7)])
    def test_q_orthogonal(self, rng, shape):
        Q = qr_decompose(Matrix.from_array(rng.standard_normal(shape))).Q.to_array()
        np.testing.assert_allclose(Q.T @ Q, np.eye(shape[0]), atol=1e-12)

    def test_r_upper_triangular(self, rng):
        R = qr_decompose(Matrix.from_array(rng.standard_normal((6, 4)))).R.to_array()
        assert not np.any(np.tril(R, k=-1))

    def test_complete_shapes(self, rng):
        result = qr_decompose(Matrix.from_array(rng.standard_normal((5, 2))))
        assert result.Q.shape == (5, 5)
        assert result.R.shape == (5, 2)

    def test_reduced_shapes(self, rng):
        A = Matrix.from_array(rng.standard_normal((5, 2)))
        result = qr_decompose(A, mode='reduced')
        assert result.Q.shape == (5, 2)
        assert result.R.shape == (2, 2)
        np.testing.assert_allclose(
            result.Q.to_array() @ result.R.to_array(), A.to_array(), atol=1e-12
        )

    def test_orthogonal_under_near_dependence(self):
        eps = 1e-10
        A = Matrix.from_rows([[1, 1, 1], [eps, 0, 0], [0, eps, 0], [0, 0, eps]])
        Q = qr_decompose(A).Q.to_array()
        np.testing.assert_allclose(Q.T @ Q, np.eye(4), atol=1e-12)

    def test_zero_column_skipped(self):
        A = Matrix.from_rows([[0, 1], [0, 2], [0, 3]])
        result = qr_decompose(A)
        np.testing.assert_allclose(
            result.Q.to_array() @ result.R.to_array(), A.to_array(), atol=1e-14
        )

    def test_identity_unchanged(self):
        result = qr_decompose(Matrix.identity(3))
        np.testing.assert_array_equal(result.Q.to_array(), np.eye(3))
        np.testing.assert_array_equal(result.R.to_array(), np.eye(3))

    def test_unknown_mode(self):
        with pytest.raises(ValueError, match="Unknown QR mode"):
            qr_decompose(Matrix.identity(2), mode='economic')
