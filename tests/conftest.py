"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from pymatrix import Matrix


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def random_square(rng):
    """Well-conditioned random 5x5 matrix (diagonally shifted)."""
    values = rng.standard_normal((5, 5)) + 5.0 * np.eye(5)
    return Matrix.from_array(values)


@pytest.fixture
def random_symmetric(rng):
    """Random symmetric 6x6 matrix."""
    values = rng.standard_normal((6, 6))
    return Matrix.from_array(values + values.T, name='S')


@pytest.fixture
def singular_2x2():
    """Rank-1 matrix: second row is twice the first."""
    return Matrix.from_rows([[1, 2], [2, 4]])
