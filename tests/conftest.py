"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def well_conditioned_system(rng):
    """Symmetric positive definite system A x = b with known x."""
    p = 5
    M = rng.standard_normal((40, p))
    A = M.T @ M
    x_true = np.array([1.0, -2.0, 0.5, 3.0, -0.25])
    b = A @ x_true
    return A, b, x_true


@pytest.fixture
def collinear_gram(rng):
    """Gram matrix of a design whose third column is the sum of the first two."""
    n = 50
    x1 = rng.standard_normal(n)
    x2 = rng.standard_normal(n)
    X = np.column_stack([np.ones(n), x1, x2, x1 + x2])
    return X.T @ X, X
