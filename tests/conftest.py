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
def nonlinear_data(rng):
    """Noisy sin(x) + 0.3x on 200 uniform points in [0, 10]."""
    n = 200
    x = np.linspace(0.0, 10.0, n)
    y = np.sin(x) + 0.3 * x + (rng.random(n) - 0.5)
    return x, y


@pytest.fixture
def quadratic_data():
    """Exact y = x² on x = 0..5."""
    x = np.arange(6.0)
    return x, x ** 2


@pytest.fixture
def constant_data():
    """Ten uniform x in [0, 9] with constant y = 5."""
    x = np.arange(10.0)
    y = np.full(10, 5.0)
    return x, y
