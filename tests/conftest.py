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
def xs():
    """Positive abscissae shared by the exact-family datasets."""
    return np.array([1.0, 2.0, 3.0, 4.0, 5.0, 6.0])


@pytest.fixture
def linear_data():
    """y = 2x + 3 at five distinct points."""
    x = np.array([1.0, 2.0, 3.0, 4.0, 5.0])
    return x, 2.0 * x + 3.0


@pytest.fixture
def quadratic_data(xs):
    """y = 0.5x^2 + x + 2."""
    return xs, 0.5 * xs ** 2 + xs + 2.0


@pytest.fixture
def cubic_data(xs):
    """y = x^3 - x + 1."""
    return xs, xs ** 3 - xs + 1.0


@pytest.fixture
def exponential_data(xs):
    """y = 2 exp(0.5x)."""
    return xs, 2.0 * np.exp(0.5 * xs)


@pytest.fixture
def logarithmic_data(xs):
    """y = 1 + 2 ln(x)."""
    return xs, 1.0 + 2.0 * np.log(xs)


@pytest.fixture
def power_data(xs):
    """y = 3 x^1.5."""
    return xs, 3.0 * xs ** 1.5


@pytest.fixture
def weak_correlation_data():
    """Series with Pearson r = 0.5 exactly (up to rounding)."""
    x = np.array([1.0, -1.0, 1.0, -1.0])
    u = np.array([1.0, 1.0, -1.0, -1.0])
    y = 0.5 * x + np.sqrt(0.75) * u
    return x, y
