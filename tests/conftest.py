"""Shared fixtures for hypercomplex tests."""

import numpy as np
import pytest

from hypercomplex import PrecisionContext


@pytest.fixture
def ctx():
    """Fresh 128-bit precision context; fails the test if cells leak."""
    context = PrecisionContext(128)
    yield context
    context.assert_no_leaks()


@pytest.fixture
def rng():
    """Seeded generator for reproducible random components."""
    return np.random.default_rng(42)
