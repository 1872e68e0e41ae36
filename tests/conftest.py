"""Shared fixtures for the minpoly tests."""

import sys
from pathlib import Path

import pytest

# tests/ is inside the repository root, so parent is the root
root_dir = Path(__file__).parent.parent
if str(root_dir) not in sys.path:
    sys.path.insert(0, str(root_dir))

from minpoly import clear_cache, is_integral, minpoly  # noqa: E402
from primitives import QQ, QuotientAlgebra, poly  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_cache():
    """Every test starts and ends with an empty minimal polynomial cache."""
    clear_cache()
    yield
    clear_cache()


@pytest.fixture
def sqrt2_field() -> QuotientAlgebra:
    """QQ(sqrt 2) = QQ[X]/(X^2 - 2)."""
    return QuotientAlgebra(QQ, poly(QQ, [-2, 0, 1]))


@pytest.fixture
def mp_sqrt2(sqrt2_field):
    """Minimal polynomial of sqrt 2 over QQ."""
    return minpoly(is_integral(sqrt2_field, sqrt2_field.generator))
