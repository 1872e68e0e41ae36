"""
Uniqueness and Divisibility Tests
=================================

What these tests cover:
    - degree_le_of_monic / degree_le_of_ne_zero: m has least degree
    - unique: a monic vanishing polynomial of least degree is m
    - divides: m divides every vanishing polynomial, with a checked quotient
    - unique_irreducible: an irreducible monic vanishing polynomial is m
"""

import pytest

from minpoly.errors import PreconditionViolated
from minpoly.search import minpoly
from minpoly.uniqueness import (
    Divisibility,
    degree_le_of_monic,
    degree_le_of_ne_zero,
    divides,
    unique,
    unique_irreducible,
)
from minpoly.witness import is_integral
from primitives.algebra import MatrixAlgebra
from primitives.polynomial import poly
from primitives.ring import QQ, ZZ


class TestDegreeBounds:
    """degree(m) <= degree(p) for vanishing p."""

    def test_monic(self, mp_sqrt2) -> None:
        assert degree_le_of_monic(mp_sqrt2, poly(QQ, [-4, 0, 0, 0, 1]))
        assert degree_le_of_monic(mp_sqrt2, poly(QQ, [-2, 0, 1]))

    def test_not_monic_rejected(self, mp_sqrt2) -> None:
        with pytest.raises(PreconditionViolated):
            degree_le_of_monic(mp_sqrt2, poly(QQ, [-6, 0, 3]))

    def test_non_vanishing_rejected(self, mp_sqrt2) -> None:
        with pytest.raises(PreconditionViolated):
            degree_le_of_monic(mp_sqrt2, poly(QQ, [-3, 0, 1]))

    def test_ne_zero_normalises(self, mp_sqrt2) -> None:
        """3X^2 - 6 is not monic but vanishes at sqrt 2."""
        assert degree_le_of_ne_zero(mp_sqrt2, poly(QQ, [-6, 0, 3]))

    def test_ne_zero_rejects_zero(self, mp_sqrt2) -> None:
        with pytest.raises(PreconditionViolated):
            degree_le_of_ne_zero(mp_sqrt2, poly(QQ, []))

    def test_wrong_ring_rejected(self, mp_sqrt2) -> None:
        with pytest.raises(PreconditionViolated):
            degree_le_of_monic(mp_sqrt2, poly(ZZ, [-2, 0, 1]))


class TestUnique:
    """A monic vanishing polynomial of least degree equals m."""

    def test_returns_minimal_polynomial(self, mp_sqrt2) -> None:
        p = poly(QQ, [-2, 0, 1])
        assert unique(mp_sqrt2, p) == p

    def test_non_vanishing_rejected(self, mp_sqrt2) -> None:
        with pytest.raises(PreconditionViolated):
            unique(mp_sqrt2, poly(QQ, [-3, 0, 1]))

    def test_degree_above_minimal_rejected(self, mp_sqrt2) -> None:
        with pytest.raises(PreconditionViolated):
            unique(mp_sqrt2, poly(QQ, [-4, 0, 0, 0, 1]))

    def test_matrix(self) -> None:
        algebra = MatrixAlgebra(QQ, 3)
        mp = minpoly(is_integral(algebra, algebra.diagonal([2, 2, 5])))
        assert unique(mp, poly(QQ, [10, -7, 1])) == mp.polynomial


class TestDivides:
    """m divides every polynomial vanishing at x."""

    def test_quotient(self, mp_sqrt2) -> None:
        cert = divides(mp_sqrt2, poly(QQ, [-4, 0, 0, 0, 1]))
        assert isinstance(cert, Divisibility)
        assert cert.quotient == poly(QQ, [2, 0, 1])
        assert cert.check()

    def test_self(self, mp_sqrt2) -> None:
        cert = divides(mp_sqrt2, mp_sqrt2.polynomial)
        assert cert.quotient == poly(QQ, [1])

    def test_zero_polynomial(self, mp_sqrt2) -> None:
        cert = divides(mp_sqrt2, poly(QQ, []))
        assert cert.quotient.is_zero

    def test_non_vanishing_rejected(self, mp_sqrt2) -> None:
        with pytest.raises(PreconditionViolated):
            divides(mp_sqrt2, poly(QQ, [1, 0, 1]))

    def test_charpoly_of_matrix(self) -> None:
        """The minimal polynomial divides the characteristic polynomial."""
        algebra = MatrixAlgebra(QQ, 3)
        w = is_integral(algebra, algebra.diagonal([2, 2, 5]))
        cert = divides(minpoly(w), w.polynomial)
        assert cert.quotient == poly(QQ, [-2, 1])


class TestUniqueIrreducible:
    """An irreducible monic vanishing polynomial equals m."""

    def test_irreducible(self, mp_sqrt2) -> None:
        p = poly(QQ, [-2, 0, 1])
        assert unique_irreducible(mp_sqrt2, p) == p

    def test_reducible_rejected(self, mp_sqrt2) -> None:
        with pytest.raises(PreconditionViolated):
            unique_irreducible(mp_sqrt2, poly(QQ, [-4, 0, 0, 0, 1]))

    def test_not_monic_rejected(self, mp_sqrt2) -> None:
        with pytest.raises(PreconditionViolated):
            unique_irreducible(mp_sqrt2, poly(QQ, [-4, 0, 2]))


class TestFieldRequired:
    """Uniqueness statements need a field base."""

    @pytest.fixture
    def mp_over_integers(self):
        algebra = MatrixAlgebra(ZZ, 2)
        return minpoly(is_integral(algebra, algebra.matrix([[0, 1], [1, 1]])))

    @pytest.mark.parametrize("operation", [unique, divides, unique_irreducible, degree_le_of_ne_zero])
    def test_integers_rejected(self, mp_over_integers, operation) -> None:
        with pytest.raises(PreconditionViolated):
            operation(mp_over_integers, poly(ZZ, [-1, -1, 1]))

    def test_degree_le_of_monic_over_integers(self, mp_over_integers) -> None:
        assert degree_le_of_monic(mp_over_integers, poly(ZZ, [-1, -1, 1]))
