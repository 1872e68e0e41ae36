"""
Minimal Polynomial Search Tests
===============================

What these tests cover:
    - minpoly(): monic, vanishing, minimal degree, independent of the witness
    - The three search strategies (field linear algebra, GCD domain through
      the fraction field, enumeration over a finite ring)
    - Closed forms for base-ring elements (X - a, X, X - 1)
    - Memoisation and its thread safety
    - Cross-checks against galois' FieldArray.minimal_poly
"""

from concurrent.futures import ThreadPoolExecutor
from fractions import Fraction

import pytest

from minpoly.config import SearchConfig
from minpoly.errors import DegreeOverflow, PreconditionViolated
from minpoly.search import (
    MinpolyCache,
    add_algebra_map,
    cache_size,
    degree_le_rank,
    degree_pos,
    minpoly,
    minpoly_algebra_map,
    minpoly_one,
    minpoly_zero,
)
from minpoly.witness import IntegralityWitness, is_integral
from primitives.algebra import (
    BaseAlgebra,
    FiniteFieldExtension,
    MatrixAlgebra,
    QuotientAlgebra,
    RestrictScalars,
)
from primitives.polynomial import Polynomial, X, poly
from primitives.ring import QQ, ZZ, IntegerModRing, PrimeField

NO_CACHE = SearchConfig(use_cache=False)


def _minpoly_of(algebra, x, config=None):
    return minpoly(is_integral(algebra, x), config)


# =============================================================================
# Concrete scenarios
# =============================================================================

class TestScenarios:
    """Known minimal polynomials."""

    def test_sqrt2_over_rationals(self, mp_sqrt2) -> None:
        """QQ(sqrt 2), x = sqrt 2 -> X^2 - 2."""
        assert mp_sqrt2.polynomial == poly(QQ, [-2, 0, 1])
        assert str(mp_sqrt2) == "X^2 - 2"

    def test_one_plus_sqrt2(self, sqrt2_field) -> None:
        mp = _minpoly_of(sqrt2_field, sqrt2_field.element([1, 1]))
        assert mp.polynomial == poly(QQ, [-1, -2, 1])

    @pytest.mark.parametrize(
        "algebra",
        [
            QuotientAlgebra(QQ, poly(QQ, [-2, 0, 1])),
            MatrixAlgebra(QQ, 2),
            MatrixAlgebra(ZZ, 3),
            QuotientAlgebra(ZZ, poly(ZZ, [-1, -1, 1])),
            BaseAlgebra(QQ),
        ],
    )
    def test_three_is_x_minus_three(self, algebra) -> None:
        """x = 3 embedded in a nontrivial algebra with injective structure map."""
        mp = _minpoly_of(algebra, algebra.algebra_map(3))
        assert mp.polynomial == Polynomial.x_sub_c(algebra.base, 3)

    @pytest.mark.parametrize(
        "rows, expected",
        [
            ([[2, 1], [0, 2]], [4, -4, 1]),      # Jordan block: (X - 2)^2
            ([[1, 0], [0, 2]], [2, -3, 1]),      # (X - 1)(X - 2)
            ([[0, 1], [1, 1]], [-1, -1, 1]),     # Fibonacci matrix
            ([[0, 0], [0, 0]], [0, 1]),          # X
        ],
    )
    def test_matrices_over_rationals(self, rows, expected) -> None:
        algebra = MatrixAlgebra(QQ, 2)
        mp = _minpoly_of(algebra, algebra.matrix(rows))
        assert mp.polynomial == poly(QQ, expected)

    def test_degree_below_witness_degree(self) -> None:
        """diag(2, 2, 5) has charpoly of degree 3 but minpoly (X - 2)(X - 5)."""
        algebra = MatrixAlgebra(QQ, 3)
        m = algebra.diagonal([2, 2, 5])
        mp = _minpoly_of(algebra, m)
        assert mp.witness.degree == 3
        assert mp.polynomial == poly(QQ, [10, -7, 1])

    def test_integer_matrix_through_fraction_field(self) -> None:
        """Over ZZ the search solves over QQ and pulls the result back."""
        algebra = MatrixAlgebra(ZZ, 2)
        mp = _minpoly_of(algebra, algebra.matrix([[0, 1], [1, 1]]))
        assert mp.polynomial.ring == ZZ
        assert mp.polynomial == poly(ZZ, [-1, -1, 1])

    def test_golden_ratio_over_integers(self) -> None:
        algebra = QuotientAlgebra(QQ, poly(QQ, [-5, 0, 1]))
        restricted = RestrictScalars(ZZ, algebra)
        mp = _minpoly_of(restricted, algebra.element([Fraction(1, 2), Fraction(1, 2)]))
        assert mp.polynomial == poly(ZZ, [-1, -1, 1])


# =============================================================================
# Postconditions
# =============================================================================

ELEMENTS = [
    (QuotientAlgebra(QQ, poly(QQ, [-2, 0, 1])), [3, 1]),
    (QuotientAlgebra(QQ, poly(QQ, [-2, 0, 0, 1])), [1, 1, 0]),
    (QuotientAlgebra(QQ, poly(QQ, [-4, 0, 1])), [0, 1]),
    (QuotientAlgebra(ZZ, poly(ZZ, [1, 0, 0, 0, 1]), domain=True), [0, 1, 1, 0]),
    (QuotientAlgebra(PrimeField(5), poly(PrimeField(5), [2, 0, 1])), [1, 3]),
]


@pytest.mark.parametrize("algebra, coeffs", ELEMENTS)
class TestPostconditions:
    """Monic, vanishing, minimal."""

    def test_monic(self, algebra, coeffs) -> None:
        mp = _minpoly_of(algebra, algebra.element(coeffs))
        assert mp.polynomial.is_monic

    def test_vanishes(self, algebra, coeffs) -> None:
        mp = _minpoly_of(algebra, algebra.element(coeffs))
        assert mp.vanishes(mp.polynomial)

    def test_minimal_against_witness(self, algebra, coeffs) -> None:
        mp = _minpoly_of(algebra, algebra.element(coeffs))
        assert mp.degree <= mp.witness.degree
        assert degree_pos(mp)

    def test_independent_of_witness(self, algebra, coeffs) -> None:
        """A larger witness yields the same polynomial."""
        x = algebra.element(coeffs)
        w = is_integral(algebra, x)
        bigger = w.polynomial * poly(algebra.base, [1, 1])
        a = minpoly(w, NO_CACHE)
        b = minpoly(IntegralityWitness(algebra, x, bigger), NO_CACHE)
        assert a.polynomial == b.polynomial


class TestFiniteFields:
    """Cross-checks against galois."""

    @pytest.mark.parametrize("p, k", [(2, 3), (3, 2), (5, 2), (7, 3)])
    def test_matches_galois_minimal_poly(self, p, k) -> None:
        algebra = FiniteFieldExtension(PrimeField(p), k)
        for i in range(min(algebra.field.order, 30)):
            x = algebra.field(i)
            mp = _minpoly_of(algebra, x)
            assert mp.polynomial.to_galois() == x.minimal_poly()

    def test_degree_le_rank(self) -> None:
        algebra = FiniteFieldExtension(PrimeField(3), 4)
        mp = _minpoly_of(algebra, algebra.generator)
        assert mp.degree == 4
        assert degree_le_rank(mp)


class TestGeneralRing:
    """Enumeration over a finite ring with zero divisors."""

    def test_first_of_several_minimal_polynomials(self) -> None:
        """Over ZZ/4ZZ both X^2 and X^2 + 2X vanish at 2X in (ZZ/4ZZ)[X]/(X^2)."""
        r = IntegerModRing(4)
        algebra = QuotientAlgebra(r, poly(r, [0, 0, 1]))
        x = algebra.element([0, 2])
        mp = _minpoly_of(algebra, x)
        assert mp.polynomial == poly(r, [0, 0, 1])
        other = poly(r, [0, 2, 1])
        assert mp.vanishes(other)
        assert other != mp.polynomial

    def test_matrix_over_finite_ring(self) -> None:
        r = IntegerModRing(6)
        algebra = MatrixAlgebra(r, 2)
        mp = _minpoly_of(algebra, algebra.diagonal([1, 3]))
        assert mp.polynomial.is_monic
        assert mp.degree == 2
        assert mp.vanishes(mp.polynomial)

    def test_enumeration_limit(self) -> None:
        r = IntegerModRing(4)
        algebra = QuotientAlgebra(r, poly(r, [0, 0, 1]))
        with pytest.raises(PreconditionViolated):
            _minpoly_of(algebra, algebra.element([0, 2]), SearchConfig(enumeration_limit=3))


class TestClosedForms:
    """Minimal polynomials of base-ring elements."""

    def test_algebra_map(self, sqrt2_field) -> None:
        mp = minpoly_algebra_map(sqrt2_field, 3)
        assert mp.polynomial == poly(QQ, [-3, 1])
        searched = _minpoly_of(sqrt2_field, sqrt2_field.algebra_map(3), NO_CACHE)
        assert searched.polynomial == mp.polynomial

    def test_zero_is_x(self, sqrt2_field) -> None:
        assert minpoly_zero(sqrt2_field).polynomial == X(QQ)
        assert _minpoly_of(sqrt2_field, sqrt2_field.zero).polynomial == X(QQ)

    def test_one_is_x_minus_one(self, sqrt2_field) -> None:
        assert minpoly_one(sqrt2_field).polynomial == poly(QQ, [-1, 1])
        assert _minpoly_of(sqrt2_field, sqrt2_field.one).polynomial == poly(QQ, [-1, 1])

    def test_requires_injective_map(self) -> None:
        class Collapsing(BaseAlgebra):
            @property
            def algebra_map_injective(self) -> bool:
                return False

        with pytest.raises(PreconditionViolated):
            minpoly_algebra_map(Collapsing(QQ), 3)

    def test_add_algebra_map(self, mp_sqrt2, sqrt2_field) -> None:
        """minpoly(sqrt 2 + 1) = (X - 1)^2 - 2."""
        shifted = add_algebra_map(mp_sqrt2, 1)
        assert shifted.polynomial == poly(QQ, [-1, -2, 1])
        assert sqrt2_field.eq(shifted.element, sqrt2_field.element([1, 1]))
        searched = _minpoly_of(sqrt2_field, shifted.element, NO_CACHE)
        assert searched.polynomial == shifted.polynomial


class TestPreconditions:
    """Misuse is reported, never answered."""

    def test_missing_witness(self) -> None:
        with pytest.raises(PreconditionViolated):
            minpoly(None)

    def test_degree_overflow(self, sqrt2_field) -> None:
        w = is_integral(sqrt2_field, sqrt2_field.generator)
        with pytest.raises(DegreeOverflow):
            minpoly(w, SearchConfig(max_degree=1))

    def test_no_search_strategy(self) -> None:
        """An infinite non-field base without coordinates has no terminating search."""
        class Opaque(BaseAlgebra):
            rank = None

        algebra = Opaque(ZZ)
        w = IntegralityWitness(algebra, 3, poly(ZZ, [-3, 1]))
        with pytest.raises(PreconditionViolated):
            minpoly(w)

    def test_degree_le_rank_requires_field(self) -> None:
        algebra = MatrixAlgebra(ZZ, 2)
        mp = _minpoly_of(algebra, algebra.algebra_map(1))
        with pytest.raises(PreconditionViolated):
            degree_le_rank(mp)


class TestCache:
    """Memoisation keyed on (algebra, element)."""

    def test_populated_once(self, sqrt2_field) -> None:
        x = sqrt2_field.generator
        _minpoly_of(sqrt2_field, x)
        assert cache_size() == 1
        again = minpoly(IntegralityWitness(sqrt2_field, x, poly(QQ, [-4, 0, 0, 0, 1])))
        assert cache_size() == 1
        assert again.polynomial == poly(QQ, [-2, 0, 1])

    def test_equal_algebras_share_entries(self) -> None:
        a = QuotientAlgebra(QQ, poly(QQ, [-2, 0, 1]))
        b = QuotientAlgebra(QQ, poly(QQ, [-2, 0, 1]))
        _minpoly_of(a, a.generator)
        _minpoly_of(b, b.generator)
        assert cache_size() == 1

    def test_disabled(self, sqrt2_field) -> None:
        _minpoly_of(sqrt2_field, sqrt2_field.generator, NO_CACHE)
        assert cache_size() == 0

    def test_concurrent_searches_agree(self) -> None:
        algebra = MatrixAlgebra(QQ, 2)
        elements = [algebra.matrix([[i, 1], [0, i]]) for i in range(4)] * 3

        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(lambda m: _minpoly_of(algebra, m).polynomial, elements))

        for i, p in enumerate(results):
            assert p == poly(QQ, [-(i % 4), 1]) ** 2
        assert cache_size() == 4

    def test_bounded(self) -> None:
        """The least recently used entry is evicted first."""
        cache = MinpolyCache(maxsize=2)
        p, q, r = poly(QQ, [-1, 1]), poly(QQ, [-2, 1]), poly(QQ, [-3, 1])
        algebra = BaseAlgebra(QQ)
        cache.put(algebra, 1, p)
        cache.put(algebra, 2, q)
        assert cache.get(algebra, 1) == p
        cache.put(algebra, 3, r)
        assert len(cache) == 2
        assert cache.get(algebra, 2) is None
        assert cache.get(algebra, 1) == p
        assert cache.get(algebra, 3) == r

    def test_rejects_empty_bound(self) -> None:
        with pytest.raises(ValueError):
            MinpolyCache(maxsize=0)
