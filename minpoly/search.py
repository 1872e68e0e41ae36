"""Minimal polynomial search.

The minimal polynomial of x is a monic polynomial of least degree among all
monic polynomials over A vanishing at x. The candidate set is infinite, but a
witness of degree d guarantees a solution of degree at most d, so the search
scans k = 0, 1, ..., d and decides at each degree whether a monic vanishing
polynomial exists:

- field base: x^k lies in the span of 1, x, ..., x^(k-1) (linear algebra on
  coordinates). At the first feasible k the lower powers are independent, so
  the relation is unique.
- GCD domain base: the same test over the fraction field K. The first
  feasible k gives the minimal polynomial over K, whose coefficients lie in A
  when x is integral over A (A is integrally closed).
- finite base: enumerate the monic candidates of degree k.

Results are memoised per (algebra, element) in a bounded LRU cache.
"""

import itertools
import logging
import threading
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Hashable, List, Optional, Tuple

from primitives.algebra import Algebra
from primitives.linalg import solve_linear_system
from primitives.polynomial import Polynomial

from minpoly.config import DEFAULT_CONFIG, SearchConfig
from minpoly.errors import MinpolyError, PreconditionViolated, check_degree
from minpoly.witness import IntegralityWitness

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class MinimalPolynomial:
    """The minimal polynomial of `element` over algebra.base.

    Attributes:
        algebra: Algebra containing the element
        element: The element x
        polynomial: Monic polynomial of least degree vanishing at x
        witness: Witness that seeded the search
    """
    algebra: Algebra
    element: Any
    polynomial: Polynomial
    witness: IntegralityWitness

    @property
    def base(self):
        return self.algebra.base

    @property
    def degree(self) -> int:
        return self.polynomial.degree

    def aeval(self, p: Polynomial) -> Any:
        """p(x) in the algebra."""
        return p.aeval(self.algebra, self.element)

    def vanishes(self, p: Polynomial) -> bool:
        return self.algebra.is_zero(self.aeval(p))

    def __str__(self) -> str:
        return str(self.polynomial)


# --- Memoisation ---

CACHE_MAXSIZE = 4096


class MinpolyCache:
    """Thread-safe LRU map (algebra, element key) -> minimal polynomial.

    Holds at most `maxsize` entries; the least recently used one is evicted first.
    """

    def __init__(self, maxsize: int = CACHE_MAXSIZE) -> None:
        if maxsize < 1:
            raise ValueError(f"Cache size must be positive, got {maxsize}")
        self.maxsize = maxsize
        self._lock = threading.Lock()
        self._entries: "OrderedDict[Tuple[Algebra, Hashable], Polynomial]" = OrderedDict()

    def get(self, algebra: Algebra, key: Hashable) -> Optional[Polynomial]:
        with self._lock:
            entry = self._entries.get((algebra, key))
            if entry is not None:
                self._entries.move_to_end((algebra, key))
            return entry

    def put(self, algebra: Algebra, key: Hashable, polynomial: Polynomial) -> None:
        with self._lock:
            self._entries.setdefault((algebra, key), polynomial)
            self._entries.move_to_end((algebra, key))
            while len(self._entries) > self.maxsize:
                self._entries.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


_CACHE = MinpolyCache()


def clear_cache() -> None:
    _CACHE.clear()


def cache_size() -> int:
    return len(_CACHE)


# --- Search ---

def minpoly(witness: IntegralityWitness, config: Optional[SearchConfig] = None) -> MinimalPolynomial:
    """Compute the minimal polynomial of witness.element.

    Args:
        witness: Integrality witness for the element
        config: Search configuration

    Returns:
        MinimalPolynomial whose polynomial is monic, vanishes at the element,
        and has degree at most that of every monic vanishing polynomial

    Raises:
        PreconditionViolated: If no witness is supplied, or the base ring
            admits no terminating search
        DegreeOverflow: If the witness degree exceeds config.max_degree
    """
    if not isinstance(witness, IntegralityWitness):
        raise PreconditionViolated("minpoly requires an IntegralityWitness")
    config = config or DEFAULT_CONFIG
    check_degree(witness.degree, config.max_degree)
    algebra, x = witness.algebra, witness.element

    key = algebra.key(x)
    cached = _CACHE.get(algebra, key) if config.use_cache else None
    if cached is not None:
        return MinimalPolynomial(algebra, x, cached, witness)

    poly = _search(witness, config)
    _check_degree_pos(algebra, poly)
    if config.use_cache:
        _CACHE.put(algebra, key, poly)
    logger.debug("minpoly over %s of degree %d: %s", algebra.base, poly.degree, poly)
    return MinimalPolynomial(algebra, x, poly, witness)


def _search(witness: IntegralityWitness, config: SearchConfig) -> Polynomial:
    algebra = witness.algebra
    base = algebra.base
    if base.is_field and algebra.has_coordinates:
        search = _LinearSearch(algebra, witness.element, pull_back=False)
    elif base.is_gcd_domain and algebra.has_coordinates:
        search = _LinearSearch(algebra, witness.element, pull_back=True)
    elif base.is_finite:
        search = _EnumerationSearch(algebra, witness.element, config.enumeration_limit)
    else:
        raise PreconditionViolated(f"No terminating minimal polynomial search over {base} in {algebra}")

    for k in range(witness.degree + 1):
        found = search.at_degree(k)
        if found is not None:
            logger.debug("first monic vanishing polynomial at degree %d", k)
            return found
    # The witness itself has degree d, so every strategy succeeds by then.
    return witness.polynomial


class _LinearSearch:
    """Decide degree k by solving sum c_i x^i = -x^k over the (fraction) field."""

    def __init__(self, algebra: Algebra, x: Any, pull_back: bool) -> None:
        self.algebra = algebra
        self.x = x
        self.pull_back = pull_back
        base = algebra.base
        self.field = base.fraction_field if pull_back else base
        self.columns: List[List[Any]] = []
        self.power = algebra.one

    def at_degree(self, k: int) -> Optional[Polynomial]:
        algebra, field = self.algebra, self.field
        if k > 0:
            self.power = algebra.mul(self.power, self.x)
        target = algebra.field_coordinates(self.power)
        rhs = [field.neg(t) for t in target]
        solution = solve_linear_system(field, self.columns, rhs)
        self.columns.append(target)
        if solution is None:
            return None
        coeffs = solution + [field.one]
        if not self.pull_back:
            return Polynomial(field, coeffs)
        try:
            return Polynomial(algebra.base, [algebra.base.from_fraction_field(c) for c in coeffs])
        except ValueError as e:
            raise PreconditionViolated(
                f"Minimal polynomial over {field} has coefficients outside {algebra.base}: {e}"
            ) from e


class _EnumerationSearch:
    """Decide degree k by trying every monic candidate of degree k."""

    def __init__(self, algebra: Algebra, x: Any, limit: int) -> None:
        self.algebra = algebra
        self.elements = list(algebra.base.elements())
        self.limit = limit
        self.powers = [algebra.one]
        self.x = x

    def at_degree(self, k: int) -> Optional[Polynomial]:
        algebra = self.algebra
        base = algebra.base
        while len(self.powers) <= k:
            self.powers.append(algebra.mul(self.powers[-1], self.x))
        n_candidates = len(self.elements) ** k
        if n_candidates > self.limit:
            raise PreconditionViolated(
                f"{n_candidates} candidates of degree {k} over {base} exceed the enumeration limit {self.limit}"
            )
        # Images of each coefficient times each lower power, computed once per degree
        terms = [
            [algebra.mul(algebra.algebra_map(c), self.powers[i]) for c in self.elements]
            for i in range(k)
        ]
        lead = self.powers[k]
        for choice in itertools.product(range(len(self.elements)), repeat=k):
            value = lead
            for i, idx in enumerate(choice):
                value = algebra.add(value, terms[i][idx])
            if algebra.is_zero(value):
                return Polynomial(base, [self.elements[idx] for idx in choice] + [base.one])
        return None


def _check_degree_pos(algebra: Algebra, poly: Polynomial) -> None:
    """Over nontrivial A and B the minimal polynomial is not constant."""
    if algebra.base.is_nontrivial and algebra.is_nontrivial and poly.degree <= 0:
        raise MinpolyError(f"Constant minimal polynomial {poly} in a nontrivial algebra")


def degree_pos(mp: MinimalPolynomial) -> bool:
    """degree(m) > 0; requires nontrivial A and B."""
    if not (mp.base.is_nontrivial and mp.algebra.is_nontrivial):
        raise PreconditionViolated("degree_pos requires a nontrivial base ring and algebra")
    return mp.degree > 0


# --- Closed forms ---

def minpoly_algebra_map(algebra: Algebra, a: Any) -> MinimalPolynomial:
    """Minimal polynomial of algebra_map(a): exactly X - a.

    Raises:
        PreconditionViolated: If the algebra map is not injective
    """
    if not algebra.algebra_map_injective:
        raise PreconditionViolated(f"The algebra map {algebra.base} -> {algebra} is not injective")
    base = algebra.base
    a = base.coerce(a) if isinstance(a, int) and not isinstance(a, bool) else a
    p = Polynomial.x_sub_c(base, a)
    x = algebra.algebra_map(a)
    return MinimalPolynomial(algebra, x, p, IntegralityWitness(algebra, x, p))


def minpoly_zero(algebra: Algebra) -> MinimalPolynomial:
    """Minimal polynomial of 0 is X."""
    return minpoly_algebra_map(algebra, algebra.base.zero)


def minpoly_one(algebra: Algebra) -> MinimalPolynomial:
    """Minimal polynomial of 1 is X - 1."""
    return minpoly_algebra_map(algebra, algebra.base.one)


def add_algebra_map(mp: MinimalPolynomial, a: Any) -> MinimalPolynomial:
    """Minimal polynomial of x + algebra_map(a) is m(X - a).

    Translation by a is a degree-preserving bijection between the monic
    polynomials vanishing at x and those vanishing at x + a.
    """
    algebra, base = mp.algebra, mp.base
    a = base.coerce(a) if isinstance(a, int) and not isinstance(a, bool) else a
    shifted = mp.polynomial.compose(Polynomial.x_sub_c(base, a))
    y = algebra.add(mp.element, algebra.algebra_map(a))
    witness = IntegralityWitness(algebra, y, mp.witness.polynomial.compose(Polynomial.x_sub_c(base, a)))
    return MinimalPolynomial(algebra, y, shifted, witness)


def degree_le_rank(mp: MinimalPolynomial) -> bool:
    """Over a field, degree(m) <= rank of B (1, x, ..., x^rank are dependent)."""
    if not mp.base.is_field:
        raise PreconditionViolated(f"degree_le_rank requires a field base ring, got {mp.base}")
    if mp.algebra.rank is None:
        raise PreconditionViolated(f"{mp.algebra} is not free of finite rank")
    return mp.degree <= mp.algebra.rank
