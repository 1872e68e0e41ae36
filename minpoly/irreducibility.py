"""Irreducibility and primality of the minimal polynomial.

When B has no zero divisors the minimal polynomial m of x is irreducible: if
m = a*b with both factors monic then a(x)*b(x) = 0 forces one of them to
vanish, and minimality forces the other to be a unit. Results are returned as
explicit certificates: Irreducible(m), Factors(a, b), Divisibility.
"""

import logging
from dataclasses import dataclass
from typing import Any, Union

from primitives.polynomial import Polynomial, decides_irreducibility

from minpoly.errors import MinpolyError, PreconditionViolated
from minpoly.search import MinimalPolynomial
from minpoly.uniqueness import Divisibility, divides

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Irreducible:
    polynomial: Polynomial


@dataclass(frozen=True)
class Factors:
    """A split polynomial = left * right with neither factor a unit."""
    left: Polynomial
    right: Polynomial


IrreducibilityResult = Union[Irreducible, Factors]


def _require_domain(mp: MinimalPolynomial, operation: str) -> None:
    if not mp.algebra.is_domain:
        raise PreconditionViolated(f"{operation} requires {mp.algebra} to have no zero divisors")
    if not mp.algebra.is_nontrivial:
        raise PreconditionViolated(f"{operation} requires a nontrivial algebra")


def _require_field(mp: MinimalPolynomial, operation: str) -> None:
    if not mp.base.is_field:
        raise PreconditionViolated(f"{operation} requires a field base ring, got {mp.base}")


def not_is_unit(mp: MinimalPolynomial) -> bool:
    """m is not a unit: it has positive degree and units have degree 0."""
    _require_domain(mp, "not_is_unit")
    if mp.polynomial.is_unit():
        raise MinpolyError(f"Minimal polynomial {mp.polynomial} is a unit")
    return True


def aeval_ne_zero_of_dvd_not_unit(mp: MinimalPolynomial, a: Polynomial, b: Polynomial) -> Any:
    """For m = a*b with a monic and b not a unit, a(x) != 0.

    Otherwise a would be a monic vanishing polynomial of degree below m.

    Returns:
        The non-zero value a(x)
    """
    _require_domain(mp, "aeval_ne_zero_of_dvd_not_unit")
    if not a.is_monic:
        raise PreconditionViolated(f"aeval_ne_zero_of_dvd_not_unit: {a} is not monic")
    if a * b != mp.polynomial:
        raise PreconditionViolated(f"({a}) * ({b}) is not {mp.polynomial}")
    if b.is_unit():
        raise PreconditionViolated(f"aeval_ne_zero_of_dvd_not_unit: {b} is a unit")
    value = mp.aeval(a)
    if mp.algebra.is_zero(value):
        raise MinpolyError(f"{a} vanishes with degree {a.degree} < {mp.degree}")
    return value


def irreducible(mp: MinimalPolynomial) -> IrreducibilityResult:
    """m is irreducible when B has no zero divisors.

    The verdict rests on B having no zero divisors, which callers may
    declare (QuotientAlgebra(..., domain=True)). Where the base ring admits an
    irreducibility test (galois over GF(p), sympy over ZZ and QQ) it is
    cross-checked, so a wrongly declared domain is reported.
    """
    _require_domain(mp, "irreducible")
    m = mp.polynomial
    not_is_unit(mp)
    if decides_irreducibility(mp.base) and not m.is_irreducible():
        raise MinpolyError(f"Minimal polynomial {m} is reducible over {mp.base}; {mp.algebra} has zero divisors")
    return Irreducible(m)


def check_factorization(mp: MinimalPolynomial, a: Polynomial, b: Polynomial) -> IrreducibilityResult:
    """Decide whether m = a*b is a proper factorisation.

    Returns:
        Factors(a, b) when neither factor is a unit, Irreducible(m) when the
        split is trivial. When B has no zero divisors a proper split is
        impossible and raises MinpolyError.

    Raises:
        PreconditionViolated: If a*b != m
    """
    m = mp.polynomial
    if a * b != m:
        raise PreconditionViolated(f"({a}) * ({b}) is not {m}")
    if a.is_unit() or b.is_unit():
        return Irreducible(m)
    if not mp.algebra.is_domain:
        return Factors(a, b)

    # Redistribute leading coefficients: lc(a) * lc(b) = lc(m) = 1
    base = mp.base
    u = a.leading_coeff
    a_monic, b_monic = a.scale(base.inverse(u)), b.scale(u)
    if mp.vanishes(a_monic):
        vanishing, other = a_monic, b_monic
    elif mp.vanishes(b_monic):
        vanishing, other = b_monic, a_monic
    else:
        raise MinpolyError(f"Neither {a_monic} nor {b_monic} vanishes although their product does")
    logger.debug("factor %s vanishes, cofactor %s is not a unit", vanishing, other)
    raise MinpolyError(f"{vanishing} vanishes with degree {vanishing.degree} < {mp.degree}")


def prime(mp: MinimalPolynomial) -> bool:
    """m is prime: irreducible, and m | p*q implies m | p or m | q."""
    _require_field(mp, "prime")
    irreducible(mp)
    return True


def prime_divides(mp: MinimalPolynomial, p: Polynomial, q: Polynomial) -> Divisibility:
    """From m | p*q derive m | p or m | q.

    (p*q)(x) = p(x)*q(x) = 0 and B has no zero divisors, so one factor
    vanishes at x and m divides it.
    """
    _require_field(mp, "prime_divides")
    _require_domain(mp, "prime_divides")
    if not mp.vanishes(p * q):
        raise PreconditionViolated(f"({p}) * ({q}) does not vanish at the element")
    if mp.vanishes(p):
        return divides(mp, p)
    if mp.vanishes(q):
        return divides(mp, q)
    raise MinpolyError(f"Neither {p} nor {q} vanishes although their product does")


def root(mp: MinimalPolynomial, y: Any) -> Any:
    """If y in A is a root of m then algebra_map(y) = x.

    X - y divides m, and m is irreducible, so the cofactor is a unit and
    m = X - y; evaluating at x gives x - y = 0.

    Returns:
        algebra_map(y), equal to the element
    """
    _require_field(mp, "root")
    _require_domain(mp, "root")
    base = mp.base
    y = base.coerce(y) if isinstance(y, int) and not isinstance(y, bool) else y
    m = mp.polynomial
    if not m.is_root(y):
        raise PreconditionViolated(f"{y} is not a root of {m}")
    linear = Polynomial.x_sub_c(base, y)
    cofactor, r = m.divmod_monic(linear)
    if not r.is_zero:
        raise MinpolyError(f"{linear} does not divide {m} although {y} is a root")
    check_factorization(mp, linear, cofactor)
    image = mp.algebra.algebra_map(y)
    if not mp.algebra.eq(image, mp.element):
        raise MinpolyError(f"Root {y} of {m} does not map to the element")
    return image


def coeff_zero_eq_zero(mp: MinimalPolynomial) -> bool:
    """The constant term of m is zero iff x = 0."""
    _require_field(mp, "coeff_zero_eq_zero")
    _require_domain(mp, "coeff_zero_eq_zero")
    zero_coeff = mp.base.is_zero(mp.polynomial.coeff(0))
    if zero_coeff:
        root(mp, mp.base.zero)
    elif mp.algebra.is_zero(mp.element):
        raise MinpolyError(f"Element is 0 but {mp.polynomial} has a non-zero constant term")
    return zero_coeff
