"""Uniqueness and divisibility of the minimal polynomial.

Over a field base the minimal polynomial m of x is unique and divides every
polynomial vanishing at x. Each check below recomputes the certificate the
statement rests on (the degree drop of p - m, the zero remainder of p mod m,
the unit cofactor of an irreducible p) and raises MinpolyError if it does not
hold.
"""

import logging
from dataclasses import dataclass

from primitives.polynomial import Polynomial

from minpoly.errors import MinpolyError, PreconditionViolated
from minpoly.search import MinimalPolynomial

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Divisibility:
    """Certificate divisor * quotient == dividend."""
    divisor: Polynomial
    dividend: Polynomial
    quotient: Polynomial

    def check(self) -> bool:
        return self.divisor * self.quotient == self.dividend


def _require_field(mp: MinimalPolynomial, operation: str) -> None:
    if not mp.base.is_field:
        raise PreconditionViolated(f"{operation} requires a field base ring, got {mp.base}")


def _require_vanishes(mp: MinimalPolynomial, p: Polynomial, operation: str) -> None:
    if p.ring != mp.base:
        raise PreconditionViolated(f"{operation}: {p} is over {p.ring}, expected {mp.base}")
    if not mp.vanishes(p):
        raise PreconditionViolated(f"{operation}: {p} does not vanish at the element")


def _contradiction(mp: MinimalPolynomial, r: Polynomial, operation: str) -> MinpolyError:
    """A non-zero vanishing polynomial of degree below m contradicts minimality."""
    return MinpolyError(
        f"{operation}: {r} vanishes with degree {r.degree} < {mp.degree}; {mp.polynomial} is not minimal"
    )


def degree_le_of_monic(mp: MinimalPolynomial, p: Polynomial) -> bool:
    """degree(m) <= degree(p) for every monic p with p(x) = 0."""
    if not p.is_monic:
        raise PreconditionViolated(f"degree_le_of_monic: {p} is not monic")
    _require_vanishes(mp, p, "degree_le_of_monic")
    return mp.degree <= p.degree


def degree_le_of_ne_zero(mp: MinimalPolynomial, p: Polynomial) -> bool:
    """degree(m) <= degree(p) for every non-zero p with p(x) = 0 (field base)."""
    _require_field(mp, "degree_le_of_ne_zero")
    if p.is_zero:
        raise PreconditionViolated("degree_le_of_ne_zero: p must be non-zero")
    _require_vanishes(mp, p, "degree_le_of_ne_zero")
    return degree_le_of_monic(mp, p.monic())


def unique(mp: MinimalPolynomial, p: Polynomial) -> Polynomial:
    """A monic vanishing p of minimal degree equals m (field base).

    If p != m, both are monic of the same degree, so p - m is non-zero of
    strictly smaller degree and vanishes at x; normalised to monic it would
    undercut m.

    Returns:
        The minimal polynomial, equal to p
    """
    _require_field(mp, "unique")
    if not p.is_monic:
        raise PreconditionViolated(f"unique: {p} is not monic")
    _require_vanishes(mp, p, "unique")
    if p.degree > mp.degree:
        raise PreconditionViolated(f"unique: degree {p.degree} of {p} is not minimal ({mp.degree})")
    r = p - mp.polynomial
    if not r.is_zero:
        raise _contradiction(mp, r.monic(), "unique")
    return mp.polynomial


def divides(mp: MinimalPolynomial, p: Polynomial) -> Divisibility:
    """m divides every p with p(x) = 0 (field base).

    p = q*m + r with degree(r) < degree(m), and r(x) = p(x) - q(x)*m(x) = 0,
    so r must be zero.
    """
    _require_field(mp, "divides")
    _require_vanishes(mp, p, "divides")
    q, r = p.divmod_monic(mp.polynomial)
    if not r.is_zero:
        raise _contradiction(mp, r.monic(), "divides")
    logger.debug("%s = (%s) * (%s)", p, mp.polynomial, q)
    return Divisibility(mp.polynomial, p, q)


def unique_irreducible(mp: MinimalPolynomial, p: Polynomial) -> Polynomial:
    """An irreducible monic p vanishing at x equals m (field base, nontrivial B).

    m divides p; irreducibility of p makes the cofactor a unit, and both being
    monic forces it to be 1.

    Raises:
        PreconditionViolated: If p is not monic, does not vanish, or the
            cofactor has positive degree (p = m * q is a proper factorisation)
    """
    _require_field(mp, "unique_irreducible")
    if not mp.algebra.is_nontrivial:
        raise PreconditionViolated("unique_irreducible requires a nontrivial algebra")
    if not p.is_monic:
        raise PreconditionViolated(f"unique_irreducible: {p} is not monic")
    q = divides(mp, p).quotient
    if q.degree > 0:
        raise PreconditionViolated(
            f"unique_irreducible: {p} = ({mp.polynomial}) * ({q}) is not irreducible"
        )
    if not q.is_monic:
        raise MinpolyError(f"unique_irreducible: unit cofactor {q} of monic polynomials is not 1")
    return mp.polynomial
