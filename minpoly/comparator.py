"""Degree order on polynomials.

Polynomials are compared by degree only; the zero polynomial has degree
ZERO_DEGREE and sits strictly below every non-zero polynomial. Degrees are
integers bounded below by ZERO_DEGREE, so strictly decreasing chains are
finite and minimisation by degree terminates.
"""

from typing import Any, Iterable

from primitives.polynomial import ZERO_DEGREE, Polynomial


def degree(p: Polynomial) -> int:
    return p.degree


def is_monic(p: Polynomial) -> bool:
    return p.is_monic


def leading_coeff(p: Polynomial) -> Any:
    return p.leading_coeff


def degree_key(p: Polynomial) -> int:
    """Sort key realising the degree order (ZERO_DEGREE for the zero polynomial)."""
    return p.degree if not p.is_zero else ZERO_DEGREE


def compare_degree(p: Polynomial, q: Polynomial) -> int:
    """-1, 0 or 1 as degree(p) is below, equal to or above degree(q)."""
    dp, dq = degree_key(p), degree_key(q)
    return (dp > dq) - (dp < dq)


def degree_lt(p: Polynomial, q: Polynomial) -> bool:
    return compare_degree(p, q) < 0


def min_by_degree(polys: Iterable[Polynomial]) -> Polynomial:
    """First polynomial of least degree; ties keep input order."""
    best = None
    for p in polys:
        if best is None or degree_lt(p, best):
            best = p
    if best is None:
        raise ValueError("min_by_degree() arg is an empty iterable")
    return best
