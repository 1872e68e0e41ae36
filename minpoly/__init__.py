"""
Minimal polynomials over a base ring.

Given an element x of an A-algebra B and a witness that x is integral over A,
this package computes the minimal polynomial of x and certifies its
properties:

- Degree order on polynomials (comparator)
- Integrality witnesses (witness)
- Minimum-degree search with memoisation (search)
- Uniqueness and divisibility over a field (uniqueness)
- Irreducibility and primality when B is a domain (irreducibility)
- Transfer between a GCD domain and its fraction field (transfer)

Usage:
    from primitives import QQ, QuotientAlgebra, X, poly
    from minpoly import is_integral, minpoly

    algebra = QuotientAlgebra(QQ, poly(QQ, [-2, 0, 1]))
    mp = minpoly(is_integral(algebra, algebra.generator))
    str(mp)  # 'X^2 - 2'
"""

from minpoly.comparator import compare_degree, degree_key, degree_lt, min_by_degree
from minpoly.config import DEFAULT_CONFIG, SearchConfig
from minpoly.errors import DegreeOverflow, MinpolyError, PreconditionViolated
from minpoly.irreducibility import (
    Factors,
    Irreducible,
    IrreducibilityResult,
    aeval_ne_zero_of_dvd_not_unit,
    check_factorization,
    coeff_zero_eq_zero,
    irreducible,
    not_is_unit,
    prime,
    prime_divides,
    root,
)
from minpoly.search import (
    MinimalPolynomial,
    MinpolyCache,
    add_algebra_map,
    cache_size,
    clear_cache,
    degree_le_rank,
    degree_pos,
    minpoly,
    minpoly_algebra_map,
    minpoly_one,
    minpoly_zero,
)
from minpoly.transfer import (
    ScalarTower,
    gcd_domain_dvd,
    gcd_domain_eq_field_fractions,
    integer_dvd,
    over_int_eq_over_rat,
)
from minpoly.uniqueness import (
    Divisibility,
    degree_le_of_monic,
    degree_le_of_ne_zero,
    divides,
    unique,
    unique_irreducible,
)
from minpoly.witness import IntegralityWitness, is_integral

__all__ = [
    # Errors and configuration
    "MinpolyError",
    "PreconditionViolated",
    "DegreeOverflow",
    "SearchConfig",
    "DEFAULT_CONFIG",
    # Comparator
    "degree_key",
    "compare_degree",
    "degree_lt",
    "min_by_degree",
    # Witness
    "IntegralityWitness",
    "is_integral",
    # Search
    "MinimalPolynomial",
    "MinpolyCache",
    "minpoly",
    "minpoly_algebra_map",
    "minpoly_zero",
    "minpoly_one",
    "add_algebra_map",
    "degree_pos",
    "degree_le_rank",
    "clear_cache",
    "cache_size",
    # Uniqueness and divisibility
    "Divisibility",
    "degree_le_of_monic",
    "degree_le_of_ne_zero",
    "unique",
    "divides",
    "unique_irreducible",
    # Irreducibility and primality
    "Irreducible",
    "Factors",
    "IrreducibilityResult",
    "not_is_unit",
    "aeval_ne_zero_of_dvd_not_unit",
    "irreducible",
    "check_factorization",
    "prime",
    "prime_divides",
    "root",
    "coeff_zero_eq_zero",
    # Fraction-field transfer
    "ScalarTower",
    "gcd_domain_eq_field_fractions",
    "gcd_domain_dvd",
    "over_int_eq_over_rat",
    "integer_dvd",
]
