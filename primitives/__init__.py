"""Primitives - Rings, polynomials, linear algebra and algebras."""

from primitives.algebra import (
    Algebra,
    BaseAlgebra,
    FiniteFieldExtension,
    MatrixAlgebra,
    QuotientAlgebra,
    RestrictScalars,
)
from primitives.linalg import charpoly, solve_linear_system
from primitives.polynomial import ZERO_DEGREE, Polynomial, X, poly
from primitives.ring import (
    QQ,
    ZZ,
    IntegerModRing,
    IntegerRing,
    PrimeField,
    RationalField,
    Ring,
)

__all__ = [
    # Rings
    "Ring",
    "IntegerRing",
    "RationalField",
    "PrimeField",
    "IntegerModRing",
    "ZZ",
    "QQ",
    # Polynomials
    "Polynomial",
    "ZERO_DEGREE",
    "X",
    "poly",
    # Linear algebra
    "solve_linear_system",
    "charpoly",
    # Algebras
    "Algebra",
    "BaseAlgebra",
    "QuotientAlgebra",
    "MatrixAlgebra",
    "FiniteFieldExtension",
    "RestrictScalars",
]
