"""Algebras over a base ring.

An Algebra is a ring B together with a ring homomorphism algebra_map: A -> B.
The minimal polynomial search only ever touches B through this interface:
ring operations, equality, and (when B is free of finite rank over A) the
coordinate vector of an element in a fixed basis.

Concrete algebras:

- BaseAlgebra: A over itself.
- QuotientAlgebra: A[X]/(f) for a monic f, e.g. QQ(sqrt 2) = QQ[X]/(X^2 - 2).
- MatrixAlgebra: n x n matrices over A (not commutative, has zero divisors).
- FiniteFieldExtension: GF(p^k) over GF(p), backed by galois.
- RestrictScalars: a K-algebra viewed as an A-algebra through A -> K, where K
  is the fraction field of A.
"""

from typing import Any, List, Optional, Sequence

import galois
import numpy as np

from primitives.linalg import charpoly, identity, matmul, matrix
from primitives.polynomial import Polynomial, decides_irreducibility
from primitives.ring import PrimeField, Ring


class Algebra:
    """Associative A-algebra B with identity.

    Attributes:
        base: The base ring A
        rank: Rank of B as a free A-module, or None if not free of finite rank
    """

    rank: Optional[int] = None

    def __init__(self, base: Ring) -> None:
        self.base = base

    # --- Structure map ---

    def algebra_map(self, a: Any) -> Any:
        raise NotImplementedError("Subclass must implement algebra_map")

    @property
    def algebra_map_injective(self) -> bool:
        return True

    # --- Ring operations on B ---

    @property
    def zero(self) -> Any:
        return self.algebra_map(self.base.zero)

    @property
    def one(self) -> Any:
        return self.algebra_map(self.base.one)

    def add(self, x: Any, y: Any) -> Any:
        return x + y

    def sub(self, x: Any, y: Any) -> Any:
        return x - y

    def neg(self, x: Any) -> Any:
        return -x

    def mul(self, x: Any, y: Any) -> Any:
        return x * y

    def pow(self, x: Any, n: int) -> Any:
        """x^n by repeated squaring."""
        result = self.one
        base = x
        while n > 0:
            if n & 1:
                result = self.mul(result, base)
            base = self.mul(base, base)
            n >>= 1
        return result

    def eq(self, x: Any, y: Any) -> bool:
        return bool(x == y)

    def is_zero(self, x: Any) -> bool:
        return self.eq(x, self.zero)

    def key(self, x: Any) -> Any:
        """Canonical hashable representative of an element."""
        return x

    # --- Category facts ---

    @property
    def is_domain(self) -> bool:
        """B has no zero divisors."""
        return False

    @property
    def is_nontrivial(self) -> bool:
        return not self.eq(self.one, self.zero)

    # --- Module structure ---

    @property
    def has_coordinates(self) -> bool:
        """Coordinates over the base (or its fraction field) are available."""
        return self.rank is not None

    def basis(self) -> List[Any]:
        raise NotImplementedError(f"{self} has no finite basis")

    def coordinates(self, x: Any) -> List[Any]:
        raise NotImplementedError(f"{self} has no finite basis")

    def field_coordinates(self, x: Any) -> List[Any]:
        """Coordinates of x over the fraction field of the base ring."""
        return [self.base.to_fraction_field(c) for c in self.coordinates(x)]

    def left_multiplication(self, x: Any) -> np.ndarray:
        """Matrix of b -> x*b in the basis; column j is coordinates(x * basis[j])."""
        cols = [self.coordinates(self.mul(x, b)) for b in self.basis()]
        n = len(cols)
        out = np.empty((n, n), dtype=object)
        for j, col in enumerate(cols):
            for i, c in enumerate(col):
                out[i, j] = c
        return out

    def integrality_polynomial(self, x: Any) -> Polynomial:
        """A monic polynomial over the base vanishing at x.

        For a free algebra of finite rank this is the characteristic
        polynomial of left multiplication by x (Cayley-Hamilton).
        """
        if self.rank is None:
            raise ValueError(f"No integrality polynomial available for elements of {self}")
        return Polynomial(self.base, charpoly(self.base, self.left_multiplication(x)))

    # --- Identity of the algebra itself ---

    def _context(self) -> tuple:
        return (type(self).__name__, self.base)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Algebra) and self._context() == other._context()

    def __hash__(self) -> int:
        return hash(self._context())


class BaseAlgebra(Algebra):
    """The base ring as an algebra over itself."""

    rank = 1

    def algebra_map(self, a: Any) -> Any:
        return a

    def add(self, x, y):
        return self.base.add(x, y)

    def sub(self, x, y):
        return self.base.sub(x, y)

    def neg(self, x):
        return self.base.neg(x)

    def mul(self, x, y):
        return self.base.mul(x, y)

    def eq(self, x, y) -> bool:
        return self.base.eq(x, y)

    def key(self, x):
        return self.base.key(x)

    @property
    def is_domain(self) -> bool:
        return self.base.is_domain

    def basis(self) -> List[Any]:
        return [self.base.one]

    def coordinates(self, x: Any) -> List[Any]:
        return [x]

    def integrality_polynomial(self, x: Any) -> Polynomial:
        return Polynomial.x_sub_c(self.base, x)

    def __repr__(self) -> str:
        return f"{self.base}"


class QuotientAlgebra(Algebra):
    """A[X]/(f) for a monic f of positive degree.

    Elements are tuples of length deg(f): the ascending coefficients of the
    reduced representative. The basis is 1, X, ..., X^(n-1).

    Args:
        base: Coefficient ring A
        modulus: Monic polynomial f over A
        domain: Whether A[X]/(f) has no zero divisors. When omitted it is
            decided for prime fields (galois) and for ZZ and QQ (sympy);
            otherwise False.
    """

    def __init__(self, base: Ring, modulus: Polynomial, domain: Optional[bool] = None) -> None:
        super().__init__(base)
        if modulus.ring != base:
            raise ValueError(f"Modulus is over {modulus.ring}, expected {base}")
        if not modulus.is_monic or modulus.degree < 1:
            raise ValueError(f"Modulus must be monic of positive degree, got {modulus}")
        self.modulus = modulus
        self.rank = modulus.degree
        self._domain = domain if domain is not None else _decide_domain(base, modulus)

    def element(self, coeffs: Sequence[Any]) -> tuple:
        """Residue class of the polynomial with ascending `coeffs`."""
        return self.reduce(Polynomial(self.base, coeffs))

    def reduce(self, p: Polynomial) -> tuple:
        _, r = p.divmod_monic(self.modulus)
        return tuple(r.coeff(i) for i in range(self.rank))

    def lift(self, x: tuple) -> Polynomial:
        return Polynomial(self.base, x)

    @property
    def generator(self) -> tuple:
        """The class of X."""
        return self.reduce(Polynomial.x(self.base))

    def algebra_map(self, a: Any) -> tuple:
        a = self.base.coerce(a) if isinstance(a, int) and not isinstance(a, bool) else a
        return (a,) + (self.base.zero,) * (self.rank - 1)

    def add(self, x, y):
        return tuple(self.base.add(a, b) for a, b in zip(x, y))

    def sub(self, x, y):
        return tuple(self.base.sub(a, b) for a, b in zip(x, y))

    def neg(self, x):
        return tuple(self.base.neg(a) for a in x)

    def mul(self, x, y):
        return self.reduce(self.lift(x) * self.lift(y))

    def eq(self, x, y) -> bool:
        return all(self.base.eq(a, b) for a, b in zip(x, y))

    def key(self, x):
        return tuple(self.base.key(a) for a in x)

    @property
    def is_domain(self) -> bool:
        return self._domain

    @property
    def is_nontrivial(self) -> bool:
        return self.base.is_nontrivial

    def basis(self) -> List[tuple]:
        return [
            tuple(self.base.one if i == j else self.base.zero for i in range(self.rank))
            for j in range(self.rank)
        ]

    def coordinates(self, x: tuple) -> List[Any]:
        return list(x)

    def _context(self) -> tuple:
        return ("QuotientAlgebra", self.base, self.modulus)

    def __repr__(self) -> str:
        return f"{self.base}[X]/({self.modulus})"


class MatrixAlgebra(Algebra):
    """n x n matrices over A; elements are numpy object arrays."""

    def __init__(self, base: Ring, n: int) -> None:
        super().__init__(base)
        if n < 1:
            raise ValueError(f"Matrix size must be positive, got {n}")
        self.n = n
        self.rank = n * n

    def matrix(self, rows: Sequence[Sequence[Any]]) -> np.ndarray:
        m = matrix(self.base, rows)
        if m.shape != (self.n, self.n):
            raise ValueError(f"Expected a {self.n}x{self.n} matrix, got {m.shape}")
        return m

    def diagonal(self, entries: Sequence[Any]) -> np.ndarray:
        rows = [[entries[i] if i == j else 0 for j in range(self.n)] for i in range(self.n)]
        return self.matrix(rows)

    def algebra_map(self, a: Any) -> np.ndarray:
        a = self.base.coerce(a) if isinstance(a, int) and not isinstance(a, bool) else a
        out = identity(self.base, self.n)
        for i in range(self.n):
            out[i, i] = a
        return out

    def add(self, x, y):
        return self._elementwise(self.base.add, x, y)

    def sub(self, x, y):
        return self._elementwise(self.base.sub, x, y)

    def neg(self, x):
        out = np.empty_like(x)
        for idx in np.ndindex(x.shape):
            out[idx] = self.base.neg(x[idx])
        return out

    def mul(self, x, y):
        return matmul(self.base, x, y)

    def _elementwise(self, op, x, y):
        out = np.empty_like(x)
        for idx in np.ndindex(x.shape):
            out[idx] = op(x[idx], y[idx])
        return out

    def eq(self, x, y) -> bool:
        return all(self.base.eq(x[idx], y[idx]) for idx in np.ndindex(x.shape))

    def key(self, x):
        return tuple(tuple(self.base.key(v) for v in row) for row in x)

    @property
    def is_domain(self) -> bool:
        return self.n == 1 and self.base.is_domain

    @property
    def is_nontrivial(self) -> bool:
        return self.base.is_nontrivial

    def basis(self) -> List[np.ndarray]:
        out = []
        for i in range(self.n):
            for j in range(self.n):
                e = self.algebra_map(self.base.zero)
                e[i, j] = self.base.one
                out.append(e)
        return out

    def coordinates(self, x: np.ndarray) -> List[Any]:
        return [x[i, j] for i in range(self.n) for j in range(self.n)]

    def integrality_polynomial(self, x: np.ndarray) -> Polynomial:
        """Characteristic polynomial of x itself (degree n rather than n^2)."""
        return Polynomial(self.base, charpoly(self.base, x))

    def _context(self) -> tuple:
        return ("MatrixAlgebra", self.base, self.n)

    def __repr__(self) -> str:
        return f"M_{self.n}({self.base})"


class FiniteFieldExtension(Algebra):
    """GF(p^k) as an algebra over GF(p), backed by galois.

    Elements are galois scalars of `self.field`. Coordinates are taken in the
    polynomial basis 1, a, ..., a^(k-1) of galois' integer representation,
    converted to ascending order.
    """

    def __init__(self, base: PrimeField, degree: int) -> None:
        super().__init__(base)
        if not isinstance(base, PrimeField):
            raise ValueError(f"FiniteFieldExtension requires a PrimeField, got {base}")
        self.degree = degree
        self.rank = degree
        self.field = galois.GF(base.p ** degree)

    def element(self, coeffs: Sequence[int]) -> galois.FieldArray:
        """Element with ascending polynomial-basis coordinates."""
        padded = list(coeffs) + [0] * (self.degree - len(coeffs))
        return self.field.Vector([int(c) % self.base.p for c in padded[::-1]])

    @property
    def generator(self) -> galois.FieldArray:
        return self.field.primitive_element

    def algebra_map(self, a: Any) -> galois.FieldArray:
        return self.field(int(a) % self.base.p)

    def key(self, x) -> int:
        return int(x)

    @property
    def is_domain(self) -> bool:
        return True

    @property
    def is_nontrivial(self) -> bool:
        return True

    def basis(self) -> List[galois.FieldArray]:
        return [self.element([1 if i == j else 0 for i in range(self.degree)]) for j in range(self.degree)]

    def coordinates(self, x) -> List[Any]:
        return [self.base.coerce(int(c)) for c in x.vector()[::-1]]

    def _context(self) -> tuple:
        return ("FiniteFieldExtension", self.base, self.degree)

    def __repr__(self) -> str:
        return f"GF({self.base.p}^{self.degree})"


class RestrictScalars(Algebra):
    """A K-algebra R viewed as an A-algebra through the embedding A -> K.

    Elements are those of `inner`. Coordinates are only available over K
    (field_coordinates); R is usually not free of finite rank over A.
    """

    def __init__(self, base: Ring, inner: Algebra) -> None:
        super().__init__(base)
        field = inner.base
        if base.fraction_field != field:
            raise ValueError(f"{field} is not the fraction field of {base}")
        self.inner = inner
        self.field = field

    def algebra_map(self, a: Any) -> Any:
        return self.inner.algebra_map(self.base.to_fraction_field(a))

    @property
    def algebra_map_injective(self) -> bool:
        return self.inner.algebra_map_injective

    def add(self, x, y):
        return self.inner.add(x, y)

    def sub(self, x, y):
        return self.inner.sub(x, y)

    def neg(self, x):
        return self.inner.neg(x)

    def mul(self, x, y):
        return self.inner.mul(x, y)

    def eq(self, x, y) -> bool:
        return self.inner.eq(x, y)

    def key(self, x):
        return self.inner.key(x)

    @property
    def is_domain(self) -> bool:
        return self.inner.is_domain

    @property
    def is_nontrivial(self) -> bool:
        return self.inner.is_nontrivial

    @property
    def has_coordinates(self) -> bool:
        return self.inner.has_coordinates

    def field_coordinates(self, x: Any) -> List[Any]:
        return self.inner.coordinates(x)

    def integrality_polynomial(self, x: Any) -> Polynomial:
        """The fraction-field polynomial pulled back to A.

        Over an integrally closed A the characteristic polynomial over K of an
        integral element has coefficients in A; a non-integral coefficient
        means x is not integral over A. When A is itself a field, A = K and
        the polynomial is returned unchanged.
        """
        p = self.inner.integrality_polynomial(x)
        return p.map(self.base, self.base.from_fraction_field)

    def _context(self) -> tuple:
        return ("RestrictScalars", self.base, self.inner)

    def __repr__(self) -> str:
        return f"{self.inner} over {self.base}"


# --- Helpers ---

def _decide_domain(base: Ring, modulus: Polynomial) -> bool:
    """Whether base[X]/(modulus) is an integral domain, where decidable here."""
    if not base.is_domain:
        return False
    if modulus.degree == 1:
        return True
    if decides_irreducibility(base):
        return modulus.is_irreducible()
    return False
