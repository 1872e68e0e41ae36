"""Base rings for polynomial coefficients.

A ring object bundles the arithmetic of its elements together with the
category facts the minimal polynomial engine branches on (integral domain,
field, GCD domain, finite). Elements are plain Python values:

    IntegerRing     int
    RationalField   fractions.Fraction
    PrimeField      0-dim galois FieldArray over GF(p)
    IntegerModRing  int in [0, n)

Two ring objects compare equal when they describe the same ring, so
polynomials and algebras built from independently constructed rings still
interoperate.
"""

from fractions import Fraction
from math import gcd as _int_gcd
from typing import Any, Iterator

import galois


class Ring:
    """Commutative ring with identity.

    Subclasses override the arithmetic where Python operators do not already
    implement it, and set the category flags.
    """

    name = "ring"
    is_domain = False
    is_field = False
    is_gcd_domain = False
    is_finite = False

    # --- Identity and coercion ---

    @property
    def zero(self) -> Any:
        return self.coerce(0)

    @property
    def one(self) -> Any:
        return self.coerce(1)

    @property
    def is_nontrivial(self) -> bool:
        """True when 1 != 0."""
        return not self.eq(self.one, self.zero)

    def coerce(self, value: int) -> Any:
        raise NotImplementedError("Subclass must implement coerce")

    def key(self, a: Any) -> Any:
        """Canonical hashable representative of an element."""
        return a

    # --- Arithmetic ---

    def add(self, a: Any, b: Any) -> Any:
        return a + b

    def sub(self, a: Any, b: Any) -> Any:
        return a - b

    def neg(self, a: Any) -> Any:
        return -a

    def mul(self, a: Any, b: Any) -> Any:
        return a * b

    def pow(self, a: Any, n: int) -> Any:
        result = self.one
        for _ in range(n):
            result = self.mul(result, a)
        return result

    def eq(self, a: Any, b: Any) -> bool:
        return bool(a == b)

    def is_zero(self, a: Any) -> bool:
        return self.eq(a, self.zero)

    def is_one(self, a: Any) -> bool:
        return self.eq(a, self.one)

    # --- Units ---

    def is_unit(self, a: Any) -> bool:
        raise NotImplementedError("Subclass must implement is_unit")

    def inverse(self, a: Any) -> Any:
        raise NotImplementedError("Subclass must implement inverse")

    def is_nilpotent(self, a: Any) -> bool:
        if self.is_domain:
            return self.is_zero(a)
        raise NotImplementedError(f"Nilpotency test not available for {self}")

    def elements(self) -> Iterator[Any]:
        raise ValueError(f"{self} is not finite")

    # --- Fraction field ---

    @property
    def fraction_field(self) -> "Ring":
        if self.is_field:
            return self
        raise ValueError(f"{self} has no fraction field")

    def to_fraction_field(self, a: Any) -> Any:
        """Canonical embedding into the fraction field; the identity on a field."""
        if self.is_field:
            return a
        raise ValueError(f"{self} has no fraction field")

    def from_fraction_field(self, q: Any) -> Any:
        """Pull q back from the fraction field; raises ValueError when q is not in this ring."""
        if self.is_field:
            return q
        raise ValueError(f"{self} has no fraction field")

    # --- Identity of the ring itself ---

    def _context(self) -> tuple:
        return (type(self).__name__,)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Ring) and self._context() == other._context()

    def __hash__(self) -> int:
        return hash(self._context())

    def __repr__(self) -> str:
        return self.name


class IntegerRing(Ring):
    """The integers ZZ: a GCD domain whose fraction field is QQ."""

    name = "ZZ"
    is_domain = True
    is_gcd_domain = True

    def coerce(self, value: int) -> int:
        return int(value)

    def is_unit(self, a: int) -> bool:
        return a in (1, -1)

    def inverse(self, a: int) -> int:
        if not self.is_unit(a):
            raise ZeroDivisionError(f"{a} is not a unit in ZZ")
        return a

    def gcd(self, a: int, b: int) -> int:
        return _int_gcd(a, b)

    @property
    def fraction_field(self) -> "RationalField":
        return QQ

    def to_fraction_field(self, a: int) -> Fraction:
        return Fraction(a)

    def from_fraction_field(self, q: Fraction) -> int:
        q = Fraction(q)
        if q.denominator != 1:
            raise ValueError(f"{q} is not in ZZ")
        return q.numerator


class RationalField(Ring):
    """The rationals QQ, the fraction field of ZZ."""

    name = "QQ"
    is_domain = True
    is_field = True
    is_gcd_domain = True

    def coerce(self, value) -> Fraction:
        return Fraction(value)

    def is_unit(self, a: Fraction) -> bool:
        return a != 0

    def inverse(self, a: Fraction) -> Fraction:
        if a == 0:
            raise ZeroDivisionError("0 has no inverse in QQ")
        return 1 / Fraction(a)

    def gcd(self, a: Fraction, b: Fraction) -> Fraction:
        if a == 0 and b == 0:
            return Fraction(0)
        return Fraction(1)


class PrimeField(Ring):
    """The prime field GF(p), backed by galois."""

    is_domain = True
    is_field = True
    is_gcd_domain = True
    is_finite = True

    def __init__(self, p: int) -> None:
        if not galois.is_prime(p):
            raise ValueError(f"p must be prime, got {p}")
        self.p = p
        self.gf = galois.GF(p)
        self.name = f"GF({p})"

    def coerce(self, value) -> galois.FieldArray:
        return self.gf(int(value) % self.p)

    def key(self, a) -> int:
        return int(a)

    def is_unit(self, a) -> bool:
        return int(a) != 0

    def inverse(self, a):
        if int(a) == 0:
            raise ZeroDivisionError(f"0 has no inverse in {self.name}")
        return a ** -1

    def gcd(self, a, b):
        if int(a) == 0 and int(b) == 0:
            return self.zero
        return self.one

    def elements(self) -> Iterator[galois.FieldArray]:
        for i in range(self.p):
            yield self.gf(i)

    def _context(self) -> tuple:
        return ("PrimeField", self.p)


class IntegerModRing(Ring):
    """ZZ/nZ with elements stored as ints in [0, n).

    For composite n this is the standard example of a finite ring with zero
    divisors, where minimal polynomials exist but need not be unique.
    """

    is_finite = True

    def __init__(self, n: int) -> None:
        if n < 1:
            raise ValueError(f"modulus must be positive, got {n}")
        self.n = n
        self.name = f"ZZ/{n}ZZ"
        self.is_domain = n > 1 and galois.is_prime(n)
        self.is_field = self.is_domain

    def coerce(self, value: int) -> int:
        return int(value) % self.n

    def add(self, a: int, b: int) -> int:
        return (a + b) % self.n

    def sub(self, a: int, b: int) -> int:
        return (a - b) % self.n

    def neg(self, a: int) -> int:
        return (-a) % self.n

    def mul(self, a: int, b: int) -> int:
        return (a * b) % self.n

    def is_unit(self, a: int) -> bool:
        return _int_gcd(a, self.n) == 1

    def inverse(self, a: int) -> int:
        if not self.is_unit(a):
            raise ZeroDivisionError(f"{a} is not a unit in {self.name}")
        return pow(a, -1, self.n)

    def is_nilpotent(self, a: int) -> bool:
        # every exponent in the factorisation of n is at most its bit length
        return pow(a, max(self.n.bit_length(), 1), self.n) == 0

    def elements(self) -> Iterator[int]:
        return iter(range(self.n))

    def _context(self) -> tuple:
        return ("IntegerModRing", self.n)


ZZ = IntegerRing()
QQ = RationalField()
