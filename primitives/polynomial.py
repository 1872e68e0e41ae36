"""Dense univariate polynomials over a coefficient ring.

Coefficients are stored in ascending order [a0, a1, ..., an] with trailing
zeros stripped, so the degree is always the index of the highest non-zero
coefficient. galois and sympy use descending order; to_galois, from_galois
and to_sympy convert.

The zero polynomial has degree ZERO_DEGREE, strictly below every non-zero
polynomial.
"""

from fractions import Fraction
from typing import Any, Callable, Iterable, Tuple

import galois
import sympy

from primitives.ring import QQ, ZZ, PrimeField, Ring

ZERO_DEGREE = -1

_SYMBOL = sympy.Symbol("X")


class Polynomial:
    """Immutable polynomial over `ring`."""

    __slots__ = ("ring", "coeffs")

    def __init__(self, ring: Ring, coeffs: Iterable[Any] = ()) -> None:
        cs = [ring.coerce(c) if _is_int(c) else c for c in coeffs]
        while cs and ring.is_zero(cs[-1]):
            cs.pop()
        object.__setattr__(self, "ring", ring)
        object.__setattr__(self, "coeffs", tuple(cs))

    def __setattr__(self, name, value):
        raise AttributeError("Polynomial is immutable")

    # --- Constructors ---

    @classmethod
    def zero(cls, ring: Ring) -> "Polynomial":
        return cls(ring)

    @classmethod
    def one(cls, ring: Ring) -> "Polynomial":
        return cls(ring, [ring.one])

    @classmethod
    def constant(cls, ring: Ring, c: Any) -> "Polynomial":
        return cls(ring, [c])

    @classmethod
    def x(cls, ring: Ring) -> "Polynomial":
        return cls(ring, [ring.zero, ring.one])

    @classmethod
    def monomial(cls, ring: Ring, n: int, c: Any = 1) -> "Polynomial":
        """c * X^n."""
        return cls(ring, [ring.zero] * n + [c])

    @classmethod
    def x_sub_c(cls, ring: Ring, c: Any) -> "Polynomial":
        """X - c."""
        c = ring.coerce(c) if _is_int(c) else c
        return cls(ring, [ring.neg(c), ring.one])

    @classmethod
    def from_galois(cls, poly: galois.Poly, ring: PrimeField) -> "Polynomial":
        return cls(ring, [ring.coerce(int(c)) for c in poly.coeffs[::-1]])

    # --- Shape ---

    @property
    def degree(self) -> int:
        return len(self.coeffs) - 1 if self.coeffs else ZERO_DEGREE

    @property
    def leading_coeff(self) -> Any:
        return self.coeffs[-1] if self.coeffs else self.ring.zero

    @property
    def is_zero(self) -> bool:
        return not self.coeffs

    @property
    def is_monic(self) -> bool:
        return bool(self.coeffs) and self.ring.is_one(self.coeffs[-1])

    def coeff(self, i: int) -> Any:
        if 0 <= i < len(self.coeffs):
            return self.coeffs[i]
        return self.ring.zero

    def is_unit(self) -> bool:
        """Unit of ring[X]: unit constant term, nilpotent higher terms."""
        if self.is_zero or not self.ring.is_unit(self.coeffs[0]):
            return False
        return all(self.ring.is_nilpotent(c) for c in self.coeffs[1:])

    # --- Arithmetic ---

    def _check_ring(self, other: "Polynomial") -> None:
        if self.ring != other.ring:
            raise ValueError(f"Ring mismatch: {self.ring} vs {other.ring}")

    def __add__(self, other: "Polynomial") -> "Polynomial":
        self._check_ring(other)
        r = self.ring
        n = max(len(self.coeffs), len(other.coeffs))
        return Polynomial(r, [r.add(self.coeff(i), other.coeff(i)) for i in range(n)])

    def __sub__(self, other: "Polynomial") -> "Polynomial":
        self._check_ring(other)
        r = self.ring
        n = max(len(self.coeffs), len(other.coeffs))
        return Polynomial(r, [r.sub(self.coeff(i), other.coeff(i)) for i in range(n)])

    def __neg__(self) -> "Polynomial":
        return Polynomial(self.ring, [self.ring.neg(c) for c in self.coeffs])

    def __mul__(self, other) -> "Polynomial":
        if not isinstance(other, Polynomial):
            return self.scale(other)
        self._check_ring(other)
        r = self.ring
        if self.is_zero or other.is_zero:
            return Polynomial(r)
        out = [r.zero] * (len(self.coeffs) + len(other.coeffs) - 1)
        for i, a in enumerate(self.coeffs):
            for j, b in enumerate(other.coeffs):
                out[i + j] = r.add(out[i + j], r.mul(a, b))
        return Polynomial(r, out)

    __rmul__ = __mul__

    def __pow__(self, n: int) -> "Polynomial":
        result = Polynomial.one(self.ring)
        for _ in range(n):
            result = result * self
        return result

    def scale(self, c: Any) -> "Polynomial":
        """c * self."""
        r = self.ring
        c = r.coerce(c) if _is_int(c) else c
        return Polynomial(r, [r.mul(c, a) for a in self.coeffs])

    def monic(self) -> "Polynomial":
        """Divide by the leading coefficient, which must be a unit."""
        if self.is_zero:
            raise ValueError("The zero polynomial has no monic normalisation")
        lc = self.leading_coeff
        if not self.ring.is_unit(lc):
            raise ValueError(f"Leading coefficient {lc} is not a unit in {self.ring}")
        return self.scale(self.ring.inverse(lc))

    def divmod_monic(self, divisor: "Polynomial") -> Tuple["Polynomial", "Polynomial"]:
        """Division with remainder by a monic divisor; valid over any ring."""
        if not divisor.is_monic:
            raise ValueError("divmod_monic requires a monic divisor")
        return self._divmod(divisor, self.ring.one)

    def _divmod(self, divisor: "Polynomial", lc_inv: Any) -> Tuple["Polynomial", "Polynomial"]:
        self._check_ring(divisor)
        r = self.ring
        rem = list(self.coeffs)
        dd = divisor.degree
        if len(rem) - 1 < dd:
            return Polynomial(r), self
        quot = [r.zero] * (len(rem) - dd)
        for k in range(len(rem) - 1 - dd, -1, -1):
            c = r.mul(rem[k + dd], lc_inv)
            quot[k] = c
            if r.is_zero(c):
                continue
            for j, d in enumerate(divisor.coeffs):
                rem[k + j] = r.sub(rem[k + j], r.mul(c, d))
        return Polynomial(r, quot), Polynomial(r, rem[:dd])

    def compose(self, inner: "Polynomial") -> "Polynomial":
        """self(inner(X))."""
        self._check_ring(inner)
        result = Polynomial(self.ring)
        for c in reversed(self.coeffs):
            result = result * inner + Polynomial.constant(self.ring, c)
        return result

    # --- Evaluation ---

    def eval(self, a: Any) -> Any:
        """Evaluate at an element of the coefficient ring."""
        r = self.ring
        a = r.coerce(a) if _is_int(a) else a
        result = r.zero
        for c in reversed(self.coeffs):
            result = r.add(r.mul(result, a), c)
        return result

    def is_root(self, a: Any) -> bool:
        return self.ring.is_zero(self.eval(a))

    def aeval(self, algebra, x: Any) -> Any:
        """Evaluate at x in an algebra over the coefficient ring (Horner)."""
        if algebra.base != self.ring:
            raise ValueError(f"Ring mismatch: polynomial over {self.ring}, algebra over {algebra.base}")
        result = algebra.zero
        for c in reversed(self.coeffs):
            result = algebra.add(algebra.mul(result, x), algebra.algebra_map(c))
        return result

    def map(self, ring: Ring, f: Callable[[Any], Any]) -> "Polynomial":
        """Apply a ring homomorphism coefficient-wise."""
        return Polynomial(ring, [f(c) for c in self.coeffs])

    # --- GCD-domain structure ---

    def content(self) -> Any:
        """gcd of the coefficients (normalised as the ring's gcd normalises)."""
        r = self.ring
        if not r.is_gcd_domain:
            raise ValueError(f"content requires a GCD domain, got {r}")
        g = r.zero
        for c in self.coeffs:
            g = r.gcd(g, c)
        return g

    def is_primitive(self) -> bool:
        """Coefficients share no common non-unit factor."""
        return not self.is_zero and self.ring.is_unit(self.content())

    # --- Irreducibility ---

    def is_irreducible(self) -> bool:
        """Irreducible over the coefficient ring.

        Decided by galois over prime fields and by sympy over ZZ and QQ (by
        Gauss' lemma a monic polynomial over ZZ is irreducible iff it is over QQ).
        """
        if isinstance(self.ring, PrimeField):
            return bool(self.to_galois().is_irreducible())
        if self.ring in (ZZ, QQ):
            return bool(self.to_sympy().is_irreducible)
        raise ValueError(f"No irreducibility test over {self.ring}")

    # --- galois and sympy interop ---

    def to_galois(self) -> galois.Poly:
        if not isinstance(self.ring, PrimeField):
            raise ValueError(f"to_galois requires a prime field, got {self.ring}")
        if self.is_zero:
            return galois.Poly([0], field=self.ring.gf)
        return galois.Poly([int(c) for c in reversed(self.coeffs)], field=self.ring.gf)

    def to_sympy(self) -> sympy.Poly:
        if self.ring not in (ZZ, QQ):
            raise ValueError(f"to_sympy requires ZZ or QQ, got {self.ring}")
        domain = sympy.ZZ if self.ring == ZZ else sympy.QQ
        cs = [Fraction(c) for c in reversed(self.coeffs)] or [Fraction(0)]
        return sympy.Poly([sympy.Rational(c.numerator, c.denominator) for c in cs], _SYMBOL, domain=domain)

    # --- Identity ---

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Polynomial):
            return NotImplemented
        return (
            self.ring == other.ring
            and len(self.coeffs) == len(other.coeffs)
            and all(self.ring.eq(a, b) for a, b in zip(self.coeffs, other.coeffs))
        )

    def __hash__(self) -> int:
        return hash((self.ring, tuple(self.ring.key(c) for c in self.coeffs)))

    def __repr__(self) -> str:
        return f"Polynomial({self.ring}, {self})"

    def __str__(self) -> str:
        if self.is_zero:
            return "0"
        terms = []
        for i in range(len(self.coeffs) - 1, -1, -1):
            c = self.ring.key(self.coeffs[i])
            if c == 0:
                continue
            negative = isinstance(c, (int, Fraction)) and c < 0 and not self.ring.is_finite
            mag = -c if negative else c
            if i == 0:
                body = f"{mag}"
            else:
                power = "X" if i == 1 else f"X^{i}"
                body = power if mag == 1 else f"{mag}*{power}"
            terms.append(("-" if negative else "+", body))
        sign, body = terms[0]
        out = ("-" if sign == "-" else "") + body
        for sign, body in terms[1:]:
            out += f" {sign} {body}"
        return out


# --- Helpers ---

def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def decides_irreducibility(ring: Ring) -> bool:
    """Whether Polynomial.is_irreducible is available over `ring`."""
    return isinstance(ring, PrimeField) or ring in (ZZ, QQ)


def X(ring: Ring) -> Polynomial:
    """The indeterminate over `ring`."""
    return Polynomial.x(ring)


def poly(ring: Ring, coeffs: Iterable[Any], descending: bool = False) -> Polynomial:
    """Build a polynomial, optionally from descending coefficients like galois."""
    cs = list(coeffs)
    return Polynomial(ring, cs[::-1] if descending else cs)
