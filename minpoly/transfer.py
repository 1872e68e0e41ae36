"""Transfer between a GCD domain and its field of fractions.

For a GCD domain A with fraction field K and a K-algebra R (an A-algebra by
restriction of scalars), the minimal polynomial of x over A, mapped into K[X],
is the minimal polynomial of x over K. Consequently the A-minimal polynomial
divides every primitive polynomial over A vanishing at x, even though A is
not a field.

Usage:
    algebra = QuotientAlgebra(QQ, X(QQ) ** 2 - Polynomial.constant(QQ, 5))
    tower = ScalarTower.integers(algebra)
    mp_qq = gcd_domain_eq_field_fractions(tower, x)
"""

import logging
from typing import Any, Optional

from primitives.algebra import Algebra, RestrictScalars
from primitives.polynomial import Polynomial
from primitives.ring import QQ, ZZ, Ring

from minpoly.config import SearchConfig
from minpoly.errors import MinpolyError, PreconditionViolated
from minpoly.search import MinimalPolynomial, minpoly
from minpoly.uniqueness import Divisibility, divides, unique_irreducible
from minpoly.witness import IntegralityWitness, is_integral

logger = logging.getLogger(__name__)

# Elements of A on which the embedding A -> K is checked to be an injective ring hom
_PROBES = (0, 1, -1, 2, 3, -5, 7)


class ScalarTower:
    """Compatible algebra structures A -> K -> R.

    The A-algebra structure on R is built by restriction of scalars and the
    tower is checked once, here, rather than on every call.

    Attributes:
        base: GCD domain A
        field: Fraction field K of A
        algebra: R as a K-algebra
        over_base: R as an A-algebra

    Raises:
        PreconditionViolated: If A is not a GCD domain, K is not its fraction
            field, R is not a K-algebra, or the embedding fails the probe checks
    """

    def __init__(self, base: Ring, field: Ring, algebra: Algebra) -> None:
        if not base.is_gcd_domain:
            raise PreconditionViolated(f"{base} is not a GCD domain")
        if not field.is_field or base.fraction_field != field:
            raise PreconditionViolated(f"{field} is not the fraction field of {base}")
        if algebra.base != field:
            raise PreconditionViolated(f"{algebra} is not an algebra over {field}")
        self.base = base
        self.field = field
        self.algebra = algebra
        self.over_base = RestrictScalars(base, algebra)
        self._check_compatible()

    @classmethod
    def integers(cls, algebra: Algebra) -> "ScalarTower":
        """ZZ -> QQ -> algebra."""
        return cls(ZZ, QQ, algebra)

    def embed(self, a: Any) -> Any:
        """A -> K; the identity when A is already a field."""
        return self.base.to_fraction_field(a)

    def _check_compatible(self) -> None:
        base, field = self.base, self.field
        probes = [base.coerce(v) for v in _PROBES]
        if not field.eq(self.embed(base.one), field.one):
            raise PreconditionViolated("Embedding does not preserve 1")
        images = set()
        for a in probes:
            images.add(field.key(self.embed(a)))
            lhs = self.over_base.algebra_map(a)
            rhs = self.algebra.algebra_map(self.embed(a))
            if not self.algebra.eq(lhs, rhs):
                raise PreconditionViolated(f"Algebra maps disagree on {a}")
            for b in probes:
                if not field.eq(self.embed(base.add(a, b)), field.add(self.embed(a), self.embed(b))):
                    raise PreconditionViolated(f"Embedding is not additive on {a}, {b}")
                if not field.eq(self.embed(base.mul(a, b)), field.mul(self.embed(a), self.embed(b))):
                    raise PreconditionViolated(f"Embedding is not multiplicative on {a}, {b}")
        if len(images) != len({base.key(a) for a in probes}):
            raise PreconditionViolated("Embedding is not injective")

    def pull_back(self, p: Polynomial) -> Polynomial:
        """Map a polynomial over K with coefficients in A back to A."""
        try:
            return p.map(self.base, self.base.from_fraction_field)
        except ValueError as e:
            raise MinpolyError(f"{p} does not have coefficients in {self.base}: {e}") from e

    def push_forward(self, p: Polynomial) -> Polynomial:
        return p.map(self.field, self.embed)

    def __repr__(self) -> str:
        return f"{self.base} -> {self.field} -> {self.algebra}"


def gcd_domain_eq_field_fractions(
    tower: ScalarTower,
    x: Any,
    witness: Optional[IntegralityWitness] = None,
    config: Optional[SearchConfig] = None,
) -> MinimalPolynomial:
    """The minimal polynomial of x over K is that over A mapped into K.

    Args:
        tower: Scalar tower A -> K -> R
        x: Element of R, integral over A
        witness: Witness over A (built with is_integral when omitted)
        config: Search configuration

    Returns:
        The minimal polynomial of x over K
    """
    if witness is None:
        witness = is_integral(tower.over_base, x, config)
    elif witness.algebra != tower.over_base:
        raise PreconditionViolated(f"Witness is for {witness.algebra}, expected {tower.over_base}")
    mp_base = minpoly(witness, config)
    image = tower.push_forward(mp_base.polynomial)

    mp_field = minpoly(witness.map_base(tower.algebra, tower.embed), config)
    if tower.algebra.is_domain:
        # image is monic and primitive, irreducible over A, hence over K
        unique_irreducible(mp_field, image)
    elif image != mp_field.polynomial:
        raise MinpolyError(f"Minimal polynomials disagree: {image} over {tower.base}, {mp_field} over {tower.field}")
    logger.debug("minpoly over %s equals minpoly over %s: %s", tower.base, tower.field, image)
    return mp_field


def gcd_domain_dvd(
    tower: ScalarTower,
    x: Any,
    p: Polynomial,
    config: Optional[SearchConfig] = None,
) -> Divisibility:
    """The minimal polynomial over A divides every primitive p over A with p(x) = 0.

    p and m are moved to K, divided there, and the quotient is pulled back:
    a monic divisor of a primitive polynomial leaves a quotient over A.

    Raises:
        PreconditionViolated: If p is not over A, not primitive, or does not
            vanish at x
    """
    if p.ring != tower.base:
        raise PreconditionViolated(f"{p} is over {p.ring}, expected {tower.base}")
    if not p.is_primitive():
        raise PreconditionViolated(f"{p} is not primitive over {tower.base}")
    if not tower.over_base.is_zero(p.aeval(tower.over_base, x)):
        raise PreconditionViolated(f"{p} does not vanish at the element")

    mp_field = gcd_domain_eq_field_fractions(tower, x, config=config)
    quotient = tower.pull_back(divides(mp_field, tower.push_forward(p)).quotient)
    m = tower.pull_back(mp_field.polynomial)
    certificate = Divisibility(m, p, quotient)
    if not certificate.check():
        raise MinpolyError(f"({m}) * ({quotient}) is not {p}")
    return certificate


def over_int_eq_over_rat(
    algebra: Algebra,
    x: Any,
    config: Optional[SearchConfig] = None,
) -> MinimalPolynomial:
    """gcd_domain_eq_field_fractions for ZZ -> QQ -> algebra."""
    return gcd_domain_eq_field_fractions(ScalarTower.integers(algebra), x, config=config)


def integer_dvd(
    algebra: Algebra,
    x: Any,
    p: Polynomial,
    config: Optional[SearchConfig] = None,
) -> Divisibility:
    """gcd_domain_dvd for ZZ -> QQ -> algebra."""
    return gcd_domain_dvd(ScalarTower.integers(algebra), x, p, config)
