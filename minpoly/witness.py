"""Integrality witnesses.

An IntegralityWitness certifies that an element x of an A-algebra B satisfies
some monic polynomial over A. It is validated once, when it is built, and is
only used to seed the minimal polynomial search: its degree bounds the
degrees the search has to scan.

is_integral() constructs a witness from the structure of the algebra
(Cayley-Hamilton for algebras that are free of finite rank).
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from primitives.algebra import Algebra
from primitives.polynomial import Polynomial

from minpoly.config import DEFAULT_CONFIG, SearchConfig
from minpoly.errors import PreconditionViolated, check_degree

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class IntegralityWitness:
    """Certificate that `polynomial` is monic over algebra.base and vanishes at `element`.

    Attributes:
        algebra: The A-algebra B containing the element
        element: The element x of B
        polynomial: Monic polynomial p over A with p(x) = 0

    Raises:
        PreconditionViolated: If the polynomial is over the wrong ring, is not
            monic, or does not vanish at the element
    """
    algebra: Algebra
    element: Any
    polynomial: Polynomial

    def __post_init__(self) -> None:
        if self.polynomial.ring != self.algebra.base:
            raise PreconditionViolated(
                f"Witness polynomial is over {self.polynomial.ring}, expected {self.algebra.base}"
            )
        if not self.polynomial.is_monic:
            raise PreconditionViolated(f"Witness polynomial {self.polynomial} is not monic")
        if not self.algebra.is_zero(self.polynomial.aeval(self.algebra, self.element)):
            raise PreconditionViolated(f"Witness polynomial {self.polynomial} does not vanish at the element")

    @property
    def degree(self) -> int:
        return self.polynomial.degree

    def map_base(self, algebra: Algebra, f: Callable[[Any], Any]) -> "IntegralityWitness":
        """Re-express the witness over algebra.base through the coefficient map f."""
        return IntegralityWitness(algebra, self.element, self.polynomial.map(algebra.base, f))


def is_integral(
    algebra: Algebra,
    x: Any,
    config: Optional[SearchConfig] = None,
) -> IntegralityWitness:
    """Build an integrality witness for x.

    Args:
        algebra: Algebra containing x
        x: Element to certify
        config: Search configuration (degree bound)

    Returns:
        A validated IntegralityWitness

    Raises:
        PreconditionViolated: If no witness can be produced, e.g. x = 1/2 in
            QQ viewed over ZZ
        DegreeOverflow: If the witness degree exceeds config.max_degree
    """
    config = config or DEFAULT_CONFIG
    try:
        p = algebra.integrality_polynomial(x)
    except ValueError as e:
        raise PreconditionViolated(f"Element is not integral over {algebra.base}: {e}") from e
    check_degree(p.degree, config.max_degree)
    logger.debug("integrality witness over %s: %s", algebra.base, p)
    return IntegralityWitness(algebra, x, p)
