"""Error kinds raised by the minimal polynomial engine.

PreconditionViolated marks caller errors: a missing or invalid integrality
witness, a non-monic argument where a monic one is required, or a field-only
or domain-only operation invoked on the wrong kind of ring.

MinpolyError itself is raised when an internal certificate fails to check,
which cannot happen for valid inputs.
"""


class MinpolyError(ValueError):
    """Base class for minimal polynomial errors."""


class PreconditionViolated(MinpolyError):
    """An operation was called outside its domain of validity."""


class DegreeOverflow(MinpolyError):
    """A degree exceeded the configured machine bound."""


def check_degree(degree: int, max_degree: int) -> None:
    """Raise DegreeOverflow when degree exceeds max_degree."""
    if degree > max_degree:
        raise DegreeOverflow(f"degree {degree} exceeds the bound {max_degree}")
