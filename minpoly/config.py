"""Search configuration.

Example:
    config = SearchConfig(enumeration_limit=10_000, use_cache=False)
    mp = minpoly(witness, config)
"""

import sys
from dataclasses import dataclass


@dataclass(frozen=True)
class SearchConfig:
    """Tunables for the minimal polynomial search."""
    max_degree: int = sys.maxsize  # Largest degree accepted before DegreeOverflow
    enumeration_limit: int = 1_000_000  # Candidates per degree when enumerating a finite base ring
    use_cache: bool = True  # Memoise results keyed on (algebra, element)


DEFAULT_CONFIG = SearchConfig()
