"""
Bound classification.

Partitions the indices of a bounded vector (variables by lvar/uvar,
constraints by lcon/ucon) into six categories:

    fixed       lower == upper
    low         lower > -inf, upper == +inf
    upp         lower == -inf, upper < +inf
    rng         lower > -inf, upper < +inf, lower < upper
    free        lower == -inf, upper == +inf
    infeasible  lower > upper

Indices are 1-based and each category is in ascending order. For ordered
(non-NaN) bounds the categories are disjoint and cover every index.
"""

from dataclasses import dataclass
from typing import Dict, Tuple

import numpy as np

CATEGORY_NAMES = ("fixed", "low", "upp", "rng", "free", "infeasible")

# Record field suffixes, e.g. "i" + "fix" -> ifix, "j" + "inf" -> jinf
FIELD_SUFFIXES = ("fix", "low", "upp", "rng", "free", "inf")


@dataclass(frozen=True)
class BoundCategories:
    """Six bound categories of a vector, as tuples of 1-based indices."""
    fixed: Tuple[int, ...] = ()
    low: Tuple[int, ...] = ()
    upp: Tuple[int, ...] = ()
    rng: Tuple[int, ...] = ()
    free: Tuple[int, ...] = ()
    infeasible: Tuple[int, ...] = ()

    def counts(self) -> Dict[str, int]:
        """Number of indices in each category."""
        return {name: len(getattr(self, name)) for name in CATEGORY_NAMES}

    def as_dict(self, prefix: str) -> Dict[str, Tuple[int, ...]]:
        """Key the categories by record field name ("i" -> ifix, ...)."""
        return {
            prefix + suffix: getattr(self, name)
            for name, suffix in zip(CATEGORY_NAMES, FIELD_SUFFIXES)
        }


def _where(mask: np.ndarray) -> Tuple[int, ...]:
    return tuple(int(i) + 1 for i in np.flatnonzero(mask))


def classify_bounds(lower: np.ndarray, upper: np.ndarray) -> BoundCategories:
    """
    Classify each index of (lower, upper) into its bound category.

    Args:
        lower: Lower bounds (may contain -inf)
        upper: Upper bounds (may contain +inf), same length as lower

    Returns:
        BoundCategories with 1-based ascending indices
    """
    lower = np.asarray(lower)
    upper = np.asarray(upper)

    fixed = lower == upper
    # fixed wins over low/upp: (+inf, +inf) and (-inf, -inf) are fixed
    has_lower = (lower > -np.inf) & ~fixed
    no_lower = lower == -np.inf
    has_upper = (upper < np.inf) & ~fixed
    no_upper = upper == np.inf

    return BoundCategories(
        fixed=_where(fixed),
        low=_where(has_lower & no_upper),
        upp=_where(no_lower & has_upper),
        rng=_where(has_lower & has_upper & (lower < upper)),
        free=_where(no_lower & no_upper),
        infeasible=_where(lower > upper),
    )
