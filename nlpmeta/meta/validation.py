"""
Structural validation of problem metadata.

Checks run in a fixed order and the first violated check raises:

1. Dimensions: nvar >= 1, ncon >= 0
2. Lengths of x0, lvar, uvar against nvar
3. Lengths of y0, lcon, ucon against ncon
4. Lengths of lin, nln against nlin, nnln
5. Ranges of lin, nln against [1, ncon]

Nothing else is cross-checked. In particular lin and nln may overlap or
leave constraints undeclared; overlap is reported as a warning only.
"""

import logging
from typing import Sequence, Union

import numpy as np

from ..errors import DimensionError, IndexRangeError, LengthMismatchError

logger = logging.getLogger(__name__)


def _is_integer(value) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, (bool, np.bool_))


def check_dimensions(nvar, ncon) -> None:
    """Raise DimensionError unless nvar >= 1 and ncon >= 0 are integers."""
    if not _is_integer(nvar) or not _is_integer(ncon):
        raise DimensionError(
            f"Dimensions must be integers, got nvar={nvar!r}, ncon={ncon!r}",
            nvar=nvar,
            ncon=ncon,
        )
    if nvar < 1 or ncon < 0:
        raise DimensionError(
            f"Nonsensical dimensions: nvar={nvar} (must be >= 1), "
            f"ncon={ncon} (must be >= 0)",
            nvar=nvar,
            ncon=ncon,
        )


def check_length(field: str, values: Union[np.ndarray, Sequence], expected: int) -> None:
    """Raise LengthMismatchError unless values is 1-D with expected entries."""
    if isinstance(values, np.ndarray):
        if values.ndim != 1:
            raise LengthMismatchError(field, expected, values.shape)
        actual = values.shape[0]
    else:
        actual = len(values)

    if actual != expected:
        raise LengthMismatchError(field, expected, actual)


def check_index_range(field: str, indices: Sequence[int], ncon: int) -> None:
    """Raise IndexRangeError if any index lies outside [1, ncon]."""
    invalid = [i for i in indices if i < 1 or i > ncon]
    if invalid:
        raise IndexRangeError(field, invalid, ncon)


def validate_resolved(resolved) -> None:
    """
    Validate a fully resolved configuration.

    Args:
        resolved: ResolvedConfig produced by resolve_defaults()

    Raises:
        LengthMismatchError: vector or index list has the wrong length
        IndexRangeError: lin/nln index outside [1, ncon]
    """
    nvar, ncon = resolved.nvar, resolved.ncon

    for field in ("x0", "lvar", "uvar"):
        check_length(field, getattr(resolved, field), nvar)
    for field in ("y0", "lcon", "ucon"):
        check_length(field, getattr(resolved, field), ncon)

    check_length("lin", resolved.lin, resolved.nlin)
    check_length("nln", resolved.nln, resolved.nnln)

    check_index_range("lin", resolved.lin, ncon)
    check_index_range("nln", resolved.nln, ncon)

    overlap = sorted(set(resolved.lin) & set(resolved.nln))
    if overlap:
        logger.warning(
            f"Constraints {overlap} declared both linear and nonlinear"
        )
