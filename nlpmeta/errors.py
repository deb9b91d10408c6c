"""
Error taxonomy for problem metadata construction.

Every failure raised while building a ProblemMeta is a ProblemMetaError
carrying one ErrorKind:

- DIMENSION: nvar < 1 or ncon < 0
- LENGTH_MISMATCH: a vector or index list disagrees with its dimension
- INDEX_RANGE: lin/nln contains an index outside [1, ncon]

ProblemMetaError subclasses ValueError, so callers that already guard
problem construction with ``except ValueError`` keep working.
"""

from enum import Enum
from typing import Optional, Sequence, Tuple


class ErrorKind(str, Enum):
    """Kinds of metadata construction failures."""

    DIMENSION = "dimension"
    LENGTH_MISMATCH = "length_mismatch"
    INDEX_RANGE = "index_range"


class ProblemMetaError(ValueError):
    """Base class for invalid problem specifications."""

    kind: Optional[ErrorKind] = None


class DimensionError(ProblemMetaError):
    """Raised when nvar < 1 or ncon < 0."""

    kind = ErrorKind.DIMENSION

    def __init__(self, message: str, nvar=None, ncon=None):
        self.nvar = nvar
        self.ncon = ncon
        super().__init__(message)


class LengthMismatchError(ProblemMetaError):
    """Raised when a vector's length disagrees with its expected dimension."""

    kind = ErrorKind.LENGTH_MISMATCH

    def __init__(self, field: str, expected: int, actual):
        self.field = field
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"{field}: expected length {expected}, got {actual}"
        )


class IndexRangeError(ProblemMetaError):
    """Raised when lin/nln holds a constraint index outside [1, ncon]."""

    kind = ErrorKind.INDEX_RANGE

    def __init__(self, field: str, invalid: Sequence[int], ncon: int):
        self.field = field
        self.invalid: Tuple[int, ...] = tuple(invalid)
        self.ncon = ncon
        super().__init__(
            f"{field}: indices {list(self.invalid)} outside [1, {ncon}]"
        )
