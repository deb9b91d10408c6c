"""
nlpmeta - Metadata for constrained optimization problems

Describes the shape of

    optimize    obj(x)
    subject to  lvar <=    x    <= uvar
                lcon <= cons(x) <= ucon

without evaluating obj or cons:

    import numpy as np
    from nlpmeta import build_meta

    meta = build_meta(3, lvar=[-np.inf, 0, 5], uvar=[np.inf, 10, 5])
    meta.ifree, meta.irng, meta.ifix   # (1,), (2,), (3,)
"""

__version__ = "0.1.0"

from .errors import (
    ErrorKind,
    ProblemMetaError,
    DimensionError,
    LengthMismatchError,
    IndexRangeError,
)
from .meta import (
    ProblemMeta,
    BuildResult,
    build_meta,
    build_meta_from_config,
    try_build_meta,
    MetaConfig,
    BoundCategories,
    classify_bounds,
    HasProblemMeta,
    reset_data,
)
from .bounds_spec import BoundsSpec, BoundsGroup, parse_bounds_input
from .problem_types import ProblemTypeDetector
from .display import format_meta, meta_table, print_meta

__all__ = [
    # Core
    "ProblemMeta",
    "BuildResult",
    "build_meta",
    "build_meta_from_config",
    "try_build_meta",
    "MetaConfig",
    "BoundCategories",
    "classify_bounds",
    # Model interface
    "HasProblemMeta",
    "reset_data",
    # Errors
    "ErrorKind",
    "ProblemMetaError",
    "DimensionError",
    "LengthMismatchError",
    "IndexRangeError",
    # Compact bounds
    "BoundsSpec",
    "BoundsGroup",
    "parse_bounds_input",
    # Analysis and display
    "ProblemTypeDetector",
    "format_meta",
    "meta_table",
    "print_meta",
]
