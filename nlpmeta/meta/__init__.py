"""
Problem metadata core.

Construction runs in one linear pass:
- defaults: fill unset fields from nvar/ncon
- validation: dimensions, lengths and index ranges (fail fast)
- classification: six bound categories for variables and constraints
"""

from .classification import BoundCategories, classify_bounds
from .defaults import MetaConfig, ResolvedConfig, resolve_defaults
from .model import HasProblemMeta, reset_data
from .problem_meta import (
    BuildResult,
    ProblemMeta,
    build_meta,
    build_meta_from_config,
    try_build_meta,
)
from .validation import (
    check_dimensions,
    check_index_range,
    check_length,
    validate_resolved,
)

__all__ = [
    "ProblemMeta",
    "BuildResult",
    "build_meta",
    "build_meta_from_config",
    "try_build_meta",
    "MetaConfig",
    "ResolvedConfig",
    "resolve_defaults",
    "BoundCategories",
    "classify_bounds",
    "HasProblemMeta",
    "reset_data",
    "check_dimensions",
    "check_length",
    "check_index_range",
    "validate_resolved",
]
