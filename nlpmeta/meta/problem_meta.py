"""
Problem metadata record.

ProblemMeta describes the main features of the optimization problem

    optimize    obj(x)
    subject to  lvar <=    x    <= uvar
                lcon <= cons(x) <= ucon

where x is an nvar-dimensional vector, obj is the real-valued objective,
cons is the vector-valued constraint function and "optimize" is either
minimize or maximize. Infinite components of lvar, uvar, lcon and ucon
mean the corresponding bound is absent.

The record stores shape only: dimensions, bounds, sparsity counts and
linearity flags, plus the bound classification of every variable and
constraint. It never evaluates anything.

Example:
    meta = build_meta(
        3,
        lvar=[-np.inf, 0.0, 5.0],
        uvar=[np.inf, 10.0, 5.0],
        ncon=1,
        lcon=[0.0],
        ucon=[np.inf],
        lin=[1],
        nln=[],
        name="toy",
    )
    meta.ifix   # (3,)
    meta.irng   # (2,)
    meta.ifree  # (1,)
    meta.jlow   # (1,)
"""

from dataclasses import dataclass, fields
import logging
from typing import Any, Dict, Optional, Tuple

import numpy as np

from ..errors import ErrorKind, ProblemMetaError
from .classification import BoundCategories, classify_bounds
from .defaults import MetaConfig, ResolvedConfig, resolve_defaults
from .model import HasProblemMeta
from .validation import validate_resolved

logger = logging.getLogger(__name__)

# Fields that are sized by nvar / ncon and must be re-derived when
# replace() changes the dimension.
_NVAR_DEPENDENT = ("x0", "lvar", "uvar", "nlvb", "nlvo", "nlvc", "nnzo", "nnzj", "nnzh")
_NCON_DEPENDENT = ("y0", "lcon", "ucon", "lin", "nln", "nnzj")


@dataclass(frozen=True, eq=False)
class ProblemMeta(HasProblemMeta):
    """
    Immutable metadata of an optimization problem.

    Build with build_meta() (or ProblemMeta.build()), never by calling the
    constructor directly: the constructor stores fields as given, while the
    builder resolves defaults, validates and classifies.

    Attributes:
        nvar: Number of variables
        x0: Initial guess
        lvar, uvar: Variable lower/upper bounds
        ifix, ilow, iupp, irng, ifree, iinf: 1-based indices of fixed,
            lower-bounded, upper-bounded, range-bounded, free and
            infeasible variables
        nlvb: Nonlinear variables in both objective and constraints
        nlvo: Nonlinear variables in the objective (includes nlvb)
        nlvc: Nonlinear variables in the constraints (includes nlvb)
        ncon: Number of general constraints
        y0: Initial Lagrange multipliers
        lcon, ucon: Constraint lower/upper bounds
        jfix, jlow, jupp, jrng, jfree, jinf: Constraint counterparts of
            the variable categories
        nnzo: Nonzeros in the gradient
        nnzj: Elements needed to store the sparse Jacobian
        nnzh: Elements needed to store the sparse Hessian
        nlin, nnln: Number of linear / nonlinear constraints
        lin, nln: 1-based indices of linear / nonlinear constraints
        minimize: True to minimize, False to maximize
        islp: True if the problem is a linear program
        name: Problem name
        dtype: Scalar type of x0 and y0
    """

    nvar: int
    x0: np.ndarray
    lvar: np.ndarray
    uvar: np.ndarray

    ifix: Tuple[int, ...]
    ilow: Tuple[int, ...]
    iupp: Tuple[int, ...]
    irng: Tuple[int, ...]
    ifree: Tuple[int, ...]
    iinf: Tuple[int, ...]

    nlvb: int
    nlvo: int
    nlvc: int

    ncon: int
    y0: np.ndarray
    lcon: np.ndarray
    ucon: np.ndarray

    jfix: Tuple[int, ...]
    jlow: Tuple[int, ...]
    jupp: Tuple[int, ...]
    jrng: Tuple[int, ...]
    jfree: Tuple[int, ...]
    jinf: Tuple[int, ...]

    nnzo: int
    nnzj: int
    nnzh: int

    nlin: int
    nnln: int

    lin: Tuple[int, ...]
    nln: Tuple[int, ...]

    minimize: bool
    islp: bool
    name: str

    dtype: np.dtype

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def build(cls, nvar: int, *, dtype=None, **overrides) -> "ProblemMeta":
        """Alias of build_meta()."""
        return build_meta(nvar, dtype=dtype, **overrides)

    @classmethod
    def from_bounds_spec(
        cls,
        variable_bounds,
        constraint_bounds=None,
        **overrides,
    ) -> "ProblemMeta":
        """
        Build metadata from compact bounds specifications.

        Args:
            variable_bounds: BoundsSpec, dict or list of [lower, upper] pairs
                giving nvar, lvar and uvar
            constraint_bounds: Same for ncon, lcon and ucon (optional)
            **overrides: Any other build_meta() keyword

        Raises:
            TypeError: overrides repeat a field the bounds specs supply

        Example:
            meta = ProblemMeta.from_bounds_spec(
                {"type": "uniform", "lower": 0.0, "upper": None, "dimension": 50},
                name="nonnegative",
            )
        """
        from ..bounds_spec import parse_bounds_input

        supplied = ("lvar", "uvar")
        if constraint_bounds is not None:
            supplied += ("ncon", "lcon", "ucon")
        conflicts = sorted(k for k in supplied if k in overrides)
        if conflicts:
            raise TypeError(f"Fields set by the bounds specs cannot be overridden: {conflicts}")

        dtype = overrides.pop("dtype", None)
        var_spec = parse_bounds_input(variable_bounds)
        lvar, uvar = var_spec.to_vectors(dtype)
        overrides.update(lvar=lvar, uvar=uvar)

        if constraint_bounds is not None:
            con_spec = parse_bounds_input(constraint_bounds)
            lcon, ucon = con_spec.to_vectors(dtype)
            overrides.update(ncon=len(lcon), lcon=lcon, ucon=ucon)

        return build_meta(len(lvar), dtype=dtype, **overrides)

    def replace(self, **overrides) -> "ProblemMeta":
        """
        Build a new record from this one with some fields overridden.

        Changing nvar or ncon drops the fields sized by that dimension so
        they fall back to their defaults unless overridden too.
        """
        nvar = overrides.pop("nvar", self.nvar)
        dtype = overrides.pop("dtype", self.dtype)

        base = {f.name: getattr(self, f.name) for f in fields(MetaConfig)}
        # nlin/nnln always equal len(lin)/len(nln) once validated
        base.pop("nlin")
        base.pop("nnln")

        if nvar != self.nvar:
            for name in _NVAR_DEPENDENT:
                base.pop(name, None)
        if overrides.get("ncon", self.ncon) != self.ncon:
            for name in _NCON_DEPENDENT:
                base.pop(name, None)

        base.update(overrides)
        return build_meta(nvar, dtype=dtype, **base)

    # ------------------------------------------------------------------
    # HasProblemMeta
    # ------------------------------------------------------------------

    @property
    def meta(self) -> "ProblemMeta":
        """A bare record is its own metadata."""
        return self

    def reset_data(self) -> "ProblemMeta":
        """Nothing to reset: return the record unchanged."""
        return self

    # ------------------------------------------------------------------
    # Structural queries
    # ------------------------------------------------------------------

    @property
    def variable_categories(self) -> BoundCategories:
        return BoundCategories(
            self.ifix, self.ilow, self.iupp, self.irng, self.ifree, self.iinf
        )

    @property
    def constraint_categories(self) -> BoundCategories:
        return BoundCategories(
            self.jfix, self.jlow, self.jupp, self.jrng, self.jfree, self.jinf
        )

    @property
    def optimize(self) -> str:
        """Optimization sense: "minimize" or "maximize"."""
        return "minimize" if self.minimize else "maximize"

    @property
    def has_bounds(self) -> bool:
        """
        Whether some variable is bounded.

        Only classified variables count. A variable with a NaN bound is
        neither free nor bounded.
        """
        return any(
            len(s) > 0 for s in (self.ifix, self.ilow, self.iupp, self.irng, self.iinf)
        )

    @property
    def is_constrained(self) -> bool:
        """Whether the problem has general constraints."""
        return self.ncon > 0

    @property
    def is_unconstrained(self) -> bool:
        """No general constraints and no variable bounds."""
        return self.ncon == 0 and not self.has_bounds

    @property
    def is_bound_constrained(self) -> bool:
        """No general constraints, but some variable bounds."""
        return self.ncon == 0 and self.has_bounds

    @property
    def is_linearly_constrained(self) -> bool:
        """Every constraint index appears in lin."""
        return self.ncon > 0 and set(self.lin) == set(range(1, self.ncon + 1))

    @property
    def is_equality_constrained(self) -> bool:
        """All general constraints are equalities."""
        return self.ncon > 0 and len(self.jfix) == self.ncon

    @property
    def has_equalities(self) -> bool:
        return len(self.jfix) > 0

    @property
    def has_inequalities(self) -> bool:
        return self.ncon > len(self.jfix)

    @property
    def has_infeasible_bounds(self) -> bool:
        """Some variable or constraint has lower bound > upper bound."""
        return len(self.iinf) > 0 or len(self.jinf) > 0

    # ------------------------------------------------------------------
    # Representation
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Plain-Python snapshot of every field."""
        data = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, np.ndarray):
                value = value.tolist()
            elif isinstance(value, tuple):
                value = list(value)
            elif f.name == "dtype":
                value = str(value)
            data[f.name] = value
        return data

    def __str__(self) -> str:
        from ..display import format_meta

        return format_meta(self)

    def __repr__(self) -> str:
        return (
            f"ProblemMeta(name={self.name!r}, nvar={self.nvar}, "
            f"ncon={self.ncon}, dtype={self.dtype})"
        )


@dataclass
class BuildResult:
    """Outcome of try_build_meta(): either a record or the error."""
    meta: Optional[ProblemMeta] = None
    error: Optional[ProblemMetaError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> Optional[ErrorKind]:
        return None if self.error is None else self.error.kind


def _assemble(resolved: ResolvedConfig) -> ProblemMeta:
    variables = classify_bounds(resolved.lvar, resolved.uvar)
    constraints = classify_bounds(resolved.lcon, resolved.ucon)

    if np.isnan(resolved.lvar).any() or np.isnan(resolved.uvar).any():
        logger.warning(f"Problem '{resolved.name}': NaN variable bounds are left unclassified")
    if np.isnan(resolved.lcon).any() or np.isnan(resolved.ucon).any():
        logger.warning(f"Problem '{resolved.name}': NaN constraint bounds are left unclassified")
    if variables.infeasible:
        logger.warning(
            f"Problem '{resolved.name}': variables {list(variables.infeasible)} "
            f"have lower bound > upper bound"
        )
    if constraints.infeasible:
        logger.warning(
            f"Problem '{resolved.name}': constraints {list(constraints.infeasible)} "
            f"have lower bound > upper bound"
        )

    return ProblemMeta(
        nvar=resolved.nvar,
        x0=resolved.x0,
        lvar=resolved.lvar,
        uvar=resolved.uvar,
        **variables.as_dict("i"),
        nlvb=resolved.nlvb,
        nlvo=resolved.nlvo,
        nlvc=resolved.nlvc,
        ncon=resolved.ncon,
        y0=resolved.y0,
        lcon=resolved.lcon,
        ucon=resolved.ucon,
        **constraints.as_dict("j"),
        nnzo=resolved.nnzo,
        nnzj=resolved.nnzj,
        nnzh=resolved.nnzh,
        nlin=resolved.nlin,
        nnln=resolved.nnln,
        lin=resolved.lin,
        nln=resolved.nln,
        minimize=resolved.minimize,
        islp=resolved.islp,
        name=resolved.name,
        dtype=resolved.dtype,
    )


def build_meta_from_config(
    nvar: int,
    config: Optional[MetaConfig] = None,
    dtype=None,
) -> ProblemMeta:
    """
    Resolve defaults, validate and classify.

    Args:
        nvar: Number of variables (>= 1)
        config: Keyword overrides; None uses every default
        dtype: numpy scalar type; inferred from config.x0, else float64

    Returns:
        ProblemMeta

    Raises:
        DimensionError: nvar < 1 or ncon < 0
        LengthMismatchError: a vector or index list has the wrong length
        IndexRangeError: lin/nln index outside [1, ncon]
    """
    resolved = resolve_defaults(nvar, config, dtype)
    validate_resolved(resolved)
    meta = _assemble(resolved)

    logger.debug(
        f"Built metadata '{meta.name}': nvar={meta.nvar}, ncon={meta.ncon}, "
        f"variables={meta.variable_categories.counts()}, "
        f"constraints={meta.constraint_categories.counts()}"
    )
    return meta


def build_meta(nvar: int, *, dtype=None, **overrides) -> ProblemMeta:
    """
    Create a ProblemMeta with nvar variables.

    Keyword arguments (all optional):
        x0: initial guess
        lvar, uvar: variable lower/upper bounds
        nlvb, nlvo, nlvc: nonlinear variable counts
        ncon: number of general constraints (default 0)
        y0: initial Lagrange multipliers
        lcon, ucon: constraint lower/upper bounds
        nnzo, nnzj, nnzh: sparsity counts, integers or f(nvar, ncon)
        lin, nln: 1-based indices of linear / nonlinear constraints
        nlin, nnln: declared counts (default len(lin), len(nln))
        minimize: True to minimize
        islp: True for linear programs
        name: problem name

    Unknown keywords raise TypeError.
    """
    return build_meta_from_config(nvar, MetaConfig(**overrides), dtype)


def try_build_meta(nvar: int, *, dtype=None, **overrides) -> BuildResult:
    """Like build_meta(), but returns construction failures instead of raising."""
    try:
        return BuildResult(meta=build_meta(nvar, dtype=dtype, **overrides))
    except ProblemMetaError as e:
        return BuildResult(error=e)
