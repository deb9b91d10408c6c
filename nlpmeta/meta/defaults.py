"""
Default resolution for problem metadata.

Several defaults depend on other fields (nnzj on ncon, nln on ncon,
nlin on lin, ...). They are resolved here in one explicit ordered pass:

    ncon -> (dimension check) -> dtype -> x0, lvar, uvar
         -> nlvb, nlvo, nlvc -> y0, lcon, ucon -> nnzo, nnzj, nnzh
         -> lin, nln -> nlin, nnln -> minimize, islp, name
"""

from dataclasses import dataclass, fields
import operator
from typing import Any, Callable, Dict, Optional, Sequence, Tuple, Union

import numpy as np

from ..errors import LengthMismatchError
from .validation import check_dimensions

# A sparsity count is either a plain integer or a formula f(nvar, ncon).
CountSpec = Union[int, Callable[[int, int], int]]

DEFAULT_NAME = "Generic"


@dataclass
class MetaConfig:
    """
    Keyword overrides for ProblemMeta construction.

    Every field defaults to None, meaning "use the default derived from
    nvar/ncon". See resolve_defaults() for the defaults themselves.

    Example:
        config = MetaConfig(ncon=2, lcon=[0.0, -1.0], ucon=[0.0, 1.0], lin=[1])
        meta = build_meta_from_config(3, config)
    """
    x0: Optional[Any] = None
    lvar: Optional[Any] = None
    uvar: Optional[Any] = None
    nlvb: Optional[int] = None
    nlvo: Optional[int] = None
    nlvc: Optional[int] = None
    ncon: Optional[int] = None
    y0: Optional[Any] = None
    lcon: Optional[Any] = None
    ucon: Optional[Any] = None
    nnzo: Optional[CountSpec] = None
    nnzj: Optional[CountSpec] = None
    nnzh: Optional[CountSpec] = None
    lin: Optional[Sequence[int]] = None
    nln: Optional[Sequence[int]] = None
    nlin: Optional[int] = None
    nnln: Optional[int] = None
    minimize: Optional[bool] = None
    islp: Optional[bool] = None
    name: Optional[str] = None

    def to_overrides(self) -> Dict[str, Any]:
        """Return the fields that are set, as keyword arguments."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MetaConfig":
        """Build from a mapping; unknown keys raise TypeError."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise TypeError(f"Unknown metadata options: {unknown}")
        return cls(**data)


@dataclass
class ResolvedConfig:
    """Configuration with every default filled in, ready for validation."""
    nvar: int
    ncon: int
    dtype: np.dtype
    x0: np.ndarray
    lvar: np.ndarray
    uvar: np.ndarray
    nlvb: int
    nlvo: int
    nlvc: int
    y0: np.ndarray
    lcon: np.ndarray
    ucon: np.ndarray
    nnzo: int
    nnzj: int
    nnzh: int
    lin: Tuple[int, ...]
    nln: Tuple[int, ...]
    nlin: int
    nnln: int
    minimize: bool
    islp: bool
    name: str


def resolve_dtype(dtype=None, x0=None) -> np.dtype:
    """
    Pick the scalar type of the record.

    An explicit dtype wins; otherwise the type of a supplied x0; otherwise
    float64. Non-numeric x0 types fall back to float64.
    """
    if dtype is not None:
        return np.dtype(dtype)
    if x0 is not None:
        try:
            inferred = np.asarray(x0).dtype
        except ValueError:
            # ragged x0, reported by as_vector
            return np.dtype(np.float64)
        if inferred.kind in "iuf":
            return inferred
    return np.dtype(np.float64)


def bound_dtype(dtype: np.dtype) -> np.dtype:
    """Bounds need infinities, so integer scalar types use float64 bounds."""
    if np.issubdtype(dtype, np.floating):
        return dtype
    return np.dtype(np.float64)


def _is_ragged(src: np.ndarray) -> bool:
    return src.dtype == object and any(
        isinstance(v, (list, tuple, np.ndarray)) for v in src.ravel()
    )


def as_vector(field: str, values, dtype: np.dtype, expected: int) -> np.ndarray:
    """
    Copy values into a read-only array of the given dtype.

    Raises:
        LengthMismatchError: values is a ragged nested sequence
        TypeError: values would lose information in the conversion,
            e.g. 0.5 stored into an integer vector
    """
    try:
        src = np.asarray(values)
    except ValueError:
        raise LengthMismatchError(field, expected, "ragged") from None
    if _is_ragged(src):
        raise LengthMismatchError(field, expected, "ragged")

    arr = src.astype(dtype)
    if not np.can_cast(src.dtype, dtype, casting="same_kind") and not np.array_equal(arr, src):
        raise TypeError(
            f"{field}: values {src.tolist()} cannot be stored as {dtype} without loss"
        )
    arr.setflags(write=False)
    return arr


def filled(n: int, value, dtype: np.dtype) -> np.ndarray:
    """Read-only vector of n copies of value."""
    arr = np.full(n, value, dtype=dtype)
    arr.setflags(write=False)
    return arr


def _count(spec: Optional[CountSpec], default: int, nvar: int, ncon: int) -> int:
    if spec is None:
        return default
    if callable(spec):
        return int(spec(nvar, ncon))
    return int(spec)


def _indices(values: Sequence[int]) -> Tuple[int, ...]:
    return tuple(operator.index(i) for i in values)


def resolve_defaults(
    nvar: int,
    config: Optional[MetaConfig] = None,
    dtype=None,
) -> ResolvedConfig:
    """
    Fill every unset field of config from nvar and ncon.

    Defaults:
        x0 = zeros(nvar), lvar = -inf, uvar = +inf
        nlvb = nlvo = nlvc = nvar
        ncon = 0
        y0 = zeros(ncon), lcon = -inf, ucon = +inf
        nnzo = nvar, nnzj = nvar * ncon, nnzh = nvar * (nvar + 1) // 2
        lin = (), nln = (1, ..., ncon), nlin = len(lin), nnln = len(nln)
        minimize = True, islp = False, name = "Generic"

    nnzj and nnzh are clamped to be nonnegative, whether they come from
    the defaults, a plain integer or a formula f(nvar, ncon).

    Raises:
        DimensionError: nvar < 1 or ncon < 0 (checked before allocation)
    """
    config = config or MetaConfig()

    ncon = 0 if config.ncon is None else config.ncon
    check_dimensions(nvar, ncon)
    nvar, ncon = int(nvar), int(ncon)

    dtype = resolve_dtype(dtype, config.x0)
    bdtype = bound_dtype(dtype)

    x0 = filled(nvar, 0, dtype) if config.x0 is None else as_vector("x0", config.x0, dtype, nvar)
    lvar = filled(nvar, -np.inf, bdtype) if config.lvar is None else as_vector("lvar", config.lvar, bdtype, nvar)
    uvar = filled(nvar, np.inf, bdtype) if config.uvar is None else as_vector("uvar", config.uvar, bdtype, nvar)

    nlvb = nvar if config.nlvb is None else config.nlvb
    nlvo = nvar if config.nlvo is None else config.nlvo
    nlvc = nvar if config.nlvc is None else config.nlvc

    y0 = filled(ncon, 0, dtype) if config.y0 is None else as_vector("y0", config.y0, dtype, ncon)
    lcon = filled(ncon, -np.inf, bdtype) if config.lcon is None else as_vector("lcon", config.lcon, bdtype, ncon)
    ucon = filled(ncon, np.inf, bdtype) if config.ucon is None else as_vector("ucon", config.ucon, bdtype, ncon)

    nnzo = _count(config.nnzo, nvar, nvar, ncon)
    nnzj = max(0, _count(config.nnzj, nvar * ncon, nvar, ncon))
    nnzh = max(0, _count(config.nnzh, nvar * (nvar + 1) // 2, nvar, ncon))

    lin = () if config.lin is None else _indices(config.lin)
    nln = tuple(range(1, ncon + 1)) if config.nln is None else _indices(config.nln)
    nlin = len(lin) if config.nlin is None else config.nlin
    nnln = len(nln) if config.nnln is None else config.nnln

    return ResolvedConfig(
        nvar=nvar,
        ncon=ncon,
        dtype=dtype,
        x0=x0,
        lvar=lvar,
        uvar=uvar,
        nlvb=nlvb,
        nlvo=nlvo,
        nlvc=nlvc,
        y0=y0,
        lcon=lcon,
        ucon=ucon,
        nnzo=nnzo,
        nnzj=nnzj,
        nnzh=nnzh,
        lin=lin,
        nln=nln,
        nlin=nlin,
        nnln=nnln,
        minimize=True if config.minimize is None else config.minimize,
        islp=False if config.islp is None else config.islp,
        name=DEFAULT_NAME if config.name is None else config.name,
    )
