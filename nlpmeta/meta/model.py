"""
Capability interface for objects that carry problem metadata.

Concrete models compose a ProblemMeta rather than extend it:

    class QuasiNewtonModel(HasProblemMeta):
        def __init__(self, meta):
            self._meta = meta
            self.hessian_approx = None

        @property
        def meta(self):
            return self._meta

        def reset_data(self):
            self.hessian_approx = None
            return self
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .problem_meta import ProblemMeta


class HasProblemMeta(ABC):
    """Anything exposing a ProblemMeta through ``meta``."""

    @property
    @abstractmethod
    def meta(self) -> "ProblemMeta":
        """The problem metadata."""
        pass

    def reset_data(self):
        """
        Reset auxiliary model data if appropriate.

        Override in models holding state that should be reset, such as a
        quasi-Newton operator. The default has nothing to reset and
        returns the model unchanged.
        """
        return self


def reset_data(model: HasProblemMeta):
    """Reset model data and return the model."""
    return model.reset_data()

