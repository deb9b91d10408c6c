"""
Problem type detection from metadata.

Helps solvers and algorithmic layers pick a strategy from problem shape
alone, without evaluating the model.
"""

from typing import Any, Dict

from .meta.problem_meta import ProblemMeta


class ProblemTypeDetector:
    """
    Detect the structural type of a problem from its ProblemMeta.

    Problem type taxonomy (first match wins):
    - LP: declared linear program (islp)
    - unconstrained: no constraints, no variable bounds
    - bound_constrained: no constraints, some variable bounds
    - equality_constrained: every constraint is an equality
    - linearly_constrained: every constraint is declared linear
    - NLP: anything else

    Example:
        meta = build_meta(2, lvar=[0.0, 0.0])
        ProblemTypeDetector.detect_from_meta(meta)
        # Returns: "bound_constrained"
    """

    @staticmethod
    def detect_from_meta(meta: ProblemMeta) -> str:
        """
        Detect problem type.

        Args:
            meta: Problem metadata (or anything with a ``meta`` property)

        Returns:
            One of: "LP", "unconstrained", "bound_constrained",
            "equality_constrained", "linearly_constrained", "NLP"
        """
        meta = meta.meta

        if meta.islp:
            return "LP"
        if meta.is_unconstrained:
            return "unconstrained"
        if meta.is_bound_constrained:
            return "bound_constrained"
        if meta.is_equality_constrained:
            return "equality_constrained"
        if meta.is_linearly_constrained:
            return "linearly_constrained"
        return "NLP"

    @staticmethod
    def describe(meta: ProblemMeta) -> Dict[str, Any]:
        """
        Get a problem signature for logging and display.

        Returns dict with dimensions, category counts and detected type.
        """
        meta = meta.meta
        return {
            "name": meta.name,
            "problem_type": ProblemTypeDetector.detect_from_meta(meta),
            "optimize": meta.optimize,
            "n_variables": meta.nvar,
            "n_constraints": meta.ncon,
            "n_linear": meta.nlin,
            "n_nonlinear": meta.nnln,
            "variable_categories": meta.variable_categories.counts(),
            "constraint_categories": meta.constraint_categories.counts(),
            "has_infeasible_bounds": meta.has_infeasible_bounds,
        }
