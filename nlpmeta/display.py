"""
Summaries of problem metadata for terminals and logs.

format_meta() gives plain text (used by ProblemMeta.__str__);
meta_table() and print_meta() render the same content with rich.
"""

from typing import List, Optional, Tuple

from rich.console import Console
from rich.table import Table

from .meta.problem_meta import ProblemMeta

CATEGORY_LABELS = {
    "free": "free",
    "low": "lower",
    "upp": "upper",
    "rng": "low/upp",
    "fixed": "fixed",
    "infeasible": "infeas",
}

# Display order: least to most constrained, infeasible last
_DISPLAY_ORDER = ("free", "low", "upp", "rng", "fixed", "infeasible")


def _rows(meta: ProblemMeta) -> List[Tuple[str, str, str]]:
    variables = meta.variable_categories.counts()
    constraints = meta.constraint_categories.counts()

    rows = [("all", str(meta.nvar), str(meta.ncon))]
    for category in _DISPLAY_ORDER:
        rows.append((CATEGORY_LABELS[category], str(variables[category]), str(constraints[category])))
    rows.append(("linear", "-", str(meta.nlin)))
    rows.append(("nonlinear", "-", str(meta.nnln)))
    rows.append(("nnz", f"{meta.nnzo} (grad) / {meta.nnzh} (hess)", f"{meta.nnzj} (jac)"))
    return rows


def format_meta(meta: ProblemMeta) -> str:
    """Plain-text summary of the metadata."""
    lines = [
        f"Problem: {meta.name}",
        f"  Sense: {meta.optimize}" + (" (LP)" if meta.islp else ""),
        f"  {'':>10}  {'Variables':>22}  {'Constraints':>12}",
    ]
    for label, n_var, n_con in _rows(meta):
        lines.append(f"  {label:>10}  {n_var:>22}  {n_con:>12}")

    if meta.has_infeasible_bounds:
        lines.append(f"  Infeasible: variables {list(meta.iinf)}, constraints {list(meta.jinf)}")

    return "\n".join(lines)


def meta_table(meta: ProblemMeta) -> Table:
    """Rich table of the metadata."""
    table = Table(title=f"Problem: {meta.name} ({meta.optimize})")
    table.add_column("", style="cyan")
    table.add_column("Variables", justify="right")
    table.add_column("Constraints", justify="right")

    for label, n_var, n_con in _rows(meta):
        style = "red" if label == "infeas" and (n_var != "0" or n_con != "0") else ""
        table.add_row(label, n_var, n_con, style=style)

    return table


def print_meta(meta: ProblemMeta, console: Optional[Console] = None) -> None:
    """Render the metadata table to a rich console."""
    console = console or Console()
    console.print()
    console.print(meta_table(meta))
    console.print()
