"""
Tests for metadata summaries.
"""

import numpy as np
from rich.console import Console
from rich.table import Table

from nlpmeta import build_meta, format_meta, meta_table, print_meta


def _meta():
    return build_meta(
        3,
        lvar=[-np.inf, 0.0, 5.0],
        uvar=[np.inf, 10.0, 5.0],
        ncon=2,
        lcon=[0.0, 1.0],
        ucon=[0.0, 0.0],
        lin=[1],
        nln=[2],
        name="hs_toy",
    )


class TestFormatMeta:
    """Plain-text summary."""

    def test_header_and_rows(self):
        text = format_meta(_meta())

        assert text.startswith("Problem: hs_toy")
        assert "Sense: minimize" in text
        for label in ("all", "free", "lower", "upper", "low/upp", "fixed", "infeas", "nnz"):
            assert label in text

    def test_infeasible_listed(self):
        text = format_meta(_meta())
        assert "Infeasible: variables [], constraints [2]" in text

    def test_lp_marker(self):
        assert "(LP)" in format_meta(build_meta(1, islp=True))


class TestRichTable:
    """rich rendering."""

    def test_table_rows(self):
        table = meta_table(_meta())

        assert isinstance(table, Table)
        assert len(table.columns) == 3
        # all + six categories + linear + nonlinear + nnz
        assert table.row_count == 10

    def test_print_meta(self):
        console = Console(record=True, width=100)
        print_meta(_meta(), console=console)

        output = console.export_text()
        assert "hs_toy" in output
        assert "Variables" in output
        assert "Constraints" in output
