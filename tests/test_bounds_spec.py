"""
Tests for compact bounds specifications.
"""

import numpy as np
import pytest

from nlpmeta import BoundsGroup, BoundsSpec, ProblemMeta, parse_bounds_input


class TestBoundsSpec:
    """Expansion to bound vectors."""

    def test_uniform(self):
        lower, upper = BoundsSpec.uniform(0.0, None, 4).to_vectors()

        np.testing.assert_array_equal(lower, np.zeros(4))
        assert np.all(upper == np.inf)

    def test_grouped_keeps_order(self):
        spec = BoundsSpec(
            spec_type="grouped",
            groups={
                "thickness": BoundsGroup(0.001, 0.05, 2),
                "angles": BoundsGroup(-15.0, 15.0, 1),
            },
        )

        lower, upper = spec.to_vectors()

        np.testing.assert_array_equal(lower, [0.001, 0.001, -15.0])
        np.testing.assert_array_equal(upper, [0.05, 0.05, 15.0])
        assert spec.get_dimension() == 3

    def test_explicit_with_absent_bounds(self):
        spec = parse_bounds_input([[0, 1], [None, 2], [3, None]])
        lower, upper = spec.to_vectors()

        np.testing.assert_array_equal(lower, [0.0, -np.inf, 3.0])
        np.testing.assert_array_equal(upper, [1.0, 2.0, np.inf])

    def test_fixed_and_crossed_bounds_accepted(self):
        lower, upper = parse_bounds_input([[1.0, 1.0], [2.0, 1.0]]).to_vectors()

        assert lower[0] == upper[0]
        assert lower[1] > upper[1]

    def test_integer_dtype_promoted(self):
        lower, _ = BoundsSpec.uniform(0, None, 2).to_vectors(np.int64)
        assert lower.dtype == np.float64

    def test_float32_dtype(self):
        lower, upper = BoundsSpec.uniform(-1.0, 1.0, 2).to_vectors(np.float32)
        assert lower.dtype == np.float32
        assert upper.dtype == np.float32

    def test_dict_roundtrip(self):
        spec = BoundsSpec(
            spec_type="grouped",
            groups={"a": BoundsGroup(0.0, None, 2)},
        )
        restored = BoundsSpec.from_dict(spec.to_dict())

        assert restored.get_dimension() == 2
        assert restored.groups["a"].upper is None

    def test_parse_type_key(self):
        spec = parse_bounds_input({"type": "uniform", "lower": -1, "upper": 1, "dimension": 5})

        assert spec.spec_type == "uniform"
        assert spec.get_dimension() == 5


class TestBoundsSpecErrors:
    """Structural errors raise ValueError."""

    def test_uniform_needs_dimension(self):
        with pytest.raises(ValueError, match="dimension"):
            BoundsSpec(spec_type="uniform", lower=0.0, upper=1.0)

    def test_uniform_positive_dimension(self):
        with pytest.raises(ValueError, match="Invalid dimension"):
            BoundsSpec.uniform(0.0, 1.0, 0)

    def test_group_positive_count(self):
        with pytest.raises(ValueError, match="Invalid count"):
            BoundsGroup(0.0, 1.0, 0)

    def test_malformed_pair(self):
        with pytest.raises(ValueError, match="must be \\[lower, upper\\]"):
            parse_bounds_input([[0.0, 1.0], [2.0]])

    def test_unknown_type(self):
        with pytest.raises(ValueError, match="Unknown spec_type"):
            parse_bounds_input({"type": "evaluator_derived"})

    def test_unsupported_input(self):
        with pytest.raises(ValueError, match="Unsupported bounds input"):
            parse_bounds_input("0 <= x <= 1")


class TestFromBoundsSpec:
    """ProblemMeta built from compact specs."""

    def test_variables_and_constraints(self):
        meta = ProblemMeta.from_bounds_spec(
            {
                "type": "grouped",
                "groups": {
                    "design": {"lower": 0.0, "upper": 1.0, "count": 3},
                    "pinned": {"lower": 0.5, "upper": 0.5, "count": 2},
                },
            },
            constraint_bounds=[[0.0, 0.0], [None, 1.0]],
            name="grouped",
        )

        assert meta.nvar == 5
        assert meta.irng == (1, 2, 3)
        assert meta.ifix == (4, 5)
        assert meta.ncon == 2
        assert meta.jfix == (1,)
        assert meta.jupp == (2,)
        assert meta.name == "grouped"

    def test_uniform_nonnegative(self):
        meta = ProblemMeta.from_bounds_spec(BoundsSpec.uniform(0.0, None, 50))

        assert meta.nvar == 50
        assert len(meta.ilow) == 50
        assert meta.is_bound_constrained

    def test_dtype_passthrough(self):
        meta = ProblemMeta.from_bounds_spec([[0, 1]], dtype=np.float32)

        assert meta.dtype == np.float32
        assert meta.lvar.dtype == np.float32

    def test_variable_bound_overrides_rejected(self):
        with pytest.raises(TypeError, match="lvar"):
            ProblemMeta.from_bounds_spec([[0.0, 1.0]], lvar=[-1.0])

    def test_constraint_overrides_rejected(self):
        with pytest.raises(TypeError, match="ncon"):
            ProblemMeta.from_bounds_spec([[0.0, 1.0]], [[0.0, 0.0]], ncon=3)

    def test_constraint_fields_allowed_without_constraint_spec(self):
        meta = ProblemMeta.from_bounds_spec([[0.0, 1.0]], ncon=1, ucon=[0.0])

        assert meta.ncon == 1
        assert meta.jupp == (1,)
