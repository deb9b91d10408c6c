"""
Tests for the HasProblemMeta interface and the reset hook.
"""

import numpy as np
import pytest

from nlpmeta import HasProblemMeta, ProblemMeta, build_meta, reset_data


class QuasiNewtonModel(HasProblemMeta):
    """Model carrying a Hessian approximation that reset_data() clears."""

    def __init__(self, meta):
        self._meta = meta
        self.hessian_approx = np.eye(meta.nvar)
        self.n_updates = 0

    @property
    def meta(self):
        return self._meta

    def update(self, scale):
        self.hessian_approx = self.hessian_approx * scale
        self.n_updates += 1

    def reset_data(self):
        self.hessian_approx = np.eye(self.meta.nvar)
        self.n_updates = 0
        return self


class PlainModel(HasProblemMeta):
    """Model with no auxiliary state."""

    def __init__(self, meta):
        self._meta = meta

    @property
    def meta(self):
        return self._meta


class TestResetHook:
    """reset_data() on records and models."""

    def test_record_reset_is_identity(self):
        meta = build_meta(3, ncon=2, lcon=[0.0, -np.inf], ucon=[0.0, 1.0])
        before = meta.to_dict()

        result = reset_data(meta)

        assert result is meta
        assert result.to_dict() == before

    def test_reset_twice(self):
        meta = build_meta(2)
        assert reset_data(reset_data(meta)) is meta

    def test_default_model_reset(self):
        model = PlainModel(build_meta(2))
        assert reset_data(model) is model

    def test_override_clears_model_state(self):
        meta = build_meta(2)
        model = QuasiNewtonModel(meta)
        model.update(3.0)

        result = reset_data(model)

        assert result is model
        assert model.n_updates == 0
        np.testing.assert_array_equal(model.hessian_approx, np.eye(2))
        assert model.meta is meta


class TestInterface:
    """HasProblemMeta capability."""

    def test_record_is_its_own_meta(self):
        meta = build_meta(2)

        assert isinstance(meta, HasProblemMeta)
        assert meta.meta is meta

    def test_interface_is_abstract(self):
        with pytest.raises(TypeError):
            HasProblemMeta()

    def test_model_exposes_meta(self):
        model = PlainModel(build_meta(4, name="composed"))

        assert isinstance(model.meta, ProblemMeta)
        assert model.meta.name == "composed"
