"""Tests for delta coding."""

from __future__ import annotations

import numpy as np
import pytest

from liftpack.components.signal import Coefficients, Reconstruction
from liftpack.core.world import World
from liftpack.systems.delta import DeltaTransform, delta_forward, delta_inverse
from liftpack.systems.lifting import LiftingTransform


class TestDeltaFunctions:
    def test_forward(self) -> None:
        vec = np.array([100, 102, 101, 105], dtype=np.int64)
        delta_forward(vec)
        assert vec.tolist() == [100, 2, -1, 4]

    def test_round_trip(self) -> None:
        original = np.random.default_rng(1).integers(-1000, 1000, size=100)
        vec = original.copy()
        delta_forward(vec)
        delta_inverse(vec)
        assert np.array_equal(vec, original)

    @pytest.mark.parametrize("values", [[], [7]])
    def test_short(self, values: list[int]) -> None:
        vec = np.array(values, dtype=np.int64)
        delta_forward(vec)
        delta_inverse(vec)
        assert vec.tolist() == values


class TestDeltaTransform:
    def test_system_round_trip(self) -> None:
        world = World()
        eid = world.spawn_signal([100, 102, 101, 105, 110])
        coeffs = world.pipe(eid).to(DeltaTransform()).out(Coefficients)
        assert coeffs.method == "delta"
        assert world.arena.view(coeffs.data).tolist() == [100, 2, -1, 4, 5]

        recon = world.pipe(eid).to(DeltaTransform(mode="inverse")).out(Reconstruction)
        assert world.arena.view(recon.data).tolist() == [100, 102, 101, 105, 110]

    def test_inverse_rejects_other_method(self) -> None:
        world = World()
        eid = world.spawn_signal([1, 2, 3, 4])
        world.pipe(eid).to(LiftingTransform("haar")).execute()
        with pytest.raises(ValueError, match="not delta coding"):
            world.pipe(eid).to(DeltaTransform(mode="inverse")).execute()
