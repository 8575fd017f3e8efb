"""Tests for bit width metrics."""

from __future__ import annotations

import numpy as np
import pytest

from liftpack.components.packet import BestBasis
from liftpack.components.signal import Coefficients, Signal
from liftpack.core.world import World
from liftpack.systems.best_basis import BestBasisSelect
from liftpack.systems.cost import BitWidthCost, CostAnnotate
from liftpack.systems.lifting import LiftingTransform
from liftpack.systems.metrics import MetricBitWidth, value_width, vector_width
from liftpack.systems.packet import PacketTransform


class TestWidths:
    @pytest.mark.parametrize(
        "value, width",
        [(0, 1), (1, 2), (-1, 2), (2, 3), (3, 3), (4, 4), (-4, 4), (255, 9), (256, 10)],
    )
    def test_value_width(self, value: int, width: int) -> None:
        assert value_width(value) == width

    def test_vector_width(self) -> None:
        vec = np.array([0, 1, -1, 255], dtype=np.int64)
        assert vector_width(vec) == 1 + 2 + 2 + 9

    def test_vector_width_rejects_float(self) -> None:
        with pytest.raises(TypeError, match="integer"):
            vector_width(np.zeros(4))


class TestMetricBitWidth:
    def test_signal(self) -> None:
        world = World()
        eid = world.spawn_signal([4, 6, 10, 12])
        world.pipe(eid).to(MetricBitWidth()).execute()
        assert world.metadata[eid]["bit_width"] == 18

    def test_coefficients(self) -> None:
        world = World()
        eid = world.spawn_signal([4, 6, 10, 12])
        (
            world.pipe(eid)
            | LiftingTransform("haar")
            | MetricBitWidth(Coefficients, key="haar")
        ).execute()
        # [8, 6, 2, 2]
        assert world.metadata[eid]["haar"] == 5 + 4 + 3 + 3

    def test_best_basis(self) -> None:
        world = World()
        eid = world.spawn_signal(np.full(16, 1000))
        (
            world.pipe(eid)
            | PacketTransform("haar")
            | CostAnnotate(BitWidthCost())
            | BestBasisSelect()
            | MetricBitWidth(BestBasis, key="packet")
        ).execute()
        assert world.metadata[eid]["packet"] == world.metadata[eid]["best_basis_cost"]
        assert world.metadata[eid]["packet"] < world.metadata[eid]["root_cost"]

    def test_required_components(self) -> None:
        assert MetricBitWidth().required_components() == [Signal]
        assert len(MetricBitWidth(BestBasis).required_components()) == 2
        assert MetricBitWidth().produced_components() == []
