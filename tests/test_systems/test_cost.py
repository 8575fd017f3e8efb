"""Tests for cost functions and cost annotation."""

from __future__ import annotations

import math

import numpy as np
import pytest

from liftpack.components.packet import PacketTree
from liftpack.core.arena import Arena
from liftpack.core.world import World
from liftpack.systems.cost import (
    BitWidthCost,
    CostAnnotate,
    ShannonCost,
    ThresholdCost,
    annotate_costs,
    make_cost,
)
from liftpack.systems.packet import PacketTransform, build_packet_tree


class TestCostFunctions:
    def test_bit_width(self) -> None:
        # widths 1, 2, 2, 3, 4
        assert BitWidthCost()(np.array([0, 1, -1, 3, -4], dtype=np.int64)) == 12

    def test_shannon(self) -> None:
        data = np.array([0.0, 0.5, -2.0])
        expected = -(0.25 * math.log(0.25) + 4.0 * math.log(4.0))
        assert ShannonCost()(data) == pytest.approx(expected)

    def test_shannon_ignores_zeros(self) -> None:
        assert ShannonCost()(np.zeros(8)) == 0.0

    def test_threshold(self) -> None:
        data = np.array([0.5, -6.0, 5.0, 7.5])
        assert ThresholdCost(5.0)(data) == 2

    def test_threshold_negative(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            ThresholdCost(-1.0)

    @pytest.mark.parametrize(
        "name, cls", [("width", BitWidthCost), ("shannon", ShannonCost), ("threshold", ThresholdCost)]
    )
    def test_make_cost(self, name: str, cls: type) -> None:
        cost = make_cost(name, 2.0)
        assert isinstance(cost, cls)
        assert cost.name == name

    def test_make_cost_unknown(self) -> None:
        with pytest.raises(ValueError, match="Unknown cost function"):
            make_cost("entropy")


class TestAnnotateCosts:
    def test_every_node_annotated(self) -> None:
        arena = Arena()
        values = np.array([4, 6, 10, 12], dtype=np.int64)
        tree = build_packet_tree(arena, values, "haar")
        annotate_costs(tree, arena, BitWidthCost())

        for node in tree.nodes:
            assert node.cost == BitWidthCost()(arena.view(node.data))
            assert isinstance(node.cost, int)
        # 4 -> 4 bits, 6 -> 4, 10 -> 5, 12 -> 5
        assert tree.root.cost == 18

    def test_real_tree_costs_are_float(self) -> None:
        arena = Arena()
        tree = build_packet_tree(arena, np.linspace(-1.0, 1.0, 8), "haar_classic")
        annotate_costs(tree, arena, ThresholdCost(0.1))
        assert all(isinstance(node.cost, float) for node in tree.nodes)

    def test_system(self) -> None:
        world = World()
        eid = world.spawn_signal(np.array([4, 6, 10, 12]))
        tree = (
            world.pipe(eid)
            | PacketTransform("haar")
            | CostAnnotate(BitWidthCost())
        ).out(PacketTree)
        assert tree.root.cost == 18
        assert world.metadata[eid]["cost_function"] == "width"
        assert world.metadata[eid]["root_cost"] == 18
