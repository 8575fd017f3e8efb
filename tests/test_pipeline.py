"""Tests for Pipeline."""

import numpy as np
import pytest

from liftpack.components.packet import BestBasis, PacketTree
from liftpack.components.signal import Coefficients, Reconstruction, Signal
from liftpack.core.pipeline import Pipe
from liftpack.core.world import World
from liftpack.systems.best_basis import BestBasisSelect
from liftpack.systems.cost import BitWidthCost, CostAnnotate
from liftpack.systems.inverse_packet import InversePacketTransform
from liftpack.systems.lifting import LiftingTransform
from liftpack.systems.packet import PacketTransform


class TestPipeBasics:
    """Test basic Pipe construction and chaining."""

    def test_pipe_creation(self) -> None:
        world = World()
        entity = world.new_entity()
        pipe = world.pipe(entity)

        assert isinstance(pipe, Pipe)
        assert pipe.entities == [entity]
        assert pipe.systems == []

    def test_pipe_to_chaining(self) -> None:
        world = World()
        entity = world.new_entity()
        transform = PacketTransform("haar")

        pipe = world.pipe(entity).to(transform)

        assert pipe.systems == [transform]

    def test_pipe_mixed_operators(self) -> None:
        """Test mixing .to() and | operators."""
        world = World()
        entity = world.new_entity()
        forward = LiftingTransform("line")
        inverse = LiftingTransform("line", mode="inverse")

        pipe = world.pipe(entity).to(forward) | inverse

        assert pipe.systems == [forward, inverse]


class TestPipeExecution:
    """Test pipeline execution."""

    def test_out_returns_component(self) -> None:
        world = World()
        entity = world.spawn_signal(np.array([4, 6, 10, 12]))

        coeffs = world.pipe(entity).to(LiftingTransform("haar")).out(Coefficients)

        assert isinstance(coeffs, Coefficients)
        assert world.arena.view(coeffs.data).tolist() == [8, 6, 2, 2]
        # The input signal is untouched
        signal = world.get_component(entity, Signal)
        assert world.arena.view(signal.data).tolist() == [4, 6, 10, 12]

    def test_full_packet_pipeline(self) -> None:
        world = World()
        values = np.random.default_rng(3).integers(0, 1000, size=64)
        entity = world.spawn_signal(values)

        recon = (
            world.pipe(entity)
            | PacketTransform("line")
            | CostAnnotate(BitWidthCost())
            | BestBasisSelect()
            | InversePacketTransform()
        ).out(Reconstruction)

        assert np.array_equal(world.arena.view(recon.data), values)
        assert world.has_component(entity, PacketTree)
        assert world.has_component(entity, BestBasis)

    def test_missing_component_raises(self) -> None:
        world = World()
        entity = world.new_entity()

        with pytest.raises(RuntimeError, match="cannot run"):
            world.pipe(entity).to(BestBasisSelect()).execute()

    def test_out_missing_component_raises(self) -> None:
        world = World()
        entity = world.spawn_signal(np.arange(8))

        with pytest.raises(KeyError):
            world.pipe(entity).to(LiftingTransform("haar")).out(Reconstruction)
