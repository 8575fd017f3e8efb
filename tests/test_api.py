"""Tests for the high-level API."""

import numpy as np
import pytest

from liftpack import World, basis_data, best_basis, packet_roundtrip
from liftpack.components.packet import BestBasis, PacketTree
from liftpack.eval.signals import sin_combo
from liftpack.systems.cost import ThresholdCost


class TestPacketRoundtrip:
    @pytest.mark.parametrize("wavelet", ["haar", "line", "ts"])
    def test_integer(self, wavelet: str) -> None:
        values = np.array(
            [32, 10, 20, 38, 37, 28, 38, 34, 18, 24, 18, 9, 23, 24, 28, 34], dtype=np.int64
        )
        result = packet_roundtrip(values, wavelet=wavelet)
        assert np.array_equal(result, values)

    def test_real(self) -> None:
        _, values = sin_combo(128)
        result = packet_roundtrip(values, wavelet="haar_classic")
        np.testing.assert_allclose(result, values, atol=1e-12)

    def test_real_defaults(self) -> None:
        """Float input picks a real wavelet and cost without arguments."""
        _, values = sin_combo(64)
        result = packet_roundtrip(values)
        np.testing.assert_allclose(result, values, atol=1e-12)

    def test_real_default_wavelet_recorded(self) -> None:
        world, eid = best_basis(np.linspace(-1.0, 1.0, 32))
        assert world.get_component(eid, PacketTree).wavelet == "haar_classic"

    def test_invalid_length(self) -> None:
        with pytest.raises(ValueError, match="power of two"):
            packet_roundtrip(np.arange(10))


class TestBestBasis:
    def test_returns_world_and_entity(self) -> None:
        world, eid = best_basis(np.arange(32), wavelet="line")
        assert isinstance(world, World)
        assert world.has_component(eid, PacketTree)
        assert world.has_component(eid, BestBasis)

    def test_shared_world(self) -> None:
        world = World()
        _, first = best_basis(np.arange(8), world=world)
        _, second = best_basis(np.arange(8) * 2, world=world)
        assert first != second
        assert world.query(BestBasis) == [first, second]

    def test_basis_data(self) -> None:
        world, eid = best_basis(np.arange(16.0), wavelet="haar_classic", cost=ThresholdCost(0.5))
        data = basis_data(world, eid)
        assert sum(len(d) for d in data) == 16
        world.clear()
        # Copies survive the arena reset
        assert sum(len(d) for d in data) == 16
