"""Tests for sample quantization."""

from __future__ import annotations

import numpy as np
import pytest

from liftpack.components.signal import Samples, Signal
from liftpack.core.world import World
from liftpack.systems.quantize import QuantizeInt, decimal_to_int, round_to_int


class TestRoundToInt:
    def test_sixteenths(self) -> None:
        """Ties on the fourth digit go to the even third digit."""
        values = np.array([0.0625, 0.1875, 10.3125, 10.4375])
        assert round_to_int(values).tolist() == [62, 188, 10312, 10438]

    def test_round_up(self) -> None:
        assert round_to_int(np.array([0.00390625])).tolist() == [4]

    def test_exact(self) -> None:
        values = np.array([2.5, 3.75, 100.0])
        result = round_to_int(values)
        assert result.tolist() == [2500, 3750, 100000]
        assert result.dtype == np.int64


class TestDecimalToInt:
    def test_scale(self) -> None:
        assert decimal_to_int(np.array([12.5, 3.0, 0.25])).tolist() == [1250, 300, 25]

    def test_truncates(self) -> None:
        assert decimal_to_int(np.array([1.239, -1.239])).tolist() == [123, -123]


class TestQuantizeInt:
    @pytest.mark.parametrize("policy, scale, expected", [
        ("round3", 1000, [45500, 46250]),
        ("decimal2", 100, [4550, 4625]),
    ])
    def test_system(self, policy: str, scale: int, expected: list[int]) -> None:
        world = World()
        eid = world.spawn_samples([45.5, 46.25], source="ibm")
        signal = world.pipe(eid).to(QuantizeInt(policy)).out(Signal)  # type: ignore[arg-type]
        assert signal.scale == scale
        assert world.arena.view(signal.data).tolist() == expected
        assert world.metadata[eid]["quantizer"] == policy

    def test_components(self) -> None:
        system = QuantizeInt()
        assert system.required_components() == [Samples]
        assert system.produced_components() == [Signal]

    def test_invalid_policy(self) -> None:
        with pytest.raises(ValueError, match="policy"):
            QuantizeInt("round2")  # type: ignore[arg-type]
