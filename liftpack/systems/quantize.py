"""Quantization of real samples to integers for lossless transforms.

Price histories carry either two decimal digits (decimalized quotes) or
binary fractions such as 1/16 (old quotes and split adjusted series). Both
are mapped to integers so the integer lifting transforms can be applied:

- ``decimal2``: multiply by 100 and truncate;
- ``round3``: round to three fractional digits, ties to the even third
  digit, then multiply by 1000.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

import numpy as np

from liftpack.components.signal import Samples, Signal
from liftpack.core.system import System

if TYPE_CHECKING:
    from liftpack.core.world import World

QuantPolicy = Literal["round3", "decimal2"]

SCALES: dict[str, int] = {"round3": 1000, "decimal2": 100}


def round_to_int(values: np.ndarray) -> np.ndarray:
    """Round to three fractional digits and scale by 1000.

    The decision looks at the third and fourth fractional digits: a fourth
    digit above 5 rounds up, exactly 5 rounds up only when the third digit
    is odd. So 0.0625 becomes 62 and 0.1875 becomes 188.
    """
    vals = np.asarray(values, dtype=np.float64)
    frac = vals - np.trunc(vals)
    third = np.fmod(np.trunc(frac * 1000.0), 10)
    fourth = np.fmod(np.trunc(frac * 10000.0), 10)

    round_up = (fourth > 5) | ((fourth == 5) & (np.fmod(third, 2) != 0))
    adjusted = vals + np.where(round_up, 0.001, 0.0)
    return np.trunc(adjusted * 1000.0).astype(np.int64)


def decimal_to_int(values: np.ndarray) -> np.ndarray:
    """Scale two-digit decimal values by 100 and truncate (no rounding)."""
    vals = np.asarray(values, dtype=np.float64)
    return np.trunc(vals * 100.0).astype(np.int64)


class QuantizeInt(System):
    """Quantize raw samples into an integer signal.

    Forward mode: Samples -> Signal
    """

    def __init__(self, policy: QuantPolicy = "round3") -> None:
        """Initialize quantization system.

        Args:
            policy: 'round3' (x1000 with rounding) or 'decimal2' (x100, truncate)
        """
        super().__init__(mode="forward")
        if policy not in SCALES:
            raise ValueError(f"policy must be 'round3' or 'decimal2', got {policy!r}")
        self.policy = policy

    def required_components(self) -> list[type]:
        return [Samples]

    def produced_components(self) -> list[type]:
        return [Signal]

    def run(self, world: World, eids: list[int]) -> None:
        convert = round_to_int if self.policy == "round3" else decimal_to_int
        for eid in eids:
            samples = world.get_component(eid, Samples)
            quantized = convert(world.arena.view(samples.data))
            ref = world.arena.copy_tensor(quantized)
            world.add_component(eid, Signal(data=ref, scale=SCALES[self.policy]))
            world.metadata[eid]["quantizer"] = self.policy

    def __repr__(self) -> str:
        return f"QuantizeInt(policy={self.policy})"
