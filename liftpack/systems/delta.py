"""Delta coding: a reference value followed by successive differences.

Delta coding is linear in the signal length and is the baseline the wavelet
transforms have to beat. If it does better, the predict step does not suit
the data.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

import numpy as np

from liftpack.components.signal import Coefficients, Reconstruction, Signal
from liftpack.core.system import System

if TYPE_CHECKING:
    from liftpack.core.world import World


def delta_forward(vec: np.ndarray) -> None:
    """Replace vec[i] by vec[i] - vec[i-1] in place; vec[0] is kept."""
    if vec.shape[0] > 1:
        vec[1:] = np.diff(vec)


def delta_inverse(vec: np.ndarray) -> None:
    """Invert ``delta_forward`` in place (running sum)."""
    if vec.shape[0] > 1:
        np.cumsum(vec, out=vec)


class DeltaTransform(System):
    """Delta code each entity's signal.

    Forward mode: Signal -> Coefficients (method 'delta')
    Inverse mode: Coefficients -> Reconstruction
    """

    method = "delta"

    def __init__(self, mode: Literal["forward", "inverse"] = "forward") -> None:
        super().__init__(mode=mode)

    def required_components(self) -> list[type]:
        if self.mode == "forward":
            return [Signal]
        return [Coefficients]

    def produced_components(self) -> list[type]:
        if self.mode == "forward":
            return [Coefficients]
        return [Reconstruction]

    def run(self, world: World, eids: list[int]) -> None:
        for eid in eids:
            if self.mode == "forward":
                source = world.get_component(eid, Signal).data
            else:
                coeffs = world.get_component(eid, Coefficients)
                if coeffs.method != self.method:
                    raise ValueError(
                        f"coefficients were made by '{coeffs.method}', not delta coding"
                    )
                source = coeffs.data

            ref = world.arena.copy_tensor(world.arena.view(source))
            vec = world.arena.view(ref)
            if self.mode == "forward":
                delta_forward(vec)
                world.add_component(eid, Coefficients(data=ref, method=self.method))
            else:
                delta_inverse(vec)
                world.add_component(eid, Reconstruction(data=ref))
