"""Ordinary (non-packet) lifting wavelet transform system."""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

from liftpack.components.signal import Coefficients, Reconstruction, Signal
from liftpack.core.system import System
from liftpack.lifting import LiftingScheme
from liftpack.systems.packet import resolve_wavelet

if TYPE_CHECKING:
    from liftpack.core.world import World


class LiftingTransform(System):
    """Multi-level lifting wavelet transform of a whole signal.

    Only the low half is transformed again at each level, so the result is
    the final scaling value followed by the wavelet coefficients from
    coarsest to finest.

    Forward mode: Signal -> Coefficients
    Inverse mode: Coefficients -> Reconstruction
    """

    def __init__(
        self,
        wavelet: str | LiftingScheme = "haar",
        mode: Literal["forward", "inverse"] = "forward",
    ) -> None:
        """Initialize lifting transform system.

        Args:
            wavelet: Wavelet name or instance
            mode: 'forward' for analysis, 'inverse' for synthesis
        """
        super().__init__(mode=mode)
        self.wavelet = resolve_wavelet(wavelet)

    def required_components(self) -> list[type]:
        if self.mode == "forward":
            return [Signal]
        return [Coefficients]

    def produced_components(self) -> list[type]:
        if self.mode == "forward":
            return [Coefficients]
        return [Reconstruction]

    def run(self, world: World, eids: list[int]) -> None:
        if self.mode == "forward":
            self._run_forward(world, eids)
        else:
            self._run_inverse(world, eids)

    def _run_forward(self, world: World, eids: list[int]) -> None:
        for eid in eids:
            signal = world.get_component(eid, Signal)
            ref = world.arena.copy_tensor(world.arena.view(signal.data))
            self.wavelet.forward_trans(world.arena.view(ref))
            world.add_component(eid, Coefficients(data=ref, method=self.wavelet.name))

    def _run_inverse(self, world: World, eids: list[int]) -> None:
        for eid in eids:
            coeffs = world.get_component(eid, Coefficients)
            if coeffs.method != self.wavelet.name:
                raise ValueError(
                    f"coefficients were made by '{coeffs.method}', "
                    f"cannot invert with '{self.wavelet.name}'"
                )
            ref = world.arena.copy_tensor(world.arena.view(coeffs.data))
            self.wavelet.inverse_trans(world.arena.view(ref))
            world.add_component(eid, Reconstruction(data=ref))

    def __repr__(self) -> str:
        return f"LiftingTransform(wavelet={self.wavelet.name}, mode={self.mode})"
