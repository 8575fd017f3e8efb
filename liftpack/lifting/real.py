"""Real-valued "classic" Haar wavelets.

The classic Haar transform computes, for an even element a and its odd
neighbour b,

    s = (a + b) / 2      (scaling function, low pass)
    d = (a - b) / 2      (wavelet function, high pass)

It is written in lifting form: d is computed first and overwrites b, then
s is recovered as a - d. Unlike the lifting Haar wavelet, the inverse is
not a pure mirror of the forward step.

HaarClassicFreq adds the reversed filter placement used to build frequency
ordered wavelet packet trees (Jensen and la Cour-Harbo, "Ripples in
Mathematics", section 9.3): the high pass result goes to the low half and
the low pass result to the high half.
"""

from __future__ import annotations

from liftpack.core.split_view import SplitView
from liftpack.lifting.base import Direction, LiftingScheme


class HaarClassic(LiftingScheme):
    """Classic Haar wavelet on real values."""

    name = "haar_classic"

    def predict(self, view: SplitView, direction: Direction) -> None:
        if direction is Direction.FORWARD:
            view.high[:] = (view.low - view.high) / 2
        else:
            view.high[:] = view.low - 2 * view.high

    def update(self, view: SplitView, direction: Direction) -> None:
        if direction is Direction.FORWARD:
            view.low[:] -= view.high
        else:
            view.low[:] += view.high


class HaarClassicFreq(HaarClassic):
    """Classic Haar with reversed filter placement for frequency analysis.

    Forward reversed step:

        a' = (a - b) / 2     stored in the low half
        b' = a' + b          stored in the high half, equals (a + b) / 2
    """

    name = "haar_classic_freq"
    supports_reverse = True

    def predict_rev(self, view: SplitView, direction: Direction) -> None:
        if direction is Direction.FORWARD:
            view.low[:] = (view.low - view.high) / 2
        else:
            view.low[:] = 2 * view.low + view.high

    def update_rev(self, view: SplitView, direction: Direction) -> None:
        if direction is Direction.FORWARD:
            view.high[:] += view.low
        else:
            view.high[:] -= view.low

    def forward_step_rev(self, view: SplitView) -> None:
        self._check(view)
        self.split(view)
        self.predict_rev(view, Direction.FORWARD)
        self.update_rev(view, Direction.FORWARD)

    def inverse_step_rev(self, view: SplitView) -> None:
        self._check(view)
        self.update_rev(view, Direction.INVERSE)
        self.predict_rev(view, Direction.INVERSE)
        self.merge(view)
