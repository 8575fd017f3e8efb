"""Integer to integer lifting wavelets.

These transforms are perfectly invertible on integer data. Every division
uses floor semantics through an arithmetic right shift, so rounding
``x / 2 + 0.5`` becomes ``(x + 1) >> 1`` and ``x / 4 + 0.5`` becomes
``(x + 2) >> 2``. Because each pass only reads the half it does not
modify, the inverse recomputes exactly the same correction.

Where a filter needs a neighbour outside the half array, a virtual value is
extrapolated from the line through the two nearest real neighbours:
``2 * nearest - next_nearest``.

References:
    A.R. Calderbank, I. Daubechies, W. Sweldens, B.-L. Yeo,
    "Wavelet Transforms that Map Integers to Integers", 1996.
"""

from __future__ import annotations

import numpy as np

from liftpack.core.split_view import SplitView
from liftpack.lifting.base import Direction, LiftingScheme


def extrapolate_next(values: np.ndarray) -> np.ndarray:
    """Right neighbours of each element, the last one extrapolated."""
    right = np.empty_like(values)
    right[:-1] = values[1:]
    right[-1] = 2 * values[-1] - values[-2]
    return right


def extrapolate_prev(values: np.ndarray) -> np.ndarray:
    """Left neighbours of each element, the first one extrapolated."""
    left = np.empty_like(values)
    left[1:] = values[:-1]
    left[0] = 2 * values[0] - values[1]
    return left


class HaarInt(LiftingScheme):
    """Integer Haar wavelet (the S transform).

    Predict: d = odd - even
    Update:  s = even + floor(d / 2)

    After a forward step the low half holds floor((even + odd) / 2).
    """

    name = "haar"
    integer = True

    def predict(self, view: SplitView, direction: Direction) -> None:
        if direction is Direction.FORWARD:
            view.high[:] -= view.low
        else:
            view.high[:] += view.low

    def update(self, view: SplitView, direction: Direction) -> None:
        correction = view.high >> 1
        if direction is Direction.FORWARD:
            view.low[:] += correction
        else:
            view.low[:] -= correction


class LineInt(LiftingScheme):
    """Integer linear interpolation wavelet.

    The predict step assumes an odd element lies on the line between its
    two even neighbours. The last odd element has no right neighbour, so the
    line through the last two even elements is extended. With N == 2 the
    prediction is the single even element, which is the Haar predict.

    Unlike the S and TS transforms this one does not preserve the mean.
    """

    name = "line"
    integer = True

    def predict(self, view: SplitView, direction: Direction) -> None:
        evens = view.low
        if view.n == 2:
            prediction = evens.copy()
        else:
            prediction = (evens + extrapolate_next(evens) + 1) >> 1

        if direction is Direction.FORWARD:
            view.high[:] -= prediction
        else:
            view.high[:] += prediction

    def update(self, view: SplitView, direction: Direction) -> None:
        # even += (odd[k-1] + odd[k]) / 4, the missing odd[-1] extrapolated
        odds = view.high
        if view.n == 2:
            correction = (odds + 1) >> 1
        else:
            correction = (extrapolate_prev(odds) + odds + 2) >> 2

        if direction is Direction.FORWARD:
            view.low[:] += correction
        else:
            view.low[:] -= correction


class TSInt(HaarInt):
    """Integer TS transform (extended S, CDF(3,1)).

    The S transform predict and update steps followed by an average
    interpolation step on the wavelet coefficients:

        d = d + floor((s[i-1] - s[i+1]) / 4 + 1/2)

    Missing neighbours at either end of the low half are extrapolated. With
    N == 2 there is nothing to interpolate and the correction is zero.
    """

    name = "ts"

    def predict2(self, view: SplitView, direction: Direction) -> None:
        smooth = view.low
        if view.n == 2:
            correction = np.zeros_like(smooth)
        else:
            correction = (extrapolate_prev(smooth) - extrapolate_next(smooth) + 2) >> 2

        if direction is Direction.FORWARD:
            view.high[:] += correction
        else:
            view.high[:] -= correction

    def forward_step(self, view: SplitView) -> None:
        self._check(view)
        self.split(view)
        self.predict(view, Direction.FORWARD)
        self.update(view, Direction.FORWARD)
        self.predict2(view, Direction.FORWARD)

    def inverse_step(self, view: SplitView) -> None:
        self._check(view)
        self.predict2(view, Direction.INVERSE)
        self.update(view, Direction.INVERSE)
        self.predict(view, Direction.INVERSE)
        self.merge(view)
