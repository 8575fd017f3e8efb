"""Lifting scheme base class.

A lifting scheme wavelet computes one transform step in place on a
SplitView of N elements:

- split: even elements move to the low half, odd elements to the high half
- predict: the high half is replaced by the difference between each odd
  element and a prediction made from the even elements
- update: the low half is adjusted with the predict result so that it keeps
  an average-like quantity

The inverse step runs the same operations in reverse order with addition
and subtraction exchanged, then merges the halves back into their
interleaved positions.

Subclasses implement ``predict`` and ``update`` (and may add passes by
overriding ``forward_step``/``inverse_step``).

Example:
    >>> wavelet = HaarInt()
    >>> vec = np.array([4, 6, 10, 12], dtype=np.int64)
    >>> view = SplitView.over(vec)
    >>> wavelet.forward_step(view)
    >>> wavelet.inverse_step(view)
    >>> vec.tolist()
    [4, 6, 10, 12]
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum

import numpy as np

from liftpack.core.split_view import SplitView, check_step_length


class Direction(Enum):
    """Transform direction: governs the sign of predict/update arithmetic."""

    FORWARD = "forward"
    INVERSE = "inverse"


class LiftingScheme(ABC):
    """Base class for lifting scheme wavelets.

    Attributes:
        name: Registry name of the wavelet
        integer: True if the transform maps integers to integers
        supports_reverse: True if the reversed filter placement is available
            (needed for frequency-ordered packet trees)
    """

    name = "lifting"
    integer = False
    supports_reverse = False

    def _check(self, view: SplitView) -> None:
        check_step_length(view.n)
        expected = np.integer if self.integer else np.floating
        if not np.issubdtype(view.low.dtype, expected):
            kind = "integer" if self.integer else "floating point"
            raise TypeError(
                f"{type(self).__name__} requires {kind} data, got {view.low.dtype}"
            )

    def split(self, view: SplitView) -> None:
        """Move even elements to the low half and odd elements to the high half."""
        values = view.values()
        view.low[:] = values[0::2]
        view.high[:] = values[1::2]

    def merge(self, view: SplitView) -> None:
        """Interleave the low and high halves back into original order."""
        values = view.values()
        merged = np.empty_like(values)
        merged[0::2] = values[: view.half]
        merged[1::2] = values[view.half :]
        view.assign(merged)

    @abstractmethod
    def predict(self, view: SplitView, direction: Direction) -> None:
        """Replace the high half with the prediction residual (wavelet function)."""

    @abstractmethod
    def update(self, view: SplitView, direction: Direction) -> None:
        """Adjust the low half with the residual (scaling function)."""

    def forward_step(self, view: SplitView) -> None:
        """One forward transform step: split, predict, update."""
        self._check(view)
        self.split(view)
        self.predict(view, Direction.FORWARD)
        self.update(view, Direction.FORWARD)

    def inverse_step(self, view: SplitView) -> None:
        """One inverse transform step: update, predict, merge."""
        self._check(view)
        self.update(view, Direction.INVERSE)
        self.predict(view, Direction.INVERSE)
        self.merge(view)

    def forward_step_rev(self, view: SplitView) -> None:
        """Forward step with the low and high pass results swapped."""
        raise NotImplementedError(
            f"{type(self).__name__} does not support reversed filter placement"
        )

    def inverse_step_rev(self, view: SplitView) -> None:
        """Inverse of ``forward_step_rev``."""
        raise NotImplementedError(
            f"{type(self).__name__} does not support reversed filter placement"
        )

    def forward_trans(self, vec: np.ndarray) -> None:
        """Full in-place wavelet transform of a power-of-two length vector.

        Each step works on the low half produced by the previous step, so
        after the call vec holds the final scaling value followed by the
        wavelet coefficients from coarsest to finest.
        """
        n = vec.shape[0]
        check_step_length(n)
        while n > 1:
            self.forward_step(SplitView.over(vec[:n]))
            n >>= 1

    def inverse_trans(self, vec: np.ndarray) -> None:
        """Invert ``forward_trans`` in place."""
        total = vec.shape[0]
        check_step_length(total)
        n = 2
        while n <= total:
            self.inverse_step(SplitView.over(vec[:n]))
            n <<= 1

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
