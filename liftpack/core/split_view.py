"""SplitView: two half arrays presented as one indexable sequence.

A lifting step works on N elements. Afterwards the low half (scaling
function result) and the high half (wavelet function result) become the data
of two separate packet tree nodes. The SplitView holds the two halves as
separate references so that the children can borrow them directly, while the
transform itself addresses them with a single global index.

Global index i maps to ``("low", i)`` for i < N/2 and to
``("high", i - N/2)`` otherwise; see ``locate``.
"""

from __future__ import annotations

from typing import Literal

import numpy as np

from liftpack.core.arena import Arena, TensorRef

Half = Literal["low", "high"]


def is_power_of_two(n: int) -> bool:
    """True for 1, 2, 4, 8, ..."""
    return n > 0 and (n & (n - 1)) == 0


def check_step_length(n: int) -> None:
    """Raise ValueError unless n is a power of two >= 2."""
    if n < 2 or not is_power_of_two(n):
        raise ValueError(f"transform length must be a power of two >= 2, got {n}")


def locate(i: int, n: int) -> tuple[Half, int]:
    """Map a global index into (half, local index) for a view of length n."""
    if not 0 <= i < n:
        raise IndexError(f"index {i} out of range for split view of length {n}")
    half = n >> 1
    if i < half:
        return "low", i
    return "high", i - half


class SplitView:
    """Packet container for one wavelet transform step.

    Attributes:
        n: Logical length (low half + high half)
        low_ref: Arena handle of the low half, if arena backed
        high_ref: Arena handle of the high half, if arena backed
    """

    def __init__(
        self,
        n: int,
        low: np.ndarray | None = None,
        high: np.ndarray | None = None,
        low_ref: TensorRef | None = None,
        high_ref: TensorRef | None = None,
    ) -> None:
        check_step_length(n)
        self.n = n
        self._low: np.ndarray | None = None
        self._high: np.ndarray | None = None
        self.low_ref = low_ref
        self.high_ref = high_ref
        if low is not None:
            self.set_low(low, low_ref)
        if high is not None:
            self.set_high(high, high_ref)

    @classmethod
    def from_data(cls, arena: Arena, ref: TensorRef) -> SplitView:
        """Copy the data behind ``ref`` into a fresh arena allocation.

        The allocation holds N elements; the two halves are subrefs of it.
        """
        data = arena.view(ref)
        n = data.shape[0]
        check_step_length(n)
        half = n >> 1
        block = arena.alloc_tensor((n,), data.dtype)
        low_ref = block.subref((slice(0, half),))
        high_ref = block.subref((slice(half, n),))
        view = cls(n, arena.view(low_ref), arena.view(high_ref), low_ref, high_ref)
        view.low[:] = data[:half]
        view.high[:] = data[half:]
        return view

    @classmethod
    def pending(cls, n: int) -> SplitView:
        """An empty container of target length n, halves assigned later."""
        return cls(n)

    @classmethod
    def over(cls, vec: np.ndarray) -> SplitView:
        """View the two halves of an existing 1-D array in place."""
        n = vec.shape[0]
        check_step_length(n)
        half = n >> 1
        return cls(n, vec[:half], vec[half:])

    @property
    def half(self) -> int:
        return self.n >> 1

    @property
    def low(self) -> np.ndarray:
        if self._low is None:
            raise ValueError("low half is not set")
        return self._low

    @property
    def high(self) -> np.ndarray:
        if self._high is None:
            raise ValueError("high half is not set")
        return self._high

    @property
    def has_low(self) -> bool:
        return self._low is not None

    @property
    def has_high(self) -> bool:
        return self._high is not None

    @property
    def is_complete(self) -> bool:
        return self._low is not None and self._high is not None

    def _check_half(self, arr: np.ndarray) -> None:
        if arr.ndim != 1 or arr.shape[0] != self.half:
            raise ValueError(
                f"half array must have shape ({self.half},), got {arr.shape}"
            )

    def set_low(self, arr: np.ndarray, ref: TensorRef | None = None) -> None:
        self._check_half(arr)
        self._low = arr
        self.low_ref = ref

    def set_high(self, arr: np.ndarray, ref: TensorRef | None = None) -> None:
        self._check_half(arr)
        self._high = arr
        self.high_ref = ref

    def get(self, i: int) -> int | float:
        which, j = locate(i, self.n)
        arr = self.low if which == "low" else self.high
        return arr[j].item()

    def set(self, i: int, value: int | float) -> None:
        which, j = locate(i, self.n)
        arr = self.low if which == "low" else self.high
        arr[j] = value

    def values(self) -> np.ndarray:
        """Copy of the logical sequence (low half followed by high half)."""
        return np.concatenate([self.low, self.high])

    def assign(self, values: np.ndarray) -> None:
        """Write a full-length sequence back through the two halves."""
        if values.shape != (self.n,):
            raise ValueError(f"expected shape ({self.n},), got {values.shape}")
        self.low[:] = values[: self.half]
        self.high[:] = values[self.half :]

    def __len__(self) -> int:
        return self.n

    def __repr__(self) -> str:
        return (
            f"SplitView(n={self.n}, low={'set' if self.has_low else 'unset'}, "
            f"high={'set' if self.has_high else 'unset'})"
        )
