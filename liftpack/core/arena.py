"""Arena allocator and TensorRef for bulk-released memory.

The Arena hands out memory from a list of byte blocks with a bump pointer.
Individual allocations are never freed; the whole arena is released at once
with ``reset()``. TensorRefs are lightweight handles (block, offset, shape,
dtype) pointing into the arena, so packet tree nodes and split views refer to
their data without owning it.

Key Features:
- Growable: a new block is appended when the current one is full
- Aligned allocation: Respects dtype alignment requirements
- Generation counter: Detects stale TensorRefs after arena reset
- Subrefs: Create views into existing allocations (the two halves of a
  split view share one allocation)

Example:
    >>> arena = Arena(block_bytes=1024)
    >>> ref = arena.alloc_tensor((16,), np.int64)
    >>> arr = arena.view(ref)
    >>> arr[:] = 1  # Modify in-place
    >>> arena.reset()  # Release everything
    >>> # arena.view(ref)  # Would raise ValueError: stale ref
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np


@dataclass(frozen=True)
class TensorRef:
    """Lightweight handle pointing to tensor data in an Arena.

    Attributes:
        block: Index of the arena block holding the data
        offset: Byte offset into the block
        shape: Tensor dimensions
        dtype: NumPy data type
        strides: Byte strides for each dimension
        generation: Arena generation counter (for staleness detection)
    """

    block: int
    offset: int
    shape: tuple[int, ...]
    dtype: np.dtype[Any]
    strides: tuple[int, ...]
    generation: int

    def __post_init__(self) -> None:
        """Validate TensorRef fields."""
        if self.block < 0:
            raise ValueError(f"block must be non-negative, got {self.block}")
        if self.offset < 0:
            raise ValueError(f"offset must be non-negative, got {self.offset}")
        if len(self.shape) != len(self.strides):
            raise ValueError(
                f"shape and strides must have same length: "
                f"shape={self.shape}, strides={self.strides}"
            )
        if self.generation < 0:
            raise ValueError(f"generation must be non-negative, got {self.generation}")

    @property
    def ndim(self) -> int:
        """Number of dimensions."""
        return len(self.shape)

    @property
    def size(self) -> int:
        """Total number of elements."""
        return int(np.prod(self.shape))

    @property
    def nbytes(self) -> int:
        """Byte span from the first to the last element."""
        if self.size == 0:
            return 0
        last_offset = sum((s - 1) * st for s, st in zip(self.shape, self.strides))
        return last_offset + self.dtype.itemsize

    def subref(self, slices: tuple[slice | int, ...]) -> TensorRef:
        """Create a view into this TensorRef.

        Args:
            slices: Tuple of slices or integers for indexing

        Returns:
            New TensorRef pointing to the sliced region

        Example:
            >>> ref = arena.alloc_tensor((8,), np.int64)
            >>> low = ref.subref((slice(0, 4),))
            >>> high = ref.subref((slice(4, 8),))
        """
        normalized: list[slice | int] = []
        for s in slices:
            if isinstance(s, (int, slice)):
                normalized.append(s)
            else:
                raise TypeError(f"Invalid slice type: {type(s)}")

        while len(normalized) < len(self.shape):
            normalized.append(slice(None))

        new_offset = self.offset
        new_shape: list[int] = []
        new_strides: list[int] = []

        for i, (s, size, stride) in enumerate(zip(normalized, self.shape, self.strides)):
            if isinstance(s, int):
                if s < 0:
                    s = size + s
                if not (0 <= s < size):
                    raise IndexError(f"Index {s} out of bounds for dimension {i} with size {size}")
                new_offset += s * stride
            else:
                start, stop, step = s.indices(size)
                if step != 1:
                    raise NotImplementedError("Strided slices not supported")
                new_shape.append(max(stop - start, 0))
                new_strides.append(stride)
                new_offset += start * stride

        return TensorRef(
            block=self.block,
            offset=new_offset,
            shape=tuple(new_shape),
            dtype=self.dtype,
            strides=tuple(new_strides),
            generation=self.generation,
        )


class Arena:
    """Growable block allocator with bump allocation strategy.

    The Arena owns a list of bytearray blocks and allocates tensors
    sequentially from the last one. When a request does not fit, a new
    block is appended (at least ``block_bytes`` long, larger if the request
    needs it). All allocations are aligned to dtype requirements.

    Attributes:
        block_bytes: Default size of each new block
        offset: Bump pointer within the current block
        generation: Incremented on reset() to invalidate old TensorRefs

    Example:
        >>> arena = Arena(block_bytes=4096)
        >>> ref1 = arena.alloc_tensor((10,), np.int64)
        >>> ref2 = arena.alloc_tensor((5,), np.float64)
        >>> print(f"Allocated {arena.allocated} bytes in {arena.num_blocks} blocks")
    """

    def __init__(self, block_bytes: int = 1 << 20):
        """Create arena with the given block size.

        Args:
            block_bytes: Size in bytes of each block
        """
        if block_bytes <= 0:
            raise ValueError(f"block_bytes must be positive, got {block_bytes}")

        self._block_bytes = block_bytes
        self._blocks: list[bytearray] = [bytearray(block_bytes)]
        self._offset = 0
        self._allocated = 0
        self._generation = 0

    @property
    def block_bytes(self) -> int:
        """Default block size in bytes."""
        return self._block_bytes

    @property
    def num_blocks(self) -> int:
        """Number of blocks currently held."""
        return len(self._blocks)

    @property
    def offset(self) -> int:
        """Current allocation offset within the last block."""
        return self._offset

    @property
    def allocated(self) -> int:
        """Payload bytes handed out since the last reset."""
        return self._allocated

    @property
    def generation(self) -> int:
        """Current generation counter."""
        return self._generation

    @property
    def available(self) -> int:
        """Bytes left in the current block."""
        return len(self._blocks[-1]) - self._offset

    def reset(self) -> None:
        """Release every allocation at once. Invalidates all existing TensorRefs.

        After reset, attempting to view old TensorRefs will raise ValueError.
        Only the first block is kept for reuse.
        """
        del self._blocks[1:]
        if len(self._blocks[0]) != self._block_bytes:
            self._blocks[0] = bytearray(self._block_bytes)
        self._offset = 0
        self._allocated = 0
        self._generation += 1

    def alloc_tensor(
        self,
        shape: tuple[int, ...],
        dtype: np.dtype[Any] | type | str,
    ) -> TensorRef:
        """Allocate a tensor in the arena.

        Args:
            shape: Tensor dimensions
            dtype: NumPy data type

        Returns:
            TensorRef handle to the allocated tensor
        """
        dt = np.dtype(dtype)
        shape = tuple(int(s) for s in shape)
        if any(s < 0 for s in shape):
            raise ValueError(f"shape must be non-negative, got {shape}")

        size = int(np.prod(shape))
        nbytes = size * dt.itemsize

        alignment = dt.alignment
        aligned_offset = (self._offset + alignment - 1) // alignment * alignment

        if aligned_offset + nbytes > len(self._blocks[-1]):
            self._blocks.append(bytearray(max(self._block_bytes, nbytes)))
            aligned_offset = 0

        strides = []
        stride = dt.itemsize
        for dim_size in reversed(shape):
            strides.append(stride)
            stride *= dim_size
        strides.reverse()

        ref = TensorRef(
            block=len(self._blocks) - 1,
            offset=aligned_offset,
            shape=shape,
            dtype=dt,
            strides=tuple(strides),
            generation=self._generation,
        )

        self._offset = aligned_offset + nbytes
        self._allocated += nbytes

        return ref

    def view(self, ref: TensorRef) -> np.ndarray:
        """Get a NumPy array view of a TensorRef.

        Args:
            ref: TensorRef to view

        Returns:
            NumPy array backed by arena memory (zero-copy)

        Raises:
            ValueError: If TensorRef is stale (from previous generation)
        """
        if ref.generation != self._generation:
            raise ValueError(
                f"Stale TensorRef: arena was reset (current generation {self._generation}, "
                f"ref is from generation {ref.generation})"
            )
        if ref.block >= len(self._blocks):
            raise ValueError(f"TensorRef block {ref.block} does not exist")

        buffer = self._blocks[ref.block]
        if ref.offset + ref.nbytes > len(buffer):
            raise ValueError(
                f"TensorRef out of bounds: offset={ref.offset}, nbytes={ref.nbytes}, "
                f"block size={len(buffer)}"
            )

        return np.ndarray(
            shape=ref.shape,
            dtype=ref.dtype,
            buffer=buffer,
            offset=ref.offset,
            strides=ref.strides,
        )

    def copy_tensor(self, arr: np.ndarray) -> TensorRef:
        """Allocate tensor and copy data from array.

        Args:
            arr: NumPy array to copy

        Returns:
            TensorRef pointing to the copied data
        """
        arr = np.asarray(arr)
        ref = self.alloc_tensor(arr.shape, arr.dtype)
        self.view(ref)[...] = arr
        return ref

    def __repr__(self) -> str:
        return (
            f"Arena(blocks={len(self._blocks)}, allocated={self._allocated}, "
            f"generation={self._generation}, available={self.available})"
        )
