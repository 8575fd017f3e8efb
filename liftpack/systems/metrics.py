"""Bit width metrics.

The width of an integer is the number of bits needed for its magnitude in
binary plus one sign bit; zero takes a single bit. The width of a vector is
the sum of its element widths. This is a lower bound for a simple
fixed-width encoding and is used to compare transforms, not to encode.

Metrics store results in World metadata rather than creating components.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from liftpack.components.packet import BestBasis, PacketTree
from liftpack.components.signal import Signal
from liftpack.core.arena import Arena
from liftpack.core.system import System

if TYPE_CHECKING:
    from liftpack.core.world import World


def value_width(value: int) -> int:
    """Sign bit plus minimal magnitude width of one integer."""
    return 1 + abs(int(value)).bit_length()


def vector_width(values: np.ndarray) -> int:
    """Summed width of every element of an integer vector."""
    arr = np.asarray(values)
    if not np.issubdtype(arr.dtype, np.integer):
        raise TypeError(f"bit width needs integer data, got {arr.dtype}")
    return sum(1 + abs(v).bit_length() for v in arr.tolist())


def packet_width(arena: Arena, tree: PacketTree, basis: BestBasis) -> int:
    """Summed width of the best basis node data.

    This ignores the cost of describing the basis itself (node lengths and
    positions), so it is a lower bound.
    """
    return sum(vector_width(arena.view(tree.node(i).data)) for i in basis.indices)


class MetricBitWidth(System):
    """Compute the bit width of a signal-like component or a best basis.

    Stores result in world.metadata[eid][key].
    """

    def __init__(self, component: type = Signal, key: str = "bit_width") -> None:
        """Initialize bit width metric.

        Args:
            component: Component type to measure. Components with a ``data``
                TensorRef are measured directly; BestBasis is measured over
                its nodes (the entity must also hold the PacketTree).
            key: Metadata key for the result
        """
        super().__init__(mode="forward")
        self.component = component
        self.key = key

    def required_components(self) -> list[type]:
        if self.component is BestBasis:
            return [PacketTree, BestBasis]
        return [self.component]

    def produced_components(self) -> list[type]:
        return []

    def run(self, world: World, eids: list[int]) -> None:
        for eid in eids:
            if self.component is BestBasis:
                tree = world.get_component(eid, PacketTree)
                basis = world.get_component(eid, BestBasis)
                width = packet_width(world.arena, tree, basis)
            else:
                comp = world.get_component(eid, self.component)
                width = vector_width(world.arena.view(comp.data))
            world.metadata[eid][self.key] = width

    def __repr__(self) -> str:
        return f"MetricBitWidth(component={self.component.__name__}, key={self.key})"
