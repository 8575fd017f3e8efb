"""Wavelet packet tree components."""

from __future__ import annotations

from enum import Enum
from typing import ClassVar

from pydantic import Field

from liftpack.components.signal import Component
from liftpack.core.arena import TensorRef


class NodeKind(str, Enum):
    """What a packet node's data is the result of."""

    ORIGINAL_DATA = "original"
    LOW_PASS = "low"
    HIGH_PASS = "high"


class PacketNode(Component):
    """One slice of the signal at one level of the packet tree.

    Attributes:
        data: TensorRef to the node data (borrowed from the arena)
        length: Number of elements (power of two)
        kind: Original data, low pass or high pass result
        level: Depth in the tree, 0 at the root
        cost: Cost function value (int for integer trees, float otherwise)
        mark: True if the node belongs to the current best basis
        left: Index of the low pass child in the tree's node pool
        right: Index of the high pass child in the tree's node pool
        reversed_step: True if the children were produced by the reversed
            filter step (frequency ordered trees)
    """

    data: TensorRef
    length: int = Field(ge=1)
    kind: NodeKind
    level: int = Field(default=0, ge=0)
    cost: int | float = 0
    mark: bool = False
    left: int | None = None
    right: int | None = None
    reversed_step: bool = False

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None


class PacketTree(Component):
    """Wavelet packet tree stored as a node pool.

    Children are referenced by index into ``nodes``; the root is index 0.

    Attributes:
        nodes: Node pool
        wavelet: Name of the lifting wavelet used to build the tree
        frequency: True for a frequency ordered tree
    """

    nodes: list[PacketNode] = Field(default_factory=list)
    wavelet: str
    frequency: bool = False

    ROOT: ClassVar[int] = 0

    @property
    def root(self) -> PacketNode:
        return self.nodes[self.ROOT]

    def node(self, index: int) -> PacketNode:
        return self.nodes[index]

    def add(self, node: PacketNode) -> int:
        """Append a node to the pool and return its index."""
        self.nodes.append(node)
        return len(self.nodes) - 1

    @property
    def depth(self) -> int:
        """Number of levels below the root."""
        return max((n.level for n in self.nodes), default=0)

    def __len__(self) -> int:
        return len(self.nodes)


class BestBasis(Component):
    """Best basis selected from a packet tree.

    Attributes:
        indices: Node indices in depth-first, left to right order
        valid: False if the root (original data) was selected or nothing
            was marked
    """

    indices: list[int] = Field(default_factory=list)
    valid: bool = True
