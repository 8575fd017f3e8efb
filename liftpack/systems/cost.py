"""Cost functions for the wavelet packet best basis.

A cost function maps the data of one packet tree node to a scalar. The
best basis algorithm compares the cost of a node with the summed cost of
its children, so the function should be additive over disjoint slices.
Cost functions are described in chapter 8 of "Ripples in Mathematics" by
Jensen and la Cour-Harbo.

Every node is annotated, the root included, since the original data may
itself be the cheapest representation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

import numpy as np

from liftpack.components.packet import PacketTree
from liftpack.core.arena import Arena
from liftpack.core.system import System
from liftpack.systems.metrics import vector_width

if TYPE_CHECKING:
    from liftpack.core.world import World


class CostFunction(ABC):
    """Single-method interface: node data -> scalar cost."""

    name = "cost"

    @abstractmethod
    def __call__(self, data: np.ndarray) -> int | float:
        """Return the cost of representing ``data``."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class BitWidthCost(CostFunction):
    """Total number of bits (sign + magnitude) needed for integer data.

    Used for lossless compression of integer trees.
    """

    name = "width"

    def __call__(self, data: np.ndarray) -> int:
        return vector_width(data)


class ShannonCost(CostFunction):
    """Modified Shannon entropy: -sum(a^2 * ln(a^2)) over nonzero elements.

    See section 8.3.2 of "Ripples in Mathematics".
    """

    name = "shannon"

    def __call__(self, data: np.ndarray) -> float:
        values = np.asarray(data, dtype=np.float64)
        squares = values[values != 0.0] ** 2
        return float(-np.sum(squares * np.log(squares)))


class ThresholdCost(CostFunction):
    """Number of elements whose magnitude is greater than a threshold."""

    name = "threshold"

    def __init__(self, threshold: float) -> None:
        if threshold < 0:
            raise ValueError(f"threshold must be non-negative, got {threshold}")
        self.threshold = threshold

    def __call__(self, data: np.ndarray) -> int:
        return int(np.count_nonzero(np.abs(data) > self.threshold))

    def __repr__(self) -> str:
        return f"ThresholdCost(threshold={self.threshold})"


def make_cost(name: str, threshold: float = 0.0) -> CostFunction:
    """Build a cost function from its name ('width', 'shannon', 'threshold')."""
    if name == BitWidthCost.name:
        return BitWidthCost()
    if name == ShannonCost.name:
        return ShannonCost()
    if name == ThresholdCost.name:
        return ThresholdCost(threshold)
    raise ValueError(f"Unknown cost function '{name}'")


def annotate_costs(tree: PacketTree, arena: Arena, cost_fn: CostFunction) -> None:
    """Store cost_fn(node data) on every node, top down (pre-order).

    Real trees always store float costs; integer trees keep whatever the
    cost function returns (an int for the width and threshold costs).
    """
    integer = np.issubdtype(tree.root.data.dtype, np.integer)

    def traverse(index: int | None) -> None:
        if index is None:
            return
        node = tree.node(index)
        cost = cost_fn(arena.view(node.data))
        node.cost = cost if integer else float(cost)
        traverse(node.left)
        traverse(node.right)

    traverse(PacketTree.ROOT)


class CostAnnotate(System):
    """Annotate each entity's packet tree with a cost function.

    Forward mode: PacketTree -> PacketTree (costs filled in place)
    """

    def __init__(self, cost: CostFunction) -> None:
        super().__init__(mode="forward")
        self.cost = cost

    def required_components(self) -> list[type]:
        return [PacketTree]

    def produced_components(self) -> list[type]:
        return [PacketTree]

    def run(self, world: World, eids: list[int]) -> None:
        for eid in eids:
            tree = world.get_component(eid, PacketTree)
            annotate_costs(tree, world.arena, self.cost)
            world.metadata[eid]["cost_function"] = self.cost.name
            world.metadata[eid]["root_cost"] = tree.root.cost

    def __repr__(self) -> str:
        return f"CostAnnotate(cost={self.cost!r})"
