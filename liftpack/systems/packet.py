"""Wavelet packet tree construction.

A wavelet packet tree applies a lifting step not only to the low pass half
(as the ordinary wavelet transform does) but to both halves at every level.
For an input of N = 2^k elements the tree has k + 1 levels and 2N - 1
nodes; every level is a complete representation of the signal.

In a frequency ordered tree the right child of every node is expanded with
the reversed filter placement, so that a horizontal slice through the tree
lists the frequency bands in increasing order (Jensen and la Cour-Harbo,
"Ripples in Mathematics", figure 9.14).
"""

from __future__ import annotations

import logging
from collections import deque
from typing import TYPE_CHECKING

import numpy as np

from liftpack.components.packet import NodeKind, PacketNode, PacketTree
from liftpack.components.signal import Signal
from liftpack.core.arena import Arena
from liftpack.core.split_view import SplitView, check_step_length
from liftpack.core.system import System
from liftpack.lifting import LiftingScheme, get_wavelet

if TYPE_CHECKING:
    from liftpack.core.world import World

logger = logging.getLogger(__name__)


def resolve_wavelet(wavelet: str | LiftingScheme) -> LiftingScheme:
    """Accept a registry name or a wavelet instance."""
    if isinstance(wavelet, LiftingScheme):
        return wavelet
    return get_wavelet(wavelet)


def build_level(
    tree: PacketTree,
    arena: Arena,
    wavelet: LiftingScheme,
    index: int,
    frequency: bool,
    reverse: bool,
) -> None:
    """Expand node ``index`` with one transform step and recurse.

    Args:
        tree: Tree whose node pool receives the children
        arena: Arena for the step containers
        wavelet: Lifting wavelet used for the step
        index: Node to expand
        frequency: Build a frequency ordered tree
        reverse: Use the reversed filter placement for this node
    """
    node = tree.node(index)
    if node.length <= 1:
        return

    view = SplitView.from_data(arena, node.data)
    if reverse:
        wavelet.forward_step_rev(view)
    else:
        wavelet.forward_step(view)

    assert view.low_ref is not None and view.high_ref is not None
    half = node.length >> 1
    left = PacketNode(
        data=view.low_ref,
        length=half,
        kind=NodeKind.LOW_PASS,
        level=node.level + 1,
        mark=True,
    )
    right = PacketNode(
        data=view.high_ref,
        length=half,
        kind=NodeKind.HIGH_PASS,
        level=node.level + 1,
        mark=True,
    )

    node.mark = False
    node.reversed_step = reverse
    node.left = tree.add(left)
    node.right = tree.add(right)

    # The left child always uses the standard filter placement
    build_level(tree, arena, wavelet, node.left, frequency, False)
    build_level(tree, arena, wavelet, node.right, frequency, frequency)


def build_packet_tree(
    arena: Arena,
    values: np.ndarray,
    wavelet: str | LiftingScheme,
    frequency: bool = False,
) -> PacketTree:
    """Build a wavelet packet tree from a power-of-two length vector.

    The root holds a copy of ``values`` in the arena.

    Args:
        arena: Arena for every node buffer
        values: Input signal (int64 for integer wavelets, float64 otherwise)
        wavelet: Wavelet name or instance
        frequency: Build a frequency ordered tree (needs a wavelet that
            supports the reversed filter placement)

    Returns:
        PacketTree with 2N - 1 nodes

    Raises:
        ValueError: If the length is not a power of two >= 2, or a frequency
            tree is requested from a wavelet without reversed placement
    """
    scheme = resolve_wavelet(wavelet)
    values = np.asarray(values)
    if values.ndim != 1:
        raise ValueError(f"Expected 1-D signal, got shape {values.shape}")
    check_step_length(values.shape[0])
    if frequency and not scheme.supports_reverse:
        raise ValueError(
            f"Wavelet '{scheme.name}' cannot build a frequency ordered tree"
        )

    root = PacketNode(
        data=arena.copy_tensor(values),
        length=values.shape[0],
        kind=NodeKind.ORIGINAL_DATA,
        mark=True,
    )
    tree = PacketTree(wavelet=scheme.name, frequency=frequency)
    tree.add(root)
    build_level(tree, arena, scheme, PacketTree.ROOT, frequency, False)
    return tree


def tree_levels(tree: PacketTree) -> list[list[int]]:
    """Node indices level by level, each level left to right (breadth first)."""
    levels: list[list[int]] = []
    queue: deque[int] = deque([PacketTree.ROOT])
    while queue:
        index = queue.popleft()
        node = tree.node(index)
        if node.level == len(levels):
            levels.append([])
        levels[node.level].append(index)
        if node.left is not None:
            queue.append(node.left)
        if node.right is not None:
            queue.append(node.right)
    return levels


def node_values(arena: Arena, tree: PacketTree, index: int) -> np.ndarray:
    """Arena view of a node's data."""
    return arena.view(tree.node(index).data)


class PacketTransform(System):
    """Build a wavelet packet tree for each entity's signal.

    Forward mode: Signal -> PacketTree
    """

    def __init__(
        self,
        wavelet: str | LiftingScheme = "haar",
        frequency: bool = False,
    ) -> None:
        """Initialize packet transform system.

        Args:
            wavelet: Wavelet name or instance used for every step
            frequency: Build frequency ordered trees
        """
        super().__init__(mode="forward")
        self.wavelet = resolve_wavelet(wavelet)
        if frequency and not self.wavelet.supports_reverse:
            raise ValueError(
                f"Wavelet '{self.wavelet.name}' cannot build a frequency ordered tree"
            )
        self.frequency = frequency

    def required_components(self) -> list[type]:
        return [Signal]

    def produced_components(self) -> list[type]:
        return [PacketTree]

    def run(self, world: World, eids: list[int]) -> None:
        for eid in eids:
            signal = world.get_component(eid, Signal)
            values = world.arena.view(signal.data)
            tree = build_packet_tree(world.arena, values, self.wavelet, self.frequency)
            world.add_component(eid, tree)
            logger.debug(
                "entity %d: %s packet tree with %d nodes over %d samples",
                eid, tree.wavelet, len(tree), values.shape[0],
            )

    def __repr__(self) -> str:
        return f"PacketTransform(wavelet={self.wavelet.name}, frequency={self.frequency})"
