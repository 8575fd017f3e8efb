"""Inverse wavelet packet transform.

The best basis list is consumed in depth-first, left to right order by a
stack of SplitView containers. Each container is twice the length of the
halves it is waiting for and the left half is always filled first:

- on an empty stack a new level is pushed with the element as its left half;
- if the top of stack has the length of two elements, the element becomes its
  right half and the container is reduced;
- if the top of stack is longer, a new level is pushed.

Reducing applies an inverse transform step to a complete container. The
result either completes the container below it (and that one is reduced in
turn) or starts a new level of twice its length. When the list is
exhausted a single container remains whose left half is the reconstructed
signal.

This only inverts trees built with the standard filter placement. Frequency
ordered trees are inverted with ``invert_subtree``, which knows which nodes
were expanded with the reversed step.
"""

from __future__ import annotations

import logging
from collections.abc import Collection, Sequence
from typing import TYPE_CHECKING

import numpy as np

from liftpack.components.packet import BestBasis, PacketTree
from liftpack.components.signal import Reconstruction
from liftpack.core.arena import Arena, TensorRef
from liftpack.core.split_view import SplitView
from liftpack.core.system import System
from liftpack.lifting import LiftingScheme
from liftpack.systems.packet import resolve_wavelet

if TYPE_CHECKING:
    from liftpack.core.world import World

logger = logging.getLogger(__name__)


class InversePacketStack:
    """Stack machine that rebuilds a signal from a best basis list.

    The basis data is never modified: every inverse step works on a fresh
    arena copy of the two halves.
    """

    def __init__(self, arena: Arena, wavelet: LiftingScheme) -> None:
        self.arena = arena
        self.wavelet = wavelet
        self.stack: list[SplitView] = []

    def new_level(self, elem: np.ndarray) -> None:
        """Push a container of twice the element length, element on the left."""
        view = SplitView.pending(elem.shape[0] * 2)
        view.set_low(elem)
        self.stack.append(view)

    def add_elem(self, elem: np.ndarray) -> None:
        """Feed the next best basis element to the machine."""
        n = elem.shape[0] * 2
        if not self.stack:
            self.new_level(elem)
            return

        tos = self.stack[-1]
        if tos.n == n:
            assert not tos.has_high, "top of stack already has a right half"
            tos.set_high(elem)
            self.reduce()
        elif tos.n > n:
            self.new_level(elem)
        else:
            raise AssertionError(
                f"element of length {elem.shape[0]} does not fit top of stack "
                f"of length {tos.n}"
            )

    def reduce(self) -> None:
        """Invert the complete top of stack and merge the result downward."""
        while True:
            tos = self.stack.pop()
            assert tos.is_complete, "reduce needs both halves"
            n = tos.n

            ref = self.arena.alloc_tensor((n,), tos.low.dtype)
            result = self.arena.view(ref)
            result[: tos.half] = tos.low
            result[tos.half :] = tos.high
            self.wavelet.inverse_step(SplitView.over(result))

            if self.stack and self.stack[-1].n == n * 2:
                self.stack[-1].set_high(result)
                continue

            if self.stack:
                assert self.stack[-1].n > n * 2, (
                    f"top of stack of length {self.stack[-1].n} is shorter than "
                    f"the reduced result of length {n}"
                )
            self.new_level(result)
            return

    def result(self) -> np.ndarray:
        """The reconstructed signal once every element has been added."""
        assert len(self.stack) == 1, (
            f"malformed best basis list: {len(self.stack)} containers left on the stack"
        )
        tos = self.stack[0]
        assert tos.has_low and not tos.has_high, (
            "malformed best basis list: final container is not a lone left half"
        )
        return tos.low


def inverse_packet_transform(
    arena: Arena,
    wavelet: str | LiftingScheme,
    elements: Sequence[TensorRef | np.ndarray],
) -> np.ndarray:
    """Rebuild a signal from best basis data.

    Args:
        arena: Arena for intermediate containers (and for resolving refs)
        wavelet: Wavelet the packet tree was built with
        elements: Best basis node data in depth-first, left to right order

    Returns:
        Reconstructed signal (a view into the arena)

    Raises:
        AssertionError: If the element lengths do not describe a basis
    """
    if not elements:
        raise ValueError("best basis list is empty")
    machine = InversePacketStack(arena, resolve_wavelet(wavelet))
    for elem in elements:
        data = arena.view(elem) if isinstance(elem, TensorRef) else np.asarray(elem)
        machine.add_elem(data)
    return machine.result()


def invert_subtree(
    tree: PacketTree,
    arena: Arena,
    wavelet: str | LiftingScheme,
    index: int = PacketTree.ROOT,
    basis: Collection[int] | None = None,
) -> np.ndarray:
    """Rebuild the data of node ``index`` from the selected nodes below it.

    A selected node or a leaf contributes its own data. Otherwise both
    children are rebuilt and joined by the inverse of the step that produced
    them, the reversed step where the node was expanded with it.

    Nodes are selected by ``basis`` (node indices) when given, by their
    marks otherwise.
    """
    scheme = resolve_wavelet(wavelet)
    node = tree.node(index)
    selected = node.mark if basis is None else index in basis
    if selected or node.is_leaf:
        return arena.view(node.data)

    assert node.left is not None and node.right is not None, (
        f"packet node {index} has a single child"
    )
    left = invert_subtree(tree, arena, scheme, node.left, basis)
    right = invert_subtree(tree, arena, scheme, node.right, basis)

    ref = arena.alloc_tensor((node.length,), left.dtype)
    result = arena.view(ref)
    half = node.length >> 1
    result[:half] = left
    result[half:] = right
    view = SplitView.over(result)
    if node.reversed_step:
        scheme.inverse_step_rev(view)
    else:
        scheme.inverse_step(view)
    return result


class InversePacketTransform(System):
    """Rebuild each entity's signal from its packet tree and best basis.

    Inverse mode: PacketTree + BestBasis -> Reconstruction

    The wavelet is the one recorded on the tree. Frequency ordered trees
    are inverted by walking the tree down to the basis nodes, all others by
    the basis stack machine.
    """

    def __init__(self) -> None:
        super().__init__(mode="inverse")

    def required_components(self) -> list[type]:
        return [PacketTree, BestBasis]

    def produced_components(self) -> list[type]:
        return [Reconstruction]

    def run(self, world: World, eids: list[int]) -> None:
        for eid in eids:
            tree = world.get_component(eid, PacketTree)
            basis = world.get_component(eid, BestBasis)
            if tree.frequency:
                data = invert_subtree(
                    tree, world.arena, tree.wavelet, basis=set(basis.indices)
                )
            else:
                refs = [tree.node(i).data for i in basis.indices]
                data = inverse_packet_transform(world.arena, tree.wavelet, refs)
            world.add_component(eid, Reconstruction(data=world.arena.copy_tensor(data)))
            logger.debug(
                "entity %d: rebuilt %d samples from %d basis nodes",
                eid, data.shape[0], len(basis.indices),
            )
