"""Best basis selection for wavelet packet trees.

The best basis is the set of nodes that represents the whole signal with
minimal total cost. It is found bottom-up: a parent is kept when its own
cost is no larger than the best cost of its two children, otherwise the
children (or their best descendants) are kept and the parent takes their
summed cost. See section 8.2 of "Ripples in Mathematics".

The walk overwrites internal node costs, so annotate the tree again before
selecting with a different cost function.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from liftpack.components.packet import BestBasis, NodeKind, PacketTree
from liftpack.core.system import System

if TYPE_CHECKING:
    from liftpack.core.world import World

logger = logging.getLogger(__name__)


def best_basis_walk(tree: PacketTree, index: int = PacketTree.ROOT) -> int | float:
    """Mark the minimal cost nodes below ``index`` and return their cost."""
    node = tree.node(index)
    if node.is_leaf:
        return node.cost

    assert node.left is not None and node.right is not None, (
        f"packet node {index} has a single child"
    )
    children_cost = best_basis_walk(tree, node.left) + best_basis_walk(tree, node.right)
    if node.cost <= children_cost:
        node.mark = True
        tree.node(node.left).mark = False
        tree.node(node.right).mark = False
    else:
        node.cost = children_cost
    return node.cost


def clean_tree(tree: PacketTree, index: int = PacketTree.ROOT, removemark: bool = False) -> None:
    """Clear the marks of every node below a marked node."""
    node = tree.node(index)
    if removemark:
        node.mark = False
    elif node.mark:
        removemark = True
    if node.left is not None:
        clean_tree(tree, node.left, removemark)
    if node.right is not None:
        clean_tree(tree, node.right, removemark)


def best_basis_ok(tree: PacketTree) -> bool:
    """True if some node is marked and the original data is not."""
    if tree.root.kind is NodeKind.ORIGINAL_DATA and tree.root.mark:
        return False
    return any(node.mark for node in tree.nodes)


def collect_best_basis(tree: PacketTree) -> list[int]:
    """Marked node indices, depth first and left to right.

    The descent stops at a marked node, so this is the order in which the
    inverse packet transform consumes the basis.
    """
    indices: list[int] = []

    def walk(index: int | None) -> None:
        if index is None:
            return
        node = tree.node(index)
        if node.mark:
            indices.append(index)
            return
        walk(node.left)
        walk(node.right)

    walk(PacketTree.ROOT)
    return indices


def select_best_basis(tree: PacketTree) -> BestBasis:
    """Run the walk, tidy the marks and collect the basis."""
    # A fresh tree has the root and the children of every expanded node
    # marked; only the walk's decisions should remain.
    for node in tree.nodes:
        node.mark = node.is_leaf
    best_basis_walk(tree)
    clean_tree(tree)
    valid = best_basis_ok(tree)
    return BestBasis(indices=collect_best_basis(tree), valid=valid)


class BestBasisSelect(System):
    """Select the best basis of each entity's annotated packet tree.

    Forward mode: PacketTree -> BestBasis

    When the original data is cheaper than any transformed representation
    the basis is the root alone and ``BestBasis.valid`` is False.
    """

    def __init__(self) -> None:
        super().__init__(mode="forward")

    def required_components(self) -> list[type]:
        return [PacketTree]

    def produced_components(self) -> list[type]:
        return [BestBasis]

    def run(self, world: World, eids: list[int]) -> None:
        for eid in eids:
            tree = world.get_component(eid, PacketTree)
            basis = select_best_basis(tree)
            if not basis.valid:
                logger.warning(
                    "entity %d: no valid best basis, original data is cheapest", eid
                )
            world.add_component(eid, basis)
            world.metadata[eid]["best_basis_cost"] = tree.root.cost
            world.metadata[eid]["best_basis_nodes"] = len(basis.indices)
