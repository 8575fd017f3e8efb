"""Tests for wavelet packet tree construction."""

from __future__ import annotations

import numpy as np
import pytest

from liftpack.components.packet import NodeKind, PacketTree
from liftpack.core.arena import Arena
from liftpack.core.world import World
from liftpack.systems.packet import (
    PacketTransform,
    build_packet_tree,
    node_values,
    tree_levels,
)


class TestBuildPacketTree:
    """Tests for build_packet_tree."""

    @pytest.mark.parametrize("k", [1, 2, 3, 6])
    def test_shape(self, k: int) -> None:
        """N = 2^k gives k + 1 levels and 2N - 1 nodes."""
        n = 1 << k
        arena = Arena()
        tree = build_packet_tree(arena, np.arange(n, dtype=np.int64), "haar")
        levels = tree_levels(tree)

        assert len(tree) == 2 * n - 1
        assert tree.depth == k
        assert len(levels) == k + 1
        for level, indices in enumerate(levels):
            assert len(indices) == 1 << level
            assert all(tree.node(i).length == n >> level for i in indices)

    def test_haar_values(self) -> None:
        arena = Arena()
        tree = build_packet_tree(arena, np.array([4, 6, 10, 12], dtype=np.int64), "haar")
        root = tree.root
        assert root.kind is NodeKind.ORIGINAL_DATA
        assert root.left is not None and root.right is not None

        assert node_values(arena, tree, root.left).tolist() == [5, 11]
        assert node_values(arena, tree, root.right).tolist() == [2, 2]
        assert tree.node(root.left).kind is NodeKind.LOW_PASS
        assert tree.node(root.right).kind is NodeKind.HIGH_PASS

        low = tree.node(root.left)
        assert low.left is not None and low.right is not None
        assert node_values(arena, tree, low.left).tolist() == [8]
        assert node_values(arena, tree, low.right).tolist() == [6]

    def test_root_is_a_copy(self) -> None:
        arena = Arena()
        values = np.array([4, 6, 10, 12], dtype=np.int64)
        tree = build_packet_tree(arena, values, "line")
        values[0] = 0
        assert node_values(arena, tree, PacketTree.ROOT).tolist() == [4, 6, 10, 12]

    def test_marks_after_build(self) -> None:
        """Expanded nodes are unmarked, leaves are marked."""
        arena = Arena()
        tree = build_packet_tree(arena, np.arange(16, dtype=np.int64), "ts")
        for node in tree.nodes:
            assert node.mark == node.is_leaf
            assert node.level <= 4

    def test_levels_are_complete_representations(self) -> None:
        """Every level holds as many values as the signal."""
        arena = Arena()
        tree = build_packet_tree(arena, np.arange(32, dtype=np.int64), "line")
        for indices in tree_levels(tree):
            assert sum(tree.node(i).length for i in indices) == 32

    def test_invalid_length(self) -> None:
        with pytest.raises(ValueError, match="power of two"):
            build_packet_tree(Arena(), np.arange(12, dtype=np.int64), "haar")

    def test_invalid_ndim(self) -> None:
        with pytest.raises(ValueError, match="1-D"):
            build_packet_tree(Arena(), np.zeros((4, 4), dtype=np.int64), "haar")

    def test_frequency_needs_reversed_step(self) -> None:
        with pytest.raises(ValueError, match="frequency ordered"):
            build_packet_tree(Arena(), np.arange(8, dtype=np.int64), "haar", frequency=True)

    def test_frequency_tree_flags(self) -> None:
        """Right children are expanded with the reversed step."""
        arena = Arena()
        tree = build_packet_tree(
            arena, np.linspace(0.0, 1.0, 8), "haar_classic_freq", frequency=True
        )
        assert tree.frequency
        root = tree.root
        assert not root.reversed_step
        assert root.right is not None and root.left is not None
        assert tree.node(root.right).reversed_step
        assert not tree.node(root.left).reversed_step


class TestPacketTransform:
    def test_system(self) -> None:
        world = World()
        eid = world.spawn_signal(np.arange(8))
        tree = world.pipe(eid).to(PacketTransform("line")).out(PacketTree)
        assert tree.wavelet == "line"
        assert len(tree) == 15

    def test_components(self) -> None:
        from liftpack.components.signal import Signal

        system = PacketTransform()
        assert system.required_components() == [Signal]
        assert system.produced_components() == [PacketTree]
        assert system.mode == "forward"

    def test_invalid_frequency(self) -> None:
        with pytest.raises(ValueError, match="frequency ordered"):
            PacketTransform("line", frequency=True)
