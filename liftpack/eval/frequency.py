"""Time/frequency analysis with frequency ordered packet trees.

A level basis is a horizontal slice through the packet tree. Level 0 is the
root; for 1024 samples level 5 has 32 nodes of 32 values each, a square
time/frequency matrix. In a frequency ordered tree the left most node holds
the lowest frequency band, so row y of the matrix is frequency band y and
column x is time interval x.

Magnitudes are plotted as ln(1 + v^2), following "Ripples in Mathematics"
by Jensen and la Cour-Harbo.
"""

from __future__ import annotations

from collections.abc import Iterator

import numpy as np

from liftpack.components.packet import PacketTree
from liftpack.core.arena import Arena


def level_basis(tree: PacketTree, level: int) -> list[int]:
    """Node indices at ``level``, left to right."""
    if not 0 <= level <= tree.depth:
        raise ValueError(f"level must be in [0, {tree.depth}], got {level}")
    found: list[int] = []

    def find(index: int | None, current: int) -> None:
        if index is None:
            return
        if current == level:
            found.append(index)
            return
        node = tree.node(index)
        find(node.left, current + 1)
        find(node.right, current + 1)

    find(PacketTree.ROOT, 0)
    return found


def level_matrix(arena: Arena, tree: PacketTree, level: int) -> np.ndarray:
    """Stack the level basis node data into a (frequency, time) matrix."""
    rows = [arena.view(tree.node(i).data) for i in level_basis(tree, level)]
    return np.vstack(rows).astype(np.float64)


def surface(matrix: np.ndarray) -> np.ndarray:
    """Plot magnitude ln(1 + v^2) of every matrix element."""
    m = np.asarray(matrix, dtype=np.float64)
    return np.log1p(m * m)


def surface_points(
    matrix: np.ndarray, frequency_on_x: bool = True
) -> Iterator[tuple[int, int, float]]:
    """Yield ``(x, y, z)`` gnuplot surface points, row by row.

    Plot frequency on x for signals of constant frequency so that the ridge
    does not hide the surface, and time on x for changing frequencies such
    as a chirp.
    """
    z = surface(matrix)
    for freq in range(z.shape[0]):
        for time in range(z.shape[1]):
            if frequency_on_x:
                yield freq, time, float(z[freq, time])
            else:
                yield time, freq, float(z[freq, time])
