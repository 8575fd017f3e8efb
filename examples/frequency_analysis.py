#!/usr/bin/env python3
"""Print a time/frequency surface of a synthetic signal for gnuplot.

Builds a frequency ordered wavelet packet tree with the classic Haar
wavelet and prints ln(1 + v^2) over one level basis as ``x y z`` lines,
one block per row.
"""

from __future__ import annotations

import argparse

from liftpack.components.packet import PacketTree
from liftpack.core.world import World
from liftpack.eval import GENERATORS, level_matrix, surface_points
from liftpack.systems.packet import PacketTransform


def main() -> None:
    parser = argparse.ArgumentParser(description="Wavelet packet time/frequency surface.")
    parser.add_argument(
        "--signal",
        choices=sorted(GENERATORS),
        default="freq_mix",
        help="Synthetic signal (default: freq_mix)",
    )
    parser.add_argument(
        "-n",
        type=int,
        default=1024,
        help="Number of samples, a power of two (default: 1024)",
    )
    parser.add_argument(
        "--level",
        type=int,
        default=5,
        help="Tree level of the level basis (default: 5)",
    )
    parser.add_argument(
        "--time-on-x",
        action="store_true",
        help="Plot time on the x axis (better for chirps)",
    )
    args = parser.parse_args()

    _, values = GENERATORS[args.signal](args.n)

    world = World()
    entity = world.spawn_signal(values)
    tree = (
        world.pipe(entity)
        .to(PacketTransform("haar_classic_freq", frequency=True))
        .out(PacketTree)
    )

    matrix = level_matrix(world.arena, tree, args.level)
    row = None
    for x, y, z in surface_points(matrix, frequency_on_x=not args.time_on_x):
        if row is not None and x != row:
            print()
        row = x
        print(f" {x}  {y}  {z:7.4f}")
    print()


if __name__ == "__main__":
    main()
