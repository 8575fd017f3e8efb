"""Lifting scheme wavelet and wavelet packet transforms.

This package computes integer-to-integer wavelet packet transforms for
lossless compression analysis of time series, and real-valued frequency
ordered packet trees for time/frequency analysis, using:
- the Lifting Scheme (Haar, linear interpolation and TS wavelets)
- best basis selection with pluggable cost functions
- Entity-Component-System (ECS) pipelines
- Arena allocation for every tree node and transform buffer

Quick Start:
    >>> import numpy as np
    >>> from liftpack import packet_roundtrip
    >>>
    >>> values = np.array([32, 10, 20, 38, 37, 28, 38, 34], dtype=np.int64)
    >>> packet_roundtrip(values, wavelet='line').tolist()
    [32, 10, 20, 38, 37, 28, 38, 34]

For more control, use the fluent pipeline API:
    >>> from liftpack import World
    >>> from liftpack.systems.packet import PacketTransform
    >>> from liftpack.systems.cost import CostAnnotate, BitWidthCost
    >>> from liftpack.systems.best_basis import BestBasisSelect
    >>> from liftpack.components.packet import BestBasis
    >>>
    >>> world = World()
    >>> entity = world.spawn_signal(values)
    >>> basis = (
    ...     world.pipe(entity)
    ...     .to(PacketTransform('line'))
    ...     .to(CostAnnotate(BitWidthCost()))
    ...     .to(BestBasisSelect())
    ...     .out(BestBasis)
    ... )
"""

__version__ = "0.1.0"

from liftpack.api import basis_data, best_basis, packet_roundtrip
from liftpack.core.arena import Arena, TensorRef
from liftpack.core.world import World

__all__ = [
    "__version__",
    "basis_data",
    "best_basis",
    "packet_roundtrip",
    "World",
    "Arena",
    "TensorRef",
]
