"""High-level API for wavelet packet analysis.

Wraps the common pipelines in single calls. For more control build the
pipeline on a World directly.
"""

from __future__ import annotations

import numpy as np

from liftpack.components.packet import BestBasis, PacketTree
from liftpack.components.signal import Reconstruction
from liftpack.core.world import World
from liftpack.lifting import LiftingScheme
from liftpack.systems.best_basis import BestBasisSelect
from liftpack.systems.cost import CostAnnotate, CostFunction, make_cost
from liftpack.systems.inverse_packet import InversePacketTransform
from liftpack.systems.packet import PacketTransform


def _is_integer(values: np.ndarray) -> bool:
    return bool(np.issubdtype(np.asarray(values).dtype, np.integer))


def _default_wavelet(values: np.ndarray) -> str:
    return "line" if _is_integer(values) else "haar_classic"


def _default_cost(values: np.ndarray) -> CostFunction:
    return make_cost("width") if _is_integer(values) else make_cost("shannon")


def best_basis(
    values: np.ndarray,
    wavelet: str | LiftingScheme | None = None,
    cost: CostFunction | None = None,
    world: World | None = None,
) -> tuple[World, int]:
    """Build the packet tree of ``values`` and select its best basis.

    Args:
        values: Signal, power-of-two length
        wavelet: Wavelet name or instance (line for integers, haar_classic for reals)
        cost: Cost function (bit width for integers, Shannon for reals)
        world: World to use (a new one if None)

    Returns:
        (world, entity); the entity holds the PacketTree and BestBasis
    """
    world = world if world is not None else World()
    wavelet = wavelet if wavelet is not None else _default_wavelet(values)
    cost = cost if cost is not None else _default_cost(values)
    eid = world.spawn_signal(values)
    (
        world.pipe(eid)
        | PacketTransform(wavelet)
        | CostAnnotate(cost)
        | BestBasisSelect()
    ).execute()
    return world, eid


def basis_data(world: World, eid: int) -> list[np.ndarray]:
    """Copies of the best basis node data, in basis order."""
    tree = world.get_component(eid, PacketTree)
    basis = world.get_component(eid, BestBasis)
    return [world.arena.view(tree.node(i).data).copy() for i in basis.indices]


def packet_roundtrip(
    values: np.ndarray,
    wavelet: str | LiftingScheme | None = None,
    cost: CostFunction | None = None,
) -> np.ndarray:
    """Forward packet transform, best basis and inverse; returns a copy.

    For integer wavelets the result equals ``values`` exactly.

    Example:
        >>> packet_roundtrip(np.array([32, 10, 20, 38], dtype=np.int64)).tolist()
        [32, 10, 20, 38]
    """
    world, eid = best_basis(values, wavelet, cost)
    recon = world.pipe(eid).to(InversePacketTransform()).out(Reconstruction)
    return world.arena.view(recon.data).copy()
