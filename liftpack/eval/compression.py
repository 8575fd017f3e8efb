"""Lossless compression comparison.

For an integer signal, compare the number of bits needed for:

- the raw values;
- delta coding;
- the Haar, line and TS wavelet transforms;
- the wavelet packet best basis (line wavelet, bit width cost).

Every transform is inverted and checked against the input. Widths are lower
bounds; no bitstream is produced.
"""

from __future__ import annotations

import logging

import numpy as np
from pydantic import BaseModel, Field

from liftpack.components.packet import BestBasis
from liftpack.components.signal import Coefficients, Reconstruction
from liftpack.core.world import World
from liftpack.systems.best_basis import BestBasisSelect
from liftpack.systems.cost import CostFunction, CostAnnotate, make_cost
from liftpack.systems.delta import DeltaTransform
from liftpack.systems.inverse_packet import InversePacketTransform
from liftpack.systems.lifting import LiftingTransform
from liftpack.systems.metrics import MetricBitWidth
from liftpack.systems.packet import PacketTransform

logger = logging.getLogger(__name__)

WAVELET_COLUMNS = ("haar", "line", "ts")


class CompressionReport(BaseModel):
    """Bit widths of one signal under each transform.

    Attributes:
        name: Signal name (e.g. the equity symbol)
        length: Number of samples
        widths: Bit width per method ('raw', 'delta', 'haar', 'line', 'ts', 'packet')
        lossless: Round trip result per method
        basis_valid: Whether the packet best basis excludes the original data
        basis_nodes: Number of nodes in the packet best basis
    """

    name: str = ""
    length: int
    widths: dict[str, int] = Field(default_factory=dict)
    lossless: dict[str, bool] = Field(default_factory=dict)
    basis_valid: bool = True
    basis_nodes: int = 0

    def row(self) -> str:
        cols = ["raw", "delta", *WAVELET_COLUMNS, "packet"]
        return f"{self.name:>6} " + " ".join(f"{self.widths[c]:>7d}" for c in cols)


def _check(world: World, eid: int, original: np.ndarray, method: str, report: CompressionReport) -> None:
    rebuilt = world.arena.view(world.get_component(eid, Reconstruction).data)
    ok = bool(np.array_equal(rebuilt, original))
    if not ok:
        logger.error("%s: %s inverse does not reproduce the input", report.name, method)
    report.lossless[method] = ok
    world.remove_component(eid, Reconstruction)


def compare_compression(
    values: np.ndarray,
    name: str = "",
    packet_wavelet: str = "line",
    cost: CostFunction | None = None,
    arena_block_bytes: int = 1 << 20,
) -> CompressionReport:
    """Measure the bit width of ``values`` under every transform.

    Args:
        values: Integer signal, power-of-two length
        name: Label for the report
        packet_wavelet: Wavelet for the packet tree
        cost: Best basis cost function (bit width if None)
        arena_block_bytes: Arena block size for the scratch world

    Returns:
        CompressionReport with widths and round trip results
    """
    original = np.asarray(values)
    if not np.issubdtype(original.dtype, np.integer):
        raise TypeError(f"compression comparison needs integer data, got {original.dtype}")
    original = original.astype(np.int64)
    cost = cost if cost is not None else make_cost("width")

    world = World(arena_block_bytes=arena_block_bytes)
    report = CompressionReport(name=name, length=original.shape[0])

    eid = world.spawn_signal(original)
    world.pipe(eid).to(MetricBitWidth(key="raw")).execute()
    report.widths["raw"] = world.metadata[eid]["raw"]

    (
        world.pipe(eid)
        | DeltaTransform()
        | MetricBitWidth(Coefficients, key="delta")
        | DeltaTransform(mode="inverse")
    ).execute()
    report.widths["delta"] = world.metadata[eid]["delta"]
    _check(world, eid, original, "delta", report)

    for wavelet in WAVELET_COLUMNS:
        (
            world.pipe(eid)
            | LiftingTransform(wavelet)
            | MetricBitWidth(Coefficients, key=wavelet)
            | LiftingTransform(wavelet, mode="inverse")
        ).execute()
        report.widths[wavelet] = world.metadata[eid][wavelet]
        _check(world, eid, original, wavelet, report)

    (
        world.pipe(eid)
        | PacketTransform(packet_wavelet)
        | CostAnnotate(cost)
        | BestBasisSelect()
        | MetricBitWidth(BestBasis, key="packet")
        | InversePacketTransform()
    ).execute()
    basis = world.get_component(eid, BestBasis)
    report.widths["packet"] = world.metadata[eid]["packet"]
    report.basis_valid = basis.valid
    report.basis_nodes = len(basis.indices)
    _check(world, eid, original, "packet", report)

    logger.info("%s: %s", name or "signal", report.widths)
    return report
