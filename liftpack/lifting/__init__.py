"""Lifting scheme wavelet transforms."""

from __future__ import annotations

from liftpack.lifting.base import Direction, LiftingScheme
from liftpack.lifting.integer import HaarInt, LineInt, TSInt
from liftpack.lifting.real import HaarClassic, HaarClassicFreq

WAVELETS: dict[str, type[LiftingScheme]] = {
    cls.name: cls for cls in (HaarInt, LineInt, TSInt, HaarClassic, HaarClassicFreq)
}


def get_wavelet(name: str) -> LiftingScheme:
    """Instantiate a wavelet by registry name."""
    try:
        return WAVELETS[name]()
    except KeyError as e:
        raise ValueError(
            f"Unknown wavelet '{name}', expected one of {sorted(WAVELETS)}"
        ) from e


__all__ = [
    "Direction",
    "LiftingScheme",
    "HaarInt",
    "LineInt",
    "TSInt",
    "HaarClassic",
    "HaarClassicFreq",
    "WAVELETS",
    "get_wavelet",
]
