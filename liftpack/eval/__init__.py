from liftpack.eval.compression import CompressionReport, compare_compression
from liftpack.eval.frequency import level_basis, level_matrix, surface, surface_points
from liftpack.eval.signals import GENERATORS, chirp, freq_mix, sin_combo, steps

__all__ = [
    "CompressionReport",
    "compare_compression",
    "level_basis",
    "level_matrix",
    "surface",
    "surface_points",
    "GENERATORS",
    "chirp",
    "freq_mix",
    "sin_combo",
    "steps",
]
