"""Synthetic test signals for frequency analysis.

Each generator returns ``(x, y)``: the sample points and the signal values.
Points start at zero and advance by ``range / n``.
"""

from __future__ import annotations

import numpy as np


def _points(n: int, span: float) -> np.ndarray:
    if n < 1:
        raise ValueError(f"n must be positive, got {n}")
    return np.arange(n, dtype=np.float64) * (span / n)


def freq_mix(n: int) -> tuple[np.ndarray, np.ndarray]:
    """Sum of four sines of decreasing magnitude and frequency over [0, 2pi)."""
    x = _points(n, 2 * np.pi)
    y = (
        4 * np.sin(64 * x)
        + 2 * np.sin(32 * x)
        + 1 * np.sin(16 * x)
        + 0.5 * np.sin(8 * x)
    )
    return x, y


def sin_combo(n: int) -> tuple[np.ndarray, np.ndarray]:
    """sin(4 pi x) over [0, 8 pi)."""
    x = _points(n, 8 * np.pi)
    return x, np.sin(4 * np.pi * x)


def steps(n: int, num_steps: int = 8) -> tuple[np.ndarray, np.ndarray]:
    """Sine whose frequency rises by pi/2 every n / num_steps samples."""
    if not 1 <= num_steps <= n:
        raise ValueError(f"num_steps must be in [1, {n}], got {num_steps}")
    x = _points(n, 32 * np.pi)
    width = n // num_steps
    mult = 1.0 + (np.arange(n) // width) * (np.pi / 2.0)
    return x, np.sin(mult * x)


def chirp(n: int) -> tuple[np.ndarray, np.ndarray]:
    """Linear chirp sin(128 pi x^2) over [0, 2)."""
    x = _points(n, 2.0)
    return x, np.sin(128 * np.pi * x * x)


GENERATORS = {
    "freq_mix": freq_mix,
    "sin_combo": sin_combo,
    "steps": steps,
    "chirp": chirp,
}
