"""Tests for the classic Haar wavelets on real data."""

from __future__ import annotations

import numpy as np
import pytest
import pywt

from liftpack.core.split_view import SplitView
from liftpack.lifting import HaarClassic, HaarClassicFreq, get_wavelet


def _signal(n: int) -> np.ndarray:
    rng = np.random.default_rng(n)
    return rng.normal(size=n)


class TestHaarClassic:
    def test_step_values(self) -> None:
        vec = np.array([56.0, 40.0, 8.0, 24.0])
        HaarClassic().forward_step(SplitView.over(vec))
        assert vec.tolist() == [48.0, 16.0, 8.0, -8.0]

    def test_matches_pywavelets(self) -> None:
        """Averages and half differences are the orthonormal Haar over sqrt(2)."""
        values = _signal(32)
        vec = values.copy()
        HaarClassic().forward_step(SplitView.over(vec))
        approx, detail = pywt.dwt(values, "haar")
        np.testing.assert_allclose(vec[:16], approx / np.sqrt(2), atol=1e-12)
        np.testing.assert_allclose(vec[16:], detail / np.sqrt(2), atol=1e-12)

    @pytest.mark.parametrize("n", [2, 4, 64, 1024])
    def test_trans_round_trip(self, n: int) -> None:
        values = _signal(n)
        vec = values.copy()
        haar = HaarClassic()
        haar.forward_trans(vec)
        haar.inverse_trans(vec)
        np.testing.assert_allclose(vec, values, atol=1e-12)

    def test_rejects_integer_data(self) -> None:
        with pytest.raises(TypeError, match="floating point"):
            HaarClassic().forward_step(SplitView.over(np.arange(4)))

    def test_no_reversed_step(self) -> None:
        assert not HaarClassic.supports_reverse
        with pytest.raises(NotImplementedError):
            HaarClassic().inverse_step_rev(SplitView.over(np.zeros(4)))


class TestHaarClassicFreq:
    def test_reversed_step_swaps_halves(self) -> None:
        """The reversed step puts the high pass result in the low half."""
        values = np.array([56.0, 40.0, 8.0, 24.0])
        plain = values.copy()
        rev = values.copy()
        wavelet = HaarClassicFreq()
        wavelet.forward_step(SplitView.over(plain))
        wavelet.forward_step_rev(SplitView.over(rev))
        assert rev[:2].tolist() == plain[2:].tolist()
        assert rev[2:].tolist() == plain[:2].tolist()

    @pytest.mark.parametrize("n", [2, 8, 128])
    def test_reversed_round_trip(self, n: int) -> None:
        values = _signal(n)
        vec = values.copy()
        wavelet = HaarClassicFreq()
        view = SplitView.over(vec)
        wavelet.forward_step_rev(view)
        wavelet.inverse_step_rev(view)
        np.testing.assert_allclose(vec, values, atol=1e-12)

    def test_registry(self) -> None:
        wavelet = get_wavelet("haar_classic_freq")
        assert isinstance(wavelet, HaarClassicFreq)
        assert wavelet.supports_reverse
        assert not wavelet.integer
