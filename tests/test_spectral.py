import numpy as np
import pytest

from datacomm import DomainError, Series
from datacomm.spectral import magnitude_spectrum
from datacomm.waveforms import sine_wave


def test_sine_peak():
    n = 100
    i = np.arange(n)
    trace = Series(x=i, y=3 * np.sin(2 * np.pi * 5 * i / n))
    spec = magnitude_spectrum(trace)
    peak = int(np.argmax(spec.y))
    assert peak == 5
    assert spec.x[peak] == pytest.approx(0.05)
    assert spec.y[peak] == pytest.approx(3.0)
    assert len(spec) == n // 2 + 1


def test_dc_level():
    trace = Series(x=np.arange(8), y=np.full(8, 2.0))
    spec = magnitude_spectrum(trace)
    assert spec.y[0] == pytest.approx(2.0)
    assert np.allclose(spec.y[1:], 0)


def test_sampling_rate_override():
    spec = magnitude_spectrum(sine_wave(4, 1), sampling_rate=100.0)
    assert spec.x[int(np.argmax(spec.y))] == pytest.approx(4.0)


def test_errors():
    with pytest.raises(DomainError):
        magnitude_spectrum(Series(x=[0], y=[1]))
    with pytest.raises(DomainError):
        magnitude_spectrum(Series(x=[0, 1], y=[1, 1]), sampling_rate=0)
