import numpy as np
import pytest

from datacomm import DomainError, Series
from datacomm.filtering import filter_demo, moving_average, noisy_sine


@pytest.fixture
def ramp():
    return Series(x=[0, 1, 2, 3], y=[1, 2, 3, 4])


def test_moving_average(ramp):
    assert np.allclose(moving_average(ramp, 2).y, [1, 1.5, 2.5, 3.5])
    assert np.allclose(moving_average(ramp, 3).y, [1, 1.5, 2, 3])


def test_window_one_is_identity(ramp):
    assert np.allclose(moving_average(ramp, 1).y, ramp.y)


def test_window_larger_than_series_clips(ramp):
    assert np.allclose(moving_average(ramp, 10).y, [1, 1.5, 2, 2.5])


def test_invalid_window(ramp):
    with pytest.raises(DomainError):
        moving_average(ramp, 0)


def test_keeps_x_axis(ramp):
    assert np.array_equal(moving_average(ramp, 2).x, ramp.x)


def test_empty_series():
    assert len(moving_average(Series(x=[], y=[]), 3)) == 0


def test_noisy_sine():
    t = np.arange(500) / 20
    assert np.allclose(noisy_sine(0).y, np.sin(t))
    expected = np.sin(t) + (np.sin(13 * t) + np.cos(29 * t)) * 0.5 * 1.2
    assert np.allclose(noisy_sine(1.2).y, expected)


def test_filter_reduces_noise():
    noisy, filtered = filter_demo(noise_level=1.0, window_size=10)
    clean = np.sin(np.arange(500) / 20)
    assert len(filtered) == len(noisy) == 500
    assert np.std(filtered.y - clean) < np.std(noisy.y - clean)
