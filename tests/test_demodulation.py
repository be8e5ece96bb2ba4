import numpy as np

from datacomm import Series
from datacomm.demodulation import envelope_demo, ideal_envelope, rectify


def test_rectify():
    series = Series(x=[0, 1, 2], y=[-1, 0.5, -0.2])
    assert np.array_equal(rectify(series).y, [0, 0.5, 0])


def test_envelope_demo():
    stages = envelope_demo(carrier_freq=10)
    t = np.arange(500) / 50

    assert np.allclose(stages.envelope.y, 1 + 0.5 * np.sin(t))
    assert np.allclose(stages.modulated.y, stages.envelope.y * np.sin(10 * t))
    assert np.all(stages.rectified.y >= 0)
    assert np.allclose(stages.rectified.y, np.maximum(stages.modulated.y, 0))


def test_envelope_bounds_modulated():
    stages = envelope_demo(carrier_freq=15, modulation_index=0.3)
    assert np.all(np.abs(stages.modulated.y) <= stages.envelope.y + 1e-12)


def test_ideal_envelope_custom_grid():
    env = ideal_envelope(message_freq=2, modulation_index=0.25, num_points=10, time_scale=5)
    assert len(env) == 10
    assert np.allclose(env.y, 1 + 0.25 * np.sin(2 * np.arange(10) / 5))
