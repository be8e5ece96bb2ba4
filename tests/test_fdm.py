import numpy as np
import pytest

from datacomm import ConfigurationError, DomainError, ExpressionError, Sender
from datacomm.fdm import GUARD, SIGNAL, composite_signal, layout_fdm, spectrum_width


@pytest.fixture
def senders():
    return [
        Sender(id=1, bandwidth=1000, expression="sin(t)"),
        Sender(id=2, bandwidth=2000, expression="2cos(3t)"),
        Sender(id=3, bandwidth=1500, expression="0.5sin(5t)"),
    ]


def test_layout(senders):
    blocks = layout_fdm(senders, guard_band=500)
    spans = [(b.kind, b.start_freq, b.end_freq, b.owner) for b in blocks]
    assert spans == [
        (SIGNAL, 0, 1000, 1),
        (GUARD, 1000, 1500, None),
        (SIGNAL, 1500, 3500, 2),
        (GUARD, 3500, 4000, None),
        (SIGNAL, 4000, 5500, 3),
    ]
    assert spectrum_width(blocks) == 5500


def test_layout_tiles_without_gaps(senders):
    blocks = layout_fdm(senders, guard_band=250, start_freq=100)
    for prev, nxt in zip(blocks, blocks[1:]):
        assert prev.end_freq == nxt.start_freq
    assert blocks[0].start_freq == 100
    assert spectrum_width(blocks) == 4500 + 2 * 250


def test_zero_guard_band(senders):
    blocks = layout_fdm(senders, guard_band=0)
    assert all(b.kind == SIGNAL for b in blocks)
    assert spectrum_width(blocks) == 4500


def test_layout_uses_config_guard(senders):
    blocks = layout_fdm(senders)
    assert blocks[1].width == 500


def test_single_and_empty_layouts():
    blocks = layout_fdm([Sender(id=1, bandwidth=300)], guard_band=100)
    assert len(blocks) == 1 and blocks[0].center == 150
    assert layout_fdm([], guard_band=100) == []
    assert spectrum_width([]) == 0


def test_layout_errors(senders):
    with pytest.raises(DomainError):
        layout_fdm(senders, guard_band=-1)
    with pytest.raises(DomainError):
        layout_fdm(senders, start_freq=-5)
    with pytest.raises(ConfigurationError):
        layout_fdm([Sender(id=1), Sender(id=1)])


def test_composite_is_sum_of_components(senders):
    result = composite_signal(senders, num_points=200)
    assert set(result.components) == {1, 2, 3}
    total = sum(c.y for c in result.components.values())
    assert np.allclose(result.composite.y, total)
    assert len(result.composite) == 200


def test_composite_without_shift(senders):
    result = composite_signal(senders, num_points=100, time_scale=10, shift=False)
    t = np.arange(100) / 10
    assert np.allclose(result.components[2].y, 2 * np.cos(3 * t))
    assert result.components[1].name == "Sender 1"


def test_composite_bad_expression():
    with pytest.raises(ExpressionError):
        composite_signal([Sender(id=1, expression="tan(t)")])


def test_composite_shifts_by_block_center(senders):
    result = composite_signal(senders, guard_band=500, num_points=200, time_scale=50)
    t = np.arange(200) / 50
    # Sender 2 owns [1500, 3500] Hz, centre 2500 Hz, default scale 1e-3.
    assert np.allclose(result.components[2].y, 2 * np.cos(3 * t) * np.cos(2.5 * t))
    assert np.allclose(result.components[1].y, np.sin(t) * np.cos(0.5 * t))
    assert np.allclose(result.components[3].y, 0.5 * np.sin(5 * t) * np.cos(4.75 * t))
