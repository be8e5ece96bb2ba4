import pytest

from datacomm import ConfigurationError, DomainError, Sender
from datacomm.tdm import (
    Frame,
    Slot,
    channel_events,
    demultiplex,
    iter_frames,
    schedule_tdm,
    simulate_tdm,
)


@pytest.fixture
def senders():
    return [
        Sender(id=1, payload="AB"),
        Sender(id=2, payload="C"),
        Sender(id=3, payload="DEF"),
    ]


def _data(frame):
    return [(s.sender_id, s.data) for s in frame.data_slots]


def test_round_robin_without_stuffing(senders):
    frames = schedule_tdm(senders)
    assert [f.index for f in frames] == [0, 1, 2]
    assert _data(frames[0]) == [(1, "A"), (2, "C"), (3, "D")]
    assert _data(frames[1]) == [(1, "B"), (3, "E")]
    assert _data(frames[2]) == [(3, "F")]
    assert all(not s.stuffing for f in frames for s in f.slots)


def test_pulse_stuffing_keeps_frame_shape(senders):
    frames = schedule_tdm(senders, pulse_stuffing=True)
    assert len(frames) == 3
    assert all(len(f.slots) == 3 for f in frames)
    assert [s.stuffing for s in frames[1].slots] == [False, True, False]
    assert [s.stuffing for s in frames[2].slots] == [True, True, False]


def test_every_frame_carries_data(senders):
    for stuffing in (False, True):
        for frame in schedule_tdm(senders, pulse_stuffing=stuffing):
            assert frame.data_slots


def test_slot_size_chunks_payload():
    frames = schedule_tdm([Sender(id=1, payload="HELLO")], slot_size=2)
    assert [f.slots[0].data for f in frames] == ["HE", "LL", "O"]


def test_slots_per_frame():
    frames = schedule_tdm([Sender(id=1, payload="ABC", slots_per_frame=2), Sender(id=2, payload="X")])
    assert _data(frames[0]) == [(1, "A"), (1, "B"), (2, "X")]
    assert _data(frames[1]) == [(1, "C")]


def test_empty_payloads_give_no_frames():
    assert schedule_tdm([Sender(id=1), Sender(id=2)]) == []
    assert schedule_tdm([]) == []


def test_iter_frames_is_lazy():
    gen = iter_frames([Sender(id=1, payload="x" * 1000)])
    assert next(gen).index == 0
    assert next(gen).index == 1


def test_invalid_arguments(senders):
    with pytest.raises(DomainError):
        schedule_tdm(senders, slot_size=0)
    with pytest.raises(ConfigurationError):
        schedule_tdm([Sender(id=1, payload="A"), Sender(id=1, payload="B")])


def test_channel_events_timeline(senders):
    frames = schedule_tdm(senders)
    events = channel_events(frames, frame_interval=1.0, travel_delay=1.5)
    timeline = [(e.time, e.kind, e.frame.index) for e in events]
    assert timeline == [
        (0.0, "send", 0),
        (1.0, "send", 1),
        (1.5, "deliver", 0),
        (2.0, "send", 2),
        (2.5, "deliver", 1),
        (3.5, "deliver", 2),
    ]


def test_delivery_before_send_at_same_time():
    frames = [Frame(i, (Slot(1, str(i)),)) for i in range(3)]
    events = channel_events(frames, frame_interval=1.0, travel_delay=1.0)
    kinds = [(e.time, e.kind) for e in events]
    assert kinds[:4] == [(0.0, "send"), (1.0, "deliver"), (1.0, "send"), (2.0, "deliver")]


def test_speed_scales_timeline(senders):
    frames = schedule_tdm(senders)
    events = channel_events(frames, frame_interval=1.0, travel_delay=1.5, speed=2.0)
    assert events[-1].time == pytest.approx(7.0)
    with pytest.raises(DomainError):
        channel_events(frames, speed=0)


def test_events_use_config_defaults(senders):
    events = channel_events(schedule_tdm(senders))
    assert events[-1].time == pytest.approx(3.5)


def test_demultiplex(senders):
    frames = schedule_tdm(senders, pulse_stuffing=True)
    assert demultiplex(frames) == {1: "AB", 2: "C", 3: "DEF"}


def test_demultiplex_ignores_sends(senders):
    events = channel_events(schedule_tdm(senders), 1.0, 1.5)
    partial = [e for e in events if e.time <= 2.0]
    assert demultiplex(partial, senders) == {1: "A", 2: "C", 3: "D"}


def test_simulate_tdm(senders):
    run = simulate_tdm(senders, slot_size=2, pulse_stuffing=True)
    assert run.buffers == {1: "AB", 2: "C", 3: "DEF"}
    assert len(run.frames) == 2
    assert run.duration == pytest.approx(2.5)
    assert "S2:<stuff>" in run.frames[1].describe()


def test_simulate_without_data():
    run = simulate_tdm([Sender(id=5)])
    assert run.frames == ()
    assert run.buffers == {5: ""}
    assert run.duration == 0.0


@pytest.mark.parametrize(
    "interval, delay", [(1.0, -0.5), (0.0, 1.0), (-1.0, 1.0)]
)
def test_channel_events_reject_bad_timing(senders, interval, delay):
    frames = schedule_tdm(senders)
    with pytest.raises(DomainError):
        channel_events(frames, frame_interval=interval, travel_delay=delay)


def test_zero_travel_delay_keeps_order(senders):
    events = channel_events(schedule_tdm(senders), frame_interval=1.0, travel_delay=0.0)
    times = [e.time for e in events]
    assert times == sorted(times)
    assert [e.kind for e in events[:2]] == ["send", "deliver"]
