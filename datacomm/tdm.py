"""
Time Division Multiplexing.

This module builds TDM frames from a set of senders and replays them over a
channel with a fixed travel delay, as a deterministic list of timed events.

Scheduling rule
---------------
Every tick visits the senders in their given order and offers each one
``slots_per_frame`` slots of ``slot_size`` characters, advancing a read
cursor per sender. A sender whose payload is exhausted is given a stuffing
slot when pulse stuffing is on and no slot otherwise. Ticks continue until
every sender is exhausted, so a frame always carries at least one data slot
and frames never consist of stuffing alone.

Functions
---------
iter_frames / schedule_tdm :
    Lazy and eager frame schedulers.
iter_events / channel_events :
    Timed 'send' and 'deliver' events for a frame sequence.
demultiplex :
    Rebuilds per-sender receive buffers from delivered frames.
simulate_tdm :
    Runs the full pipeline and returns a `TdmRun`.
"""

import heapq
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from .core import Sender
from .core.sender import check_unique_ids
from .core.config import resolve
from .errors import DomainError
from .logger import logger


@dataclass(frozen=True)
class Slot:
    """
    One slot of a frame.

    Attributes:
        sender_id: Owner of the slot.
        data: Payload chunk (empty for stuffing).
        stuffing: True for a stuffing (dummy) slot.
    """

    sender_id: int
    data: str = ""
    stuffing: bool = False


@dataclass(frozen=True)
class Frame:
    """Slots emitted in one scheduling tick, in sender order."""

    index: int
    slots: Tuple[Slot, ...]

    @property
    def data_slots(self) -> Tuple[Slot, ...]:
        return tuple(s for s in self.slots if not s.stuffing)

    def describe(self) -> str:
        parts = [
            f"S{s.sender_id}:{'<stuff>' if s.stuffing else repr(s.data)}"
            for s in self.slots
        ]
        return f"Frame {self.index} [" + ", ".join(parts) + "]"


@dataclass(frozen=True)
class ChannelEvent:
    """
    A frame entering ('send') or leaving ('deliver') the channel.

    Attributes:
        time: Event time in seconds from the start of the run.
        kind: 'send' or 'deliver'.
        frame: The frame concerned.
    """

    time: float
    kind: str
    frame: Frame


def iter_frames(
    senders: Sequence[Sender], slot_size: int = 1, pulse_stuffing: bool = False
) -> Iterator[Frame]:
    """
    Lazily yields TDM frames until every sender is exhausted.

    Args:
        senders: Senders in slot order.
        slot_size: Characters carried by one slot.
        pulse_stuffing: Fill slots of exhausted senders with stuffing.

    Yields:
        `Frame` objects with consecutive indices starting at 0.

    Raises:
        DomainError: If ``slot_size`` is smaller than 1.
        ConfigurationError: If two senders share an id.
    """
    if slot_size < 1:
        raise DomainError(f"Slot size must be at least 1, got {slot_size}.")
    check_unique_ids(senders)

    cursors = {s.id: 0 for s in senders}

    def remaining(sender: Sender) -> bool:
        return cursors[sender.id] < len(sender.payload)

    index = 0
    while any(remaining(s) for s in senders):
        slots: List[Slot] = []
        for sender in senders:
            for _ in range(sender.slots_per_frame):
                if remaining(sender):
                    start = cursors[sender.id]
                    chunk = sender.payload[start : start + slot_size]
                    cursors[sender.id] = start + len(chunk)
                    slots.append(Slot(sender.id, chunk))
                elif pulse_stuffing:
                    slots.append(Slot(sender.id, stuffing=True))
        frame = Frame(index, tuple(slots))
        logger.debug(frame.describe())
        yield frame
        index += 1


def schedule_tdm(
    senders: Sequence[Sender], slot_size: int = 1, pulse_stuffing: bool = False
) -> List[Frame]:
    """
    Builds every TDM frame for ``senders``.

    See `iter_frames` for the arguments and the scheduling rule.
    """
    frames = list(iter_frames(senders, slot_size, pulse_stuffing))
    logger.info(
        f"Scheduled {len(frames)} TDM frame(s) for {len(senders)} sender(s) "
        f"(slot_size={slot_size}, stuffing={'on' if pulse_stuffing else 'off'})."
    )
    return frames


def iter_events(
    frames: Iterable[Frame],
    frame_interval: Optional[float] = None,
    travel_delay: Optional[float] = None,
    speed: float = 1.0,
) -> Iterator[ChannelEvent]:
    """
    Lazily yields the channel timeline of ``frames``.

    Frame ``k`` is sent at ``k * frame_interval * speed`` and delivered
    ``travel_delay * speed`` later. Events come out in time order; a delivery
    that coincides with a send is yielded first.

    Args:
        frames: Frames in index order (e.g. from `iter_frames`).
        frame_interval: Seconds between sends (config ``frame_interval``).
        travel_delay: Channel travel time (config ``travel_delay``).
        speed: Playback time multiplier; larger is slower.

    Raises:
        DomainError: If ``speed`` is not positive, ``frame_interval`` is not
            positive or ``travel_delay`` is negative.
    """
    if not speed > 0:
        raise DomainError(f"Speed multiplier must be positive, got {speed}.")
    interval = resolve("frame_interval", frame_interval) * speed
    delay = resolve("travel_delay", travel_delay) * speed
    if not interval > 0:
        raise DomainError(f"Frame interval must be positive, got {interval / speed}.")
    if not delay >= 0:
        raise DomainError(f"Travel delay must be non-negative, got {delay / speed}.")

    in_flight: List[Tuple[float, int, Frame]] = []
    for frame in frames:
        sent_at = frame.index * interval
        while in_flight and in_flight[0][0] <= sent_at:
            arrived_at, _, done = heapq.heappop(in_flight)
            yield ChannelEvent(arrived_at, "deliver", done)
        yield ChannelEvent(sent_at, "send", frame)
        heapq.heappush(in_flight, (sent_at + delay, frame.index, frame))

    while in_flight:
        arrived_at, _, done = heapq.heappop(in_flight)
        yield ChannelEvent(arrived_at, "deliver", done)


def channel_events(
    frames: Iterable[Frame],
    frame_interval: Optional[float] = None,
    travel_delay: Optional[float] = None,
    speed: float = 1.0,
) -> List[ChannelEvent]:
    """Eager version of `iter_events`."""
    return list(iter_events(frames, frame_interval, travel_delay, speed))


def demultiplex(
    items: Iterable[Union[Frame, ChannelEvent]],
    senders: Optional[Sequence[Sender]] = None,
) -> Dict[int, str]:
    """
    Splits delivered frames back into per-sender receive buffers.

    Buffers are append-only and follow delivery order. Stuffing slots are
    discarded. Only 'deliver' events are used when events are given.

    Args:
        items: Frames (taken as delivered in order) or channel events.
        senders: Optional senders whose buffers should exist even if empty.

    Returns:
        Mapping of sender id to received text.
    """
    buffers: Dict[int, List[str]] = {s.id: [] for s in senders or ()}
    for item in items:
        if isinstance(item, ChannelEvent):
            if item.kind != "deliver":
                continue
            item = item.frame
        for slot in item.data_slots:
            buffers.setdefault(slot.sender_id, []).append(slot.data)
    return {sid: "".join(chunks) for sid, chunks in buffers.items()}


@dataclass(frozen=True)
class TdmRun:
    """
    Result of `simulate_tdm`.

    Attributes:
        frames: Scheduled frames.
        events: Channel timeline.
        buffers: Receive buffer per sender id after the last delivery.
        duration: Time of the last delivery (0 when nothing was sent).
    """

    frames: Tuple[Frame, ...]
    events: Tuple[ChannelEvent, ...]
    buffers: Dict[int, str]
    duration: float


def simulate_tdm(
    senders: Sequence[Sender],
    slot_size: int = 1,
    pulse_stuffing: bool = False,
    frame_interval: Optional[float] = None,
    travel_delay: Optional[float] = None,
    speed: float = 1.0,
) -> TdmRun:
    """
    Schedules, transmits and demultiplexes the senders' payloads.

    Args:
        senders: Senders in slot order.
        slot_size: Characters per slot.
        pulse_stuffing: Fill idle slots with stuffing.
        frame_interval: Seconds between frame sends.
        travel_delay: Channel travel time.
        speed: Playback time multiplier.

    Returns:
        A `TdmRun` with frames, events and receive buffers.
    """
    logger.info(f"Starting TDM simulation with {len(senders)} sender(s).")
    frames = schedule_tdm(senders, slot_size, pulse_stuffing)
    events = channel_events(frames, frame_interval, travel_delay, speed)
    buffers = demultiplex(events, senders)
    duration = events[-1].time if events else 0.0
    for sender in senders:
        logger.debug(f"{sender.display_name} received {buffers[sender.id]!r}.")
    logger.info(f"TDM simulation complete after {duration:.2f} s.")
    return TdmRun(tuple(frames), tuple(events), buffers, duration)
