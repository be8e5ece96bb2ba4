"""
Bit-string helpers.

This module normalizes free-form user text into bit strings and provides the
small character/bit conversions used around the encoders:
- Bit-string sanitization (anything but '0'/'1' is dropped, never rejected).
- ASCII text to bits and back (8 bits per character, MSB first).
- Asynchronous serial framing and transmission-mode timing.
"""

from dataclasses import dataclass
from typing import List, Tuple, Union

import numpy as np

from .errors import ConfigurationError, DomainError
from .logger import logger

BitsLike = Union[str, List[int], Tuple[int, ...], np.ndarray]


def sanitize_bits(text: str) -> str:
    """
    Keeps only the '0' and '1' characters of ``text``, in order.

    Args:
        text: Raw user input.

    Returns:
        The filtered bit string (possibly empty).
    """
    bits = "".join(ch for ch in text if ch in "01")
    dropped = len(text) - len(bits)
    if dropped:
        logger.debug(f"Dropped {dropped} non-bit character(s) from input.")
    return bits


def to_bit_array(bits: BitsLike) -> np.ndarray:
    """
    Coerces a bit string or sequence of 0/1 integers into an ``int8`` array.

    Strings are sanitized first. Sequences must already hold only 0 and 1.

    Raises:
        DomainError: If a numeric sequence contains values other than 0/1.
    """
    if isinstance(bits, str):
        bits = sanitize_bits(bits)
        return np.frombuffer(bits.encode("ascii"), dtype=np.uint8).astype(np.int8) - ord("0")

    raw = np.asarray(bits).ravel()
    # Checked before the cast: int8 would wrap 256 to 0 and truncate 0.6 to 0.
    if not np.all(np.isin(raw, (0, 1))):
        raise DomainError("Bit sequences may only contain 0 and 1.")
    return raw.astype(np.int8)


def to_bit_string(bits: BitsLike) -> str:
    """Inverse of `to_bit_array`."""
    return "".join(str(int(b)) for b in to_bit_array(bits))


def text_to_ascii(text: str) -> List[int]:
    """Returns the character code of every character in ``text``."""
    return [ord(ch) for ch in text]


def text_to_bits(text: str, width: int = 8) -> str:
    """
    Converts text to its binary representation, ``width`` bits per character.

    Every character takes exactly ``width`` bits so the stream can be split
    back by `bits_to_text`.

    Raises:
        DomainError: If a character code does not fit in ``width`` bits.
    """
    codes = text_to_ascii(text)
    too_wide = [chr(c) for c in codes if c >= 1 << width]
    if too_wide:
        raise DomainError(
            f"Characters {too_wide!r} do not fit in {width} bits."
        )
    return "".join(format(c, f"0{width}b") for c in codes)


def bits_to_text(bits: BitsLike, width: int = 8) -> str:
    """
    Converts a bit string back to text. Trailing bits that do not fill a
    whole character are ignored.
    """
    s = to_bit_string(bits)
    usable = len(s) - len(s) % width
    return "".join(chr(int(s[i : i + width], 2)) for i in range(0, usable, width))


# ============================================================================
# Transmission modes
# ============================================================================

START_BIT = "0"
STOP_BIT = "1"


def frame_async(bits: BitsLike) -> str:
    """Wraps ``bits`` in an asynchronous frame: start bit 0, data, stop bit 1."""
    return START_BIT + to_bit_string(bits) + STOP_BIT


@dataclass(frozen=True)
class TransmissionSchedule:
    """
    Departure timing for one transmission.

    Attributes:
        mode: 'serial', 'asynchronous' or 'parallel'.
        bits: The bits that actually travel (framed for 'asynchronous').
        departures: Departure time of each bit, in seconds.
        travel_time: Time one bit needs to cross the link.
        duration: Time until the receiver holds the whole word.
    """

    mode: str
    bits: str
    departures: Tuple[float, ...]
    travel_time: float
    duration: float


TRANSMISSION_MODES = ("serial", "asynchronous", "parallel")


def transmission_schedule(
    bits: BitsLike,
    mode: str = "serial",
    travel_time: float = 2.0,
    bit_spacing: float = 0.6,
    bit_period: float = 0.5,
    settle_time: float = 0.5,
) -> TransmissionSchedule:
    """
    Computes when each bit leaves the sender for a transmission mode.

    Serial modes send bits one after another, ``bit_spacing`` apart; parallel
    mode sends every bit at once on its own wire. The total duration is
    ``bit_period * len(bits)`` (zero for parallel) plus the travel time and a
    short settle time.

    Args:
        bits: Data bits.
        mode: 'serial', 'asynchronous' or 'parallel'.
        travel_time: Seconds a bit spends on the wire.
        bit_spacing: Gap between consecutive departures in serial modes.
        bit_period: Serialization time per bit used for the total duration.
        settle_time: Extra time appended after the last arrival.

    Returns:
        A `TransmissionSchedule`.

    Raises:
        ConfigurationError: If ``mode`` is unknown.
        DomainError: If a timing argument is negative.
    """
    if mode not in TRANSMISSION_MODES:
        raise ConfigurationError(
            f"Unknown transmission mode: {mode!r}. Supported: {list(TRANSMISSION_MODES)}"
        )
    if min(travel_time, bit_spacing, bit_period, settle_time) < 0:
        raise DomainError("Transmission timings must be non-negative.")

    framed = frame_async(bits) if mode == "asynchronous" else to_bit_string(bits)

    if mode == "parallel":
        departures = tuple(0.0 for _ in framed)
        serialization = 0.0
    else:
        departures = tuple(i * bit_spacing for i in range(len(framed)))
        serialization = len(framed) * bit_period

    duration = serialization + travel_time + settle_time
    logger.info(
        f"{mode.capitalize()} transmission of {len(framed)} bit(s) takes {duration:.2f} s."
    )
    return TransmissionSchedule(
        mode=mode,
        bits=framed,
        departures=departures,
        travel_time=travel_time,
        duration=duration,
    )
