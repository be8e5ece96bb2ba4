"""
AM envelope demodulation.

The envelope detector is shown in two stages: diode rectification, then the
low-pass (RC) stage. The second stage is not simulated: `ideal_envelope`
returns the known message plus its DC offset, which is what a well-tuned
RC detector would track. No charge/discharge dynamics are modelled.
"""

from typing import NamedTuple, Optional

import numpy as np

from .core import Series
from .core.config import resolve
from .logger import logger
from .utils import sample_grid


class EnvelopeStages(NamedTuple):
    modulated: Series
    rectified: Series
    envelope: Series


def rectify(series: Series) -> Series:
    """Half-wave rectification: ``max(0, y)``."""
    return Series(x=series.x, y=np.maximum(series.y, 0.0), name="rectified")


def ideal_envelope(
    message_freq: float = 1.0,
    modulation_index: float = 0.5,
    num_points: Optional[int] = None,
    time_scale: Optional[float] = None,
) -> Series:
    """Ideal detector output ``1 + m*sin(fm*t)``."""
    num_points = resolve("analog_points", num_points)
    time_scale = resolve("time_scale", time_scale)
    x, t = sample_grid(num_points, time_scale)
    y = 1 + modulation_index * np.sin(message_freq * t)
    return Series(x=x, y=y, name="envelope")


def envelope_demo(
    carrier_freq: float,
    message_freq: float = 1.0,
    modulation_index: float = 0.5,
    num_points: Optional[int] = None,
    time_scale: Optional[float] = None,
) -> EnvelopeStages:
    """
    Builds the three traces of the envelope-detector walkthrough.

    Args:
        carrier_freq: Carrier rate ``fc`` in radians per time unit.
        message_freq: Message rate ``fm``.
        modulation_index: Message depth ``m`` (0.5 keeps the envelope positive).
        num_points: Number of samples (config ``analog_points``).
        time_scale: Sample index to time divisor (config ``time_scale``).

    Returns:
        `EnvelopeStages` with the AM signal
        ``(1 + m*sin(fm*t))*sin(fc*t)``, its rectified form and the ideal
        envelope.
    """
    logger.info(
        f"Envelope detection demo: fc={carrier_freq}, fm={message_freq}, m={modulation_index}."
    )
    envelope = ideal_envelope(message_freq, modulation_index, num_points, time_scale)
    time_scale = resolve("time_scale", time_scale)
    t = envelope.x / time_scale
    modulated = Series(
        x=envelope.x, y=envelope.y * np.sin(carrier_freq * t), name="modulated"
    )
    return EnvelopeStages(modulated, rectify(modulated), envelope)
