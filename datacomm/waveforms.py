"""
Basic waveform generation.

This module provides the analog (sine) and digital (square) test signals
shown on the signal-basics page. Both sweep one period of the phase variable
``theta = 2*pi*i/N`` and label sample ``i`` with ``x = i/10``.
"""

from typing import Optional

import numpy as np

from .core import Series
from .core.config import resolve
from .errors import ConfigurationError
from .logger import logger


def _phase_axis(num_points: int) -> tuple:
    i = np.arange(num_points, dtype=float)
    theta = i / num_points * 2 * np.pi
    # Rounded to two decimals so labels line up with chart ticks.
    return np.round(i / 10, 2), theta


def sine_wave(
    frequency: float,
    amplitude: float,
    phase: float = 0.0,
    num_points: Optional[int] = None,
) -> Series:
    """
    Generate a sine wave ``y = A*sin(f*theta + phase)``.

    Args:
        frequency: Number of cycles across the window. Zero or negative values
            are accepted (DC or a mirrored sine).
        amplitude: Peak amplitude. Zero yields silence.
        phase: Phase offset in radians.
        num_points: Number of samples. Defaults to the configured ``wave_points``.

    Returns:
        A `Series` named ``"sine"``.
    """
    num_points = resolve("wave_points", num_points)
    logger.debug(
        f"Generating sine wave: f={frequency}, A={amplitude}, "
        f"phase={phase:.3f}, points={num_points}."
    )
    x, theta = _phase_axis(num_points)
    y = amplitude * np.sin(frequency * theta + phase)
    return Series(x=x, y=y, name="sine")


def square_wave(
    frequency: float,
    amplitude: float,
    phase: float = 0.0,
    num_points: Optional[int] = None,
) -> Series:
    """
    Generate a square wave that follows the sign of the matching sine.

    ``sin(...) == 0`` maps to ``+A``.

    Args:
        frequency: Number of cycles across the window.
        amplitude: Peak amplitude.
        phase: Phase offset in radians.
        num_points: Number of samples. Defaults to the configured ``wave_points``.

    Returns:
        A `Series` named ``"square"``.
    """
    num_points = resolve("wave_points", num_points)
    logger.debug(
        f"Generating square wave: f={frequency}, A={amplitude}, points={num_points}."
    )
    x, theta = _phase_axis(num_points)
    y = np.where(np.sin(frequency * theta + phase) >= 0, amplitude, -amplitude)
    return Series(x=x, y=y, name="square")


_WAVE_KINDS = {
    "sine": sine_wave,
    "analog": sine_wave,
    "square": square_wave,
    "digital": square_wave,
}


def generate_wave(
    kind: str,
    frequency: float,
    amplitude: float,
    phase: float = 0.0,
    num_points: Optional[int] = None,
) -> Series:
    """
    Generate a basic waveform by name.

    Args:
        kind: ``'sine'`` (alias ``'analog'``) or ``'square'`` (alias ``'digital'``).
        frequency: Number of cycles across the window.
        amplitude: Peak amplitude.
        phase: Phase offset in radians.
        num_points: Number of samples.

    Returns:
        The generated `Series`.

    Raises:
        ConfigurationError: If ``kind`` is not a known waveform.
    """
    try:
        generator = _WAVE_KINDS[kind.lower()]
    except (KeyError, AttributeError):
        raise ConfigurationError(
            f"Unknown waveform kind: {kind!r}. Supported: {sorted(_WAVE_KINDS)}"
        ) from None
    logger.info(f"Generating {kind} waveform (f={frequency}, A={amplitude}).")
    return generator(frequency, amplitude, phase=phase, num_points=num_points)
