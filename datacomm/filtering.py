"""
Filtering.

This module provides the low-pass filter demonstration:
- A causal moving-average filter applied to any `Series`.
- The deterministic noisy test signal the filter is demonstrated on.
"""

from typing import Optional, Tuple

import numpy as np
import scipy.signal

from .core import Series
from .core.config import resolve
from .errors import DomainError
from .logger import logger
from .utils import sample_grid


def moving_average_taps(window_size: int) -> np.ndarray:
    """
    Boxcar taps of length ``window_size`` (unnormalized).

    Raises:
        DomainError: If ``window_size`` is smaller than 1.
    """
    if window_size < 1:
        raise DomainError(f"Window size must be at least 1, got {window_size}.")
    return np.ones(int(window_size))


def moving_average(series: Series, window_size: int) -> Series:
    """
    Causal moving-average low-pass filter.

    ``filtered[i] = mean(y[max(0, i-W+1) : i+1])``. The first ``W-1`` outputs
    average over the shorter history that exists, so a window larger than
    the series never fails. The output lags the input by about ``(W-1)/2``
    samples.

    Args:
        series: Input trace.
        window_size: Window length ``W`` in samples.

    Returns:
        Filtered `Series` on the same x axis.

    Raises:
        DomainError: If ``window_size`` is smaller than 1.
    """
    taps = moving_average_taps(window_size)
    n = len(series)
    if window_size > n:
        logger.debug(
            f"Window size {window_size} exceeds series length {n}; using available history."
        )
    if n == 0:
        return Series(x=series.x, y=series.y, name="filtered")

    sums = scipy.signal.lfilter(taps, 1.0, series.y)
    counts = np.minimum(np.arange(1, n + 1), taps.size)
    logger.debug(f"Applied moving average (W={window_size}) to {n} samples.")
    return Series(x=series.x, y=sums / counts, name="filtered")


def noisy_sine(
    noise_level: float,
    num_points: Optional[int] = None,
    time_scale: Optional[float] = None,
) -> Series:
    """
    Sine wave with deterministic high-frequency interference.

    ``y = sin(t) + 0.5*noise_level*(sin(13t) + cos(29t))`` so the trace is
    stable across redraws.

    Args:
        noise_level: Interference scale. Zero gives the clean sine.
        num_points: Number of samples (config ``filter_points``).
        time_scale: Sample index to time divisor (config ``filter_time_scale``).

    Returns:
        A `Series` named ``"noisy"`` with ``x = i``.
    """
    num_points = resolve("filter_points", num_points)
    time_scale = resolve("filter_time_scale", time_scale)
    x, t = sample_grid(num_points, time_scale)
    noise = (np.sin(t * 13) + np.cos(t * 29)) * 0.5 * noise_level
    return Series(x=x, y=np.sin(t) + noise, name="noisy")


def filter_demo(
    noise_level: float, window_size: int, num_points: Optional[int] = None
) -> Tuple[Series, Series]:
    """Returns the noisy test signal and its moving-average output."""
    logger.info(f"Filter demo: noise={noise_level}, window={window_size}.")
    noisy = noisy_sine(noise_level, num_points=num_points)
    return noisy, moving_average(noisy, window_size)
