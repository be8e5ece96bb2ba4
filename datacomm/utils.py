"""
Utility functions.

This module provides general helper functions used across the package:
- Format SI prefixes (format_si).
- Format decibel values, including the infinite sentinel (format_db).
- Build the sample grids shared by the generators (sample_grid).
"""

import math
from typing import Optional, Tuple

import numpy as np

from .logger import logger


def format_si(value: Optional[float], unit: str = "Hz") -> str:
    """
    Format a value with SI prefixes.

    Args:
        value: The value to format.
        unit: The unit string (e.g., 'Hz', 'bps', 's').

    Returns:
        Formatted string (e.g., '29.90 kbps').
    """
    if value is None:
        return "None"

    if math.isinf(value):
        return f"{'-' if value < 0 else ''}∞ {unit}"

    if abs(value) == 0:
        return f"0.00 {unit}"

    # Standard SI prefixes
    si_units = {
        -5: "f",
        -4: "p",
        -3: "n",
        -2: "µ",
        -1: "m",
        0: "",
        1: "k",
        2: "M",
        3: "G",
        4: "T",
        5: "P",
    }

    rank = int(np.floor(np.log10(abs(value)) / 3))
    # clamp to supported range
    rank = max(min(si_units.keys()), min(rank, max(si_units.keys())))

    scaled = value / (1000.0**rank)
    return f"{scaled:.2f} {si_units[rank]}{unit}"


def format_db(value: float, precision: int = 2) -> str:
    """
    Format a decibel value, rendering infinities as '∞'.

    Args:
        value: Value in dB. May be ``inf`` or ``-inf``.
        precision: Number of decimals.

    Returns:
        Formatted string (e.g., '13.98 dB', '∞ dB').
    """
    if math.isinf(value):
        return "∞ dB" if value > 0 else "-∞ dB"
    return f"{value:.{precision}f} dB"


def sample_grid(num_points: int, time_scale: float) -> Tuple[np.ndarray, np.ndarray]:
    """
    Returns ``(index, t)`` for ``num_points`` samples with ``t = index / time_scale``.
    """
    logger.debug(f"Building sample grid: points={num_points}, scale={time_scale}.")
    index = np.arange(num_points, dtype=float)
    return index, index / time_scale
