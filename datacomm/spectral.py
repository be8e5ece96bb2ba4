"""
Spectral view of real traces.

Functions
---------
magnitude_spectrum :
    Single-sided amplitude spectrum of a `Series`.
"""

from typing import Optional

import numpy as np
import scipy.fft

from .core import Series
from .errors import DomainError
from .logger import logger


def magnitude_spectrum(series: Series, sampling_rate: Optional[float] = None) -> Series:
    """
    Single-sided amplitude spectrum of a real, uniformly sampled trace.

    Amplitudes are scaled by ``2/N`` so a sinusoid that falls exactly on a
    bin reads its peak amplitude (the DC bin is scaled by ``1/N``).

    Parameters
    ----------
    series : Series
        Input trace. Needs at least two samples.
    sampling_rate : float, optional
        Samples per x unit. Defaults to ``1 / (x[1] - x[0])``.

    Returns
    -------
    Series
        Frequencies (cycles per x unit) against amplitude, named
        ``"spectrum"``.

    Raises
    ------
    DomainError
        If the series is too short or the sampling rate is not positive.
    """
    n = len(series)
    if n < 2:
        raise DomainError(f"Spectrum needs at least 2 samples, got {n}.")
    if sampling_rate is None:
        sampling_rate = 1.0 / float(series.x[1] - series.x[0])
    if not sampling_rate > 0:
        raise DomainError(f"Sampling rate must be positive, got {sampling_rate}.")

    logger.debug(f"Computing magnitude spectrum of {n} samples (fs={sampling_rate:.3f}).")
    spectrum = np.abs(scipy.fft.rfft(series.y)) / n
    spectrum[1:] *= 2
    if n % 2 == 0:
        # Nyquist bin has no mirrored twin.
        spectrum[-1] /= 2
    freqs = scipy.fft.rfftfreq(n, d=1.0 / sampling_rate)
    return Series(x=freqs, y=spectrum, name="spectrum")
