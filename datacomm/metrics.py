"""
Channel capacity, SNR and latency calculators.

This module provides the closed-form formulas behind the Nyquist/Shannon,
SNR and latency pages. All functions are pure and reject mathematically
undefined inputs with `DomainError`.

Functions
---------
nyquist_rate :
    Noiseless channel bit rate ``2*B*log2(L)``.
shannon_capacity :
    Noisy channel capacity ``B*log2(1 + SNR)``.
snr_db :
    Power ratio in decibels; ``inf`` when the noise power is zero.
propagation_delay, transmission_delay, total_latency :
    Link latency components.

Notes
-----
`snr_db_from_amplitudes` and `snr_demo` treat amplitude squared as power.
This is a teaching approximation, not a physical power measurement.
"""

import math
from dataclasses import dataclass
from typing import NamedTuple, Optional

import numpy as np

from .core import Series
from .errors import DomainError
from .logger import logger
from .waveforms import sine_wave


def _check_non_negative(name: str, value: float) -> None:
    if math.isnan(value) or value < 0:
        raise DomainError(f"{name} must be non-negative, got {value}.")


def _check_positive(name: str, value: float) -> None:
    if math.isnan(value) or value <= 0:
        raise DomainError(f"{name} must be positive, got {value}.")


# ============================================================================
# CAPACITY
# ============================================================================


def nyquist_rate(bandwidth: float, levels: int) -> float:
    """
    Maximum bit rate of a noiseless channel.

    $C = 2 B \\log_2(L)$

    Args:
        bandwidth: Channel bandwidth ``B`` in Hz.
        levels: Number of signal levels ``L`` (at least 2).

    Returns:
        Bit rate in bps.

    Raises:
        DomainError: If ``bandwidth`` is negative or ``levels`` < 2.
    """
    _check_non_negative("Bandwidth", bandwidth)
    if levels < 2:
        raise DomainError(f"Nyquist rate needs at least 2 signal levels, got {levels}.")
    rate = float(2 * bandwidth * np.log2(levels))
    logger.debug(f"Nyquist rate: B={bandwidth} Hz, L={levels} -> {rate:.2f} bps.")
    return rate


def db_to_linear(value_db: float) -> float:
    """Converts a power ratio from dB to linear scale (``-inf`` dB -> 0)."""
    with np.errstate(over="ignore"):
        return float(np.power(10.0, value_db / 10.0))


def linear_to_db(ratio: float) -> float:
    """
    Converts a linear power ratio to dB (0 -> ``-inf``).

    Raises:
        DomainError: If ``ratio`` is negative.
    """
    _check_non_negative("Power ratio", ratio)
    if ratio == 0:
        return float("-inf")
    return float(10.0 * np.log10(ratio))


def shannon_capacity(bandwidth: float, snr_db: float) -> float:
    """
    Capacity of a noisy channel.

    $C = B \\log_2(1 + SNR_{linear})$ with $SNR_{linear} = 10^{SNR_{dB}/10}$.

    Args:
        bandwidth: Channel bandwidth ``B`` in Hz.
        snr_db: Signal-to-noise ratio in dB. ``-inf`` gives 0 capacity.

    Returns:
        Capacity in bps.

    Raises:
        DomainError: If ``bandwidth`` is negative or ``snr_db`` is NaN.
    """
    _check_non_negative("Bandwidth", bandwidth)
    if math.isnan(snr_db):
        raise DomainError("SNR must be a number, got NaN.")
    capacity = float(bandwidth * np.log2(1.0 + db_to_linear(snr_db)))
    logger.debug(f"Shannon capacity: B={bandwidth} Hz, SNR={snr_db} dB -> {capacity:.2f} bps.")
    return capacity


# ============================================================================
# SNR
# ============================================================================


def snr_db(signal_power: float, noise_power: float) -> float:
    """
    Signal-to-noise ratio ``10*log10(Ps/Pn)``.

    A zero noise power returns ``inf`` instead of failing (even for a silent
    signal); a silent signal over nonzero noise returns ``-inf``.

    Raises:
        DomainError: If either power is negative.
    """
    _check_non_negative("Signal power", signal_power)
    _check_non_negative("Noise power", noise_power)
    if noise_power == 0:
        logger.debug("Noise power is zero; SNR is infinite.")
        return float("inf")
    return linear_to_db(signal_power / noise_power)


def snr_db_from_amplitudes(signal_amplitude: float, noise_amplitude: float) -> float:
    """SNR using amplitude squared as a power proxy."""
    return snr_db(signal_amplitude**2, noise_amplitude**2)


def signal_quality(value_db: float) -> str:
    """Classifies an SNR as 'excellent' (> 20 dB), 'good' (> 10 dB) or 'poor'."""
    if value_db > 20:
        return "excellent"
    if value_db > 10:
        return "good"
    return "poor"


class SnrDemo(NamedTuple):
    pure: Series
    noise: Series
    combined: Series
    snr_db: float


def snr_demo(
    signal_amplitude: float,
    noise_amplitude: float,
    frequency: float,
    seed: Optional[int] = None,
    num_points: Optional[int] = None,
) -> SnrDemo:
    """
    A sine wave, uniform noise in ``[-An, An]`` and their sum.

    Args:
        signal_amplitude: Sine amplitude ``As``.
        noise_amplitude: Noise bound ``An``.
        frequency: Sine frequency (cycles per window).
        seed: Random seed for reproducible noise.
        num_points: Number of samples (config ``wave_points``).

    Returns:
        `SnrDemo` with the three traces and ``snr_db_from_amplitudes(As, An)``.
    """
    pure = sine_wave(frequency, signal_amplitude, num_points=num_points)
    rng = np.random.default_rng(seed)
    noise_values = rng.uniform(-noise_amplitude, noise_amplitude, size=len(pure))
    value = snr_db_from_amplitudes(signal_amplitude, noise_amplitude)
    logger.info(f"SNR demo: As={signal_amplitude}, An={noise_amplitude} -> {value:.2f} dB.")
    return SnrDemo(
        pure=pure.with_name("signal"),
        noise=Series(x=pure.x, y=noise_values, name="noise"),
        combined=Series(x=pure.x, y=pure.y + noise_values, name="signal + noise"),
        snr_db=value,
    )


# ============================================================================
# LATENCY
# ============================================================================


def propagation_delay(distance: float, speed: float) -> float:
    """
    Time for a signal front to cross ``distance`` at ``speed`` (same length unit).

    Raises:
        DomainError: If ``distance`` is negative or ``speed`` is not positive.
    """
    _check_non_negative("Distance", distance)
    _check_positive("Propagation speed", speed)
    return distance / speed


def transmission_delay(data_bits: float, bandwidth_bps: float) -> float:
    """
    Time to push ``data_bits`` onto a link of ``bandwidth_bps``.

    Raises:
        DomainError: If ``data_bits`` is negative or ``bandwidth_bps`` is not positive.
    """
    _check_non_negative("Data size", data_bits)
    _check_positive("Bandwidth", bandwidth_bps)
    return data_bits / bandwidth_bps


def megabytes_to_bits(size_mb: float) -> float:
    """Decimal megabytes to bits."""
    return size_mb * 8 * 1000 * 1000


def mbps_to_bps(rate_mbps: float) -> float:
    """Megabits per second to bits per second."""
    return rate_mbps * 1000 * 1000


@dataclass(frozen=True)
class Latency:
    """
    End-to-end latency breakdown, in seconds.

    Queuing and processing delays are carried for completeness but no model
    fills them in; they default to zero.
    """

    transmission: float
    propagation: float
    queuing: float = 0.0
    processing: float = 0.0

    @property
    def total(self) -> float:
        return self.transmission + self.propagation + self.queuing + self.processing


def total_latency(
    data_bits: float,
    bandwidth_bps: float,
    distance: float,
    speed: float,
    queuing: float = 0.0,
    processing: float = 0.0,
) -> Latency:
    """
    Combines transmission and propagation delay.

    Args:
        data_bits: Message size in bits.
        bandwidth_bps: Link rate in bps.
        distance: Link length.
        speed: Propagation speed in the same length unit per second.
        queuing: Optional fixed queuing delay.
        processing: Optional fixed processing delay.

    Returns:
        A `Latency` breakdown.
    """
    _check_non_negative("Queuing delay", queuing)
    _check_non_negative("Processing delay", processing)
    latency = Latency(
        transmission=transmission_delay(data_bits, bandwidth_bps),
        propagation=propagation_delay(distance, speed),
        queuing=queuing,
        processing=processing,
    )
    logger.info(
        f"Latency: transmission={latency.transmission:.4f} s, "
        f"propagation={latency.propagation:.4f} s, total={latency.total:.4f} s."
    )
    return latency
