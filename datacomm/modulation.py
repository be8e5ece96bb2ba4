"""
Analog and digital carrier modulation.

This module synthesizes the traces of the analog-modulation and
digital-to-analog pages:
- AM, FM and PM of a sinusoidal message onto a sinusoidal carrier.
- ASK, FSK and PSK keying of a bit string onto a carrier.

Analog traces are sampled at ``t = i / time_scale`` and labelled with the
sample index ``x = i``. Digital traces hold ``samples_per_bit`` samples per
bit on one global sample counter, so the carrier keeps running across bit
boundaries.

Functions
---------
am, fm, pm :
    Analog modulators.
ask, fsk, psk :
    Digital keying modulators.
modulate :
    Dispatches on the modulation name.
"""

from typing import Any, Callable, Dict, Optional, Tuple, Union

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .bits import to_bit_array, to_bit_string
from .core import Series
from .core.config import resolve
from .errors import ConfigurationError
from .logger import logger


class AnalogParams(BaseModel):
    """
    Carrier and message parameters for AM/FM/PM.

    Frequencies are angular rates in radians per time unit, matching
    ``sin(f * t)``. Fields left as None are taken from the active
    `SimulationConfig`.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    carrier_amplitude: float = 1.0
    carrier_freq: float = 10.0
    message_amplitude: float = 1.0
    message_freq: float = 1.0
    fm_sensitivity: Optional[float] = None
    pm_sensitivity: Optional[float] = None
    num_points: Optional[int] = Field(None, gt=0)
    time_scale: Optional[float] = Field(None, gt=0)


class DigitalParams(BaseModel):
    """
    Bit string and carrier parameters for ASK/FSK/PSK.

    ``bits`` is sanitized on construction, so any text is accepted.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    bits: str = "10110"
    amplitude: float = 1.0
    frequency: float = 2.0
    samples_per_bit: Optional[int] = Field(None, gt=0)
    time_scale: Optional[float] = Field(None, gt=0)

    @field_validator("bits", mode="before")
    @classmethod
    def validate_bits(cls, v: Any) -> str:
        return to_bit_string(v)


# ============================================================================
# ANALOG
# ============================================================================


def _analog_axis(params: AnalogParams) -> Tuple[np.ndarray, np.ndarray]:
    num_points = resolve("analog_points", params.num_points)
    time_scale = resolve("time_scale", params.time_scale)
    x = np.arange(num_points, dtype=float)
    return x, x / time_scale


def _message_values(params: AnalogParams, t: np.ndarray) -> np.ndarray:
    return params.message_amplitude * np.sin(params.message_freq * t)


def message(params: Optional[AnalogParams] = None) -> Series:
    """Message signal ``m(t) = Am*sin(fm*t)``."""
    params = params or AnalogParams()
    x, t = _analog_axis(params)
    return Series(x=x, y=_message_values(params, t), name="message")


def carrier(params: Optional[AnalogParams] = None) -> Series:
    """Unmodulated carrier ``c(t) = Ac*sin(fc*t)``."""
    params = params or AnalogParams()
    x, t = _analog_axis(params)
    y = params.carrier_amplitude * np.sin(params.carrier_freq * t)
    return Series(x=x, y=y, name="carrier")


def am(params: Optional[AnalogParams] = None) -> Series:
    """
    Amplitude modulation ``s(t) = (Ac + m(t)) * sin(fc*t)``.

    Args:
        params: Carrier and message parameters.

    Returns:
        A `Series` named ``"AM"``.
    """
    params = params or AnalogParams()
    x, t = _analog_axis(params)
    envelope = params.carrier_amplitude + _message_values(params, t)
    y = envelope * np.sin(params.carrier_freq * t)
    logger.debug(f"AM: Ac={params.carrier_amplitude}, fc={params.carrier_freq}.")
    return Series(x=x, y=y, name="AM")


def message_integral(params: AnalogParams, t: np.ndarray) -> np.ndarray:
    """
    Definite integral of the message from 0 to ``t``.

    ``Am*(1 - cos(fm*t))/fm``, which tends to 0 as ``fm`` goes to 0 (the
    message itself vanishes there).
    """
    fm_ = params.message_freq
    if fm_ == 0:
        return np.zeros_like(t)
    return params.message_amplitude * (1 - np.cos(fm_ * t)) / fm_


def fm(params: Optional[AnalogParams] = None) -> Series:
    """
    Frequency modulation ``s(t) = Ac*sin(fc*t + kf * integral(m))``.

    The integral starts at ``t = 0`` so the trace has no phase deviation at
    its first sample.

    Args:
        params: Carrier and message parameters. ``fm_sensitivity`` defaults
            to the configured ``kf``.

    Returns:
        A `Series` named ``"FM"``.
    """
    params = params or AnalogParams()
    kf = resolve("fm_sensitivity", params.fm_sensitivity)
    x, t = _analog_axis(params)
    phase = params.carrier_freq * t + kf * message_integral(params, t)
    y = params.carrier_amplitude * np.sin(phase)
    logger.debug(f"FM: kf={kf}, fc={params.carrier_freq}, fm={params.message_freq}.")
    return Series(x=x, y=y, name="FM")


def pm(params: Optional[AnalogParams] = None) -> Series:
    """
    Phase modulation ``s(t) = Ac*sin(fc*t + kp*m(t))``.

    Args:
        params: Carrier and message parameters. ``pm_sensitivity`` defaults
            to the configured ``kp``.

    Returns:
        A `Series` named ``"PM"``.
    """
    params = params or AnalogParams()
    kp = resolve("pm_sensitivity", params.pm_sensitivity)
    x, t = _analog_axis(params)
    phase = params.carrier_freq * t + kp * _message_values(params, t)
    y = params.carrier_amplitude * np.sin(phase)
    logger.debug(f"PM: kp={kp}, fc={params.carrier_freq}.")
    return Series(x=x, y=y, name="PM")


def analog_modulation_set(params: Optional[AnalogParams] = None) -> Dict[str, Series]:
    """Returns carrier, message, AM, FM and PM traces for the same parameters."""
    params = params or AnalogParams()
    logger.info(
        f"Generating analog modulation set: Ac={params.carrier_amplitude}, "
        f"fc={params.carrier_freq}, Am={params.message_amplitude}, fm={params.message_freq}."
    )
    return {
        "carrier": carrier(params),
        "message": message(params),
        "AM": am(params),
        "FM": fm(params),
        "PM": pm(params),
    }


# ============================================================================
# DIGITAL
# ============================================================================


def _digital_axis(params: DigitalParams) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    spb = resolve("samples_per_bit", params.samples_per_bit)
    time_scale = resolve("time_scale", params.time_scale)
    bit_per_sample = np.repeat(to_bit_array(params.bits), spb)
    x = np.arange(bit_per_sample.size, dtype=float)
    return x, x / time_scale, bit_per_sample


def ask(params: Optional[DigitalParams] = None) -> Series:
    """Amplitude shift keying: the carrier is on for 1 and off for 0."""
    params = params or DigitalParams()
    x, t, bits = _digital_axis(params)
    y = params.amplitude * bits * np.sin(params.frequency * t)
    return Series(x=x, y=y, name="ASK")


def fsk(params: Optional[DigitalParams] = None) -> Series:
    """Frequency shift keying: ``2*f`` for 1, ``f`` for 0."""
    params = params or DigitalParams()
    x, t, bits = _digital_axis(params)
    freq = np.where(bits == 1, 2 * params.frequency, params.frequency)
    y = params.amplitude * np.sin(freq * t)
    return Series(x=x, y=y, name="FSK")


def psk(params: Optional[DigitalParams] = None) -> Series:
    """Phase shift keying: phase 0 for 1, pi for 0."""
    params = params or DigitalParams()
    x, t, bits = _digital_axis(params)
    phase = np.where(bits == 1, 0.0, np.pi)
    y = params.amplitude * np.sin(params.frequency * t + phase)
    return Series(x=x, y=y, name="PSK")


_ANALOG: Dict[str, Callable[[AnalogParams], Series]] = {"AM": am, "FM": fm, "PM": pm}
_DIGITAL: Dict[str, Callable[[DigitalParams], Series]] = {
    "ASK": ask,
    "FSK": fsk,
    "PSK": psk,
}


def modulate(
    kind: str,
    params: Union[AnalogParams, DigitalParams, Dict[str, Any], None] = None,
    **kwargs: Any,
) -> Series:
    """
    Generate a modulated trace by name.

    Args:
        kind: One of 'AM', 'FM', 'PM', 'ASK', 'FSK', 'PSK' (case-insensitive).
        params: Parameter model or a plain dict of its fields. Keyword
            arguments override individual fields.

    Returns:
        The modulated `Series`.

    Raises:
        ConfigurationError: If ``kind`` is unknown.
    """
    name = kind.upper() if isinstance(kind, str) else kind
    if name in _ANALOG:
        model, generator = AnalogParams, _ANALOG[name]
    elif name in _DIGITAL:
        model, generator = DigitalParams, _DIGITAL[name]
    else:
        raise ConfigurationError(
            f"Unknown modulation kind: {kind!r}. "
            f"Supported: {sorted(_ANALOG) + sorted(_DIGITAL)}"
        )

    if params is None:
        params = model(**kwargs)
    elif isinstance(params, dict):
        params = model(**{**params, **kwargs})
    elif not isinstance(params, model):
        raise ConfigurationError(
            f"{name} expects {model.__name__}, got {type(params).__name__}."
        )
    elif kwargs:
        params = model(**{**params.model_dump(), **kwargs})

    logger.info(f"Generating {name} trace.")
    return generator(params)
