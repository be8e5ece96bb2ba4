"""
datacomm: data-communication theory signal toolkit.

This package provides the numeric core of an interactive teaching tool:
- Generating basic waveforms (sine, square).
- Line coding bit strings (NRZ, RZ, Manchester, AMI, MLT-3, ...).
- Analog (AM/FM/PM) and digital (ASK/FSK/PSK) modulation.
- Filtering and envelope demodulation walkthroughs.
- Nyquist/Shannon capacity, SNR and latency calculators.
- TDM frame scheduling and FDM spectrum layout.
"""

from . import demodulation, fdm, filtering, line_coding, metrics, modulation, tdm
from .core import Sender, Series, SimulationConfig, clear_config, get_config, set_config
from .errors import ConfigurationError, DataCommError, DomainError, ExpressionError
from .filtering import moving_average as filter_moving_average
from .line_coding import EncodingScheme, decode_line, encode_line
from .logger import set_log_level
from .metrics import nyquist_rate, shannon_capacity, snr_db
from .modulation import modulate
from .plotting import apply_default_theme
from .fdm import layout_fdm
from .tdm import schedule_tdm
from .waveforms import generate_wave

__all__ = [
    "Series",
    "Sender",
    "SimulationConfig",
    "set_config",
    "get_config",
    "clear_config",
    "EncodingScheme",
    "ConfigurationError",
    "DataCommError",
    "DomainError",
    "ExpressionError",
    "generate_wave",
    "encode_line",
    "decode_line",
    "modulate",
    "filter_moving_average",
    "nyquist_rate",
    "shannon_capacity",
    "snr_db",
    "schedule_tdm",
    "layout_fdm",
    "demodulation",
    "fdm",
    "filtering",
    "line_coding",
    "metrics",
    "modulation",
    "tdm",
    "set_log_level",
]

apply_default_theme()
