"""
Line coding.

This module maps bit strings onto piecewise-constant voltage traces for the
classic line codes:
- NRZ-L and NRZ-I (non-return-to-zero, level and invert).
- RZ (polar return-to-zero).
- Manchester and Differential Manchester (mid-bit transitions).
- AMI and Pseudoternary (bipolar).
- MLT-3 (three-level cycle).

Encoding is a fold over the bits: every scheme has an initial
`LineCodeState` and a pure transition ``(state, bit) -> (state, levels)``.
``levels`` holds one value for a full-bit level or two values when the bit
interval is split at its middle.

Functions
---------
encode :
    Folds a bit string into ``(final_state, Series)``.
encode_line :
    Convenience wrapper returning only the `Series`.
decode_line :
    Recovers the bit string from an encoded `Series`.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Dict, List, Tuple, Union

import numpy as np

from .bits import BitsLike, to_bit_array
from .core import Series
from .errors import ConfigurationError, DomainError
from .logger import logger


class EncodingScheme(str, Enum):
    """Supported line codes. Values are the display names."""

    NRZ_L = "NRZ-L"
    NRZ_I = "NRZ-I"
    RZ = "RZ"
    MANCHESTER = "Manchester"
    DIFF_MANCHESTER = "Diff-Manchester"
    AMI = "AMI"
    PSEUDOTERNARY = "Pseudoternary"
    MLT3 = "MLT-3"

    @classmethod
    def parse(cls, scheme: Union[str, "EncodingScheme"]) -> "EncodingScheme":
        """
        Resolves a scheme from its enum member, display name or a loose
        spelling such as ``"nrz_l"`` or ``"diff manchester"``.

        Raises:
            ConfigurationError: If the name matches no scheme.
        """
        if isinstance(scheme, cls):
            return scheme
        if isinstance(scheme, str):
            key = _normalize_name(scheme)
            for member in cls:
                if key in (_normalize_name(member.value), _normalize_name(member.name)):
                    return member
        raise ConfigurationError(
            f"Unknown encoding scheme: {scheme!r}. "
            f"Supported: {[m.value for m in cls]}"
        )


def _normalize_name(name: str) -> str:
    return "".join(ch for ch in name.lower() if ch.isalnum())


@dataclass(frozen=True)
class LineCodeState:
    """
    Memory carried from one bit to the next.

    Attributes:
        level: Current output level (NRZ-I, Diff-Manchester, AMI, MLT-3).
        last_nonzero: Last nonzero level emitted (AMI, Pseudoternary) or left
            (MLT-3).
    """

    level: int = 0
    last_nonzero: int = -1


Levels = Tuple[int, ...]
Transition = Callable[[LineCodeState, int], Tuple[LineCodeState, Levels]]


def _nrz_l(state: LineCodeState, bit: int) -> Tuple[LineCodeState, Levels]:
    return state, (-1 if bit else 1,)


def _nrz_i(state: LineCodeState, bit: int) -> Tuple[LineCodeState, Levels]:
    level = -state.level if bit else state.level
    return replace(state, level=level), (level,)


def _rz(state: LineCodeState, bit: int) -> Tuple[LineCodeState, Levels]:
    return state, (1 if bit else -1, 0)


def _manchester(state: LineCodeState, bit: int) -> Tuple[LineCodeState, Levels]:
    return state, ((-1, 1) if bit else (1, -1))


def _diff_manchester(state: LineCodeState, bit: int) -> Tuple[LineCodeState, Levels]:
    # A zero inverts at the bit start; every bit inverts at mid-bit.
    start = state.level if bit else -state.level
    mid = -start
    return replace(state, level=mid), (start, mid)


def _alternate(state: LineCodeState) -> Tuple[LineCodeState, Levels]:
    level = -state.last_nonzero
    return LineCodeState(level=level, last_nonzero=level), (level,)


def _ami(state: LineCodeState, bit: int) -> Tuple[LineCodeState, Levels]:
    if not bit:
        return replace(state, level=0), (0,)
    return _alternate(state)


def _pseudoternary(state: LineCodeState, bit: int) -> Tuple[LineCodeState, Levels]:
    if bit:
        return replace(state, level=0), (0,)
    return _alternate(state)


def _mlt3(state: LineCodeState, bit: int) -> Tuple[LineCodeState, Levels]:
    if not bit:
        return state, (state.level,)
    if state.level != 0:
        return LineCodeState(level=0, last_nonzero=state.level), (0,)
    level = -state.last_nonzero
    return replace(state, level=level), (level,)


_TRANSITIONS: Dict[EncodingScheme, Transition] = {
    EncodingScheme.NRZ_L: _nrz_l,
    EncodingScheme.NRZ_I: _nrz_i,
    EncodingScheme.RZ: _rz,
    EncodingScheme.MANCHESTER: _manchester,
    EncodingScheme.DIFF_MANCHESTER: _diff_manchester,
    EncodingScheme.AMI: _ami,
    EncodingScheme.PSEUDOTERNARY: _pseudoternary,
    EncodingScheme.MLT3: _mlt3,
}

_MID_BIT_SCHEMES = frozenset(
    {EncodingScheme.RZ, EncodingScheme.MANCHESTER, EncodingScheme.DIFF_MANCHESTER}
)


def has_mid_bit_transition(scheme: Union[str, EncodingScheme]) -> bool:
    """True if every bit interval of ``scheme`` is split at its middle."""
    return EncodingScheme.parse(scheme) in _MID_BIT_SCHEMES


def points_per_bit(scheme: Union[str, EncodingScheme]) -> int:
    """Number of (x, y) samples `encode` emits per bit: 4 or 2."""
    return 4 if has_mid_bit_transition(scheme) else 2


def initial_state(scheme: Union[str, EncodingScheme]) -> LineCodeState:
    """Returns the state a fresh encode pass starts from."""
    scheme = EncodingScheme.parse(scheme)
    if scheme in (EncodingScheme.NRZ_I, EncodingScheme.DIFF_MANCHESTER):
        return LineCodeState(level=1)
    return LineCodeState()


def transition(
    scheme: Union[str, EncodingScheme], state: LineCodeState, bit: int
) -> Tuple[LineCodeState, Levels]:
    """
    Applies one bit to ``state``.

    Returns:
        The next state and the one or two levels the bit occupies.
    """
    return _TRANSITIONS[EncodingScheme.parse(scheme)](state, int(bit))


def _bit_points(index: int, levels: Levels) -> List[Tuple[float, float]]:
    if len(levels) == 1:
        (level,) = levels
        return [(index, level), (index + 1, level)]
    first, second = levels
    mid = index + 0.5
    return [(index, first), (mid, first), (mid, second), (index + 1, second)]


def encode(
    bits: BitsLike, scheme: Union[str, EncodingScheme]
) -> Tuple[LineCodeState, Series]:
    """
    Encodes ``bits`` with ``scheme``.

    Bit ``i`` occupies the interval ``[i, i+1]`` of the x axis. Schemes
    without a mid-bit transition emit ``(i, L), (i+1, L)``; the others emit
    ``(i, L1), (i+0.5, L1), (i+0.5, L2), (i+1, L2)``.

    Args:
        bits: Bit string (sanitized) or sequence of 0/1.
        scheme: Encoding scheme or its name.

    Returns:
        Tuple of (final_state, series).

    Raises:
        ConfigurationError: If ``scheme`` is unknown.
    """
    scheme = EncodingScheme.parse(scheme)
    step = _TRANSITIONS[scheme]
    bit_values = to_bit_array(bits).tolist()

    state = initial_state(scheme)
    points: List[Tuple[float, float]] = []
    for i, bit in enumerate(bit_values):
        state, levels = step(state, bit)
        points.extend(_bit_points(i, levels))

    logger.info(f"Encoded {len(bit_values)} bit(s) with {scheme.value}.")
    return state, Series.from_points(points, name=scheme.value)


def encode_line(bits: BitsLike, scheme: Union[str, EncodingScheme]) -> Series:
    """Encodes ``bits`` with ``scheme`` and returns only the voltage trace."""
    return encode(bits, scheme)[1]


def decode_line(series: Series, scheme: Union[str, EncodingScheme]) -> str:
    """
    Recovers the bit string from a trace produced by `encode_line`.

    Args:
        series: Encoded trace.
        scheme: Scheme the trace was encoded with.

    Returns:
        The decoded bit string.

    Raises:
        ConfigurationError: If ``scheme`` is unknown.
        DomainError: If the trace length does not match the scheme's layout.
    """
    scheme = EncodingScheme.parse(scheme)
    stride = points_per_bit(scheme)
    y = series.y
    if y.size % stride:
        raise DomainError(
            f"{scheme.value} traces hold {stride} samples per bit, got {y.size} samples."
        )
    if y.size == 0:
        return ""

    first = y[0::stride]
    second = y[2::stride] if stride == 4 else first

    if scheme is EncodingScheme.NRZ_L:
        bits = first < 0
    elif scheme is EncodingScheme.NRZ_I:
        bits = first != np.concatenate(([1.0], first[:-1]))
    elif scheme is EncodingScheme.RZ:
        bits = first > 0
    elif scheme is EncodingScheme.MANCHESTER:
        bits = first < 0
    elif scheme is EncodingScheme.DIFF_MANCHESTER:
        # No inversion at the bit start means a one.
        bits = first == np.concatenate(([1.0], second[:-1]))
    elif scheme is EncodingScheme.AMI:
        bits = first != 0
    elif scheme is EncodingScheme.PSEUDOTERNARY:
        bits = first == 0
    else:
        bits = first != np.concatenate(([0.0], first[:-1]))

    decoded = "".join("1" if b else "0" for b in bits)
    logger.debug(f"Decoded {len(decoded)} bit(s) from {scheme.value} trace.")
    return decoded
