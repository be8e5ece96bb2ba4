"""
Frequency Division Multiplexing.

This module lays senders out across a shared spectrum and builds the
combined time-domain trace shown next to the spectrum view.

The combined trace is a display approximation: each sender's equation is
sampled, optionally multiplied by a cosine whose rate follows the centre of
its spectrum block (scaled by ``fdm_frequency_scale`` so it stays visible),
and the results are summed. It is not a true frequency-translated composite
signal.
"""

from dataclasses import dataclass
from typing import Dict, List, NamedTuple, Optional, Sequence

import numpy as np

from .core import Sender, Series
from .core.config import resolve
from .core.sender import check_unique_ids
from .errors import DomainError
from .expression import compile_expression
from .logger import logger
from .utils import format_si, sample_grid

SIGNAL = "signal"
GUARD = "guard"


@dataclass(frozen=True)
class SpectrumBlock:
    """
    A contiguous frequency range, either owned by a sender or left as guard.

    Attributes:
        kind: 'signal' or 'guard'.
        start_freq: Lower edge in Hz.
        end_freq: Upper edge in Hz.
        owner: Sender id for signal blocks, None for guards.
    """

    kind: str
    start_freq: float
    end_freq: float
    owner: Optional[int] = None

    @property
    def width(self) -> float:
        return self.end_freq - self.start_freq

    @property
    def center(self) -> float:
        return (self.start_freq + self.end_freq) / 2


def layout_fdm(
    senders: Sequence[Sender],
    guard_band: Optional[float] = None,
    start_freq: float = 0.0,
) -> List[SpectrumBlock]:
    """
    Places each sender's bandwidth contiguously, in order, with a guard band
    between adjacent senders.

    The blocks tile ``[start_freq, start_freq + total]`` without gaps or
    overlap, where ``total = sum(bandwidths) + (n - 1) * guard_band``. Zero
    width guard bands produce no guard blocks.

    Args:
        senders: Senders in spectrum order.
        guard_band: Guard width in Hz (config ``guard_band``).
        start_freq: Lower edge of the first block.

    Returns:
        Signal and guard blocks in ascending frequency.

    Raises:
        DomainError: If the guard band, start frequency or a bandwidth is negative.
        ConfigurationError: If two senders share an id.
    """
    check_unique_ids(senders)
    guard_band = resolve("guard_band", guard_band)
    if guard_band < 0:
        raise DomainError(f"Guard band must be non-negative, got {guard_band}.")
    if start_freq < 0:
        raise DomainError(f"Start frequency must be non-negative, got {start_freq}.")

    blocks: List[SpectrumBlock] = []
    edge = float(start_freq)
    for i, sender in enumerate(senders):
        if sender.bandwidth < 0:
            raise DomainError(
                f"{sender.display_name} has negative bandwidth {sender.bandwidth}."
            )
        if i > 0 and guard_band > 0:
            blocks.append(SpectrumBlock(GUARD, edge, edge + guard_band))
            edge += guard_band
        blocks.append(SpectrumBlock(SIGNAL, edge, edge + sender.bandwidth, sender.id))
        edge += sender.bandwidth

    logger.info(
        f"FDM layout: {len(senders)} sender(s), guard={format_si(guard_band)}, "
        f"total={format_si(spectrum_width(blocks))}."
    )
    return blocks


def spectrum_width(blocks: Sequence[SpectrumBlock]) -> float:
    """Total width covered by a layout."""
    if not blocks:
        return 0.0
    return blocks[-1].end_freq - blocks[0].start_freq


class FdmSignal(NamedTuple):
    components: Dict[int, Series]
    composite: Series
    blocks: List[SpectrumBlock]


def composite_signal(
    senders: Sequence[Sender],
    guard_band: Optional[float] = None,
    num_points: Optional[int] = None,
    time_scale: Optional[float] = None,
    shift: bool = True,
) -> FdmSignal:
    """
    Samples every sender's equation and sums them pointwise.

    Args:
        senders: Senders in spectrum order.
        guard_band: Guard width in Hz used for the layout.
        num_points: Number of samples (config ``analog_points``).
        time_scale: Sample index to time divisor (config ``time_scale``).
        shift: Multiply each component by ``cos(center * scale * t)`` so
            senders occupying different blocks look different.

    Returns:
        `FdmSignal` with one component per sender id, their sum and the
        spectrum layout.

    Raises:
        ExpressionError: If a sender's equation cannot be parsed.
        ConfigurationError: If two senders share an id.
    """
    num_points = resolve("analog_points", num_points)
    time_scale = resolve("time_scale", time_scale)
    scale = resolve("fdm_frequency_scale", None)

    blocks = layout_fdm(senders, guard_band)
    centers = {b.owner: b.center for b in blocks if b.kind == SIGNAL}
    x, t = sample_grid(num_points, time_scale)

    components: Dict[int, Series] = {}
    total = np.zeros_like(t)
    for sender in senders:
        y = compile_expression(sender.expression)(t)
        if shift:
            y = y * np.cos(centers[sender.id] * scale * t)
        components[sender.id] = Series(x=x, y=y, name=sender.display_name)
        total = total + y

    logger.info(f"Combined {len(senders)} FDM component(s) over {num_points} samples.")
    return FdmSignal(components, Series(x=x, y=total, name="composite"), blocks)
