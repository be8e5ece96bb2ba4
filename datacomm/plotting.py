from typing import Any, Dict, Optional, Sequence, Tuple, Union

import matplotlib as mpl
import matplotlib.font_manager as fm
import matplotlib.pyplot as plt

from .bits import BitsLike, to_bit_string
from .core import Series
from .fdm import GUARD, SpectrumBlock
from .line_coding import EncodingScheme, encode_line
from .logger import logger


def apply_default_theme() -> None:
    try:
        font_prop = fm.FontProperties(family="Roboto", weight="regular")
        fm.findfont(font_prop, fallback_to_default=False)
        font_name = "Roboto"
    except ValueError:
        font_name = "sans"
        logger.debug("Roboto font not found, falling back to default sans-serif.")

    mpl.rcParams.update(
        {
            "figure.figsize": (6, 3.5),
            "font.family": font_name,
            "font.size": 12,
            "lines.linewidth": 2,
            "axes.linewidth": 1,
            "axes.grid": True,
            "axes.titleweight": "bold",
            "figure.autolayout": True,
            "figure.facecolor": "white",
            "savefig.facecolor": "white",
            "savefig.dpi": 300,
            "xtick.direction": "in",
            "ytick.direction": "in",
            "xtick.top": True,
            "ytick.right": True,
        }
    )


def _figure(ax: Optional[Any]) -> Tuple[Any, Any]:
    if ax is None:
        return plt.subplots()
    return ax.figure, ax


def _finish(fig: Any, ax: Any, show: bool) -> Optional[Tuple[Any, Any]]:
    if show:
        plt.show()
        return None
    return fig, ax


def series(
    data: Union[Series, Sequence[Series]],
    ax: Optional[Any] = None,
    title: Optional[str] = None,
    step: bool = False,
    xlabel: str = "Time",
    ylabel: str = "Amplitude",
    show: bool = False,
    **kwargs: Any,
) -> Optional[Tuple[Any, Any]]:
    """
    Plots one or more series on a shared axis.

    Args:
        data: A `Series` or a sequence of them. Named series get a legend entry.
        ax: Optional matplotlib axis to plot on.
        title: Title of the plot. If None, no title is set.
        step: Draw a step trace (level held until the next sample).
        xlabel: Label of the x axis.
        ylabel: Label of the y axis.
        show: Whether to call plt.show() after plotting.
        **kwargs: Additional arguments passed to ax.plot / ax.step.

    Returns:
        Tuple of (figure, axis) if show is False, else None.
    """
    fig, ax = _figure(ax)
    traces = [data] if isinstance(data, Series) else list(data)

    for trace in traces:
        draw = ax.step if step else ax.plot
        extra = {"where": "post"} if step else {}
        draw(trace.x, trace.y, label=trace.name or None, **extra, **kwargs)

    if any(trace.name for trace in traces) and len(traces) > 1:
        ax.legend()
    ax.set_xlabel(xlabel)
    ax.set_ylabel(ylabel)
    if title is not None:
        ax.set_title(title)
    return _finish(fig, ax, show)


def line_code(
    bits: BitsLike,
    scheme: Union[str, EncodingScheme],
    ax: Optional[Any] = None,
    title: Optional[str] = None,
    show: bool = False,
    **kwargs: Any,
) -> Optional[Tuple[Any, Any]]:
    """
    Plots the line-coded trace of ``bits`` with one label per bit interval.

    Args:
        bits: Bit string or sequence.
        scheme: Encoding scheme or its name.
        ax: Optional matplotlib axis to plot on.
        title: Title of the plot. Defaults to the scheme name.
        show: Whether to call plt.show() after plotting.
        **kwargs: Additional arguments passed to ax.plot.

    Returns:
        Tuple of (figure, axis) if show is False, else None.
    """
    fig, ax = _figure(ax)
    bit_string = to_bit_string(bits)
    trace = encode_line(bit_string, scheme)

    # Points already carry both ends of every level, a plain line is a step.
    ax.plot(trace.x, trace.y, **kwargs)
    ax.axhline(0, color="grey", linewidth=0.8)
    ax.set_ylim(-1.5, 1.5)
    ax.set_yticks([-1, 0, 1])
    ax.set_xlim(0, max(len(bit_string), 1))
    ax.set_xticks(range(len(bit_string) + 1))
    for i, bit in enumerate(bit_string):
        ax.text(i + 0.5, 1.25, bit, ha="center", va="center")
    ax.set_xlabel("Bit")
    ax.set_ylabel("Level")
    ax.set_title(title if title is not None else trace.name)
    return _finish(fig, ax, show)


def spectrum_layout(
    blocks: Sequence[SpectrumBlock],
    colors: Optional[Dict[int, str]] = None,
    ax: Optional[Any] = None,
    title: Optional[str] = "Spectrum allocation",
    show: bool = False,
) -> Optional[Tuple[Any, Any]]:
    """
    Draws an FDM layout as coloured frequency spans.

    Args:
        blocks: Layout from `layout_fdm`.
        colors: Optional sender id to color mapping.
        ax: Optional matplotlib axis to plot on.
        title: Title of the plot. If None, no title is set.
        show: Whether to call plt.show() after plotting.

    Returns:
        Tuple of (figure, axis) if show is False, else None.
    """
    fig, ax = _figure(ax)
    colors = colors or {}

    for i, block in enumerate(blocks):
        if block.kind == GUARD:
            ax.axvspan(block.start_freq, block.end_freq, color="lightgrey", hatch="//")
        else:
            color = colors.get(block.owner, f"C{i % 10}")
            ax.axvspan(block.start_freq, block.end_freq, color=color, alpha=0.6)
            ax.text(block.center, 0.5, f"S{block.owner}", ha="center", va="center")

    if blocks:
        ax.set_xlim(blocks[0].start_freq, blocks[-1].end_freq)
    ax.set_yticks([])
    ax.set_xlabel("Frequency [Hz]")
    if title is not None:
        ax.set_title(title)
    return _finish(fig, ax, show)
