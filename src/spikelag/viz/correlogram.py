"""Bar plots of lag histograms."""

from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt

from ..core.histogram import Histogram
from .styles import BAR_STYLE, apply_style


def plot_histogram(ax: plt.Axes, hist: Histogram, **kwargs) -> None:
    """Draw ``hist`` as adjacent bars on ``ax``."""
    style = {**BAR_STYLE, **kwargs}
    ax.bar(hist.centers, hist.counts, width=hist.bucket_width, align="center", **style)
    ax.set_xlim(hist.lo, hist.hi)


def save_or_show(fig: plt.Figure, save: str | Path | None = None, show: bool = False) -> None:
    """Save ``fig`` to ``save`` or display it interactively.

    If ``save`` is ``None`` the figure will only be shown when ``show`` is
    True.  When both are unset the figure is shown by default to give quick
    feedback during inspection.
    """
    if save:
        fig.savefig(save, bbox_inches="tight")
    if show or not save:
        plt.show()


def plot_correlogram(
    hist: Histogram,
    *,
    title: str = "Cross-correlogram",
    xlabel: str = "Lag",
    save: str | Path | None = None,
    show: bool = False,
) -> plt.Figure:
    """Render ``hist`` in a new styled figure and save or show it."""

    apply_style()
    fig, ax = plt.subplots()
    plot_histogram(ax, hist)
    ax.set_title(title)
    ax.set_xlabel(xlabel)
    ax.set_ylabel("Count")
    fig.tight_layout()
    save_or_show(fig, save, show)
    return fig
