"""
style.py
========

Central plotting style helpers.
"""

from __future__ import annotations

from typing import Optional, Tuple
import matplotlib.pyplot as plt


def apply_mpl_defaults() -> None:
    """
    Apply lightweight defaults. Call once per plotting session.
    """
    plt.rcParams["figure.dpi"] = 120
    plt.rcParams["savefig.dpi"] = 160
    plt.rcParams["axes.grid"] = True
    plt.rcParams["grid.alpha"] = 0.25
    plt.rcParams["axes.titlesize"] = 11
    plt.rcParams["axes.labelsize"] = 11


def histogram_header(ax: plt.Axes, *, total: int, accepted: int, subtitle: Optional[str] = None) -> None:
    """Standard title header for histogram plots."""
    title = f"{accepted} of {total} tuples in range"
    if subtitle:
        title = f"{title}\n{subtitle}"
    ax.set_title(title)


def default_fig_ax(figsize: Tuple[float, float] = (7, 5)):
    """Create a figure+axis with consistent defaults."""
    fig, ax = plt.subplots(figsize=figsize)
    ax.set_xlabel("dimension 0")
    return fig, ax
