# src/histnd/viz/plot_histogram.py
"""
plot_histogram.py
=================

Quicklook figures for 1-D and 2-D histograms.

Design (same as other histnd.viz modules)
-----------------------------------------
• Pure plotting: takes bin edges + values, returns matplotlib Figure/Axes.
• Image orientation follows raw output: dimension 0 on x, origin lower left.
"""

from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np
import matplotlib
matplotlib.use("Agg")  # safe for headless execution
import matplotlib.pyplot as plt  # noqa: E402

from .style import default_fig_ax, histogram_header


def plot_histogram(
    edges: Sequence[np.ndarray],
    values: np.ndarray,
    *,
    relative: bool,
    total: int,
    accepted: int,
) -> Tuple[plt.Figure, plt.Axes]:
    """
    Plot a 1-D histogram as bars or a 2-D histogram as an image.

    Parameters
    ----------
    edges : list of (n_d + 1,) arrays
        Bin edges per dimension.
    values : array, shape (n_0,) or (n_0, n_1)
        Counts or relative frequencies.
    """
    values = np.asarray(values)
    if values.ndim != len(edges):
        raise ValueError(f"values has {values.ndim} dims but {len(edges)} edge arrays were given")

    label = "relative frequency" if relative else "count"
    if values.ndim == 1:
        return _plot_1d(edges[0], values, label=label, total=total, accepted=accepted)
    if values.ndim == 2:
        return _plot_2d(edges[0], edges[1], values, label=label, total=total, accepted=accepted)
    raise ValueError(f"Only 1-D and 2-D histograms can be plotted (got {values.ndim}-D)")


def _plot_1d(x_edges, values, *, label: str, total: int, accepted: int):
    fig, ax = default_fig_ax()
    x_edges = np.asarray(x_edges, float)
    widths = np.diff(x_edges)
    ax.bar(x_edges[:-1], values, width=widths, align="edge", edgecolor="k", lw=0.5)
    ax.set_ylabel(label)
    histogram_header(ax, total=total, accepted=accepted, subtitle="1-D histogram")
    return fig, ax


def _plot_2d(x_edges, y_edges, values, *, label: str, total: int, accepted: int):
    fig, ax = default_fig_ax(figsize=(7, 6))
    # values is indexed [x, y]; pcolormesh wants [y, x]
    mesh = ax.pcolormesh(
        np.asarray(x_edges, float),
        np.asarray(y_edges, float),
        np.asarray(values, float).T,
        shading="flat",
        cmap="gray",
    )
    fig.colorbar(mesh, ax=ax, label=label)
    ax.set_ylabel("dimension 1")
    ax.grid(False)
    histogram_header(ax, total=total, accepted=accepted, subtitle="2-D histogram")
    return fig, ax


def save_figure(fig: plt.Figure, path, dpi: int = 160) -> None:
    fig.savefig(path, dpi=dpi, bbox_inches="tight")
    plt.close(fig)
