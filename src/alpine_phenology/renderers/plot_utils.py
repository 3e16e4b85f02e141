"""Shared matplotlib styling helpers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from matplotlib.figure import Figure

if TYPE_CHECKING:
    from matplotlib.axes import Axes

DEFAULT_FIGSIZE = (8.0, 4.5)

# Series colours, consistent across all figures
COLORS = {
    "primary": "#2E86AB",
    "secondary": "#A23B72",
    "accent": "#F18F01",
    "muted": "#6c757d",
    "outlier": "#C73E1D",
}


def new_figure(
    figsize: tuple[float, float] = DEFAULT_FIGSIZE,
    ncols: int = 1,
) -> tuple[Figure, list[Axes]]:
    """Create a figure with ``ncols`` side-by-side axes.

    Uses the object-oriented ``Figure`` API rather than pyplot, so renderers
    keep no global state and figures are garbage-collected normally.
    """
    fig = Figure(figsize=figsize, layout="constrained")
    axes = [fig.add_subplot(1, ncols, i + 1) for i in range(ncols)]
    for ax in axes:
        ax.grid(True, alpha=0.3, linestyle="--")
    return fig, axes
