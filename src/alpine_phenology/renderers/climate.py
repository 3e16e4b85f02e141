"""Figures for the yearly climate indices."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any

from alpine_phenology.analysis.summary import SummaryStats, outliers
from alpine_phenology.renderers.plot_utils import COLORS, new_figure

if TYPE_CHECKING:
    from matplotlib.axes import Axes
    from matplotlib.figure import Figure


def _number(value: Any) -> float:
    return math.nan if value is None else float(value)


def _no_data(ax: Axes) -> None:
    ax.text(0.5, 0.5, "No data", ha="center", va="center", transform=ax.transAxes,
            color=COLORS["muted"])


def build_yearly_values_figure(
    table: dict[str, Any],
    value_key: str,
    title: str,
    ylabel: str,
) -> Figure:
    """Plot one value per year with median, IQR fences and labelled outliers.

    Args:
        table: Stored table with ``values`` (list of dicts holding ``year`` and
            ``value_key``) and an optional ``summary`` (``SummaryStats`` fields).
        value_key: Key of the plotted value in each row.
        title: Axes title.
        ylabel: Y-axis label.
    """
    fig, (ax,) = new_figure()
    ax.set_title(title, fontweight="bold")
    ax.set_xlabel("Year")
    ax.set_ylabel(ylabel)

    rows = [r for r in table.get("values", []) if r.get(value_key) is not None]
    if not rows:
        _no_data(ax)
        return fig

    years = [int(r["year"]) for r in rows]
    values = [float(r[value_key]) for r in rows]
    ax.plot(years, values, marker="o", linewidth=1.5, color=COLORS["primary"], label=ylabel)

    summary = table.get("summary")
    if summary:
        stats = SummaryStats(**summary)
        ax.axhline(stats.median, color=COLORS["muted"], linewidth=1, label="Median")
        ax.axhline(stats.upper_fence, color=COLORS["outlier"], linestyle="--", linewidth=1,
                   label="IQR fences")
        ax.axhline(stats.lower_fence, color=COLORS["outlier"], linestyle="--", linewidth=1)
        for year, value in outliers(dict(zip(years, values)), stats).items():
            ax.annotate(str(year), (year, value), textcoords="offset points", xytext=(4, 4),
                        fontsize=8, color=COLORS["outlier"])
    ax.legend(fontsize=8, loc="best")
    return fig


def build_growing_season_figure(
    table: dict[str, Any],
    window: tuple[int, int],
) -> Figure:
    """Growing-season start and end day per year against the fixed analysis window."""
    fig, (ax,) = new_figure()
    ax.set_title("Growing season (5-day runs above 5 °C)", fontweight="bold")
    ax.set_xlabel("Year")
    ax.set_ylabel("Day of year")

    rows = table.get("values", [])
    ax.axhspan(window[0], window[1], color=COLORS["accent"], alpha=0.15,
               label=f"Analysis window {window[0]}-{window[1]}")
    if not rows:
        _no_data(ax)
        return fig

    years = [int(r["year"]) for r in rows]
    ax.plot(years, [r["start_doy"] for r in rows], marker="^", color=COLORS["primary"],
            label="Start")
    ax.plot(years, [r["end_doy"] for r in rows], marker="v", color=COLORS["secondary"],
            label="End")

    envelope = table.get("envelope")
    if envelope:
        ax.axhline(envelope[0], color=COLORS["primary"], linestyle=":", linewidth=1)
        ax.axhline(envelope[1], color=COLORS["secondary"], linestyle=":", linewidth=1)
    ax.legend(fontsize=8, loc="best")
    return fig


def build_july_figure(table: dict[str, Any]) -> Figure:
    """July highest maximum, mean and lowest minimum temperature per year."""
    fig, (ax,) = new_figure()
    ax.set_title("July temperatures", fontweight="bold")
    ax.set_xlabel("Year")
    ax.set_ylabel("Temperature (°C)")

    rows = table.get("values", [])
    if not rows:
        _no_data(ax)
        return fig

    years = [int(r["year"]) for r in rows]
    series = (
        ("tax_max", "Highest daily maximum", COLORS["secondary"]),
        ("tam_mean", "Monthly mean", COLORS["primary"]),
        ("tan_min", "Lowest daily minimum", COLORS["accent"]),
    )
    for key, label, color in series:
        ax.plot(years, [_number(r.get(key)) for r in rows], marker="o", color=color, label=label)
    ax.legend(fontsize=8, loc="best")
    return fig
