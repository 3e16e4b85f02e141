"""Figure for the paired seed-set comparison."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from alpine_phenology.renderers.plot_utils import COLORS, new_figure

if TYPE_CHECKING:
    from matplotlib.figure import Figure

_PANELS = (
    ("rel_seedset", "Relative seed-set (%)"),
    ("flowers", "Flowering units"),
)


def build_seedset_figure(table: dict[str, Any]) -> Figure:
    """Per-plot lines between the two comparison years, one panel per variable.

    Args:
        table: Stored seed-set table with ``years``, ``pairs`` (rows holding
            ``plot`` and ``<variable>_first`` / ``<variable>_second``) and
            ``tests`` (``PairedTestResult`` fields).
    """
    fig, axes = new_figure(figsize=(10.0, 4.5), ncols=2)
    first, second = table.get("years", [0, 0])
    pairs = table.get("pairs", [])
    tests = {t["variable"]: t for t in table.get("tests", [])}

    for ax, (variable, label) in zip(axes, _PANELS):
        ax.set_xticks([0, 1], [str(first), str(second)])
        ax.set_xlim(-0.3, 1.3)
        ax.set_ylabel(label)
        for pair in pairs:
            ax.plot([0, 1], [pair[f"{variable}_first"], pair[f"{variable}_second"]],
                    marker="o", color=COLORS["muted"], alpha=0.6, linewidth=1)
        if pairs:
            means = [
                sum(p[f"{variable}_first"] for p in pairs) / len(pairs),
                sum(p[f"{variable}_second"] for p in pairs) / len(pairs),
            ]
            ax.plot([0, 1], means, marker="s", color=COLORS["primary"], linewidth=2.5,
                    label="Mean")
            ax.legend(fontsize=8, loc="best")

        result = tests.get(variable)
        title = label
        if result and result.get("p_value") is not None:
            title = f"{label}\npaired t = {result['t_statistic']:.2f}, p = {result['p_value']:.3f}"
        ax.set_title(title, fontsize=10, fontweight="bold")
    return fig
