"""HTML report summarising the stored tables."""

from __future__ import annotations

from typing import Any

from alpine_phenology.renderers import render_template

# Table key -> heading, in report order
SUMMARY_SECTIONS = (
    ("tdd_yearly", "Thawing degree days, full years"),
    ("tdd_frost", "Thawing degree days through the last frost"),
    ("flowering_min_temp", "Minimum temperature in the flowering window"),
)

_STAT_FIELDS = ("n", "min", "q1", "median", "mean", "q3", "max", "iqr",
                "lower_fence", "upper_fence", "sd", "se")


def _fmt(value: Any, digits: int = 2) -> str:
    if value is None:
        return "–"
    if isinstance(value, int):
        return str(value)
    return f"{value:.{digits}f}"


def _summary_rows(tables: dict[str, Any]) -> list[dict[str, Any]]:
    rows = []
    for key, heading in SUMMARY_SECTIONS:
        summary = (tables.get(key) or {}).get("summary")
        if not summary:
            continue
        rows.append({"heading": heading, "cells": [_fmt(summary[f]) for f in _STAT_FIELDS]})
    return rows


def _test_rows(seedset: dict[str, Any] | None) -> list[dict[str, str]]:
    if not seedset:
        return []
    return [
        {
            "variable": t["variable"],
            "n": _fmt(t["n"]),
            "mean_difference": _fmt(t["mean_difference"]),
            "shapiro": f"W = {_fmt(t['shapiro_w'], 3)}, p = {_fmt(t['shapiro_p'], 3)}",
            "ttest": f"t({t['df']}) = {_fmt(t['t_statistic'])}, p = {_fmt(t['p_value'], 4)}",
        }
        for t in seedset.get("tests", [])
    ]


def build_report_html(
    tables: dict[str, Any],
    figures: list[str],
    generated_at: str,
) -> str:
    """Render the full report page.

    Args:
        tables: Table key -> stored payload (missing tables may be None).
        figures: Figure file names relative to the report's ``figures/`` sibling.
        generated_at: Timestamp shown in the page header.

    Returns:
        Complete HTML document.
    """
    completeness = tables.get("completeness") or {}
    growing = tables.get("growing_season") or {}
    seedset = tables.get("seedset")
    return render_template(
        "report.html.j2",
        generated_at=generated_at,
        stat_fields=_STAT_FIELDS,
        summary_rows=_summary_rows(tables),
        full_year_years=completeness.get("full_year", []),
        window_years=completeness.get("growing_window", []),
        all_years=completeness.get("all_years", []),
        envelope=growing.get("envelope"),
        seedset_years=(seedset or {}).get("years"),
        seedset_plots=(seedset or {}).get("plots", []),
        test_rows=_test_rows(seedset),
        figures=figures,
    )
