"""Thawing degree days (TDD).

Daily TDD is ``max(0, TAM)``. Three accumulations are derived from it:

- plain yearly totals over full-year-complete years (absent days add 0)
- totals truncated at the year's last frost day inside the analysis window
- a running sum over the whole calendar year that turns absent at the first
  missing mean temperature and stays absent for the rest of the year

The last behaviour is deliberate: a year with a gap before the flowering
window can never reach the window, which excludes it without an explicit
completeness step.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from alpine_phenology.reference.thresholds import DEFAULT_THRESHOLDS, Thresholds

if TYPE_CHECKING:
    from datetime import date

    from alpine_phenology.datasources.station.models import YearlySeries


@dataclass(frozen=True)
class LastFrostEvent:
    """Latest day of a (window-restricted) year with TAN at or below the frost cutoff."""

    year: int
    date: date
    doy: int
    tan: float


@dataclass(frozen=True)
class FloweringWindow:
    """Days whose running TDD lies inside the flowering window, and their lowest TAN."""

    year: int
    first_doy: int
    last_doy: int
    min_tan: float


def daily_tdd(tam: float | None) -> float:
    """Positive part of the mean temperature; absent counts as 0."""
    if tam is None:
        return 0.0
    return max(0.0, tam)


def sum_tdd(series: YearlySeries) -> float:
    """Sum of daily TDD over every record of ``series``."""
    return sum(daily_tdd(rec.tam) for rec in series)


def yearly_tdd(series_by_year: dict[int, YearlySeries]) -> dict[int, float]:
    """Plain TDD total per year.

    Expects years that already passed the full-year completeness policy; the
    few absent days then contribute 0 rather than removing the year.
    """
    return {year: sum_tdd(series_by_year[year]) for year in sorted(series_by_year)}


def last_frost_event(
    series: YearlySeries,
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
) -> LastFrostEvent | None:
    """Find the latest frost day in ``series``, or None if there is none."""
    last = None
    for rec in series:
        if rec.tan is not None and rec.tan <= thresholds.frost_temp_c:
            last = rec
    if last is None or last.tan is None:
        return None
    return LastFrostEvent(year=series.year, date=last.date, doy=last.doy, tan=last.tan)


def last_frost_events(
    series_by_year: dict[int, YearlySeries],
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
) -> dict[int, LastFrostEvent]:
    """Last frost event per year; years without a frost day are absent."""
    events: dict[int, LastFrostEvent] = {}
    for year in sorted(series_by_year):
        event = last_frost_event(series_by_year[year], thresholds)
        if event is not None:
            events[year] = event
    return events


def frost_truncated_tdd(
    series_by_year: dict[int, YearlySeries],
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
) -> dict[int, float]:
    """TDD accumulated from the window start through the last frost day (inclusive).

    Args:
        series_by_year: Years that passed the growing-window policy, already
            restricted to the analysis window.
        thresholds: Frost cutoff.

    Returns:
        Year -> truncated TDD. Years without a frost day in the window are
        left out, not reported as 0.
    """
    totals: dict[int, float] = {}
    for year, event in last_frost_events(series_by_year, thresholds).items():
        totals[year] = sum_tdd(series_by_year[year].through(event.date))
    return totals


def running_tdd(series: YearlySeries) -> list[float | None]:
    """Cumulative TDD in date order; None from the first absent TAM onwards."""
    sums: list[float | None] = []
    total: float | None = 0.0
    for rec in series:
        if total is None or rec.tam is None:
            total = None
        else:
            total += daily_tdd(rec.tam)
        sums.append(total)
    return sums


def flowering_window(
    series: YearlySeries,
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
) -> FloweringWindow | None:
    """Lowest TAN while the running TDD is strictly between the flowering bounds.

    The running sum never decreases and never recovers from absence, so the
    qualifying days form a single contiguous block.

    Returns:
        The block and its minimum TAN, or None when no running sum falls in
        the window or no day in the block has a TAN.
    """
    low = thresholds.flowering_tdd_low
    high = thresholds.flowering_tdd_high
    block = [
        rec
        for rec, total in zip(series, running_tdd(series))
        if total is not None and low < total < high
    ]
    minima = [rec.tan for rec in block if rec.tan is not None]
    if not minima:
        return None
    return FloweringWindow(
        year=series.year,
        first_doy=block[0].doy,
        last_doy=block[-1].doy,
        min_tan=min(minima),
    )


def flowering_window_min_temperature(
    series_by_year: dict[int, YearlySeries],
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
) -> dict[int, FloweringWindow]:
    """Flowering-window minimum temperature for every contributing year.

    Args:
        series_by_year: Full-calendar series (not window-restricted, not
            completeness-filtered).
        thresholds: Flowering TDD bounds.
    """
    results: dict[int, FloweringWindow] = {}
    for year in sorted(series_by_year):
        found = flowering_window(series_by_year[year], thresholds)
        if found is not None:
            results[year] = found
    return results
