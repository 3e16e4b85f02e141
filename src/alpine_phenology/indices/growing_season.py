"""Growing-season bounds from runs of warm days.

A day starts the growing season if it and the following four days all have a
mean temperature above 5 deg C; a day ends it if it and the preceding four
days do. Windows never reach into a neighbouring year: days beyond the year
edge count as not satisfying the predicate.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from alpine_phenology.reference.thresholds import DEFAULT_THRESHOLDS, Thresholds

if TYPE_CHECKING:
    from alpine_phenology.datasources.station.models import YearlySeries


@dataclass(frozen=True)
class GrowingSeasonBounds:
    """First start-day and last end-day of one year (day-of-year)."""

    year: int
    start_doy: int
    end_doy: int


def warm_days(series: YearlySeries, thresholds: Thresholds = DEFAULT_THRESHOLDS) -> list[bool]:
    """Per-day predicate: mean temperature present and above the trigger."""
    limit = thresholds.growing_season_temp_c
    return [rec.tam is not None and rec.tam > limit for rec in series]


def start_flags(series: YearlySeries, thresholds: Thresholds = DEFAULT_THRESHOLDS) -> list[bool]:
    """Left-anchored run test: day i and the next ``run - 1`` days are warm."""
    warm = warm_days(series, thresholds)
    run = thresholds.growing_season_run_days
    n = len(warm)
    return [i + run <= n and all(warm[i : i + run]) for i in range(n)]


def end_flags(series: YearlySeries, thresholds: Thresholds = DEFAULT_THRESHOLDS) -> list[bool]:
    """Right-anchored run test: day i and the previous ``run - 1`` days are warm."""
    warm = warm_days(series, thresholds)
    run = thresholds.growing_season_run_days
    return [i - run + 1 >= 0 and all(warm[i - run + 1 : i + 1]) for i in range(len(warm))]


def locate_growing_season(
    series: YearlySeries,
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
) -> GrowingSeasonBounds | None:
    """Return the earliest start-day and latest end-day of the year, or None.

    Args:
        series: Full-calendar series of one year.
        thresholds: Trigger temperature and run length.

    Returns:
        Bounds, or None when no qualifying run exists in the year.
    """
    starts = [rec.doy for rec, flag in zip(series, start_flags(series, thresholds)) if flag]
    ends = [rec.doy for rec, flag in zip(series, end_flags(series, thresholds)) if flag]
    if not starts or not ends:
        return None
    return GrowingSeasonBounds(year=series.year, start_doy=starts[0], end_doy=ends[-1])


def growing_season_bounds(
    series_by_year: dict[int, YearlySeries],
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
) -> dict[int, GrowingSeasonBounds]:
    """Locate the growing season of every year that has one."""
    bounds: dict[int, GrowingSeasonBounds] = {}
    for year in sorted(series_by_year):
        found = locate_growing_season(series_by_year[year], thresholds)
        if found is not None:
            bounds[year] = found
    return bounds


def growing_season_envelope(
    bounds: dict[int, GrowingSeasonBounds],
) -> tuple[int, int] | None:
    """Earliest start and latest end over all years.

    One-time calibration that justifies the fixed analysis window; it is not
    part of the repeatable pipeline. Returns None without any bounds.
    """
    if not bounds:
        return None
    return (
        min(b.start_doy for b in bounds.values()),
        max(b.end_doy for b in bounds.values()),
    )
