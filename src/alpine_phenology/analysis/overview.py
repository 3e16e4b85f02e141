"""Per-year climate overview for years passing the full-year policy."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from alpine_phenology.datasources.station.models import YearlySeries


@dataclass(frozen=True)
class YearOverview:
    """Mean temperature and precipitation total of one complete year."""

    year: int
    mean_tam: float
    total_rr: float | None
    rr_days: int


def climate_overview(series_by_year: dict[int, YearlySeries]) -> dict[int, YearOverview]:
    """Mean daily temperature and precipitation total (present days) per year."""
    result: dict[int, YearOverview] = {}
    for year in sorted(series_by_year):
        temps = [rec.tam for rec in series_by_year[year] if rec.tam is not None]
        rain = [rec.rr for rec in series_by_year[year] if rec.rr is not None]
        if not temps:
            continue
        result[year] = YearOverview(
            year=year,
            mean_tam=sum(temps) / len(temps),
            total_rr=sum(rain) if rain else None,
            rr_days=len(rain),
        )
    return result
