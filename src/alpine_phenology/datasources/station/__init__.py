"""Daily station parameters (TAM/TAN/TAX/RR) and the calendar they are aligned to.

Public API:
  - models: DailyRecord, YearlySeries
  - client: read_station_table, read_calendar_table, build_calendar
  - normalize: normalize_station_table, group_by_year
  - july: JulySummary, read_july_table, july_summary_from_daily
"""

from alpine_phenology.datasources.station.client import (
    TEMPERATURE_SENTINEL,
    build_calendar,
    read_calendar_table,
    read_station_table,
)
from alpine_phenology.datasources.station.july import (
    JulySummary,
    july_summary_from_daily,
    read_july_table,
)
from alpine_phenology.datasources.station.models import DailyRecord, YearlySeries
from alpine_phenology.datasources.station.normalize import (
    backfill_mean_temperature,
    coerce_precipitation,
    coerce_temperature,
    group_by_year,
    normalize_station_table,
)

__all__ = [
    "TEMPERATURE_SENTINEL",
    "DailyRecord",
    "JulySummary",
    "YearlySeries",
    "backfill_mean_temperature",
    "build_calendar",
    "coerce_precipitation",
    "coerce_temperature",
    "group_by_year",
    "july_summary_from_daily",
    "normalize_station_table",
    "read_calendar_table",
    "read_july_table",
    "read_station_table",
]
