"""Date/value normalization of the raw station table.

Steps, in this order:

    1. parse dates (``day.month.year``)
    2. left-join the full calendar so every day appears exactly once
    3. sentinel / placeholder / negative-precipitation encodings -> absent (NaN)
    4. back-fill absent TAM with (TAN + TAX) / 2 when both are present
    5. derive year, month and day-of-year from the date

Step 3 must precede step 4, otherwise a ``-99.9`` sentinel would be averaged
into a fabricated mean temperature.
"""

from __future__ import annotations

import logging
import math

import numpy as np
import pandas as pd

from alpine_phenology.datasources.station.client import (
    DATE_COLUMN,
    DATE_FORMAT,
    MAX_TEMP_COLUMN,
    MEAN_TEMP_COLUMN,
    MIN_TEMP_COLUMN,
    PLACEHOLDER_STRINGS,
    PRECIP_COLUMN,
    TEMPERATURE_SENTINEL,
)
from alpine_phenology.datasources.station.models import DailyRecord, YearlySeries
from alpine_phenology.errors import DataValidationError

logger = logging.getLogger(__name__)

# Output column names of the normalized table
NORMALIZED_COLUMNS = ["date", "year", "month", "doy", "tam", "tan", "tax", "rr"]


def parse_dates(values: pd.Series) -> pd.Series:
    """Parse ``day.month.year`` strings; unparseable entries become NaT."""
    return pd.to_datetime(values.astype(str).str.strip(), format=DATE_FORMAT, errors="coerce")


def _to_number(values: pd.Series, name: str) -> pd.Series:
    text = values.astype(str).str.strip()
    numbers = pd.to_numeric(text, errors="coerce")
    malformed = numbers.isna() & ~text.isin(PLACEHOLDER_STRINGS) & (text.str.lower() != "nan")
    if malformed.any():
        logger.warning(
            "%s: %d malformed value(s) converted to absent (e.g. %r)",
            name,
            int(malformed.sum()),
            text[malformed].iloc[0],
        )
    return numbers.astype(float)


def coerce_temperature(values: pd.Series, name: str = "temperature") -> pd.Series:
    """Convert raw temperature cells to floats, with sentinels and placeholders as NaN."""
    numbers = _to_number(values, name)
    return numbers.mask(np.isclose(numbers, TEMPERATURE_SENTINEL))


def coerce_precipitation(values: pd.Series, name: str = PRECIP_COLUMN) -> pd.Series:
    """Convert raw precipitation cells to floats; negative amounts mean "not measured"."""
    numbers = _to_number(values, name)
    return numbers.mask(numbers < 0)


def backfill_mean_temperature(frame: pd.DataFrame) -> pd.DataFrame:
    """Fill absent ``tam`` with the min/max midpoint where both extremes are present."""
    frame = frame.copy()
    fill = frame["tam"].isna() & frame["tan"].notna() & frame["tax"].notna()
    frame.loc[fill, "tam"] = (frame.loc[fill, "tan"] + frame.loc[fill, "tax"]) / 2
    if fill.any():
        logger.info("Back-filled mean temperature from min/max on %d day(s)", int(fill.sum()))
    return frame


def _prepare_station(station: pd.DataFrame) -> pd.DataFrame:
    dates = parse_dates(station[DATE_COLUMN])
    bad = dates.isna()
    if bad.any():
        logger.warning(
            "Dropped %d station row(s) with unparseable dates (e.g. %r)",
            int(bad.sum()),
            station.loc[bad, DATE_COLUMN].iloc[0],
        )
    station = station.loc[~bad].assign(date=dates[~bad])

    duplicated = station["date"].duplicated(keep=False)
    if duplicated.any():
        first = station.loc[duplicated, "date"].iloc[0].strftime(DATE_FORMAT)
        msg = f"Station table has {int(duplicated.sum())} rows sharing a date (e.g. {first})"
        raise DataValidationError(msg)
    return station.drop(columns=[DATE_COLUMN])


def _prepare_calendar(calendar: pd.DataFrame) -> pd.DataFrame:
    dates = parse_dates(calendar[DATE_COLUMN])
    if dates.isna().any():
        bad = calendar.loc[dates.isna(), DATE_COLUMN].iloc[0]
        msg = f"Calendar table contains an unparseable date: {bad!r}"
        raise DataValidationError(msg)
    return pd.DataFrame({"date": dates}).drop_duplicates().sort_values("date")


def normalize_station_table(station: pd.DataFrame, calendar: pd.DataFrame) -> pd.DataFrame:
    """Align the station table to the full calendar and clean its values.

    Args:
        station: Raw station table with ``Date``, ``TAM``, ``TAN``, ``TAX``, ``RR``
            columns as read by ``read_station_table`` (sparse; missing days absent).
        calendar: Calendar table with a ``Date`` column covering the study period.

    Returns:
        One row per calendar day with columns ``date, year, month, doy, tam, tan,
        tax, rr``; absent values are NaN.

    Raises:
        DataValidationError: If the station table has two rows for the same date
            or the calendar contains an unparseable date.
    """
    stations = _prepare_station(station)
    days = _prepare_calendar(calendar)

    merged = days.merge(stations, on="date", how="left", validate="one_to_one")
    outside = len(stations) - int(stations["date"].isin(days["date"]).sum())
    if outside:
        logger.debug("Ignored %d station row(s) outside the calendar range", outside)

    frame = pd.DataFrame(
        {
            "date": merged["date"],
            "tam": coerce_temperature(merged[MEAN_TEMP_COLUMN], MEAN_TEMP_COLUMN),
            "tan": coerce_temperature(merged[MIN_TEMP_COLUMN], MIN_TEMP_COLUMN),
            "tax": coerce_temperature(merged[MAX_TEMP_COLUMN], MAX_TEMP_COLUMN),
            "rr": coerce_precipitation(merged[PRECIP_COLUMN]),
        }
    )
    frame = backfill_mean_temperature(frame)

    frame["year"] = frame["date"].dt.year
    frame["month"] = frame["date"].dt.month
    frame["doy"] = frame["date"].dt.dayofyear
    return frame[NORMALIZED_COLUMNS].reset_index(drop=True)


def _optional(value: object) -> float | None:
    if value is None:
        return None
    number = float(value)  # type: ignore[arg-type]
    return None if math.isnan(number) else number


def group_by_year(frame: pd.DataFrame) -> dict[int, YearlySeries]:
    """Build the year -> YearlySeries mapping once from a normalized table.

    Args:
        frame: Output of ``normalize_station_table``.

    Returns:
        Mapping of calendar year to its ordered daily records.
    """
    series_by_year: dict[int, YearlySeries] = {}
    for year, rows in frame.groupby("year", sort=True):
        records = [
            DailyRecord(
                date=row.date.date(),
                tam=_optional(row.tam),
                tan=_optional(row.tan),
                tax=_optional(row.tax),
                rr=_optional(row.rr),
            )
            for row in rows.itertuples(index=False)
        ]
        series_by_year[int(year)] = YearlySeries(year=int(year), records=records)
    return series_by_year
