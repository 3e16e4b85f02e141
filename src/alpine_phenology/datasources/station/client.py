"""Station file formats: column names, sentinels, and raw table readers.

The station export is semicolon-delimited text with dates written as
``day.month.year``. Everything is read as text; numeric coercion happens in
``normalize`` so malformed fields become absent instead of type errors.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pandas as pd

from alpine_phenology.errors import InputFileError

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

DATE_COLUMN = "Date"
MEAN_TEMP_COLUMN = "TAM"
MIN_TEMP_COLUMN = "TAN"
MAX_TEMP_COLUMN = "TAX"
PRECIP_COLUMN = "RR"

STATION_COLUMNS = (DATE_COLUMN, MEAN_TEMP_COLUMN, MIN_TEMP_COLUMN, MAX_TEMP_COLUMN, PRECIP_COLUMN)
TEMPERATURE_COLUMNS = (MEAN_TEMP_COLUMN, MIN_TEMP_COLUMN, MAX_TEMP_COLUMN)

DATE_FORMAT = "%d.%m.%Y"
DELIMITER = ";"

# Missing-value encodings used by the station export
TEMPERATURE_SENTINEL = -99.9
PLACEHOLDER_STRINGS = ("-", "")


def read_delimited(path: Path, required: tuple[str, ...]) -> pd.DataFrame:
    """Read a semicolon-delimited text table with every column as string.

    Args:
        path: File to read.
        required: Column names that must be present.

    Returns:
        DataFrame with stripped column names and string cells.

    Raises:
        InputFileError: If the file cannot be read or a required column is missing.
    """
    try:
        frame = pd.read_csv(
            path,
            sep=DELIMITER,
            dtype=str,
            keep_default_na=False,
            skipinitialspace=True,
        )
    except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as exc:
        raise InputFileError(path, f"cannot read table ({exc})") from exc

    frame.columns = [str(col).strip() for col in frame.columns]
    for column in required:
        if column not in frame.columns:
            raise InputFileError(path, "required column missing", column=column)
    logger.debug("Read %d rows from %s", len(frame), path)
    return frame


def read_station_table(path: Path) -> pd.DataFrame:
    """Read the daily station-parameter table (Date, TAM, TAN, TAX, RR)."""
    frame = read_delimited(path, STATION_COLUMNS)
    return frame[list(STATION_COLUMNS)]


def read_calendar_table(path: Path) -> pd.DataFrame:
    """Read the full-calendar reference table (a single Date column)."""
    frame = read_delimited(path, (DATE_COLUMN,))
    return frame[[DATE_COLUMN]]


def build_calendar(first_year: int, last_year: int) -> pd.DataFrame:
    """Generate a calendar table covering Jan 1 of ``first_year`` to Dec 31 of ``last_year``.

    The result has the same shape as ``read_calendar_table`` output so both can
    feed ``normalize_station_table``.
    """
    if first_year > last_year:
        msg = f"first_year {first_year} is after last_year {last_year}"
        raise ValueError(msg)
    days = pd.date_range(f"{first_year}-01-01", f"{last_year}-12-31", freq="D")
    return pd.DataFrame({DATE_COLUMN: days.strftime(DATE_FORMAT)})
