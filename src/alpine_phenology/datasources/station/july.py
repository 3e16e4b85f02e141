"""July temperature summary: read from the summary table or derive from daily data."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from alpine_phenology.datasources.station.client import read_delimited
from alpine_phenology.datasources.station.normalize import coerce_temperature
from alpine_phenology.errors import DataValidationError

if TYPE_CHECKING:
    from pathlib import Path

    from alpine_phenology.datasources.station.models import YearlySeries

JULY = 7
JULY_DAYS = 31

YEAR_COLUMN = "Year"
JULY_MAX_COLUMN = "TX_max"
JULY_MEAN_COLUMN = "TM_mean"
JULY_MIN_COLUMN = "TN_min"
JULY_COLUMNS = (YEAR_COLUMN, JULY_MAX_COLUMN, JULY_MEAN_COLUMN, JULY_MIN_COLUMN)


@dataclass(frozen=True)
class JulySummary:
    """July temperatures of one year (deg C)."""

    year: int
    tax_max: float | None
    tam_mean: float | None
    tan_min: float | None


def _present(value: float) -> float | None:
    return None if math.isnan(value) else float(value)


def read_july_table(path: Path) -> list[JulySummary]:
    """Read the July-only summary table.

    Expected semicolon-delimited columns: ``Year``, ``TX_max`` (highest daily
    maximum), ``TM_mean`` (monthly mean) and ``TN_min`` (lowest daily minimum).

    Raises:
        InputFileError: If the file is unreadable or a column is missing.
        DataValidationError: If a year is not an integer or appears twice.
    """
    frame = read_delimited(path, JULY_COLUMNS)
    tax = coerce_temperature(frame[JULY_MAX_COLUMN], JULY_MAX_COLUMN)
    tam = coerce_temperature(frame[JULY_MEAN_COLUMN], JULY_MEAN_COLUMN)
    tan = coerce_temperature(frame[JULY_MIN_COLUMN], JULY_MIN_COLUMN)

    rows: list[JulySummary] = []
    seen: set[int] = set()
    for i, raw_year in enumerate(frame[YEAR_COLUMN]):
        try:
            year = int(str(raw_year).strip())
        except ValueError:
            msg = f"{path}: invalid year {raw_year!r} in row {i + 1}"
            raise DataValidationError(msg) from None
        if year in seen:
            msg = f"{path}: year {year} listed twice"
            raise DataValidationError(msg)
        seen.add(year)
        rows.append(
            JulySummary(
                year=year,
                tax_max=_present(tax.iloc[i]),
                tam_mean=_present(tam.iloc[i]),
                tan_min=_present(tan.iloc[i]),
            )
        )
    return sorted(rows, key=lambda r: r.year)


def july_summary_from_daily(series_by_year: dict[int, YearlySeries]) -> list[JulySummary]:
    """Derive the July summary from daily records.

    Only years whose 31 July days all carry a mean temperature are reported, so
    the monthly mean is never computed from a partial month.
    """
    summaries: list[JulySummary] = []
    for year in sorted(series_by_year):
        july = [rec for rec in series_by_year[year] if rec.month == JULY]
        means = [rec.tam for rec in july if rec.tam is not None]
        if len(means) < JULY_DAYS:
            continue
        maxima = [rec.tax for rec in july if rec.tax is not None]
        minima = [rec.tan for rec in july if rec.tan is not None]
        summaries.append(
            JulySummary(
                year=year,
                tax_max=max(maxima) if maxima else None,
                tam_mean=sum(means) / len(means),
                tan_min=min(minima) if minima else None,
            )
        )
    return summaries
