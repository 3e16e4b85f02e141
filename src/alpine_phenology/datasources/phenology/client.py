"""Reader for the flowering/seed-set spreadsheet."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pandas as pd
from pydantic import ValidationError

from alpine_phenology.datasources.phenology.models import FlowerPlotObservation
from alpine_phenology.errors import DataValidationError, InputFileError

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

PLOT_COLUMN = "Plot"
YEAR_COLUMN = "Year"
FLOWERS_COLUMN = "Flowers"
SEEDSET_COLUMN = "Seedset"
SEEDSET_COLUMNS = (PLOT_COLUMN, YEAR_COLUMN, FLOWERS_COLUMN, SEEDSET_COLUMN)

EXCEL_SUFFIXES = (".xlsx", ".xlsm")  # openpyxl formats
LEGACY_EXCEL_SUFFIX = ".xls"


def _read_sheet(path: Path) -> pd.DataFrame:
    if path.suffix.lower() == LEGACY_EXCEL_SUFFIX:
        raise InputFileError(path, "legacy .xls workbooks are not supported, save as .xlsx")
    try:
        if path.suffix.lower() in EXCEL_SUFFIXES:
            return pd.read_excel(path)
        return pd.read_csv(path, sep=None, engine="python")
    except (OSError, ValueError, pd.errors.ParserError) as exc:
        raise InputFileError(path, f"cannot read spreadsheet ({exc})") from exc


def read_seedset_table(path: Path) -> list[FlowerPlotObservation]:
    """Read per-plot, per-year flower and seed-set counts.

    Rows without any counts (blank lines, plots not surveyed in a year) are
    skipped. Every other row must validate.

    Args:
        path: ``.xlsx`` workbook (first sheet) or delimited text file with
            ``Plot``, ``Year``, ``Flowers`` and ``Seedset`` columns.

    Returns:
        Observations in file order.

    Raises:
        InputFileError: If the file is unreadable or a column is missing.
        DataValidationError: If a row has invalid counts or a plot-year repeats.
    """
    frame = _read_sheet(path)
    frame.columns = [str(col).strip() for col in frame.columns]
    for column in SEEDSET_COLUMNS:
        if column not in frame.columns:
            raise InputFileError(path, "required column missing", column=column)

    observations: list[FlowerPlotObservation] = []
    seen: set[tuple[str, int]] = set()
    skipped = 0
    # Object dtype hands plain Python ints/floats to the model instead of numpy scalars
    rows = frame[list(SEEDSET_COLUMNS)].astype(object)
    for i, row in enumerate(rows.itertuples(index=False), start=2):
        plot, year, flowers, seedset = row
        if pd.isna(flowers) and pd.isna(seedset):
            skipped += 1
            continue
        try:
            obs = FlowerPlotObservation(plot=plot, year=year, flowers=flowers, seedset=seedset)
        except ValidationError as exc:
            msg = f"{path}: invalid row {i}: {exc.errors()[0]['msg']}"
            raise DataValidationError(msg) from exc
        key = (obs.plot, obs.year)
        if key in seen:
            msg = f"{path}: plot {obs.plot} appears twice for {obs.year} (row {i})"
            raise DataValidationError(msg)
        seen.add(key)
        observations.append(obs)

    if skipped:
        logger.warning("%s: skipped %d row(s) without counts", path, skipped)
    return observations
