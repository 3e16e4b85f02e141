"""Shared fixtures: synthetic yearly series and station files."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator, Sequence
from datetime import date, timedelta
from typing import TYPE_CHECKING

import pytest

from alpine_phenology.config import get_settings
from alpine_phenology.datasources.station.models import DailyRecord, YearlySeries

if TYPE_CHECKING:
    from pathlib import Path

SeriesFactory = Callable[..., YearlySeries]


def _column(values: Sequence[float | None] | float | None, n: int) -> list[float | None]:
    if isinstance(values, Sequence):
        assert len(values) == n
        return list(values)
    return [values] * n


@pytest.fixture
def make_series() -> SeriesFactory:
    """Build a YearlySeries from per-day value lists starting at ``start_doy``.

    ``tan``, ``tax`` and ``rr`` accept either a list matching ``tam`` or a
    single value repeated for every day.
    """

    def _make(
        year: int,
        tam: Sequence[float | None],
        tan: Sequence[float | None] | float | None = None,
        tax: Sequence[float | None] | float | None = None,
        rr: Sequence[float | None] | float | None = None,
        start_doy: int = 1,
    ) -> YearlySeries:
        n = len(tam)
        first = date(year, 1, 1) + timedelta(days=start_doy - 1)
        columns = zip(tam, _column(tan, n), _column(tax, n), _column(rr, n))
        records = [
            DailyRecord(date=first + timedelta(days=i), tam=a, tan=b, tax=c, rr=d)
            for i, (a, b, c, d) in enumerate(columns)
        ]
        return YearlySeries(year=year, records=records)

    return _make


@pytest.fixture
def write_station_file() -> Callable[[Path, list[tuple[str, ...]]], Path]:
    """Write rows (Date, TAM, TAN, TAX, RR) as a semicolon-delimited station export."""

    def _write(path: Path, rows: list[tuple[str, ...]]) -> Path:
        lines = ["Date;TAM;TAN;TAX;RR"] + [";".join(row) for row in rows]
        path.write_text("\n".join(lines) + "\n")
        return path

    return _write


@pytest.fixture
def clean_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[pytest.MonkeyPatch]:
    """Fresh settings for a test that sets ALPINE_* environment variables.

    Runs from ``tmp_path`` so no stray ``.env`` file is picked up.
    """
    monkeypatch.chdir(tmp_path)
    for name in list(os.environ):
        if name.startswith("ALPINE_"):
            monkeypatch.delenv(name)
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()
