"""Tests for the station datasource: readers, normalization and yearly grouping."""

from __future__ import annotations

import math
from collections.abc import Callable
from datetime import date
from pathlib import Path

import pandas as pd
import pytest

from alpine_phenology.datasources.station import (
    DailyRecord,
    YearlySeries,
    backfill_mean_temperature,
    build_calendar,
    coerce_precipitation,
    coerce_temperature,
    group_by_year,
    normalize_station_table,
    read_calendar_table,
    read_station_table,
)
from alpine_phenology.errors import DataValidationError, InputFileError

StationWriter = Callable[[Path, list[tuple[str, ...]]], Path]


def station_frame(rows: list[tuple[str, ...]]) -> pd.DataFrame:
    """Raw station table as ``read_station_table`` returns it (all strings)."""
    return pd.DataFrame(rows, columns=["Date", "TAM", "TAN", "TAX", "RR"])


def calendar_frame(*dates: str) -> pd.DataFrame:
    return pd.DataFrame({"Date": list(dates)})


# =============================================================================
# Readers
# =============================================================================


class TestReadStationTable:
    """Test reading the semicolon-delimited station export."""

    def test_reads_columns_as_text(self, tmp_path: Path, write_station_file: StationWriter) -> None:
        path = write_station_file(tmp_path / "station.csv", [("01.01.2020", "-1.5", "-4", "2", "0")])
        frame = read_station_table(path)
        assert list(frame.columns) == ["Date", "TAM", "TAN", "TAX", "RR"]
        assert frame.iloc[0]["TAM"] == "-1.5"

    def test_keeps_placeholders_as_text(
        self, tmp_path: Path, write_station_file: StationWriter
    ) -> None:
        path = write_station_file(tmp_path / "station.csv", [("01.01.2020", "-", "", "2", "0")])
        frame = read_station_table(path)
        assert frame.iloc[0]["TAM"] == "-"
        assert frame.iloc[0]["TAN"] == ""

    def test_missing_column_names_file_and_column(self, tmp_path: Path) -> None:
        path = tmp_path / "station.csv"
        path.write_text("Date;TAM;TAN;TAX\n01.01.2020;1;0;2\n")
        with pytest.raises(InputFileError, match="RR") as excinfo:
            read_station_table(path)
        assert excinfo.value.column == "RR"
        assert excinfo.value.path == path

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(InputFileError, match="cannot read"):
            read_station_table(tmp_path / "absent.csv")

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.csv"
        path.write_text("")
        with pytest.raises(InputFileError):
            read_station_table(path)


class TestCalendar:
    """Test calendar reading and generation."""

    def test_read_calendar_table(self, tmp_path: Path) -> None:
        path = tmp_path / "calendar.csv"
        path.write_text("Date\n01.01.2020\n02.01.2020\n")
        frame = read_calendar_table(path)
        assert list(frame["Date"]) == ["01.01.2020", "02.01.2020"]

    def test_build_calendar_covers_leap_year(self) -> None:
        frame = build_calendar(2020, 2020)
        assert len(frame) == 366
        assert frame["Date"].iloc[0] == "01.01.2020"
        assert frame["Date"].iloc[-1] == "31.12.2020"

    def test_build_calendar_multiple_years(self) -> None:
        assert len(build_calendar(2019, 2021)) == 365 + 366 + 365

    def test_build_calendar_rejects_inverted_range(self) -> None:
        with pytest.raises(ValueError, match="after"):
            build_calendar(2021, 2020)


# =============================================================================
# Value coercion
# =============================================================================


class TestCoercion:
    """Test sentinel and placeholder handling."""

    def test_temperature_sentinel_and_dash_become_absent(self) -> None:
        values = coerce_temperature(pd.Series(["3.2", "-99.9", "-", "4.1", ""]))
        assert values.iloc[0] == pytest.approx(3.2)
        assert math.isnan(values.iloc[1])
        assert math.isnan(values.iloc[2])
        assert values.iloc[3] == pytest.approx(4.1)
        assert math.isnan(values.iloc[4])

    def test_legitimate_negative_temperature_kept(self) -> None:
        values = coerce_temperature(pd.Series(["-25.4", "-99.0"]))
        assert values.tolist() == pytest.approx([-25.4, -99.0])

    def test_malformed_number_becomes_absent(self, caplog: pytest.LogCaptureFixture) -> None:
        values = coerce_temperature(pd.Series(["1,5", "2.0"]), "TAM")
        assert math.isnan(values.iloc[0])
        assert values.iloc[1] == 2.0
        assert "malformed" in caplog.text

    def test_negative_precipitation_becomes_absent(self) -> None:
        values = coerce_precipitation(pd.Series(["0", "-1", "12.5"]))
        assert values.iloc[0] == 0.0
        assert math.isnan(values.iloc[1])
        assert values.iloc[2] == 12.5


class TestBackfill:
    """Test mean-temperature back-fill from the daily extremes."""

    def test_backfills_midpoint(self) -> None:
        frame = pd.DataFrame({"tam": [math.nan], "tan": [-2.0], "tax": [4.0]})
        assert backfill_mean_temperature(frame)["tam"].iloc[0] == 1.0

    def test_present_mean_not_overwritten(self) -> None:
        frame = pd.DataFrame({"tam": [0.3], "tan": [-2.0], "tax": [4.0]})
        assert backfill_mean_temperature(frame)["tam"].iloc[0] == 0.3

    def test_needs_both_extremes(self) -> None:
        frame = pd.DataFrame({"tam": [math.nan], "tan": [-2.0], "tax": [math.nan]})
        assert math.isnan(backfill_mean_temperature(frame)["tam"].iloc[0])

    def test_does_not_modify_input(self) -> None:
        frame = pd.DataFrame({"tam": [math.nan], "tan": [-2.0], "tax": [4.0]})
        backfill_mean_temperature(frame)
        assert math.isnan(frame["tam"].iloc[0])


# =============================================================================
# Normalization
# =============================================================================


class TestNormalizeStationTable:
    """Test calendar alignment and value cleaning together."""

    def test_sentinels_do_not_touch_adjacent_days(self) -> None:
        station = station_frame(
            [
                ("01.01.2020", "1.0", "-1.0", "3.0", "0"),
                ("02.01.2020", "-99.9", "-99.9", "-99.9", "0"),
                ("03.01.2020", "-", "-", "-", "-"),
                ("04.01.2020", "2.0", "0.0", "4.0", "1.2"),
            ]
        )
        calendar = calendar_frame("01.01.2020", "02.01.2020", "03.01.2020", "04.01.2020")
        frame = normalize_station_table(station, calendar)

        assert frame["tam"].iloc[0] == 1.0
        assert frame["tan"].iloc[0] == -1.0
        assert frame["tam"].isna().iloc[1:3].all()
        assert frame["tan"].isna().iloc[1:3].all()
        assert frame["tam"].iloc[3] == 2.0
        assert frame["rr"].iloc[3] == 1.2

    def test_sentinel_extremes_not_averaged_into_mean(self) -> None:
        station = station_frame([("01.01.2020", "-", "-99.9", "4.0", "0")])
        frame = normalize_station_table(station, calendar_frame("01.01.2020"))
        assert math.isnan(frame["tam"].iloc[0])

    def test_backfill_applies_after_normalization(self) -> None:
        station = station_frame([("01.01.2020", "-", "-2.0", "4.0", "0")])
        frame = normalize_station_table(station, calendar_frame("01.01.2020"))
        assert frame["tam"].iloc[0] == 1.0

    def test_missing_days_become_absent_rows(self) -> None:
        station = station_frame([("01.01.2020", "1.0", "0", "2", "0")])
        frame = normalize_station_table(
            station, calendar_frame("01.01.2020", "02.01.2020", "03.01.2020")
        )
        assert len(frame) == 3
        assert frame["tam"].isna().tolist() == [False, True, True]

    def test_rows_outside_calendar_ignored(self) -> None:
        station = station_frame(
            [("31.12.2019", "1.0", "0", "2", "0"), ("01.01.2020", "2.0", "0", "2", "0")]
        )
        frame = normalize_station_table(station, calendar_frame("01.01.2020"))
        assert len(frame) == 1
        assert frame["tam"].iloc[0] == 2.0

    def test_derives_year_month_doy(self) -> None:
        station = station_frame([("31.12.2020", "1.0", "0", "2", "0")])
        frame = normalize_station_table(station, calendar_frame("31.12.2020"))
        row = frame.iloc[0]
        assert (row["year"], row["month"], row["doy"]) == (2020, 12, 366)

    def test_unparseable_station_date_dropped(self, caplog: pytest.LogCaptureFixture) -> None:
        station = station_frame(
            [("2020-01-01", "5.0", "0", "2", "0"), ("02.01.2020", "1.0", "0", "2", "0")]
        )
        frame = normalize_station_table(station, calendar_frame("01.01.2020", "02.01.2020"))
        assert math.isnan(frame["tam"].iloc[0])
        assert frame["tam"].iloc[1] == 1.0
        assert "unparseable" in caplog.text

    def test_duplicate_station_dates_rejected(self) -> None:
        station = station_frame(
            [("01.01.2020", "1.0", "0", "2", "0"), ("01.01.2020", "2.0", "0", "2", "0")]
        )
        with pytest.raises(DataValidationError, match="sharing a date"):
            normalize_station_table(station, calendar_frame("01.01.2020"))

    def test_unparseable_calendar_date_rejected(self) -> None:
        station = station_frame([("01.01.2020", "1.0", "0", "2", "0")])
        with pytest.raises(DataValidationError, match="Calendar"):
            normalize_station_table(station, calendar_frame("01.01.2020", "not a date"))


class TestGroupByYear:
    """Test the year -> YearlySeries mapping."""

    def test_groups_and_converts_nan_to_none(self) -> None:
        station = station_frame(
            [("31.12.2019", "1.0", "0", "2", "-"), ("01.01.2020", "-", "-", "-", "3")]
        )
        frame = normalize_station_table(station, build_calendar(2019, 2020))
        series = group_by_year(frame)

        assert sorted(series) == [2019, 2020]
        assert len(series[2019]) == 365
        assert len(series[2020]) == 366
        assert series[2019].records[-1].tam == 1.0
        assert series[2019].records[-1].rr is None
        first_2020 = series[2020].records[0]
        assert first_2020.tam is None
        assert first_2020.rr == 3.0


class TestYearlySeries:
    """Test YearlySeries invariants and helpers."""

    def test_rejects_record_from_other_year(self) -> None:
        with pytest.raises(DataValidationError, match="does not belong"):
            YearlySeries(year=2020, records=[DailyRecord(date=date(2021, 1, 1))])

    def test_rejects_duplicate_day(self) -> None:
        records = [DailyRecord(date=date(2020, 1, 1)), DailyRecord(date=date(2020, 1, 1))]
        with pytest.raises(DataValidationError, match="Duplicate"):
            YearlySeries(year=2020, records=records)

    def test_sorts_records(self) -> None:
        records = [DailyRecord(date=date(2020, 1, 3)), DailyRecord(date=date(2020, 1, 1))]
        series = YearlySeries(year=2020, records=records)
        assert [r.doy for r in series] == [1, 3]

    def test_leaves_caller_list_untouched(self) -> None:
        records = [DailyRecord(date=date(2020, 1, 3)), DailyRecord(date=date(2020, 1, 1))]
        YearlySeries(year=2020, records=records)
        assert [r.doy for r in records] == [3, 1]

    def test_between_doy_and_through(self) -> None:
        records = [DailyRecord(date=date(2020, 1, d), tam=float(d)) for d in range(1, 11)]
        series = YearlySeries(year=2020, records=records)
        assert [r.doy for r in series.between_doy(3, 5)] == [3, 4, 5]
        assert len(series.through(date(2020, 1, 4))) == 4

    def test_present_count(self) -> None:
        records = [
            DailyRecord(date=date(2020, 1, 1), tam=1.0),
            DailyRecord(date=date(2020, 1, 2)),
            DailyRecord(date=date(2020, 1, 3), tam=0.0),
        ]
        assert YearlySeries(year=2020, records=records).present_count() == 2
