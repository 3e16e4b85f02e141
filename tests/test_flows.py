"""
Tests for the analyze and build flows.

The end-to-end scenario uses a synthetic three-year station record:

- 2018: first 300 days present (fails the full-year policy)
- 2019: 360 days present, days 240-244 missing (passes)
- 2020: first 200 days present (fails both policies)

Mean temperature is -5 °C outside days 100-250 and 8 °C inside. The missing
2019 days add nothing, so the 2019 thawing degree-day total is
(151 - 5) * 8 = 1168.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from datetime import date, timedelta
from pathlib import Path

import pandas as pd
import pytest

from alpine_phenology.errors import InputFileError
from alpine_phenology.flows import analyze, build
from alpine_phenology.store import ResultStore

StationWriter = Callable[[Path, list[tuple[str, ...]]], Path]

PRESENT_DAYS = {2018: 300, 2019: 365, 2020: 200}
MISSING_DOYS = {2019: set(range(240, 245))}


def tam_for(doy: int) -> float:
    return 8.0 if 100 <= doy <= 250 else -5.0


def station_rows() -> list[tuple[str, ...]]:
    rows = []
    for year, present in PRESENT_DAYS.items():
        for offset in range(present):
            if offset + 1 in MISSING_DOYS.get(year, set()):
                continue
            day = date(year, 1, 1) + timedelta(days=offset)
            tam = tam_for(offset + 1)
            rows.append(
                (day.strftime("%d.%m.%Y"), f"{tam}", f"{tam - 4}", f"{tam + 4}", "1.0")
            )
    return rows


@pytest.fixture
def data_dir(tmp_path: Path, write_station_file: StationWriter) -> Path:
    data = tmp_path / "data"
    data.mkdir()
    write_station_file(data / "station_daily.csv", station_rows())
    (data / "seedset.csv").write_text(
        "Plot;Year;Flowers;Seedset\n"
        "P1;2020;10;5\nP1;2021;8;2\n"
        "P2;2020;20;10\nP2;2021;15;6\n"
        "P3;2020;0;0\nP3;2021;4;1\n"
        "P4;2020;12;9\n"
    )
    return data


def read_table(output: Path, name: str) -> dict:
    return json.loads((output / "tables" / f"{name}.json").read_text())["data"]


class TestLoadTasks:
    """Test the loading tasks in isolation."""

    def test_calendar_generated_from_station_years(
        self, tmp_path: Path, write_station_file: StationWriter
    ) -> None:
        rows = [("15.06.2019", "1", "0", "2", "0"), ("01.02.2020", "1", "0", "2", "0")]
        path = write_station_file(tmp_path / "s.csv", rows)
        raw = analyze.load_station(path)
        calendar = analyze.load_calendar(None, raw)
        assert calendar["Date"].iloc[0] == "01.01.2019"
        assert calendar["Date"].iloc[-1] == "31.12.2020"

    def test_calendar_file_used_when_given(self, tmp_path: Path) -> None:
        path = tmp_path / "calendar.csv"
        path.write_text("Date\n01.01.2020\n")
        raw = pd.DataFrame({"Date": ["01.01.2019"]})
        assert len(analyze.load_calendar(path, raw)) == 1

    def test_missing_station_file(self, tmp_path: Path) -> None:
        with pytest.raises(InputFileError, match="file not found"):
            analyze.load_station(tmp_path / "absent.csv")

    def test_july_source_falls_back_to_daily(self) -> None:
        rows, source = analyze.load_july(None, {})
        assert rows == []
        assert source == "daily"


class TestAnalyzeFlow:
    """End-to-end run of the analyze flow on the synthetic record."""

    @pytest.fixture
    def output(
        self, tmp_path: Path, data_dir: Path, clean_settings: pytest.MonkeyPatch
    ) -> Path:
        clean_settings.setenv("ALPINE_SEEDSET_FILE", "seedset.csv")
        output = tmp_path / "output"
        result = analyze.analyze_all(data_dir=data_dir, output_dir=output)
        assert result["years"] == 3
        return output

    def test_completeness(self, output: Path) -> None:
        completeness = read_table(output, "completeness")
        assert completeness["all_years"] == [2018, 2019, 2020]
        assert completeness["full_year"] == [2019]
        assert completeness["growing_window"] == [2018, 2019]

    def test_yearly_tdd_only_complete_year(self, output: Path) -> None:
        table = read_table(output, "tdd_yearly")
        assert table["values"] == [{"year": 2019, "tdd": 1168.0}]
        # a single year has no quartiles
        assert table["summary"] is None

    def test_frost_truncated_tdd(self, output: Path) -> None:
        table = read_table(output, "tdd_frost")
        assert [row["year"] for row in table["values"]] == [2018, 2019]
        row = table["values"][0]
        assert row["last_frost_doy"] == 99
        assert row["last_frost_date"] == "2018-04-09"
        assert row["tdd"] == 0.0
        assert table["summary"]["n"] == 2

    def test_flowering_window(self, output: Path) -> None:
        table = read_table(output, "flowering_min_temp")
        assert [row["year"] for row in table["values"]] == [2018, 2019, 2020]
        assert all(row["min_tan"] == 4.0 for row in table["values"])
        # running sums 184..272 lie on days 122..133
        assert (table["values"][1]["first_doy"], table["values"][1]["last_doy"]) == (122, 133)

    def test_growing_season(self, output: Path) -> None:
        table = read_table(output, "growing_season")
        by_year = {row["year"]: row for row in table["values"]}
        assert (by_year[2019]["start_doy"], by_year[2019]["end_doy"]) == (100, 250)
        assert by_year[2020]["end_doy"] == 200
        assert table["envelope"] == [100, 250]

    def test_july_derived_from_daily(self, output: Path) -> None:
        table = read_table(output, "july")
        assert table["source"] == "daily"
        assert [row["year"] for row in table["values"]] == [2018, 2019]

    def test_seedset_comparison(self, output: Path) -> None:
        table = read_table(output, "seedset")
        assert table["plots"] == ["P1", "P2", "P3"]
        assert [t["variable"] for t in table["tests"]] == ["rel_seedset", "flowers"]
        p3 = table["pairs"][2]
        assert (p3["rel_seedset_first"], p3["rel_seedset_second"]) == (0.0, 25.0)

    def test_too_few_pairs_keeps_climate_tables(
        self, tmp_path: Path, data_dir: Path, clean_settings: pytest.MonkeyPatch
    ) -> None:
        (data_dir / "two_plots.csv").write_text(
            "Plot;Year;Flowers;Seedset\nP1;2020;10;5\nP1;2021;8;2\nP2;2020;20;10\nP2;2021;15;6\n"
        )
        clean_settings.setenv("ALPINE_SEEDSET_FILE", "two_plots.csv")
        output = tmp_path / "output"
        analyze.analyze_all(data_dir=data_dir, output_dir=output)

        assert read_table(output, "tdd_yearly")["values"] == [{"year": 2019, "tdd": 1168.0}]
        table = read_table(output, "seedset")
        assert table["plots"] == ["P1", "P2"]
        assert len(table["pairs"]) == 2
        assert table["tests"] == []

    def test_thresholds_recorded_in_meta(self, output: Path) -> None:
        raw = json.loads((output / "tables" / "tdd_yearly.json").read_text())
        assert raw["meta"]["thresholds"]["full_year_min_days"] == 355

    def test_missing_input_is_fatal(
        self, tmp_path: Path, clean_settings: pytest.MonkeyPatch
    ) -> None:
        with pytest.raises(InputFileError, match="station_daily.csv"):
            analyze.analyze_all(data_dir=tmp_path / "empty", output_dir=tmp_path / "out")
        assert not (tmp_path / "out" / "tables").exists()


class TestBuildFlow:
    """Test rendering from stored tables."""

    def test_builds_figures_and_report(
        self, tmp_path: Path, data_dir: Path, clean_settings: pytest.MonkeyPatch
    ) -> None:
        clean_settings.setenv("ALPINE_SEEDSET_FILE", "seedset.csv")
        clean_settings.setenv("ALPINE_FIGURE_DPI", "50")
        output = tmp_path / "output"
        analyze.analyze_all(data_dir=data_dir, output_dir=output)

        result = build.build_all(output_dir=output)
        assert sorted(result["figures"]) == [
            "flowering_min_temp.png",
            "growing_season.png",
            "july.png",
            "seedset.png",
            "tdd_frost.png",
            "tdd_yearly.png",
        ]
        report = Path(result["report"])
        assert report == output / "reports" / "index.html"
        html = report.read_text()
        assert "seedset.png" in html
        assert (output / "figures" / "seedset.png").exists()

    def test_no_tables(self, tmp_path: Path, clean_settings: pytest.MonkeyPatch) -> None:
        result = build.build_all(output_dir=tmp_path / "output")
        assert result == {"figures": [], "report": None}

    def test_load_tables_marks_missing(self, tmp_path: Path) -> None:
        store = ResultStore(tmp_path)
        store.write(analyze.JULY_PATH, {"source": "table", "values": []}, source="test")
        tables = build.load_tables(store)
        assert tables["july"] == {"source": "table", "values": []}
        assert tables["seedset"] is None

    def test_build_figures_skips_missing_tables(self) -> None:
        figures = build.build_figures({"july": {"source": "daily", "values": []}})
        assert list(figures) == ["july.png"]
