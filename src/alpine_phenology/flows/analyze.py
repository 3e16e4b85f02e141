"""
Prefect flow deriving all climate indices and statistics from the input files.

Reads the station, calendar, July and seed-set inputs, runs the index
pipeline, and writes every derived table to the result store.

Run locally:
    python -m alpine_phenology.flows.analyze
"""

from __future__ import annotations

from dataclasses import asdict
from pathlib import Path
from typing import TYPE_CHECKING, Any

from prefect import flow, task

from alpine_phenology.analysis import climate_overview, paired_comparison, paired_plots, summarize
from alpine_phenology.analysis.seedset import PAIRED_VARIABLES, pair_observations
from alpine_phenology.config import get_settings
from alpine_phenology.datasources import phenology, station
from alpine_phenology.datasources.station.client import DATE_COLUMN
from alpine_phenology.datasources.station.normalize import parse_dates
from alpine_phenology.errors import InputFileError, InsufficientDataError
from alpine_phenology.indices import (
    apply_policy,
    flowering_window_min_temperature,
    frost_truncated_tdd,
    full_year_policy,
    growing_season_bounds,
    growing_season_envelope,
    growing_window_policy,
    last_frost_events,
    yearly_tdd,
)
from alpine_phenology.reference.thresholds import DEFAULT_THRESHOLDS, Thresholds
from alpine_phenology.store import ResultStore

if TYPE_CHECKING:
    import pandas as pd

    from alpine_phenology.datasources.phenology import FlowerPlotObservation
    from alpine_phenology.datasources.station import JulySummary, YearlySeries

# Relative paths within the store, shared with flows/build.py
COMPLETENESS_PATH = Path("tables/completeness.json")
TDD_YEARLY_PATH = Path("tables/tdd_yearly.json")
TDD_FROST_PATH = Path("tables/tdd_frost.json")
FLOWERING_PATH = Path("tables/flowering_min_temp.json")
GROWING_SEASON_PATH = Path("tables/growing_season.json")
JULY_PATH = Path("tables/july.json")
OVERVIEW_PATH = Path("tables/climate_overview.json")
SEEDSET_PATH = Path("tables/seedset.json")


def _existing(path: Path) -> Path:
    if not path.exists():
        raise InputFileError(path, "file not found")
    return path


# =============================================================================
# Loading tasks
# =============================================================================


@task(name="load-station")
def load_station(path: Path) -> pd.DataFrame:
    """Read the raw station-parameter table."""
    return station.read_station_table(_existing(path))


@task(name="load-calendar")
def load_calendar(path: Path | None, raw_station: pd.DataFrame) -> pd.DataFrame:
    """Read the calendar table, or generate one spanning the station's years."""
    if path is not None:
        return station.read_calendar_table(_existing(path))

    dates = parse_dates(raw_station[DATE_COLUMN]).dropna()
    if dates.empty:
        msg = "station table has no parseable dates to derive a calendar from"
        raise InputFileError("station table", msg, column=DATE_COLUMN)
    return station.build_calendar(int(dates.dt.year.min()), int(dates.dt.year.max()))


@task(name="normalize-station")
def normalize_station(
    raw_station: pd.DataFrame,
    calendar: pd.DataFrame,
) -> dict[int, YearlySeries]:
    """Normalize the station table and key it by year."""
    frame = station.normalize_station_table(raw_station, calendar)
    return station.group_by_year(frame)


@task(name="load-july")
def load_july(
    path: Path | None,
    series_by_year: dict[int, YearlySeries],
) -> tuple[list[JulySummary], str]:
    """Read the July summary table, falling back to values derived from daily data."""
    if path is not None:
        return station.read_july_table(_existing(path)), "table"
    return station.july_summary_from_daily(series_by_year), "daily"


@task(name="load-seedset")
def load_seedset(path: Path) -> list[FlowerPlotObservation]:
    """Read the flowering/seed-set spreadsheet."""
    return phenology.read_seedset_table(_existing(path))


# =============================================================================
# Derivation tasks
# =============================================================================


def _summary_or_none(values: list[float], label: str) -> dict[str, Any] | None:
    try:
        return summarize(values).to_dict()
    except InsufficientDataError as exc:
        print(f"Warning: no summary statistics for {label}: {exc}")
        return None


@task(name="derive-climate-indices")
def derive_climate_indices(
    series_by_year: dict[int, YearlySeries],
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
) -> dict[Path, dict[str, Any]]:
    """Run the index pipeline and shape each result as a stored table."""
    full_years = apply_policy(series_by_year, full_year_policy(thresholds))
    window_years = apply_policy(series_by_year, growing_window_policy(thresholds))

    tdd = yearly_tdd(full_years)
    frost_events = last_frost_events(window_years, thresholds)
    frost_tdd = frost_truncated_tdd(window_years, thresholds)
    flowering = flowering_window_min_temperature(series_by_year, thresholds)
    bounds = growing_season_bounds(series_by_year, thresholds)
    envelope = growing_season_envelope(bounds)

    tables: dict[Path, dict[str, Any]] = {
        COMPLETENESS_PATH: {
            "all_years": sorted(series_by_year),
            "full_year": sorted(full_years),
            "growing_window": sorted(window_years),
        },
        TDD_YEARLY_PATH: {
            "values": [{"year": y, "tdd": v} for y, v in tdd.items()],
            "summary": _summary_or_none(list(tdd.values()), "yearly TDD"),
        },
        TDD_FROST_PATH: {
            "values": [
                {
                    "year": y,
                    "last_frost_date": frost_events[y].date.isoformat(),
                    "last_frost_doy": frost_events[y].doy,
                    "last_frost_tan": frost_events[y].tan,
                    "tdd": v,
                }
                for y, v in frost_tdd.items()
            ],
            "summary": _summary_or_none(list(frost_tdd.values()), "frost-truncated TDD"),
        },
        FLOWERING_PATH: {
            "values": [asdict(w) for w in flowering.values()],
            "summary": _summary_or_none(
                [w.min_tan for w in flowering.values()], "flowering-window minimum"
            ),
        },
        GROWING_SEASON_PATH: {
            "values": [asdict(b) for b in bounds.values()],
            "envelope": list(envelope) if envelope else None,
        },
        OVERVIEW_PATH: {
            "values": [asdict(o) for o in climate_overview(full_years).values()],
        },
    }
    print(
        f"{len(series_by_year)} year(s): {len(full_years)} complete, "
        f"{len(window_years)} with a complete analysis window, "
        f"{len(frost_tdd)} with a frost day, {len(flowering)} reaching the flowering window"
    )
    return tables


@task(name="compare-seedset")
def compare_seedset(
    observations: list[FlowerPlotObservation],
    plot_ids: list[str],
    years: tuple[int, int],
) -> dict[str, Any]:
    """Paired comparison between the two years, shaped as a stored table.

    Too few paired plots leave ``tests`` empty; the pairs are still stored.
    """
    plots = plot_ids or paired_plots(observations, years)
    pairs = pair_observations(observations, plots, years)
    try:
        tests = [r.to_dict() for r in paired_comparison(observations, plots, years)]
    except InsufficientDataError as exc:
        print(f"Warning: no paired tests: {exc}")
        tests = []

    rows = []
    for pair in pairs:
        row: dict[str, Any] = {"plot": pair.plot}
        for variable in PAIRED_VARIABLES:
            row[f"{variable}_first"] = getattr(pair.first, variable)
            row[f"{variable}_second"] = getattr(pair.second, variable)
            row[f"{variable}_difference"] = pair.difference(variable)
        rows.append(row)

    return {
        "years": list(years),
        "plots": list(plots),
        "pairs": rows,
        "tests": tests,
    }


@task(name="save-table")
def save_table(
    store: ResultStore, path: Path, data: dict[str, Any], thresholds: Thresholds
) -> Path:
    """Write one derived table via the store."""
    return store.write(
        path, data, source="alpine_phenology.flows.analyze", thresholds=asdict(thresholds)
    )


# =============================================================================
# Main flow
# =============================================================================


@flow(name="analyze-station", log_prints=True)
def analyze_all(
    data_dir: Path | None = None,
    output_dir: Path | None = None,
) -> dict[str, Any]:
    """
    Derive every table from the configured input files.

    Input read failures are fatal: the flow stops with the offending file
    (and column) named instead of writing partial results. Climate tables are
    written before the seed-set comparison runs.
    """
    settings = get_settings()
    if data_dir is not None:
        settings = settings.model_copy(update={"data_dir": data_dir})
    store = ResultStore(output_dir or settings.output_dir)
    thresholds = DEFAULT_THRESHOLDS

    station_path = settings.input_path(settings.station_file)
    print(f"Loading station table {station_path}...")
    raw_station = load_station(station_path)
    calendar_path = settings.input_path(settings.calendar_file) if settings.calendar_file else None
    calendar = load_calendar(calendar_path, raw_station)

    print("Normalizing station data...")
    series_by_year = normalize_station(raw_station, calendar)

    observations = None
    if settings.seedset_file:
        observations = load_seedset(settings.input_path(settings.seedset_file))
    else:
        print("Warning: no seed-set file configured. Skipping paired comparison.")

    print("Deriving climate indices...")
    tables = derive_climate_indices(series_by_year, thresholds)

    july_path = settings.input_path(settings.july_file) if settings.july_file else None
    july, july_source = load_july(july_path, series_by_year)
    tables[JULY_PATH] = {"source": july_source, "values": [asdict(j) for j in july]}

    written = [str(save_table(store, path, data, thresholds)) for path, data in tables.items()]

    if observations is not None:
        print("Comparing seed-set between years...")
        seedset = compare_seedset(
            observations, settings.paired_plot_ids, settings.comparison_years
        )
        written.append(str(save_table(store, SEEDSET_PATH, seedset, thresholds)))

    print(f"Wrote {len(written)} table(s) to {store.tables}")
    return {"years": len(series_by_year), "tables": written}


if __name__ == "__main__":
    result = analyze_all()
    print(f"Flow complete: {result}")
