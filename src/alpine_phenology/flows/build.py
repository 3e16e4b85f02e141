"""
Prefect flow for rendering figures and the HTML report from stored tables.

Reads what flows/analyze.py wrote, draws one PNG per table and a single
report page linking them.

Run locally:
    python -m alpine_phenology.flows.build
"""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

from prefect import flow, task

from alpine_phenology.config import get_settings
from alpine_phenology.flows.analyze import (
    COMPLETENESS_PATH,
    FLOWERING_PATH,
    GROWING_SEASON_PATH,
    JULY_PATH,
    OVERVIEW_PATH,
    SEEDSET_PATH,
    TDD_FROST_PATH,
    TDD_YEARLY_PATH,
)
from alpine_phenology.reference.thresholds import DEFAULT_THRESHOLDS
from alpine_phenology.renderers.climate import (
    build_growing_season_figure,
    build_july_figure,
    build_yearly_values_figure,
)
from alpine_phenology.renderers.report import build_report_html
from alpine_phenology.renderers.seedset import build_seedset_figure
from alpine_phenology.store import ResultStore

if TYPE_CHECKING:
    from matplotlib.figure import Figure

REPORT_PATH = Path("reports/index.html")

# Table key -> stored path, as written by the analyze flow
TABLE_PATHS = {
    "completeness": COMPLETENESS_PATH,
    "tdd_yearly": TDD_YEARLY_PATH,
    "tdd_frost": TDD_FROST_PATH,
    "flowering_min_temp": FLOWERING_PATH,
    "growing_season": GROWING_SEASON_PATH,
    "july": JULY_PATH,
    "climate_overview": OVERVIEW_PATH,
    "seedset": SEEDSET_PATH,
}


# =============================================================================
# Data loading tasks
# =============================================================================


@task(name="load-tables")
def load_tables(store: ResultStore) -> dict[str, Any]:
    """Load every known table; missing ones map to None."""
    return {key: store.read(path) for key, path in TABLE_PATHS.items()}


# =============================================================================
# Rendering tasks
# =============================================================================


@task(name="build-figures")
def build_figures(tables: dict[str, Any]) -> dict[str, Figure]:
    """Render one figure per available table, keyed by output file name."""
    figures: dict[str, Figure] = {}
    window = (DEFAULT_THRESHOLDS.window_first_doy, DEFAULT_THRESHOLDS.window_last_doy)

    if tables.get("tdd_yearly"):
        figures["tdd_yearly.png"] = build_yearly_values_figure(
            tables["tdd_yearly"], "tdd", "Thawing degree days per year", "TDD (°C·days)"
        )
    if tables.get("tdd_frost"):
        figures["tdd_frost.png"] = build_yearly_values_figure(
            tables["tdd_frost"], "tdd", "Thawing degree days through the last frost",
            "TDD (°C·days)",
        )
    if tables.get("flowering_min_temp"):
        figures["flowering_min_temp.png"] = build_yearly_values_figure(
            tables["flowering_min_temp"], "min_tan",
            "Minimum temperature in the flowering window", "TAN (°C)",
        )
    if tables.get("growing_season"):
        figures["growing_season.png"] = build_growing_season_figure(
            tables["growing_season"], window
        )
    if tables.get("july"):
        figures["july.png"] = build_july_figure(tables["july"])
    if tables.get("seedset"):
        figures["seedset.png"] = build_seedset_figure(tables["seedset"])
    return figures


@task(name="save-figures")
def save_figures(store: ResultStore, figures: dict[str, Figure], dpi: int) -> list[str]:
    """Save rendered figures below ``figures/``; returns the saved file names."""
    saved = []
    for name, figure in figures.items():
        store.save_figure(Path("figures") / name, figure, source="alpine_phenology.flows.build",
                          dpi=dpi)
        saved.append(name)
    return saved


@task(name="write-report")
def write_report(store: ResultStore, tables: dict[str, Any], figure_names: list[str]) -> Path:
    """Render the HTML report and write it via the store."""
    generated_at = datetime.now(UTC).strftime("%Y-%m-%d %H:%M UTC")
    html = build_report_html(tables, figure_names, generated_at)
    return store.write_text(REPORT_PATH, html, source="alpine_phenology.flows.build")


# =============================================================================
# Main flow
# =============================================================================


@flow(name="build-report", log_prints=True)
def build_all(output_dir: Path | None = None) -> dict[str, Any]:
    """Build figures and the report from the tables in the result store."""
    settings = get_settings()
    store = ResultStore(output_dir or settings.output_dir)

    print("Loading tables...")
    tables = load_tables(store)
    available = [key for key, value in tables.items() if value is not None]
    if not available:
        print("No tables found. Run the analyze flow first.")
        return {"figures": [], "report": None}
    if tables.get("seedset") is None:
        print("Warning: No seed-set table found. Building without the paired comparison.")

    print("Rendering figures...")
    figure_names = save_figures(store, build_figures(tables), settings.figure_dpi)

    print("Writing report...")
    report = write_report(store, tables, figure_names)
    print(f"Report built: {report}")
    return {"figures": figure_names, "report": str(report)}


if __name__ == "__main__":
    result = build_all()
    print(f"Flow complete: {result}")
