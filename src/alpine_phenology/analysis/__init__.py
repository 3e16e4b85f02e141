"""Statistics on derived per-year values and on field observations.

Dependency rule: analysis/ imports datasource *models* and index results only.
It never reads files or draws figures.

Modules:
  - summary: SummaryStats, summarize, outliers (IQR fences for figure labels)
  - seedset: paired 2020/2021 comparison (Shapiro-Wilk + paired t-test)
  - overview: per-year mean temperature and precipitation total
"""

from alpine_phenology.analysis.overview import YearOverview, climate_overview
from alpine_phenology.analysis.seedset import (
    PAIRED_VARIABLES,
    PairedTestResult,
    PlotPair,
    pair_observations,
    paired_comparison,
    paired_differences,
    paired_plots,
    paired_test,
)
from alpine_phenology.analysis.summary import SummaryStats, outliers, summarize

__all__ = [
    "PAIRED_VARIABLES",
    "PairedTestResult",
    "PlotPair",
    "SummaryStats",
    "YearOverview",
    "climate_overview",
    "outliers",
    "pair_observations",
    "paired_comparison",
    "paired_differences",
    "paired_plots",
    "paired_test",
    "summarize",
]
