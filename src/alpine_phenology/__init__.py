"""Alpine Phenology - climate indices and flowering analysis for one weather station.

Architecture::

    datasources/   Input files (station parameters, calendar, July summary, seed-set sheet)
    indices/       Pure climate-index derivations (completeness, growing season, degree days)
    analysis/      Descriptive statistics and the paired seed-set comparison
    store.py       JSON result store (derived tables) plus figure/report locations
    renderers/     Pure data -> matplotlib figures and the HTML report
    flows/         Prefect orchestration (analyze writes tables, build renders outputs)

Data flow: datasources -> indices -> analysis -> store -> renderers -> output/

Thresholds for the one-station calibration live in ``reference/thresholds.py``.
"""

__version__ = "0.1.0"

from alpine_phenology.config import Settings
from alpine_phenology.reference.thresholds import DEFAULT_THRESHOLDS, Thresholds

__all__ = ["DEFAULT_THRESHOLDS", "Settings", "Thresholds", "__version__"]
