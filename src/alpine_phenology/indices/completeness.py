"""Year completeness policies.

A policy restricts every year to a day-of-year range and keeps the year only
if enough days in that range carry a mean temperature. Years that fail are
dropped from the analysis branch entirely: they are neither imputed nor
partially used.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from alpine_phenology.reference.thresholds import DEFAULT_THRESHOLDS, Thresholds

if TYPE_CHECKING:
    from alpine_phenology.datasources.station.models import YearlySeries

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompletenessPolicy:
    """Day-of-year range (inclusive) and the present-day minimum inside it."""

    name: str
    first_doy: int
    last_doy: int
    min_present: int


def full_year_policy(thresholds: Thresholds = DEFAULT_THRESHOLDS) -> CompletenessPolicy:
    """Whole calendar year, at least 355 present days (yearly TDD totals)."""
    return CompletenessPolicy(
        name="full-year",
        first_doy=1,
        last_doy=366,
        min_present=thresholds.full_year_min_days,
    )


def growing_window_policy(thresholds: Thresholds = DEFAULT_THRESHOLDS) -> CompletenessPolicy:
    """Days 91-213, at most 5 of the 123 days missing (frost/flowering analyses)."""
    return CompletenessPolicy(
        name="growing-window",
        first_doy=thresholds.window_first_doy,
        last_doy=thresholds.window_last_doy,
        min_present=thresholds.window_min_days,
    )


def apply_policy(
    series_by_year: dict[int, YearlySeries],
    policy: CompletenessPolicy,
) -> dict[int, YearlySeries]:
    """Restrict each year to the policy range and drop incomplete years.

    Args:
        series_by_year: Year -> full-calendar series.
        policy: Completeness policy to apply.

    Returns:
        New mapping containing only passing years, each restricted to
        ``policy.first_doy..policy.last_doy``. The input is not modified.
    """
    kept: dict[int, YearlySeries] = {}
    dropped: list[int] = []
    for year in sorted(series_by_year):
        window = series_by_year[year].between_doy(policy.first_doy, policy.last_doy)
        if window.present_count("tam") >= policy.min_present:
            kept[year] = window
        else:
            dropped.append(year)
    if dropped:
        logger.info(
            "%s policy dropped %d year(s): %s",
            policy.name,
            len(dropped),
            ", ".join(str(y) for y in dropped),
        )
    return kept
