"""Climate-index derivations (pure functions, no I/O).

Every function takes the year -> YearlySeries mapping built once by
``datasources.station.group_by_year`` plus a ``Thresholds`` instance, and
returns a new mapping keyed by year. Years for which an index is undefined
are absent from the result.

Public API:
  - completeness: CompletenessPolicy, full_year_policy, growing_window_policy, apply_policy
  - growing_season: GrowingSeasonBounds, start_flags, end_flags, locate_growing_season,
                    growing_season_bounds, growing_season_envelope
  - degree_days: LastFrostEvent, FloweringWindow, daily_tdd, yearly_tdd, last_frost_event,
                 last_frost_events, frost_truncated_tdd, running_tdd,
                 flowering_window_min_temperature
"""

from alpine_phenology.indices.completeness import (
    CompletenessPolicy,
    apply_policy,
    full_year_policy,
    growing_window_policy,
)
from alpine_phenology.indices.degree_days import (
    FloweringWindow,
    LastFrostEvent,
    daily_tdd,
    flowering_window_min_temperature,
    frost_truncated_tdd,
    last_frost_event,
    last_frost_events,
    running_tdd,
    yearly_tdd,
)
from alpine_phenology.indices.growing_season import (
    GrowingSeasonBounds,
    end_flags,
    growing_season_bounds,
    growing_season_envelope,
    locate_growing_season,
    start_flags,
)

__all__ = [
    "CompletenessPolicy",
    "FloweringWindow",
    "GrowingSeasonBounds",
    "LastFrostEvent",
    "apply_policy",
    "daily_tdd",
    "end_flags",
    "flowering_window_min_temperature",
    "frost_truncated_tdd",
    "full_year_policy",
    "growing_season_bounds",
    "growing_season_envelope",
    "growing_window_policy",
    "last_frost_event",
    "last_frost_events",
    "locate_growing_season",
    "running_tdd",
    "start_flags",
    "yearly_tdd",
]
