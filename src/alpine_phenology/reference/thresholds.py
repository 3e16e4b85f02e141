"""Thresholds of the one-station calibration.

All index derivations take a ``Thresholds`` instance so a replication at
another site only has to swap this object.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Thresholds:
    """Fixed temperature, degree-day and completeness thresholds."""

    # Growing season: a run of days with mean temperature above the trigger
    growing_season_temp_c: float = 5.0
    growing_season_run_days: int = 5

    # Frost: minimum temperature at or below this value
    frost_temp_c: float = -3.0

    # Flowering window, expressed as accumulated thawing degree days (exclusive bounds)
    flowering_tdd_low: float = 180.0
    flowering_tdd_high: float = 275.0

    # Completeness: present mean-temperature days required per year
    full_year_min_days: int = 355

    # Analysis window (day-of-year, inclusive) and the tolerated gaps inside it
    window_first_doy: int = 91
    window_last_doy: int = 213
    window_max_missing_days: int = 5

    def __post_init__(self) -> None:
        if self.growing_season_run_days < 1:
            msg = "growing_season_run_days must be >= 1"
            raise ValueError(msg)
        if not 1 <= self.window_first_doy <= self.window_last_doy <= 366:
            msg = f"Invalid analysis window {self.window_first_doy}-{self.window_last_doy}"
            raise ValueError(msg)
        if self.flowering_tdd_low >= self.flowering_tdd_high:
            msg = "flowering_tdd_low must be below flowering_tdd_high"
            raise ValueError(msg)

    @property
    def window_length(self) -> int:
        """Number of days in the analysis window."""
        return self.window_last_doy - self.window_first_doy + 1

    @property
    def window_min_days(self) -> int:
        """Present days required inside the analysis window (123 - 5 = 118)."""
        return self.window_length - self.window_max_missing_days


DEFAULT_THRESHOLDS = Thresholds()
