"""Station data models: one daily record, one calendar year of records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from alpine_phenology.errors import DataValidationError

if TYPE_CHECKING:
    from collections.abc import Iterator
    from datetime import date


@dataclass(frozen=True)
class DailyRecord:
    """Station parameters for a single calendar day.

    Temperatures are in deg C, precipitation in mm. ``None`` marks an absent
    value; sentinel encodings never survive normalization.
    """

    date: date
    tam: float | None = None
    tan: float | None = None
    tax: float | None = None
    rr: float | None = None

    @property
    def year(self) -> int:
        return self.date.year

    @property
    def month(self) -> int:
        return self.date.month

    @property
    def doy(self) -> int:
        """Day of year, 1 = Jan 1."""
        return self.date.timetuple().tm_yday


@dataclass
class YearlySeries:
    """Ordered daily records of one calendar year (possibly a doy sub-range)."""

    year: int
    records: list[DailyRecord] = field(default_factory=list)

    def __post_init__(self) -> None:
        seen: set[int] = set()
        for rec in self.records:
            if rec.year != self.year:
                msg = f"Record {rec.date.isoformat()} does not belong to year {self.year}"
                raise DataValidationError(msg)
            if rec.doy in seen:
                msg = f"Duplicate day-of-year {rec.doy} in year {self.year}"
                raise DataValidationError(msg)
            seen.add(rec.doy)
        self.records = sorted(self.records, key=lambda r: r.date)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[DailyRecord]:
        return iter(self.records)

    def present_count(self, attr: str = "tam") -> int:
        """Count records whose ``attr`` value is present."""
        return sum(1 for rec in self.records if getattr(rec, attr) is not None)

    def between_doy(self, first: int, last: int) -> YearlySeries:
        """Return the sub-series with ``first <= doy <= last``."""
        return YearlySeries(
            year=self.year,
            records=[rec for rec in self.records if first <= rec.doy <= last],
        )

    def through(self, end: date) -> YearlySeries:
        """Return the sub-series of records dated on or before ``end``."""
        return YearlySeries(
            year=self.year,
            records=[rec for rec in self.records if rec.date <= end],
        )
