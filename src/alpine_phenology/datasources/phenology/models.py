"""Flowering and seed-set observation models."""

from __future__ import annotations

from pydantic import BaseModel, Field, computed_field, field_validator, model_validator


def relative_seedset(flowers: int, seedset: int) -> float:
    """Percentage of flowering units that set seed.

    A plot without flowers has, by definition, a relative seed-set of 0
    (not undefined), so it still takes part in paired comparisons.
    """
    if flowers == 0:
        return 0.0
    return seedset / flowers * 100


class FlowerPlotObservation(BaseModel):
    """Counts for one plot in one year."""

    model_config = {"frozen": True, "str_strip_whitespace": True}

    plot: str = Field(..., min_length=1, description="Plot identifier")
    year: int = Field(..., ge=1900, le=2100)
    flowers: int = Field(..., ge=0, description="Counted flowering units")
    seedset: int = Field(..., ge=0, description="Flowering units that set seed")

    @field_validator("plot", mode="before")
    @classmethod
    def _plot_as_text(cls, value: object) -> object:
        # Spreadsheets hand numeric plot ids over as floats (e.g. 12.0)
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        if isinstance(value, int):
            return str(value)
        return value

    @model_validator(mode="after")
    def _seedset_within_flowers(self) -> FlowerPlotObservation:
        if self.seedset > self.flowers:
            msg = f"plot {self.plot} ({self.year}): seedset {self.seedset} > flowers {self.flowers}"
            raise ValueError(msg)
        return self

    @computed_field  # type: ignore[prop-decorator]
    @property
    def rel_seedset(self) -> float:
        """Relative seed-set in percent (0 when there are no flowers)."""
        return relative_seedset(self.flowers, self.seedset)
