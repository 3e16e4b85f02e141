"""Runtime settings loaded from the environment (prefix ``ALPINE_``) or a ``.env`` file."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Input locations and output options for an analysis run."""

    model_config = SettingsConfigDict(
        env_prefix="ALPINE_",
        env_file=".env",
        extra="ignore",
    )

    app_name: str = "alpine-phenology"
    app_env: str = "development"
    debug: bool = False

    data_dir: Path = Path("data")
    output_dir: Path = Path("output")

    station_file: str = "station_daily.csv"
    # Without a calendar file the full calendar is generated from the station years
    calendar_file: str | None = None
    july_file: str | None = None
    seedset_file: str | None = None

    paired_plot_ids: list[str] = Field(default_factory=list)
    comparison_years: tuple[int, int] = (2020, 2021)

    figure_dpi: int = Field(default=150, ge=50, le=600)

    def input_path(self, name: str) -> Path:
        """Resolve an input file name against ``data_dir`` (absolute paths pass through)."""
        path = Path(name)
        return path if path.is_absolute() else self.data_dir / path


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
