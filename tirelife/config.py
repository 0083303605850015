"""Application settings via pydantic-settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from tirelife.analytics.units import DepthUnit, DistanceUnit, Preferences
from tirelife.classify.classifier import ConditionThresholds


class Settings(BaseSettings):
    """
    tirelife configuration.

    Values are loaded from TIRELIFE_* environment variables, falling back to
    a ``.env`` file in the working directory. The core never reads these;
    the CLI and the API inject them.
    """

    model_config = SettingsConfigDict(
        env_prefix="TIRELIFE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Wear policy (mm)
    legal_min_depth_mm: float = Field(default=2.0, ge=0)
    optimal_above_mm: float = 7.0
    warn_60_above_mm: float = 6.0
    warn_30_above_mm: float = 3.0

    # Units the input rosters are recorded in
    depth_unit: DepthUnit = DepthUnit.MILLIMETER
    distance_unit: DistanceUnit = DistanceUnit.KILOMETER

    log_level: str = "INFO"

    # Comma-separated list, "*" for any origin
    cors_origins_raw: str = "*"

    def thresholds(self) -> ConditionThresholds:
        return ConditionThresholds(
            optimal_above=self.optimal_above_mm,
            warn_60_above=self.warn_60_above_mm,
            warn_30_above=self.warn_30_above_mm,
        )

    def preferences(self) -> Preferences:
        return Preferences(depth_unit=self.depth_unit, distance_unit=self.distance_unit)

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins_raw.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
