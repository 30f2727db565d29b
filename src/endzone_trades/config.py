"""
Configuration module using pydantic-settings.

Loads settings from environment variables with sensible defaults.
"""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="ENDZONE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API Configuration
    api_title: str = "Endzone Trades API"
    api_version: str = "0.1.0"
    api_description: str = "Fair trade recommendations for Sleeper fantasy football leagues"
    debug: bool = False
    log_level: str = "INFO"

    # Sleeper API
    sleeper_base_url: str = "https://api.sleeper.app/v1"
    sleeper_timeout: float = 30.0

    # Season projections (Tank01 via RapidAPI)
    rapidapi_host: str = "tank01-nfl-live-in-game-real-time-statistics-nfl.p.rapidapi.com"
    rapidapi_key: str | None = None
    projections_season: int = 2025
    projections_timeout: float = 15.0

    # Heuristic tables; packaged defaults are used when unset
    valuation_tables_path: Path | None = None

    # League/session store
    database_path: Path = Path("data/endzone.sqlite")

    # Server Configuration
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    @property
    def projections_base_url(self) -> str:
        return f"https://{self.rapidapi_host}"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
