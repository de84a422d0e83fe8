"""Application settings loaded from the environment."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    """Runtime configuration; every field can be set as CHARGEFINDER_<NAME>."""

    model_config = SettingsConfigDict(
        env_prefix="CHARGEFINDER_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Chargefinder API"
    stations_csv: Path = Field(
        default=PROJECT_ROOT / "data" / "stations.csv",
        description="CSV export of the charging_stations collection.",
    )
    log_level: str = Field(default="INFO", description="Root log level.")


@lru_cache
def get_settings() -> Settings:
    return Settings()
