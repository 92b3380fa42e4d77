"""Configuration settings for runnr-training."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


# __file__ = src/runnr_training/config.py
PACKAGE_ROOT = Path(__file__).parent
PROJECT_ROOT = PACKAGE_ROOT.parent.parent


class Settings(BaseSettings):
    """Runtime settings loaded from environment variables (prefix ``RUNNR_``)."""

    model_config = SettingsConfigDict(
        env_prefix="RUNNR_",
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "WARNING"

    # Historical prediction series
    history_cache_ttl_seconds: int = 1800  # 30 minutes
    history_cache_max_entries: int = 128
    history_max_weeks_back: int = 52
    history_step_weeks: int = 2
    history_min_runs: int = 10


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
