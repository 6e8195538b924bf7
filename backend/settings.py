"""
Settings for workout planner sync, read from the environment and .env.

Garmin credentials, the data directory for plan files and the pacing
between Garmin calls all live here. The CLI and the API both go through
get_settings(); tests build Settings(_env_file=None) directly.

Usage:
    from backend.settings import get_settings

    settings = get_settings()
    if not settings.has_garmin_credentials:
        ...
    workouts_file = settings.workouts_path
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Core Environment
    # -------------------------------------------------------------------------
    environment: str = Field(
        default="development",
        description="Runtime environment: development, staging, production",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level (DEBUG, INFO, WARNING, ERROR)",
    )

    # -------------------------------------------------------------------------
    # Garmin Connect
    # -------------------------------------------------------------------------
    garmin_email: Optional[str] = Field(
        default=None,
        description="Garmin Connect account email",
    )
    garmin_password: Optional[str] = Field(
        default=None,
        description="Garmin Connect account password",
    )
    mock_mode: bool = Field(
        default=False,
        description="Use the in-memory sample client instead of Garmin Connect",
    )

    # -------------------------------------------------------------------------
    # Sync behaviour
    # -------------------------------------------------------------------------
    data_dir: Path = Field(
        default=Path("./data"),
        description="Directory for exported workouts and plan files",
    )
    fetch_limit: int = Field(
        default=100,
        ge=1,
        description="Maximum number of workouts listed per export",
    )
    fetch_delay_seconds: float = Field(
        default=0.5,
        ge=0,
        description="Pause between workout and activity detail fetches",
    )
    upload_delay_seconds: float = Field(
        default=1.0,
        ge=0,
        description="Pause between workout uploads",
    )

    # -------------------------------------------------------------------------
    # Observability - Sentry
    # -------------------------------------------------------------------------
    sentry_dsn: Optional[str] = Field(
        default=None,
        description="Sentry DSN for error tracking",
    )

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Ensure environment is a valid value."""
        valid_environments = {"development", "staging", "production", "test"}
        if v.lower() not in valid_environments:
            raise ValueError(
                f"Invalid environment '{v}'. Must be one of: {valid_environments}"
            )
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is one the logging module knows."""
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Invalid log level '{v}'")
        return level

    # -------------------------------------------------------------------------
    # Helper Properties
    # -------------------------------------------------------------------------
    @property
    def has_garmin_credentials(self) -> bool:
        return bool(self.garmin_email and self.garmin_password)

    @property
    def workouts_path(self) -> Path:
        """Default export / upload file."""
        return self.data_dir / "workouts.json"

    @property
    def activities_path(self) -> Path:
        """Default output of export-activities."""
        return self.data_dir / "activities.json"

    @property
    def next_week_plan_path(self) -> Path:
        """Default output of the template and copy-next-week commands."""
        return self.data_dir / "next-week.workouts.tmp.json"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    For testing, you can clear the cache with get_settings.cache_clear().

    Returns:
        Settings: Application settings instance
    """
    return Settings()
