"""
Configuration Management for Homeschool Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Storage location, the persisted key and the logging level are all read
from the environment (or a local .env file) at startup.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_STORAGE_KEY = "homeschool-tracker-data"


class StorageSettings(BaseSettings):
    """Persisted key-value storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="HOMESCHOOL_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    backend: Literal["file", "memory"] = Field(
        default="file",
        description="Storage provider: 'file' for a local data directory, 'memory' for an ephemeral session"
    )
    data_dir: Path = Field(
        default=Path.home() / ".homeschool-tracker",
        description="Directory holding the persisted state blob"
    )
    key: str = Field(
        default=DEFAULT_STORAGE_KEY,
        min_length=1,
        description="Key under which the whole application state is stored"
    )

    @field_validator('data_dir')
    @classmethod
    def expand_data_dir(cls, v: Path) -> Path:
        """Expand a leading ~ so the directory can come from a .env file."""
        return v.expanduser()


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="HOMESCHOOL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    log_level: str = Field(
        default="INFO",
        description="Standard library logging level for diagnostics"
    )
    audit_history_size: int = Field(
        default=200,
        ge=1,
        le=10000,
        description="How many recent audit events are kept in memory"
    )

    # Volunteer hours provisioning
    volunteer_subject_name: str = Field(
        default="Volunteer Hours",
        description="Name of the subject used for volunteer hours"
    )
    volunteer_subject_color: str = Field(
        default="#8E44AD",
        description="Display color for the volunteer subject"
    )

    # Reporting
    school_year_start_month: int = Field(
        default=7,
        ge=1,
        le=12,
        description="Month the school year starts in (7 = July)"
    )

    @field_validator('log_level')
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept any case for the level name."""
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, with a
    "<name>_error" entry describing each failure.
    """
    results = {}

    settings = get_settings()

    try:
        _ = settings.storage
        results["storage"] = True
    except Exception as e:
        results["storage"] = False
        results["storage_error"] = str(e)

    try:
        _ = settings.app
        results["app"] = True
    except Exception as e:
        results["app"] = False
        results["app_error"] = str(e)

    return results
