"""
Configuration Management for Earnly

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Every tunable of the engine (look-back window, tick interval, storage
location) is visible in one place and validated at startup.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Where and how ledger state is persisted."""

    model_config = SettingsConfigDict(
        env_prefix="EARNLY_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    backend: str = Field(
        default="json",
        pattern="^(json|memory)$",
        description="Storage backend: 'json' file on disk or 'memory'"
    )
    data_dir: Path = Field(
        default=Path("data"),
        description="Directory holding the state file"
    )
    state_file_name: str = Field(
        default="earnly_state.json",
        min_length=1,
        description="Name of the JSON state document"
    )
    write_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Attempts per write before the failure is logged"
    )

    @property
    def state_path(self) -> Path:
        """Full path of the state document."""
        return self.data_dir / self.state_file_name


class EngineSettings(BaseSettings):
    """Earnings engine tunables."""

    model_config = SettingsConfigDict(
        env_prefix="EARNLY_ENGINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    reconcile_lookback_days: int = Field(
        default=7,
        ge=1,
        le=366,
        description="How far back a first-ever reconciliation looks"
    )
    history_preview_size: int = Field(
        default=3,
        ge=1,
        description="Number of past earnings shown in the collapsed history"
    )
    refresh_delay_seconds: float = Field(
        default=0.5,
        ge=0.0,
        le=10.0,
        description="Advisory pause before an async refresh completes"
    )
    tick_interval_seconds: float = Field(
        default=60.0,
        gt=0.0,
        description="Seconds between accrual recomputations"
    )
    seed_sample_jobs: bool = Field(
        default=True,
        description="Populate sample jobs when no jobs are persisted"
    )
    default_user_name: str = Field(
        default="John Doe",
        description="Display name used until the user sets one"
    )


class LoggingSettings(BaseSettings):
    """structlog output configuration."""

    model_config = SettingsConfigDict(
        env_prefix="EARNLY_LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    level: str = Field(
        default="INFO",
        description="Minimum log level"
    )
    json_output: bool = Field(
        default=True,
        description="Render JSON lines (False = human-readable console output)"
    )

    @field_validator('level')
    @classmethod
    def normalize_level(cls, v: str) -> str:
        """Accept any case, store upper case."""
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
    def engine(self) -> EngineSettings:
        return EngineSettings()

    @property
    def logging(self) -> LoggingSettings:
        return LoggingSettings()


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
    '<name>_error' entry for each failure.
    """
    results = {}
    settings = get_settings()

    for name in ("storage", "engine", "logging"):
        try:
            getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
