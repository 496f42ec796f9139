"""Configuration using Pydantic Settings.

Settings are loaded from environment variables prefixed with ``DATAMOD_``.

Optionally, point ``ENV_FILE`` at a local env file. Nothing is loaded from
``.env`` unless it is requested explicitly.
"""

import logging
import os
from enum import Enum
from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RunEnvironment(str, Enum):
    """Environment the acceptance suite runs in."""

    LOCAL = "local"
    TEST = "test"
    CI = "ci"


class Settings(BaseSettings):
    """
    datamod settings with type validation.

    The database URL is only consulted when an SqlAlchemyApi is built
    without explicit connection details.
    """

    model_config = SettingsConfigDict(
        env_file=os.getenv("ENV_FILE") or None, env_prefix="DATAMOD_", extra="ignore"
    )

    env: RunEnvironment = RunEnvironment.LOCAL

    # Database
    database_url: str = "sqlite:///:memory:"
    database_schema: str | None = None
    echo_sql: bool = False

    # Logging
    log_level: str = "INFO"
    structured_logs: bool = False

    # Providers insert their seed rows on construction
    seed_on_init: bool = True

    @field_validator("env", mode="before")
    @classmethod
    def validate_env(cls, v: str | RunEnvironment) -> RunEnvironment:
        """Validate and parse env to RunEnvironment enum."""
        if isinstance(v, RunEnvironment):
            return v
        try:
            return RunEnvironment(v.lower())
        except ValueError:
            raise ValueError(
                f"env must be one of {[e.value for e in RunEnvironment]}, got '{v}'"
            )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"log_level must be a logging level name, got '{v}'")
        return level

    @model_validator(mode="after")
    def validate_ci_settings(self) -> "Settings":
        """CI runs must target a real database rather than the in-memory default."""
        if self.env == RunEnvironment.CI and self.database_url.startswith("sqlite:///:memory:"):
            raise ValueError("DATAMOD_DATABASE_URL must be set explicitly in ci environment")
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, loaded on first use."""
    return Settings()


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() re-reads the environment."""
    get_settings.cache_clear()
