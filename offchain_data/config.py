"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - SIMULATED_FAILURE_COUNT is a non-negative integer (fractional values floored)
    - Any invalid value surfaces as ConfigurationError at startup, never later
    - get_settings() is cached (lru_cache): single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all settings: works out-of-the-box next to a block dump
"""

import math
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from offchain_data.core.errors import ConfigurationError


class Settings(BaseSettings):
    """Replicator settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Store
    store_file: Path = Path("store.log")
    simulated_failure_count: int = 0

    @field_validator("simulated_failure_count", mode="before")
    @classmethod
    def parse_failure_count(cls, v: object) -> int:
        """Accepts "3", "3.7" (floored to 3) or an int; rejects negatives."""
        if isinstance(v, bool):
            raise ValueError(f"invalid SIMULATED_FAILURE_COUNT value: {v}")
        try:
            value = float(v)
        except (TypeError, ValueError):
            raise ValueError(f"invalid SIMULATED_FAILURE_COUNT value: {v}")
        if value < 0 or not math.isfinite(value):
            raise ValueError(f"invalid SIMULATED_FAILURE_COUNT value: {v}")
        return math.floor(value)

    # Replication
    checkpoint_file: Path = Path("checkpoint.json")
    max_write_attempts: int = Field(default=3, ge=1)

    # Observability
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"


@lru_cache
def get_settings() -> Settings:
    try:
        return Settings()
    except ValidationError as e:
        raise ConfigurationError(str(e)) from e
