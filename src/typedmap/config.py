"""Library configuration using Pydantic settings.

Configuration is loaded from:
1. Environment variables (TYPEDMAP_* prefix)
2. .env file in current directory
3. Default values

Settings supply the defaults for maps created without an explicit policy.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from typedmap.types import DuplicateKeyPolicy, IterationOrder


class TypedMapSettings(BaseSettings):
    """Defaults for typed maps.

    Environment variables are prefixed with TYPEDMAP_.
    """

    model_config = SettingsConfigDict(
        env_prefix="TYPEDMAP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Construction policy
    duplicate_keys: DuplicateKeyPolicy = DuplicateKeyPolicy.STRICT
    iteration_order: IterationOrder = IterationOrder.INSERTION

    # Diagnostics
    debug: bool = False
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            msg = f"Invalid log level: {v}. Must be one of {valid_levels}"
            raise ValueError(msg)
        return upper


@lru_cache
def get_settings() -> TypedMapSettings:
    """Get the global settings.

    Settings are cached after first load.
    """
    return TypedMapSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (for testing)."""
    get_settings.cache_clear()
