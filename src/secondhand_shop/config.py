"""Application configuration via pydantic-settings.

Reads from a .env file or SHOP_-prefixed environment variables.

Usage:
    from secondhand_shop.config import get_settings
    settings = get_settings()
    print(settings.registry_owner)
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration for the second-hand marketplace."""

    model_config = SettingsConfigDict(
        env_prefix="SHOP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Application ---
    app_env: Literal["development", "staging", "production"] = "development"
    app_log_level: str = "DEBUG"
    # None means: console output in development, JSON everywhere else
    log_json: bool | None = None

    # --- Registry ---
    registry_owner: str = "0x0000000000000000000000000000000000000000"

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

    @property
    def json_logs(self) -> bool:
        if self.log_json is None:
            return not self.is_development
        return self.log_json


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached singleton of the application settings."""
    return Settings()
