"""Configuration helpers for the strokes-gained service."""

from __future__ import annotations

import os
from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class _Settings(BaseSettings):
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    cors_allow_origins: str = Field(
        default="http://localhost,http://127.0.0.1", alias="CORS_ALLOW_ORIGINS"
    )
    recent_rounds_default: int = Field(
        default=10, ge=1, alias="SG_RECENT_ROUNDS_DEFAULT"
    )
    key_moments: int = Field(default=2, ge=0, alias="SG_KEY_MOMENTS")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.cors_allow_origins.split(",") if o.strip()]


@lru_cache(maxsize=1)
def get_settings() -> _Settings:
    """Return cached application settings."""

    return _Settings()  # type: ignore[call-arg]


def reset_settings_cache() -> None:
    """Clear cached settings (primarily for tests)."""

    get_settings.cache_clear()


def env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


__all__ = ["env_bool", "get_settings", "reset_settings_cache"]
