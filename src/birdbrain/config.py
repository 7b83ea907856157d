"""
Application settings.

Values are read once from the environment (and an optional ``.env`` file)
into an immutable ``Settings`` object. Request-handling code never reads the
environment directly; the eBird credential is injected into the client at
construction time.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the hotspot service."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    app_name: str = "birdbrain"
    app_env: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    ebird_api_key: SecretStr | None = Field(default=None, description="X-eBirdApiToken value")
    ebird_base_url: str = "https://api.ebird.org/v2"
    zip_lookup_url: str = "https://api.zippopotam.us/us"

    default_distance_km: float = 25.0
    activity_concurrency: int = Field(default=5, ge=1)
    request_timeout: float = Field(default=30.0, gt=0)
    activity_timeout: float | None = Field(default=60.0, gt=0, description="Per-hotspot budget")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    return Settings()
