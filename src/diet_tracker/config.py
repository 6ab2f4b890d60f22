"""Application configuration."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    data_file: Path = Path("data/db.json")
    openfoodfacts_base_url: str = "https://world.openfoodfacts.net/api/v2"
    lookup_timeout_seconds: float = 15
    lookup_retry_attempts: int = 1
    lookup_retry_delay_seconds: float = 0.3
    lookup_cache_ttl_seconds: int = 86400
    cors_allow_origins: str = "*"
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 3001
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_cors_origins(raw: str | None) -> list[str]:
    """Parse the allowed CORS origins from env."""
    if raw is None:
        return ["*"]
    cleaned = raw.strip()
    if cleaned in {"", "*"}:
        return ["*"]
    origins: list[str] = []
    for chunk in cleaned.split(","):
        value = chunk.strip().rstrip("/")
        if value:
            origins.append(value)
    return origins or ["*"]
