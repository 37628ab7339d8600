"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

DEFAULT_CORS_HEADERS = "authorization, x-client-info, apikey, content-type"
DEFAULT_RECONCILIATION_SCHEDULE = "*/15 * * * *"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    admin_token: str
    cors_allow_headers: str = DEFAULT_CORS_HEADERS
    typed_error_statuses: bool = False
    public_base_url: str = "http://localhost:8000"
    reconciliation_schedule: str = DEFAULT_RECONCILIATION_SCHEDULE
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_csv(raw: str | None) -> list[str]:
    """Split a comma-separated setting into trimmed, non-empty values."""
    if raw is None:
        return []
    return [chunk.strip() for chunk in raw.split(",") if chunk.strip()]
