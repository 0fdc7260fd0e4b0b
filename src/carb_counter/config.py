"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

STORAGE_BACKENDS = {"file", "supabase", "memory"}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    storage_backend: str = "file"
    data_dir: str = "data"
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    supabase_table: str = "documents"
    timezone: str | None = None
    log_level: str = "INFO"
    history_limit: int = 20
    usage_window: int = 10
    quick_add_limit: int = 4
    recent_history_limit: int = 5
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_prefix="CARB_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_storage_backend(raw: str | None) -> str:
    """Normalize the storage backend name, defaulting to file storage."""
    if raw is None:
        return "file"
    cleaned = raw.strip().lower()
    if cleaned in STORAGE_BACKENDS:
        return cleaned
    return "file"
