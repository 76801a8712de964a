"""Application configuration."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

PACKAGED_DATA_DIR = Path(__file__).resolve().parent / "data"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    reference_data_dir: Path | None = None
    environment: str = _ENVIRONMENT
    debug: bool = False
    timezone: str = "UTC"

    model_config = SettingsConfigDict(
        env_prefix="NUTRIMOM_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def resolve_reference_data_dir(settings: Settings) -> Path:
    """Return the configured reference data directory or the packaged one."""
    if settings.reference_data_dir is None:
        return PACKAGED_DATA_DIR
    return settings.reference_data_dir.expanduser()
