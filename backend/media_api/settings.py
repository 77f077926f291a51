"""Runtime configuration for the Mediashelf API."""
from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class MediaSettings(BaseSettings):
    """Environment-aware settings for the Mediashelf API service."""

    catalog_path: str | None = Field(
        default=None,
        description="Path to the static catalog JSON. Uses the bundled catalog when unset.",
    )
    placeholder_thumbnail_url: str = Field(
        default="https://placehold.co/320x180?text=Image+unavailable",
        description="Generic image reference substituted for thumbnails that fail to load.",
    )
    max_player_sessions: int = Field(
        default=256,
        ge=1,
        description="Open players kept in memory; the oldest is unmounted beyond this.",
    )
    log_level: str = Field(default="INFO", description="Root logging level for the service.")
    host: str = Field(default="0.0.0.0", description="Bind address for the development server.")
    port: int = Field(default=8000, description="Bind port for the development server.")

    model_config = SettingsConfigDict(
        env_prefix="MEDIASHELF_",
        env_file=".env",
        env_file_encoding="utf-8",
    )
