"""Lightweight configuration for the Wasteland server."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from wasteland.utils.hex_math import MAX_MAP_RADIUS


class Settings(BaseSettings):
    """Application settings, read from ``WASTELAND_*`` variables or ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="WASTELAND_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    map_radius: int = Field(
        default=40, ge=0, le=MAX_MAP_RADIUS, description="Radius of generated maps in hexes"
    )
    map_seed: int | None = Field(
        default=None, description="Seed for the initial map; random when unset"
    )
    visibility_range: int = Field(
        default=2, ge=0, description="Hexes revealed around a new faction's capital"
    )
    log_level: str = Field(default="INFO", description="Root logging level")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://127.0.0.1:5173"],
        description="Origins allowed to call the HTTP API",
    )


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    return Settings()
