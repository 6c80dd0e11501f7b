"""
Application settings using pydantic-settings for type-safe configuration.

Settings are read from the environment (or a .env file) once and cached.
Placement priorities themselves come from ``lodging.config``; this module
only covers how the HTTP service runs.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Service settings loaded from environment variables.

    Defaults suit local development: no PocketBase, stock dormitory layout.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    log_level: str = Field(
        default="INFO",
        description="TRACE, DEBUG, INFO, WARNING or ERROR",
    )

    # === PocketBase Configuration ===
    pocketbase_url: str = Field(
        default="",
        description="PocketBase URL for placement config; empty uses schema defaults",
    )

    # === Workspace ===
    seed_default_layout: bool = Field(
        default=True,
        description="Start the workspace with the stock dormitory layout",
    )

    # === CORS Configuration ===
    # Note: Use str type for env var parsing, convert to list via property
    allowed_origins_str: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        alias="ALLOWED_ORIGINS",
        description="Allowed CORS origins (comma-separated)",
    )

    @property
    def allowed_origins(self) -> list[str]:
        """Parse comma-separated origins string into list."""
        return [origin.strip() for origin in self.allowed_origins_str.split(",") if origin.strip()]

    @field_validator("log_level", mode="after")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.upper()
        if v not in ("TRACE", "DEBUG", "INFO", "WARNING", "ERROR"):
            raise ValueError(f"Invalid LOG_LEVEL: {v}")
        return v


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance for the lifetime of the process."""
    return Settings()
