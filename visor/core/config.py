"""Process-level settings.

Read from environment variables (prefix VISOR_) and an optional .env file
using pydantic-settings. Workspace-specific options live in visor.json
(see WorkspaceConfig).
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class VisorSettings(BaseSettings):
    """Environment configuration."""

    model_config = SettingsConfigDict(
        env_prefix="VISOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    workspace: Path | None = Field(
        default=None,
        description="Default workspace directory when --workspace is not given",
    )
    log_level: str = Field(
        default="WARNING",
        description="Logging level for the CLI",
    )
    default_currency: str = Field(
        default="INR",
        min_length=3,
        max_length=3,
        pattern=r"^[A-Z]{3}$",
        description="Currency for newly created workspaces",
    )
    session_ttl_minutes: int = Field(
        default=60 * 24 * 7,
        ge=1,
        description="Lifetime of CLI sessions",
    )


@lru_cache()
def get_settings() -> VisorSettings:
    """Cached settings. Call get_settings.cache_clear() to reload."""
    return VisorSettings()
