"""Configuration settings for cargo_build_deps.

Uses pydantic-settings for config parsing from environment variables
and defaults. Configuration precedence: CLI flags > env vars > defaults.
"""

from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    Settings are loaded from environment variables with the CARGO_BUILD_DEPS_
    prefix. When Cargo runs us as an external subcommand it exports ``CARGO``
    pointing at its own executable; that is used unless overridden.
    """

    model_config = SettingsConfigDict(
        env_prefix="CARGO_BUILD_DEPS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    cargo: str = Field(
        default="cargo",
        min_length=1,
        validation_alias=AliasChoices("CARGO_BUILD_DEPS_CARGO", "CARGO"),
        description="Cargo executable used for plan queries and builds",
    )
    manifest_name: str = Field(
        default="Cargo.toml",
        min_length=1,
        description="Manifest filename looked up in the project and its members",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Logging level",
    )


def get_settings() -> Settings:
    """Get the application settings.

    Returns:
        Settings instance loaded from environment.
    """
    return Settings()


def print_settings_json(settings: Settings | None = None) -> str:
    """Render effective settings as JSON.

    Args:
        settings: Optional settings instance; uses default if not provided.

    Returns:
        JSON string of effective settings.
    """
    if settings is None:
        settings = get_settings()
    return settings.model_dump_json(indent=2)


__all__ = ["Settings", "get_settings", "print_settings_json"]
