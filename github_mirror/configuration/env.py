"""Pydantic Settings model for application configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from github_mirror.configuration.models import DEFAULT_GITHUB_API_URL


class Settings(BaseSettings):
    """Environment variable settings for the application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Generic application-wide settings
    DEBUG: bool = False
    DRY_RUN: bool = False

    # GitHub API settings
    GITHUB_API_URL: str = DEFAULT_GITHUB_API_URL
    GITHUB_USER: str | None = None

    # GitHub PAT settings
    GITHUB_PAT_TOKEN: str | None = None
