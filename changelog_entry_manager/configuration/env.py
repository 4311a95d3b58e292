"""Pydantic Settings model for application configuration."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from changelog_entry_manager.utils.constants import DEFAULT_CHANGELOG_DIR


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
    CHANGELOG_DIR: Path = Path(DEFAULT_CHANGELOG_DIR)
    CHANGELOG_CONFIG: Path | None = None

    # GitHub Actions settings
    GITHUB_EVENT_PATH: Path | None = None
    GITHUB_REF: str | None = None
    GITHUB_REPOSITORY: str | None = None

    # GitHub API settings
    GITHUB_API_URL: str = "https://api.github.com"
    GITHUB_TOKEN: str | None = None
    GITHUB_TOKEN_FILE: Path | None = None

    # Team whose members are not labelled as contributors
    GITHUB_TEAM_ORG: str | None = None
    GITHUB_TEAM: str | None = None


settings = Settings()
