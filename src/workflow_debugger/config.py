"""Configuration settings for the workflow debugger."""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from workflow_debugger.core.exceptions import MissingTokenError


class Settings(BaseSettings):
    """Settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Credentials
    github_personal_access_token: str | None = None

    # GitHub API
    github_api_base: str = "https://api.github.com"
    github_api_version: str = "2022-11-28"
    user_agent: str = "github-workflow-debugger/1.0"
    request_timeout: float = 30.0

    # Logging
    log_level: str = "INFO"
    log_json_format: bool = False

    @property
    def has_token(self) -> bool:
        """Check whether a non-empty credential is configured."""
        return bool(self.github_personal_access_token)

    def require_token(self) -> str:
        """
        Return the configured credential.

        Raises:
            MissingTokenError: If no credential is configured.
        """
        if not self.github_personal_access_token:
            raise MissingTokenError()
        return self.github_personal_access_token


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
