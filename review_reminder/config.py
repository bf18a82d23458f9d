"""
Configuration Management Module

This module handles all reminder configuration using Pydantic Settings.
Configuration is loaded from environment variables with strong typing and validation.

Design Decisions:
- Use Pydantic Settings for automatic environment variable loading
- Accept GitHub Actions inputs (INPUT_<NAME>) alongside plain variable names
- Validate configuration at startup (fail-fast approach)
"""

import os
from functools import lru_cache

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Reminder settings loaded from environment variables.
    
    The token and webhook URL are secrets: they are loaded from the
    environment only, never hardcoded or logged.
    """
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore"
    )
    
    # =========================================================================
    # Notification Inputs
    # =========================================================================
    webhook_url: str = Field(
        validation_alias=AliasChoices("webhook_url", "input_webhook-url"),
        description="Incoming webhook URL of the chat channel"
    )
    
    provider: str = Field(
        validation_alias=AliasChoices("provider", "input_provider"),
        description="Chat provider tag (slack or msteams)"
    )
    
    channel: str = Field(
        default="",
        validation_alias=AliasChoices("channel", "input_channel"),
        description="Slack channel override, ignored by other providers"
    )
    
    github_provider_map: str = Field(
        default="",
        validation_alias=AliasChoices("github_provider_map", "input_github-provider-map"),
        description="Comma-separated github:provider user pairs"
    )
    
    ignore_label: str = Field(
        default="",
        validation_alias=AliasChoices("ignore_label", "input_ignore-label"),
        description="Pull requests carrying this label are not reported"
    )
    
    slack_username: str = Field(
        default="Pull Request reviews reminder",
        description="Display name used for Slack messages"
    )
    
    # =========================================================================
    # GitHub Configuration
    # =========================================================================
    github_token: str = Field(
        default="",
        description="Token sent as a bearer token to the GitHub API"
    )
    
    github_repository: str = Field(
        description="Repository to scan, as owner/repo"
    )
    
    github_api_url: str = Field(
        default="https://api.github.com",
        description="GitHub REST API base URL"
    )
    
    http_timeout: float = Field(
        default=30.0,
        ge=1.0,
        le=300.0,
        description="Timeout in seconds for each HTTP request"
    )
    
    # =========================================================================
    # Logging Configuration
    # =========================================================================
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )
    
    log_json_format: bool = Field(
        default=False,
        description="Enable JSON logging format"
    )
    
    # =========================================================================
    # Validators
    # =========================================================================
    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v_upper
    
    @field_validator("github_repository")
    @classmethod
    def validate_repository(cls, v: str) -> str:
        """Ensure the repository looks like owner/repo."""
        owner, _, name = v.strip().partition("/")
        if not owner or not name or "/" in name:
            raise ValueError(f"Invalid repository: {v}. Expected owner/repo")
        return f"{owner}/{name}"
    
    @field_validator("github_api_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")
    
    # =========================================================================
    # Computed Properties
    # =========================================================================
    @property
    def pulls_endpoint(self) -> str:
        """Get the URL listing the repository's open pull requests."""
        return f"{self.github_api_url}/repos/{self.github_repository}/pulls"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached reminder settings.
    
    Uses lru_cache so the environment is only read once per run.
    Inside GitHub Actions the working directory is the checked-out
    repository, whose .env belongs to that project and is not read.
    
    Returns:
        Settings instance
    """
    if os.getenv("GITHUB_ACTIONS") == "true":
        return Settings(_env_file=None)
    return Settings()
