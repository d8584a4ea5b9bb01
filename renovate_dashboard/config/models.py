"""Pydantic configuration models for the dashboard.

String values may reference environment variables as ``${VAR_NAME}`` or
``${VAR_NAME:default_value}``; they are substituted before validation.
"""

import os
import re
from enum import Enum
from typing import Any
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from renovate_dashboard.github.client import GitHubClientConfig

DEFAULT_SOURCE_REPOSITORY_URL = (
    "https://github.com/dependency-dashboard/renovate-dashboard"
)
SOURCE_REPOSITORY_URL_ENV = "RENOVATE_DASHBOARD_SOURCE_URL"

_ENV_PATTERN = re.compile(r"\$\{([^}:]+)(?::([^}]*))?\}")


class LogLevel(str, Enum):
    """Supported logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


def get_source_repository_url() -> str:
    """Source link shown by the front end, overridable from the environment."""
    value = os.getenv(SOURCE_REPOSITORY_URL_ENV, "").strip()
    return value or DEFAULT_SOURCE_REPOSITORY_URL


class BaseConfigModel(BaseModel):
    """Base configuration model with environment variable substitution."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    @model_validator(mode="before")
    @classmethod
    def substitute_env_vars(cls, values: Any) -> Any:
        """Substitute environment variables in string values.

        Supports formats:
        - ${VAR_NAME} - Required environment variable
        - ${VAR_NAME:default} - Optional with default value

        Raises:
            ValueError: If required environment variable is missing
        """

        def replacer(match: re.Match[str]) -> str:
            var_name = match.group(1)
            default_value = match.group(2)

            env_value = os.getenv(var_name)
            if env_value is not None:
                return env_value
            elif default_value is not None:
                return default_value
            else:
                raise ValueError(
                    f"Required environment variable '{var_name}' not found"
                )

        def substitute_value(value: Any) -> Any:
            if isinstance(value, str):
                return _ENV_PATTERN.sub(replacer, value)
            elif isinstance(value, dict):
                return {k: substitute_value(v) for k, v in value.items()}
            elif isinstance(value, list):
                return [substitute_value(item) for item in value]
            else:
                return value

        if not isinstance(values, dict):
            return values
        return {key: substitute_value(value) for key, value in values.items()}


class GitHubSettings(BaseConfigModel):
    """GitHub API connection settings."""

    base_url: str = Field(
        default="https://api.github.com", description="GitHub REST API base URL"
    )

    timeout: int = Field(
        default=30, ge=1, le=300, description="Total request timeout in seconds"
    )

    user_agent: str = Field(
        default="Renovate-Dashboard/0.1", description="User-Agent header value"
    )

    max_connections: int = Field(
        default=100, ge=1, le=1000, description="Connection pool size"
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Validate API base URL format."""
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("GitHub base URL must be an http(s) URL")
        return v.rstrip("/")

    def to_client_config(self) -> GitHubClientConfig:
        return GitHubClientConfig(
            base_url=self.base_url,
            timeout=self.timeout,
            user_agent=self.user_agent,
            max_connections=self.max_connections,
        )


class SearchSettings(BaseConfigModel):
    """Discovery query settings."""

    bot_author: str = Field(
        default="app/renovate",
        description="Author qualifier of the dependency-update bot",
    )

    per_page: int = Field(
        default=100,
        ge=1,
        le=100,
        description="Results read from the single search page",
    )

    @field_validator("bot_author")
    @classmethod
    def validate_bot_author(cls, v: str) -> str:
        v = v.strip()
        if not v or " " in v:
            raise ValueError("Bot author must be a single non-empty login")
        return v


class LoggingSettings(BaseConfigModel):
    """Logging configuration."""

    level: LogLevel = Field(default=LogLevel.INFO, description="Root logging level")

    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="logging.basicConfig format string",
    )


class DashboardConfig(BaseConfigModel):
    """Root configuration."""

    github: GitHubSettings = Field(default_factory=GitHubSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    source_repository_url: str = Field(
        default_factory=get_source_repository_url,
        description="Link to the dashboard's source repository",
    )

    organization: str | None = Field(
        default=None, description="Organization searched when none is given"
    )

    token: str | None = Field(
        default=None, description="Personal Access Token used when none is given"
    )

    @field_validator("source_repository_url")
    @classmethod
    def default_blank_source_url(cls, v: str) -> str:
        return v.strip() or DEFAULT_SOURCE_REPOSITORY_URL
