"""Configuration management for the dashboard.

Example:
    >>> from renovate_dashboard.config import load_config
    >>> config = load_config("renovate-dashboard.yaml")
    >>> config.search.bot_author
    'app/renovate'
"""

from .exceptions import (
    ConfigurationError,
    ConfigurationFileError,
    ConfigurationValidationError,
)
from .loader import ConfigurationLoader, load_config
from .models import (
    DEFAULT_SOURCE_REPOSITORY_URL,
    DashboardConfig,
    GitHubSettings,
    LoggingSettings,
    LogLevel,
    SearchSettings,
    get_source_repository_url,
)

__all__ = [
    "DEFAULT_SOURCE_REPOSITORY_URL",
    "ConfigurationError",
    "ConfigurationFileError",
    "ConfigurationLoader",
    "ConfigurationValidationError",
    "DashboardConfig",
    "GitHubSettings",
    "LogLevel",
    "LoggingSettings",
    "SearchSettings",
    "get_source_repository_url",
    "load_config",
]
