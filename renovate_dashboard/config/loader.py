"""Configuration loading from YAML files.

The loading hierarchy is:
1. Default values from the Pydantic models
2. Configuration file (YAML), with ${VAR} substitution
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .exceptions import ConfigurationFileError, ConfigurationValidationError
from .models import DashboardConfig

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "RENOVATE_DASHBOARD_CONFIG"
DEFAULT_CONFIG_FILENAME = "renovate-dashboard.yaml"


class ConfigurationLoader:
    """Handles loading and validation of configuration from various sources."""

    def __init__(self) -> None:
        """Initialize configuration loader."""
        self._config: DashboardConfig | None = None
        self._config_file_path: Path | None = None

    def load_from_file(self, config_path: str | Path) -> DashboardConfig:
        """Load configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            Loaded and validated configuration

        Raises:
            ConfigurationFileError: If file cannot be read or parsed
            ConfigurationValidationError: If configuration validation fails
        """
        config_path = Path(config_path)

        if not config_path.exists():
            raise ConfigurationFileError(
                f"Configuration file not found: {config_path}", str(config_path)
            )

        if not config_path.is_file():
            raise ConfigurationFileError(
                f"Configuration path is not a file: {config_path}", str(config_path)
            )

        try:
            with open(config_path, encoding="utf-8") as f:
                config_data = yaml.safe_load(f)

            if config_data is None:
                config_data = {}

        except yaml.YAMLError as e:
            raise ConfigurationFileError(
                f"Failed to parse YAML configuration: {e}", str(config_path)
            ) from e
        except OSError as e:
            raise ConfigurationFileError(
                f"Failed to read configuration file: {e}", str(config_path)
            ) from e

        if not isinstance(config_data, dict):
            raise ConfigurationFileError(
                "Configuration file must contain a mapping at the top level",
                str(config_path),
            )

        self._config = self.load_from_dict(config_data)
        self._config_file_path = config_path.resolve()
        logger.debug(f"Loaded configuration from {self._config_file_path}")
        return self._config

    def load_from_dict(self, config_data: dict[str, Any]) -> DashboardConfig:
        """Load configuration from a dictionary.

        Raises:
            ConfigurationValidationError: If configuration validation fails
        """
        try:
            self._config = DashboardConfig(**config_data)
        except ValidationError as e:
            raise ConfigurationValidationError(
                f"Configuration validation failed: {e}", e.errors()
            ) from e
        except ValueError as e:
            raise ConfigurationValidationError(
                f"Configuration validation failed: {e}"
            ) from e

        return self._config

    def find_config_file(self, filename: str = DEFAULT_CONFIG_FILENAME) -> Path | None:
        """Find configuration file in standard locations.

        Search order:
        1. Current working directory
        2. RENOVATE_DASHBOARD_CONFIG environment variable
        3. ~/.renovate-dashboard/

        Returns:
            Path to found configuration file, or None if not found
        """
        search_paths = [Path.cwd() / filename]

        env_path_str = os.getenv(CONFIG_PATH_ENV)
        if env_path_str:
            env_path = Path(env_path_str)
            search_paths.append(env_path if env_path.suffix else env_path / filename)

        search_paths.append(Path.home() / ".renovate-dashboard" / filename)

        for path in search_paths:
            if path.is_file():
                return path
        return None

    def auto_load(self, filename: str = DEFAULT_CONFIG_FILENAME) -> DashboardConfig:
        """Load the first configuration file found, or defaults if there is none."""
        config_path = self.find_config_file(filename)
        if config_path is None:
            logger.debug("No configuration file found, using defaults")
            self._config = DashboardConfig()
            return self._config
        return self.load_from_file(config_path)

    @property
    def config(self) -> DashboardConfig | None:
        """Get the loaded configuration."""
        return self._config

    @property
    def config_file_path(self) -> Path | None:
        """Get the path of the loaded configuration file."""
        return self._config_file_path


def load_config(config_path: str | Path | None = None) -> DashboardConfig:
    """Load configuration from ``config_path`` or the standard locations.

    Args:
        config_path: Explicit YAML file; searched for when omitted

    Returns:
        Validated configuration
    """
    loader = ConfigurationLoader()
    if config_path is not None:
        return loader.load_from_file(config_path)
    return loader.auto_load()
