"""Configuration manager for loading and validating .analytix.yml"""

import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from analytix.domain.config import AppConfig, ConnectionConfig, PollConfig
from analytix.errors import AnalytixError

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".analytix.yml"


class ConfigurationError(AnalytixError):
    """Configuration validation error."""

    pass


class ConfigManager:
    """Manages configuration from .analytix.yml and environment variables

    Configuration priority:
    1. Default values (defined in Pydantic models)
    2. .analytix.yml file (searched from current directory upwards)
    3. Environment variables (ANALYTIX_*)
    """

    DEFAULT_CONFIG = {
        "connection": {
            "server": "https://secure.analytix.example",
            "username": None,
            "password": None,
            "timeout": 60,
            "verify_ssl": True,
            "retry": {
                "max_attempts": 3,
                "backoff_multiplier": 2,
                "initial_delay": 1,
                "jitter": 0.1,
            },
        },
        "poll": {
            "sleep_interval": 10,
            "completion_code": 202,
        },
    }

    ENV_OVERRIDES = {
        "ANALYTIX_SERVER": ("connection", "server"),
        "ANALYTIX_USERNAME": ("connection", "username"),
        "ANALYTIX_PASSWORD": ("connection", "password"),
    }

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize config manager

        Args:
            config_path: Path to .analytix.yml (searches from current dir if None)

        Raises:
            ConfigurationError: If configuration validation fails
        """
        if isinstance(config_path, str):
            config_path = Path(config_path)
        self.config_path = config_path or self._find_config_file()
        try:
            self.config: AppConfig = self._load_config()
        except ValidationError as e:
            errors = []
            for error in e.errors():
                field = ".".join(str(x) for x in error["loc"])
                errors.append(f"  - {field}: {error['msg']}")
            raise ConfigurationError(
                "Configuration validation failed:\n" + "\n".join(errors)
            ) from e

    def _find_config_file(self) -> Optional[Path]:
        """Find .analytix.yml starting from current directory"""
        current = Path.cwd()
        for parent in [current] + list(current.parents):
            config_file = parent / CONFIG_FILE_NAME
            if config_file.exists():
                logger.info(f"Found config file: {config_file}")
                return config_file
        logger.debug(f"No {CONFIG_FILE_NAME} found, using defaults")
        return None

    def _load_config(self) -> AppConfig:
        """Load configuration from file and environment, then validate

        Raises:
            ConfigurationError: If the file cannot be read or parsed
            ValidationError: If configuration is invalid
        """
        config_dict = copy.deepcopy(self.DEFAULT_CONFIG)

        if self.config_path and self.config_path.exists():
            try:
                with open(self.config_path, "r", encoding="utf-8") as f:
                    file_config = yaml.safe_load(f) or {}
            except (OSError, yaml.YAMLError) as e:
                raise ConfigurationError(f"Failed to load config from {self.config_path}: {e}") from e
            if not isinstance(file_config, dict):
                raise ConfigurationError(f"{self.config_path} must contain a mapping")
            config_dict = self._merge_config(config_dict, file_config)
            logger.info(f"Loaded configuration from {self.config_path}")

        config_dict = self._apply_env_overrides(config_dict)
        return AppConfig(**config_dict)

    def _merge_config(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge configuration dictionaries"""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_config(result[key], value)
            else:
                result[key] = value
        return result

    def _apply_env_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        for env_name, (section, key) in self.ENV_OVERRIDES.items():
            value = os.getenv(env_name)
            if value:
                config.setdefault(section, {})[key] = value
        return config

    def get_connection_config(self) -> ConnectionConfig:
        """Get connection configuration

        Returns:
            Connection configuration model
        """
        return self.config.connection

    def get_poll_config(self) -> PollConfig:
        """Get polling defaults

        Returns:
            Poll configuration model
        """
        return self.config.poll

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by key (supports dot notation)

        Args:
            key: Configuration key (e.g., "connection.server" or "poll")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        value = self.config.model_dump()
        for k in key.split("."):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value
