"""
Configuration System

YAML configuration for the application registry host. Features:
- Single-file YAML loading with environment resolution
- Dot-notation access to nested values
- Typed, validated ``registry`` section via pydantic
- Defaults everywhere: a host process without a config.yml still runs

The config file is located through the CONFIG_FILE environment variable or
``config.yml`` in the current working directory.
"""

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from apphost.base.errors import ConfigurationError

# Use standard logging (not get_logger) to avoid circular imports with logger.py
logger = logging.getLogger("CONFIG")


class RegistrySettings(BaseModel):
    """Validated settings for the ``registry`` config section.

    :param wait_timeout_ms: Deadline for waiting on a record to appear
    :param max_queue_depth: Cap on queued registration jobs, None for unbounded
    :param debug_info: Surface absorbed removal failures as error logs
    """

    wait_timeout_ms: int = Field(default=2000, gt=0, description="Record wait deadline in ms")
    max_queue_depth: int | None = Field(
        default=None, gt=0, description="Maximum pending registration jobs"
    )
    debug_info: bool = Field(default=False, description="Log absorbed removal failures")

    @property
    def wait_timeout(self) -> float:
        """Wait deadline in seconds, as asyncio expects it."""
        return self.wait_timeout_ms / 1000


class ConfigBuilder:
    """
    Configuration builder for a single YAML file.

    Features:
    - Single-file YAML loading with validation and error handling
    - Environment variable resolution
    - Empty configuration when no file is present
    """

    def __init__(self, config_path: str | None = None):
        """
        Initialize configuration builder.

        Args:
            config_path: Path to the config.yml file. If None, looks in current directory
                and falls back to an empty configuration when none is found.
        """
        dotenv_path = Path.cwd() / ".env"
        if dotenv_path.exists():
            load_dotenv(dotenv_path, override=False)
            logger.debug(f"Loaded .env file from {dotenv_path}")

        if config_path is None:
            cwd_config = Path.cwd() / "config.yml"
            if cwd_config.exists():
                config_path = cwd_config

        if config_path is None:
            logger.debug(f"No config.yml found in {Path.cwd()}, using defaults")
            self.config_path = None
            self.raw_config: dict[str, Any] = {}
        else:
            self.config_path = Path(config_path)
            self.raw_config = self._load_config()

    def _load_yaml_file(self, file_path: Path) -> dict[str, Any]:
        """Load and validate a YAML configuration file."""
        try:
            with open(file_path) as f:
                config = yaml.safe_load(f)

            if config is None:
                logger.warning(f"Configuration file is empty: {file_path}")
                return {}

            if not isinstance(config, dict):
                error_msg = f"Configuration file must contain a dictionary/mapping: {file_path}"
                logger.error(error_msg)
                raise ValueError(error_msg)

            logger.debug(f"Loaded configuration from {file_path}")
            return config
        except yaml.YAMLError as e:
            error_msg = f"Error parsing YAML configuration: {e}"
            logger.error(error_msg)
            raise yaml.YAMLError(error_msg) from e

    def _resolve_env_vars(self, data: Any) -> Any:
        """Recursively resolve environment variables in configuration data.

        Supports both simple and bash-style default value syntax:
        - ${VAR_NAME} - simple substitution
        - ${VAR_NAME:-default_value} - with default value
        - $VAR_NAME - simple substitution without braces
        """
        if isinstance(data, dict):
            return {key: self._resolve_env_vars(value) for key, value in data.items()}
        elif isinstance(data, list):
            return [self._resolve_env_vars(item) for item in data]
        elif isinstance(data, str):

            def replace_env_var(match):
                if match.group(1):
                    var_name = match.group(1)
                    default_value = match.group(2)
                else:
                    var_name = match.group(3)
                    default_value = None

                env_value = os.environ.get(var_name)
                if env_value is None:
                    if default_value is not None:
                        return default_value
                    logger.info(f"Environment variable '{var_name}' not found, keeping original value")
                    return match.group(0)
                return env_value

            pattern = r"\$\{([^}:]+)(?::-(.*?))?\}|\$([A-Za-z_][A-Za-z0-9_]*)"
            return re.sub(pattern, replace_env_var, data)
        else:
            return data

    def _load_config(self) -> dict[str, Any]:
        """Load configuration from single file with environment variables resolved."""
        config = self._resolve_env_vars(self._load_yaml_file(self.config_path))

        logger.info(f"Loaded configuration from {self.config_path}")
        return config

    def get(self, path: str, default: Any = None) -> Any:
        """Get configuration value using dot notation path."""
        keys = path.split(".")
        value = self.raw_config

        try:
            for key in keys:
                value = value[key]
            return value
        except (KeyError, TypeError):
            return default


# =============================================================================
# GLOBAL CONFIGURATION
# =============================================================================

_default_config: ConfigBuilder | None = None

# Per-path config cache for explicit config paths
_config_cache: dict[str, ConfigBuilder] = {}


def _get_config(config_path: str | None = None) -> ConfigBuilder:
    """Get configuration instance (singleton, or cached per explicit path)."""
    global _default_config

    if config_path is None:
        if _default_config is None:
            config_file = os.environ.get("CONFIG_FILE")
            _default_config = ConfigBuilder(config_file) if config_file else ConfigBuilder()
            logger.debug("Initialized default configuration system")
        return _default_config

    resolved_path = str(Path(config_path).resolve())
    if resolved_path not in _config_cache:
        logger.info(f"Loading configuration from explicit path: {resolved_path}")
        _config_cache[resolved_path] = ConfigBuilder(resolved_path)
    return _config_cache[resolved_path]


def reset_config() -> None:
    """Drop the cached configuration so the next access reloads it."""
    global _default_config
    _default_config = None
    _config_cache.clear()


def get_config_value(path: str, default: Any = None, config_path: str | None = None) -> Any:
    """
    Get a specific configuration value by dot-separated path.

    Args:
        path: Dot-separated configuration path (e.g., "registry.debug_info")
        default: Default value to return if path is not found
        config_path: Optional explicit path to configuration file

    Returns:
        The configuration value at the specified path, or default if not found

    Raises:
        ValueError: If path is empty or None
    """
    if not path:
        raise ValueError("Configuration path cannot be empty or None")

    return _get_config(config_path).get(path, default)


def get_registry_settings(config_path: str | None = None) -> RegistrySettings:
    """Build validated registry settings from the ``registry`` section.

    Raises:
        ConfigurationError: If the section holds invalid values
    """
    section = get_config_value("registry", {}, config_path) or {}
    if not isinstance(section, dict):
        raise ConfigurationError(f"'registry' configuration must be a mapping, got {section!r}")

    try:
        return RegistrySettings(**section)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid registry configuration: {e}") from e
