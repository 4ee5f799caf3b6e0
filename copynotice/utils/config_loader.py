"""
Configuration Loader

Utilities for loading YAML run configuration files with validation.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, Optional
import os

from copynotice.core.exceptions import ConfigError

ENV_PREFIX = "COPYNOTICE_"

# Keys that environment variables may override, with their value parsers
_ENV_KEYS = {
    "notice": str,
    "notice_file": str,
    "prefix": str,
    "recurse": "bool",
    "replace": "bool",
    "verbose": "bool",
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def parse_bool(key: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ConfigError(f"Environment override for '{key}' is not a boolean: {value!r}")


class ConfigLoader:
    """
    Load and validate YAML configuration files.
    """

    @staticmethod
    def load(config_path: str, required_keys: Optional[list] = None) -> Dict[str, Any]:
        """
        Load a YAML configuration file.

        Args:
            config_path: Path to YAML file
            required_keys: List of keys that must be present in config

        Returns:
            Configuration dictionary

        Raises:
            ConfigError: If the file is missing, unreadable, not a mapping,
                         not valid YAML, or lacks a required key
        """
        path = Path(config_path)

        if not path.is_file():
            raise ConfigError(f"Configuration file not found: {config_path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Could not read configuration file {config_path}: {e}") from e

        if config is None:
            config = {}

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file {config_path} must contain a mapping")

        # Validate required keys
        if required_keys:
            missing = [key for key in required_keys if key not in config]
            if missing:
                raise ConfigError(f"Missing required configuration keys: {missing}")

        return config

    @staticmethod
    def apply_env_overrides(config: Dict[str, Any], env_prefix: str = ENV_PREFIX) -> Dict[str, Any]:
        """
        Override scalar config values with environment variables.

        For example, COPYNOTICE_RECURSE=yes overrides config['recurse'].
        Variables naming unknown keys are ignored.
        """
        for key, value in os.environ.items():
            if not key.startswith(env_prefix):
                continue
            config_key = key[len(env_prefix):].lower()
            parser = _ENV_KEYS.get(config_key)
            if parser is None:
                continue
            config[config_key] = parse_bool(key, value) if parser == "bool" else value
        return config

    @staticmethod
    def load_with_env_override(config_path: str, env_prefix: str = ENV_PREFIX) -> Dict[str, Any]:
        """
        Load config and override with environment variables.

        Args:
            config_path: Path to YAML file
            env_prefix: Prefix for environment variables

        Returns:
            Configuration dictionary with env overrides applied
        """
        config = ConfigLoader.load(config_path)
        return ConfigLoader.apply_env_overrides(config, env_prefix)
