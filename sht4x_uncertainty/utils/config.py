"""
SHT4x Calibration Utils - Configuration Management
===================================================

Configuration loading, validation, and merging utilities.

Features:
---------
1. YAML Loading
   - Load configuration from YAML files
   - Packaged defaults (config/default.yaml)
   - Environment variable substitution

2. Validation
   - Required field checking
   - Input range ordering (low <= high)
   - Representation size and seed types

3. Merging
   - Override defaults with custom configs
   - Deep merge capabilities

Configuration Structure:
-----------------------
inputs:
  humidity_voltage:    {low: 2.3, high: 2.7}
  temperature_voltage: {low: 2.3, high: 2.7}
  supply_voltage:      {low: 4.8, high: 5.4}

native:
  representation_size: 4096

monte_carlo:
  dump_path: "${SHT4X_DUMP_PATH:data.out}"

seed: null

logging:
  level: "WARNING"

Example:
--------
>>> from sht4x_uncertainty.utils import load_default_config, load_config
>>>
>>> config = load_default_config()
>>> validate_config(config)
>>>
>>> # Override specific values
>>> custom_config = load_config("my_ranges.yaml")
>>> merged = merge_configs(config, custom_config)

Author: Sensor Calibration Team
Date: October 17, 2026
"""

import yaml
import os
import re
from pathlib import Path
from typing import Dict, Any
import logging

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config" / "default.yaml"

INPUT_KEYS = ["humidity_voltage", "temperature_voltage", "supply_voltage"]


class ConfigError(Exception):
    """Configuration error."""
    pass


def load_config(config_path: str) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to YAML config file

    Returns:
        Configuration dictionary

    Raises:
        ConfigError: If file not found or invalid YAML

    Example:
        >>> config = load_config("config/default.yaml")
        >>> config["inputs"]["supply_voltage"]["low"]
        4.8
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}")
    except OSError as e:
        raise ConfigError(f"Error loading config: {e}")

    if config is None:
        raise ConfigError(f"Empty config file: {config_path}")

    if not isinstance(config, dict):
        raise ConfigError(f"Config root must be a mapping: {config_path}")

    # Perform environment variable substitution
    config = _substitute_env_vars(config)

    logger.info(f"Loaded config from {config_path}")

    return config


def load_default_config() -> Dict[str, Any]:
    """Load the packaged default configuration."""
    return load_config(DEFAULT_CONFIG_PATH)


def _substitute_env_vars(obj: Any) -> Any:
    """
    Recursively substitute environment variables in config.

    Supports format: ${VAR_NAME:default_value}

    Args:
        obj: Config object (dict, list, str, etc.)

    Returns:
        Config with substituted variables
    """
    if isinstance(obj, dict):
        return {k: _substitute_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_substitute_env_vars(item) for item in obj]
    elif isinstance(obj, str):
        # Replace ${VAR:default} or ${VAR}
        pattern = r'\$\{(\w+)(?::([^}]*))?\}'

        def replace_var(match):
            var_name = match.group(1)
            default = match.group(2) or ""
            return os.environ.get(var_name, default)

        return re.sub(pattern, replace_var, obj)
    else:
        return obj


def validate_config(config: Dict[str, Any]) -> bool:
    """
    Validate configuration structure and values.

    Args:
        config: Configuration dictionary

    Returns:
        True if valid

    Raises:
        ConfigError: If validation fails

    Example:
        >>> validate_config(load_default_config())
        True
    """
    required_keys = ["inputs", "native"]

    for key in required_keys:
        if key not in config:
            raise ConfigError(f"Missing required key: {key}")

    _validate_inputs(config["inputs"])
    _validate_native(config["native"])

    seed = config.get("seed")
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int) or seed < 0):
        raise ConfigError(f"Seed must be a non-negative integer or null, got {seed!r}")

    logger.debug("Configuration validation passed")
    return True


def _validate_inputs(inputs: Dict[str, Any]) -> None:
    """Validate input channel ranges."""
    if not isinstance(inputs, dict):
        raise ConfigError("Inputs config must be a dictionary")

    for key in INPUT_KEYS:
        if key not in inputs:
            raise ConfigError(f"Missing input range: inputs.{key}")

        bounds = inputs[key]
        if not isinstance(bounds, dict) or "low" not in bounds or "high" not in bounds:
            raise ConfigError(f"Input range inputs.{key} needs 'low' and 'high'")

        low, high = bounds["low"], bounds["high"]
        for name, value in (("low", low), ("high", high)):
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigError(f"inputs.{key}.{name} must be numeric")

        if low > high:
            raise ConfigError(
                f"Invalid range for inputs.{key}: low ({low}) > high ({high})"
            )

    supply = inputs["supply_voltage"]
    if supply["low"] <= 0:
        raise ConfigError("Supply voltage range must be strictly positive")


def _validate_native(native: Dict[str, Any]) -> None:
    """Validate native distributional settings."""
    if not isinstance(native, dict):
        raise ConfigError("Native config must be a dictionary")

    size = native.get("representation_size", 0)
    if isinstance(size, bool) or not isinstance(size, int) or size < 1:
        raise ConfigError("native.representation_size must be a positive integer")


def merge_configs(base: Dict[str, Any],
                  override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Deep merge override config into base config.

    Args:
        base: Base configuration
        override: Configuration to merge in (overrides base)

    Returns:
        Merged configuration

    Example:
        >>> config1 = {"a": 1, "b": {"c": 2}}
        >>> config2 = {"b": {"d": 3}}
        >>> merged = merge_configs(config1, config2)
        >>> merged
        {'a': 1, 'b': {'c': 2, 'd': 3}}
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            # Recursive merge for nested dicts
            result[key] = merge_configs(result[key], value)
        else:
            # Direct override
            result[key] = value

    logger.debug(f"Merged {len(override)} config keys")
    return result


def get_config_value(config: Dict[str, Any],
                     key_path: str,
                     default: Any = None) -> Any:
    """
    Get nested config value using dot notation.

    Args:
        config: Configuration dictionary
        key_path: Dot-separated path (e.g., "inputs.supply_voltage.low")
        default: Default value if not found

    Returns:
        Config value or default

    Example:
        >>> config = {"native": {"representation_size": 4096}}
        >>> get_config_value(config, "native.representation_size")
        4096
    """
    keys = key_path.split(".")
    value = config

    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default

    return value
