"""Configuration loader and validator."""
from pathlib import Path
from typing import Any

import yaml

from tradestats.core.constants import LoggingConstants, Paths
from tradestats.core.exceptions import ConfigError


def load_config(config_path: str | Path = Paths.DEFAULT_CONFIG) -> dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to YAML config file

    Returns:
        Dictionary containing configuration parameters
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path) as f:
        config = yaml.safe_load(f) or {}

    validate_config(config)

    return config


def validate_config(config: dict[str, Any]) -> None:
    """
    Validate configuration parameters.

    Every section is optional; only values that are present are checked.

    Args:
        config: Configuration dictionary

    Raises:
        ConfigError: If configuration is invalid
    """
    if not isinstance(config, dict):
        raise ConfigError("Config root must be a mapping")

    edges = get_param(config, 'analytics', 'distribution_edges')
    if edges is not None:
        if not isinstance(edges, (list, tuple)) or len(edges) != 2:
            raise ConfigError("analytics.distribution_edges must be a list of two numbers")
        low, high = edges
        if not 0 < low < high:
            raise ConfigError("analytics.distribution_edges must satisfy 0 < low < high")

    top_symbols = get_param(config, 'analytics', 'top_symbols')
    if top_symbols is not None and (not isinstance(top_symbols, int) or top_symbols < 1):
        raise ConfigError("analytics.top_symbols must be an integer >= 1")

    include_bom = get_param(config, 'export', 'include_bom')
    if include_bom is not None and not isinstance(include_bom, bool):
        raise ConfigError("export.include_bom must be true or false")

    prefix = get_param(config, 'export', 'filename_prefix')
    if prefix is not None and (not isinstance(prefix, str) or not prefix.strip()):
        raise ConfigError("export.filename_prefix must be a non-empty string")

    level = get_param(config, 'logging', 'level')
    if level is not None and str(level).upper() not in LoggingConstants.VALID_LEVELS:
        raise ConfigError(f"logging.level must be one of {list(LoggingConstants.VALID_LEVELS)}")


def get_param(config: dict[str, Any] | None, *keys, default=None) -> Any:
    """
    Safely get nested configuration parameter.

    Args:
        config: Configuration dictionary
        *keys: Nested keys to traverse
        default: Default value if key not found

    Returns:
        Configuration value or default
    """
    result = config
    for key in keys:
        if isinstance(result, dict) and key in result:
            result = result[key]
        else:
            return default
    return result
