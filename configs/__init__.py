"""Configuration module for SupplyPlanner.

Planning settings live in ``default.yaml``; a user file only needs the keys
it changes and is merged over the defaults section by section.
"""

import copy
from pathlib import Path
from typing import Optional, Union

import yaml

DEFAULT_CONFIG_PATH = Path(__file__).parent / "default.yaml"


def load_config(config_path: Union[str, Path]) -> dict:
    """Read a planning configuration file.

    Args:
        config_path: Path to a YAML file

    Returns:
        Configuration dictionary ({} for an empty file)

    Raises:
        ValueError: If the file does not hold a mapping of sections
    """
    with open(config_path, 'r') as f:
        config = yaml.safe_load(f)

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ValueError(f"Config {config_path} must be a mapping, got {type(config).__name__}")
    return config


def merge_configs(base_config: dict, override_config: dict) -> dict:
    """Overlay user settings on a base configuration.

    Nested sections merge key by key, so overriding ``planning.capacity.weekly``
    keeps ``planning.capacity.daily``. Neither input is modified and the result
    shares no nested sections with them.

    Args:
        base_config: Base configuration
        override_config: Settings that take precedence

    Returns:
        Merged configuration
    """
    merged = copy.deepcopy(base_config)
    for key, value in (override_config or {}).items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def load_planning_config(config_path: Optional[str] = None) -> dict:
    """Load the default planning configuration, optionally overridden by a user file.

    Args:
        config_path: Optional path to a YAML file merged over the defaults

    Returns:
        Configuration dictionary
    """
    config = load_config(DEFAULT_CONFIG_PATH)
    if config_path:
        config = merge_configs(config, load_config(config_path))
    return config
