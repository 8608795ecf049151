"""Configuration module for kvbench."""

from pathlib import Path
from typing import Optional

import yaml

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "default.yaml"


def load_config(config_path: str) -> dict:
    """Load configuration from YAML file.

    Args:
        config_path: Path to configuration file

    Returns:
        Configuration dictionary
    """
    with open(config_path, 'r') as f:
        return yaml.safe_load(f) or {}


def load_default_config() -> dict:
    """Load the bundled default configuration."""
    return load_config(str(DEFAULT_CONFIG_PATH))


def merge_configs(base_config: dict, override_config: dict) -> dict:
    """Overlay a user configuration on the kvbench defaults.

    Sections merge key by key, so a user file can set only
    ``backends.sqlite.synchronous`` and keep the other backend options.
    Neither input is modified.

    Args:
        base_config: Defaults, usually from ``default.yaml``
        override_config: User settings

    Returns:
        Merged configuration
    """
    merged = dict(base_config)
    for key, value in override_config.items():
        current = merged.get(key)
        merged[key] = (
            merge_configs(current, value)
            if isinstance(current, dict) and isinstance(value, dict)
            else value
        )
    return merged


def resolve_config(config_path: Optional[str] = None) -> dict:
    """Defaults merged with an optional user configuration file."""
    config = load_default_config()
    if config_path:
        config = merge_configs(config, load_config(config_path))
    return config
