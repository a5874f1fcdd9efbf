"""Configuration module for STENCIL.

User configuration files only need the keys they change: they are layered
over the packaged default.yaml.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml


DEFAULT_CONFIG_PATH = Path(__file__).parent / 'default.yaml'


def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise yaml.YAMLError(
            f"Configuration root must be a mapping, got {type(data).__name__}: {path}"
        )
    return data


def merge_config(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge two configuration dictionaries.

    Args:
        base: Lower-priority configuration.
        override: Higher-priority configuration.

    Returns:
        A new dictionary; nested mappings are merged, other values replaced.
    """
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """Load configuration from YAML file.

    Args:
        config_path: Path to config file, layered over default.yaml. Only
            default.yaml is read if not specified.

    Returns:
        Dictionary containing configuration values.

    Raises:
        FileNotFoundError: If the config file does not exist.
        yaml.YAMLError: If the config file is invalid YAML.
    """
    config = _read_yaml(DEFAULT_CONFIG_PATH)
    if config_path:
        config = merge_config(config, _read_yaml(Path(config_path)))
    return config


def get_config_value(config: Dict[str, Any], key_path: str, default: Any = None) -> Any:
    """Get a nested configuration value using dot notation.

    Args:
        config: Configuration dictionary.
        key_path: Dot-separated path to the value (e.g., 'helpers.trace_calls').
        default: Default value if key is not found.

    Returns:
        The configuration value or default.
    """
    value = config
    for key in key_path.split('.'):
        if not isinstance(value, dict) or key not in value:
            return default
        value = value[key]
    return value


__all__ = ['load_config', 'get_config_value', 'merge_config', 'DEFAULT_CONFIG_PATH']
