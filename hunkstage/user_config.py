"""User configuration management for hunkstage.

Handles reading and writing the .hunkstage/config.yaml file in each repository.
"""

from pathlib import Path
from typing import Any

import yaml


# Default configuration values
DEFAULT_CONFIG = {
    # Context lines requested from 'git diff -U<n>'
    "context_lines": 3,
    # Run 'git apply --check' before applying each patch
    "check_before_apply": True,
    # Colorize patches printed by 'hunkstage patch'
    "color": True,
}


class ConfigError(Exception):
    """Raised when a configuration value is invalid."""

    pass


def get_config_dir(repo_root: Path) -> Path:
    """Get the repository config directory.

    Args:
        repo_root: The root directory of the git repository.

    Returns:
        Path to .hunkstage/
    """
    return repo_root / ".hunkstage"


def get_config_file(repo_root: Path) -> Path:
    """Return path to the config.yaml file.

    Args:
        repo_root: The root directory of the git repository.

    Returns:
        Path to .hunkstage/config.yaml.
    """
    return get_config_dir(repo_root) / "config.yaml"


def load_config(repo_root: Path) -> dict:
    """Load the hunkstage configuration from config.yaml.

    If the file doesn't exist, creates it with default values.

    Args:
        repo_root: The root directory of the git repository.

    Returns:
        Configuration dictionary.
    """
    config_file = get_config_file(repo_root)

    if not config_file.exists():
        save_config(repo_root, DEFAULT_CONFIG)
        return DEFAULT_CONFIG.copy()

    try:
        with open(config_file, "r") as f:
            config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        # If config is corrupted, return defaults
        return DEFAULT_CONFIG.copy()

    if not isinstance(config, dict):
        return DEFAULT_CONFIG.copy()

    # Merge with defaults for any missing keys
    for key, value in DEFAULT_CONFIG.items():
        config.setdefault(key, value)
    return config


def save_config(repo_root: Path, config: dict) -> None:
    """Save the configuration to config.yaml.

    Args:
        repo_root: The root directory of the git repository.
        config: Configuration dictionary to save.
    """
    config_file = get_config_file(repo_root)
    config_file.parent.mkdir(exist_ok=True)

    with open(config_file, "w") as f:
        yaml.dump(
            config,
            f,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )


def get_config_value(repo_root: Path, key: str) -> Any:
    """Get a single configuration value, falling back to the default."""
    return load_config(repo_root).get(key, DEFAULT_CONFIG.get(key))


def set_config_value(repo_root: Path, key: str, raw_value: str) -> Any:
    """Set a configuration value from its command-line string form.

    The string is parsed as YAML and must match the type of the default.

    Args:
        repo_root: The root directory of the git repository.
        key: Configuration key.
        raw_value: Value as typed by the user (e.g. "5", "false").

    Returns:
        The parsed value that was saved.

    Raises:
        ConfigError: If the key is unknown or the value has the wrong type.
    """
    if key not in DEFAULT_CONFIG:
        raise ConfigError(f"Unknown config key: {key}. Valid keys: {', '.join(DEFAULT_CONFIG)}")

    try:
        value = yaml.safe_load(raw_value)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid value for {key}: {e}")

    expected_type = type(DEFAULT_CONFIG[key])
    # bool is a subclass of int, so compare exact types
    if type(value) is not expected_type:
        raise ConfigError(f"Invalid value for {key}: expected {expected_type.__name__}, got {raw_value!r}")
    if key == "context_lines" and value < 0:
        raise ConfigError("context_lines cannot be negative")

    config = load_config(repo_root)
    config[key] = value
    save_config(repo_root, config)
    return value
