"""Configuration file management for finsight."""

import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w

DEFAULT_CONFIG: dict[str, Any] = {
    "currency_symbol": "₹",
    "analytics_range": "6m",
    "analytics_view": "expenses",
    "top_categories": 5,
}


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "finsight" / "config.toml"


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)
    save_config(dict(DEFAULT_CONFIG), config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file, filling in defaults.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary. Defaults only if the file doesn't exist.

    Raises:
        tomllib.TOMLDecodeError: If the file is not valid TOML.
    """
    if config_path is None:
        config_path = get_config_path()

    config = dict(DEFAULT_CONFIG)
    if not config_path.exists():
        return config

    with open(config_path, "rb") as f:
        config.update(tomllib.load(f))
    return config


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def get_setting(key: str, config_path: Path | None = None) -> Any:
    """Get a single setting.

    Args:
        key: Setting name.
        config_path: Path to config file. If None, uses default location.

    Returns:
        The configured value, or its default (None for unknown keys).
    """
    return load_config(config_path).get(key)


def set_setting(key: str, value: Any, config_path: Path | None = None) -> None:
    """Set a single setting and save the file.

    Args:
        key: Setting name.
        value: New value.
        config_path: Path to config file. If None, uses default location.

    Raises:
        KeyError: If key is not a known setting.
    """
    if key not in DEFAULT_CONFIG:
        raise KeyError(key)

    if config_path is None:
        config_path = get_config_path()

    config = load_config(config_path)
    config[key] = value
    config_path.parent.mkdir(parents=True, exist_ok=True)
    save_config(config, config_path)
