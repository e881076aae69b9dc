"""Configuration file management for spendlog."""

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import tomli_w

from spendlog.domain.filters import parse_window_mode


class ConfigError(Exception):
    """Raised when the config file holds an invalid value."""


@dataclass(frozen=True)
class Settings:
    """Validated configuration values."""

    default_window: str = "7"
    chart_max_slices: int | None = None
    currency: str = "$"
    data_file: Path | None = None


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
    return get_xdg_config_home() / "spendlog" / "config.toml"


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    default_config: dict[str, Any] = {
        "default_window": Settings.default_window,
        "currency": Settings.currency,
    }

    with open(config_path, "wb") as f:
        tomli_w.dump(default_config, f)

    os.chmod(config_path, 0o600)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ConfigError: If the file is not valid TOML.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "rb") as f:
        try:
            return tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid config file {config_path}: {e}") from e


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def parse_settings(config: dict[str, Any]) -> Settings:
    """Validate a raw config dictionary.

    Args:
        config: Dictionary as loaded from TOML.

    Returns:
        Settings with defaults for missing keys.

    Raises:
        ConfigError: If a value has the wrong type or is out of range.
    """
    default_window = str(config.get("default_window", Settings.default_window))
    _, error = parse_window_mode(default_window)
    if error:
        raise ConfigError(f"default_window: {error}")

    chart_max_slices = config.get("chart_max_slices")
    if chart_max_slices is not None:
        if not isinstance(chart_max_slices, int) or isinstance(chart_max_slices, bool) or chart_max_slices < 2:
            raise ConfigError("chart_max_slices must be an integer of at least 2")

    currency = config.get("currency", Settings.currency)
    if not isinstance(currency, str):
        raise ConfigError("currency must be a string")

    data_file = config.get("data_file")
    if data_file is not None and not isinstance(data_file, str):
        raise ConfigError("data_file must be a path string")

    return Settings(
        default_window=default_window,
        chart_max_slices=chart_max_slices,
        currency=currency,
        data_file=Path(data_file).expanduser() if data_file else None,
    )


def get_settings(config_path: Path | None = None) -> Settings:
    """Load and validate settings; a missing config file gives defaults.

    Raises:
        ConfigError: If the config file is invalid.
    """
    try:
        config = load_config(config_path)
    except FileNotFoundError:
        return Settings()
    return parse_settings(config)


def set_value(key: str, value: Any, config_path: Path | None = None) -> None:
    """Set a single config key, creating the file if needed.

    Raises:
        ConfigError: If the resulting config would be invalid.
    """
    try:
        config = load_config(config_path)
    except FileNotFoundError:
        config = {}

    config[key] = value
    parse_settings(config)
    save_config(config, config_path)
