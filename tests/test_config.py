"""Tests for spendlog.config."""

import stat
from pathlib import Path

import pytest

from spendlog.config import (
    ConfigError,
    Settings,
    create_default_config,
    get_settings,
    load_config,
    parse_settings,
    set_value,
)


class TestParseSettings:
    """Tests for parse_settings."""

    def test_defaults(self) -> None:
        """Should fill in defaults for an empty config."""
        assert parse_settings({}) == Settings()

    def test_values(self, tmp_path: Path) -> None:
        """Should read every supported key."""
        settings = parse_settings(
            {
                "default_window": "30",
                "chart_max_slices": 5,
                "currency": "₹",
                "data_file": str(tmp_path / "e.json"),
            }
        )

        assert settings.default_window == "30"
        assert settings.chart_max_slices == 5
        assert settings.currency == "₹"
        assert settings.data_file == tmp_path / "e.json"

    def test_integer_window_accepted(self) -> None:
        """Should accept a TOML integer for the window."""
        assert parse_settings({"default_window": 14}).default_window == "14"

    def test_invalid_values(self) -> None:
        """Should raise ConfigError for bad values."""
        with pytest.raises(ConfigError):
            parse_settings({"default_window": "fortnight"})
        with pytest.raises(ConfigError):
            parse_settings({"chart_max_slices": 1})
        with pytest.raises(ConfigError):
            parse_settings({"currency": 5})


class TestConfigFile:
    """Tests for reading and writing the config file."""

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        """Should work before init."""
        assert get_settings(tmp_path / "missing.toml") == Settings()

    def test_default_config_is_private(self, tmp_path: Path) -> None:
        """Should create the file with 0600 permissions."""
        path = tmp_path / "spendlog" / "config.toml"
        create_default_config(path)

        assert stat.S_IMODE(path.stat().st_mode) == 0o600
        assert load_config(path)["default_window"] == "7"

    def test_set_value(self, tmp_path: Path) -> None:
        """Should update one key and keep the rest."""
        path = tmp_path / "config.toml"
        create_default_config(path)

        set_value("chart_max_slices", 4, path)

        settings = get_settings(path)
        assert settings.chart_max_slices == 4
        assert settings.default_window == "7"

    def test_set_invalid_value_leaves_file(self, tmp_path: Path) -> None:
        """Should refuse to save an invalid config."""
        path = tmp_path / "config.toml"
        create_default_config(path)

        with pytest.raises(ConfigError):
            set_value("default_window", "0", path)
        assert get_settings(path).default_window == "7"

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Should raise ConfigError for a broken file."""
        path = tmp_path / "config.toml"
        path.write_text("default_window = ")

        with pytest.raises(ConfigError):
            get_settings(path)
