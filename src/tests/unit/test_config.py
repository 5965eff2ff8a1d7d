"""Unit tests for configuration module."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from taskflow.config import (
    Settings,
    flatten_toml_config,
    get_config_path,
    get_settings,
    load_settings_with_toml,
    load_toml_config,
)


class TestSettings:
    """Tests for Settings class."""

    def test_default_values(self) -> None:
        """Test default configuration values."""
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings()

            assert settings.task_list_delay_ms == 300
            assert settings.task_get_delay_ms == 200
            assert settings.task_create_delay_ms == 300
            assert settings.task_update_delay_ms == 300
            assert settings.task_delete_delay_ms == 250
            assert settings.category_list_delay_ms == 250
            assert settings.store_failure_rate == 0.0
            assert settings.fallback_category_color == "#8B5CF6"
            assert settings.log_level == "INFO"
            assert settings.log_format == "console"

    def test_environment_override(self) -> None:
        """Test environment variable override."""
        with patch.dict(os.environ, {
            "TASKFLOW_LOG_LEVEL": "DEBUG",
            "TASKFLOW_TASK_LIST_DELAY_MS": "0",
            "TASKFLOW_STORE_FAILURE_RATE": "0.5",
            "TASKFLOW_SEED_FILE": "/tmp/seed.json",
        }, clear=True):
            settings = Settings()

            assert settings.log_level == "DEBUG"
            assert settings.task_list_delay_ms == 0
            assert settings.store_failure_rate == 0.5
            assert settings.seed_file == "/tmp/seed.json"

    def test_failure_rate_bounds(self) -> None:
        with pytest.raises(ValueError):
            Settings(store_failure_rate=1.5)

    def test_negative_delay_rejected(self) -> None:
        with pytest.raises(ValueError):
            Settings(task_list_delay_ms=-1)

    def test_fallback_color_must_be_hex(self) -> None:
        with pytest.raises(ValueError):
            Settings(fallback_category_color="purple")


class TestGetSettings:
    """Tests for get_settings function."""

    def test_returns_cached_instance(self) -> None:
        get_settings.cache_clear()
        try:
            assert isinstance(get_settings(), Settings)
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()


class TestConfigPath:
    @pytest.mark.skipif(os.name == "nt", reason="XDG paths are POSIX only")
    def test_uses_xdg_config_home(self, tmp_path: Path) -> None:
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            assert get_config_path() == tmp_path / "taskflow" / "config.toml"


class TestTomlConfig:
    """Tests for TOML config loading and flattening."""

    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        assert load_toml_config(tmp_path / "missing.toml") == {}

    def test_load_file(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text('[logging]\nlevel = "ERROR"\n')

        assert load_toml_config(path) == {"logging": {"level": "ERROR"}}

    def test_flatten(self) -> None:
        """Test nested sections map onto flat setting names."""
        flat = flatten_toml_config({
            "task_store": {"list_delay_ms": 10, "delete_delay_ms": 20},
            "category_store": {"list_delay_ms": 30},
            "store": {"failure_rate": 0.1, "random_seed": 7, "seed_file": "seed.json"},
            "display": {"fallback_category_color": "#000000"},
            "logging": {"level": "DEBUG", "format": "json", "file": "taskflow.log"},
        })

        assert flat == {
            "task_list_delay_ms": 10,
            "task_delete_delay_ms": 20,
            "category_list_delay_ms": 30,
            "store_failure_rate": 0.1,
            "store_random_seed": 7,
            "seed_file": "seed.json",
            "fallback_category_color": "#000000",
            "log_level": "DEBUG",
            "log_format": "json",
            "log_file": "taskflow.log",
        }

    def test_flatten_ignores_unknown_sections(self) -> None:
        assert flatten_toml_config({"server": {"port": 8080}}) == {}


class TestLoadSettingsWithToml:
    """Tests for the merged configuration."""

    @pytest.fixture
    def config_file(self, tmp_path: Path) -> Path:
        path = tmp_path / "config.toml"
        path.write_text(
            "[task_store]\n"
            "list_delay_ms = 100\n"
            "get_delay_ms = 100\n"
            "\n"
            "[logging]\n"
            'level = "ERROR"\n'
        )
        return path

    def test_toml_over_defaults(self, config_file: Path) -> None:
        with patch.dict(os.environ, {}, clear=True):
            settings = load_settings_with_toml(config_file)

        assert settings.task_list_delay_ms == 100
        assert settings.log_level == "ERROR"
        assert settings.task_update_delay_ms == 300

    def test_env_over_toml(self, config_file: Path) -> None:
        with patch.dict(os.environ, {"TASKFLOW_TASK_LIST_DELAY_MS": "50"}, clear=True):
            settings = load_settings_with_toml(config_file)

        assert settings.task_list_delay_ms == 50
        assert settings.task_get_delay_ms == 100

    def test_cli_over_env(self, config_file: Path) -> None:
        """Test CLI overrides win and None overrides are ignored."""
        with patch.dict(os.environ, {"TASKFLOW_TASK_LIST_DELAY_MS": "50"}, clear=True):
            settings = load_settings_with_toml(config_file, task_list_delay_ms=0, seed_file=None)

        assert settings.task_list_delay_ms == 0
        assert settings.seed_file is None

    def test_missing_config_file(self, tmp_path: Path) -> None:
        with patch.dict(os.environ, {}, clear=True):
            settings = load_settings_with_toml(tmp_path / "missing.toml")

        assert settings.task_list_delay_ms == 300
