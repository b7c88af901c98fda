"""Tests for config loading, env overrides, and dotted lookup."""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from skycast.config.loader import get_config_value, load_config, masked_dump
from skycast.config.schema import ICON_URL_TEMPLATE, AppConfig
from skycast.errors import ConfigError


@pytest.fixture(autouse=True)
def no_env_key(monkeypatch):
    monkeypatch.delenv("OPENWEATHER_API_KEY", raising=False)


class TestLoadConfig:
    def test_load_from_yaml(self, config_yaml_path: Path, history_path: Path):
        config = load_config(config_yaml_path)
        assert config.provider.api_key == "yaml-key"
        assert config.provider.timeout_seconds == 5
        assert config.history.path == str(history_path)

    def test_missing_file_uses_defaults(self, tmp_path: Path):
        config = load_config(tmp_path / "nope.yaml")
        assert config.provider.units == "imperial"
        assert config.provider.icon_url_template == ICON_URL_TEMPLATE
        assert config.history.path == "data/searchHistory.json"

    def test_empty_yaml_uses_defaults(self, tmp_path: Path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        config = load_config(path)
        assert config == AppConfig()

    def test_env_overrides_yaml_key(self, config_yaml_path: Path, monkeypatch):
        monkeypatch.setenv("OPENWEATHER_API_KEY", "env-key")
        config = load_config(config_yaml_path)
        assert config.provider.api_key == "env-key"

    def test_required_key_missing_is_fatal(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="OPENWEATHER_API_KEY"):
            load_config(tmp_path / "nope.yaml", require_api_key=True)

    def test_unknown_section_rejected(self, tmp_path: Path):
        path = tmp_path / "bad.yaml"
        with open(path, "w") as f:
            yaml.dump({"cache": {"ttl": 60}}, f)
        with pytest.raises(ValidationError):
            load_config(path)

    def test_non_positive_timeout_rejected(self, tmp_path: Path):
        path = tmp_path / "bad.yaml"
        with open(path, "w") as f:
            yaml.dump({"provider": {"timeout_seconds": 0}}, f)
        with pytest.raises(ValidationError):
            load_config(path)


class TestGetConfigValue:
    def test_dotted_key(self):
        assert get_config_value(AppConfig(), "provider.units") == "imperial"

    def test_list_index(self):
        assert get_config_value(AppConfig(), "server.cors_origins.0") == "*"

    def test_invalid_key(self):
        with pytest.raises((KeyError, AttributeError)):
            get_config_value(AppConfig(), "nonexistent.key")


class TestMaskedDump:
    def test_api_key_hidden(self, config_yaml_path: Path):
        out = masked_dump(load_config(config_yaml_path))
        assert "yaml-key" not in out
        assert "***" in out
