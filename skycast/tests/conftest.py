"""Shared test fixtures."""

import json
from pathlib import Path

import pytest
import yaml

from skycast.ingest.openweather_client import OpenWeatherClient

FIXTURE_DIR = Path(__file__).parent / "fixtures"

TEST_BASE_URL = "https://test-owm.example.com/data/2.5"
TEST_GEO_URL = "https://test-owm.example.com/geo/1.0"


def load_fixture(name: str):
    with open(FIXTURE_DIR / name) as f:
        return json.load(f)


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return FIXTURE_DIR


@pytest.fixture
def owm_client() -> OpenWeatherClient:
    return OpenWeatherClient(
        api_key="test-key-123",
        base_url=TEST_BASE_URL,
        geo_base_url=TEST_GEO_URL,
        timeout=1.0,
    )


@pytest.fixture
def london_geo() -> list:
    return load_fixture("owm_geo_london.json")


@pytest.fixture
def london_current() -> dict:
    return load_fixture("owm_current_london.json")


@pytest.fixture
def london_forecast() -> dict:
    return load_fixture("owm_forecast_london.json")


@pytest.fixture
def history_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "searchHistory.json"


@pytest.fixture
def config_yaml_path(tmp_path: Path, history_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "provider": {"api_key": "yaml-key", "timeout_seconds": 5},
        "history": {"path": str(history_path)},
    }
    path = tmp_path / "skycast.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path
