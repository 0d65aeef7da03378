"""Shared test fixtures."""

import json
import sqlite3
from pathlib import Path

import pytest
import yaml

from stargaze.config.schema import StargazeConfig
from stargaze.ingest.forecast_parser import parse_forecast
from stargaze.models.weather import WeatherForecast
from stargaze.storage.database import connect, run_migrations
from stargaze.storage.kv_store import SqliteKeyValueStore

FIXTURE_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def tmp_db(tmp_path: Path) -> sqlite3.Connection:
    """Temporary SQLite database with all migrations applied."""
    conn = connect(tmp_path / "test.db")
    run_migrations(conn)
    yield conn
    conn.close()


@pytest.fixture
def kv_store(tmp_db: sqlite3.Connection) -> SqliteKeyValueStore:
    return SqliteKeyValueStore(tmp_db)


@pytest.fixture
def default_config(tmp_path: Path) -> StargazeConfig:
    """Default config with the database under tmp_path and an API key set."""
    return StargazeConfig(
        provider={"api_key": "test-key", "retry_base_delay": 0.0},
        storage={"db_path": str(tmp_path / "stargaze.db")},
    )


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "provider": {"api_key": "yaml-key", "forecast_days": 2},
        "cache": {"forecast_ttl_hours": 1.5},
        "light_pollution": {"default_bortle_class": 4},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return FIXTURE_DIR


@pytest.fixture
def denver_raw() -> dict:
    with open(FIXTURE_DIR / "weatherapi_forecast_denver.json") as f:
        return json.load(f)


@pytest.fixture
def denver_forecast(denver_raw: dict) -> WeatherForecast:
    return parse_forecast(denver_raw)
