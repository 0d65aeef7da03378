"""Tests for CLI commands."""

from pathlib import Path

import httpx
import respx
import yaml

from stargaze.cli import main

BASE = "https://test-weather.example.com/v1"


def _write_config(tmp_path: Path, **provider) -> Path:
    path = tmp_path / "test.yaml"
    data = {
        "provider": {"api_key": "secret", "base_url": BASE, "retry_base_delay": 0.0, **provider},
        "storage": {"db_path": str(tmp_path / "stargaze.db")},
    }
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


class TestCLI:
    def test_no_command_returns_1(self, capsys):
        result = main([])
        assert result == 1

    def test_config_show_masks_key(self, tmp_path: Path, capsys):
        config_path = _write_config(tmp_path)
        result = main(["--config", str(config_path), "config", "show"])
        assert result == 0
        captured = capsys.readouterr()
        assert "secret" not in captured.out
        assert '"api_key": "***"' in captured.out

    def test_config_get(self, tmp_path: Path, capsys):
        config_path = _write_config(tmp_path)
        result = main(["--config", str(config_path), "config", "get", "cache.forecast_ttl_hours"])
        assert result == 0
        assert "cache.forecast_ttl_hours = 2.0" in capsys.readouterr().out

    def test_config_get_missing(self, tmp_path: Path, capsys):
        config_path = _write_config(tmp_path)
        result = main(["--config", str(config_path), "config", "get", "cache.nope"])
        assert result == 1

    def test_twilight(self, tmp_path: Path, capsys):
        result = main([
            "--config", str(tmp_path / "absent.yaml"),
            "twilight", "--lat", "39.74", "--lon", "-104.98",
            "--date", "2024-06-21", "--sunset", "20:31", "--sunrise", "05:32",
        ])
        assert result == 0
        out = capsys.readouterr().out
        assert "Twilight for 2024-06-21" in out
        assert "Astronomical dusk" in out
        assert "Sunset             2024-06-21 20:31" in out
        assert "Sunrise            2024-06-22 05:32" in out

    def test_twilight_bad_clock(self, tmp_path: Path, capsys):
        result = main([
            "--config", str(tmp_path / "absent.yaml"),
            "twilight", "--lat", "39.74", "--lon", "-104.98",
            "--date", "2024-06-21", "--sunset", "dusk", "--sunrise", "05:32",
        ])
        assert result == 1

    @respx.mock
    def test_report_and_cache_clear(self, tmp_path: Path, capsys, denver_raw: dict):
        respx.get(f"{BASE}/forecast.json").mock(
            return_value=httpx.Response(200, json=denver_raw)
        )
        config_path = _write_config(tmp_path)

        result = main(["--config", str(config_path), "report", "Denver"])
        assert result == 0
        assert "Night of 2024-06-21" in capsys.readouterr().out

        result = main(["--config", str(config_path), "cache", "clear"])
        assert result == 0
        assert "Removed 2 cached entries" in capsys.readouterr().out

    @respx.mock
    def test_report_json_with_db_override(self, tmp_path: Path, capsys, denver_raw: dict):
        respx.get(f"{BASE}/forecast.json").mock(
            return_value=httpx.Response(200, json=denver_raw)
        )
        config_path = _write_config(tmp_path)
        db_path = tmp_path / "other" / "override.db"

        result = main(["--config", str(config_path), "--db", str(db_path), "report", "Denver", "--json"])
        assert result == 0
        assert '"rating": "Excellent"' in capsys.readouterr().out
        assert db_path.exists()

    @respx.mock
    def test_report_bad_key_exits_2(self, tmp_path: Path, capsys):
        respx.get(f"{BASE}/forecast.json").mock(return_value=httpx.Response(403))
        config_path = _write_config(tmp_path)

        result = main(["--config", str(config_path), "report", "Denver"])
        assert result == 2
        assert "WEATHERAPI_KEY" in capsys.readouterr().out

    @respx.mock
    def test_report_unavailable(self, tmp_path: Path, capsys):
        respx.get(f"{BASE}/forecast.json").mock(return_value=httpx.Response(400))
        config_path = _write_config(tmp_path)

        result = main(["--config", str(config_path), "report", "Nowhere"])
        assert result == 1
        assert "No forecast available" in capsys.readouterr().out

    @respx.mock
    def test_search(self, tmp_path: Path, capsys, fixtures_dir: Path):
        body = (fixtures_dir / "weatherapi_search_springfield.json").read_text()
        respx.get(f"{BASE}/search.json").mock(return_value=httpx.Response(200, text=body))
        config_path = _write_config(tmp_path)

        result = main(["--config", str(config_path), "search", "Springfield"])
        assert result == 0
        out = capsys.readouterr().out
        assert "Springfield, Missouri, United States of America" in out

    def test_cache_clear_on_empty_db(self, tmp_path: Path, capsys):
        config_path = _write_config(tmp_path)
        result = main(["--config", str(config_path), "cache", "clear"])
        assert result == 0
        assert "Removed 0 cached entries" in capsys.readouterr().out
