"""Tests for the WeatherAPI.com client with mocked httpx."""

from unittest.mock import patch

import httpx
import pytest
import respx

from stargaze.ingest.errors import AuthorizationError, TransientProviderError
from stargaze.ingest.weather_client import WeatherApiClient

BASE = "https://test-weather.example.com/v1"


@pytest.fixture
def client() -> WeatherApiClient:
    return WeatherApiClient(
        api_key="test-key",
        base_url=BASE,
        max_retries=1,
        retry_base_delay=0.01,  # Fast retries in tests
    )


class TestGetForecast:
    @respx.mock
    def test_success(self, client: WeatherApiClient, denver_raw: dict):
        route = respx.get(f"{BASE}/forecast.json").mock(
            return_value=httpx.Response(200, json=denver_raw)
        )

        result = client.get_forecast("Denver", days=2)
        assert result["location"]["name"] == "Denver"
        params = route.calls[0].request.url.params
        assert params["key"] == "test-key"
        assert params["q"] == "Denver"
        assert params["days"] == "2"
        assert params["aqi"] == "no"

    @respx.mock
    def test_user_agent_header(self, client: WeatherApiClient, denver_raw: dict):
        route = respx.get(f"{BASE}/forecast.json").mock(
            return_value=httpx.Response(200, json=denver_raw)
        )

        client.get_forecast("Denver")
        assert "stargaze" in route.calls[0].request.headers["user-agent"]

    @pytest.mark.parametrize("status", [401, 403])
    @respx.mock
    def test_auth_failure_not_retried(self, client: WeatherApiClient, status: int):
        route = respx.get(f"{BASE}/forecast.json").mock(
            return_value=httpx.Response(status, json={"error": {"code": 2006}})
        )

        with pytest.raises(AuthorizationError) as exc_info:
            client.get_forecast("Denver")
        assert exc_info.value.status_code == status
        assert route.call_count == 1

    @respx.mock
    def test_retry_on_503(self, client: WeatherApiClient, denver_raw: dict):
        route = respx.get(f"{BASE}/forecast.json").mock(
            side_effect=[
                httpx.Response(503),
                httpx.Response(200, json=denver_raw),
            ]
        )

        with patch("stargaze.ingest.weather_client.time.sleep"):
            result = client.get_forecast("Denver")
        assert "forecast" in result
        assert route.call_count == 2

    @respx.mock
    def test_retry_on_429(self, client: WeatherApiClient, denver_raw: dict):
        route = respx.get(f"{BASE}/forecast.json").mock(
            side_effect=[
                httpx.Response(429),
                httpx.Response(200, json=denver_raw),
            ]
        )

        with patch("stargaze.ingest.weather_client.time.sleep") as sleep:
            client.get_forecast("Denver")
        assert route.call_count == 2
        sleep.assert_called_once_with(0.01)

    @respx.mock
    def test_exhausted_retries(self, client: WeatherApiClient):
        route = respx.get(f"{BASE}/forecast.json").mock(return_value=httpx.Response(503))

        with patch("stargaze.ingest.weather_client.time.sleep"), pytest.raises(
            TransientProviderError
        ) as exc_info:
            client.get_forecast("Denver")
        assert exc_info.value.status_code == 503
        assert route.call_count == 2

    @respx.mock
    def test_other_status_is_transient(self, client: WeatherApiClient):
        route = respx.get(f"{BASE}/forecast.json").mock(return_value=httpx.Response(400))

        with pytest.raises(TransientProviderError) as exc_info:
            client.get_forecast("Nowhere")
        assert exc_info.value.status_code == 400
        assert route.call_count == 1

    @respx.mock
    def test_network_error(self, client: WeatherApiClient):
        route = respx.get(f"{BASE}/forecast.json").mock(
            side_effect=httpx.ConnectError("connection refused")
        )

        with patch("stargaze.ingest.weather_client.time.sleep"), pytest.raises(
            TransientProviderError
        ):
            client.get_forecast("Denver")
        assert route.call_count == 2

    @respx.mock
    def test_non_json_body(self, client: WeatherApiClient):
        respx.get(f"{BASE}/forecast.json").mock(
            return_value=httpx.Response(200, text="<html>oops</html>")
        )

        with pytest.raises(TransientProviderError):
            client.get_forecast("Denver")

    @respx.mock
    def test_empty_payload(self, client: WeatherApiClient):
        respx.get(f"{BASE}/forecast.json").mock(return_value=httpx.Response(200, json={}))

        with pytest.raises(TransientProviderError):
            client.get_forecast("Denver")


class TestSearchLocations:
    @respx.mock
    def test_success(self, client: WeatherApiClient, fixtures_dir):
        body = (fixtures_dir / "weatherapi_search_springfield.json").read_text()
        route = respx.get(f"{BASE}/search.json").mock(
            return_value=httpx.Response(200, text=body)
        )

        result = client.search_locations("Springfield")
        assert [r["region"] for r in result] == ["Illinois", "Missouri", "Massachusetts"]
        assert route.calls[0].request.url.params["q"] == "Springfield"

    @respx.mock
    def test_non_list_payload(self, client: WeatherApiClient):
        respx.get(f"{BASE}/search.json").mock(
            return_value=httpx.Response(200, json={"error": "nope"})
        )

        with pytest.raises(TransientProviderError):
            client.search_locations("Springfield")

    def test_api_key_from_environment(self, monkeypatch):
        monkeypatch.setenv("WEATHERAPI_KEY", "env-key")
        assert WeatherApiClient().api_key == "env-key"
