"""Tests for the OpenWeather client with mocked httpx."""

import httpx
import pytest
import respx

from skycast.errors import ConfigError, UpstreamError
from skycast.ingest.openweather_client import OpenWeatherClient, ProviderClient
from skycast.models.weather import Coordinates

HOST = "test-owm.example.com"
BASE = f"https://{HOST}/data/2.5"
LONDON = Coordinates(latitude=51.5, longitude=-0.13)


@pytest.fixture
def provider(owm_client: OpenWeatherClient) -> ProviderClient:
    return ProviderClient(owm_client)


class TestOpenWeatherClient:
    def test_blank_api_key_raises(self):
        with pytest.raises(ConfigError, match="not set"):
            OpenWeatherClient(api_key="")

    @respx.mock
    def test_appid_appended(self, owm_client: OpenWeatherClient):
        route = respx.get(host=HOST, path="/data/2.5/weather").mock(
            return_value=httpx.Response(200, json={})
        )
        owm_client.get_json(f"{BASE}/weather", {"lat": 1})
        params = route.calls[0].request.url.params
        assert params["appid"] == "test-key-123"
        assert params["lat"] == "1"

    @respx.mock
    def test_user_agent_header(self, owm_client: OpenWeatherClient):
        route = respx.get(host=HOST, path="/data/2.5/weather").mock(
            return_value=httpx.Response(200, json={})
        )
        owm_client.get_json(f"{BASE}/weather", {})
        assert "skycast" in route.calls[0].request.headers["user-agent"]

    @respx.mock
    def test_non_json_body(self, owm_client: OpenWeatherClient):
        respx.get(host=HOST, path="/data/2.5/weather").mock(
            return_value=httpx.Response(200, text="<html>oops</html>")
        )
        with pytest.raises(UpstreamError, match="unreadable"):
            owm_client.get_json(f"{BASE}/weather", {})


class TestFetchCurrent:
    @respx.mock
    def test_success(self, provider: ProviderClient, london_current: dict):
        route = respx.get(host=HOST, path="/data/2.5/weather").mock(
            return_value=httpx.Response(200, json=london_current)
        )
        result = provider.fetch_current(LONDON)
        assert result["main"]["temp"] == 15
        params = route.calls[0].request.url.params
        assert params["lat"] == "51.5"
        assert params["lon"] == "-0.13"
        assert params["units"] == "imperial"

    @respx.mock
    def test_unauthorized(self, provider: ProviderClient):
        respx.get(host=HOST, path="/data/2.5/weather").mock(
            return_value=httpx.Response(401, json={"cod": 401, "message": "Invalid API key"})
        )
        with pytest.raises(UpstreamError, match="401") as exc_info:
            provider.fetch_current(LONDON)
        assert exc_info.value.status_code == 401

    @respx.mock
    def test_network_error(self, provider: ProviderClient):
        respx.get(host=HOST, path="/data/2.5/weather").mock(side_effect=httpx.ConnectError("refused"))
        with pytest.raises(UpstreamError, match="Request failed"):
            provider.fetch_current(LONDON)

    @respx.mock
    def test_timeout(self, provider: ProviderClient):
        respx.get(host=HOST, path="/data/2.5/weather").mock(side_effect=httpx.ReadTimeout("slow"))
        with pytest.raises(UpstreamError, match="timed out"):
            provider.fetch_current(LONDON)

    @respx.mock
    def test_non_object_body(self, provider: ProviderClient):
        respx.get(host=HOST, path="/data/2.5/weather").mock(return_value=httpx.Response(200, json=[]))
        with pytest.raises(UpstreamError, match="non-object"):
            provider.fetch_current(LONDON)


class TestFetchForecast:
    @respx.mock
    def test_success(self, provider: ProviderClient, london_forecast: dict):
        respx.get(host=HOST, path="/data/2.5/forecast").mock(
            return_value=httpx.Response(200, json=london_forecast)
        )
        result = provider.fetch_forecast(LONDON)
        assert len(result["list"]) == 7

    @respx.mock
    def test_server_error(self, provider: ProviderClient):
        respx.get(host=HOST, path="/data/2.5/forecast").mock(return_value=httpx.Response(503))
        with pytest.raises(UpstreamError) as exc_info:
            provider.fetch_forecast(LONDON)
        assert exc_info.value.status_code == 503

    @respx.mock
    def test_redirect_is_not_success(self, provider: ProviderClient):
        respx.get(host=HOST, path="/data/2.5/forecast").mock(
            return_value=httpx.Response(302, headers={"Location": "https://elsewhere.example.com/"})
        )
        with pytest.raises(UpstreamError) as exc_info:
            provider.fetch_forecast(LONDON)
        assert exc_info.value.status_code == 302
