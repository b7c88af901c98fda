"""OpenWeatherMap HTTP client: shared request layer plus the weather endpoints."""

import logging

import httpx

from skycast.config.schema import OPENWEATHER_BASE_URL, OPENWEATHER_GEO_URL
from skycast.errors import ConfigError, UpstreamError
from skycast.models.weather import Coordinates

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "skycast/0.1.0"


class OpenWeatherClient:
    """Authenticated GET requests against OpenWeatherMap.

    The credential, unit system and timeout are fixed at construction;
    every failure mode of the transport surfaces as ``UpstreamError``.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = OPENWEATHER_BASE_URL,
        geo_base_url: str = OPENWEATHER_GEO_URL,
        units: str = "imperial",
        timeout: float = 10.0,
        http_client: httpx.Client | None = None,
    ):
        if not api_key:
            raise ConfigError("OpenWeather API key not set")
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.geo_base_url = geo_base_url.rstrip("/")
        self.units = units
        self.timeout = timeout
        self._http = http_client or httpx.Client(
            timeout=timeout, headers={"User-Agent": DEFAULT_USER_AGENT}
        )

    def close(self) -> None:
        self._http.close()

    def get_json(self, url: str, params: dict) -> object:
        """GET ``url`` with the credential appended and return the decoded body."""
        query = {**params, "appid": self.api_key}
        try:
            resp = self._http.get(url, params=query, timeout=self.timeout)
        except httpx.TimeoutException as e:
            logger.error("OpenWeather request to %s timed out: %s", url, e)
            raise UpstreamError(f"Request to {url} timed out") from e
        except httpx.RequestError as e:
            logger.error("OpenWeather request to %s failed: %s", url, e)
            raise UpstreamError(f"Request failed: {e}") from e

        if not resp.is_success:
            logger.error("OpenWeather %d: %s -> %s", resp.status_code, url, resp.text)
            raise UpstreamError(
                f"OpenWeather returned HTTP {resp.status_code}", resp.status_code
            )
        try:
            return resp.json()
        except ValueError as e:
            logger.error("OpenWeather returned non-JSON body for %s", url)
            raise UpstreamError("OpenWeather returned an unreadable body") from e


class ProviderClient:
    def __init__(self, client: OpenWeatherClient):
        self.client = client

    def fetch_current(self, coords: Coordinates) -> dict:
        """Fetch current conditions for a coordinate pair."""
        return self._fetch("weather", coords)

    def fetch_forecast(self, coords: Coordinates) -> dict:
        """Fetch the 5-day / 3-hour forecast for a coordinate pair."""
        return self._fetch("forecast", coords)

    def _fetch(self, endpoint: str, coords: Coordinates) -> dict:
        data = self.client.get_json(
            f"{self.client.base_url}/{endpoint}",
            {
                "lat": coords.latitude,
                "lon": coords.longitude,
                "units": self.client.units,
            },
        )
        if not isinstance(data, dict):
            raise UpstreamError(f"OpenWeather /{endpoint} returned a non-object body")
        return data
