"""City name to coordinates via the OpenWeather direct geocoding endpoint."""

import logging

from skycast.errors import NotFoundError, UpstreamError
from skycast.ingest.openweather_client import OpenWeatherClient
from skycast.models.weather import Coordinates

logger = logging.getLogger(__name__)


class GeoResolver:
    def __init__(self, client: OpenWeatherClient):
        self.client = client

    def resolve(self, city_name: str) -> Coordinates:
        """Return the coordinates of the provider's first match for ``city_name``.

        Ambiguous names are not disambiguated; the single candidate
        requested with ``limit=1`` is used as-is.
        """
        data = self.client.get_json(
            f"{self.client.geo_base_url}/direct",
            {"q": city_name, "limit": 1},
        )
        if not isinstance(data, list):
            raise UpstreamError("Geocoding returned a non-list body")
        if not data:
            raise NotFoundError(f"City not found: {city_name}")

        match = data[0]
        lat = match.get("lat") if isinstance(match, dict) else None
        lon = match.get("lon") if isinstance(match, dict) else None
        if not _is_number(lat) or not _is_number(lon):
            raise UpstreamError("Geocoding match is missing lat/lon")

        logger.info("Resolved %r to (%.4f, %.4f)", city_name, lat, lon)
        return Coordinates(latitude=float(lat), longitude=float(lon))


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
