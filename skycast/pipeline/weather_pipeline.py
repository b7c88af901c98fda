"""Weather resolution pipeline: geocode -> fetch -> normalize for one city."""

import logging

from skycast.config.schema import ICON_URL_TEMPLATE
from skycast.errors import ResolutionFailedError, SkycastError, ValidationError
from skycast.ingest.geocoder import GeoResolver
from skycast.ingest.normalizer import normalize_current, normalize_forecast
from skycast.ingest.openweather_client import ProviderClient
from skycast.models.weather import WeatherReport

logger = logging.getLogger(__name__)


class WeatherResolutionPipeline:
    def __init__(
        self,
        geo: GeoResolver,
        provider: ProviderClient,
        icon_template: str = ICON_URL_TEMPLATE,
    ):
        self.geo = geo
        self.provider = provider
        self.icon_template = icon_template

    def resolve_city(self, city_name: str) -> WeatherReport:
        """Resolve current weather and the next forecast slots for a city.

        Blank names raise ``ValidationError`` before any request is made.
        Any later failure is raised as ``ResolutionFailedError`` wrapping
        the first error encountered; nothing partial is returned.
        """
        name = (city_name or "").strip()
        if not name:
            raise ValidationError("City name cannot be blank")

        try:
            coords = self.geo.resolve(name)
            raw_current = self.provider.fetch_current(coords)
            raw_forecast = self.provider.fetch_forecast(coords)

            current = normalize_current(raw_current, name, self.icon_template)
            forecast = normalize_forecast(raw_forecast, self.icon_template)
        except SkycastError as e:
            logger.error("Weather resolution failed for %r: %s", name, e.message)
            raise ResolutionFailedError(name, e) from e

        logger.info(
            "Resolved weather for %r: %.1fF, %d forecast entries",
            name, current.temperature_f, len(forecast),
        )
        return WeatherReport(current=current, forecast=forecast)
