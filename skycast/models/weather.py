"""Canonical weather data models produced by the normalizer."""

from dataclasses import dataclass
from typing import TypeAlias


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class CurrentWeather:
    city: str
    temperature_f: float
    wind_speed_mph: float
    humidity_pct: int
    description: str
    icon_ref: str
    observed_at: str  # ISO-8601 UTC


@dataclass(frozen=True)
class ForecastEntry:
    timestamp: str  # provider dt_txt, e.g. "2026-02-11 15:00:00"
    temperature_f: float
    wind_speed_mph: float
    humidity_pct: int
    description: str
    icon_ref: str


ForecastSet: TypeAlias = tuple[ForecastEntry, ...]


@dataclass(frozen=True)
class WeatherReport:
    current: CurrentWeather
    forecast: ForecastSet
