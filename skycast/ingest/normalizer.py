"""Map raw OpenWeather payloads onto CurrentWeather / ForecastEntry."""

import math
from typing import Any

from skycast.config.schema import ICON_URL_TEMPLATE
from skycast.errors import MalformedPayloadError
from skycast.models.common import unix_to_iso
from skycast.models.weather import CurrentWeather, ForecastEntry, ForecastSet

FORECAST_LIMIT = 5

_MISSING = object()


def icon_url(code: str, template: str = ICON_URL_TEMPLATE) -> str:
    return template.format(icon=code)


def normalize_current(
    raw: dict, city_name: str, icon_template: str = ICON_URL_TEMPLATE
) -> CurrentWeather:
    """Build a CurrentWeather from a /weather response.

    Every consumed field is mandatory; ``dt`` becomes ``observed_at``.
    """
    fields = _common_fields(raw, "current")
    icon = fields.pop("icon")
    dt = _number(raw, "dt", "current")
    try:
        observed_at = unix_to_iso(dt)
    except (OverflowError, ValueError, OSError) as e:
        raise MalformedPayloadError("current.dt is out of range") from e
    return CurrentWeather(
        city=city_name,
        observed_at=observed_at,
        icon_ref=icon_url(icon, icon_template),
        **fields,
    )


def normalize_forecast(
    raw: dict, icon_template: str = ICON_URL_TEMPLATE, limit: int = FORECAST_LIMIT
) -> ForecastSet:
    """Take the first ``limit`` entries of a /forecast response, in provider order."""
    entries = _require(raw, "list", "forecast")
    if not isinstance(entries, list):
        raise MalformedPayloadError("forecast.list is not an array")

    result = []
    for i, entry in enumerate(entries[:limit]):
        where = f"forecast.list[{i}]"
        fields = _common_fields(entry, where)
        icon = fields.pop("icon")
        result.append(
            ForecastEntry(
                timestamp=str(_require(entry, "dt_txt", where)),
                icon_ref=icon_url(icon, icon_template),
                **fields,
            )
        )
    return tuple(result)


def _common_fields(raw: Any, where: str) -> dict[str, Any]:
    main = _require(raw, "main", where)
    wind = _require(raw, "wind", where)
    conditions = _require(raw, "weather", where)
    if not isinstance(conditions, list) or not conditions:
        raise MalformedPayloadError(f"{where}.weather is empty")
    first = conditions[0]
    return {
        "temperature_f": _number(main, "temp", f"{where}.main"),
        "humidity_pct": int(_number(main, "humidity", f"{where}.main")),
        "wind_speed_mph": _number(wind, "speed", f"{where}.wind"),
        "description": str(_require(first, "description", f"{where}.weather[0]")),
        "icon": str(_require(first, "icon", f"{where}.weather[0]")),
    }


def _number(obj: Any, key: str, where: str) -> float:
    value = _require(obj, key, where)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedPayloadError(f"Field {where}.{key} is not numeric")
    try:
        number = float(value)
    except OverflowError:
        number = math.inf
    if not math.isfinite(number):
        raise MalformedPayloadError(f"Field {where}.{key} is not finite")
    return number


def _require(obj: Any, key: str, where: str) -> Any:
    value = obj.get(key, _MISSING) if isinstance(obj, dict) else _MISSING
    if value is _MISSING or value is None:
        raise MalformedPayloadError(f"Missing field {where}.{key}")
    return value
