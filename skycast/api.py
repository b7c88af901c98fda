"""Weather dashboard API: FastAPI routes over the pipeline and history store."""

import logging
from datetime import datetime
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, HTMLResponse, JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from skycast.config.schema import AppConfig
from skycast.errors import ErrorKind, PersistenceError, SkycastError
from skycast.ingest.geocoder import GeoResolver
from skycast.ingest.openweather_client import OpenWeatherClient, ProviderClient
from skycast.models.weather import CurrentWeather, ForecastEntry, WeatherReport
from skycast.pipeline.weather_pipeline import WeatherResolutionPipeline
from skycast.storage.history_store import HistoryStore

logger = logging.getLogger(__name__)

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.UPSTREAM: 502,
    ErrorKind.MALFORMED_PAYLOAD: 502,
    ErrorKind.PERSISTENCE: 500,
    ErrorKind.CONFIG: 500,
    ErrorKind.INTERNAL: 500,
}


class WeatherRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    city_name: str = Field(alias="cityName")


def build_pipeline(config: AppConfig) -> WeatherResolutionPipeline:
    """Wire the OpenWeather client, geocoder and provider from config."""
    p = config.provider
    client = OpenWeatherClient(
        api_key=p.api_key,
        base_url=p.base_url,
        geo_base_url=p.geo_base_url,
        units=p.units,
        timeout=p.timeout_seconds,
    )
    return WeatherResolutionPipeline(
        GeoResolver(client), ProviderClient(client), p.icon_url_template
    )


def _display_date(iso_timestamp: str) -> str:
    try:
        return datetime.fromisoformat(iso_timestamp).strftime("%m/%d/%Y")
    except ValueError:
        return iso_timestamp


def _icon_code(icon_ref: str) -> str:
    return icon_ref.rsplit("/", 1)[-1].removesuffix(".png")


def _current_item(cw: CurrentWeather) -> dict:
    return {
        "city": cw.city,
        "date": _display_date(cw.observed_at),
        "icon": _icon_code(cw.icon_ref),
        "iconUrl": cw.icon_ref,
        "iconDescription": cw.description,
        "tempF": cw.temperature_f,
        "windSpeed": cw.wind_speed_mph,
        "humidity": cw.humidity_pct,
    }


def _forecast_item(fe: ForecastEntry) -> dict:
    return {
        "date": fe.timestamp,
        "icon": _icon_code(fe.icon_ref),
        "iconUrl": fe.icon_ref,
        "iconDescription": fe.description,
        "tempF": fe.temperature_f,
        "windSpeed": fe.wind_speed_mph,
        "humidity": fe.humidity_pct,
    }


def serialize_report(report: WeatherReport) -> list[dict]:
    """Current weather first, then the forecast entries in provider order."""
    return [_current_item(report.current)] + [
        _forecast_item(fe) for fe in report.forecast
    ]


def create_app(
    config: AppConfig | None = None,
    pipeline: WeatherResolutionPipeline | None = None,
    history: HistoryStore | None = None,
) -> FastAPI:
    config = config or AppConfig()
    pipeline = pipeline or build_pipeline(config)
    history = history or HistoryStore(config.history.path)
    index_html = Path(config.server.static_dir) / "index.html"

    app = FastAPI(title="Skycast Weather Dashboard", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(SkycastError)
    async def handle_skycast_error(request: Request, exc: SkycastError):
        status = STATUS_BY_KIND[exc.kind]
        if status >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(
            status_code=status,
            content={"error": exc.kind.value, "message": exc.message},
        )

    # ── Weather ─────────────────────────────────────────────────────

    @app.post("/api/weather/")
    def get_weather(body: WeatherRequest):
        """Resolve weather for a city and record it in the search history."""
        report = pipeline.resolve_city(body.city_name)
        try:
            history.add(body.city_name)
        except PersistenceError as e:
            logger.error("Weather served but history not saved: %s", e.message)
        return serialize_report(report)

    # ── History ─────────────────────────────────────────────────────

    @app.get("/api/weather/history")
    def get_history():
        return [c.to_dict() for c in history.list()]

    @app.delete("/api/weather/history/{city_id}")
    def delete_history(city_id: str):
        remaining = history.remove(city_id)
        return {"success": True, "history": [c.to_dict() for c in remaining]}

    # ── Serve client ────────────────────────────────────────────────

    @app.get("/{path:path}")
    def serve_client(path: str):
        if index_html.exists():
            return FileResponse(index_html, media_type="text/html")
        return HTMLResponse("<h1>Client not built</h1>", status_code=404)

    return app
