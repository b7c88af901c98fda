"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field

OPENWEATHER_BASE_URL = "https://api.openweathermap.org/data/2.5"
OPENWEATHER_GEO_URL = "https://api.openweathermap.org/geo/1.0"
ICON_URL_TEMPLATE = "https://openweathermap.org/img/wn/{icon}.png"


class ProviderConfig(BaseModel):
    model_config = {"extra": "forbid"}

    api_key: str = ""
    base_url: str = OPENWEATHER_BASE_URL
    geo_base_url: str = OPENWEATHER_GEO_URL
    units: str = "imperial"
    timeout_seconds: float = Field(default=10.0, gt=0.0)
    icon_url_template: str = ICON_URL_TEMPLATE


class HistoryConfig(BaseModel):
    model_config = {"extra": "forbid"}

    path: str = "data/searchHistory.json"


class ServerConfig(BaseModel):
    model_config = {"extra": "forbid"}

    host: str = "127.0.0.1"
    port: int = Field(default=3001, ge=1, le=65535)
    cors_origins: list[str] = ["*"]
    static_dir: str = "client/dist"


class AppConfig(BaseModel):
    model_config = {"extra": "forbid"}

    provider: ProviderConfig = ProviderConfig()
    history: HistoryConfig = HistoryConfig()
    server: ServerConfig = ServerConfig()
