from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

import httpx

from ..config import Settings, get_settings
from ..errors import UpstreamPayloadError
from ..http_client import fetch_json, get_http_client
from ..logging import get_logger
from ..models.weather import Coordinates, WeatherReport, WeatherSnapshot

SERVICE_NAME = "Weather"

logger = get_logger(__name__)


@dataclass(slots=True)
class WeatherService:
    settings: Settings | None = None
    client: httpx.AsyncClient | None = None

    def __post_init__(self) -> None:
        if self.settings is None:
            self.settings = get_settings()

    async def fetch_payload(self, city: str) -> dict[str, Any]:
        client = self.client or await get_http_client(self.settings)
        params = {
            "q": city,
            "appid": self.settings.openweather_api_key or "",
            "units": "metric",
        }
        logger.info("weather.fetch", city=city)
        return await fetch_json(
            client,
            self.settings.weather_url(),
            service=SERVICE_NAME,
            params=params,
            timeout=self.settings.upstream_timeout,
            not_found=(
                f'Unable to find weather data for "{city}". Please check the city name.'
            ),
        )

    async def fetch_snapshot(self, city: str) -> WeatherSnapshot:
        snapshot = normalize_weather(await self.fetch_payload(city))
        logger.info("weather.fetched", city=city, resolved=snapshot.city)
        return snapshot

    async def fetch_report(self, city: str) -> WeatherReport:
        snapshot = await self.fetch_snapshot(city)
        return WeatherReport(
            **snapshot.model_dump(), timestamp=datetime.now(timezone.utc)
        )


def normalize_weather(payload: Any) -> WeatherSnapshot:
    """Map an OpenWeather current-weather payload onto ``WeatherSnapshot``."""
    try:
        main = payload["main"]
        condition = payload["weather"][0]
        return WeatherSnapshot(
            temperature=_round_half_up(main["temp"]),
            description=str(condition["description"]),
            coordinates=Coordinates(
                lat=float(payload["coord"]["lat"]),
                lon=float(payload["coord"]["lon"]),
            ),
            feels_like=_round_half_up(main["feels_like"]),
            wind_speed=float(payload["wind"]["speed"]),
            country_code=str(payload["sys"]["country"]),
            rain_volume=_rain_volume(payload.get("rain")),
            humidity=int(main["humidity"]),
            pressure=int(main["pressure"]),
            city=str(payload["name"]),
            icon=str(condition["icon"]),
        )
    except (KeyError, IndexError, TypeError, ValueError, AttributeError) as exc:
        raise UpstreamPayloadError(
            SERVICE_NAME, detail=f"unexpected weather payload: {exc!r}"
        ) from exc


def _round_half_up(value: Any) -> int:
    return math.floor(float(value) + 0.5)


def _rain_volume(rain: Any) -> float:
    if not rain:
        return 0.0
    # 3h accumulation wins whenever the provider reports it
    for window in ("3h", "1h"):
        value = rain.get(window)
        if value is not None:
            return float(value)
    return 0.0
