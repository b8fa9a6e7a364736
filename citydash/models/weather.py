from __future__ import annotations

from datetime import datetime

from pydantic import Field

from .base import CamelModel


class Coordinates(CamelModel):
    lat: float = Field(description="Latitude in decimal degrees")
    lon: float = Field(description="Longitude in decimal degrees")


class WeatherSnapshot(CamelModel):
    temperature: int = Field(description="Current temperature in °C, rounded")
    description: str = Field(description="Textual weather description")
    coordinates: Coordinates
    feels_like: int = Field(description="Feels-like temperature in °C, rounded")
    wind_speed: float = Field(description="Wind speed in m/s")
    country_code: str = Field(description="ISO 3166 country code")
    rain_volume: float = Field(
        default=0.0, description="Rain volume in mm for the last 3h (or 1h)"
    )
    humidity: int = Field(description="Relative humidity in percent")
    pressure: int = Field(description="Atmospheric pressure in hPa")
    city: str = Field(description="City name as resolved by the weather provider")
    icon: str = Field(description="Provider icon code, e.g. 01d")


class WeatherReport(WeatherSnapshot):
    timestamp: datetime = Field(description="UTC timestamp when the report was built")
