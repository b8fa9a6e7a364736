from __future__ import annotations

from datetime import datetime

from pydantic import Field

from .base import CamelModel
from .news import NewsArticle
from .weather import WeatherSnapshot


class DashboardResult(CamelModel):
    city: str = Field(description="City as requested by the client")
    weather: WeatherSnapshot | None = Field(
        default=None, description="Current weather, null if the provider failed"
    )
    news: list[NewsArticle] = Field(
        default_factory=list, description="Latest articles, empty if the provider failed"
    )
    timestamp: datetime = Field(description="UTC timestamp of the aggregation")
