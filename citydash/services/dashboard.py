from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import datetime, timezone

from ..errors import NoDataAvailable, UpstreamError
from ..logging import get_logger
from ..models.dashboard import DashboardResult
from ..models.news import NewsArticle
from ..models.weather import WeatherSnapshot
from .news import NewsService
from .weather import WeatherService

logger = get_logger(__name__)


@dataclass(slots=True)
class DashboardService:
    """Combine weather and news for one city, tolerating either provider failing.

    Both fetches are scheduled together and joined with
    ``return_exceptions=True`` so one branch failing never cancels the other.
    Upstream errors turn into an empty section; any other exception is a bug
    and is re-raised. ``NoDataAvailable`` is raised only when both fail.
    """

    weather: WeatherService
    news: NewsService

    async def build(self, city: str) -> DashboardResult:
        weather_result, news_result = await asyncio.gather(
            self.weather.fetch_snapshot(city),
            self.news.fetch_articles(city),
            return_exceptions=True,
        )

        weather: WeatherSnapshot | None = None
        weather_failed = isinstance(weather_result, BaseException)
        if weather_failed:
            _raise_unexpected(weather_result)
            logger.warning(
                "dashboard.weather_failed",
                city=city,
                error=weather_result.error,
                detail=weather_result.detail,
            )
        else:
            weather = weather_result

        news: list[NewsArticle] = []
        news_failed = isinstance(news_result, BaseException)
        if news_failed:
            _raise_unexpected(news_result)
            logger.warning(
                "dashboard.news_failed",
                city=city,
                error=news_result.error,
                detail=news_result.detail,
            )
        else:
            news = news_result

        if weather_failed and news_failed:
            raise NoDataAvailable(city)

        logger.info(
            "dashboard.built",
            city=city,
            weather=weather is not None,
            articles=len(news),
        )
        return DashboardResult(
            city=city,
            weather=weather,
            news=news,
            timestamp=datetime.now(timezone.utc),
        )


def _raise_unexpected(result: BaseException) -> None:
    if not isinstance(result, UpstreamError):
        raise result
