from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

import httpx
from dateutil import parser as date_parser

from ..config import Settings, get_settings
from ..errors import UpstreamPayloadError
from ..http_client import fetch_json, get_http_client
from ..logging import get_logger
from ..models.news import CityNews, NewsArticle

SERVICE_NAME = "News"

logger = get_logger(__name__)


@dataclass(slots=True)
class NewsService:
    settings: Settings | None = None
    client: httpx.AsyncClient | None = None

    def __post_init__(self) -> None:
        if self.settings is None:
            self.settings = get_settings()

    async def fetch_payload(self, city: str) -> dict[str, Any]:
        client = self.client or await get_http_client(self.settings)
        params = {
            "q": city,
            "sortBy": "publishedAt",
            "pageSize": self.settings.news_page_size,
            "language": self.settings.news_language,
        }
        headers = {"X-Api-Key": self.settings.news_api_key or ""}
        logger.info("news.fetch", city=city)
        return await fetch_json(
            client,
            self.settings.news_url(),
            service=SERVICE_NAME,
            params=params,
            headers=headers,
            timeout=self.settings.upstream_timeout,
        )

    async def fetch_articles(self, city: str) -> list[NewsArticle]:
        articles = normalize_articles(await self.fetch_payload(city))
        logger.info("news.fetched", city=city, articles=len(articles))
        return articles

    async def fetch_city_news(self, city: str) -> CityNews:
        articles = await self.fetch_articles(city)
        return CityNews(city=city, total_results=len(articles), articles=articles)


def normalize_articles(payload: Any) -> list[NewsArticle]:
    """Keep the upstream order and drop articles without a title or description."""
    try:
        raw_articles = payload.get("articles") or []
        articles: list[NewsArticle] = []
        for entry in raw_articles:
            title = entry.get("title")
            description = entry.get("description")
            if not title or not description:
                continue
            source = entry.get("source") or {}
            articles.append(
                NewsArticle(
                    title=title,
                    description=description,
                    source=source.get("name"),
                    published_at=_parse_datetime(entry.get("publishedAt")),
                    url=entry.get("url") or "",
                    url_to_image=entry.get("urlToImage"),
                    author=entry.get("author"),
                )
            )
    except (AttributeError, TypeError, ValueError) as exc:
        raise UpstreamPayloadError(
            SERVICE_NAME, detail=f"unexpected news payload: {exc!r}"
        ) from exc
    return articles


def _parse_datetime(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        parsed = date_parser.parse(value)
    except (ValueError, TypeError, OverflowError):
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)
