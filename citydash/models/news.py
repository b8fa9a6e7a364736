from __future__ import annotations

from datetime import datetime

from pydantic import Field

from .base import CamelModel


class NewsArticle(CamelModel):
    title: str = Field(description="Article headline")
    description: str = Field(description="Short teaser or dek")
    source: str | None = Field(default=None, description="Publisher name")
    published_at: datetime | None = Field(
        default=None, description="Publication timestamp in UTC if available"
    )
    url: str = Field(description="Canonical article URL")
    url_to_image: str | None = Field(default=None, description="Lead image URL")
    author: str | None = Field(default=None)


class CityNews(CamelModel):
    city: str
    total_results: int = Field(description="Number of articles after filtering")
    articles: list[NewsArticle] = Field(default_factory=list)
