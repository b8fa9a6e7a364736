import json
from functools import lru_cache
from pathlib import Path
from typing import Annotated, Any

from pydantic import Field, HttpUrl, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    openweather_api_key: str | None = Field(default=None, alias="OPENWEATHER_API_KEY")
    news_api_key: str | None = Field(default=None, alias="NEWS_API_KEY")

    openweather_base_url: HttpUrl = Field(
        "https://api.openweathermap.org/data/2.5", alias="OPENWEATHER_BASE_URL"
    )
    news_base_url: HttpUrl = Field("https://newsapi.org/v2", alias="NEWS_BASE_URL")
    upstream_timeout: float = Field(5.0, gt=0, alias="UPSTREAM_TIMEOUT")
    news_page_size: int = Field(6, ge=1, le=100, alias="NEWS_PAGE_SIZE")
    news_language: str = Field("en", alias="NEWS_LANGUAGE")

    http_timeout: float = Field(10.0, gt=0, alias="HTTP_TIMEOUT")
    http_max_connections: int = Field(20, ge=1, alias="HTTP_MAX_CONNECTIONS")
    http_max_keepalive: int = Field(10, ge=1, alias="HTTP_MAX_KEEPALIVE")
    http_user_agent: str = Field("CityDash/0.1", alias="HTTP_USER_AGENT")

    host: str = Field("0.0.0.0", alias="HOST")
    port: int = Field(3000, ge=1, le=65535, alias="PORT")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")
    cors_origins: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["*"], alias="CORS_ORIGINS"
    )
    static_dir: Path | None = Field(default=None, alias="STATIC_DIR")

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: Any) -> Any:
        # Accepts "a,b" as well as a JSON array.
        if isinstance(value, str):
            value = value.strip()
            if value.startswith("["):
                return json.loads(value)
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    def weather_url(self) -> str:
        return f"{str(self.openweather_base_url).rstrip('/')}/weather"

    def news_url(self) -> str:
        return f"{str(self.news_base_url).rstrip('/')}/everything"


@lru_cache
def get_settings() -> Settings:
    return Settings()
