from __future__ import annotations

import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import httpx
import uvicorn
from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse
from fastapi.staticfiles import StaticFiles
from mangum import Mangum
from starlette.exceptions import HTTPException as StarletteHTTPException

from citydash import __version__
from citydash.config import Settings, get_settings
from citydash.errors import CityDashError, InternalError, UpstreamError
from citydash.http_client import get_http_client, shutdown_http_client
from citydash.logging import configure_logging, get_logger
from citydash.models import CityNews, DashboardResult, WeatherReport
from citydash.services import DashboardService, NewsService, WeatherService
from citydash.validation import validate_city

AVAILABLE_ENDPOINTS = [
    "/api/weather/:city",
    "/api/news/:city",
    "/api/dashboard/:city",
]

logger = get_logger(__name__)
router = APIRouter()
_started_at = time.monotonic()


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


async def get_client(
    settings: Settings = Depends(get_app_settings),
) -> httpx.AsyncClient:
    return await get_http_client(settings)


def get_weather_service(
    settings: Settings = Depends(get_app_settings),
    client: httpx.AsyncClient = Depends(get_client),
) -> WeatherService:
    return WeatherService(settings=settings, client=client)


def get_news_service(
    settings: Settings = Depends(get_app_settings),
    client: httpx.AsyncClient = Depends(get_client),
) -> NewsService:
    return NewsService(settings=settings, client=client)


def get_dashboard_service(
    weather: WeatherService = Depends(get_weather_service),
    news: NewsService = Depends(get_news_service),
) -> DashboardService:
    return DashboardService(weather=weather, news=news)


@router.get("/", tags=["system"])
async def api_index() -> dict:
    return {
        "message": "CityDash Weather & News API",
        "version": __version__,
        "description": "Backend API for weather and news data",
        "endpoints": {
            "weather": {
                "url": "/api/weather/:city",
                "method": "GET",
                "description": "Get weather data for a specific city",
                "example": "/api/weather/London",
            },
            "news": {
                "url": "/api/news/:city",
                "method": "GET",
                "description": "Get news articles related to a city",
                "example": "/api/news/Paris",
            },
            "dashboard": {
                "url": "/api/dashboard/:city",
                "method": "GET",
                "description": "Get both weather and news in one request",
                "example": "/api/dashboard/Tokyo",
            },
        },
    }


@router.get("/health", tags=["system"])
async def healthcheck() -> dict:
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": round(time.monotonic() - _started_at, 3),
    }


@router.get("/api/weather/", include_in_schema=False)
@router.get("/api/news/", include_in_schema=False)
@router.get("/api/dashboard/", include_in_schema=False)
async def missing_city() -> None:
    validate_city("")


@router.get("/api/weather/{city}", tags=["weather"], response_model=WeatherReport)
async def weather_for_city(
    city: str,
    service: WeatherService = Depends(get_weather_service),
):
    return await service.fetch_report(validate_city(city))


@router.get("/api/news/{city}", tags=["news"], response_model=CityNews)
async def news_for_city(
    city: str,
    service: NewsService = Depends(get_news_service),
):
    return await service.fetch_city_news(validate_city(city))


@router.get("/api/dashboard/{city}", tags=["dashboard"], response_model=DashboardResult)
async def dashboard_for_city(
    city: str,
    service: DashboardService = Depends(get_dashboard_service),
):
    return await service.build(validate_city(city))


async def handle_citydash_error(request: Request, exc: CityDashError) -> ORJSONResponse:
    if isinstance(exc, UpstreamError):
        log = logger.error if exc.status_code >= 500 else logger.warning
        log(
            "request.upstream_failed",
            path=request.url.path,
            service=exc.service,
            error=exc.error,
            detail=exc.detail,
        )
    else:
        logger.info("request.rejected", path=request.url.path, error=exc.error)
    return ORJSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def handle_http_exception(
    request: Request, exc: StarletteHTTPException
) -> ORJSONResponse:
    if exc.status_code == 404:
        content = {
            "error": "not_found",
            "message": f"Cannot {request.method} {request.url.path}",
            "availableEndpoints": AVAILABLE_ENDPOINTS,
        }
    else:
        content = {"error": "http_error", "message": str(exc.detail)}
    return ORJSONResponse(
        status_code=exc.status_code, content=content, headers=exc.headers
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> ORJSONResponse:
    logger.exception("request.unhandled_error", path=request.url.path)
    error = InternalError()
    return ORJSONResponse(status_code=error.status_code, content=error.to_dict())


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    if not settings.openweather_api_key:
        logger.warning("config.missing_key", key="OPENWEATHER_API_KEY")
    if not settings.news_api_key:
        logger.warning("config.missing_key", key="NEWS_API_KEY")
    yield
    await shutdown_http_client()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)

    app = FastAPI(
        title="CityDash Weather & News API",
        version=__version__,
        description="Current weather and latest local news for a city, in one call.",
        default_response_class=ORJSONResponse,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    app.add_exception_handler(CityDashError, handle_citydash_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected_error)
    app.include_router(router)
    if settings.static_dir is not None and settings.static_dir.is_dir():
        app.mount("/static", StaticFiles(directory=settings.static_dir), name="static")
    return app


app = create_app()

handler = Mangum(app)


def main() -> None:
    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
