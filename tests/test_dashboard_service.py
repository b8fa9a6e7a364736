import asyncio

import httpx
import pytest
import respx

from citydash.errors import NoDataAvailable, UpstreamGenericError
from citydash.services import DashboardService, NewsService, WeatherService
from citydash.services.weather import normalize_weather

WEATHER_URL = "https://api.openweathermap.org/data/2.5/weather"
NEWS_URL = "https://newsapi.org/v2/everything"


def _dashboard(settings, client: httpx.AsyncClient) -> DashboardService:
    return DashboardService(
        weather=WeatherService(settings=settings, client=client),
        news=NewsService(settings=settings, client=client),
    )


@pytest.mark.asyncio
async def test_build_combines_both_sources(settings, weather_payload, news_payload) -> None:
    async with httpx.AsyncClient() as client:
        service = _dashboard(settings, client)
        with respx.mock(assert_all_called=True) as mock:
            mock.get(WEATHER_URL).respond(200, json=weather_payload)
            mock.get(NEWS_URL).respond(200, json=news_payload)
            result = await service.build("London")

    assert result.city == "London"
    assert result.weather is not None
    assert result.weather.temperature == 13
    assert len(result.news) == 2
    assert result.timestamp.tzinfo is not None


@pytest.mark.asyncio
async def test_news_failure_keeps_weather(settings, weather_payload) -> None:
    async with httpx.AsyncClient() as client:
        service = _dashboard(settings, client)
        with respx.mock(assert_all_called=True) as mock:
            mock.get(WEATHER_URL).respond(200, json=weather_payload)
            mock.get(NEWS_URL).respond(500, json={"status": "error"})
            result = await service.build("London")

    assert result.weather is not None
    assert result.weather.city == "London"
    assert result.news == []


@pytest.mark.asyncio
async def test_weather_failure_keeps_news(settings, news_payload) -> None:
    async with httpx.AsyncClient() as client:
        service = _dashboard(settings, client)
        with respx.mock(assert_all_called=True) as mock:
            mock.get(WEATHER_URL).mock(side_effect=httpx.ReadTimeout)
            mock.get(NEWS_URL).respond(200, json=news_payload)
            result = await service.build("London")

    assert result.weather is None
    assert [a.source for a in result.news] == ["BBC News", "The Guardian"]


@pytest.mark.asyncio
async def test_both_failures_raise_no_data(settings) -> None:
    async with httpx.AsyncClient() as client:
        service = _dashboard(settings, client)
        with respx.mock(assert_all_called=True) as mock:
            mock.get(WEATHER_URL).respond(404, json={"cod": "404"})
            mock.get(NEWS_URL).mock(side_effect=httpx.ConnectError)
            with pytest.raises(NoDataAvailable) as excinfo:
                await service.build("Atlantis")

    assert excinfo.value.status_code == 404
    assert excinfo.value.to_dict()["error"] == "no_data_available"


@pytest.mark.asyncio
async def test_empty_news_with_working_weather_is_success(settings, weather_payload) -> None:
    async with httpx.AsyncClient() as client:
        service = _dashboard(settings, client)
        with respx.mock() as mock:
            mock.get(WEATHER_URL).respond(200, json=weather_payload)
            mock.get(NEWS_URL).respond(200, json={"status": "ok", "articles": []})
            result = await service.build("London")

    assert result.weather is not None
    assert result.news == []


class _GatedWeather:
    def __init__(self, own: asyncio.Event, other: asyncio.Event, snapshot) -> None:
        self.own = own
        self.other = other
        self.snapshot = snapshot

    async def fetch_snapshot(self, city: str):
        self.own.set()
        await self.other.wait()
        return self.snapshot


class _GatedNews:
    def __init__(self, own: asyncio.Event, other: asyncio.Event) -> None:
        self.own = own
        self.other = other

    async def fetch_articles(self, city: str):
        self.own.set()
        await self.other.wait()
        return []


@pytest.mark.asyncio
async def test_both_requests_are_in_flight_together(weather_payload) -> None:
    weather_started = asyncio.Event()
    news_started = asyncio.Event()
    service = DashboardService(
        weather=_GatedWeather(
            weather_started, news_started, normalize_weather(weather_payload)
        ),
        news=_GatedNews(news_started, weather_started),
    )

    # Each branch waits for the other to start, so a sequential join would hang.
    result = await asyncio.wait_for(service.build("London"), timeout=2)

    assert result.weather is not None


class _FailingWeather:
    async def fetch_snapshot(self, city: str):
        raise UpstreamGenericError("Weather", status_code=503)


class _SlowNews:
    def __init__(self) -> None:
        self.completed = False

    async def fetch_articles(self, city: str):
        await asyncio.sleep(0.05)
        self.completed = True
        return []


@pytest.mark.asyncio
async def test_early_failure_does_not_cancel_the_other_branch() -> None:
    news = _SlowNews()
    service = DashboardService(weather=_FailingWeather(), news=news)

    result = await service.build("London")

    assert news.completed is True
    assert result.weather is None


class _BrokenWeather:
    async def fetch_snapshot(self, city: str):
        raise RuntimeError("bug")


@pytest.mark.asyncio
async def test_unexpected_exceptions_propagate() -> None:
    service = DashboardService(weather=_BrokenWeather(), news=_SlowNews())

    with pytest.raises(RuntimeError):
        await service.build("London")
