import copy

import pytest

from citydash.config import Settings

WEATHER_PAYLOAD = {
    "coord": {"lon": -0.1257, "lat": 51.5085},
    "weather": [
        {"id": 500, "main": "Rain", "description": "light rain", "icon": "10d"}
    ],
    "main": {
        "temp": 12.5,
        "feels_like": 11.2,
        "temp_min": 10.9,
        "temp_max": 13.8,
        "pressure": 1012,
        "humidity": 81,
    },
    "wind": {"speed": 4.63, "deg": 230},
    "rain": {"1h": 0.4, "3h": 1.2},
    "sys": {"country": "GB", "sunrise": 1716177000, "sunset": 1716234000},
    "name": "London",
    "cod": 200,
}

NEWS_PAYLOAD = {
    "status": "ok",
    "totalResults": 3,
    "articles": [
        {
            "source": {"id": None, "name": "BBC News"},
            "author": "Jane Reporter",
            "title": "Thames barrier closes ahead of storm",
            "description": "Flood defences were raised overnight.",
            "url": "https://www.bbc.co.uk/news/thames-barrier",
            "urlToImage": "https://ichef.bbci.co.uk/thames.jpg",
            "publishedAt": "2024-05-20T12:34:00Z",
            "content": "...",
        },
        {
            "source": {"id": None, "name": "Evening Standard"},
            "author": None,
            "title": "",
            "description": "An article without a headline.",
            "url": "https://www.standard.co.uk/no-title",
            "urlToImage": None,
            "publishedAt": "2024-05-20T11:00:00Z",
        },
        {
            "source": {"id": "the-guardian", "name": "The Guardian"},
            "author": None,
            "title": "London marathon route announced",
            "description": "Organisers published the 2025 course.",
            "url": "https://www.theguardian.com/marathon",
            "urlToImage": None,
            "publishedAt": "2024-05-20T09:15:00+01:00",
        },
    ],
}


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        openweather_api_key="test-weather-key",
        news_api_key="test-news-key",
    )


@pytest.fixture
def weather_payload() -> dict:
    return copy.deepcopy(WEATHER_PAYLOAD)


@pytest.fixture
def news_payload() -> dict:
    return copy.deepcopy(NEWS_PAYLOAD)
