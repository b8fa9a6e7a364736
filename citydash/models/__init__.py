from .dashboard import DashboardResult
from .news import CityNews, NewsArticle
from .weather import Coordinates, WeatherReport, WeatherSnapshot

__all__ = [
    "CityNews",
    "Coordinates",
    "DashboardResult",
    "NewsArticle",
    "WeatherReport",
    "WeatherSnapshot",
]
