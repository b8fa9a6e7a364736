from .dashboard import DashboardService
from .news import NewsService
from .weather import WeatherService

__all__ = ["DashboardService", "NewsService", "WeatherService"]
