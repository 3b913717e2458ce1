"""
Weather Data Module
===================

Provider-side data models and the weather provider boundary.

Author: Weather Disruption Engine Team
"""

# Version info
__version__ = "1.0.0"
__module_name__ = "weather_data"

from .data_models import WeatherSnapshot, DailyForecast, GeoLocation, WeatherReading
from .weather_provider import WeatherProvider, CachingWeatherProvider, StaticWeatherProvider

# Define public API
__all__ = [
    # Data models
    "WeatherSnapshot",
    "DailyForecast",
    "GeoLocation",
    "WeatherReading",

    # Providers
    "WeatherProvider",
    "CachingWeatherProvider",
    "StaticWeatherProvider",
]
