"""
Weather Provider Interface
=========================

Defines the contract the monitor uses to reach an external weather service,
plus two adapters:

- CachingWeatherProvider: wraps any provider with a TTL/LRU cache so that
  repeated polls, sweeps and page loads do not multiply external calls.
  Cache keys round coordinates to two decimals; geocoding is keyed by the
  lower-cased city/country. Empty results are never cached.
- StaticWeatherProvider: in-memory provider for development, demos and tests.

Provider contract: a None or empty return means "unavailable". Providers may
still raise on transport errors; the monitor treats both the same way.

Author: Weather Disruption Engine Team
"""

import logging
import threading
from abc import ABC, abstractmethod
from collections import Counter
from typing import List, Optional, Dict

from .data_models import WeatherSnapshot, DailyForecast, GeoLocation
from ..utils.cache_manager import CacheManager
from ..utils.data_utils import round_coordinate

from config import config


class WeatherProvider(ABC):
    """Abstract weather/geocoding provider"""

    @abstractmethod
    def get_current_weather(self, lat: float, lon: float) -> Optional[WeatherSnapshot]:
        """Current conditions at a location, None if unavailable"""

    @abstractmethod
    def get_forecast(self, lat: float, lon: float) -> List[DailyForecast]:
        """Multi-day forecast at a location, empty if unavailable"""

    @abstractmethod
    def geocode_city(self, name: str, country: Optional[str] = None) -> Optional[GeoLocation]:
        """Resolve a city name to coordinates, None if unknown"""


class CachingWeatherProvider(WeatherProvider):
    """
    Caching decorator around another provider
    """

    def __init__(self, provider: WeatherProvider, cache: CacheManager = None,
                 ttl: int = None, geocode_ttl: int = None):
        """
        Initialize Caching Weather Provider

        Args:
            provider (WeatherProvider): Provider that performs the real calls
            cache (CacheManager): Cache to use (a new one is created if omitted)
            ttl (int): TTL in seconds for weather responses
            geocode_ttl (int): TTL in seconds for geocoding responses
        """
        self.logger = logging.getLogger(__name__)
        self.provider = provider
        self.cache = cache or CacheManager(default_ttl=config.PROVIDER_CACHE_TTL)
        self.ttl = ttl if ttl is not None else config.PROVIDER_CACHE_TTL
        self.geocode_ttl = geocode_ttl if geocode_ttl is not None else config.GEOCODE_CACHE_TTL

    @staticmethod
    def cache_key(kind: str, lat: float = None, lon: float = None,
                  city: str = None, country: str = None) -> str:
        """Build the cache key for a provider request"""
        if kind == "geocode" and city:
            return f"geocode:{city.lower()}:{(country or '').lower()}"
        if lat is not None and lon is not None:
            return f"{kind}:{round_coordinate(lat)}:{round_coordinate(lon)}"
        if city:
            return f"{kind}:{city.lower()}:{(country or '').lower()}"
        return f"{kind}:unknown"

    def get_current_weather(self, lat: float, lon: float) -> Optional[WeatherSnapshot]:
        key = self.cache_key("current", lat=lat, lon=lon)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        snapshot = self.provider.get_current_weather(lat, lon)
        if snapshot is not None:
            self.cache.set(key, snapshot, self.ttl)
        return snapshot

    def get_forecast(self, lat: float, lon: float) -> List[DailyForecast]:
        key = self.cache_key("forecast", lat=lat, lon=lon)
        cached = self.cache.get(key)
        if cached is not None:
            return list(cached)

        forecast = self.provider.get_forecast(lat, lon) or []
        if forecast:
            self.cache.set(key, tuple(forecast), self.ttl)
        return list(forecast)

    def geocode_city(self, name: str, country: Optional[str] = None) -> Optional[GeoLocation]:
        key = self.cache_key("geocode", city=name, country=country)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        location = self.provider.geocode_city(name, country)
        if location is not None:
            self.cache.set(key, location, self.geocode_ttl)
        return location

    def invalidate(self, lat: float, lon: float) -> None:
        """Drop cached weather for a location so the next call hits the provider"""
        self.cache.delete(self.cache_key("current", lat=lat, lon=lon))
        self.cache.delete(self.cache_key("forecast", lat=lat, lon=lon))


class StaticWeatherProvider(WeatherProvider):
    """
    In-memory provider with settable conditions

    Every call is counted in `calls`. When `failure` is set, every call
    raises it instead of returning data.
    """

    def __init__(self, current: WeatherSnapshot = None,
                 forecast: List[DailyForecast] = None,
                 locations: Dict[str, GeoLocation] = None):
        self._lock = threading.Lock()
        self.current = current
        self.forecast = list(forecast or [])
        self.locations = {k.lower(): v for k, v in (locations or {}).items()}
        self.failure: Optional[Exception] = None
        self.calls: Counter = Counter()

    def set_current(self, snapshot: Optional[WeatherSnapshot]) -> None:
        with self._lock:
            self.current = snapshot

    def set_forecast(self, forecast: List[DailyForecast]) -> None:
        with self._lock:
            self.forecast = list(forecast)

    def add_location(self, location: GeoLocation) -> None:
        with self._lock:
            self.locations[location.name.lower()] = location

    def _record(self, kind: str) -> None:
        with self._lock:
            self.calls[kind] += 1
            failure = self.failure
        if failure is not None:
            raise failure

    def get_current_weather(self, lat: float, lon: float) -> Optional[WeatherSnapshot]:
        self._record("current")
        return self.current

    def get_forecast(self, lat: float, lon: float) -> List[DailyForecast]:
        self._record("forecast")
        return list(self.forecast)

    def geocode_city(self, name: str, country: Optional[str] = None) -> Optional[GeoLocation]:
        self._record("geocode")
        return self.locations.get(name.lower())
