#!/usr/bin/env python3
"""
Weather Data and Utilities Testing Script
=========================================

Tests the provider adapters (caching decorator, in-memory provider), the
cache manager, error handling and small data helpers.

Usage:
    python test_weather_data.py
    pytest test_weather_data.py

Author: Weather Disruption Engine Team
"""

import sys
from datetime import date, datetime

from src.utils import (
    CacheManager, ErrorHandler, ErrorCategory, ErrorSeverity,
    format_temperature, round_coordinate, to_date, validate_coordinates,
)
from src.weather_data import (
    CachingWeatherProvider, DailyForecast, GeoLocation, StaticWeatherProvider, WeatherSnapshot,
)


TEST_TIME = datetime(2025, 6, 10, 9, 0)


def print_test_header(test_name: str):
    """Print formatted test header"""
    print(f"\n{'='*70}")
    print(f"Testing: {test_name}")
    print(f"{'='*70}")


def print_test_result(test_name: str, success: bool, message: str = ""):
    """Print formatted test result"""
    status = "✅ PASS" if success else "❌ FAIL"
    print(f"{status} - {test_name}")
    if message:
        print(f"      {message}")


def make_provider():
    inner = StaticWeatherProvider(
        current=WeatherSnapshot(TEST_TIME, "Clear", "clear sky", 21.0),
        forecast=[DailyForecast(TEST_TIME.date(), "Clear", "clear sky", 22, 16, 27)],
        locations={"Kyoto": GeoLocation("Kyoto", 35.0116, 135.7681, "JP")},
    )
    cache = CacheManager(max_size=50, default_ttl=60, enable_cleanup_thread=False)
    return CachingWeatherProvider(inner, cache=cache, ttl=60, geocode_ttl=600), inner, cache


def test_caching_provider_reuses_responses():
    print_test_header("Caching Weather Provider")

    provider, inner, cache = make_provider()
    first = provider.get_current_weather(35.0116, 135.7681)
    second = provider.get_current_weather(35.0149, 135.7651)
    assert first == second
    assert inner.calls["current"] == 1

    assert len(provider.get_forecast(35.0116, 135.7681)) == 1
    assert len(provider.get_forecast(35.0116, 135.7681)) == 1
    assert inner.calls["forecast"] == 1

    assert provider.geocode_city("KYOTO").lat == 35.0116
    assert provider.geocode_city("kyoto") is not None
    assert inner.calls["geocode"] == 1
    cache.shutdown()
    print_test_result("Cached responses", True)


def test_caching_provider_skips_empty_results():
    provider, inner, cache = make_provider()
    inner.set_current(None)
    inner.set_forecast([])

    assert provider.get_current_weather(35.0, 135.0) is None
    assert provider.get_current_weather(35.0, 135.0) is None
    assert inner.calls["current"] == 2

    assert provider.get_forecast(35.0, 135.0) == []
    assert provider.get_forecast(35.0, 135.0) == []
    assert inner.calls["forecast"] == 2

    assert provider.geocode_city("Atlantis") is None
    assert provider.geocode_city("Atlantis") is None
    assert inner.calls["geocode"] == 2
    cache.shutdown()


def test_caching_provider_invalidate():
    provider, inner, cache = make_provider()
    provider.get_current_weather(35.0116, 135.7681)
    inner.set_current(WeatherSnapshot(TEST_TIME, "Rain", "light rain", 18.0, 0.8))

    assert provider.get_current_weather(35.0116, 135.7681).condition == "Clear"
    provider.invalidate(35.0116, 135.7681)
    assert provider.get_current_weather(35.0116, 135.7681).condition == "Rain"
    assert inner.calls["current"] == 2
    cache.shutdown()


def test_cache_key_format():
    assert CachingWeatherProvider.cache_key("current", lat=35.0116, lon=135.7681) == "current:35.01:135.77"
    assert CachingWeatherProvider.cache_key("geocode", city="Kyoto", country="JP") == "geocode:kyoto:jp"


def test_static_provider_failure():
    inner = StaticWeatherProvider()
    inner.failure = RuntimeError("boom")
    try:
        inner.get_forecast(0, 0)
    except RuntimeError:
        pass
    else:
        raise AssertionError("Expected the configured failure to be raised")
    assert inner.calls["forecast"] == 1


def test_cache_manager_ttl_and_lru():
    print_test_header("Cache Manager")

    clock = [0.0]
    cache = CacheManager(max_size=2, default_ttl=1, enable_cleanup_thread=False,
                         time_source=lambda: clock[0])
    cache.set("a", 1)
    cache.set("b", 2)
    assert cache.get("a") == 1
    cache.set("c", 3)
    assert cache.get("b") is None
    assert cache.has_key("a") and cache.has_key("c")
    assert cache.get_stats().evictions == 1

    cache.set("forever", "x", ttl=0)
    clock[0] += 1.0
    assert cache.get("c") is None
    assert cache.get("forever") == "x"
    assert cache.cleanup_expired() == 0
    assert len(cache) == 1
    cache.shutdown()
    print_test_result("TTL and LRU eviction", True)


def test_error_handler_statistics():
    print_test_header("Error Handler")

    handler = ErrorHandler()
    report = handler.handle_provider_error("current", RuntimeError("timeout"), location="Kyoto, JP")
    assert report.category is ErrorCategory.PROVIDER_UNAVAILABLE
    assert report.severity is ErrorSeverity.HIGH
    assert report.recovery_suggestions

    empty = handler.handle_provider_error("forecast")
    assert empty.severity is ErrorSeverity.MEDIUM

    handler.handle_error("bad config", category=ErrorCategory.CONFIG_INVALID)
    stats = handler.get_error_statistics()
    assert stats["total_errors"] == 3
    assert stats["errors_by_category"] == {"provider_unavailable": 2, "config_invalid": 1}
    assert stats["most_common_error"] == "provider_unavailable"

    handler.reset_statistics()
    assert handler.get_error_statistics()["total_errors"] == 0


def test_data_utils():
    print_test_header("Data Utilities")

    assert validate_coordinates(35.6762, 139.6503)
    assert not validate_coordinates(91.0, 181.0)
    assert not validate_coordinates("north", 0)
    assert round_coordinate(35.6762) == 35.68
    assert to_date("2025-06-10T09:00:00Z") == date(2025, 6, 10)
    assert to_date(TEST_TIME) == date(2025, 6, 10)
    assert to_date("not a date") is None
    assert format_temperature(21.6) == "22°C"
    assert format_temperature(-3.2) == "-3°C"


def main():
    """Run all weather data tests"""
    print("🚀 Weather Data Testing")

    tests = [
        test_caching_provider_reuses_responses, test_caching_provider_skips_empty_results,
        test_caching_provider_invalidate, test_cache_key_format, test_static_provider_failure,
        test_cache_manager_ttl_and_lru, test_error_handler_statistics, test_data_utils,
    ]

    results = {}
    for test in tests:
        try:
            test()
            results[test.__name__] = True
        except Exception as e:
            print_test_result(test.__name__, False, str(e) or type(e).__name__)
            results[test.__name__] = False

    print_test_header("FINAL RESULTS")
    passed = sum(1 for r in results.values() if r)
    for test_name, result in results.items():
        status = "✅ PASS" if result else "❌ FAIL"
        print(f"{status} - {test_name.replace('_', ' ').title()}")

    print(f"\n📊 Results: {passed}/{len(results)} tests passed")
    return passed == len(results)


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
