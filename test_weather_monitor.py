#!/usr/bin/env python3
"""
Weather Monitor Testing Script
==============================

Tests the stateful monitor: lifecycle and timer ownership, change and alert
dispatch, provider failure handling, forecast refresh, the morning sweep,
queries, the event channel, the polling timer and the per-trip registry.

Uses an in-memory provider, a fake timer factory and a controllable clock,
so no network or real waiting is involved (except the polling timer test).

Usage:
    python test_weather_monitor.py
    pytest test_weather_monitor.py

Author: Weather Disruption Engine Team
"""

import sys
import threading
import time
from datetime import datetime, timedelta

from src.disruption_engine import (
    AlertKind, ChangeKind, MonitorConfig, ScheduledActivity, SuggestedAction,
    TriggerEvent, ViabilityLevel,
)
from src.monitor import EventChannel, MonitorRegistry, PollingTimer, WeatherMonitor
from src.utils.error_handler import ConfigurationError, ErrorHandler, ProviderUnavailableError
from src.weather_data import DailyForecast, GeoLocation, StaticWeatherProvider, WeatherSnapshot


# Test configuration
TEST_TRIP = "trip-tokyo"
TEST_CITY = "Tokyo"
TEST_START = datetime(2025, 6, 10, 9, 0)


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


class FakeClock:
    """Controllable replacement for datetime.now"""

    def __init__(self, now: datetime = TEST_START):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class FakeTimer:
    def __init__(self, interval_seconds, callback):
        self.interval_seconds = interval_seconds
        self.callback = callback
        self.is_active = False

    def start(self):
        self.is_active = True

    def stop(self):
        self.is_active = False

    def tick(self):
        if self.is_active:
            self.callback()


class FakeTimerFactory:
    """Records every timer the monitor creates"""

    def __init__(self):
        self.created = []

    def __call__(self, interval_seconds, callback):
        timer = FakeTimer(interval_seconds, callback)
        self.created.append(timer)
        return timer

    @property
    def active(self):
        return [t for t in self.created if t.is_active]


def snapshot(condition="Clear", temperature=20, pop=0.0, wind=3.0) -> WeatherSnapshot:
    return WeatherSnapshot(
        timestamp=TEST_START,
        condition=condition,
        description=condition.lower(),
        temperature=temperature,
        precipitation_probability=pop,
        humidity=60,
        wind_speed=wind,
    )


def forecast_days(count=5, condition="Clear", pop=0.0, start=TEST_START):
    return [
        DailyForecast(
            date=(start + timedelta(days=i)).date(),
            condition=condition,
            description=condition.lower(),
            temperature=22,
            temp_min=16,
            temp_max=27,
            precipitation_probability=pop,
            humidity=60,
            wind_speed=3,
        )
        for i in range(count)
    ]


def make_monitor(config: MonitorConfig = None, forecast=None, current=None):
    """Build a monitor wired to fakes; returns (monitor, provider, timers, clock)"""
    clock = FakeClock()
    timers = FakeTimerFactory()
    provider = StaticWeatherProvider(
        current=current if current is not None else snapshot(),
        forecast=forecast if forecast is not None else forecast_days(),
        locations={TEST_CITY: GeoLocation(TEST_CITY, 35.68, 139.69, "JP")},
    )
    monitor = WeatherMonitor(
        provider,
        config=config or MonitorConfig(),
        clock=clock,
        timer_factory=timers,
        error_handler=ErrorHandler(),
    )
    return monitor, provider, timers, clock


def park_at(hour: int, slot_id="park", day=TEST_START.date()) -> ScheduledActivity:
    start = datetime.combine(day, datetime.min.time()) + timedelta(hours=hour)
    return ScheduledActivity(slot_id=slot_id, name="Ueno Park", category="park",
                             start=start, end=start + timedelta(hours=2))


# ----------------------------------------------------------------------
# Lifecycle
# ----------------------------------------------------------------------

def test_initialize_builds_state():
    print_test_header("Monitor Lifecycle")

    monitor, provider, timers, clock = make_monitor()
    state = monitor.initialize(TEST_TRIP, TEST_CITY, "JP")

    assert state is not None
    assert state.trip_id == TEST_TRIP
    assert state.location.lat == 35.68
    assert state.location.label == "Tokyo, JP"
    assert state.current_weather.condition == "Clear"
    assert len(state.daily_forecast) == 5
    assert state.is_monitoring is False
    assert state.last_forecast_update == clock.now
    assert timers.created == []
    print_test_result("Initialize", True)


def test_initialize_unknown_city_returns_none():
    monitor, provider, timers, clock = make_monitor()
    assert monitor.initialize(TEST_TRIP, "Atlantis") is None
    assert monitor.get_state() is None
    assert monitor.start_monitoring() is False
    assert timers.created == []


def test_initialize_provider_failure_returns_none():
    monitor, provider, timers, clock = make_monitor()
    provider.failure = ProviderUnavailableError("geocoder down")

    assert monitor.initialize(TEST_TRIP, TEST_CITY) is None
    stats = monitor.error_handler.get_error_statistics()
    assert stats["errors_by_category"]["provider_unavailable"] == 1


def test_start_twice_keeps_one_timer():
    """Scenario F"""
    monitor, provider, timers, clock = make_monitor()
    monitor.initialize(TEST_TRIP, TEST_CITY)

    assert monitor.start_monitoring()
    assert monitor.start_monitoring()
    assert len(timers.created) == 2
    assert len(timers.active) == 1
    assert monitor.is_monitoring

    before = provider.calls["current"]
    for stale in timers.created:
        stale.tick()
    assert provider.calls["current"] == before + 1

    for _ in range(5):
        timers.active[0].tick()
    assert provider.calls["current"] == before + 6
    print_test_result("Single timer invariant", True)


def test_start_runs_immediate_check():
    monitor, provider, timers, clock = make_monitor()
    monitor.initialize(TEST_TRIP, TEST_CITY)
    before = provider.calls["current"]

    monitor.start_monitoring()
    assert provider.calls["current"] == before + 1
    assert timers.active[0].interval_seconds == 30 * 60


def test_stop_is_idempotent_and_resumable():
    monitor, provider, timers, clock = make_monitor()
    monitor.initialize(TEST_TRIP, TEST_CITY)
    monitor.start_monitoring()

    monitor.stop_monitoring()
    monitor.stop_monitoring()
    assert not monitor.is_monitoring
    assert timers.active == []
    assert monitor.get_state().trip_id == TEST_TRIP

    monitor.start_monitoring()
    assert monitor.is_monitoring
    assert len(timers.active) == 1


def test_update_config_restarts_timer_on_interval_change():
    print_test_header("Configuration Updates")

    monitor, provider, timers, clock = make_monitor()
    monitor.initialize(TEST_TRIP, TEST_CITY)
    monitor.start_monitoring()

    monitor.update_config({"wind_speed_threshold": 25})
    assert len(timers.created) == 1

    monitor.update_config({"check_interval_minutes": 10})
    assert len(timers.active) == 1
    assert timers.active[0].interval_seconds == 600
    assert monitor.get_config().check_interval_minutes == 10
    print_test_result("Interval change restarts timer", True)


def test_update_config_rejects_invalid_values():
    monitor, provider, timers, clock = make_monitor()
    monitor.initialize(TEST_TRIP, TEST_CITY)
    monitor.start_monitoring()

    for bad in [{"check_interval_minutes": 0}, {"check_interval_minutes": -1}, {"no_such_key": 1}]:
        try:
            monitor.update_config(bad)
        except ConfigurationError:
            pass
        else:
            raise AssertionError(f"Expected ConfigurationError for {bad}")

    assert monitor.get_config().check_interval_minutes == 30
    assert len(timers.active) == 1


def test_update_config_while_stopped_creates_no_timer():
    monitor, provider, timers, clock = make_monitor()
    monitor.initialize(TEST_TRIP, TEST_CITY)
    monitor.update_config({"check_interval_minutes": 5})
    assert timers.created == []


# ----------------------------------------------------------------------
# Polling
# ----------------------------------------------------------------------

def test_change_is_dispatched_as_trigger():
    print_test_header("Change Detection and Dispatch")

    monitor, provider, timers, clock = make_monitor()
    monitor.initialize(TEST_TRIP, TEST_CITY)
    monitor.set_schedule([park_at(10, "park-10"), park_at(18, "park-18")])
    received = []
    monitor.on_weather_change(received.append)

    provider.set_current(snapshot("Rain", 19, pop=0.9))
    changes = monitor.check_weather()

    assert len(changes) == 1
    assert changes[0].kind is ChangeKind.PRECIPITATION
    assert len(received) == 1
    trigger = received[0]
    assert isinstance(trigger, TriggerEvent)
    assert trigger.affected_slot_ids == ("park-10",)
    assert monitor.get_state().detected_changes == changes
    print_test_result("Trigger dispatch", True)


def test_no_change_without_previous_snapshot():
    monitor, provider, timers, clock = make_monitor()
    provider.set_current(None)
    monitor.initialize(TEST_TRIP, TEST_CITY)
    assert monitor.get_state().current_weather is None

    provider.set_current(snapshot("Rain", pop=0.9))
    assert monitor.check_weather() == []
    assert monitor.get_state().current_weather.condition == "Rain"

    provider.set_current(snapshot("Clear"))
    assert [c.kind for c in monitor.check_weather()] == [ChangeKind.IMPROVEMENT]


def test_auto_reshuffle_disabled_records_without_dispatch():
    monitor, provider, timers, clock = make_monitor(MonitorConfig(enable_auto_reshuffle=False))
    monitor.initialize(TEST_TRIP, TEST_CITY)
    received = []
    monitor.on_weather_change(received.append)

    provider.set_current(snapshot("Thunderstorm"))
    changes = monitor.check_weather()
    assert [c.kind for c in changes] == [ChangeKind.SEVERE]
    assert received == []
    assert len(monitor.get_state().detected_changes) == 1


def test_provider_failure_keeps_last_good_state():
    """Scenario E"""
    monitor, provider, timers, clock = make_monitor()
    monitor.initialize(TEST_TRIP, TEST_CITY)
    good = monitor.get_state()

    clock.advance(minutes=30)
    provider.failure = ProviderUnavailableError("weather API down")
    assert monitor.check_weather() == []

    after = monitor.get_state()
    assert after.current_weather == good.current_weather
    assert after.last_check == good.last_check
    assert after.daily_forecast == good.daily_forecast

    provider.failure = None
    provider.set_current(None)
    assert monitor.check_weather() == []
    assert monitor.get_state().last_check == good.last_check
    print_test_result("Stale-but-valid on provider failure", True)


def test_check_before_initialize_returns_empty():
    monitor, provider, timers, clock = make_monitor()
    assert monitor.check_weather() == []


def test_failed_check_leaves_state_unchanged():
    print_test_header("Failed Check Rollback")

    monitor, provider, timers, clock = make_monitor()
    monitor.initialize(TEST_TRIP, TEST_CITY)
    received = []
    monitor.on_weather_change(received.append)
    before = monitor.get_state()

    # Rain onset is detected, then alert generation fails on the missing wind speed
    clock.advance(minutes=30)
    provider.set_current(snapshot("Rain", pop=0.9, wind=None))
    assert monitor.check_weather() == []
    assert monitor.get_state() == before
    assert received == []
    assert monitor.error_handler.get_error_statistics()["errors_by_category"]["unknown"] == 1

    # The onset is still reported on the next good reading
    provider.set_current(snapshot("Rain", pop=0.9))
    changes = monitor.check_weather()
    assert [c.kind for c in changes] == [ChangeKind.PRECIPITATION]
    assert len(received) == 1
    print_test_result("State untouched after internal error", True)


def test_alerts_dispatch_persist_and_dismiss():
    print_test_header("Alerts")

    monitor, provider, timers, clock = make_monitor()
    monitor.initialize(TEST_TRIP, TEST_CITY)
    received = []
    monitor.on_weather_alert(received.append)

    provider.set_current(snapshot("Thunderstorm", 22))
    monitor.check_weather()
    assert [a.kind for a in received] == [AlertKind.STORM]
    assert received[0].affected_areas == ("Tokyo, JP",)

    # Same storm on the next poll: no duplicate
    clock.advance(minutes=30)
    monitor.check_weather()
    assert len(received) == 1

    # Clear weather does not drop the alert
    provider.set_current(snapshot("Clear"))
    clock.advance(minutes=30)
    monitor.check_weather()
    alerts = monitor.get_state().alerts
    assert len(alerts) == 1

    assert monitor.dismiss_alert(alerts[0].id)
    assert monitor.get_state().alerts == []
    assert not monitor.dismiss_alert("missing")
    print_test_result("Alert persistence", True)


def test_alert_allowlist():
    monitor, provider, timers, clock = make_monitor(MonitorConfig(severe_alert_types=["wind"]))
    monitor.initialize(TEST_TRIP, TEST_CITY)
    received = []
    monitor.on_weather_alert(received.append)

    provider.set_current(snapshot("Thunderstorm", 22, wind=25))
    monitor.check_weather()
    assert [a.kind for a in received] == [AlertKind.WIND]
    assert [a.kind for a in monitor.get_state().alerts] == [AlertKind.WIND]


def test_failing_subscriber_does_not_block_others():
    monitor, provider, timers, clock = make_monitor()
    monitor.initialize(TEST_TRIP, TEST_CITY)
    order = []

    def broken(event):
        order.append("broken")
        raise RuntimeError("subscriber bug")

    monitor.on_weather_change(broken)
    monitor.on_weather_change(lambda event: order.append("second"))

    provider.set_current(snapshot("Rain", pop=0.9))
    assert len(monitor.check_weather()) == 1
    assert order == ["broken", "second"]
    stats = monitor.error_handler.get_error_statistics()
    assert stats["errors_by_category"]["subscriber_failed"] == 1


def test_forecast_refresh_is_debounced():
    print_test_header("Forecast Refresh")

    monitor, provider, timers, clock = make_monitor()
    monitor.initialize(TEST_TRIP, TEST_CITY)
    assert provider.calls["forecast"] == 1

    clock.advance(hours=1)
    monitor.check_weather()
    clock.advance(hours=1)
    monitor.check_weather()
    assert provider.calls["forecast"] == 1

    clock.advance(hours=1)
    monitor.check_weather()
    assert provider.calls["forecast"] == 2
    assert monitor.get_state().last_forecast_update == clock.now

    # An empty refresh keeps the previous forecast
    provider.set_forecast([])
    clock.advance(hours=3)
    monitor.check_weather()
    assert len(monitor.get_state().daily_forecast) == 5
    print_test_result("Debounced refresh", True)


# ----------------------------------------------------------------------
# Sweep and queries
# ----------------------------------------------------------------------

def test_morning_sweep():
    print_test_header("Morning Sweep and Queries")

    monitor, provider, timers, clock = make_monitor(forecast=forecast_days(condition="Rain", pop=0.9))
    monitor.initialize(TEST_TRIP, TEST_CITY)
    before = provider.calls["current"]

    result = monitor.perform_morning_sweep([park_at(10)])
    assert provider.calls["current"] == before + 1
    assert result.day == TEST_START.date()
    assert result.overall_viability is ViabilityLevel.POOR
    assert [c.suggested_action for c in result.conflicts] == [SuggestedAction.SWAP_INDOOR]
    assert len(result.hourly_breakdown) == 15
    assert result.location_label == TEST_CITY
    print_test_result("Morning sweep", True)


def test_morning_sweep_uses_stored_schedule():
    monitor, provider, timers, clock = make_monitor(forecast=forecast_days(condition="Thunderstorm"))
    monitor.initialize(TEST_TRIP, TEST_CITY)
    monitor.set_schedule([park_at(10)])

    tomorrow = TEST_START.date() + timedelta(days=1)
    assert monitor.perform_morning_sweep(day=tomorrow).conflicts == []

    result = monitor.perform_morning_sweep()
    assert [c.suggested_action for c in result.conflicts] == [SuggestedAction.CANCEL]


def test_morning_sweep_without_forecast_returns_none():
    monitor, provider, timers, clock = make_monitor()
    assert monitor.perform_morning_sweep([park_at(10)]) is None

    monitor.initialize(TEST_TRIP, TEST_CITY)
    far = TEST_START.date() + timedelta(days=30)
    assert monitor.perform_morning_sweep([park_at(10)], day=far) is None
    stats = monitor.error_handler.get_error_statistics()
    assert stats["errors_by_category"]["stale_forecast"] == 1


def test_viability_queries():
    monitor, provider, timers, clock = make_monitor(current=snapshot("Thunderstorm"))
    assert monitor.get_current_viability() is None

    monitor.initialize(TEST_TRIP, TEST_CITY)
    assert monitor.get_current_viability().level is ViabilityLevel.IMPOSSIBLE
    assert monitor.get_viability_for_date(TEST_START.date()).level is ViabilityLevel.GOOD
    assert monitor.get_viability_for_date(TEST_START.isoformat()).level is ViabilityLevel.GOOD
    assert monitor.get_viability_for_date(TEST_START.date() + timedelta(days=30)) is None


def test_upcoming_forecast():
    monitor, provider, timers, clock = make_monitor()
    monitor.initialize(TEST_TRIP, TEST_CITY)

    upcoming = monitor.get_upcoming_forecast(24)
    assert [f.date for f in upcoming] == [TEST_START.date(), TEST_START.date() + timedelta(days=1)]
    assert len(monitor.get_upcoming_forecast(24 * 10)) == 5


def test_is_good_for_outdoor():
    rainy = forecast_days(2) + forecast_days(1, condition="Rain", pop=0.9, start=TEST_START + timedelta(days=2))
    monitor, provider, timers, clock = make_monitor(forecast=rainy)
    monitor.initialize(TEST_TRIP, TEST_CITY)

    good = monitor.is_good_for_outdoor(TEST_START)
    assert good.is_good and good.data_available

    wet_day = TEST_START + timedelta(days=2)
    poor = monitor.is_good_for_outdoor(wet_day)
    assert not poor.is_good
    assert poor.recommendation == "Consider indoor alternatives or rescheduling"

    # A window spanning a poor day is judged by that day
    assert not monitor.is_good_for_outdoor(TEST_START, wet_day).is_good


def test_is_good_for_outdoor_without_data():
    monitor, provider, timers, clock = make_monitor(forecast=[])
    monitor.initialize(TEST_TRIP, TEST_CITY)

    check = monitor.is_good_for_outdoor(TEST_START)
    assert check.is_good
    assert not check.data_available

    monitor.update_config({"assume_good_when_unknown": False})
    strict = monitor.is_good_for_outdoor(TEST_START)
    assert not strict.is_good
    assert not strict.data_available


def test_get_state_returns_copy():
    monitor, provider, timers, clock = make_monitor()
    monitor.initialize(TEST_TRIP, TEST_CITY)

    state = monitor.get_state()
    state.daily_forecast.clear()
    state.is_monitoring = True
    assert len(monitor.get_state().daily_forecast) == 5
    assert not monitor.is_monitoring
    assert monitor.get_state().to_dict()["location"]["city"] == TEST_CITY


# ----------------------------------------------------------------------
# Event channel, polling timer, registry
# ----------------------------------------------------------------------

def test_event_channel_order_and_unsubscribe():
    print_test_header("Event Channel")

    channel = EventChannel("test", ErrorHandler())
    seen = []
    first = channel.subscribe(lambda e: seen.append(("first", e)))
    channel.subscribe(lambda e: seen.append(("second", e)))

    assert channel.publish(1) == 2
    first()
    assert channel.publish(2) == 1
    assert seen == [("first", 1), ("second", 1), ("second", 2)]
    assert len(channel) == 1


def test_polling_timer_ticks_until_stopped():
    print_test_header("Polling Timer")

    count = []
    timer = PollingTimer(0.02, lambda: count.append(1))
    timer.start()
    timer.start()
    assert timer.is_active
    assert sum(1 for t in threading.enumerate() if t.name == "weather-poll") == 1

    time.sleep(0.2)
    timer.stop()
    assert not timer.is_active
    ticks = len(count)
    assert ticks >= 2

    time.sleep(0.1)
    assert len(count) == ticks

    try:
        PollingTimer(0, lambda: None)
    except ValueError:
        pass
    else:
        raise AssertionError("Expected ValueError for zero interval")


class SlowWeatherProvider(StaticWeatherProvider):
    """Provider whose current-weather call blocks once `slow` is set"""

    def __init__(self, delay: float, **kwargs):
        super().__init__(**kwargs)
        self.delay = delay
        self.slow = False
        self.in_flight = threading.Event()

    def get_current_weather(self, lat, lon):
        if self.slow:
            self.in_flight.set()
            time.sleep(self.delay)
        return super().get_current_weather(lat, lon)


def test_stop_during_slow_poll_does_not_block():
    print_test_header("Stop During In-Flight Poll")

    provider = SlowWeatherProvider(
        0.5,
        current=snapshot(),
        forecast=forecast_days(),
        locations={TEST_CITY: GeoLocation(TEST_CITY, 35.68, 139.69, "JP")},
    )
    monitor = WeatherMonitor(
        provider,
        config=MonitorConfig(),
        clock=FakeClock(),
        timer_factory=lambda interval, callback: PollingTimer(0.05, callback),
        error_handler=ErrorHandler(),
    )
    monitor.initialize(TEST_TRIP, TEST_CITY)
    assert monitor.start_monitoring()

    provider.slow = True
    assert provider.in_flight.wait(2), "poll thread never reached the provider"

    started = time.monotonic()
    monitor.stop_monitoring()
    elapsed = time.monotonic() - started

    assert elapsed < 2.0, f"stop_monitoring took {elapsed:.2f}s"
    assert not monitor.is_monitoring
    assert monitor.get_state() is not None
    print_test_result("Stop returns once the in-flight poll finishes", True, f"{elapsed:.2f}s")


def test_registry_per_trip():
    print_test_header("Monitor Registry")

    clock = FakeClock()
    timers = FakeTimerFactory()
    provider = StaticWeatherProvider(
        current=snapshot(),
        forecast=forecast_days(),
        locations={TEST_CITY: GeoLocation(TEST_CITY, 35.68, 139.69, "JP")},
    )

    def factory(provider, config=None, error_handler=None):
        return WeatherMonitor(provider, config=config or MonitorConfig(), clock=clock,
                              timer_factory=timers, error_handler=error_handler)

    registry = MonitorRegistry(provider, monitor_factory=factory)
    tokyo = registry.get_or_create("tokyo")
    assert registry.get_or_create("tokyo") is tokyo
    assert registry.get_or_create("osaka") is not tokyo
    assert sorted(registry.trip_ids()) == ["osaka", "tokyo"]

    tokyo.initialize("tokyo", TEST_CITY)
    tokyo.start_monitoring()
    assert len(timers.active) == 1

    assert registry.remove("tokyo")
    assert timers.active == []
    assert "tokyo" not in registry
    assert not registry.remove("tokyo")

    registry.stop_all()
    assert len(registry) == 1


def main():
    """Run all weather monitor tests"""
    print("🚀 Weather Monitor Testing")

    tests = [
        test_initialize_builds_state, test_initialize_unknown_city_returns_none,
        test_initialize_provider_failure_returns_none, test_start_twice_keeps_one_timer,
        test_start_runs_immediate_check, test_stop_is_idempotent_and_resumable,
        test_update_config_restarts_timer_on_interval_change, test_update_config_rejects_invalid_values,
        test_update_config_while_stopped_creates_no_timer,
        test_change_is_dispatched_as_trigger, test_no_change_without_previous_snapshot,
        test_auto_reshuffle_disabled_records_without_dispatch, test_provider_failure_keeps_last_good_state,
        test_check_before_initialize_returns_empty, test_failed_check_leaves_state_unchanged,
        test_alerts_dispatch_persist_and_dismiss,
        test_alert_allowlist, test_failing_subscriber_does_not_block_others,
        test_forecast_refresh_is_debounced,
        test_morning_sweep, test_morning_sweep_uses_stored_schedule,
        test_morning_sweep_without_forecast_returns_none, test_viability_queries,
        test_upcoming_forecast, test_is_good_for_outdoor, test_is_good_for_outdoor_without_data,
        test_get_state_returns_copy,
        test_event_channel_order_and_unsubscribe, test_polling_timer_ticks_until_stopped,
        test_stop_during_slow_poll_does_not_block,
        test_registry_per_trip,
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
