"""
Weather Monitor
===============

Stateful per-trip monitor. It polls the weather provider, detects changes,
raises alerts, and dispatches trigger events and alerts to subscribers.

Lifecycle:
    uninitialized --initialize()--> initialized --start_monitoring()--> monitoring
    monitoring --stop_monitoring()--> stopped --start_monitoring()--> monitoring

Stopping only clears the timer; state is kept so monitoring can resume
without re-initializing. At most one polling timer exists per monitor.

Provider failures never propagate out of public methods: they are reported
through the ErrorHandler and the last known good snapshot and forecast stay
in place. ConfigurationError is the only exception raised to callers, and
only from update_config().

Author: Weather Disruption Engine Team
"""

import copy
import logging
import threading
from datetime import date, datetime, timedelta
from typing import Callable, Dict, Any, Iterable, List, Optional

from ..disruption_engine.models import (
    MonitorLocation, MonitorState, MorningSweepResult, OutdoorCheck,
    OutdoorViability, ScheduledActivity, TriggerEvent, ViabilityLevel,
    WeatherAlert, WeatherChange, WeatherConflict,
)
from ..disruption_engine.monitor_config import MonitorConfig
from ..disruption_engine.viability_analyzer import analyze_outdoor_viability
from ..disruption_engine.change_detector import detect_weather_changes
from ..disruption_engine.alert_generator import generate_alerts
from ..disruption_engine import conflict_analyzer
from ..disruption_engine.morning_sweep import build_morning_sweep
from ..disruption_engine.trigger_builder import create_weather_trigger, find_affected_activities
from ..weather_data.data_models import DailyForecast, WeatherSnapshot
from ..weather_data.weather_provider import WeatherProvider
from ..utils.data_utils import to_date
from ..utils.error_handler import (
    ErrorHandler, ErrorCategory, ErrorSeverity, ErrorContext,
    ConfigurationError, StaleForecastError,
)
from .events import EventChannel, Subscription
from .polling_timer import PollingTimer


NO_FORECAST_REASON = "No forecast data available, assuming good conditions"
NO_FORECAST_UNKNOWN_REASON = "No forecast data available, conditions unknown"


class WeatherMonitor:
    """
    Weather monitor for one trip
    """

    def __init__(self, provider: WeatherProvider, config: MonitorConfig = None,
                 clock: Callable[[], datetime] = None,
                 timer_factory: Callable[..., Any] = PollingTimer,
                 error_handler: ErrorHandler = None):
        """
        Initialize Weather Monitor

        Args:
            provider (WeatherProvider): Weather and geocoding provider
            config (MonitorConfig): Thresholds (default: built from application settings)
            clock (Callable): Returns the current time (default: datetime.now)
            timer_factory (Callable): Builds the polling timer from (interval_seconds, callback)
            error_handler (ErrorHandler): Error reporting (a new one is created if omitted)
        """
        self.logger = logging.getLogger(__name__)
        self.provider = provider
        self.config = config or MonitorConfig.from_settings()
        self.clock = clock or datetime.now
        self.timer_factory = timer_factory
        self.error_handler = error_handler or ErrorHandler()

        self._state: Optional[MonitorState] = None
        self._timer = None
        self._schedule: List[ScheduledActivity] = []
        self._lock = threading.RLock()

        self.change_channel: EventChannel[TriggerEvent] = EventChannel("weather_change", self.error_handler)
        self.alert_channel: EventChannel[WeatherAlert] = EventChannel("weather_alert", self.error_handler)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(self, trip_id: str, city: str, country: str = None) -> Optional[MonitorState]:
        """
        Geocode the destination and load the initial weather

        Args:
            trip_id (str): Trip identifier
            city (str): Destination city
            country (str): Optional country to disambiguate the city

        Returns:
            MonitorState: Copy of the new state, None if the city could not be geocoded
        """
        try:
            geo = self.provider.geocode_city(city, country)
        except Exception as e:
            self.error_handler.handle_provider_error("geocode", e, location=city, trip_id=trip_id)
            return None

        if geo is None:
            self.error_handler.handle_provider_error("geocode", location=city, trip_id=trip_id)
            return None

        location = MonitorLocation.from_geolocation(city, country, geo)
        current = self._fetch_current(location, trip_id)
        forecast = self._fetch_forecast(location, trip_id)
        now = self.clock()

        with self._lock:
            old_timer = self._detach_timer()
            self._state = MonitorState(
                trip_id=trip_id,
                location=location,
                last_check=now,
                current_weather=current,
                daily_forecast=forecast,
                last_forecast_update=now if forecast else None,
            )
            state = copy.deepcopy(self._state)

        self._stop_timer(old_timer)
        self.logger.info(f"Weather monitor initialized for {location.label}")
        self.logger.info(
            f"Current conditions: {current.description if current else 'Unknown'}"
        )
        return state

    def start_monitoring(self) -> bool:
        """
        Run one check now, then poll every check_interval_minutes

        Calling it again replaces the running timer, so only one is ever active.

        Returns:
            bool: False if the monitor is not initialized
        """
        with self._lock:
            if self._state is None:
                self.logger.error("Cannot start monitoring - not initialized")
                return False

            old_timer = self._detach_timer()
            self._start_timer()
            self._state.is_monitoring = True

        self._stop_timer(old_timer)
        self.logger.info(
            f"Started weather monitoring (every {self.config.check_interval_minutes} minutes)"
        )
        self.check_weather()
        return True

    def stop_monitoring(self) -> None:
        """Stop polling; state is kept. Safe to call repeatedly."""
        with self._lock:
            old_timer = self._detach_timer()
            if self._state is not None:
                self._state.is_monitoring = False

        if old_timer is not None:
            self._stop_timer(old_timer)
            self.logger.info("Stopped weather monitoring")

    def _start_timer(self) -> None:
        self._timer = self.timer_factory(self.config.check_interval_seconds, self._tick)
        self._timer.start()

    def _detach_timer(self):
        # Caller holds the lock; the returned timer must be stopped after releasing it
        timer, self._timer = self._timer, None
        return timer

    @staticmethod
    def _stop_timer(timer) -> None:
        # Stopping joins the poll thread, which may be waiting on the monitor lock
        if timer is not None:
            timer.stop()

    def _tick(self) -> None:
        try:
            self.check_weather()
        except Exception as e:
            self.error_handler.handle_error(
                message="Unexpected error during weather poll",
                exception=e,
                category=ErrorCategory.UNKNOWN,
                severity=ErrorSeverity.HIGH,
                context=self._context("_tick"),
            )

    @property
    def is_initialized(self) -> bool:
        with self._lock:
            return self._state is not None

    @property
    def is_monitoring(self) -> bool:
        with self._lock:
            return self._state is not None and self._state.is_monitoring

    # ------------------------------------------------------------------
    # Polling
    # ------------------------------------------------------------------

    def check_weather(self) -> List[WeatherChange]:
        """
        Fetch current weather, detect changes and raise alerts

        Returns:
            List[WeatherChange]: Changes detected by this check (possibly empty)
        """
        with self._lock:
            if self._state is None:
                self.logger.error("Cannot check weather - not initialized")
                return []
            location = self._state.location
            trip_id = self._state.trip_id
            config = self.config

        current = self._fetch_current(location, trip_id)
        if current is None:
            return []

        now = self.clock()
        triggers: List[TriggerEvent] = []
        new_alerts: List[WeatherAlert] = []
        changes: List[WeatherChange] = []

        with self._lock:
            # Nothing is written to state until every step has succeeded
            try:
                previous = self._state.current_weather
                if previous is not None:
                    change = detect_weather_changes(previous, current, config, now=now)
                    if change is not None:
                        changes.append(change)
                        if config.enable_auto_reshuffle:
                            affected = find_affected_activities(self._schedule, change)
                            triggers.append(create_weather_trigger(change, current, affected, now=now))

                for alert in generate_alerts(current, location.label, now=now):
                    if alert.kind not in config.severe_alert_types:
                        continue
                    if self._has_active_alert(alert):
                        continue
                    new_alerts.append(alert)

                refresh_due = self._forecast_refresh_due(now)
            except Exception as e:
                self.error_handler.handle_error(
                    message="Error checking weather",
                    exception=e,
                    category=ErrorCategory.UNKNOWN,
                    severity=ErrorSeverity.HIGH,
                    context=self._context("check_weather"),
                )
                return []

            self._state.current_weather = current
            self._state.last_check = now
            self._state.detected_changes.extend(changes)
            self._state.alerts.extend(new_alerts)

        for change in changes:
            self.logger.info(f"Detected change: {change.description}")
        for alert in new_alerts:
            self.logger.warning(f"Weather alert: {alert.title}")

        for trigger in triggers:
            self.change_channel.publish(trigger, trip_id=trip_id)
        for alert in new_alerts:
            self.alert_channel.publish(alert, trip_id=trip_id)

        if refresh_due:
            self.refresh_forecast()

        return changes

    def refresh_forecast(self) -> bool:
        """
        Reload the multi-day forecast; the previous forecast is kept on failure

        Returns:
            bool: True if a new forecast was stored
        """
        with self._lock:
            if self._state is None:
                return False
            location = self._state.location
            trip_id = self._state.trip_id

        forecast = self._fetch_forecast(location, trip_id)
        if not forecast:
            return False

        with self._lock:
            self._state.daily_forecast = forecast
            self._state.last_forecast_update = self.clock()

        self.logger.debug(f"Forecast refreshed: {len(forecast)} day(s)")
        return True

    def _forecast_refresh_due(self, now: datetime) -> bool:
        last = self._state.last_forecast_update
        if last is None:
            return True
        return now - last >= timedelta(hours=self.config.forecast_refresh_hours)

    def _has_active_alert(self, alert: WeatherAlert) -> bool:
        day = alert.window.start.date()
        return any(
            a.kind is alert.kind and a.window.start.date() == day
            for a in self._state.alerts
        )

    def _fetch_current(self, location: MonitorLocation, trip_id: str) -> Optional[WeatherSnapshot]:
        try:
            current = self.provider.get_current_weather(location.lat, location.lon)
        except Exception as e:
            self.error_handler.handle_provider_error("current", e, location=location.label, trip_id=trip_id)
            return None
        if current is None:
            self.error_handler.handle_provider_error("current", location=location.label, trip_id=trip_id)
        return current

    def _fetch_forecast(self, location: MonitorLocation, trip_id: str) -> List[DailyForecast]:
        try:
            forecast = self.provider.get_forecast(location.lat, location.lon)
        except Exception as e:
            self.error_handler.handle_provider_error("forecast", e, location=location.label, trip_id=trip_id)
            return []
        if not forecast:
            self.error_handler.handle_provider_error("forecast", location=location.label, trip_id=trip_id)
            return []
        return list(forecast)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def update_config(self, changes: Dict[str, Any]) -> MonitorConfig:
        """
        Apply config changes; restarts the timer if the interval changed while monitoring

        Raises:
            ConfigurationError: On unknown keys or invalid values (config is left unchanged)
        """
        try:
            new_config = self.config.merged(changes)
        except ConfigurationError as e:
            self.error_handler.handle_error(
                message="Rejected monitor configuration",
                exception=e,
                category=ErrorCategory.CONFIG_INVALID,
                severity=ErrorSeverity.MEDIUM,
                context=self._context("update_config"),
            )
            raise

        old_timer = None
        with self._lock:
            interval_changed = new_config.check_interval_minutes != self.config.check_interval_minutes
            self.config = new_config
            if interval_changed and self._timer is not None:
                old_timer = self._detach_timer()
                self._start_timer()

        if old_timer is not None:
            self._stop_timer(old_timer)
            self.logger.info(
                f"Polling interval changed to {new_config.check_interval_minutes} minutes"
            )

        return new_config

    def get_config(self) -> MonitorConfig:
        return self.config

    # ------------------------------------------------------------------
    # Schedule analysis
    # ------------------------------------------------------------------

    def set_schedule(self, activities: Iterable[ScheduledActivity]) -> None:
        """Activities used to compute affected slots for trigger events"""
        with self._lock:
            self._schedule = list(activities)

    def analyze_activity_conflicts(self, activities: Iterable[ScheduledActivity],
                                   forecast: DailyForecast) -> List[WeatherConflict]:
        return conflict_analyzer.analyze_activity_conflicts(activities, forecast, self.config)

    def perform_morning_sweep(self, activities: Iterable[ScheduledActivity] = None,
                              day=None) -> Optional[MorningSweepResult]:
        """
        Refresh the weather, then check the day's activities against its forecast

        Args:
            activities: The schedule (default: the schedule given to set_schedule)
            day: Day to sweep as date, datetime or ISO string (default: today)

        Returns:
            MorningSweepResult: The report, None if not initialized or no forecast exists for the day
        """
        if not self.is_initialized:
            self.logger.error("Cannot perform morning sweep - not initialized")
            return None

        self.check_weather()

        target = to_date(day) if day is not None else self.clock().date()
        with self._lock:
            if activities is None:
                activities = list(self._schedule)
            alerts = list(self._state.alerts)
            label = self._state.location.city

        try:
            forecast = self._forecast_for(target)
        except StaleForecastError as e:
            self.error_handler.handle_error(
                message=f"Cannot perform morning sweep for {target}",
                exception=e,
                category=ErrorCategory.STALE_FORECAST,
                severity=ErrorSeverity.MEDIUM,
                context=self._context("perform_morning_sweep"),
            )
            return None

        return build_morning_sweep(
            activities, forecast, alerts, label, self.config, sweep_time=self.clock()
        )

    def _forecast_for(self, day: Optional[date]) -> DailyForecast:
        with self._lock:
            forecast = list(self._state.daily_forecast) if self._state else []
        for entry in forecast:
            if entry.date == day:
                return entry
        raise StaleForecastError(f"No forecast data for {day}")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_state(self) -> Optional[MonitorState]:
        """Copy of the monitor state, None before initialize()"""
        with self._lock:
            return copy.deepcopy(self._state)

    def get_current_viability(self) -> Optional[OutdoorViability]:
        with self._lock:
            current = self._state.current_weather if self._state else None
        if current is None:
            return None
        return analyze_outdoor_viability(current, self.config)

    def get_viability_for_date(self, day) -> Optional[OutdoorViability]:
        """Viability for a forecast day, None if the day is not in the forecast"""
        try:
            forecast = self._forecast_for(to_date(day))
        except StaleForecastError:
            return None
        return analyze_outdoor_viability(forecast, self.config)

    def get_upcoming_forecast(self, hours: int = 24) -> List[DailyForecast]:
        """Forecast days falling inside the next `hours` hours"""
        now = self.clock()
        first, last = now.date(), (now + timedelta(hours=hours)).date()
        with self._lock:
            forecast = list(self._state.daily_forecast) if self._state else []
        return [f for f in forecast if first <= f.date <= last]

    def is_good_for_outdoor(self, start: datetime, end: datetime = None) -> OutdoorCheck:
        """
        Whether a time window is good for outdoor activities

        Every forecast day the window touches is checked and the worst one
        decides. Without forecast data the answer follows
        assume_good_when_unknown and data_available is False.
        """
        end = end or start
        worst = None
        day = start.date()
        while day <= end.date():
            viability = self.get_viability_for_date(day)
            if viability is not None and (worst is None or viability.level.rank > worst.level.rank):
                worst = viability
            day += timedelta(days=1)

        if worst is None:
            assume_good = self.config.assume_good_when_unknown
            return OutdoorCheck(
                is_good=assume_good,
                reason=NO_FORECAST_REASON if assume_good else NO_FORECAST_UNKNOWN_REASON,
                data_available=False,
            )

        if worst.level is ViabilityLevel.GOOD:
            return OutdoorCheck(is_good=True, reason=worst.reason)
        if worst.level is ViabilityLevel.FAIR:
            return OutdoorCheck(
                is_good=True,
                reason=worst.reason,
                recommendation=". ".join(worst.recommendations) or None,
            )
        if worst.level is ViabilityLevel.POOR:
            return OutdoorCheck(
                is_good=False,
                reason=worst.reason,
                recommendation="Consider indoor alternatives or rescheduling",
            )
        return OutdoorCheck(
            is_good=False,
            reason=worst.reason,
            recommendation="Outdoor activities not recommended - please reschedule or choose indoor options",
        )

    # ------------------------------------------------------------------
    # Alerts and subscriptions
    # ------------------------------------------------------------------

    def dismiss_alert(self, alert_id: str) -> bool:
        """Remove an alert from state; returns False if no alert has that id"""
        with self._lock:
            if self._state is None:
                return False
            before = len(self._state.alerts)
            self._state.alerts = [a for a in self._state.alerts if a.id != alert_id]
            return len(self._state.alerts) < before

    def on_weather_change(self, listener: Callable[[TriggerEvent], None]) -> Subscription:
        return self.change_channel.subscribe(listener)

    def on_weather_alert(self, listener: Callable[[WeatherAlert], None]) -> Subscription:
        return self.alert_channel.subscribe(listener)

    def _context(self, function: str) -> ErrorContext:
        return ErrorContext(
            module=__name__,
            function=function,
            trip_id=self._state.trip_id if self._state else None,
        )
