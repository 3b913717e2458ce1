"""
Weather Change Detector
=======================

Compares two consecutive readings and reports at most one meaningful change.
Rules are checked in priority order and the first match wins:

a. Thunderstorm onset          -> severe / critical
b. Rain or drizzle onset        -> precipitation / high above 80% chance, else medium
c. Clearing after rain or storm -> improvement / low
d. Temperature swing            -> temperature / high at 15 degrees or more, else medium

Author: Weather Disruption Engine Team
"""

from datetime import datetime
from typing import Optional

from .models import ChangeKind, Severity, TimeWindow, WeatherChange, DEFAULT_CHANGE_WINDOW
from .monitor_config import MonitorConfig, DEFAULT_MONITOR_CONFIG
from .viability_analyzer import is_rainy
from ..weather_data.data_models import WeatherReading
from ..utils.data_utils import format_temperature


HIGH_RAIN_PROBABILITY = 0.8
LARGE_TEMPERATURE_SWING = 15
CLEAR_CONDITIONS = ("clear", "clouds")


def _reading_time(weather: WeatherReading) -> datetime:
    timestamp = getattr(weather, "timestamp", None)
    if timestamp is not None:
        return timestamp
    return datetime.combine(weather.date, datetime.min.time())


def detect_weather_changes(previous: WeatherReading, current: WeatherReading,
                           config: MonitorConfig = DEFAULT_MONITOR_CONFIG,
                           now: datetime = None) -> Optional[WeatherChange]:
    """
    Compare two weather readings and detect a significant change

    Args:
        previous (WeatherReading): Earlier reading
        current (WeatherReading): Latest reading
        config (MonitorConfig): Thresholds
        now (datetime): Start of the change window (default: current reading time)

    Returns:
        WeatherChange: The first matching change, None if nothing changed meaningfully
    """
    prev_condition = (previous.condition or "").lower()
    curr_condition = (current.condition or "").lower()
    start = now or _reading_time(current)
    window = TimeWindow(start=start, end=start + DEFAULT_CHANGE_WINDOW)

    if "thunderstorm" in curr_condition and "thunderstorm" not in prev_condition:
        return WeatherChange(
            kind=ChangeKind.SEVERE,
            severity=Severity.CRITICAL,
            description="Thunderstorm approaching - outdoor activities unsafe",
            previous_label=previous.description,
            new_label=current.description,
            affects_outdoor=True,
            window=window,
        )

    if is_rainy(curr_condition) and not is_rainy(prev_condition):
        pop = current.precipitation_probability or 0.0
        return WeatherChange(
            kind=ChangeKind.PRECIPITATION,
            severity=Severity.HIGH if pop > HIGH_RAIN_PROBABILITY else Severity.MEDIUM,
            description=f"Rain starting - {current.description}",
            previous_label=previous.description,
            new_label=current.description,
            affects_outdoor=True,
            window=window,
        )

    if curr_condition in CLEAR_CONDITIONS and ("rain" in prev_condition or "storm" in prev_condition):
        return WeatherChange(
            kind=ChangeKind.IMPROVEMENT,
            severity=Severity.LOW,
            description="Weather clearing up - outdoor activities now possible",
            previous_label=previous.description,
            new_label=current.description,
            affects_outdoor=True,
            window=window,
        )

    delta = abs(current.temperature - previous.temperature)
    if delta >= config.temperature_change_threshold:
        rising = current.temperature > previous.temperature
        if rising:
            description = f"Temperature rising significantly (+{round(delta)}°C)"
        else:
            description = f"Temperature dropping significantly (-{round(delta)}°C)"
        return WeatherChange(
            kind=ChangeKind.TEMPERATURE,
            severity=Severity.HIGH if delta >= LARGE_TEMPERATURE_SWING else Severity.MEDIUM,
            description=description,
            previous_label=format_temperature(previous.temperature),
            new_label=format_temperature(current.temperature),
            affects_outdoor=current.temperature > 35 or current.temperature < 0,
            window=window,
        )

    return None
