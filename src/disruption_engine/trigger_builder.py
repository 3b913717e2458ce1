"""
Trigger Event Builder
=====================

Turns a detected WeatherChange into the normalized TriggerEvent consumed by
the downstream reshuffling engine. This is the only payload that leaves the
engine for that consumer.

Author: Weather Disruption Engine Team
"""

import random
import string
from datetime import datetime, timedelta
from typing import Iterable, List, Sequence

from .models import (
    ForecastContext, OutdoorDependency, ScheduledActivity, TriggerEvent,
    WeatherChange, WeatherTriggerContext, DEFAULT_CHANGE_WINDOW,
)
from .activity_classifier import get_outdoor_dependency
from ..weather_data.data_models import DailyForecast, WeatherReading


_ID_ALPHABET = string.ascii_lowercase + string.digits

# Range assumed around a point reading when no daily min/max is known
SNAPSHOT_TEMP_SPREAD = 2


def map_condition(condition: str) -> str:
    """Map a provider condition label to the itinerary's weather vocabulary"""
    c = (condition or "").lower()
    if "thunderstorm" in c or "storm" in c:
        return "stormy"
    if "rain" in c or "drizzle" in c:
        return "heavy-rain" if "heavy" in c else "rainy"
    if "snow" in c:
        return "snowy"
    if "fog" in c or "mist" in c:
        return "foggy"
    if "cloud" in c:
        return "cloudy"
    if "clear" in c:
        return "sunny"
    return "sunny"


def find_affected_activities(activities: Iterable[ScheduledActivity], change: WeatherChange,
                             window: timedelta = DEFAULT_CHANGE_WINDOW) -> List[str]:
    """
    Slot ids of weather-exposed activities starting inside the change window

    Args:
        activities: Scheduled activities
        change (WeatherChange): Detected change
        window (timedelta): Window length used when the change has no end

    Returns:
        List[str]: Affected slot ids in schedule order; empty if the change
        does not affect outdoor activities
    """
    if not change.affects_outdoor:
        return []

    start = change.window.start
    end = change.window.resolved_end(window)
    affected = []
    for activity in activities:
        if get_outdoor_dependency(activity.category) is OutdoorDependency.LOW:
            continue
        if start <= activity.start <= end:
            affected.append(activity.slot_id)
    return affected


def _trigger_id(now: datetime) -> str:
    suffix = "".join(random.choices(_ID_ALPHABET, k=7))
    return f"weather-{int(now.timestamp() * 1000)}-{suffix}"


def create_weather_trigger(change: WeatherChange, weather: WeatherReading,
                           affected_slot_ids: Sequence[str] = (),
                           now: datetime = None) -> TriggerEvent:
    """
    Build a trigger event for the reshuffling engine

    Args:
        change (WeatherChange): Detected change
        weather (WeatherReading): Reading that produced the change
        affected_slot_ids (Sequence[str]): Slots overlapping the change window
        now (datetime): Detection time (default: datetime.now())

    Returns:
        TriggerEvent: Normalized payload
    """
    now = now or datetime.now()
    pop_percent = (weather.precipitation_probability or 0.0) * 100

    if isinstance(weather, DailyForecast):
        temp_min, temp_max = weather.temp_min, weather.temp_max
        sunrise = weather.sunrise or "06:00"
        sunset = weather.sunset or "18:00"
    else:
        temp_min = weather.temperature - SNAPSHOT_TEMP_SPREAD
        temp_max = weather.temperature + SNAPSHOT_TEMP_SPREAD
        sunrise, sunset = "06:00", "18:00"

    forecast = ForecastContext(
        date=now.date(),
        temp_min=temp_min,
        temp_max=temp_max,
        condition=map_condition(weather.condition),
        precipitation_probability=pop_percent,
        humidity=weather.humidity,
        wind_speed=weather.wind_speed,
        sunrise=sunrise,
        sunset=sunset,
    )

    return TriggerEvent(
        id=_trigger_id(now),
        severity=change.severity,
        detected_at=now,
        weather_context=WeatherTriggerContext(
            previous_condition=change.previous_label,
            new_condition=change.new_label,
            precipitation_probability=pop_percent,
            temperature=weather.temperature,
            forecast=forecast,
        ),
        affected_slot_ids=tuple(affected_slot_ids),
    )
