"""
Severe Weather Alert Generator
==============================

Evaluates the current reading against four independent alert rules. Several
alerts may fire for the same reading (e.g. a storm in high wind).

Author: Weather Disruption Engine Team
"""

import logging
from datetime import datetime
from typing import List

from .models import AlertKind, Severity, TimeWindow, WeatherAlert, DEFAULT_CHANGE_WINDOW
from ..weather_data.data_models import WeatherReading


logger = logging.getLogger(__name__)

EXTREME_HEAT_ALERT_C = 38
EXTREME_COLD_ALERT_C = -10
HIGH_WIND_ALERT_MS = 20

STORM_RECOMMENDATIONS = (
    "Seek shelter indoors immediately",
    "Avoid open areas and tall structures",
    "Wait for the storm to pass before outdoor activities",
)
HEAT_RECOMMENDATIONS = (
    "Stay hydrated - drink plenty of water",
    "Avoid prolonged outdoor activities",
    "Seek air-conditioned spaces",
    "Wear light, breathable clothing",
)
COLD_RECOMMENDATIONS = (
    "Wear multiple warm layers",
    "Limit time outdoors",
    "Watch for signs of frostbite",
    "Seek heated indoor spaces",
)
WIND_RECOMMENDATIONS = (
    "Secure loose items",
    "Be cautious near tall buildings",
    "Avoid elevated viewpoints",
)


def _alert_id(now: datetime, suffix: str) -> str:
    return f"alert-{int(now.timestamp() * 1000)}-{suffix}"


def generate_alerts(weather: WeatherReading, location_label: str = None,
                    now: datetime = None) -> List[WeatherAlert]:
    """
    Generate weather alerts for severe conditions

    Args:
        weather (WeatherReading): Current reading
        location_label (str): Label for the affected area
        now (datetime): Alert time (default: datetime.now())

    Returns:
        List[WeatherAlert]: Zero or more alerts, in storm/heat/cold/wind order
    """
    now = now or datetime.now()
    window = TimeWindow(start=now, end=now + DEFAULT_CHANGE_WINDOW)
    areas = (location_label or "Current location",)
    condition = (weather.condition or "").lower()
    temp = weather.temperature
    alerts: List[WeatherAlert] = []

    if "thunderstorm" in condition:
        alerts.append(WeatherAlert(
            id=_alert_id(now, "storm"),
            kind=AlertKind.STORM,
            severity=Severity.CRITICAL,
            title="⛈️ Thunderstorm Warning",
            description=f"Thunderstorm conditions detected: {weather.description}",
            window=window,
            affected_areas=areas,
            recommendations=STORM_RECOMMENDATIONS,
        ))

    if temp > EXTREME_HEAT_ALERT_C:
        alerts.append(WeatherAlert(
            id=_alert_id(now, "heat"),
            kind=AlertKind.EXTREME_HEAT,
            severity=Severity.HIGH,
            title="🌡️ Extreme Heat Warning",
            description=f"Temperature is {round(temp)}°C - extremely hot conditions",
            window=window,
            affected_areas=areas,
            recommendations=HEAT_RECOMMENDATIONS,
        ))

    if temp < EXTREME_COLD_ALERT_C:
        alerts.append(WeatherAlert(
            id=_alert_id(now, "cold"),
            kind=AlertKind.EXTREME_COLD,
            severity=Severity.HIGH,
            title="❄️ Extreme Cold Warning",
            description=f"Temperature is {round(temp)}°C - dangerously cold",
            window=window,
            affected_areas=areas,
            recommendations=COLD_RECOMMENDATIONS,
        ))

    if weather.wind_speed > HIGH_WIND_ALERT_MS:
        alerts.append(WeatherAlert(
            id=_alert_id(now, "wind"),
            kind=AlertKind.WIND,
            severity=Severity.MEDIUM,
            title="💨 High Wind Advisory",
            description=f"Wind speeds of {round(weather.wind_speed)} m/s detected",
            window=window,
            affected_areas=areas,
            recommendations=WIND_RECOMMENDATIONS,
        ))

    if alerts:
        logger.debug(f"Generated {len(alerts)} alert(s) for {areas[0]}")

    return alerts
