"""
Outdoor Viability Analyzer
==========================

Classifies a weather reading (current snapshot or forecast day) as good,
fair, poor or impossible for outdoor activities.

Rules are applied in order and only ever escalate:
1. Thunderstorm -> impossible; nothing else is evaluated
2. Rain/drizzle -> poor above the rain threshold (or plain "rain"), else fair
3. Snow -> poor
4. Temperature: >35 or <0 -> poor; 30-35 or 0-5 -> at least fair
5. Wind above threshold -> one step worse, reason becomes the wind message

Recommendations accumulate across every rule that matched.

Author: Weather Disruption Engine Team
"""

from typing import List

from .models import OutdoorViability, ViabilityLevel
from .monitor_config import MonitorConfig, DEFAULT_MONITOR_CONFIG
from ..weather_data.data_models import WeatherReading


GOOD_REASON = "Good conditions for outdoor activities"
THUNDERSTORM_REASON = "Thunderstorm - outdoor activities dangerous"
RAIN_REASON = "Rain expected - outdoor activities impacted"
SNOW_REASON = "Snowy conditions - outdoor activities impacted"
HEAT_REASON = "Extreme heat - outdoor activities not recommended"
FREEZING_REASON = "Freezing conditions - dress warmly"
WIND_REASON = "High winds - outdoor activities may be affected"

EXTREME_HEAT_C = 35
WARM_C = 30
FREEZING_C = 0
COLD_C = 5


def is_rainy(condition: str) -> bool:
    return "rain" in condition or "drizzle" in condition


def analyze_outdoor_viability(weather: WeatherReading,
                              config: MonitorConfig = DEFAULT_MONITOR_CONFIG) -> OutdoorViability:
    """
    Analyze outdoor viability based on weather conditions

    Args:
        weather (WeatherReading): Current snapshot or forecast day
        config (MonitorConfig): Thresholds

    Returns:
        OutdoorViability: Level, reason and accumulated recommendations
    """
    recommendations: List[str] = []
    level = ViabilityLevel.GOOD
    reason = GOOD_REASON

    condition = (weather.condition or "").lower()
    temp = weather.temperature
    pop = weather.precipitation_probability or 0.0

    if "thunderstorm" in condition:
        return OutdoorViability(
            level=ViabilityLevel.IMPOSSIBLE,
            reason=THUNDERSTORM_REASON,
            recommendations=("Stay indoors", "Avoid open areas", "Wait for storm to pass"),
        )

    if is_rainy(condition):
        if pop > config.rain_probability_threshold / 100 or condition == "rain":
            level = ViabilityLevel.POOR
            reason = RAIN_REASON
            recommendations += ["Bring umbrella", "Consider indoor alternatives"]
        else:
            level = ViabilityLevel.FAIR
            recommendations.append("Bring umbrella just in case")
    elif "snow" in condition:
        level = ViabilityLevel.POOR
        reason = SNOW_REASON
        recommendations += ["Dress warmly", "Wear appropriate footwear"]

    # Temperature extremes
    if temp > EXTREME_HEAT_C:
        level = ViabilityLevel.POOR
        reason = HEAT_REASON
        recommendations += ["Stay hydrated", "Seek shade", "Consider indoor alternatives"]
    elif temp > WARM_C:
        if level is ViabilityLevel.GOOD:
            level = ViabilityLevel.FAIR
        recommendations += ["Stay hydrated", "Wear sunscreen"]
    elif temp < FREEZING_C:
        level = ViabilityLevel.POOR
        reason = FREEZING_REASON
        recommendations += ["Wear warm layers", "Consider indoor alternatives"]
    elif temp < COLD_C:
        if level is ViabilityLevel.GOOD:
            level = ViabilityLevel.FAIR
        recommendations.append("Wear warm clothing")

    if weather.wind_speed > config.wind_speed_threshold:
        level = level.worse()
        reason = WIND_REASON
        recommendations += ["Secure loose items", "Avoid elevated viewpoints"]

    return OutdoorViability(level=level, reason=reason, recommendations=tuple(recommendations))


def describe_viability(level: ViabilityLevel) -> str:
    """Short description of a viability level for display"""
    return {
        ViabilityLevel.GOOD: "Perfect for outdoor activities",
        ViabilityLevel.FAIR: "Outdoor activities OK with preparation",
        ViabilityLevel.POOR: "Indoor activities recommended",
        ViabilityLevel.IMPOSSIBLE: "Outdoor activities not safe",
    }[level]


def viability_emoji(level: ViabilityLevel) -> str:
    return {
        ViabilityLevel.GOOD: "☀️",
        ViabilityLevel.FAIR: "⛅",
        ViabilityLevel.POOR: "🌧️",
        ViabilityLevel.IMPOSSIBLE: "⛈️",
    }[level]
