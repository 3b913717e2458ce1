"""
Morning Sweep
=============

Composes the viability analyzer, the conflict analyzer and the alert history
into one daily report.

The hourly breakdown is a display estimate: temperatures are interpolated
between the day's min and max along a triangle peaking at the configured
hour. It is not measured hourly data.

Author: Weather Disruption Engine Team
"""

import logging
from datetime import date, datetime
from typing import Iterable, List

from .models import (
    HourlyEstimate, MorningSweepResult, ScheduledActivity, SuggestedAction,
    ViabilityLevel, WeatherAlert,
)
from .conflict_analyzer import analyze_activity_conflicts
from .monitor_config import MonitorConfig, DEFAULT_MONITOR_CONFIG
from .viability_analyzer import analyze_outdoor_viability, describe_viability, viability_emoji
from ..weather_data.data_models import DailyForecast


logger = logging.getLogger(__name__)

FIRST_HOUR = 8
LAST_HOUR = 22
# Hours on each side of the peak over which the estimate falls to the minimum
FALLOFF_HOURS = 8


def build_hourly_breakdown(forecast: DailyForecast, viability: ViabilityLevel,
                           peak_hour: int = 14) -> List[HourlyEstimate]:
    """
    Estimate hourly temperatures for 08:00-22:00 from the daily range

    Args:
        forecast (DailyForecast): Day forecast with temp_min/temp_max
        viability (ViabilityLevel): Day viability, repeated on every hour
        peak_hour (int): Hour of the estimated maximum

    Returns:
        List[HourlyEstimate]: One estimate per hour, flagged is_estimate
    """
    spread = forecast.temp_max - forecast.temp_min
    breakdown = []
    for hour in range(FIRST_HOUR, LAST_HOUR + 1):
        weight = max(0.0, 1 - abs(hour - peak_hour) / FALLOFF_HOURS)
        breakdown.append(HourlyEstimate(
            hour=hour,
            viability=viability,
            condition=forecast.condition,
            temperature=round(forecast.temp_min + spread * weight),
        ))
    return breakdown


def build_morning_sweep(activities: Iterable[ScheduledActivity],
                        forecast: DailyForecast,
                        alerts: Iterable[WeatherAlert],
                        location_label: str,
                        config: MonitorConfig = DEFAULT_MONITOR_CONFIG,
                        sweep_time: datetime = None) -> MorningSweepResult:
    """
    Build the morning sweep report for the forecast's day

    Args:
        activities: The schedule; activities on other days are ignored
        forecast (DailyForecast): Forecast for the day being swept
        alerts: Alert history; only alerts starting on that day are kept
        location_label (str): City label for the report
        config (MonitorConfig): Thresholds
        sweep_time (datetime): Report time (default: datetime.now())

    Returns:
        MorningSweepResult: The daily report
    """
    day: date = forecast.date
    viability = analyze_outdoor_viability(forecast, config)

    todays = [a for a in activities if a.start.date() == day]
    conflicts = analyze_activity_conflicts(todays, forecast, config)

    recommendations = list(viability.recommendations)
    swaps = sum(1 for c in conflicts if c.suggested_action is SuggestedAction.SWAP_INDOOR)
    if swaps:
        recommendations.append(
            f"Consider swapping {swaps} outdoor activities for indoor alternatives"
        )

    day_alerts = [a for a in alerts if a.window.start.date() == day]

    result = MorningSweepResult(
        sweep_time=sweep_time or datetime.now(),
        location_label=location_label,
        day=day,
        overall_viability=viability.level,
        conflicts=conflicts,
        alerts=day_alerts,
        hourly_breakdown=build_hourly_breakdown(forecast, viability.level, config.peak_temperature_hour),
        recommendations=recommendations,
        summary=f"{viability_emoji(viability.level)} {describe_viability(viability.level)}",
    )

    logger.info(
        f"Morning sweep complete: {viability.level.value} conditions, {len(conflicts)} conflicts"
    )
    return result
