"""
Schedule Conflict Analyzer
==========================

Flags scheduled activities that do not fit the day's weather and suggests a
remediation for each. Conflicts are only produced when the day is degraded
(poor or impossible); on good or fair days the result is always empty.

Suggested actions:

| Overall      | High dependency | Partial dependency |
|--------------|-----------------|--------------------|
| impossible   | cancel          | swap_indoor        |
| poor         | swap_indoor     | add_preparation    |

Author: Weather Disruption Engine Team
"""

import logging
from typing import Dict, Iterable, List, Sequence, Tuple

from .models import (
    ActivityCategory, OutdoorDependency, ScheduledActivity, SuggestedAction,
    ViabilityLevel, WeatherConflict,
)
from .activity_classifier import get_outdoor_dependency, normalize_category, resolve_is_outdoor
from .monitor_config import MonitorConfig, DEFAULT_MONITOR_CONFIG
from .viability_analyzer import analyze_outdoor_viability
from ..weather_data.data_models import WeatherReading


logger = logging.getLogger(__name__)

# Loose outdoor -> indoor pairings used for swap suggestions
SWAP_PAIRS: Dict[ActivityCategory, ActivityCategory] = {
    ActivityCategory.PARK: ActivityCategory.MUSEUM,
    ActivityCategory.GARDEN: ActivityCategory.CULTURAL_EXPERIENCE,
    ActivityCategory.VIEWPOINT: ActivityCategory.ENTERTAINMENT,
    ActivityCategory.MARKET: ActivityCategory.SHOPPING,
}


def _choose_action(overall: ViabilityLevel, dependency: OutdoorDependency) -> SuggestedAction:
    high = dependency is OutdoorDependency.HIGH
    if overall is ViabilityLevel.IMPOSSIBLE:
        return SuggestedAction.CANCEL if high else SuggestedAction.SWAP_INDOOR
    return SuggestedAction.SWAP_INDOOR if high else SuggestedAction.ADD_PREPARATION


def analyze_activity_conflicts(activities: Iterable[ScheduledActivity],
                               forecast: WeatherReading,
                               config: MonitorConfig = DEFAULT_MONITOR_CONFIG) -> List[WeatherConflict]:
    """
    Analyze scheduled activities against the day's forecast

    Args:
        activities (Iterable[ScheduledActivity]): The day's schedule
        forecast (WeatherReading): Forecast for that day
        config (MonitorConfig): Thresholds

    Returns:
        List[WeatherConflict]: One conflict per weather-exposed activity, in schedule order
    """
    viability = analyze_outdoor_viability(forecast, config)
    if not viability.level.is_degraded:
        return []

    conflicts: List[WeatherConflict] = []
    for activity in activities:
        if not resolve_is_outdoor(activity):
            continue

        dependency = get_outdoor_dependency(activity.category)
        if dependency is OutdoorDependency.LOW:
            # Explicitly flagged outdoor but uncategorized: treat as partial
            dependency = OutdoorDependency.MEDIUM

        conflicts.append(WeatherConflict(
            slot_id=activity.slot_id,
            activity_name=activity.name,
            scheduled_time=activity.start,
            condition_label=forecast.description,
            viability_level=viability.level,
            reason=viability.reason,
            recommendations=viability.recommendations,
            suggested_action=_choose_action(viability.level, dependency),
        ))

    logger.debug(f"{len(conflicts)} conflict(s) at {viability.level.value} viability")
    return conflicts


def suggest_swaps(outdoor: Sequence[ScheduledActivity],
                  indoor: Sequence[ScheduledActivity],
                  level: ViabilityLevel) -> List[Tuple[ScheduledActivity, ScheduledActivity]]:
    """
    Pair outdoor activities with loosely matching indoor alternatives

    Only suggested when the weather is poor or impossible. Each indoor
    activity is offered at most once.

    Returns:
        List of (outdoor, indoor) pairs
    """
    if not level.is_degraded:
        return []

    swaps = []
    used = set()
    for out_activity in outdoor:
        wanted = SWAP_PAIRS.get(normalize_category(out_activity.category))
        if wanted is None:
            continue
        for in_activity in indoor:
            if in_activity.slot_id in used:
                continue
            if normalize_category(in_activity.category) is wanted:
                swaps.append((out_activity, in_activity))
                used.add(in_activity.slot_id)
                break
    return swaps
