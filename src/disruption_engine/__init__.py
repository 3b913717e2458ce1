"""
Disruption Engine Module
========================

Rule-based analysis of weather against a scheduled itinerary:
- Activity dependency classification
- Outdoor viability analysis
- Weather change detection and severe weather alerts
- Schedule conflict analysis and the morning sweep report
- Trigger events for the downstream reshuffling engine

Every function here is pure; state lives in the monitor module.

Author: Weather Disruption Engine Team
"""

# Version info
__version__ = "1.0.0"
__module_name__ = "disruption_engine"

from .models import (
    ActivityCategory,
    OutdoorDependency,
    ViabilityLevel,
    Severity,
    ChangeKind,
    AlertKind,
    SuggestedAction,
    TimeWindow,
    OutdoorViability,
    WeatherChange,
    WeatherAlert,
    ScheduledActivity,
    WeatherConflict,
    HourlyEstimate,
    MorningSweepResult,
    TriggerEvent,
    MonitorLocation,
    MonitorState,
    OutdoorCheck,
)
from .monitor_config import MonitorConfig, DEFAULT_MONITOR_CONFIG
from .activity_classifier import (
    get_outdoor_dependency,
    is_outdoor_activity,
    is_partially_outdoor_activity,
    is_indoor_activity,
    resolve_is_outdoor,
)
from .viability_analyzer import analyze_outdoor_viability, describe_viability, viability_emoji
from .change_detector import detect_weather_changes
from .alert_generator import generate_alerts
from .conflict_analyzer import analyze_activity_conflicts, suggest_swaps
from .morning_sweep import build_morning_sweep, build_hourly_breakdown
from .trigger_builder import create_weather_trigger, find_affected_activities, map_condition

# Define public API
__all__ = [
    # Models
    "ActivityCategory",
    "OutdoorDependency",
    "ViabilityLevel",
    "Severity",
    "ChangeKind",
    "AlertKind",
    "SuggestedAction",
    "TimeWindow",
    "OutdoorViability",
    "WeatherChange",
    "WeatherAlert",
    "ScheduledActivity",
    "WeatherConflict",
    "HourlyEstimate",
    "MorningSweepResult",
    "TriggerEvent",
    "MonitorLocation",
    "MonitorState",
    "OutdoorCheck",

    # Configuration
    "MonitorConfig",
    "DEFAULT_MONITOR_CONFIG",

    # Analysis
    "get_outdoor_dependency",
    "is_outdoor_activity",
    "is_partially_outdoor_activity",
    "is_indoor_activity",
    "resolve_is_outdoor",
    "analyze_outdoor_viability",
    "describe_viability",
    "viability_emoji",
    "detect_weather_changes",
    "generate_alerts",
    "analyze_activity_conflicts",
    "suggest_swaps",
    "build_morning_sweep",
    "build_hourly_breakdown",
    "create_weather_trigger",
    "find_affected_activities",
    "map_condition",
]


def get_disruption_engine_info():
    """Return information about disruption engine capabilities"""
    return {
        "module": __module_name__,
        "version": __version__,
        "viability_levels": [level.value for level in ViabilityLevel],
        "alert_types": [kind.value for kind in AlertKind],
        "suggested_actions": [action.value for action in SuggestedAction],
    }
