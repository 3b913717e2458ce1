"""
Activity Dependency Classifier
==============================

Static lookup from activity category to how exposed the activity is to the
weather. Unknown categories are treated as indoor-safe (low dependency).

Author: Weather Disruption Engine Team
"""

from typing import Union

from .models import ActivityCategory, OutdoorDependency, ScheduledActivity


C = ActivityCategory

OUTDOOR_ACTIVITIES = frozenset({
    C.PARK, C.GARDEN, C.NATURE, C.VIEWPOINT,
    C.WALKING_TOUR, C.ADVENTURE, C.PHOTO_SPOT, C.MARKET,
})

PARTIALLY_OUTDOOR_ACTIVITIES = frozenset({
    C.SHRINE, C.TEMPLE, C.LANDMARK, C.NEIGHBORHOOD, C.FOOD_TOUR,
})

INDOOR_ACTIVITIES = frozenset({
    C.MUSEUM, C.ENTERTAINMENT, C.SHOPPING, C.CULTURAL_EXPERIENCE,
    C.RELAXATION, C.FAMILY_ACTIVITY, C.NIGHTLIFE,
})


def normalize_category(category: Union[ActivityCategory, str, None]):
    """Return the ActivityCategory for a value, or None if it is not a known category"""
    if isinstance(category, ActivityCategory):
        return category
    if category is None:
        return None
    try:
        return ActivityCategory(str(category).strip().lower())
    except ValueError:
        return None


def get_outdoor_dependency(category) -> OutdoorDependency:
    """Outdoor dependency level for a category; unknown categories are LOW"""
    cat = normalize_category(category)
    if cat in OUTDOOR_ACTIVITIES:
        return OutdoorDependency.HIGH
    if cat in PARTIALLY_OUTDOOR_ACTIVITIES:
        return OutdoorDependency.MEDIUM
    return OutdoorDependency.LOW


def is_outdoor_activity(category) -> bool:
    return normalize_category(category) in OUTDOOR_ACTIVITIES


def is_partially_outdoor_activity(category) -> bool:
    return normalize_category(category) in PARTIALLY_OUTDOOR_ACTIVITIES


def is_indoor_activity(category) -> bool:
    return normalize_category(category) in INDOOR_ACTIVITIES


def resolve_is_outdoor(activity: ScheduledActivity) -> bool:
    """
    Whether an activity is weather-exposed

    An explicit override on the activity wins; otherwise any high or medium
    dependency category counts as outdoor.
    """
    if activity.is_outdoor is not None:
        return activity.is_outdoor
    return get_outdoor_dependency(activity.category) is not OutdoorDependency.LOW
