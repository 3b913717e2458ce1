"""
Data Models for the Disruption Engine
=====================================

Value types produced and consumed by the analyzers, the trigger builder and
the monitor. Enumerated tags are string-valued Enums so they serialize
directly; every record exposes to_dict() for JSON-friendly output.

Author: Weather Disruption Engine Team
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Dict, List, Optional, Union

from ..weather_data.data_models import WeatherSnapshot, DailyForecast, GeoLocation


DEFAULT_CHANGE_WINDOW = timedelta(hours=4)


class ActivityCategory(Enum):
    """Itinerary activity categories"""
    PARK = "park"
    GARDEN = "garden"
    NATURE = "nature"
    VIEWPOINT = "viewpoint"
    WALKING_TOUR = "walking-tour"
    ADVENTURE = "adventure"
    PHOTO_SPOT = "photo-spot"
    MARKET = "market"
    SHRINE = "shrine"
    TEMPLE = "temple"
    LANDMARK = "landmark"
    NEIGHBORHOOD = "neighborhood"
    FOOD_TOUR = "food-tour"
    MUSEUM = "museum"
    ENTERTAINMENT = "entertainment"
    SHOPPING = "shopping"
    CULTURAL_EXPERIENCE = "cultural-experience"
    RELAXATION = "relaxation"
    FAMILY_ACTIVITY = "family-activity"
    NIGHTLIFE = "nightlife"
    RESTAURANT = "restaurant"
    TRANSPORT = "transport"
    ACCOMMODATION = "accommodation"


class OutdoorDependency(Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ViabilityLevel(Enum):
    """Outdoor viability, ordered from best to worst"""
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    IMPOSSIBLE = "impossible"

    @property
    def rank(self) -> int:
        return _VIABILITY_ORDER.index(self)

    def worse(self) -> "ViabilityLevel":
        """One step worse, capped at POOR (wind never makes weather impossible)"""
        if self is ViabilityLevel.GOOD:
            return ViabilityLevel.FAIR
        if self is ViabilityLevel.FAIR:
            return ViabilityLevel.POOR
        return self

    @property
    def is_degraded(self) -> bool:
        return self in (ViabilityLevel.POOR, ViabilityLevel.IMPOSSIBLE)


_VIABILITY_ORDER = [ViabilityLevel.GOOD, ViabilityLevel.FAIR,
                    ViabilityLevel.POOR, ViabilityLevel.IMPOSSIBLE]


class Severity(Enum):
    """Trigger severity shared by changes, alerts and trigger events"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ChangeKind(Enum):
    PRECIPITATION = "precipitation"
    TEMPERATURE = "temperature"
    SEVERE = "severe"
    IMPROVEMENT = "improvement"


class AlertKind(Enum):
    STORM = "storm"
    EXTREME_HEAT = "extreme_heat"
    EXTREME_COLD = "extreme_cold"
    HEAVY_RAIN = "heavy_rain"
    SNOW = "snow"
    FOG = "fog"
    WIND = "wind"


class SuggestedAction(Enum):
    RESCHEDULE = "reschedule"
    SWAP_INDOOR = "swap_indoor"
    ADD_PREPARATION = "add_preparation"
    CANCEL = "cancel"


@dataclass(frozen=True)
class TimeWindow:
    """Half-open-ended time range; end may be unknown"""
    start: datetime
    end: Optional[datetime] = None

    def resolved_end(self, default_length: timedelta = DEFAULT_CHANGE_WINDOW) -> datetime:
        return self.end if self.end is not None else self.start + default_length

    def contains(self, moment: datetime, default_length: timedelta = DEFAULT_CHANGE_WINDOW) -> bool:
        return self.start <= moment <= self.resolved_end(default_length)

    def to_dict(self) -> Dict:
        return {
            "start": self.start.isoformat(),
            "end": self.end.isoformat() if self.end else None,
        }


@dataclass(frozen=True)
class OutdoorViability:
    """
    Verdict on how suitable the weather is for outdoor activity

    Attributes:
        level (ViabilityLevel): good, fair, poor or impossible
        reason (str): Message of the highest-severity rule that fired
        recommendations (tuple): Accumulated advisories, in rule order
    """
    level: ViabilityLevel
    reason: str
    recommendations: tuple = ()

    def to_dict(self) -> Dict:
        return {
            "viability": self.level.value,
            "reason": self.reason,
            "recommendations": list(self.recommendations),
        }


@dataclass(frozen=True)
class WeatherChange:
    """
    A meaningful difference between two consecutive weather readings

    Attributes:
        kind (ChangeKind): precipitation, temperature, severe or improvement
        severity (Severity): How strongly the change should be acted on
        description (str): Human-readable summary
        previous_label (str): Description (or temperature label) before the change
        new_label (str): Description (or temperature label) after the change
        affects_outdoor (bool): Whether outdoor activities are impacted
        window (TimeWindow): When the change applies
    """
    kind: ChangeKind
    severity: Severity
    description: str
    previous_label: str
    new_label: str
    affects_outdoor: bool
    window: TimeWindow

    def to_dict(self) -> Dict:
        return {
            "type": self.kind.value,
            "severity": self.severity.value,
            "description": self.description,
            "previous_condition": self.previous_label,
            "new_condition": self.new_label,
            "affects_outdoor": self.affects_outdoor,
            "window": self.window.to_dict(),
        }


@dataclass(frozen=True)
class WeatherAlert:
    """
    Severe weather alert, kept in monitor state until dismissed

    Attributes:
        id (str): Unique alert id
        kind (AlertKind): Alert type
        severity (Severity): Alert severity
        title (str): Short headline
        description (str): Details including the measured value
        window (TimeWindow): When the alert applies
        affected_areas (tuple): Location labels
        recommendations (tuple): Fixed advice for the alert type
    """
    id: str
    kind: AlertKind
    severity: Severity
    title: str
    description: str
    window: TimeWindow
    affected_areas: tuple = ()
    recommendations: tuple = ()

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "type": self.kind.value,
            "severity": self.severity.value,
            "title": self.title,
            "description": self.description,
            "window": self.window.to_dict(),
            "affected_areas": list(self.affected_areas),
            "recommendations": list(self.recommendations),
        }


@dataclass(frozen=True)
class ScheduledActivity:
    """
    Read-only projection of an itinerary slot

    Attributes:
        slot_id (str): Itinerary slot identifier
        name (str): Activity name
        category (ActivityCategory or str): Activity category; unknown strings are allowed
        start (datetime): Scheduled start
        end (datetime): Scheduled end
        is_outdoor (bool): Explicit override of the category classification
    """
    slot_id: str
    name: str
    category: Union[ActivityCategory, str]
    start: datetime
    end: datetime
    is_outdoor: Optional[bool] = None


@dataclass(frozen=True)
class WeatherConflict:
    """A scheduled activity that is incompatible with the day's weather"""
    slot_id: str
    activity_name: str
    scheduled_time: datetime
    condition_label: str
    viability_level: ViabilityLevel
    reason: str
    recommendations: tuple
    suggested_action: SuggestedAction

    def to_dict(self) -> Dict:
        return {
            "slot_id": self.slot_id,
            "activity_name": self.activity_name,
            "scheduled_time": self.scheduled_time.isoformat(),
            "weather_condition": self.condition_label,
            "viability": self.viability_level.value,
            "reason": self.reason,
            "recommendations": list(self.recommendations),
            "suggested_action": self.suggested_action.value,
        }


@dataclass(frozen=True)
class HourlyEstimate:
    """
    Interpolated hourly figure for display

    These values are derived from the daily min/max, not measured.
    """
    hour: int
    viability: ViabilityLevel
    condition: str
    temperature: int
    is_estimate: bool = True

    def to_dict(self) -> Dict:
        return {
            "hour": self.hour,
            "viability": self.viability.value,
            "condition": self.condition,
            "temperature": self.temperature,
            "is_estimate": self.is_estimate,
        }


@dataclass
class MorningSweepResult:
    """Daily report comparing the schedule against the forecast"""
    sweep_time: datetime
    location_label: str
    day: date
    overall_viability: ViabilityLevel
    conflicts: List[WeatherConflict] = field(default_factory=list)
    alerts: List[WeatherAlert] = field(default_factory=list)
    hourly_breakdown: List[HourlyEstimate] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)
    summary: str = ""

    def to_dict(self) -> Dict:
        return {
            "sweep_time": self.sweep_time.isoformat(),
            "city": self.location_label,
            "day_date": self.day.isoformat(),
            "overall_viability": self.overall_viability.value,
            "summary": self.summary,
            "conflicts": [c.to_dict() for c in self.conflicts],
            "alerts": [a.to_dict() for a in self.alerts],
            "hourly_breakdown": [h.to_dict() for h in self.hourly_breakdown],
            "recommendations": list(self.recommendations),
        }


@dataclass(frozen=True)
class ForecastContext:
    """Forecast block carried inside a trigger event"""
    date: date
    temp_min: float
    temp_max: float
    condition: str
    precipitation_probability: float
    humidity: float
    wind_speed: float
    sunrise: str = "06:00"
    sunset: str = "18:00"

    def to_dict(self) -> Dict:
        return {
            "date": self.date.isoformat(),
            "temperature": {"min": self.temp_min, "max": self.temp_max},
            "condition": self.condition,
            "precipitation_probability": self.precipitation_probability,
            "humidity": self.humidity,
            "wind_speed": self.wind_speed,
            "sunrise": self.sunrise,
            "sunset": self.sunset,
        }


@dataclass(frozen=True)
class WeatherTriggerContext:
    """Normalized weather context handed to the reshuffling engine"""
    previous_condition: str
    new_condition: str
    precipitation_probability: float
    temperature: float
    forecast: ForecastContext

    def to_dict(self) -> Dict:
        return {
            "previous_condition": self.previous_condition,
            "new_condition": self.new_condition,
            "precipitation_probability": self.precipitation_probability,
            "temperature": self.temperature,
            "forecast": self.forecast.to_dict(),
        }


@dataclass(frozen=True)
class TriggerEvent:
    """
    Payload delivered to the downstream reshuffling/strategy engine

    Attributes:
        id (str): Unique event id
        severity (Severity): Copied from the originating change
        detected_at (datetime): When the trigger was built
        weather_context (WeatherTriggerContext): Normalized weather context
        affected_slot_ids (tuple): Outdoor slots overlapping the change window
        type (str): Always "weather_change"
        source (str): Always "weather_service"
    """
    id: str
    severity: Severity
    detected_at: datetime
    weather_context: WeatherTriggerContext
    affected_slot_ids: tuple = ()
    type: str = "weather_change"
    source: str = "weather_service"

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "type": self.type,
            "severity": self.severity.value,
            "detected_at": self.detected_at.isoformat(),
            "source": self.source,
            "context": {"weather_context": self.weather_context.to_dict()},
            "affected_slot_ids": list(self.affected_slot_ids),
        }


@dataclass(frozen=True)
class MonitorLocation:
    city: str
    lat: float
    lon: float
    country: Optional[str] = None

    @classmethod
    def from_geolocation(cls, city: str, country: Optional[str], geo: GeoLocation) -> "MonitorLocation":
        return cls(city=city, country=country or geo.country, lat=geo.lat, lon=geo.lon)

    @property
    def label(self) -> str:
        return f"{self.city}, {self.country}" if self.country else self.city


@dataclass
class MonitorState:
    """
    Aggregate state of one trip's weather monitor

    Only WeatherMonitor methods mutate it; get_state() hands out copies.
    """
    trip_id: str
    location: MonitorLocation
    last_check: datetime
    current_weather: Optional[WeatherSnapshot] = None
    daily_forecast: List[DailyForecast] = field(default_factory=list)
    detected_changes: List[WeatherChange] = field(default_factory=list)
    alerts: List[WeatherAlert] = field(default_factory=list)
    is_monitoring: bool = False
    last_forecast_update: Optional[datetime] = None

    def to_dict(self) -> Dict:
        return {
            "trip_id": self.trip_id,
            "location": {
                "city": self.location.city,
                "country": self.location.country,
                "lat": self.location.lat,
                "lon": self.location.lon,
            },
            "last_check": self.last_check.isoformat(),
            "current_weather": self.current_weather.to_dict() if self.current_weather else None,
            "daily_forecast": [f.to_dict() for f in self.daily_forecast],
            "detected_changes": [c.to_dict() for c in self.detected_changes],
            "alerts": [a.to_dict() for a in self.alerts],
            "is_monitoring": self.is_monitoring,
            "last_forecast_update": (
                self.last_forecast_update.isoformat() if self.last_forecast_update else None
            ),
        }


@dataclass(frozen=True)
class OutdoorCheck:
    """Answer to "is this time window good for outdoor activities?" """
    is_good: bool
    reason: str
    recommendation: Optional[str] = None
    data_available: bool = True
