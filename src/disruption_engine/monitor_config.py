"""
Monitor Configuration
=====================

Immutable per-session thresholds for the analyzers and the monitor.
Values are validated when the object is built, so a bad interval or
threshold fails at configuration time instead of inside a poll tick.

Author: Weather Disruption Engine Team
"""

from dataclasses import dataclass, field, fields, replace
from typing import Dict, FrozenSet, Iterable, Any

from .models import AlertKind
from ..utils.error_handler import ConfigurationError

from config import config as settings


# Provider-style names accepted as aliases for alert kinds
_ALERT_ALIASES = {
    "thunderstorm": AlertKind.STORM,
}

ALL_ALERT_KINDS: FrozenSet[AlertKind] = frozenset(AlertKind)


def _parse_alert_kinds(values: Iterable) -> FrozenSet[AlertKind]:
    kinds = set()
    for value in values:
        if isinstance(value, AlertKind):
            kinds.add(value)
            continue
        key = str(value).strip().lower()
        if key in _ALERT_ALIASES:
            kinds.add(_ALERT_ALIASES[key])
            continue
        try:
            kinds.add(AlertKind(key))
        except ValueError:
            raise ConfigurationError(f"Unknown alert type: {value!r}") from None
    return frozenset(kinds)


@dataclass(frozen=True)
class MonitorConfig:
    """
    Monitor thresholds

    Attributes:
        check_interval_minutes (float): Poll cadence, must be positive
        rain_probability_threshold (float): Percent (0-100) above which rain makes conditions poor
        temperature_change_threshold (float): Degrees Celsius between polls that counts as a change
        wind_speed_threshold (float): m/s above which wind degrades viability
        severe_alert_types (frozenset): Alert kinds that are stored and dispatched
        enable_auto_reshuffle (bool): Whether change triggers are dispatched to subscribers
        forecast_refresh_hours (float): Minimum hours between forecast refreshes
        peak_temperature_hour (int): Hour the hourly estimate peaks at
        assume_good_when_unknown (bool): Answer for outdoor checks when no forecast exists
    """
    check_interval_minutes: float = 30
    rain_probability_threshold: float = 70
    temperature_change_threshold: float = 10
    wind_speed_threshold: float = 15
    severe_alert_types: FrozenSet[AlertKind] = field(default=ALL_ALERT_KINDS)
    enable_auto_reshuffle: bool = True
    forecast_refresh_hours: float = 3
    peak_temperature_hour: int = 14
    assume_good_when_unknown: bool = True

    def __post_init__(self):
        # Normalize alert kinds given as strings or plain lists
        object.__setattr__(self, "severe_alert_types", _parse_alert_kinds(self.severe_alert_types))
        self.validate()

    def validate(self) -> None:
        """Raise ConfigurationError if any value is out of range"""
        try:
            self._check_ranges()
        except TypeError as e:
            raise ConfigurationError(f"Invalid config value type: {e}") from e

    def _check_ranges(self) -> None:
        if not isinstance(self.check_interval_minutes, (int, float)) or self.check_interval_minutes <= 0:
            raise ConfigurationError(
                f"check_interval_minutes must be positive, got {self.check_interval_minutes!r}"
            )
        if not 0 <= self.rain_probability_threshold <= 100:
            raise ConfigurationError(
                f"rain_probability_threshold must be between 0 and 100, got {self.rain_probability_threshold!r}"
            )
        if self.temperature_change_threshold <= 0:
            raise ConfigurationError(
                f"temperature_change_threshold must be positive, got {self.temperature_change_threshold!r}"
            )
        if self.wind_speed_threshold <= 0:
            raise ConfigurationError(
                f"wind_speed_threshold must be positive, got {self.wind_speed_threshold!r}"
            )
        if self.forecast_refresh_hours <= 0:
            raise ConfigurationError(
                f"forecast_refresh_hours must be positive, got {self.forecast_refresh_hours!r}"
            )
        if not 0 <= self.peak_temperature_hour <= 23:
            raise ConfigurationError(
                f"peak_temperature_hour must be between 0 and 23, got {self.peak_temperature_hour!r}"
            )

    @property
    def check_interval_seconds(self) -> float:
        return self.check_interval_minutes * 60

    def merged(self, changes: Dict[str, Any]) -> "MonitorConfig":
        """
        Return a new config with `changes` applied

        Raises:
            ConfigurationError: On unknown keys or invalid values
        """
        known = {f.name for f in fields(self)}
        unknown = set(changes) - known
        if unknown:
            raise ConfigurationError(f"Unknown config keys: {', '.join(sorted(unknown))}")
        try:
            return replace(self, **changes)
        except TypeError as e:
            raise ConfigurationError(str(e)) from e

    @classmethod
    def from_settings(cls, app_settings=None, **overrides) -> "MonitorConfig":
        """Build a config from application settings, then apply overrides"""
        s = app_settings or settings
        base = cls(
            check_interval_minutes=s.WEATHER_CHECK_INTERVAL_MINUTES,
            rain_probability_threshold=s.RAIN_PROBABILITY_THRESHOLD,
            temperature_change_threshold=s.TEMPERATURE_CHANGE_THRESHOLD,
            wind_speed_threshold=s.WIND_SPEED_THRESHOLD,
            enable_auto_reshuffle=s.ENABLE_AUTO_RESHUFFLE,
            forecast_refresh_hours=s.FORECAST_REFRESH_HOURS,
            peak_temperature_hour=s.PEAK_TEMPERATURE_HOUR,
            assume_good_when_unknown=s.ASSUME_GOOD_WHEN_UNKNOWN,
        )
        return base.merged(overrides) if overrides else base

    def to_dict(self) -> Dict:
        return {
            "check_interval_minutes": self.check_interval_minutes,
            "rain_probability_threshold": self.rain_probability_threshold,
            "temperature_change_threshold": self.temperature_change_threshold,
            "wind_speed_threshold": self.wind_speed_threshold,
            "severe_alert_types": sorted(k.value for k in self.severe_alert_types),
            "enable_auto_reshuffle": self.enable_auto_reshuffle,
            "forecast_refresh_hours": self.forecast_refresh_hours,
            "peak_temperature_hour": self.peak_temperature_hour,
            "assume_good_when_unknown": self.assume_good_when_unknown,
        }


DEFAULT_MONITOR_CONFIG = MonitorConfig()
