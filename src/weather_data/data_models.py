"""
Data Models for Weather Data
============================

Centralized provider-side data models to avoid circular imports.
Contains WeatherSnapshot, DailyForecast and GeoLocation.

Both snapshot kinds expose the same reading attributes (condition,
description, temperature, precipitation_probability, humidity, wind_speed)
so analyzers can accept either one.

Author: Weather Disruption Engine Team
"""

from dataclasses import dataclass
from typing import Optional, Dict, Union
from datetime import date, datetime


@dataclass(frozen=True)
class WeatherSnapshot:
    """
    Current weather conditions reported by the provider

    Attributes:
        timestamp (datetime): When the reading was taken
        condition (str): Main condition label (Clear, Clouds, Rain, Thunderstorm, ...)
        description (str): Human-readable description (e.g. "light rain")
        temperature (float): Temperature in Celsius
        precipitation_probability (float): Probability of precipitation (0-1)
        humidity (float): Relative humidity percentage
        wind_speed (float): Wind speed in m/s
    """
    timestamp: datetime
    condition: str
    description: str
    temperature: float
    precipitation_probability: float = 0.0
    humidity: float = 0.0
    wind_speed: float = 0.0

    def to_dict(self) -> Dict:
        return {
            "timestamp": self.timestamp.isoformat(),
            "condition": self.condition,
            "description": self.description,
            "temperature": self.temperature,
            "precipitation_probability": self.precipitation_probability,
            "humidity": self.humidity,
            "wind_speed": self.wind_speed,
        }


@dataclass(frozen=True)
class DailyForecast:
    """
    One day of the multi-day forecast

    Attributes:
        date (date): Forecast day
        condition (str): Main condition label
        description (str): Human-readable description
        temperature (float): Day temperature in Celsius
        temp_min (float): Minimum temperature in Celsius
        temp_max (float): Maximum temperature in Celsius
        precipitation_probability (float): Probability of precipitation (0-1)
        humidity (float): Relative humidity percentage
        wind_speed (float): Wind speed in m/s
        sunrise (str): Sunrise time (HH:MM format)
        sunset (str): Sunset time (HH:MM format)
    """
    date: date
    condition: str
    description: str
    temperature: float
    temp_min: float
    temp_max: float
    precipitation_probability: float = 0.0
    humidity: float = 0.0
    wind_speed: float = 0.0
    sunrise: Optional[str] = None
    sunset: Optional[str] = None

    def to_dict(self) -> Dict:
        return {
            "date": self.date.isoformat(),
            "condition": self.condition,
            "description": self.description,
            "temperature": self.temperature,
            "temp_min": self.temp_min,
            "temp_max": self.temp_max,
            "precipitation_probability": self.precipitation_probability,
            "humidity": self.humidity,
            "wind_speed": self.wind_speed,
            "sunrise": self.sunrise,
            "sunset": self.sunset,
        }


@dataclass(frozen=True)
class GeoLocation:
    """
    Geocoding result

    Attributes:
        name (str): Resolved place name
        lat (float): Latitude
        lon (float): Longitude
        country (str): ISO country code if known
    """
    name: str
    lat: float
    lon: float
    country: Optional[str] = None


# Anything the analyzers accept as "the weather"
WeatherReading = Union[WeatherSnapshot, DailyForecast]


# Export classes for easy import
__all__ = ['WeatherSnapshot', 'DailyForecast', 'GeoLocation', 'WeatherReading']
