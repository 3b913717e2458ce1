"""
Data Validation and Processing Utilities
=======================================

Small validation and conversion helpers shared across the engine.

Functions:
    validate_coordinates: Check if latitude/longitude are valid
    round_coordinate: Round a coordinate for cache grouping
    to_date: Normalize a date/datetime/ISO string to a date
    format_temperature: Render a temperature as a whole-degree label

Author: Weather Disruption Engine Team
"""

import logging
from typing import Optional, Union
from datetime import datetime, date


# Module logger
logger = logging.getLogger(__name__)

# Constants for geographic validation
MAX_LATITUDE = 90.0
MIN_LATITUDE = -90.0
MAX_LONGITUDE = 180.0
MIN_LONGITUDE = -180.0


def validate_coordinates(latitude: float, longitude: float) -> bool:
    """
    Validate if latitude and longitude coordinates are within valid ranges

    Args:
        latitude (float): Latitude coordinate
        longitude (float): Longitude coordinate

    Returns:
        bool: True if coordinates are valid, False otherwise

    Examples:
        >>> validate_coordinates(35.6762, 139.6503)  # Tokyo
        True
        >>> validate_coordinates(91.0, 181.0)  # Invalid
        False
    """
    try:
        lat = float(latitude)
        lon = float(longitude)

        if not (MIN_LATITUDE <= lat <= MAX_LATITUDE):
            return False

        if not (MIN_LONGITUDE <= lon <= MAX_LONGITUDE):
            return False

        return True

    except (ValueError, TypeError):
        return False


def round_coordinate(value: float, places: int = 2) -> float:
    """Round a coordinate so nearby requests share a cache entry"""
    return round(float(value), places)


def to_date(value: Union[datetime, date, str]) -> Optional[date]:
    """
    Normalize a date-like value to a date

    Args:
        value: datetime, date, or ISO-8601 string

    Returns:
        date: The calendar day, None if the value cannot be parsed
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.replace('Z', '+00:00')).date()
        except ValueError:
            logger.warning(f"Could not parse date value: {value!r}")
            return None
    return None


def format_temperature(value: float) -> str:
    """Render a temperature as a whole-degree Celsius label"""
    return f"{round(value)}°C"
