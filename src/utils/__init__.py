"""
Utilities Module
===============

Common helpers used across all modules:
- Caching with TTL and LRU eviction
- Error handling and the engine exception hierarchy
- Coordinate, date and temperature helpers

Classes:
    CacheManager: Thread-safe in-memory cache
    ErrorHandler: Standardized error reporting and statistics

Functions:
    validate_coordinates(): Check if latitude/longitude are valid
    round_coordinate(): Round a coordinate for cache grouping
    to_date(): Normalize date-like values
    format_temperature(): Whole-degree temperature label
"""

# Version and module info
__version__ = "1.0.0"
__module_name__ = "utils"

from .cache_manager import CacheManager
from .error_handler import (
    ErrorHandler,
    ErrorCategory,
    ErrorSeverity,
    ErrorContext,
    ErrorReport,
    WeatherEngineError,
    ProviderUnavailableError,
    StaleForecastError,
    ConfigurationError,
)
from .data_utils import (
    validate_coordinates,
    round_coordinate,
    to_date,
    format_temperature,
)

# Define public API
__all__ = [
    # Core utility classes
    "CacheManager",
    "ErrorHandler",
    "ErrorCategory",
    "ErrorSeverity",
    "ErrorContext",
    "ErrorReport",

    # Exceptions
    "WeatherEngineError",
    "ProviderUnavailableError",
    "StaleForecastError",
    "ConfigurationError",

    # Data helpers
    "validate_coordinates",
    "round_coordinate",
    "to_date",
    "format_temperature",
]
