"""
Configuration Management for the Weather Disruption Engine
==========================================================

This module handles:
- Loading environment variables from .env file
- Validating monitor thresholds and logging settings
- Providing centralized configuration access
- Setting up default values and error handling

Usage:
    from config import config
    interval = config.WEATHER_CHECK_INTERVAL_MINUTES
    level = config.LOG_LEVEL
"""

import os
import logging
from typing import Optional
from pathlib import Path
from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator


class Config(BaseSettings):
    """
    Centralized configuration class using Pydantic for validation
    Loads settings from environment variables with type checking
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # =============================================================================
    # WEATHER PROVIDER
    # =============================================================================

    WEATHER_API_KEY: Optional[str] = None
    PROVIDER_CACHE_TTL: int = 1800  # 30 minutes, matches provider cache policy
    GEOCODE_CACHE_TTL: int = 2592000  # 30 days

    # =============================================================================
    # CACHE CONFIGURATION
    # =============================================================================

    CACHE_TTL: int = 1800  # Cache time-to-live in seconds
    CACHE_MAX_SIZE: int = 500  # Maximum cache entries
    CACHE_CLEANUP_INTERVAL: int = 60  # Seconds between expired-entry sweeps

    # =============================================================================
    # APPLICATION SETTINGS
    # =============================================================================

    APP_NAME: str = "Weather Disruption Engine"
    APP_VERSION: str = "1.0.0"
    DEBUG_MODE: bool = False
    LOG_LEVEL: str = "INFO"

    @field_validator('LOG_LEVEL')
    @classmethod
    def validate_log_level(cls, v):
        """Ensure log level is one the logging module knows"""
        if v.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return v.upper()

    # =============================================================================
    # MONITOR DEFAULTS
    # =============================================================================

    WEATHER_CHECK_INTERVAL_MINUTES: float = 30
    RAIN_PROBABILITY_THRESHOLD: float = 70  # percent (0-100)
    TEMPERATURE_CHANGE_THRESHOLD: float = 10  # degrees Celsius
    WIND_SPEED_THRESHOLD: float = 15  # m/s
    FORECAST_REFRESH_HOURS: float = 3
    PEAK_TEMPERATURE_HOUR: int = 14
    ENABLE_AUTO_RESHUFFLE: bool = True
    ASSUME_GOOD_WHEN_UNKNOWN: bool = True

    @field_validator('WEATHER_CHECK_INTERVAL_MINUTES', 'TEMPERATURE_CHANGE_THRESHOLD',
                     'WIND_SPEED_THRESHOLD', 'FORECAST_REFRESH_HOURS')
    @classmethod
    def validate_positive(cls, v):
        """Intervals and thresholds must be strictly positive"""
        if v <= 0:
            raise ValueError(f"Value must be positive, got {v}")
        return v

    @field_validator('RAIN_PROBABILITY_THRESHOLD')
    @classmethod
    def validate_probability(cls, v):
        """Rain threshold is a percentage"""
        if not 0 <= v <= 100:
            raise ValueError(f"Rain probability threshold must be between 0 and 100, got {v}")
        return v

    @field_validator('PEAK_TEMPERATURE_HOUR')
    @classmethod
    def validate_hour(cls, v):
        if not 0 <= v <= 23:
            raise ValueError(f"Peak temperature hour must be between 0 and 23, got {v}")
        return v

    # =============================================================================
    # FILE PATHS
    # =============================================================================

    LOG_FILE_PATH: str = "./logs/app.log"
    ERROR_LOG_PATH: str = "./logs/errors.log"

    # =============================================================================
    # CONFIGURATION SETUP
    # =============================================================================

    def create_directories(self) -> None:
        """Create necessary directories if they don't exist"""
        directories = [
            os.path.dirname(self.LOG_FILE_PATH),
            os.path.dirname(self.ERROR_LOG_PATH)
        ]

        for directory in directories:
            if directory:
                Path(directory).mkdir(parents=True, exist_ok=True)

    def setup_logging(self) -> None:
        """Configure application logging"""
        log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

        logging.basicConfig(
            level=getattr(logging, self.LOG_LEVEL.upper()),
            format=log_format,
            handlers=[
                logging.FileHandler(self.LOG_FILE_PATH),
                logging.StreamHandler()  # Console output
            ]
        )

        # Create error-specific logger
        error_handler = logging.FileHandler(self.ERROR_LOG_PATH)
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(logging.Formatter(log_format))

        logger = logging.getLogger()
        logger.addHandler(error_handler)

    def validate_configuration(self) -> bool:
        """
        Validate that cross-field configuration is consistent
        Returns True if configuration is valid, raises exception otherwise
        """
        try:
            if self.WEATHER_CHECK_INTERVAL_MINUTES > self.FORECAST_REFRESH_HOURS * 60:
                logging.warning(
                    f"Poll interval ({self.WEATHER_CHECK_INTERVAL_MINUTES} min) is longer than "
                    f"the forecast refresh window ({self.FORECAST_REFRESH_HOURS} h); "
                    f"forecast will refresh on every poll"
                )

            if self.PROVIDER_CACHE_TTL > self.WEATHER_CHECK_INTERVAL_MINUTES * 60:
                logging.warning(
                    f"Provider cache TTL ({self.PROVIDER_CACHE_TTL}s) exceeds the poll interval; "
                    f"some polls will see cached conditions"
                )

            if self.CACHE_MAX_SIZE <= 0:
                raise ValueError(f"Cache size must be positive, got {self.CACHE_MAX_SIZE}")

            return True

        except Exception as e:
            logging.error(f"Configuration validation failed: {e}")
            raise


def load_configuration() -> Config:
    """
    Load and validate configuration from environment
    Creates directories and sets up logging
    """
    try:
        # Load environment variables from .env file
        load_dotenv()

        # Create and validate configuration
        config = Config()

        # Create necessary directories
        config.create_directories()

        # Setup logging
        config.setup_logging()

        # Validate configuration
        config.validate_configuration()

        logging.info(f"Configuration loaded successfully for {config.APP_NAME} v{config.APP_VERSION}")
        return config

    except Exception as e:
        print(f"Failed to load configuration: {e}")
        raise


# =============================================================================
# GLOBAL CONFIGURATION INSTANCE
# =============================================================================

# Create global configuration instance
config = load_configuration()

# Export commonly used settings for easy access
LOG_LEVEL = config.LOG_LEVEL
DEBUG_MODE = config.DEBUG_MODE
