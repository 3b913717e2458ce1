"""
Error Handler Utility
====================

Provides centralized error handling and logging for the weather disruption engine.
Recoverable failures (provider outages, missing forecasts, misbehaving subscribers)
are turned into structured, logged reports instead of propagating to callers.

Key Features:
- Exception taxonomy for the engine's public boundary
- Centralized error categorization and handling
- Structured error logging with context information
- Error statistics and monitoring

Classes:
    WeatherEngineError: Base exception for the engine
    ProviderUnavailableError: Weather provider failed or returned nothing
    StaleForecastError: No forecast entry for the requested day
    ConfigurationError: Invalid monitor configuration
    ErrorHandler: Main error handling interface
    ErrorCategory: Enumeration of error categories
    ErrorContext: Context information for errors

Author: Weather Disruption Engine Team
"""

import logging
import traceback
from typing import Optional, Dict, List
from dataclasses import dataclass
from enum import Enum
from datetime import datetime


class WeatherEngineError(Exception):
    """Base class for all engine errors"""


class ProviderUnavailableError(WeatherEngineError):
    """Geocoding or weather fetch failed, or returned nothing"""


class StaleForecastError(WeatherEngineError):
    """No forecast entry exists for the requested day"""


class ConfigurationError(WeatherEngineError, ValueError):
    """Monitor configuration is invalid"""


class ErrorCategory(Enum):
    """
    Error categories for classification
    """
    PROVIDER_UNAVAILABLE = "provider_unavailable"
    STALE_FORECAST = "stale_forecast"
    CONFIG_INVALID = "config_invalid"
    SUBSCRIBER_FAILED = "subscriber_failed"
    UNKNOWN = "unknown"


class ErrorSeverity(Enum):
    """
    Error severity levels
    """
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass
class ErrorContext:
    """
    Context information for errors

    Attributes:
        module (str): Module where error occurred
        function (str): Function where error occurred
        system_state (Dict): Relevant system state
        timestamp (datetime): When error occurred
        trip_id (str): Trip whose monitor raised the error
    """
    module: str
    function: str
    system_state: Optional[Dict] = None
    timestamp: Optional[datetime] = None
    trip_id: Optional[str] = None

    def __post_init__(self):
        if self.timestamp is None:
            self.timestamp = datetime.now()


@dataclass
class ErrorReport:
    """
    Structured error report

    Attributes:
        category (ErrorCategory): Error category
        severity (ErrorSeverity): Error severity
        message (str): Human-readable error message
        technical_details (str): Technical error details
        context (ErrorContext): Error context information
        stack_trace (str): Stack trace if available
        recovery_suggestions (List[str]): Suggested recovery actions
        occurred_at (datetime): When error occurred
    """
    category: ErrorCategory
    severity: ErrorSeverity
    message: str
    technical_details: str
    context: ErrorContext
    stack_trace: Optional[str] = None
    recovery_suggestions: Optional[List[str]] = None
    occurred_at: Optional[datetime] = None

    def __post_init__(self):
        if self.occurred_at is None:
            self.occurred_at = datetime.now()
        if self.recovery_suggestions is None:
            self.recovery_suggestions = []


class ErrorHandler:
    """
    Main error handling interface
    Provides centralized error management with logging and reporting
    """

    def __init__(self):
        """Initialize Error Handler"""
        self.logger = logging.getLogger(__name__)

        # Error statistics
        self._error_counts = {}
        self._total_errors = 0

        self.logger.debug("Error Handler initialized")

    def handle_error(self, message: str, exception: Exception = None,
                     category: ErrorCategory = ErrorCategory.UNKNOWN,
                     severity: ErrorSeverity = ErrorSeverity.MEDIUM,
                     context: ErrorContext = None) -> ErrorReport:
        """
        Handle an error with logging and reporting

        Args:
            message (str): Human-readable error message
            exception (Exception): Original exception if available
            category (ErrorCategory): Error category
            severity (ErrorSeverity): Error severity
            context (ErrorContext): Error context

        Returns:
            ErrorReport: Structured error report
        """
        # Update statistics
        self._total_errors += 1
        self._error_counts[category] = self._error_counts.get(category, 0) + 1

        # Get technical details and stack trace
        technical_details = str(exception) if exception else "No exception details"
        stack_trace = None
        if exception is not None and exception.__traceback__ is not None:
            stack_trace = "".join(traceback.format_exception(
                type(exception), exception, exception.__traceback__
            ))

        error_report = ErrorReport(
            category=category,
            severity=severity,
            message=message,
            technical_details=technical_details,
            context=context or ErrorContext(module="unknown", function="unknown"),
            stack_trace=stack_trace,
            recovery_suggestions=self._get_recovery_suggestions(category)
        )

        self._log_error(error_report)

        return error_report

    def handle_provider_error(self, operation: str, exception: Exception = None,
                              location: str = None, trip_id: str = None) -> ErrorReport:
        """
        Handle a weather provider failure

        Args:
            operation (str): Provider operation (current, forecast, geocode)
            exception (Exception): Original exception, None when the provider returned nothing
            location (str): Location label the call was made for
            trip_id (str): Owning trip

        Returns:
            ErrorReport: Structured error report
        """
        context = ErrorContext(
            module="weather_provider",
            function=operation,
            system_state={"location": location},
            trip_id=trip_id
        )

        if exception is None:
            message = f"Weather provider returned no data for {operation}"
            severity = ErrorSeverity.MEDIUM
        else:
            message = f"Weather provider {operation} call failed"
            severity = ErrorSeverity.HIGH

        return self.handle_error(
            message=message,
            exception=exception,
            category=ErrorCategory.PROVIDER_UNAVAILABLE,
            severity=severity,
            context=context
        )

    def _log_error(self, error_report: ErrorReport) -> None:
        """Log error report"""
        log_message = (
            f"[{error_report.category.value}] {error_report.message}\n"
            f"Severity: {error_report.severity.value}\n"
            f"Technical: {error_report.technical_details}\n"
            f"Module: {error_report.context.module}.{error_report.context.function}"
        )

        if error_report.context.trip_id:
            log_message += f"\nTrip: {error_report.context.trip_id}"

        if error_report.context.system_state:
            log_message += f"\nState: {error_report.context.system_state}"

        if error_report.recovery_suggestions:
            log_message += f"\nSuggestions: {', '.join(error_report.recovery_suggestions)}"

        # Log based on severity
        if error_report.severity == ErrorSeverity.CRITICAL:
            self.logger.critical(log_message)
        elif error_report.severity == ErrorSeverity.HIGH:
            self.logger.error(log_message)
        elif error_report.severity == ErrorSeverity.MEDIUM:
            self.logger.warning(log_message)
        else:
            self.logger.info(log_message)

        # Log stack trace for high severity errors
        if (error_report.severity in [ErrorSeverity.HIGH, ErrorSeverity.CRITICAL]
                and error_report.stack_trace):
            self.logger.debug(f"Stack trace:\n{error_report.stack_trace}")

    def _get_recovery_suggestions(self, category: ErrorCategory) -> List[str]:
        """Get recovery suggestions for error category"""
        suggestions = {
            ErrorCategory.PROVIDER_UNAVAILABLE: [
                "Keeping last known good weather data",
                "Verify provider credentials and connectivity",
                "Next poll will retry automatically"
            ],
            ErrorCategory.STALE_FORECAST: [
                "Refresh the forecast",
                "Check that the requested day is inside the forecast range"
            ],
            ErrorCategory.CONFIG_INVALID: [
                "Review monitor thresholds and poll interval",
                "Check environment variables"
            ],
            ErrorCategory.SUBSCRIBER_FAILED: [
                "Inspect the subscriber callback",
                "Other subscribers still received the event"
            ]
        }

        return suggestions.get(category, ["Review error details", "Contact support if issue persists"])

    def get_error_statistics(self) -> Dict:
        """Get error statistics"""
        return {
            "total_errors": self._total_errors,
            "errors_by_category": {k.value: v for k, v in self._error_counts.items()},
            "most_common_error": (
                max(self._error_counts, key=self._error_counts.get).value
                if self._error_counts else None
            )
        }

    def reset_statistics(self) -> None:
        """Reset error statistics"""
        self._error_counts.clear()
        self._total_errors = 0
        self.logger.info("Error statistics reset")
