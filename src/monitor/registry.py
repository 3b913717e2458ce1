"""
Monitor Registry
================

Per-trip registry of weather monitors, owned by the host application.

Author: Weather Disruption Engine Team
"""

import logging
import threading
from typing import Callable, Dict, List, Optional

from ..disruption_engine.monitor_config import MonitorConfig
from ..weather_data.weather_provider import WeatherProvider
from ..utils.error_handler import ErrorHandler
from .weather_monitor import WeatherMonitor


class MonitorRegistry:
    """
    Creates and tracks one WeatherMonitor per trip id
    """

    def __init__(self, provider: WeatherProvider, config: MonitorConfig = None,
                 monitor_factory: Callable[..., WeatherMonitor] = WeatherMonitor,
                 error_handler: ErrorHandler = None):
        """
        Initialize Monitor Registry

        Args:
            provider (WeatherProvider): Default provider for new monitors
            config (MonitorConfig): Default config for new monitors
            monitor_factory (Callable): Builds a monitor from (provider, config=..., error_handler=...)
            error_handler (ErrorHandler): Shared error reporting
        """
        self.logger = logging.getLogger(__name__)
        self.provider = provider
        self.config = config
        self.monitor_factory = monitor_factory
        self.error_handler = error_handler or ErrorHandler()
        self._monitors: Dict[str, WeatherMonitor] = {}
        self._lock = threading.Lock()

    def get_or_create(self, trip_id: str, provider: WeatherProvider = None,
                      config: MonitorConfig = None) -> WeatherMonitor:
        """Return the trip's monitor, creating an uninitialized one if needed"""
        with self._lock:
            monitor = self._monitors.get(trip_id)
            if monitor is None:
                monitor = self.monitor_factory(
                    provider or self.provider,
                    config=config or self.config,
                    error_handler=self.error_handler,
                )
                self._monitors[trip_id] = monitor
                self.logger.debug(f"Created weather monitor for trip {trip_id}")
            return monitor

    def get(self, trip_id: str) -> Optional[WeatherMonitor]:
        with self._lock:
            return self._monitors.get(trip_id)

    def remove(self, trip_id: str) -> bool:
        """Stop and forget a trip's monitor"""
        with self._lock:
            monitor = self._monitors.pop(trip_id, None)
        if monitor is None:
            return False
        monitor.stop_monitoring()
        self.logger.debug(f"Removed weather monitor for trip {trip_id}")
        return True

    def trip_ids(self) -> List[str]:
        with self._lock:
            return list(self._monitors)

    def stop_all(self) -> None:
        with self._lock:
            monitors = list(self._monitors.values())
        for monitor in monitors:
            monitor.stop_monitoring()
        self.logger.info(f"Stopped {len(monitors)} weather monitor(s)")

    def __contains__(self, trip_id: str) -> bool:
        with self._lock:
            return trip_id in self._monitors

    def __len__(self) -> int:
        with self._lock:
            return len(self._monitors)
