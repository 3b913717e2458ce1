"""
Monitor Module
==============

Stateful weather monitoring per trip: polling lifecycle, observer channels
for trigger events and alerts, and the per-trip registry.

Author: Weather Disruption Engine Team
"""

# Version info
__version__ = "1.0.0"
__module_name__ = "monitor"

from .polling_timer import PollingTimer
from .events import EventChannel, Subscription
from .weather_monitor import WeatherMonitor
from .registry import MonitorRegistry

# Define public API
__all__ = [
    "WeatherMonitor",
    "MonitorRegistry",
    "PollingTimer",
    "EventChannel",
    "Subscription",
]
