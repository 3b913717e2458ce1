"""
Weather-Driven Disruption Detection & Trigger Engine
====================================================

Watches real-world weather against a scheduled itinerary, decides whether
outdoor activities remain viable, and emits trigger events for a downstream
reshuffling engine.

Author: Weather Disruption Engine Team
Version: 1.0.0
"""

__version__ = "1.0.0"
__author__ = "Weather Disruption Engine Team"

def get_version():
    """Return the current version of the application"""
    return __version__

def get_info():
    """Return basic information about the application"""
    return {
        "name": "Weather Disruption Engine",
        "version": __version__,
        "author": __author__,
        "description": "Weather-driven disruption detection and trigger engine for itineraries"
    }
