"""
Polling Timer
=============

A single periodic background tick, run on one daemon thread. The thread
waits on an Event between ticks so stop() takes effect immediately instead
of after the current sleep.

Author: Weather Disruption Engine Team
"""

import logging
import threading
from typing import Callable, Optional


class PollingTimer:
    """
    Periodic timer calling `callback` every `interval_seconds`

    The first call happens one interval after start(); callers that want an
    immediate run do it themselves before starting the timer.
    """

    def __init__(self, interval_seconds: float, callback: Callable[[], None], name: str = None):
        if interval_seconds <= 0:
            raise ValueError(f"interval_seconds must be positive, got {interval_seconds!r}")

        self.logger = logging.getLogger(__name__)
        self.interval_seconds = interval_seconds
        self.callback = callback
        self.name = name or "weather-poll"

        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()

    def start(self) -> None:
        """Start ticking; a second start() on a running timer is a no-op"""
        with self._lock:
            if self._thread is not None and self._thread.is_alive():
                return
            self._stop_event.clear()
            self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
            self._thread.start()

        self.logger.debug(f"Polling timer {self.name} started ({self.interval_seconds}s)")

    def stop(self, timeout: float = 5) -> None:
        """Stop ticking. Safe to call more than once and from inside the callback."""
        with self._lock:
            self._stop_event.set()
            thread = self._thread
            self._thread = None

        if thread is not None and thread is not threading.current_thread() and thread.is_alive():
            thread.join(timeout=timeout)

        self.logger.debug(f"Polling timer {self.name} stopped")

    @property
    def is_active(self) -> bool:
        with self._lock:
            return self._thread is not None and not self._stop_event.is_set()

    def _run(self) -> None:
        while not self._stop_event.wait(self.interval_seconds):
            try:
                self.callback()
            except Exception as e:
                self.logger.error(f"Error in polling timer {self.name}: {e}")
