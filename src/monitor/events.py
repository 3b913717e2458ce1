"""
Event Channel
=============

Observer channel used to deliver trigger events and alerts to subscribers.

Delivery semantics:
- synchronous, on the thread that publishes
- in subscription order
- at most once per event per subscriber (no retries)
- a failing subscriber is reported and skipped; the rest still receive the event

Author: Weather Disruption Engine Team
"""

import logging
import threading
from typing import Callable, Generic, List, TypeVar

from ..utils.error_handler import ErrorHandler, ErrorCategory, ErrorSeverity, ErrorContext


T = TypeVar("T")

Listener = Callable[[T], None]


class Subscription:
    """Handle returned by subscribe(); calling it unsubscribes"""

    def __init__(self, channel: "EventChannel", listener: Callable):
        self._channel = channel
        self.listener = listener
        self.active = True

    def unsubscribe(self) -> None:
        if self.active:
            self._channel._remove(self)
            self.active = False

    def __call__(self) -> None:
        self.unsubscribe()


class EventChannel(Generic[T]):
    """
    Ordered fan-out of events to listeners
    """

    def __init__(self, name: str, error_handler: ErrorHandler = None):
        self.logger = logging.getLogger(__name__)
        self.name = name
        self.error_handler = error_handler or ErrorHandler()
        self._subscriptions: List[Subscription] = []
        self._lock = threading.Lock()

    def subscribe(self, listener: Callable[[T], None]) -> Subscription:
        """
        Register a listener

        Args:
            listener (Callable): Called with each published event

        Returns:
            Subscription: Call it (or its unsubscribe()) to stop receiving events
        """
        if not callable(listener):
            raise TypeError(f"Listener for {self.name} must be callable")

        subscription = Subscription(self, listener)
        with self._lock:
            self._subscriptions.append(subscription)
        return subscription

    def publish(self, event: T, trip_id: str = None) -> int:
        """
        Deliver an event to every current subscriber

        Returns:
            int: Number of subscribers that received the event without error
        """
        with self._lock:
            subscribers = list(self._subscriptions)

        delivered = 0
        for subscription in subscribers:
            if not subscription.active:
                continue
            try:
                subscription.listener(event)
                delivered += 1
            except Exception as e:
                self.error_handler.handle_error(
                    message=f"Subscriber on {self.name} channel failed",
                    exception=e,
                    category=ErrorCategory.SUBSCRIBER_FAILED,
                    severity=ErrorSeverity.MEDIUM,
                    context=ErrorContext(module=__name__, function="publish", trip_id=trip_id),
                )
        return delivered

    def clear(self) -> None:
        with self._lock:
            for subscription in self._subscriptions:
                subscription.active = False
            self._subscriptions.clear()

    def _remove(self, subscription: Subscription) -> None:
        with self._lock:
            if subscription in self._subscriptions:
                self._subscriptions.remove(subscription)

    def __len__(self) -> int:
        with self._lock:
            return len(self._subscriptions)
