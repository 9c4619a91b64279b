"""
Event bus for hotel domain events.

Synchronous in-process pub/sub. Handlers run immediately in the publisher's
thread. Handler errors are logged and never propagate: the primary write
and its audit entry are already done.
"""

import logging
from typing import Callable, Dict, List

from core.events import HotelEvent

logger = logging.getLogger(__name__)


class EventBus:
    """
    In-process event bus.

    Subscribe by event class name (string), publish by event instance.
    """

    def __init__(self):
        self._subscribers: Dict[str, List[Callable]] = {}

    def subscribe(self, event_type: str, callback: Callable):
        """
        Subscribe to events of a specific type.

        Args:
            event_type: Name of event class (e.g. 'GuestCheckedOut')
            callback: Function to call when event is published
        """
        self._subscribers.setdefault(event_type, []).append(callback)

    def publish(self, event: HotelEvent):
        """Call every subscriber of the event's type, in subscription order."""
        event_type = type(event).__name__

        for callback in self._subscribers.get(event_type, []):
            try:
                callback(event)
            except Exception:
                logger.exception(
                    "Handler %s failed for %s (event_id=%s)",
                    getattr(callback, "__name__", repr(callback)),
                    event_type,
                    event.event_id,
                )
