# src/seasonchain/events/publisher.py
from typing import Any, Callable, Dict, List
from dataclasses import dataclass
import threading
import logging

logger = logging.getLogger(__name__)

BLOCK_EVENT = "block"
TELEMETRY_EVENT = "telemetry"

@dataclass(frozen=True)
class Event:
    """Outbound event message"""
    type: str
    data: Any

    def to_dict(self) -> Dict[str, Any]:
        data = self.data.to_dict() if hasattr(self.data, "to_dict") else self.data
        return {"type": self.type, "data": data}

Subscriber = Callable[[Event], None]

class Subscription:
    """Handle returned by :meth:`EventBus.subscribe`"""

    def __init__(self, bus: 'EventBus', callback: Subscriber):
        self.bus = bus
        self.callback = callback

    def unsubscribe(self) -> bool:
        return self.bus.unsubscribe(self.callback)

class EventBus:
    """Fire-and-forget observer registry.

    A failing subscriber is logged and skipped; it never stops delivery to
    the others or the caller that published.
    """

    def __init__(self):
        self._subscribers: List[Subscriber] = []
        self._lock = threading.Lock()
        self.failed_deliveries = 0

    def subscribe(self, callback: Subscriber) -> Subscription:
        with self._lock:
            self._subscribers.append(callback)
        logger.debug(f"Subscriber added, total={len(self._subscribers)}")
        return Subscription(self, callback)

    def unsubscribe(self, callback: Subscriber) -> bool:
        with self._lock:
            if callback not in self._subscribers:
                return False
            self._subscribers.remove(callback)
        logger.debug(f"Subscriber removed, total={len(self._subscribers)}")
        return True

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def publish(self, event: Event) -> int:
        """Deliver an event to every subscriber, returning the success count"""
        with self._lock:
            subscribers = list(self._subscribers)

        delivered = 0
        for callback in subscribers:
            try:
                callback(event)
                delivered += 1
            except Exception as e:
                self.failed_deliveries += 1
                logger.error(f"Error broadcasting {event.type} event to subscriber: {str(e)}")
        return delivered
