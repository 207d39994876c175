"""
Lifecycle Event Bus - explicit handler registration for test lifecycle events.

Handlers subscribe to a LifecycleEventType member and are invoked
synchronously, in subscription order, when an event of that type is
published.

Design Decisions:
- RLock so handlers may publish further events (the coordinator publishes
  START_TRANSACTION while processing a request)
- Bounded history for diagnostics
- Handler exceptions propagate to the publisher: configuration errors must
  reach the test that triggered them

Usage:
    bus = LifecycleEventBus()
    bus.subscribe(LifecycleEventType.START_TRANSACTION, handle_start)
    bus.publish(StartTransactionEvent(test=test))
"""

from typing import Callable, List, Dict, Optional, Any
from threading import RLock
from collections import deque
import logging

from datafix.domain.events import LifecycleEvent, LifecycleEventType

logger = logging.getLogger(__name__)

Handler = Callable[[LifecycleEvent], None]


class LifecycleEventBus:
    """
    Synchronous lifecycle event bus with bounded history.
    """

    def __init__(self, max_history: int = 1000):
        """
        Args:
            max_history: Maximum events to keep in history
        """
        self._lock = RLock()
        self._subscribers: Dict[LifecycleEventType, List[Handler]] = {}
        self._event_history: deque = deque(maxlen=max_history)
        self._max_history = max_history

    # ═══════════════════════════════════════════════════════════════
    # Core Pub/Sub Operations
    # ═══════════════════════════════════════════════════════════════

    def subscribe(self, event_type: LifecycleEventType, handler: Handler) -> None:
        """
        Subscribe to an event type. Subscribing the same handler twice is a no-op.
        """
        with self._lock:
            handlers = self._subscribers.setdefault(event_type, [])
            if handler not in handlers:
                handlers.append(handler)

    def unsubscribe(self, event_type: LifecycleEventType, handler: Handler) -> None:
        with self._lock:
            if event_type in self._subscribers:
                try:
                    self._subscribers[event_type].remove(handler)
                except ValueError:
                    pass  # Handler not in list

    def publish(self, event: LifecycleEvent) -> None:
        """
        Publish an event to all subscribers of its type.

        Raises:
            Whatever a handler raises; remaining handlers are not called
        """
        if event.type is None:
            raise ValueError(f"{event.event_type} has no lifecycle event type")

        with self._lock:
            self._event_history.append(event)
            handlers = self._subscribers.get(event.type, [])[:]  # Copy to avoid modification during iteration

            logger.debug(f"Publishing {event.event_type} to {len(handlers)} handlers")
            for handler in handlers:
                handler(event)

    # ═══════════════════════════════════════════════════════════════
    # History and Query Operations
    # ═══════════════════════════════════════════════════════════════

    def get_event_history(self, event_type: Optional[LifecycleEventType] = None) -> List[LifecycleEvent]:
        """
        Get event history (oldest first), optionally filtered by type.
        """
        with self._lock:
            events = list(self._event_history)

        if event_type is not None:
            events = [e for e in events if e.type is event_type]

        return events

    def clear_history(self) -> None:
        with self._lock:
            self._event_history.clear()

    def get_subscriber_count(self, event_type: Optional[LifecycleEventType] = None) -> int:
        with self._lock:
            if event_type is not None:
                return len(self._subscribers.get(event_type, []))
            return sum(len(h) for h in self._subscribers.values())
