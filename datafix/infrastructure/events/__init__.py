"""
Infrastructure Events - lifecycle event bus.
"""

from .lifecycle_event_bus import LifecycleEventBus

__all__ = [
    "LifecycleEventBus",
]
