"""
Domain Events - test lifecycle notifications.
"""

from .lifecycle_events import (
    LifecycleEventType,
    LifecycleEvent,
    StartTestTransactionRequestEvent,
    EndTestTransactionRequestEvent,
    StartTransactionEvent,
    RollbackTransactionEvent,
)

__all__ = [
    "LifecycleEventType",
    "LifecycleEvent",
    "StartTestTransactionRequestEvent",
    "EndTestTransactionRequestEvent",
    "StartTransactionEvent",
    "RollbackTransactionEvent",
]
