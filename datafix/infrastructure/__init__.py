"""
Infrastructure Layer - event bus, transaction boundary, executors and metadata sources.
"""

from .events import LifecycleEventBus
from .transaction import (
    TransactionCoordinator,
    TransactionRequest,
    SQLAlchemyTransactionalConnection,
    InMemoryTransactionalConnection,
)
from .execution import DefaultFixtureExecutor, RecordingFixtureExecutor

__all__ = [
    "LifecycleEventBus",
    "TransactionCoordinator",
    "TransactionRequest",
    "SQLAlchemyTransactionalConnection",
    "InMemoryTransactionalConnection",
    "DefaultFixtureExecutor",
    "RecordingFixtureExecutor",
]
