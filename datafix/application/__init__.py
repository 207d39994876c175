"""
Application Layer - services and factories.
"""

from .services import (
    FixtureResolver,
    RollbackResolver,
    FixtureLedger,
    FixtureFailure,
    FixtureLifecycleManager,
    LifecycleState,
    DbIsolationHandler,
)
from .factories import DataFixEngine, DataFixEngineFactory

__all__ = [
    "FixtureResolver",
    "RollbackResolver",
    "FixtureLedger",
    "FixtureFailure",
    "FixtureLifecycleManager",
    "LifecycleState",
    "DbIsolationHandler",
    "DataFixEngine",
    "DataFixEngineFactory",
]
