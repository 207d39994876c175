"""
Application Services - fixture resolution, ledger and lifecycle orchestration.
"""

from .fixture_resolver import FixtureResolver, PROHIBITED_SEPARATOR
from .rollback_resolver import RollbackResolver
from .fixture_ledger import FixtureLedger, FixtureFailure
from .lifecycle_manager import FixtureLifecycleManager, LifecycleState
from .db_isolation import DbIsolationHandler

__all__ = [
    "FixtureResolver",
    "PROHIBITED_SEPARATOR",
    "RollbackResolver",
    "FixtureLedger",
    "FixtureFailure",
    "FixtureLifecycleManager",
    "LifecycleState",
    "DbIsolationHandler",
]
