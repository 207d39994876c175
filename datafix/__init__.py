"""
DataFix - Test Data Fixture Lifecycle Engine

Applies declared data fixtures before a test runs and reverts them after,
coordinated with a per-test transaction boundary:
- Fixture Resolver: declarations -> callable or script fixtures
- Fixture Ledger: ordered, deduplicated record of applied fixtures
- Lifecycle Manager: apply/revert decisions around transaction requests
- Transaction Coordinator: SQLAlchemy (or in-memory) transaction boundary

Architecture follows:
- Domain / Application / Infrastructure layering
- Explicit event registration on a lifecycle event bus
- Interface-based abstractions for the test runner and the database
"""

__version__ = "0.1.0"

# Domain Models
from datafix.domain.models import (
    FixtureReference,
    CallableFixture,
    ScriptFixture,
    IsolationState,
    TestAnnotations,
    DataFixError,
    ConfigurationError,
    FixtureExecutionError,
    PersistenceError,
)

# Domain Events
from datafix.domain.events import LifecycleEventType

# Domain Interfaces
from datafix.domain.interfaces import (
    ITransactionCoordinator,
    ITransactionalConnection,
    ITestMetadataSource,
    IFixtureExecutor,
)

# Application Services
from datafix.application import (
    FixtureResolver,
    RollbackResolver,
    FixtureLedger,
    FixtureLifecycleManager,
    LifecycleState,
    DbIsolationHandler,
    DataFixEngine,
    DataFixEngineFactory,
)

# Infrastructure
from datafix.infrastructure import (
    LifecycleEventBus,
    TransactionCoordinator,
    SQLAlchemyTransactionalConnection,
    InMemoryTransactionalConnection,
    DefaultFixtureExecutor,
)
from datafix.infrastructure.metadata import annotate

# Configuration
from datafix.config import DataFixConfig

__all__ = [
    # Version
    "__version__",
    # Domain Models
    "FixtureReference",
    "CallableFixture",
    "ScriptFixture",
    "IsolationState",
    "TestAnnotations",
    "DataFixError",
    "ConfigurationError",
    "FixtureExecutionError",
    "PersistenceError",
    "LifecycleEventType",
    # Domain Interfaces
    "ITransactionCoordinator",
    "ITransactionalConnection",
    "ITestMetadataSource",
    "IFixtureExecutor",
    # Application Services
    "FixtureResolver",
    "RollbackResolver",
    "FixtureLedger",
    "FixtureLifecycleManager",
    "LifecycleState",
    "DbIsolationHandler",
    "DataFixEngine",
    "DataFixEngineFactory",
    # Infrastructure
    "LifecycleEventBus",
    "TransactionCoordinator",
    "SQLAlchemyTransactionalConnection",
    "InMemoryTransactionalConnection",
    "DefaultFixtureExecutor",
    "annotate",
    # Configuration
    "DataFixConfig",
]
