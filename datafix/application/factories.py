"""
Application Factories.

Wires the fixture engine for one test-suite run:

    bus <- FixtureLifecycleManager, DbIsolationHandler
    bus <- TransactionCoordinator -> ITransactionalConnection

The ledger is created with the engine and dropped with it; nothing is kept
in module globals.

Usage:
    engine = DataFixEngineFactory(config).create(metadata_source)
    engine.start_test(test)
    ...
    engine.end_test(test)
    engine.close()
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from datafix.config import DataFixConfig, get_config
from datafix.domain.interfaces.fixture_executor import IFixtureExecutor
from datafix.domain.interfaces.metadata_source import ITestMetadataSource
from datafix.domain.interfaces.transaction_coordinator import ITransactionalConnection
from datafix.infrastructure.events import LifecycleEventBus
from datafix.infrastructure.execution import DefaultFixtureExecutor
from datafix.infrastructure.transaction import (
    TransactionCoordinator,
    SQLAlchemyTransactionalConnection,
    InMemoryTransactionalConnection,
)

from .services.db_isolation import DbIsolationHandler
from .services.fixture_ledger import FixtureLedger
from .services.fixture_resolver import FixtureResolver
from .services.lifecycle_manager import FixtureLifecycleManager
from .services.rollback_resolver import RollbackResolver

logger = logging.getLogger(__name__)


@dataclass
class DataFixEngine:
    """Fully wired fixture engine for one suite run."""
    bus: LifecycleEventBus
    coordinator: TransactionCoordinator
    fixtures: FixtureLifecycleManager
    isolation: DbIsolationHandler
    connection: ITransactionalConnection

    @property
    def ledger(self) -> FixtureLedger:
        return self.fixtures.ledger

    def start_test(self, test: Any) -> None:
        self.coordinator.start_test(test)

    def end_test(self, test: Any) -> None:
        self.coordinator.end_test(test)

    def end_test_suite(self) -> None:
        self.coordinator.end_test_suite()

    def close(self) -> None:
        """End the suite and detach all handlers from the bus."""
        try:
            self.end_test_suite()
        finally:
            self.fixtures.unregister(self.bus)
            self.isolation.unregister(self.bus)
            if isinstance(self.connection, SQLAlchemyTransactionalConnection):
                self.connection.dispose()


class DataFixEngineFactory:
    """
    Factory for DataFixEngine with proper dependencies.

    - Connection: SQLAlchemy when the config has a db_url, in-memory otherwise
    - Executor: DefaultFixtureExecutor seeded with the connection's context
    """

    def __init__(self, config: Optional[DataFixConfig] = None):
        """
        Args:
            config: DataFix configuration (defaults to global config)
        """
        self._config = config or get_config()

    @property
    def config(self) -> DataFixConfig:
        return self._config

    def create_connection(self) -> ITransactionalConnection:
        if self._config.db_url:
            return SQLAlchemyTransactionalConnection(self._config.db_url, echo=self._config.log_sql)
        return InMemoryTransactionalConnection()

    def create(
        self,
        metadata_source: ITestMetadataSource,
        connection: Optional[ITransactionalConnection] = None,
        executor: Optional[IFixtureExecutor] = None,
        bus: Optional[LifecycleEventBus] = None,
    ) -> DataFixEngine:
        """
        Build and register a complete engine.

        Raises:
            ConfigurationError: If the fixture base directory does not exist
        """
        config = self._config
        connection = connection or self.create_connection()
        executor = executor or DefaultFixtureExecutor(scope_factory=connection.fixture_scope)
        bus = bus or LifecycleEventBus()

        resolver = FixtureResolver(config.fixture_base_dir, metadata_source, fixture_key=config.fixture_key)
        ledger = FixtureLedger(
            executor,
            RollbackResolver(config.callable_rollback_suffix, config.script_rollback_suffix),
        )
        fixtures = FixtureLifecycleManager(
            resolver,
            ledger,
            isolation_key=config.isolation_key,
            depends_key=config.depends_key,
        )
        isolation = DbIsolationHandler(metadata_source, isolation_key=config.isolation_key)

        # Isolation handler sees every event before the fixture handlers
        isolation.register(bus)
        fixtures.register(bus)

        coordinator = TransactionCoordinator(bus, connection)
        logger.debug(f"DataFix engine created (fixtures: {resolver.base_dir})")
        return DataFixEngine(
            bus=bus,
            coordinator=coordinator,
            fixtures=fixtures,
            isolation=isolation,
            connection=connection,
        )

    @classmethod
    def create_for_testing(cls, fixture_base_dir: str, metadata_source: ITestMetadataSource) -> DataFixEngine:
        """Engine with an in-memory transaction boundary."""
        return cls(DataFixConfig.for_testing(fixture_base_dir)).create(metadata_source)
