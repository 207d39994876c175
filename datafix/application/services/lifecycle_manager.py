"""
Fixture Lifecycle Manager.

Reacts to test lifecycle events and decides when fixtures are applied and
reverted:

- Isolation enabled: fixtures are applied only after the coordinator confirms
  an open transaction (START_TRANSACTION) and reverted only after it confirms
  the rollback (ROLLBACK_TRANSACTION). The manager itself only raises requests.
- Isolation disabled: no transaction boundary exists, so fixtures are applied
  and reverted directly from the request handlers.

State machine:
    IDLE -> TRANSACTION_REQUESTED -> TRANSACTION_OPEN -> IDLE
    IDLE -> DIRECT_SCOPE -> IDLE          (isolation disabled)

A start request raised while the transaction is already open (a dependent
test continuing the previous one) keeps TRANSACTION_OPEN; the coordinator
ignores it and confirms nothing.
"""

import logging
from enum import Enum
from typing import Any, List

from datafix.config import DEFAULT_DEPENDS_KEY, DEFAULT_ISOLATION_KEY
from datafix.domain.events import (
    LifecycleEventType,
    StartTestTransactionRequestEvent,
    EndTestTransactionRequestEvent,
    StartTransactionEvent,
    RollbackTransactionEvent,
)
from datafix.domain.interfaces.transaction_coordinator import ITransactionCoordinator
from datafix.domain.models.annotations import IsolationState, SCOPE_METHOD
from datafix.domain.models.fixture import FixtureReference

from .fixture_ledger import FixtureLedger
from .fixture_resolver import FixtureResolver

logger = logging.getLogger(__name__)


class LifecycleState(Enum):
    """Isolation scope state of the fixture engine."""
    IDLE = "idle"
    TRANSACTION_REQUESTED = "transaction_requested"
    TRANSACTION_OPEN = "transaction_open"
    DIRECT_SCOPE = "direct_scope"  # fixtures applied without a transaction


class FixtureLifecycleManager:
    """
    Orchestrates fixture application around transaction boundaries.

    Usage:
        manager = FixtureLifecycleManager(resolver, ledger)
        manager.register(bus)

    The ledger is owned by the manager for the lifetime of a test-suite run.
    """

    def __init__(
        self,
        resolver: FixtureResolver,
        ledger: FixtureLedger,
        isolation_key: str = DEFAULT_ISOLATION_KEY,
        depends_key: str = DEFAULT_DEPENDS_KEY,
    ):
        self._resolver = resolver
        self._ledger = ledger
        self._isolation_key = isolation_key
        self._depends_key = depends_key
        self._state = LifecycleState.IDLE
        self._handlers: List[tuple] = []

    @property
    def state(self) -> LifecycleState:
        return self._state

    @property
    def ledger(self) -> FixtureLedger:
        return self._ledger

    # ═══════════════════════════════════════════════════════════════
    # Event Handlers
    # ═══════════════════════════════════════════════════════════════

    def start_test_transaction_request(self, test: Any, transaction: ITransactionCoordinator) -> None:
        """Request a transaction boundary before the first fixture is applied."""
        fixtures = self._resolver.resolve(test)
        if not fixtures:
            return
        # Re-apply even the same fixtures to guarantee data consistency
        fresh = bool(self._ledger) and bool(self._resolver.resolve(test, scope=SCOPE_METHOD))
        if fresh:
            transaction.request_transaction_rollback()
        if self.isolation_state(test) is not IsolationState.DISABLED:
            transaction.request_transaction_start()
            if fresh or self._state is not LifecycleState.TRANSACTION_OPEN:
                self._state = LifecycleState.TRANSACTION_REQUESTED
        else:
            self._apply(fixtures, test)
            self._state = LifecycleState.DIRECT_SCOPE

    def start_transaction(self, test: Any) -> None:
        """Apply fixtures now that the coordinator opened a transaction."""
        self._apply(self._resolver.resolve(test), test)
        self._state = LifecycleState.TRANSACTION_OPEN

    def end_test_transaction_request(self, test: Any, transaction: ITransactionCoordinator) -> None:
        """Isolate following tests from fixtures specific to this one."""
        if not self._ledger or not self._resolver.resolve(test) or self.has_depends(test):
            return
        if self.isolation_state(test) is not IsolationState.DISABLED:
            transaction.request_transaction_rollback()
        else:
            self._ledger.revert_all(test)
            self._state = LifecycleState.IDLE

    def rollback_transaction(self) -> None:
        """Revert the ledger once the coordinator rolled the transaction back."""
        self._ledger.revert_all()
        self._state = LifecycleState.IDLE

    # ═══════════════════════════════════════════════════════════════
    # Declarations
    # ═══════════════════════════════════════════════════════════════

    def isolation_state(self, test: Any) -> IsolationState:
        annotations = self._resolver.metadata_source.annotations(test).merged()
        return IsolationState.from_values(annotations.get(self._isolation_key))

    def has_depends(self, test: Any) -> bool:
        """Whether the test method declares a dependency on another test."""
        annotations = self._resolver.metadata_source.annotations(test).method_annotations
        return bool(annotations.get(self._depends_key))

    def _apply(self, fixtures: List[FixtureReference], test: Any) -> None:
        executed = self._ledger.apply(fixtures, test)
        logger.debug(f"Applied {executed} of {len(fixtures)} fixtures for {test!r}")

    # ═══════════════════════════════════════════════════════════════
    # Registration
    # ═══════════════════════════════════════════════════════════════

    def register(self, bus) -> None:
        """
        Subscribe the handlers to a LifecycleEventBus.

        Args:
            bus: LifecycleEventBus to subscribe to
        """
        self._handlers = [
            (LifecycleEventType.START_TEST_TRANSACTION_REQUEST, self._on_start_test_transaction_request),
            (LifecycleEventType.START_TRANSACTION, self._on_start_transaction),
            (LifecycleEventType.END_TEST_TRANSACTION_REQUEST, self._on_end_test_transaction_request),
            (LifecycleEventType.ROLLBACK_TRANSACTION, self._on_rollback_transaction),
        ]
        for event_type, handler in self._handlers:
            bus.subscribe(event_type, handler)

    def unregister(self, bus) -> None:
        for event_type, handler in self._handlers:
            bus.unsubscribe(event_type, handler)
        self._handlers = []

    def _on_start_test_transaction_request(self, event: StartTestTransactionRequestEvent) -> None:
        self.start_test_transaction_request(event.test, event.transaction)

    def _on_start_transaction(self, event: StartTransactionEvent) -> None:
        self.start_transaction(event.test)

    def _on_end_test_transaction_request(self, event: EndTestTransactionRequestEvent) -> None:
        self.end_test_transaction_request(event.test, event.transaction)

    def _on_rollback_transaction(self, event: RollbackTransactionEvent) -> None:
        self.rollback_transaction()
