"""
Transaction Coordinator.

Owns the transaction boundary around tests. For every test it publishes the
request events, collects the requests raised by handlers in a fresh
TransactionRequest, then acts on them:

    1. rollback requested -> roll back (if a transaction is active)
    2. start requested    -> begin (if no transaction is active)

and confirms each transition by publishing ROLLBACK_TRANSACTION or
START_TRANSACTION. Rollback is processed first so a handler can ask for a
fresh transaction in one step.
"""

import logging
from typing import Any

from datafix.domain.events import (
    StartTestTransactionRequestEvent,
    EndTestTransactionRequestEvent,
    StartTransactionEvent,
    RollbackTransactionEvent,
)
from datafix.domain.interfaces.transaction_coordinator import (
    ITransactionCoordinator,
    ITransactionalConnection,
)
from datafix.infrastructure.events.lifecycle_event_bus import LifecycleEventBus

logger = logging.getLogger(__name__)


class TransactionRequest(ITransactionCoordinator):
    """Requests raised by handlers during one request event."""

    def __init__(self):
        self._start_requested = False
        self._rollback_requested = False

    def request_transaction_start(self) -> None:
        self._start_requested = True

    def request_transaction_rollback(self) -> None:
        self._rollback_requested = True

    @property
    def is_start_requested(self) -> bool:
        return self._start_requested

    @property
    def is_rollback_requested(self) -> bool:
        return self._rollback_requested

    def __repr__(self) -> str:
        return f"TransactionRequest(start={self._start_requested}, rollback={self._rollback_requested})"


class TransactionCoordinator:
    """
    Drives a transactional connection from lifecycle requests.

    Usage:
        coordinator = TransactionCoordinator(bus, connection)
        coordinator.start_test(test)
        ...  # test body
        coordinator.end_test(test)
        coordinator.end_test_suite()
    """

    def __init__(self, bus: LifecycleEventBus, connection: ITransactionalConnection):
        self._bus = bus
        self._connection = connection
        self._is_transaction_active = False

    @property
    def connection(self) -> ITransactionalConnection:
        return self._connection

    @property
    def is_transaction_active(self) -> bool:
        return self._is_transaction_active

    def start_test(self, test: Any) -> TransactionRequest:
        request = TransactionRequest()
        self._bus.publish(StartTestTransactionRequestEvent(test=test, transaction=request))
        self._process(request, test)
        return request

    def end_test(self, test: Any) -> TransactionRequest:
        request = TransactionRequest()
        self._bus.publish(EndTestTransactionRequestEvent(test=test, transaction=request))
        self._process(request, test)
        return request

    def end_test_suite(self) -> None:
        """Roll back a transaction a dependent test chain left open."""
        self._rollback_transaction()

    def _process(self, request: TransactionRequest, test: Any) -> None:
        if request.is_rollback_requested:
            self._rollback_transaction()
        if request.is_start_requested:
            self._start_transaction(test)

    def _start_transaction(self, test: Any) -> None:
        if self._is_transaction_active:
            return
        self._connection.begin()
        self._is_transaction_active = True
        logger.debug(f"Transaction started for {test!r}")
        self._bus.publish(StartTransactionEvent(test=test))

    def _rollback_transaction(self) -> None:
        if not self._is_transaction_active:
            return
        self._connection.rollback()
        self._is_transaction_active = False
        logger.debug("Transaction rolled back")
        self._bus.publish(RollbackTransactionEvent())
