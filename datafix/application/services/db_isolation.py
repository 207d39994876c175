"""
Database isolation handler.

Requests transaction boundaries from isolation declarations alone, so a test
declaring ``db_isolation: enabled`` runs inside a rolled-back transaction even
without any data fixture.

Accepted values are "enabled" and "disabled"; a method-level declaration
overrides the class-level one.
"""

import logging
from typing import Any, List, Optional

from datafix.config import DEFAULT_ISOLATION_KEY
from datafix.domain.events import LifecycleEventType
from datafix.domain.interfaces.metadata_source import ITestMetadataSource
from datafix.domain.interfaces.transaction_coordinator import ITransactionCoordinator
from datafix.domain.models.annotations import SCOPE_CLASS, SCOPE_METHOD
from datafix.domain.models.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

ISOLATION_VALUES = {"enabled": True, "disabled": False}


class DbIsolationHandler:
    """Tracks whether an isolation transaction is active and requests changes."""

    def __init__(self, metadata_source: ITestMetadataSource, isolation_key: str = DEFAULT_ISOLATION_KEY):
        self._metadata = metadata_source
        self._isolation_key = isolation_key
        self._is_active = False
        self._handlers: List[tuple] = []

    @property
    def is_active(self) -> bool:
        return self._is_active

    def start_test_transaction_request(self, test: Any, transaction: ITransactionCoordinator) -> None:
        method_isolation = self.get_isolation(test, SCOPE_METHOD)
        if self._is_active:
            if method_isolation is False:
                transaction.request_transaction_rollback()
        elif method_isolation or (method_isolation is None and self.get_isolation(test, SCOPE_CLASS)):
            transaction.request_transaction_start()

    def end_test_transaction_request(self, test: Any, transaction: ITransactionCoordinator) -> None:
        if self._is_active and self.get_isolation(test):
            transaction.request_transaction_rollback()

    def start_transaction(self) -> None:
        self._is_active = True
        logger.debug("Isolation transaction active")

    def rollback_transaction(self) -> None:
        self._is_active = False
        logger.debug("Isolation transaction closed")

    def get_isolation(self, test: Any, scope: Optional[str] = None) -> Optional[bool]:
        """
        Read the declared isolation at the given granularity.

        Returns:
            True / False for "enabled" / "disabled", None when not declared

        Raises:
            ConfigurationError: On any other value
        """
        values = self._metadata.annotations(test).for_scope(scope).get(self._isolation_key)
        if not values:
            return None
        if len(values) == 1 and values[0] in ISOLATION_VALUES:
            return ISOLATION_VALUES[values[0]]
        raise ConfigurationError(
            f'Invalid "{self._isolation_key}" declaration {values!r}, can be "enabled" or "disabled" only.'
        )

    def register(self, bus) -> None:
        """Subscribe the handlers to a LifecycleEventBus."""
        self._handlers = [
            (LifecycleEventType.START_TEST_TRANSACTION_REQUEST,
             lambda e: self.start_test_transaction_request(e.test, e.transaction)),
            (LifecycleEventType.END_TEST_TRANSACTION_REQUEST,
             lambda e: self.end_test_transaction_request(e.test, e.transaction)),
            (LifecycleEventType.START_TRANSACTION, lambda e: self.start_transaction()),
            (LifecycleEventType.ROLLBACK_TRANSACTION, lambda e: self.rollback_transaction()),
        ]
        for event_type, handler in self._handlers:
            bus.subscribe(event_type, handler)

    def unregister(self, bus) -> None:
        for event_type, handler in self._handlers:
            bus.unsubscribe(event_type, handler)
        self._handlers = []
