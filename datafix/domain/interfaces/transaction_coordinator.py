"""
Transaction Coordinator Interfaces.

The fixture engine never opens or rolls back a transaction itself when
isolation is enabled. It only raises requests through ITransactionCoordinator
and mutates storage once the coordinator publishes START_TRANSACTION or
ROLLBACK_TRANSACTION.
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Dict, Iterator


class ITransactionCoordinator(ABC):
    """
    Outbound transaction requests raised by lifecycle handlers.

    Usage:
        def start_test_transaction_request(self, test, transaction):
            transaction.request_transaction_start()
    """

    @abstractmethod
    def request_transaction_start(self) -> None:
        """Ask for a transaction boundary to be opened."""
        pass

    @abstractmethod
    def request_transaction_rollback(self) -> None:
        """Ask for the open transaction boundary to be rolled back."""
        pass


class ITransactionalConnection(ABC):
    """
    Storage connection able to wrap a whole test in one transaction.

    Implementations must make begin() / rollback() cheap enough to run per test.
    """

    @abstractmethod
    def begin(self) -> None:
        """Open the outer transaction."""
        pass

    @abstractmethod
    def rollback(self) -> None:
        """Discard every write made since begin() and release the connection."""
        pass

    @property
    @abstractmethod
    def in_transaction(self) -> bool:
        pass

    def fixture_context(self) -> dict:
        """Names made available to fixture scripts while a transaction is open."""
        return {}

    @contextmanager
    def fixture_scope(self) -> Iterator[Dict[str, Any]]:
        """
        Globals for one fixture script run.

        Implementations without a transaction open may hand out their own
        short-lived storage handle, finalized when the scope exits.
        """
        yield self.fixture_context()
