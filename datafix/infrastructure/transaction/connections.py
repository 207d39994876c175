"""
Transactional Connections.

Wrap a whole test in one outer database transaction that is always rolled
back, never committed.

- SQLAlchemyTransactionalConnection: real database via SQLAlchemy
- InMemoryTransactionalConnection: no I/O, counts begin/rollback (unit tests)
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional, Union

from sqlalchemy import create_engine
from sqlalchemy.engine import Connection, Engine, Transaction
from sqlalchemy.orm import Session, sessionmaker

from datafix.domain.interfaces.transaction_coordinator import ITransactionalConnection

logger = logging.getLogger(__name__)


class SQLAlchemyTransactionalConnection(ITransactionalConnection):
    """
    SQLAlchemy-backed transaction boundary.

    While a transaction is open, ``session`` is bound to the same connection,
    so fixture writes (including ``session.commit()`` calls) stay inside the
    outer transaction and vanish on rollback.

    Usage:
        connection = SQLAlchemyTransactionalConnection("sqlite:///test.db")
        connection.begin()
        connection.session.add(product)
        connection.rollback()  # product is gone
    """

    def __init__(self, db: Union[str, Engine] = "sqlite:///:memory:", echo: bool = False):
        """
        Args:
            db: Database URL or an existing Engine
            echo: If True, log SQL statements
        """
        self._engine = create_engine(db, echo=echo) if isinstance(db, str) else db
        self._session_factory = sessionmaker()
        self._connection: Optional[Connection] = None
        self._transaction: Optional[Transaction] = None
        self._session: Optional[Session] = None

    @property
    def engine(self) -> Engine:
        return self._engine

    @property
    def session(self) -> Optional[Session]:
        """Session bound to the open transaction (None outside of it)."""
        return self._session

    @property
    def in_transaction(self) -> bool:
        return self._transaction is not None and self._transaction.is_active

    def begin(self) -> None:
        self._connection = self._engine.connect()
        self._transaction = self._connection.begin()
        self._session = self._session_factory(bind=self._connection)
        logger.info(f"Began test transaction on {self._engine.url}")

    def rollback(self) -> None:
        try:
            if self._session is not None:
                self._session.close()
            if self._transaction is not None and self._transaction.is_active:
                self._transaction.rollback()
        finally:
            if self._connection is not None:
                self._connection.close()
            self._session = None
            self._transaction = None
            self._connection = None
        logger.info(f"Rolled back test transaction on {self._engine.url}")

    def fixture_context(self) -> dict:
        return {"session": self._session, "connection": self._connection}

    @contextmanager
    def fixture_scope(self) -> Iterator[Dict[str, Any]]:
        """
        Globals for one fixture script.

        Inside the test transaction this is the bound session. Outside of it
        (isolation disabled, or rollback scripts after the test transaction
        was discarded) a session of its own is opened on the engine and
        committed on exit, or rolled back if the script raised.
        """
        if self.in_transaction:
            yield self.fixture_context()
            return
        with self._session_factory(bind=self._engine) as session, session.begin():
            yield {"session": session, "connection": session.connection()}

    def dispose(self) -> None:
        """Release pooled connections."""
        self._engine.dispose()


class InMemoryTransactionalConnection(ITransactionalConnection):
    """Transaction boundary without storage; records transitions."""

    def __init__(self):
        self.begin_count = 0
        self.rollback_count = 0
        self._active = False

    @property
    def in_transaction(self) -> bool:
        return self._active

    def begin(self) -> None:
        self.begin_count += 1
        self._active = True

    def rollback(self) -> None:
        self.rollback_count += 1
        self._active = False
