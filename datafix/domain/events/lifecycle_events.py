"""
Test lifecycle events.

Published by the transaction coordinator (or a test-runner adapter) and
consumed by fixture handlers registered on the LifecycleEventBus.

Event order for a single test:
    START_TEST_TRANSACTION_REQUEST -> [START_TRANSACTION] -> test body
    -> END_TEST_TRANSACTION_REQUEST -> [ROLLBACK_TRANSACTION]
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional, TYPE_CHECKING
import uuid

if TYPE_CHECKING:
    from datafix.domain.interfaces.transaction_coordinator import ITransactionCoordinator


class LifecycleEventType(Enum):
    """Lifecycle events handlers can register against."""
    START_TEST_TRANSACTION_REQUEST = "start_test_transaction_request"
    END_TEST_TRANSACTION_REQUEST = "end_test_transaction_request"
    START_TRANSACTION = "start_transaction"
    ROLLBACK_TRANSACTION = "rollback_transaction"


@dataclass
class LifecycleEvent:
    """Base class for all lifecycle events."""
    event_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: datetime = field(default_factory=datetime.now)

    # Overridden by each concrete event
    type = None  # type: Optional[LifecycleEventType]

    @property
    def event_type(self) -> str:
        return self.__class__.__name__


@dataclass
class StartTestTransactionRequestEvent(LifecycleEvent):
    """A test is about to run; handlers may request transaction changes."""
    test: Any = None
    transaction: Optional["ITransactionCoordinator"] = None

    type = LifecycleEventType.START_TEST_TRANSACTION_REQUEST


@dataclass
class EndTestTransactionRequestEvent(LifecycleEvent):
    """A test has finished; handlers may request transaction changes."""
    test: Any = None
    transaction: Optional["ITransactionCoordinator"] = None

    type = LifecycleEventType.END_TEST_TRANSACTION_REQUEST


@dataclass
class StartTransactionEvent(LifecycleEvent):
    """The coordinator confirmed a transaction is open."""
    test: Any = None

    type = LifecycleEventType.START_TRANSACTION


@dataclass
class RollbackTransactionEvent(LifecycleEvent):
    """The coordinator confirmed the transaction was rolled back."""

    type = LifecycleEventType.ROLLBACK_TRANSACTION
