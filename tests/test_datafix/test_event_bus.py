"""
Tests for LifecycleEventBus.
"""

import pytest
from typing import List

from datafix.domain.events import (
    LifecycleEvent,
    LifecycleEventType,
    StartTransactionEvent,
    RollbackTransactionEvent,
)
from datafix.domain.models import ConfigurationError
from datafix.infrastructure.events import LifecycleEventBus


class TestLifecycleEventBusBasics:

    def test_create_event_bus(self):
        bus = LifecycleEventBus()
        assert bus.get_subscriber_count() == 0

    def test_subscribe_and_publish(self):
        bus = LifecycleEventBus()
        received: List = []
        bus.subscribe(LifecycleEventType.START_TRANSACTION, received.append)

        event = StartTransactionEvent(test="t")
        bus.publish(event)

        assert received == [event]

    def test_type_specific_subscription(self):
        bus = LifecycleEventBus()
        started: List = []
        rolled_back: List = []
        bus.subscribe(LifecycleEventType.START_TRANSACTION, started.append)
        bus.subscribe(LifecycleEventType.ROLLBACK_TRANSACTION, rolled_back.append)

        bus.publish(StartTransactionEvent())
        bus.publish(RollbackTransactionEvent())
        bus.publish(RollbackTransactionEvent())

        assert len(started) == 1
        assert len(rolled_back) == 2

    def test_handlers_called_in_subscription_order(self):
        bus = LifecycleEventBus()
        order: List[str] = []
        bus.subscribe(LifecycleEventType.ROLLBACK_TRANSACTION, lambda e: order.append("first"))
        bus.subscribe(LifecycleEventType.ROLLBACK_TRANSACTION, lambda e: order.append("second"))

        bus.publish(RollbackTransactionEvent())

        assert order == ["first", "second"]

    def test_duplicate_subscription_ignored(self):
        bus = LifecycleEventBus()
        received: List = []
        bus.subscribe(LifecycleEventType.ROLLBACK_TRANSACTION, received.append)
        bus.subscribe(LifecycleEventType.ROLLBACK_TRANSACTION, received.append)

        bus.publish(RollbackTransactionEvent())

        assert len(received) == 1

    def test_unsubscribe(self):
        bus = LifecycleEventBus()
        received: List = []
        bus.subscribe(LifecycleEventType.ROLLBACK_TRANSACTION, received.append)
        bus.unsubscribe(LifecycleEventType.ROLLBACK_TRANSACTION, received.append)
        bus.unsubscribe(LifecycleEventType.START_TRANSACTION, received.append)

        bus.publish(RollbackTransactionEvent())

        assert received == []

    def test_handler_exception_propagates(self):
        bus = LifecycleEventBus()
        later: List = []

        def failing_handler(event):
            raise ConfigurationError("bad declaration")

        bus.subscribe(LifecycleEventType.ROLLBACK_TRANSACTION, failing_handler)
        bus.subscribe(LifecycleEventType.ROLLBACK_TRANSACTION, later.append)

        with pytest.raises(ConfigurationError):
            bus.publish(RollbackTransactionEvent())
        assert later == []

    def test_nested_publish(self):
        bus = LifecycleEventBus()
        received: List = []
        bus.subscribe(LifecycleEventType.START_TRANSACTION, lambda e: bus.publish(RollbackTransactionEvent()))
        bus.subscribe(LifecycleEventType.ROLLBACK_TRANSACTION, received.append)

        bus.publish(StartTransactionEvent())

        assert len(received) == 1

    def test_untyped_event_rejected(self):
        with pytest.raises(ValueError):
            LifecycleEventBus().publish(LifecycleEvent())


class TestLifecycleEventBusHistory:

    def test_history_filtered_by_type(self):
        bus = LifecycleEventBus()
        bus.publish(StartTransactionEvent())
        bus.publish(RollbackTransactionEvent())

        assert len(bus.get_event_history()) == 2
        assert [e.event_type for e in bus.get_event_history(LifecycleEventType.ROLLBACK_TRANSACTION)] == [
            "RollbackTransactionEvent"
        ]

    def test_history_bounded(self):
        bus = LifecycleEventBus(max_history=3)
        for _ in range(5):
            bus.publish(RollbackTransactionEvent())

        assert len(bus.get_event_history()) == 3

    def test_clear_history(self):
        bus = LifecycleEventBus()
        bus.publish(RollbackTransactionEvent())
        bus.clear_history()

        assert bus.get_event_history() == []
