"""
Pytest fixtures for DataFix tests.
"""

import pytest
from pathlib import Path
from unittest.mock import Mock

from datafix.application.services import (
    FixtureResolver,
    FixtureLedger,
    FixtureLifecycleManager,
    RollbackResolver,
)
from datafix.domain.interfaces import ITransactionCoordinator
from datafix.infrastructure.execution import RecordingFixtureExecutor
from datafix.infrastructure.metadata import MappingMetadataSource

from test_datafix.helpers import CALLS, write_fixture


@pytest.fixture(autouse=True)
def reset_calls():
    CALLS.clear()
    yield
    CALLS.clear()


@pytest.fixture
def fixture_root(tmp_path) -> Path:
    """Fixture tree with scripts that have a rollback and one that has not."""
    root = tmp_path / "fixtures"
    root.mkdir()
    write_fixture(root, "base.py")
    write_fixture(root, "base_rollback.py")
    write_fixture(root, "extra.py")
    write_fixture(root, "catalog/product.py")
    write_fixture(root, "catalog/product_rollback.py")
    return root


@pytest.fixture
def metadata() -> MappingMetadataSource:
    return MappingMetadataSource()


@pytest.fixture
def executor() -> RecordingFixtureExecutor:
    return RecordingFixtureExecutor()


@pytest.fixture
def resolver(fixture_root, metadata) -> FixtureResolver:
    return FixtureResolver(fixture_root, metadata)


@pytest.fixture
def ledger(executor) -> FixtureLedger:
    return FixtureLedger(executor, RollbackResolver())


@pytest.fixture
def manager(resolver, ledger) -> FixtureLifecycleManager:
    return FixtureLifecycleManager(resolver, ledger)


@pytest.fixture
def transaction() -> Mock:
    """Coordinator double; ``mock_calls`` keeps the request order."""
    return Mock(spec=ITransactionCoordinator)
