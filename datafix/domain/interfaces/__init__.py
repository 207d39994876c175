"""
Domain Interfaces - abstractions for the fixture engine's collaborators.
"""

from .transaction_coordinator import ITransactionCoordinator, ITransactionalConnection
from .metadata_source import ITestMetadataSource
from .fixture_executor import IFixtureExecutor

__all__ = [
    "ITransactionCoordinator",
    "ITransactionalConnection",
    "ITestMetadataSource",
    "IFixtureExecutor",
]
