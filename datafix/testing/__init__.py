"""
DataFix Testing Utilities

Helpers for declaring fixtures and testing fixture-driven suites.

Usage:
    from datafix.testing import annotate, RecordingFixtureExecutor
"""

from datafix.infrastructure.metadata import annotate, MappingMetadataSource, AttributeMetadataSource
from datafix.infrastructure.execution import RecordingFixtureExecutor
from datafix.infrastructure.transaction import InMemoryTransactionalConnection

__all__ = [
    "annotate",
    "MappingMetadataSource",
    "AttributeMetadataSource",
    "RecordingFixtureExecutor",
    "InMemoryTransactionalConnection",
]
