"""
Fixture execution.
"""

from .executors import DefaultFixtureExecutor, RecordingFixtureExecutor

__all__ = [
    "DefaultFixtureExecutor",
    "RecordingFixtureExecutor",
]
