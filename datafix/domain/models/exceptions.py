"""
DataFix Exceptions.

Exception hierarchy for the fixture lifecycle engine.

Design Principles:
- Hierarchy: All inherit from DataFixError base
- Only ConfigurationError is allowed to cross the engine boundary
- Rich context: Exceptions carry the offending fixture where known
"""

from typing import Any, Optional


class DataFixError(Exception):
    """
    Base exception for fixture engine errors.

    Allows catching all DataFix errors with one handler.
    """
    pass


class ConfigurationError(DataFixError):
    """
    Invalid engine configuration or fixture declaration.

    Raised when:
    - The fixture base directory does not exist
    - A fixture identifier uses the prohibited backslash separator
    - An isolation declaration has an unsupported value

    Fatal to the test; never retried.
    """
    pass


class FixtureExecutionError(DataFixError):
    """
    A fixture or rollback unit failed while executing.

    Contained by the ledger: reported and recorded, never propagated.
    """

    def __init__(self, fixture: Any, cause: Optional[BaseException] = None):
        self.fixture = fixture
        self.cause = cause
        super().__init__(f"Error in fixture: {fixture}: {cause!r}")


class PersistenceError(DataFixError):
    """
    Storage-layer failure during fixture execution.

    Raised by fixtures (or wrapped from database driver errors) to signal that
    the remaining units of the batch cannot run against the store.
    Contained at the batch level.
    """
    pass


__all__ = [
    "DataFixError",
    "ConfigurationError",
    "FixtureExecutionError",
    "PersistenceError",
]
