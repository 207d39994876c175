"""
Domain Models - fixture references, declarations and errors.
"""

from .fixture import FixtureReference, CallableFixture, ScriptFixture
from .annotations import (
    Annotations,
    IsolationState,
    TestAnnotations,
    SCOPE_CLASS,
    SCOPE_METHOD,
)
from .exceptions import (
    DataFixError,
    ConfigurationError,
    FixtureExecutionError,
    PersistenceError,
)

__all__ = [
    # Fixtures
    "FixtureReference",
    "CallableFixture",
    "ScriptFixture",
    # Declarations
    "Annotations",
    "IsolationState",
    "TestAnnotations",
    "SCOPE_CLASS",
    "SCOPE_METHOD",
    # Errors
    "DataFixError",
    "ConfigurationError",
    "FixtureExecutionError",
    "PersistenceError",
]
