"""
Fixture references.

A fixture declaration resolves to one of two executable units:

- CallableFixture: a zero-argument routine owned by the test class
- ScriptFixture: a Python file under the configured fixture root

Both are frozen value objects, so equality (and therefore ledger
deduplication) falls out of the dataclass definition.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path


class FixtureReference(ABC):
    """Resolved, executable fixture unit."""

    @abstractmethod
    def exists(self) -> bool:
        """Whether the unit's target is present and runnable."""
        pass

    @abstractmethod
    def rollback_candidate(self, suffix: str) -> "FixtureReference":
        """
        Build the reversal counterpart by naming convention.

        The returned reference is not checked for existence.

        Args:
            suffix: Marker appended to the method name or file stem
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        pass


@dataclass(frozen=True)
class CallableFixture(FixtureReference):
    """Routine reachable as ``getattr(owner, method_name)``."""
    owner: type
    method_name: str

    @property
    def name(self) -> str:
        return f"{self.owner.__qualname__}.{self.method_name}"

    def exists(self) -> bool:
        return callable(getattr(self.owner, self.method_name, None))

    def rollback_candidate(self, suffix: str) -> "CallableFixture":
        return CallableFixture(owner=self.owner, method_name=self.method_name + suffix)

    def __call__(self):
        return getattr(self.owner, self.method_name)()

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class ScriptFixture(FixtureReference):
    """Fixture file executed in the test's runtime context."""
    path: Path

    @property
    def name(self) -> str:
        return str(self.path)

    def exists(self) -> bool:
        return self.path.is_file()

    def rollback_candidate(self, suffix: str) -> "ScriptFixture":
        # foo.py -> foo_rollback.py, Makefile -> Makefile_rollback
        return ScriptFixture(path=self.path.with_name(f"{self.path.stem}{suffix}{self.path.suffix}"))

    def __str__(self) -> str:
        return self.name


__all__ = [
    "FixtureReference",
    "CallableFixture",
    "ScriptFixture",
]
