"""
Fixture Executor Interface.
"""

from abc import ABC, abstractmethod
from typing import Any

from datafix.domain.models.fixture import FixtureReference


class IFixtureExecutor(ABC):
    """Runs a single resolved fixture unit."""

    @abstractmethod
    def execute(self, fixture: FixtureReference, test: Any = None) -> None:
        """
        Execute one fixture or rollback unit.

        Exceptions raised by the unit propagate; containment is the
        caller's job.

        Args:
            fixture: Resolved reference to run
            test: Test the fixture is applied for, if any
        """
        pass
