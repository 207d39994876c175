"""
Fixture Ledger.

Ordered record of the fixtures applied in the current isolation scope.

Invariants:
- No duplicates: applying a recorded fixture again is a no-op
- Reversion walks the ledger in insertion order and always ends empty
- A failing unit never stops the batch and is still recorded, storage
  failures included; the failure log keeps the most recent entries only
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterable, List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError

from datafix.domain.interfaces.fixture_executor import IFixtureExecutor
from datafix.domain.models.exceptions import FixtureExecutionError, PersistenceError
from datafix.domain.models.fixture import FixtureReference

from .rollback_resolver import RollbackResolver

logger = logging.getLogger(__name__)

# Errors raised by the store itself rather than by fixture logic
STORAGE_ERRORS = (PersistenceError, SQLAlchemyError)


@dataclass
class FixtureFailure:
    """Diagnostic record of a contained fixture failure."""
    fixture: FixtureReference
    error: BaseException
    phase: str  # "apply" or "rollback"
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def is_storage_failure(self) -> bool:
        return isinstance(self.error, STORAGE_ERRORS)

    def as_execution_error(self) -> FixtureExecutionError:
        return FixtureExecutionError(self.fixture, self.error)


class FixtureLedger:
    """
    Applies fixtures once and reverts them together.

    Usage:
        ledger = FixtureLedger(executor, RollbackResolver())
        ledger.apply(fixtures, test)
        ...
        ledger.revert_all()
    """

    def __init__(
        self,
        executor: IFixtureExecutor,
        rollback_resolver: Optional[RollbackResolver] = None,
        max_failures: int = 100,
    ):
        """
        Args:
            executor: Runs fixture and rollback units
            rollback_resolver: Finds rollback counterparts (default naming if None)
            max_failures: Failure records kept for diagnostics
        """
        self._executor = executor
        self._rollback_resolver = rollback_resolver or RollbackResolver()
        self._applied: List[FixtureReference] = []
        self._failures: deque = deque(maxlen=max_failures)

    # ═══════════════════════════════════════════════════════════════
    # Queries
    # ═══════════════════════════════════════════════════════════════

    @property
    def applied(self) -> Tuple[FixtureReference, ...]:
        return tuple(self._applied)

    @property
    def failures(self) -> List[FixtureFailure]:
        """Most recent contained failures, oldest first."""
        return list(self._failures)

    def is_empty(self) -> bool:
        return not self._applied

    def clear_failures(self) -> None:
        self._failures.clear()

    def __len__(self) -> int:
        return len(self._applied)

    def __contains__(self, fixture: object) -> bool:
        return fixture in self._applied

    def __bool__(self) -> bool:
        return bool(self._applied)

    # ═══════════════════════════════════════════════════════════════
    # Apply / Revert
    # ═══════════════════════════════════════════════════════════════

    def apply(self, fixtures: Iterable[FixtureReference], test: Any = None) -> int:
        """
        Execute fixtures that are not recorded yet, then record them.

        Args:
            fixtures: References in declaration order
            test: Test the fixtures are applied for

        Returns:
            Number of fixtures executed by this call
        """
        executed = 0
        try:
            for fixture in fixtures:
                if fixture in self._applied:
                    continue
                self._execute_one(fixture, test, phase="apply")
                self._applied.append(fixture)
                executed += 1
        except STORAGE_ERRORS as e:
            # Raised outside a fixture body, e.g. by a lazily evaluated batch
            logger.error(f"Storage failure while applying fixtures: {e}", exc_info=True)
        return executed

    def revert_all(self, test: Any = None) -> int:
        """
        Run the rollback counterpart of every recorded fixture, then clear.

        Fixtures without a counterpart are skipped silently.

        Returns:
            Number of rollback units executed
        """
        executed = 0
        try:
            for fixture in self._applied:
                rollback = self._rollback_resolver.rollback_of(fixture)
                if rollback is None:
                    continue
                self._execute_one(rollback, test, phase="rollback")
                executed += 1
        finally:
            self._applied = []
        logger.debug(f"Ledger reverted ({executed} rollback units executed)")
        return executed

    def _execute_one(self, fixture: FixtureReference, test: Any, phase: str) -> None:
        """Run one unit and contain its failure."""
        try:
            self._executor.execute(fixture, test)
            logger.debug(f"Fixture {phase}: {fixture}")
        except Exception as e:
            failure = FixtureFailure(fixture=fixture, error=e, phase=phase)
            self._failures.append(failure)
            if failure.is_storage_failure:
                logger.error(f"Storage failure in fixture: {fixture}", exc_info=True)
            else:
                logger.error(f"Error in fixture: {fixture}", exc_info=True)
