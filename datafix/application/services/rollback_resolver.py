"""
Rollback Resolver.

Finds the reversal counterpart of an applied fixture by naming convention:

    setupThing        -> setupThingRollback
    catalog/foo.py    -> catalog/foo_rollback.py
"""

from typing import Optional

from datafix.config import DEFAULT_CALLABLE_ROLLBACK_SUFFIX, DEFAULT_SCRIPT_ROLLBACK_SUFFIX
from datafix.domain.models.fixture import CallableFixture, FixtureReference


class RollbackResolver:
    """Derives existing rollback units; never returns an absent target."""

    def __init__(
        self,
        callable_suffix: str = DEFAULT_CALLABLE_ROLLBACK_SUFFIX,
        script_suffix: str = DEFAULT_SCRIPT_ROLLBACK_SUFFIX,
    ):
        self._callable_suffix = callable_suffix
        self._script_suffix = script_suffix

    def rollback_of(self, fixture: FixtureReference) -> Optional[FixtureReference]:
        """
        Get the rollback counterpart of a fixture.

        Returns:
            The counterpart reference, or None if it does not exist
        """
        if isinstance(fixture, CallableFixture):
            suffix = self._callable_suffix
        else:
            suffix = self._script_suffix
        candidate = fixture.rollback_candidate(suffix)
        return candidate if candidate.exists() else None
