"""
Fixture Executors.

Script fixtures are plain Python files run with ``runpy.run_path``; their
module globals are seeded with the test being set up and whatever the
scope factory supplies (typically the SQLAlchemy ``session`` bound to the
open transaction, or a committing session when no transaction is open):

    # tests/fixtures/catalog/product.py
    session.execute(text("INSERT INTO product (sku) VALUES ('simple')"))
"""

import runpy
from contextlib import nullcontext
from typing import Any, Callable, ContextManager, Dict, Optional

from datafix.domain.interfaces.fixture_executor import IFixtureExecutor
from datafix.domain.models.fixture import CallableFixture, FixtureReference, ScriptFixture

ScopeFactory = Callable[[], ContextManager[Dict[str, Any]]]


class DefaultFixtureExecutor(IFixtureExecutor):
    """Runs callable fixtures directly and script fixtures via runpy."""

    def __init__(self, scope_factory: Optional[ScopeFactory] = None):
        """
        Args:
            scope_factory: Opens the extra globals for one script fixture run
                (e.g. ITransactionalConnection.fixture_scope)
        """
        self._scope_factory = scope_factory

    def execute(self, fixture: FixtureReference, test: Any = None) -> None:
        if isinstance(fixture, CallableFixture):
            fixture()
        elif isinstance(fixture, ScriptFixture):
            with self._open_scope() as context:
                runpy.run_path(str(fixture.path), init_globals=self.script_globals(context, test))
        else:
            raise TypeError(f"Unsupported fixture reference: {fixture!r}")

    @staticmethod
    def script_globals(context: Optional[Dict[str, Any]] = None, test: Any = None) -> Dict[str, Any]:
        script_globals = dict(context or {})
        script_globals["test"] = test
        return script_globals

    def _open_scope(self) -> ContextManager[Dict[str, Any]]:
        if self._scope_factory is None:
            return nullcontext({})
        return self._scope_factory()


class RecordingFixtureExecutor(IFixtureExecutor):
    """
    Records executed fixtures instead of running them.

    Used for dry runs and tests. Failures can be injected per fixture.
    """

    def __init__(self, failures: Optional[Dict[FixtureReference, BaseException]] = None):
        self.executed = []
        self._failures = dict(failures or {})

    def fail_on(self, fixture: FixtureReference, error: BaseException) -> None:
        self._failures[fixture] = error

    def execute(self, fixture: FixtureReference, test: Any = None) -> None:
        self.executed.append(fixture)
        if fixture in self._failures:
            raise self._failures[fixture]
