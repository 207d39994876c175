"""
Tests for DefaultFixtureExecutor.
"""

import pytest
from contextlib import contextmanager
from typing import List

from datafix.domain.models import ScriptFixture
from datafix.infrastructure.execution import DefaultFixtureExecutor

from test_datafix.helpers import SampleTest, write_fixture

RECORD_SCRIPT = "seen.append((test.name, marker))\n"


class TestDefaultFixtureExecutor:

    def test_script_gets_scope_globals_and_test(self, tmp_path):
        seen: List = []
        events: List[str] = []

        @contextmanager
        def scope():
            events.append("open")
            yield {"seen": seen, "marker": "scoped"}
            events.append("close")

        path = write_fixture(tmp_path, "record.py", RECORD_SCRIPT)

        DefaultFixtureExecutor(scope_factory=scope).execute(ScriptFixture(path), SampleTest("t"))

        assert seen == [("t", "scoped")]
        assert events == ["open", "close"]

    def test_scope_sees_script_error(self, tmp_path):
        outcomes: List[str] = []

        @contextmanager
        def scope():
            try:
                yield {}
            except RuntimeError:
                outcomes.append("rolled back")
                raise

        path = write_fixture(tmp_path, "broken.py", "raise RuntimeError('broken fixture')\n")

        with pytest.raises(RuntimeError):
            DefaultFixtureExecutor(scope_factory=scope).execute(ScriptFixture(path))

        assert outcomes == ["rolled back"]

    def test_without_scope_factory_only_test_is_seeded(self, tmp_path):
        path = write_fixture(tmp_path, "names.py", "assert test is None\nassert 'session' not in dir()\n")

        DefaultFixtureExecutor().execute(ScriptFixture(path))

    def test_unknown_reference_is_type_error(self):
        with pytest.raises(TypeError, match="Unsupported"):
            DefaultFixtureExecutor().execute(object())
