"""
Pytest marker metadata source.

Declarations are pytest markers on the test class and the test function:

    @pytest.mark.datafix_fixture("catalog/category.py")
    class TestCategory:

        @pytest.mark.datafix_fixture("catalog/product.py", "createProduct")
        @pytest.mark.datafix_isolation("enabled")
        def test_assign(self):
            ...
"""

from typing import Any, Dict, List, Optional

from datafix.config import DEFAULT_DEPENDS_KEY, DEFAULT_FIXTURE_KEY, DEFAULT_ISOLATION_KEY
from datafix.domain.interfaces.metadata_source import ITestMetadataSource
from datafix.domain.models.annotations import Annotations, TestAnnotations

FIXTURE_MARKER = "datafix_fixture"
ISOLATION_MARKER = "datafix_isolation"
DEPENDS_MARKER = "datafix_depends"

MARKERS = {
    FIXTURE_MARKER: "datafix_fixture(*ids): data fixtures (methods or files under the fixture root) to apply",
    ISOLATION_MARKER: 'datafix_isolation(mode): "enabled" or "disabled" transaction isolation',
    DEPENDS_MARKER: "datafix_depends(*tests): keep this test's fixtures for the tests that follow",
}


class PytestMarkerMetadataSource(ITestMetadataSource):
    """Maps datafix markers of a pytest Item to annotations."""

    def __init__(
        self,
        fixture_key: str = DEFAULT_FIXTURE_KEY,
        isolation_key: str = DEFAULT_ISOLATION_KEY,
        depends_key: str = DEFAULT_DEPENDS_KEY,
    ):
        self._keys: Dict[str, str] = {
            FIXTURE_MARKER: fixture_key,
            ISOLATION_MARKER: isolation_key,
            DEPENDS_MARKER: depends_key,
        }

    def annotations(self, test: Any) -> TestAnnotations:
        return TestAnnotations(
            class_annotations=self._collect(getattr(test, "cls", None)),
            method_annotations=self._collect(getattr(test, "function", None)),
        )

    def test_class(self, test: Any) -> Optional[type]:
        return getattr(test, "cls", None)

    def _collect(self, obj: Any) -> Annotations:
        result: Annotations = {}
        if obj is None:
            return result
        # pytest appends marks innermost first; restore top-down order
        marks: List[Any] = list(reversed(getattr(obj, "pytestmark", [])))
        for mark in marks:
            key = self._keys.get(mark.name)
            if key is None:
                continue
            result.setdefault(key, []).extend(str(arg) for arg in mark.args)
        return result
