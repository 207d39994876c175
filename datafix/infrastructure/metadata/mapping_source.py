"""
Mapping-backed metadata sources.

- MappingMetadataSource: declarations registered per test object
- AttributeMetadataSource: declarations attached with the ``annotate``
  decorator to unittest.TestCase classes and test methods

Usage:
    @annotate(data_fixture="catalog/category.py")
    class CategoryTest(unittest.TestCase):

        @annotate(data_fixture=["catalog/product.py", "createCustomer"], db_isolation="enabled")
        def test_assign(self):
            ...
"""

from typing import Any, Dict, Hashable, Iterable, Optional, Union

from datafix.domain.interfaces.metadata_source import ITestMetadataSource
from datafix.domain.models.annotations import Annotations, TestAnnotations

ANNOTATIONS_ATTRIBUTE = "__datafix_annotations__"

DeclarationValue = Union[str, Iterable[str]]


def normalize_annotations(declarations: Optional[Dict[str, DeclarationValue]]) -> Annotations:
    """Turn ``{"key": "value"}`` / ``{"key": [...]}`` into ``{"key": ["value", ...]}``."""
    result: Annotations = {}
    for key, value in (declarations or {}).items():
        result[key] = [value] if isinstance(value, str) else list(value)
    return result


def annotate(**declarations: DeclarationValue):
    """
    Attach declarations to a test class or test method.

    Stacked decorators extend the value lists of the same key.
    """
    def decorator(obj):
        existing = getattr(obj, ANNOTATIONS_ATTRIBUTE, {})
        merged = {key: list(values) for key, values in existing.items()}
        for key, values in normalize_annotations(declarations).items():
            merged.setdefault(key, []).extend(values)
        setattr(obj, ANNOTATIONS_ATTRIBUTE, merged)
        return obj
    return decorator


class MappingMetadataSource(ITestMetadataSource):
    """
    In-memory declarations keyed by test.

    Unknown tests have no declarations.
    """

    def __init__(self):
        self._annotations: Dict[Hashable, TestAnnotations] = {}
        self._classes: Dict[Hashable, Optional[type]] = {}

    def register(
        self,
        test: Hashable,
        class_annotations: Optional[Dict[str, DeclarationValue]] = None,
        method_annotations: Optional[Dict[str, DeclarationValue]] = None,
        test_class: Optional[type] = None,
    ) -> None:
        """
        Declare fixtures for a test.

        Args:
            test: Test object (or any hashable test id)
            class_annotations: Class-level declarations
            method_annotations: Method-level declarations
            test_class: Owner of callable fixtures (defaults to type(test))
        """
        self._annotations[test] = TestAnnotations(
            class_annotations=normalize_annotations(class_annotations),
            method_annotations=normalize_annotations(method_annotations),
        )
        if test_class is not None:
            self._classes[test] = test_class

    def annotations(self, test: Any) -> TestAnnotations:
        return self._annotations.get(test) or TestAnnotations()

    def test_class(self, test: Any) -> Optional[type]:
        if test in self._classes:
            return self._classes[test]
        return type(test)


class AttributeMetadataSource(ITestMetadataSource):
    """Reads ``annotate`` declarations from unittest.TestCase instances."""

    def annotations(self, test: Any) -> TestAnnotations:
        test_class = type(test)
        method_name = getattr(test, "_testMethodName", None)
        method = getattr(test_class, method_name, None) if method_name else None
        return TestAnnotations(
            class_annotations=dict(getattr(test_class, ANNOTATIONS_ATTRIBUTE, {})),
            method_annotations=dict(getattr(method, ANNOTATIONS_ATTRIBUTE, {})),
        )
