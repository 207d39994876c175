"""
Test Metadata Source Interface.

Supplies per-test declarations (fixtures, isolation mode, dependencies)
without the engine knowing how the test runner stores them.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from datafix.domain.models.annotations import TestAnnotations


class ITestMetadataSource(ABC):
    """Reads declarations attached to a test."""

    @abstractmethod
    def annotations(self, test: Any) -> TestAnnotations:
        """
        Get class-level and method-level declarations of a test.

        Args:
            test: Test object as handed over by the test runner

        Returns:
            TestAnnotations (missing levels are empty maps)
        """
        pass

    def test_class(self, test: Any) -> Optional[type]:
        """
        Type that owns callable fixtures of the test.

        Returns:
            The class, or None when the test has no owning class
        """
        return type(test)
