"""
Per-test declarations.

Annotations are kept the way a test runner exposes them: one map for the
test class and one for the test method, each ``name -> list of values``.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


Annotations = Dict[str, List[str]]

SCOPE_CLASS = "class"
SCOPE_METHOD = "method"


class IsolationState(Enum):
    """Isolation mode declared for a test."""
    DEFAULT = "default"      # nothing declared
    DISABLED = "disabled"
    ENABLED = "enabled"      # any explicit value other than "disabled"

    @classmethod
    def from_values(cls, values: Optional[List[str]]) -> "IsolationState":
        """
        Derive the state from the raw annotation values.

        Only the exact declaration ``["disabled"]`` counts as disabled. Values
        other than "enabled" and "disabled" never get this far in a wired
        engine: DbIsolationHandler sees every request first and rejects them
        with ConfigurationError.
        """
        if values is None:
            return cls.DEFAULT
        if list(values) == [cls.DISABLED.value]:
            return cls.DISABLED
        return cls.ENABLED


@dataclass
class TestAnnotations:
    """Class-level and method-level declarations of one test."""
    __test__ = False  # not a pytest test class

    class_annotations: Annotations = field(default_factory=dict)
    method_annotations: Annotations = field(default_factory=dict)

    def merged(self) -> Annotations:
        """Key-wise merge, method declarations override class ones."""
        result = dict(self.class_annotations)
        result.update(self.method_annotations)
        return result

    def for_scope(self, scope: Optional[str] = None) -> Annotations:
        """
        Annotations visible at the given granularity.

        Args:
            scope: None for the merged view, "class" or "method"
        """
        if scope is None:
            return self.merged()
        if scope == SCOPE_CLASS:
            return self.class_annotations
        if scope == SCOPE_METHOD:
            return self.method_annotations
        raise ValueError(f"Unknown annotation scope: {scope!r}")


__all__ = [
    "Annotations",
    "IsolationState",
    "TestAnnotations",
    "SCOPE_CLASS",
    "SCOPE_METHOD",
]
