"""
Shared test doubles for DataFix tests.

Provides:
- SampleTestCase: test class owning callable fixtures (and one rollback)
- SampleTest: hashable stand-in for a test object
- write_fixture: creates script fixtures under a fixture root
"""

from pathlib import Path
from typing import List

CALLS: List[str] = []


class SampleTestCase:
    """Test class owning callable fixtures."""

    @staticmethod
    def createCustomer():
        CALLS.append("createCustomer")

    @staticmethod
    def createCustomerRollback():
        CALLS.append("createCustomerRollback")

    @classmethod
    def createOrder(cls):
        CALLS.append("createOrder")

    not_callable = "value"


class SampleTest:
    """Hashable stand-in for a test object."""

    def __init__(self, name: str):
        self.name = name

    def __repr__(self) -> str:
        return f"SampleTest({self.name})"


def write_fixture(root: Path, name: str, body: str = "") -> Path:
    path = root / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(body)
    return path
