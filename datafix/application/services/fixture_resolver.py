"""
Fixture Resolver.

Turns raw fixture identifiers declared on a test into executable references.

An identifier names either a routine on the test class (callable fixture) or
a file relative to the fixture root (script fixture). The routine wins when
both could match.
"""

import os
from pathlib import Path
from typing import Any, List, Optional, Union

from datafix.config import DEFAULT_FIXTURE_KEY
from datafix.domain.interfaces.metadata_source import ITestMetadataSource
from datafix.domain.models.exceptions import ConfigurationError
from datafix.domain.models.fixture import CallableFixture, FixtureReference, ScriptFixture

# Forward slash is the only separator allowed in declarations
PROHIBITED_SEPARATOR = "\\"


class FixtureResolver:
    """
    Resolves fixture declarations of a test.

    Usage:
        resolver = FixtureResolver("tests/fixtures", metadata_source)
        fixtures = resolver.resolve(test)             # class + method view
        own = resolver.resolve(test, scope="method")  # method only
    """

    def __init__(
        self,
        fixture_base_dir: Union[str, Path],
        metadata_source: ITestMetadataSource,
        fixture_key: str = DEFAULT_FIXTURE_KEY,
    ):
        """
        Args:
            fixture_base_dir: Existing directory script fixtures live under
            metadata_source: Source of per-test declarations
            fixture_key: Annotation naming fixtures

        Raises:
            ConfigurationError: If the directory does not exist
        """
        if fixture_base_dir is None or not os.path.isdir(fixture_base_dir):
            raise ConfigurationError(f"Fixture base directory '{fixture_base_dir}' does not exist.")
        self._base_dir = Path(os.path.realpath(fixture_base_dir))
        self._metadata = metadata_source
        self._fixture_key = fixture_key

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    @property
    def metadata_source(self) -> ITestMetadataSource:
        return self._metadata

    def resolve(self, test: Any, scope: Optional[str] = None) -> List[FixtureReference]:
        """
        Resolve the fixtures declared for a test, in declaration order.

        Args:
            test: Test object understood by the metadata source
            scope: None for the merged class/method view, "class" or "method"

        Returns:
            List of resolved references (may be empty)

        Raises:
            ConfigurationError: If an identifier contains a backslash
        """
        annotations = self._metadata.annotations(test).for_scope(scope)
        identifiers = annotations.get(self._fixture_key) or []
        owner = self._metadata.test_class(test)
        return [self.resolve_identifier(identifier, owner) for identifier in identifiers]

    def resolve_identifier(self, identifier: str, owner: Optional[type] = None) -> FixtureReference:
        """Resolve a single identifier against the owning test class."""
        if PROHIBITED_SEPARATOR in identifier:
            raise ConfigurationError(
                f'Directory separator "{PROHIBITED_SEPARATOR}" is prohibited in fixture declaration.'
            )
        if owner is not None:
            candidate = CallableFixture(owner=owner, method_name=identifier)
            if candidate.exists():
                return candidate
        return ScriptFixture(path=Path(f"{self._base_dir}/{identifier}"))
