"""
Tests for FixtureResolver.
"""

import os
import pytest

from datafix.application.services import FixtureResolver
from datafix.domain.models import CallableFixture, ScriptFixture, ConfigurationError
from datafix.infrastructure.metadata import MappingMetadataSource

from test_datafix.helpers import SampleTest, SampleTestCase


class TestFixtureResolverConstruction:
    """Fixture root validation."""

    def test_missing_directory_fails_fast(self, tmp_path, metadata):
        with pytest.raises(ConfigurationError, match="does not exist"):
            FixtureResolver(tmp_path / "missing", metadata)

    def test_file_is_not_a_directory(self, tmp_path, metadata):
        not_a_dir = tmp_path / "file.py"
        not_a_dir.write_text("")
        with pytest.raises(ConfigurationError):
            FixtureResolver(not_a_dir, metadata)

    def test_none_root(self, metadata):
        with pytest.raises(ConfigurationError):
            FixtureResolver(None, metadata)

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
    def test_root_symlinks_resolved(self, fixture_root, metadata, tmp_path):
        link = tmp_path / "link"
        link.symlink_to(fixture_root, target_is_directory=True)

        resolver = FixtureResolver(link, metadata)

        assert resolver.base_dir == fixture_root.resolve()


class TestFixtureResolution:
    """Identifier -> reference resolution."""

    def test_no_declarations(self, resolver):
        assert resolver.resolve(SampleTest("t")) == []

    def test_script_fixtures_in_declaration_order(self, resolver, metadata):
        test = SampleTest("t")
        metadata.register(test, method_annotations={"data_fixture": ["extra.py", "base.py", "catalog/product.py"]})

        fixtures = resolver.resolve(test)

        assert fixtures == [
            ScriptFixture(resolver.base_dir / "extra.py"),
            ScriptFixture(resolver.base_dir / "base.py"),
            ScriptFixture(resolver.base_dir / "catalog" / "product.py"),
        ]

    def test_callable_preferred_over_script(self, resolver, metadata):
        test = SampleTest("t")
        metadata.register(
            test,
            method_annotations={"data_fixture": ["createCustomer", "base.py"]},
            test_class=SampleTestCase,
        )

        fixtures = resolver.resolve(test)

        assert fixtures[0] == CallableFixture(SampleTestCase, "createCustomer")
        assert isinstance(fixtures[1], ScriptFixture)

    def test_non_callable_attribute_resolves_to_script(self, resolver, metadata):
        test = SampleTest("t")
        metadata.register(test, method_annotations={"data_fixture": "not_callable"}, test_class=SampleTestCase)

        assert resolver.resolve(test) == [ScriptFixture(resolver.base_dir / "not_callable")]

    def test_script_need_not_exist(self, resolver, metadata):
        test = SampleTest("t")
        metadata.register(test, method_annotations={"data_fixture": "nowhere.py"})

        assert resolver.resolve(test) == [ScriptFixture(resolver.base_dir / "nowhere.py")]

    def test_scopes(self, resolver, metadata):
        test = SampleTest("t")
        metadata.register(
            test,
            class_annotations={"data_fixture": "base.py"},
            method_annotations={"db_isolation": "enabled"},
        )

        assert resolver.resolve(test) == [ScriptFixture(resolver.base_dir / "base.py")]
        assert resolver.resolve(test, scope="class") == [ScriptFixture(resolver.base_dir / "base.py")]
        assert resolver.resolve(test, scope="method") == []

    def test_method_declaration_replaces_class_declaration(self, resolver, metadata):
        test = SampleTest("t")
        metadata.register(
            test,
            class_annotations={"data_fixture": "base.py"},
            method_annotations={"data_fixture": "extra.py"},
        )

        assert resolver.resolve(test) == [ScriptFixture(resolver.base_dir / "extra.py")]

    def test_custom_fixture_key(self, fixture_root):
        metadata = MappingMetadataSource()
        test = SampleTest("t")
        metadata.register(test, method_annotations={"fixture": "base.py", "data_fixture": "extra.py"})

        resolver = FixtureResolver(fixture_root, metadata, fixture_key="fixture")

        assert resolver.resolve(test) == [ScriptFixture(resolver.base_dir / "base.py")]


class TestSeparatorRejection:
    """Backslash is prohibited in declarations."""

    @pytest.mark.parametrize("identifier", [
        "catalog\\product.py",
        "\\base.py",
        "base.py\\",
        "a/b\\c.py",
    ])
    def test_backslash_rejected(self, resolver, metadata, identifier):
        test = SampleTest("t")
        metadata.register(test, method_annotations={"data_fixture": ["base.py", identifier]})

        with pytest.raises(ConfigurationError, match="prohibited"):
            resolver.resolve(test)

    def test_rejected_even_when_callable_exists(self, resolver):
        with pytest.raises(ConfigurationError):
            resolver.resolve_identifier("createCustomer\\", SampleTestCase)

    def test_forward_slash_allowed(self, resolver):
        assert resolver.resolve_identifier("catalog/product.py") == ScriptFixture(
            resolver.base_dir / "catalog" / "product.py"
        )
