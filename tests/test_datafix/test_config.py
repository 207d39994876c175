"""
Tests for DataFixConfig and the global config accessors.
"""

import pytest

from datafix.config import DataFixConfig, get_config, set_config, reset_config


@pytest.fixture(autouse=True)
def clean_global_config():
    reset_config()
    yield
    reset_config()


class TestDataFixConfig:

    def test_defaults(self):
        config = DataFixConfig()

        assert config.fixture_base_dir is None
        assert config.db_url is None
        assert config.fixture_key == "data_fixture"
        assert config.isolation_key == "db_isolation"
        assert config.depends_key == "depends"
        assert config.callable_rollback_suffix == "Rollback"
        assert config.script_rollback_suffix == "_rollback"
        assert config.log_sql is False

    def test_for_testing(self):
        config = DataFixConfig.for_testing("tests/fixtures")

        assert config.fixture_base_dir == "tests/fixtures"
        assert config.db_url is None

    def test_for_database(self):
        config = DataFixConfig.for_database("tests/fixtures", "sqlite:///test.db", log_sql=True)

        assert config.db_url == "sqlite:///test.db"
        assert config.log_sql is True

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("DATAFIX_FIXTURE_DIR", "/srv/fixtures")
        monkeypatch.setenv("DATAFIX_DATABASE_URL", "sqlite:///env.db")
        monkeypatch.setenv("DATAFIX_LOG_SQL", "TRUE")
        monkeypatch.setenv("DATAFIX_LOG_LEVEL", "DEBUG")

        config = DataFixConfig.from_env()

        assert config.fixture_base_dir == "/srv/fixtures"
        assert config.db_url == "sqlite:///env.db"
        assert config.log_sql is True
        assert config.log_level == "DEBUG"

    def test_from_env_defaults(self, monkeypatch):
        for name in ("DATAFIX_FIXTURE_DIR", "DATAFIX_DATABASE_URL", "DATAFIX_LOG_SQL", "DATAFIX_LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)

        config = DataFixConfig.from_env()

        assert config.fixture_base_dir is None
        assert config.log_sql is False
        assert config.log_level == "INFO"

    def test_dict_round_trip(self):
        config = DataFixConfig(fixture_base_dir="fx", fixture_key="fixture", callable_rollback_suffix="_undo")

        assert DataFixConfig.from_dict(config.to_dict()) == config

    def test_from_partial_dict(self):
        config = DataFixConfig.from_dict({"fixture_base_dir": "fx"})

        assert config.isolation_key == "db_isolation"
        assert config.script_rollback_suffix == "_rollback"


class TestGlobalConfig:

    def test_get_config_reads_env_once(self, monkeypatch):
        monkeypatch.setenv("DATAFIX_FIXTURE_DIR", "first")
        config = get_config()
        monkeypatch.setenv("DATAFIX_FIXTURE_DIR", "second")

        assert get_config() is config
        assert config.fixture_base_dir == "first"

    def test_set_and_reset(self, monkeypatch):
        monkeypatch.delenv("DATAFIX_FIXTURE_DIR", raising=False)
        custom = DataFixConfig.for_testing("custom")
        set_config(custom)
        assert get_config() is custom

        reset_config()

        assert get_config() is not custom
