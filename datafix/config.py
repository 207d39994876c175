"""
DataFix Configuration.

Centralized configuration for the fixture lifecycle engine.

Usage:
    from datafix.config import DataFixConfig

    # For unit tests (no database)
    config = DataFixConfig.for_testing("tests/fixtures")

    # With a SQLAlchemy-managed transaction boundary
    config = DataFixConfig.for_database("tests/fixtures", "sqlite:///test.db")

    # From environment
    config = DataFixConfig.from_env()
"""

import os
from dataclasses import dataclass
from typing import Optional, Dict, Any


DEFAULT_FIXTURE_KEY = "data_fixture"
DEFAULT_ISOLATION_KEY = "db_isolation"
DEFAULT_DEPENDS_KEY = "depends"
DEFAULT_CALLABLE_ROLLBACK_SUFFIX = "Rollback"
DEFAULT_SCRIPT_ROLLBACK_SUFFIX = "_rollback"


@dataclass
class DataFixConfig:
    """
    Fixture engine configuration.

    Attributes:
        fixture_base_dir: Root directory script fixtures are resolved against
        db_url: Database URL for the transaction boundary (None: in-memory)
        fixture_key: Annotation naming fixtures to apply
        isolation_key: Annotation holding the isolation mode
        depends_key: Annotation declaring a dependency on another test
        callable_rollback_suffix: Appended to a callable fixture's name
        script_rollback_suffix: Appended to a script fixture's file stem
        log_sql: Echo SQL issued through the transactional connection
        log_level: Level applied to the "datafix" logger by the pytest adapter
    """
    fixture_base_dir: Optional[str] = None
    db_url: Optional[str] = None
    fixture_key: str = DEFAULT_FIXTURE_KEY
    isolation_key: str = DEFAULT_ISOLATION_KEY
    depends_key: str = DEFAULT_DEPENDS_KEY
    callable_rollback_suffix: str = DEFAULT_CALLABLE_ROLLBACK_SUFFIX
    script_rollback_suffix: str = DEFAULT_SCRIPT_ROLLBACK_SUFFIX
    log_sql: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "DataFixConfig":
        """
        Create config from environment variables.

        Environment Variables:
            DATAFIX_FIXTURE_DIR: Fixture base directory
            DATAFIX_DATABASE_URL: Database URL for the transaction boundary
            DATAFIX_LOG_SQL: Log SQL statements (default: "false")
            DATAFIX_LOG_LEVEL: Logging level (default: "INFO")

        Returns:
            DataFixConfig instance
        """
        return cls(
            fixture_base_dir=os.getenv("DATAFIX_FIXTURE_DIR"),
            db_url=os.getenv("DATAFIX_DATABASE_URL"),
            log_sql=os.getenv("DATAFIX_LOG_SQL", "false").lower() == "true",
            log_level=os.getenv("DATAFIX_LOG_LEVEL", "INFO"),
        )

    @classmethod
    def for_testing(cls, fixture_base_dir: str) -> "DataFixConfig":
        """Config for unit tests (in-memory transaction boundary)."""
        return cls(fixture_base_dir=fixture_base_dir, db_url=None)

    @classmethod
    def for_database(cls, fixture_base_dir: str, db_url: str, log_sql: bool = False) -> "DataFixConfig":
        """Config with a SQLAlchemy transaction boundary."""
        return cls(fixture_base_dir=fixture_base_dir, db_url=db_url, log_sql=log_sql)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "fixture_base_dir": self.fixture_base_dir,
            "db_url": self.db_url,
            "fixture_key": self.fixture_key,
            "isolation_key": self.isolation_key,
            "depends_key": self.depends_key,
            "callable_rollback_suffix": self.callable_rollback_suffix,
            "script_rollback_suffix": self.script_rollback_suffix,
            "log_sql": self.log_sql,
            "log_level": self.log_level,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DataFixConfig":
        """Deserialize from dictionary."""
        return cls(
            fixture_base_dir=data.get("fixture_base_dir"),
            db_url=data.get("db_url"),
            fixture_key=data.get("fixture_key", DEFAULT_FIXTURE_KEY),
            isolation_key=data.get("isolation_key", DEFAULT_ISOLATION_KEY),
            depends_key=data.get("depends_key", DEFAULT_DEPENDS_KEY),
            callable_rollback_suffix=data.get("callable_rollback_suffix", DEFAULT_CALLABLE_ROLLBACK_SUFFIX),
            script_rollback_suffix=data.get("script_rollback_suffix", DEFAULT_SCRIPT_ROLLBACK_SUFFIX),
            log_sql=data.get("log_sql", False),
            log_level=data.get("log_level", "INFO"),
        )


# Global config instance (lazily initialized)
_global_config: Optional[DataFixConfig] = None


def get_config() -> DataFixConfig:
    """
    Get global DataFix configuration.

    Initializes from environment on first call.
    """
    global _global_config
    if _global_config is None:
        _global_config = DataFixConfig.from_env()
    return _global_config


def set_config(config: DataFixConfig) -> None:
    """Set global DataFix configuration (tests override it this way)."""
    global _global_config
    _global_config = config


def reset_config() -> None:
    """
    Reset global configuration to None.

    Next call to get_config() will reinitialize from environment.
    """
    global _global_config
    _global_config = None
