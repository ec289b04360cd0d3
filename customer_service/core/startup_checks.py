from __future__ import annotations

import logging
from pathlib import Path

from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy.engine import Engine

from customer_service.core import config

logger = logging.getLogger(__name__)
MIGRATIONS_PREFIX = "[MIGRATIONS]"


def validate_database_environment(database_url: str | None = None) -> None:
    url = database_url or config.DATABASE_URL
    if config.IS_PROD and url.startswith("sqlite"):
        logger.critical("%s SQLite is forbidden in production", MIGRATIONS_PREFIX)
        raise RuntimeError("SQLite is forbidden in production environment")


def _script_heads(alembic_config_path: Path) -> set[str]:
    if not alembic_config_path.exists():
        logger.critical("%s alembic config not found path=%s", MIGRATIONS_PREFIX, alembic_config_path)
        raise RuntimeError("alembic config not found")
    return set(ScriptDirectory.from_config(Config(str(alembic_config_path))).get_heads())


def _database_heads(engine: Engine) -> set[str]:
    with engine.connect() as connection:
        return set(MigrationContext.configure(connection).get_current_heads())


def ensure_migrations_applied(*, engine: Engine, alembic_config_path: Path) -> None:
    """Refuse to serve when the schema is behind the Alembic heads.

    The unique constraint on ``customers.phone`` lives in the migrations, and
    the upsert depends on it.
    """
    if config.ENVIRONMENT == "test":
        logger.info("%s skipped migration check in test environment", MIGRATIONS_PREFIX)
        return

    expected = _script_heads(alembic_config_path)
    applied = _database_heads(engine)

    if not applied:
        logger.critical("%s database carries no alembic revision", MIGRATIONS_PREFIX)
        raise RuntimeError("Database has no migration state")
    if applied != expected:
        logger.critical(
            "%s pending migration detected applied=%s expected=%s",
            MIGRATIONS_PREFIX,
            sorted(applied),
            sorted(expected),
        )
        raise RuntimeError("Pending migrations detected")

    logger.info("%s migration state verified heads=%s", MIGRATIONS_PREFIX, sorted(applied))
