from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from customer_service.core.config import (
    DATABASE_URL,
    DB_POOL_SIZE,
    DB_POOL_TIMEOUT_SECONDS,
    DB_STATEMENT_TIMEOUT_MS,
)
from customer_service.core.errors import InternalError

logger = logging.getLogger(__name__)

Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    # SQLite ignora ON DELETE CASCADE sem este pragma.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str, **kwargs: Any) -> Engine:
    """Create an engine with the pool and deadline settings for ``url``.

    PostgreSQL connections get a server-side ``statement_timeout`` so a hung
    query is cancelled by the store instead of blocking the worker forever.
    """
    if url.startswith("sqlite"):
        connect_args = kwargs.pop("connect_args", {})
        connect_args.setdefault("check_same_thread", False)
        engine = create_engine(url, connect_args=connect_args, **kwargs)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    connect_args = kwargs.pop("connect_args", {})
    if url.startswith("postgresql"):
        connect_args.setdefault("options", f"-c statement_timeout={DB_STATEMENT_TIMEOUT_MS}")
    kwargs.setdefault("pool_size", DB_POOL_SIZE)
    kwargs.setdefault("pool_timeout", DB_POOL_TIMEOUT_SECONDS)
    kwargs.setdefault("pool_pre_ping", True)
    return create_engine(url, connect_args=connect_args, **kwargs)


engine = build_engine(DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()



@contextmanager
def store_errors(db: Session, operation: str) -> Iterator[None]:
    """Roll back and re-raise any persistence failure as ``InternalError``.

    Errors raised by the core itself (``NotFound`` and friends) pass through.
    """
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("store failure operation=%s", operation, extra={"operation": operation})
        raise InternalError(f"{operation} failed") from exc
