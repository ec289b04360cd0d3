import pytest
from sqlalchemy import text
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from customer_service.core import database
from customer_service.core.database import build_engine, get_db, store_errors
from customer_service.core.errors import InternalError, NotFound


def _build_session() -> Session:
    engine = build_engine("sqlite+pysqlite:///:memory:", poolclass=StaticPool)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)()


def test_sqlite_engine_enforces_foreign_keys():
    db = _build_session()

    assert db.execute(text("PRAGMA foreign_keys")).scalar() == 1


def test_store_errors_maps_sqlalchemy_errors_to_internal_error():
    db = _build_session()
    rolled_back = []
    db.rollback = lambda: rolled_back.append(True)

    with pytest.raises(InternalError) as exc:
        with store_errors(db, "customers.test"):
            raise OperationalError("SELECT 1", {}, Exception("timeout"))

    assert rolled_back == [True]
    assert isinstance(exc.value.__cause__, OperationalError)
    assert "customers.test" in str(exc.value)


def test_store_errors_lets_domain_errors_through():
    db = _build_session()

    with pytest.raises(NotFound):
        with store_errors(db, "customers.test"):
            raise NotFound("missing")


def test_get_db_yields_session_and_closes_it(monkeypatch):
    closed = []

    class _FakeSession:
        def close(self):
            closed.append(True)

    monkeypatch.setattr(database, "SessionLocal", _FakeSession)

    generator = get_db()
    session = next(generator)
    assert isinstance(session, _FakeSession)
    with pytest.raises(StopIteration):
        next(generator)
    assert closed == [True]
