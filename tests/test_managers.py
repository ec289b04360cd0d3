from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import customer_service.models  # noqa: F401
from customer_service.core.database import Base, build_engine
from customer_service.models.manager import Manager
from customer_service.services.managers import authenticate_manager
from customer_service.services.passwords import hash_password
from tests.fixtures_data import MANAGER, MANAGER_PASSWORD


def _build_session() -> Session:
    engine = build_engine("sqlite+pysqlite:///:memory:", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    testing_session = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = testing_session()
    db.add(Manager(**MANAGER, password_hash=hash_password(MANAGER_PASSWORD)))
    db.add(Manager(name="Antigo", login="antigo", password_hash=hash_password(MANAGER_PASSWORD), active=False))
    db.commit()
    return db


def test_authenticate_manager_accepts_valid_credentials():
    db = _build_session()

    assert authenticate_manager(db, MANAGER["login"], MANAGER_PASSWORD) is True


def test_authenticate_manager_rejects_wrong_password_and_unknown_login():
    db = _build_session()

    assert authenticate_manager(db, MANAGER["login"], "errada") is False
    assert authenticate_manager(db, "ninguem", MANAGER_PASSWORD) is False


def test_authenticate_manager_rejects_blocked_manager():
    db = _build_session()

    assert authenticate_manager(db, "antigo", MANAGER_PASSWORD) is False
