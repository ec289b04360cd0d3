from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List

from sqlalchemy import delete, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from customer_service.core.database import store_errors
from customer_service.core.errors import InternalError, NotFound
from customer_service.models.customer import Customer
from customer_service.schemas.customer import CustomerIn, CustomerRead
from customer_service.services.passwords import hash_password

logger = logging.getLogger(__name__)

_customers = Customer.__table__
_READ_COLUMNS = (
    _customers.c.id,
    _customers.c.name,
    _customers.c.phone,
    _customers.c.active,
    _customers.c.created,
)

_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def _now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _read(row: Any) -> CustomerRead:
    return CustomerRead.model_validate(dict(row._mapping))


def get_customer_by_id(db: Session, customer_id: int) -> CustomerRead:
    with store_errors(db, "customers.get_by_id"):
        customer = db.query(Customer).filter(Customer.id == customer_id).first()
    if customer is None:
        raise NotFound(f"customer {customer_id} not found")
    return CustomerRead.model_validate(customer)


def list_customers(db: Session) -> List[CustomerRead]:
    with store_errors(db, "customers.list"):
        customers = db.query(Customer).all()
    return [CustomerRead.model_validate(customer) for customer in customers]


def list_active_customers(db: Session) -> List[CustomerRead]:
    with store_errors(db, "customers.list_active"):
        customers = db.query(Customer).filter(Customer.active.is_(True)).all()
    return [CustomerRead.model_validate(customer) for customer in customers]


def _upsert_by_phone(db: Session, customer: CustomerIn) -> CustomerRead:
    dialect = db.get_bind().dialect.name
    insert = _UPSERT_INSERTS.get(dialect)
    if insert is None:
        raise InternalError(f"upsert not supported on dialect {dialect}")

    stmt = insert(_customers).values(
        name=customer.name,
        phone=customer.phone,
        active=customer.active,
        created=customer.created or _now(),
    )
    # Em conflito sobrescreve name/active/created com os valores recebidos.
    stmt = stmt.on_conflict_do_update(
        index_elements=[_customers.c.phone],
        set_={
            "name": stmt.excluded.name,
            "active": stmt.excluded.active,
            "created": stmt.excluded.created,
        },
    ).returning(*_READ_COLUMNS)

    with store_errors(db, "customers.upsert"):
        row = db.execute(stmt).one()
        db.commit()

    logger.info("customer upserted id=%s", row.id)
    return _read(row)


def _update_by_id(db: Session, customer: CustomerIn) -> CustomerRead:
    values: Dict[str, Any] = {
        "name": customer.name,
        "phone": customer.phone,
        "active": customer.active,
    }
    if customer.created is not None:
        values["created"] = customer.created

    stmt = (
        update(_customers)
        .where(_customers.c.id == customer.id)
        .values(**values)
        .returning(*_READ_COLUMNS)
    )

    with store_errors(db, "customers.update"):
        row = db.execute(stmt).first()
        if row is None:
            db.rollback()
            raise NotFound(f"customer {customer.id} not found")
        db.commit()

    logger.info("customer updated id=%s", row.id)
    return _read(row)


def save_customer(db: Session, customer: CustomerIn) -> CustomerRead:
    """Create-or-update a customer.

    Without an id the row is upserted on ``phone``; with an id the existing
    row is overwritten and ``NotFound`` is raised when there is none.
    """
    if not customer.id:
        return _upsert_by_phone(db, customer)
    return _update_by_id(db, customer)


def create_customer(db: Session, customer: CustomerIn, password: str) -> CustomerRead:
    """Register a new customer with a password. Never updates."""
    if customer.id:
        raise InternalError("create_customer does not accept an existing id")

    password_hash = hash_password(password)
    row = Customer(
        name=customer.name,
        phone=customer.phone,
        password_hash=password_hash,
        active=customer.active,
        created=customer.created or _now(),
    )

    with store_errors(db, "customers.create"):
        db.add(row)
        db.commit()
        db.refresh(row)

    logger.info("customer created id=%s", row.id)
    return CustomerRead.model_validate(row)


def remove_customer_by_id(db: Session, customer_id: int) -> None:
    with store_errors(db, "customers.remove"):
        result = db.execute(delete(_customers).where(_customers.c.id == customer_id))
        if result.rowcount == 0:
            db.rollback()
            raise NotFound(f"customer {customer_id} not found")
        db.commit()

    logger.info("customer removed id=%s", customer_id)


def _set_active(db: Session, customer_id: int, active: bool) -> None:
    stmt = (
        update(_customers)
        .where(_customers.c.id == customer_id)
        .values(active=active)
        .returning(_customers.c.id)
    )
    with store_errors(db, "customers.set_active"):
        row = db.execute(stmt).first()
        if row is None:
            db.rollback()
            raise NotFound(f"customer {customer_id} not found")
        db.commit()

    logger.info("customer active changed id=%s active=%s", customer_id, active)


def block_customer_by_id(db: Session, customer_id: int) -> None:
    _set_active(db, customer_id, False)


def unblock_customer_by_id(db: Session, customer_id: int) -> None:
    _set_active(db, customer_id, True)
