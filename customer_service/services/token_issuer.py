from __future__ import annotations

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from sqlalchemy.orm import Session

from customer_service.core.config import TOKEN_BYTES, TOKEN_EXPIRE_MINUTES
from customer_service.core.database import store_errors
from customer_service.core.errors import InternalError, InvalidCredentials
from customer_service.models.customer import Customer
from customer_service.models.customer_token import CustomerToken
from customer_service.services.passwords import hash_password, verify_password

logger = logging.getLogger(__name__)

# Compared against when the phone is unknown or has no password, so every
# refusal costs one bcrypt check.
_DUMMY_PASSWORD_HASH = hash_password(secrets.token_hex(32))


def _now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _draw_token(random_source: Callable[[int], bytes], size: int) -> str:
    try:
        buffer = random_source(size)
    except (OSError, NotImplementedError) as exc:
        raise InternalError("random source failed") from exc
    # Leitura curta nunca pode virar um token fraco.
    if buffer is None or len(buffer) != size:
        raise InternalError("random source returned a short read")
    return buffer.hex()


def issue_token(
    db: Session,
    phone: str,
    password: str,
    *,
    expire: Optional[datetime] = None,
    now: Optional[datetime] = None,
    random_source: Callable[[int], bytes] = secrets.token_bytes,
) -> str:
    """Exchange a customer's phone and password for a new bearer token.

    Unknown phone and wrong password both raise ``InvalidCredentials`` so a
    caller cannot probe which phones are registered. Earlier tokens of the
    same customer stay valid.
    """
    with store_errors(db, "tokens.lookup"):
        row = (
            db.query(Customer.id, Customer.password_hash)
            .filter(Customer.phone == phone)
            .first()
        )

    stored_hash = row.password_hash if row is not None else None
    matched = verify_password(password, stored_hash or _DUMMY_PASSWORD_HASH)
    if row is None or not stored_hash or not matched:
        logger.info("token refused: invalid credentials")
        raise InvalidCredentials("invalid credentials")

    token = _draw_token(random_source, TOKEN_BYTES)
    if expire is None:
        expire = (now or _now()) + timedelta(minutes=TOKEN_EXPIRE_MINUTES)

    with store_errors(db, "tokens.issue"):
        db.add(CustomerToken(token=token, customer_id=row.id, expire=expire))
        db.commit()

    logger.info("token issued customer_id=%s expire=%s", row.id, expire.isoformat())
    return token
