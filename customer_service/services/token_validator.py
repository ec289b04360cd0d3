from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from customer_service.core.database import store_errors
from customer_service.core.errors import ExpiredToken, NoSuchUser
from customer_service.core.request_context import bind_customer_id
from customer_service.models.customer_token import CustomerToken

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def resolve_token(db: Session, token: str, *, now: Optional[datetime] = None) -> int:
    """Return the customer id behind ``token``.

    Read only: the expiry is never extended and expired rows are not removed.
    The customer is bound to the logging context only on success; any earlier
    binding is dropped first. The transport still calls
    ``clear_request_context()`` when a request starts, since worker threads
    are reused.
    """
    bind_customer_id(None)
    with store_errors(db, "tokens.resolve"):
        row = (
            db.query(CustomerToken.customer_id, CustomerToken.expire)
            .filter(CustomerToken.token == token)
            .first()
        )

    if row is None:
        raise NoSuchUser("token not recognized")

    current = now or _now()
    if current >= row.expire:
        logger.info("token expired customer_id=%s", row.customer_id)
        raise ExpiredToken("token is expired")

    bind_customer_id(row.customer_id)
    return int(row.customer_id)
