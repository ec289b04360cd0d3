from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from customer_service.core.database import store_errors
from customer_service.models.manager import Manager
from customer_service.services.passwords import verify_password

logger = logging.getLogger(__name__)


def authenticate_manager(db: Session, login: str, password: str) -> bool:
    """Check back-office credentials (login + password) of an active manager."""
    with store_errors(db, "managers.authenticate"):
        manager = (
            db.query(Manager)
            .filter(Manager.login == login, Manager.active.is_(True))
            .first()
        )

    if manager is None:
        logger.info("manager auth refused: unknown or blocked login")
        return False

    if not verify_password(password, manager.password_hash):
        logger.info("manager auth refused: wrong password manager_id=%s", manager.id)
        return False

    return True
