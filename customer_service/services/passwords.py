from __future__ import annotations

import base64
import hashlib
import logging
from typing import Optional

import bcrypt

from customer_service.core.errors import InternalError

logger = logging.getLogger(__name__)

BCRYPT_MAX_BYTES = 72


def _normalize_password_for_bcrypt(password: str) -> bytes:
    """
    bcrypt só considera até 72 bytes.
    Senhas maiores viram um digest SHA-256 (base64, 44 bytes), assim nenhum
    sufixo é ignorado em silêncio.
    """
    pw = (password or "").encode("utf-8")
    if len(pw) <= BCRYPT_MAX_BYTES:
        return pw
    return base64.b64encode(hashlib.sha256(pw).digest())


def hash_password(password: str) -> str:
    try:
        salt = bcrypt.gensalt()
        hashed = bcrypt.hashpw(_normalize_password_for_bcrypt(password), salt)
    except (ValueError, TypeError, OSError) as exc:
        logger.error("password hashing failed: %s", type(exc).__name__)
        raise InternalError("password hashing failed") from exc
    return hashed.decode("utf-8")


def verify_password(plain_password: str, password_hash: Optional[str]) -> bool:
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(
            _normalize_password_for_bcrypt(plain_password),
            password_hash.encode("utf-8"),
        )
    except (ValueError, TypeError):
        return False
