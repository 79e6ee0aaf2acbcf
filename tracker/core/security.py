# tracker/core/security.py
"""Password hashing and bearer token create/verify."""
import logging
import time
from typing import Any

import jwt
from passlib.context import CryptContext

from tracker.core.config import get_settings

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


def hash_password(password: str) -> str:
    return str(pwd_context.hash(password))


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return bool(pwd_context.verify(plain_password, hashed_password))


def create_access_token(user_id: str, expires_in: int | None = None) -> str:
    settings = get_settings()
    now = int(time.time())
    lifetime = settings.JWT_EXPIRE_SECONDS if expires_in is None else expires_in
    return jwt.encode(
        {"sub": user_id, "iat": now, "exp": now + lifetime},
        settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_access_token(token: str) -> dict[str, Any] | None:
    settings = get_settings()
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except jwt.PyJWTError as exc:
        logger.warning("Rejected bearer token: %s", exc)
        return None
