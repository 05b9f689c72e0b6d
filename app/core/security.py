"""
Password hashing and access tokens
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import bcrypt
from jose import JWTError, jwt

from app.core.config import settings

logger = logging.getLogger(__name__)

# bcrypt ignores everything past 72 bytes
BCRYPT_MAX_BYTES = 72
MIN_PASSWORD_LENGTH = 8


class InvalidTokenError(ValueError):
    """Token is malformed, expired or signed with another key"""


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """False for users without a password and for corrupt hashes"""
    if not hashed_password:
        return False
    try:
        return bcrypt.checkpw(_password_bytes(plain_password), hashed_password.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is not a valid bcrypt hash")
        return False


def validate_password(password: Optional[str]) -> str:
    """
    Check a new password before it is hashed

    Returns the password with surrounding whitespace removed.

    Raises:
        ValueError: Missing, too short, or longer than bcrypt can use
    """
    cleaned = (password or "").strip()
    if len(cleaned) < MIN_PASSWORD_LENGTH:
        raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    if len(cleaned.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise ValueError(f"Password cannot exceed {BCRYPT_MAX_BYTES} bytes in UTF-8")
    return cleaned


def create_access_token(claims: Dict[str, Any], expires_minutes: Optional[int] = None) -> str:
    """Sign `claims` into a bearer token; `sub` should carry the user id as a string"""
    lifetime = timedelta(minutes=expires_minutes or settings.JWT_EXPIRE_MINUTES)
    payload = {**claims, "exp": datetime.now(timezone.utc) + lifetime}
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> Dict[str, Any]:
    """
    Raises:
        InvalidTokenError: Signature, expiry or format check failed
    """
    try:
        return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as e:
        raise InvalidTokenError(str(e)) from e
