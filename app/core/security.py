from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.core.config import settings

# NOTE: bcrypt backend has compatibility issues in this runtime.
# pbkdf2_sha256 is stable and supported directly by passlib.
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

USER_ROLE = "user"
ADMIN_ROLE = "admin"

ACCESS_TOKEN = "access"
REFRESH_TOKEN = "refresh"
ADMIN_TOKEN = "admin"


def hash_password(password: str) -> str:
    """
    Hash plain password using passlib context.
    """
    if not isinstance(password, str) or not password:
        raise ValueError("Password must be a non-empty string")
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """
    Verify plain password against stored hash.
    """
    if not password or not password_hash:
        return False
    try:
        return pwd_context.verify(password, password_hash)
    except (ValueError, TypeError):
        return False


def _secret_for(token_type: str) -> str:
    if token_type == ACCESS_TOKEN:
        return settings.JWT_SECRET
    if token_type == REFRESH_TOKEN:
        return settings.JWT_REFRESH_SECRET
    if token_type == ADMIN_TOKEN:
        return settings.JWT_ADMIN_SECRET
    raise ValueError(f"Unknown token type '{token_type}'")


def _create_token(
    *,
    subject_id: str | int,
    token_type: str,
    expires_delta: timedelta,
) -> str:
    now = datetime.now(timezone.utc)
    exp = now + expires_delta

    payload: dict[str, Any] = {
        "sub": str(subject_id),
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
        "type": token_type,
    }
    return jwt.encode(payload, _secret_for(token_type), algorithm=settings.JWT_ALG)


def create_access_token(user_id: str | int, *, expires_minutes: int | None = None) -> str:
    """
    Create short-lived user access token (authToken cookie).
    """
    if expires_minutes is None:
        expires_minutes = settings.ACCESS_TOKEN_MINUTES

    return _create_token(
        subject_id=user_id,
        token_type=ACCESS_TOKEN,
        expires_delta=timedelta(minutes=int(expires_minutes)),
    )


def create_refresh_token(user_id: str | int, *, expires_minutes: int | None = None) -> str:
    if expires_minutes is None:
        expires_minutes = settings.REFRESH_TOKEN_MINUTES

    return _create_token(
        subject_id=user_id,
        token_type=REFRESH_TOKEN,
        expires_delta=timedelta(minutes=int(expires_minutes)),
    )


def create_admin_token(admin_id: str | int, *, expires_minutes: int | None = None) -> str:
    if expires_minutes is None:
        expires_minutes = settings.ADMIN_TOKEN_MINUTES

    return _create_token(
        subject_id=admin_id,
        token_type=ADMIN_TOKEN,
        expires_delta=timedelta(minutes=int(expires_minutes)),
    )


def _decode_token(token: str, *, expected_type: str) -> dict[str, Any]:
    if not token:
        raise ValueError("Token is required")

    try:
        payload = jwt.decode(token, _secret_for(expected_type), algorithms=[settings.JWT_ALG])
    except JWTError as e:
        raise ValueError("Invalid or expired token") from e

    if payload.get("type") != expected_type:
        raise ValueError("Invalid token type")

    sub = payload.get("sub")
    if not sub:
        raise ValueError("Token subject is missing")

    return payload


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and validate JWT access token.
    Returns token payload dict if valid.

    Raises ValueError on invalid/expired token.
    """
    return _decode_token(token, expected_type=ACCESS_TOKEN)


def decode_refresh_token(token: str) -> dict[str, Any]:
    return _decode_token(token, expected_type=REFRESH_TOKEN)


def decode_admin_token(token: str) -> dict[str, Any]:
    return _decode_token(token, expected_type=ADMIN_TOKEN)


@dataclass(frozen=True)
class Principal:
    """
    Authenticated caller resolved from a token and passed into handlers.
    """

    subject_id: int
    role: str
