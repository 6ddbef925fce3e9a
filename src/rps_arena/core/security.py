"""One-time code hashing and bearer token helpers."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
from jose import JWTError, jwt

from rps_arena.core.errors import AuthError
from rps_arena.core.settings import settings


def hash_otp(code: str, rounds: int | None = None) -> str:
    """Return a salted bcrypt hash of a one-time code."""
    salt = bcrypt.gensalt(rounds=rounds or settings.otp_bcrypt_rounds)
    return bcrypt.hashpw(code.encode("utf-8"), salt).decode("utf-8")


def verify_otp(code: str, otp_hash: str) -> bool:
    """Check a presented code against a stored bcrypt hash.

    Returns:
        True if `code` hashes to `otp_hash`; False otherwise, including when
        the stored hash is not a valid bcrypt string.
    """
    try:
        return bcrypt.checkpw(code.encode("utf-8"), otp_hash.encode("utf-8"))
    except ValueError:
        return False


def create_access_token(
    subject: int | str,
    expires_delta: timedelta | None = None,
    now: datetime | None = None,
) -> str:
    """Create a signed JWT access token for an authenticated user.

    Args:
        subject: Identity key embedded as the `sub` claim.
        expires_delta: Token lifetime; defaults to `ACCESS_TOKEN_EXPIRE_MINUTES`.
        now: Issue time; defaults to the current UTC time.

    Returns:
        The encoded token.
    """
    issued_at = now or datetime.now(UTC)
    lifetime = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    to_encode: dict[str, Any] = {
        "sub": str(subject),
        "iat": int(issued_at.timestamp()),
        "exp": int((issued_at + lifetime).timestamp()),
    }
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_access_token(token: str) -> dict[str, Any]:
    """Verify signature and expiry of a token and return its claims.

    Raises:
        AuthError: If the token cannot be verified for any reason.
    """
    try:
        payload: dict[str, Any] = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError as err:
        raise AuthError() from err
    return payload
