"""Shared API dependencies for authentication and service wiring."""

import logging
import random
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from rps_arena.core.errors import AuthError
from rps_arena.core.security import decode_access_token
from rps_arena.db.session import get_db
from rps_arena.services import GameService, OtpService

logger = logging.getLogger(__name__)

# auto_error is off so that every rejection goes through AuthError and
# produces the same 401 body.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_current_user_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> int:
    """Resolve the authenticated user id from the bearer token.

    The token alone is trusted; the store is not consulted.

    Raises:
        AuthError: If the header is missing, malformed, or the token does not verify.
    """
    if credentials is None or not credentials.credentials.strip():
        raise AuthError("No token provided")

    payload = decode_access_token(credentials.credentials)
    subject = payload.get("sub")
    try:
        return int(subject)  # type: ignore[arg-type]
    except (TypeError, ValueError) as err:
        logger.info("Rejected token with unusable subject %r", subject)
        raise AuthError() from err


def get_rng() -> random.Random:
    """Return the source of computer moves."""
    return random.SystemRandom()


def get_otp_service(db: SessionDep) -> OtpService:
    return OtpService(db)


def get_game_service(
    db: SessionDep,
    rng: Annotated[random.Random, Depends(get_rng)],
) -> GameService:
    return GameService(db, rng=rng)


# Type aliases for route signatures
CurrentUserIdDep = Annotated[int, Depends(get_current_user_id)]
OtpServiceDep = Annotated[OtpService, Depends(get_otp_service)]
GameServiceDep = Annotated[GameService, Depends(get_game_service)]
