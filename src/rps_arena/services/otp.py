"""One-time password issuance and verification for mobile numbers."""

from __future__ import annotations

import logging
import re
import secrets
from collections.abc import Callable
from datetime import datetime, timedelta

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from rps_arena.core import security
from rps_arena.core.errors import (
    ExpiredError,
    InternalError,
    MismatchError,
    NotFoundError,
    ValidationError,
)
from rps_arena.core.settings import settings
from rps_arena.db.time import as_utc, utcnow
from rps_arena.models import User

logger = logging.getLogger(__name__)

MOBILE_PATTERN = re.compile(r"^\d{10}$")
OTP_PATTERN = re.compile(r"^\d{4}$")
OTP_MIN = 1000
OTP_MAX = 9999


def generate_otp() -> str:
    """Return a uniformly random 4-digit code in the range 1000-9999."""
    return str(OTP_MIN + secrets.randbelow(OTP_MAX - OTP_MIN + 1))


def _clean(value: object) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError("Invalid request body")
    value = value.strip()
    return value or None


class OtpService:
    """Issue and verify short-lived numeric codes tied to a mobile number.

    Args:
        db: Session used for the single-record lookups and writes.
        now: Clock returning a timezone-aware datetime.
        code_factory: Produces the plaintext code handed back to the caller.
        ttl: Lifetime of an issued code.
    """

    def __init__(
        self,
        db: Session,
        *,
        now: Callable[[], datetime] = utcnow,
        code_factory: Callable[[], str] = generate_otp,
        ttl: timedelta | None = None,
    ) -> None:
        self.db = db
        self.now = now
        self.code_factory = code_factory
        self.ttl = ttl or timedelta(seconds=settings.otp_ttl_seconds)

    def _get_user(self, mobile: str) -> User | None:
        return self.db.query(User).filter(User.mobile == mobile).first()

    def _commit(self, action: str) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as err:
            self.db.rollback()
            logger.error("Store failure while %s: %s", action, err)
            raise InternalError() from err

    def issue(self, mobile: object) -> str:
        """Create or refresh the pending code for `mobile` and return it.

        Any code previously issued for the same number stops being valid.

        Raises:
            ValidationError: If the number is missing or not exactly 10 digits.
            InternalError: If the store rejects the write.
        """
        cleaned = _clean(mobile)
        if cleaned is None:
            raise ValidationError("Mobile required")
        if not MOBILE_PATTERN.fullmatch(cleaned):
            raise ValidationError("Invalid mobile number format (10 digits required)")

        code = self.code_factory()
        logger.debug("OTP for %s: %s", cleaned, code)

        try:
            user = self._get_user(cleaned)
        except SQLAlchemyError as err:
            raise InternalError() from err
        if user is None:
            user = User(mobile=cleaned)
            self.db.add(user)

        user.otp_hash = security.hash_otp(code)
        user.otp_expiry = self.now() + self.ttl
        self._commit("storing OTP")

        logger.info("OTP stored for user %s", user.id)
        return code

    def verify(self, mobile: object, otp: object) -> int:
        """Consume the pending code for `mobile` and return the user id.

        Raises:
            ValidationError: If either value is missing or malformed.
            NotFoundError: If no identity exists for the number.
            MismatchError: If the code is wrong or was already used.
            ExpiredError: If the code's lifetime has elapsed.
            InternalError: If the store rejects the write.
        """
        cleaned_mobile = _clean(mobile)
        cleaned_otp = _clean(otp)
        if cleaned_mobile is None or cleaned_otp is None:
            raise ValidationError("Mobile and OTP required")
        if not MOBILE_PATTERN.fullmatch(cleaned_mobile) or not OTP_PATTERN.fullmatch(cleaned_otp):
            raise ValidationError("Invalid mobile or OTP format")

        try:
            user = self._get_user(cleaned_mobile)
        except SQLAlchemyError as err:
            raise InternalError() from err
        if user is None:
            raise NotFoundError("User not found")

        if not user.has_pending_otp:
            logger.warning("OTP verification for user %s without a pending code", user.id)
            raise MismatchError("Invalid OTP")

        if user.otp_expiry is None or as_utc(user.otp_expiry) <= self.now():
            logger.warning("Expired OTP presented for user %s", user.id)
            raise ExpiredError("OTP expired")

        if not security.verify_otp(cleaned_otp, user.otp_hash or ""):
            logger.warning("Wrong OTP presented for user %s", user.id)
            raise MismatchError("Invalid OTP")

        user.clear_otp()
        self._commit("clearing OTP")

        logger.info("User %s logged in", user.id)
        return user.id
