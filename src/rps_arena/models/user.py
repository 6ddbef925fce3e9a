# src/rps_arena/models/user.py
"""SQLAlchemy model for mobile-number identities."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rps_arena.db.session import Base
from rps_arena.db.time import utcnow

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from .game import GameRound


class User(Base):
    """Identity keyed by a 10-digit mobile number.

    Created lazily on the first OTP request for a number. The pending code is
    stored only as a bcrypt hash together with its expiry, and both are
    cleared once the code has been verified.
    """

    __tablename__ = "app_user"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    mobile: Mapped[str] = mapped_column(String(10), unique=True, nullable=False)
    otp_hash: Mapped[str | None] = mapped_column(Text, nullable=True)
    otp_expiry: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    rounds: Mapped[list[GameRound]] = relationship(
        "GameRound",
        back_populates="user",
        lazy="raise",
    )

    @property
    def has_pending_otp(self) -> bool:
        """Return True while an unverified code is stored for this user."""
        return self.otp_hash is not None

    def clear_otp(self) -> None:
        """Forget the pending code so it can never be used again."""
        self.otp_hash = None
        self.otp_expiry = None
