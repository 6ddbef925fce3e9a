# src/rps_arena/models/game.py
"""Models recording played rounds."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rps_arena.db.session import Base
from rps_arena.db.time import utcnow

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from .user import User


class GameRound(Base):
    """One immutable round of stone/paper/scissor.

    `result` is derived from the two choices when the row is written and
    stored alongside them so the scoreboard can aggregate without recomputing.
    """

    __tablename__ = "game_round"
    __table_args__ = (
        CheckConstraint(
            "user_choice IN ('stone', 'paper', 'scissor')",
            name="ck_game_round_user_choice",
        ),
        CheckConstraint(
            "computer_choice IN ('stone', 'paper', 'scissor')",
            name="ck_game_round_computer_choice",
        ),
        CheckConstraint("result IN ('win', 'lose', 'draw')", name="ck_game_round_result"),
        Index("ix_game_round_user_created", "user_id", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("app_user.id"),
        nullable=False,
    )
    user_choice: Mapped[str] = mapped_column(String(16), nullable=False)
    computer_choice: Mapped[str] = mapped_column(String(16), nullable=False)
    result: Mapped[str] = mapped_column(String(8), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    user: Mapped[User] = relationship("User", back_populates="rounds")
