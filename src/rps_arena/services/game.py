"""Stone/paper/scissor adjudication and per-user round queries."""

from __future__ import annotations

import logging
import random
from typing import Final

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from rps_arena.core.errors import InternalError, ValidationError
from rps_arena.core.settings import settings
from rps_arena.models import GameRound

logger = logging.getLogger(__name__)

CHOICES: Final[tuple[str, ...]] = ("stone", "paper", "scissor")
OUTCOMES: Final[tuple[str, ...]] = ("win", "lose", "draw")

# Each key beats its value.
BEATS: Final[dict[str, str]] = {
    "stone": "scissor",
    "scissor": "paper",
    "paper": "stone",
}


def validate_choice(choice: object) -> str:
    """Return `choice` if it is one of `CHOICES`.

    Raises:
        ValidationError: For anything else, including non-strings.
    """
    if not isinstance(choice, str) or choice not in CHOICES:
        raise ValidationError("Invalid choice")
    return choice


def judge(user_choice: str, computer_choice: str) -> str:
    """Classify a round from the user's point of view."""
    validate_choice(user_choice)
    validate_choice(computer_choice)
    if user_choice == computer_choice:
        return "draw"
    if BEATS[user_choice] == computer_choice:
        return "win"
    return "lose"


class GameService:
    """Play rounds and read back a single user's results.

    Every query is scoped to the `user_id` passed in, which callers take from
    the verified bearer token.
    """

    def __init__(self, db: Session, rng: random.Random | None = None) -> None:
        self.db = db
        self.rng = rng or random.SystemRandom()

    def play(self, user_id: int, choice: object) -> GameRound:
        """Draw a computer move, adjudicate, and persist the round."""
        user_choice = validate_choice(choice)
        computer_choice = self.rng.choice(CHOICES)
        result = judge(user_choice, computer_choice)

        game = GameRound(
            user_id=user_id,
            user_choice=user_choice,
            computer_choice=computer_choice,
            result=result,
        )
        self.db.add(game)
        try:
            self.db.commit()
        except SQLAlchemyError as err:
            self.db.rollback()
            logger.error("Store failure while saving round for user %s: %s", user_id, err)
            raise InternalError() from err
        self.db.refresh(game)

        logger.info("Game saved for user %s: %s", user_id, result)
        return game

    def history(self, user_id: int, limit: int | None = None) -> list[GameRound]:
        """Return the user's newest rounds, newest first."""
        cap = settings.history_limit if limit is None else min(limit, settings.history_limit)
        try:
            rounds = (
                self.db.query(GameRound)
                .filter(GameRound.user_id == user_id)
                .order_by(GameRound.created_at.desc(), GameRound.id.desc())
                .limit(cap)
                .all()
            )
        except SQLAlchemyError as err:
            raise InternalError() from err
        logger.debug("History fetched for user %s: %d games", user_id, len(rounds))
        return rounds

    def scoreboard(self, user_id: int) -> dict[str, int]:
        """Count every round the user has played, grouped by outcome."""
        stats = dict.fromkeys(OUTCOMES, 0)
        try:
            rows = (
                self.db.query(GameRound.result, func.count(GameRound.id))
                .filter(GameRound.user_id == user_id)
                .group_by(GameRound.result)
                .all()
            )
        except SQLAlchemyError as err:
            raise InternalError() from err
        for result, count in rows:
            if result in stats:
                stats[result] = count
        logger.debug("Scoreboard for user %s: %s", user_id, stats)
        return stats
