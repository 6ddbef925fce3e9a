# src/rps_arena/models/__init__.py
"""SQLAlchemy models for the RPS Arena application."""

from .game import GameRound
from .user import User

__all__ = ["GameRound", "User"]
