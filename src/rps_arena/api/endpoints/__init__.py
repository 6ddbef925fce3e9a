# src/rps_arena/api/endpoints/__init__.py
"""API endpoint modules."""

from .auth import router as auth_router
from .game import router as game_router
from .system import router as system_router

__all__ = ["auth_router", "game_router", "system_router"]
