# src/rps_arena/api/__init__.py
"""HTTP endpoints."""

from .endpoints import auth_router, game_router, system_router

__all__ = ["auth_router", "game_router", "system_router"]
