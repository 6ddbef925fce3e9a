"""Pydantic schemas for the HTTP surface."""

from .auth import OtpRequest, OtpRequestResponse, OtpVerifyRequest, TokenResponse
from .common import ErrorResponse
from .game import GameRoundOut, PlayRequest, PlayResponse, Scoreboard

__all__ = [
    "ErrorResponse",
    "GameRoundOut",
    "OtpRequest",
    "OtpRequestResponse",
    "OtpVerifyRequest",
    "PlayRequest",
    "PlayResponse",
    "Scoreboard",
    "TokenResponse",
]
