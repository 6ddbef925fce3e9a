"""Service layer for OTP authentication and the game."""

from .game import GameService, judge
from .otp import OtpService

__all__ = ["GameService", "OtpService", "judge"]
