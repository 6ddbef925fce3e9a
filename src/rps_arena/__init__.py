"""RPS Arena: OTP login and a stone/paper/scissor game API."""

__version__ = "0.1.0"
