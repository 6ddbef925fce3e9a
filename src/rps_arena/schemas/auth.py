"""Request and response bodies for the OTP login flow."""

from pydantic import BaseModel


class OtpRequest(BaseModel):
    # Presence and format are checked by the OTP service so that error
    # messages stay consistent between the API and direct callers.
    mobile: str | None = None


class OtpRequestResponse(BaseModel):
    message: str
    otp: str


class OtpVerifyRequest(BaseModel):
    mobile: str | None = None
    otp: str | None = None


class TokenResponse(BaseModel):
    token: str
