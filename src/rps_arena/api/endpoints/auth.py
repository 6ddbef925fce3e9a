# src/rps_arena/api/endpoints/auth.py
"""Authentication endpoints: request and verify a one-time password."""

from __future__ import annotations

from fastapi import APIRouter, status

from rps_arena.api.dependencies import OtpServiceDep
from rps_arena.core.security import create_access_token
from rps_arena.schemas import (
    ErrorResponse,
    OtpRequest,
    OtpRequestResponse,
    OtpVerifyRequest,
    TokenResponse,
)

router = APIRouter(
    prefix="/auth",
    tags=["authentication"],
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}},
)


@router.post(
    "/request-otp",
    summary="Issue a one-time password for a mobile number",
    response_model=OtpRequestResponse,
)
async def request_otp(payload: OtpRequest, otp_service: OtpServiceDep) -> OtpRequestResponse:
    """Create the identity if needed and return a fresh 4-digit code.

    The code is returned in the body instead of being sent by SMS.
    """
    otp = otp_service.issue(payload.mobile)
    return OtpRequestResponse(message="OTP sent", otp=otp)


@router.post(
    "/verify-otp",
    summary="Exchange a one-time password for a bearer token",
    response_model=TokenResponse,
)
async def verify_otp(payload: OtpVerifyRequest, otp_service: OtpServiceDep) -> TokenResponse:
    """Consume the pending code and mint a one-hour access token."""
    user_id = otp_service.verify(payload.mobile, payload.otp)
    return TokenResponse(token=create_access_token(user_id))
