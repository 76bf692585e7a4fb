"""Authentication routes.

OTP login: request a code for a mobile number or email, then exchange the
code for a bearer token.
"""
from typing import Optional

from fastapi import APIRouter, Body, Depends

from sevagan.api.deps import get_services
from sevagan.models.auth import (
    AccountExistsResponse,
    OtpRequestBody,
    OtpRequestResponse,
    OtpVerifyBody,
    OtpVerifyResponse,
)
from sevagan.services.container import Services

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/request-otp", response_model=OtpRequestResponse, response_model_exclude_none=True)
async def request_otp(
    payload: OtpRequestBody = Body(...),
    services: Services = Depends(get_services),
):
    issue = services.otp.request_otp(
        payload.account_type, payload.mobile or None, payload.email or None, payload.profile
    )
    return OtpRequestResponse(
        request_id=issue.request_id,
        channels=issue.channels,
        # never leak the code outside development
        dev_code=None if services.settings.is_production else issue.code,
    )


@router.post("/verify-otp", response_model=OtpVerifyResponse, response_model_exclude_none=True)
async def verify_otp(
    payload: OtpVerifyBody = Body(...),
    services: Services = Depends(get_services),
):
    token, account = services.otp.verify_otp(
        payload.account_type, payload.otp, payload.mobile or None, payload.email or None
    )
    return OtpVerifyResponse(token=token, account=account)


@router.get("/exists", response_model=AccountExistsResponse, response_model_exclude_none=True)
async def account_exists(
    mobile: Optional[str] = None,
    email: Optional[str] = None,
    services: Services = Depends(get_services),
):
    account = services.accounts.find_by_contact(mobile or None, email or None)
    if account is None:
        return AccountExistsResponse(exists=False)
    return AccountExistsResponse(exists=True, type=account.type)
