"""
Verification API endpoint.

The link in the verification email lands here. Success redirects to the
frontend's confirmation page; each failure returns 400 with its own
machine-readable code.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse, RedirectResponse

from api.dependencies import get_verification_service
from api.middleware.client_info import client_ip, user_agent
from shared.config import get_settings

from .exceptions import (
    MissingTokenError,
    TokenAlreadyUsedError,
    TokenExpiredError,
    TokenNotFoundError,
)
from .interfaces import IVerificationService
from .models import VerificationErrorResponse

router = APIRouter()

ERROR_CODES = {
    MissingTokenError: "missing_token",
    TokenNotFoundError: "invalid_token",
    TokenExpiredError: "expired_token",
    TokenAlreadyUsedError: "already_used",
}


@router.get(
    "/verify-email",
    status_code=302,
    responses={400: {"model": VerificationErrorResponse}},
)
async def verify_email(
    request: Request,
    token: Optional[str] = Query(default=None, description="Verification token"),
    service: IVerificationService = Depends(get_verification_service),
):
    """
    Confirm a pending subscription with its emailed token.

    Captures the requester's IP and User-Agent as opt-in evidence.
    """
    try:
        await service.consume_token(
            token,
            opt_in_ip=client_ip(request),
            opt_in_user_agent=user_agent(request),
        )
    except (MissingTokenError, TokenNotFoundError, TokenExpiredError, TokenAlreadyUsedError) as e:
        body = VerificationErrorResponse(error=ERROR_CODES[type(e)], detail=e.message)
        return JSONResponse(status_code=400, content=body.model_dump())

    settings = get_settings()
    return RedirectResponse(
        url=f"{settings.frontend_url.rstrip('/')}{settings.confirmation_path}",
        status_code=302,
    )
