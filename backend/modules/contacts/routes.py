"""
Contact API endpoints.

Links the signed-in account's email to the contact store.
"""

from fastapi import APIRouter, Depends

from api.middleware.auth import get_current_user
from api.dependencies import get_contact_service
from shared.models import AuthenticatedUser

from .interfaces import IContactService
from .models import Contact, LinkContactBody, LinkContactRequest

router = APIRouter()


@router.post("/link", response_model=Contact)
async def link_contact(
    body: LinkContactBody,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IContactService = Depends(get_contact_service),
) -> Contact:
    """
    Link the caller's email to their account.

    Called by the frontend after sign-up or sign-in. The email and its
    verified flag come from the identity provider's token, never the body.
    """
    return await service.link_account(
        LinkContactRequest(
            account_id=user.id,
            email=user.email,
            email_verified=user.email_verified,
            newsletter_opt_in=body.newsletter_opt_in,
        )
    )
