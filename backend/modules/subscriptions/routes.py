"""
Subscription API endpoints.

Signup and unsubscribe are public: the unsubscribe link in every email
carries the contact and list ids.
"""

from fastapi import APIRouter, Depends, Request

from api.dependencies import get_contact_service, get_signup_service, get_subscription_service
from modules.contacts.interfaces import IContactService
from api.middleware.client_info import client_ip, user_agent

from .interfaces import ISubscriptionService
from .models import (
    SubscribeRequest,
    SubscribeResponse,
    Subscription,
    UnsubscribeRequest,
    UnsubscribeResponse,
)
from .signup import SignupService

router = APIRouter()


@router.post("/subscribe", response_model=SubscribeResponse)
async def subscribe(
    body: SubscribeRequest,
    request: Request,
    service: SignupService = Depends(get_signup_service),
) -> SubscribeResponse:
    """
    Subscribe an email address to a mailing list (double opt-in).

    Accepts either ``mailingListId`` or ``slug``; an unknown slug creates
    the list. Returns 429 when too many verification emails were requested.
    """
    return await service.signup(
        body,
        opt_in_ip=client_ip(request),
        opt_in_user_agent=user_agent(request),
    )


@router.post("/unsubscribe", response_model=UnsubscribeResponse)
async def unsubscribe(
    body: UnsubscribeRequest,
    service: ISubscriptionService = Depends(get_subscription_service),
) -> UnsubscribeResponse:
    """
    Opt a contact out of a mailing list.

    Returns 404 if the contact has no subscription to the list.
    """
    subscription = await service.unsubscribe(body.contact_id, body.mailing_list_id, body.reason)
    return UnsubscribeResponse(subscription=subscription)


@router.get("/contacts/{contact_id}/subscriptions", response_model=list[Subscription])
async def list_contact_subscriptions(
    contact_id: str,
    contacts: IContactService = Depends(get_contact_service),
    service: ISubscriptionService = Depends(get_subscription_service),
) -> list[Subscription]:
    """
    List a contact's subscriptions across all lists.
    """
    contact = await contacts.get_contact(contact_id)
    return await service.list_contact_subscriptions(contact.id)
