"""
Public signup flow.

Ties the contact store, list registry, state machine and token issuer
together for the subscribe form: capture the address, open (or reopen) a
pending subscription and mail a fresh verification link.
"""

import logging
from typing import Any, Optional

from modules.contacts.models import Contact, ContactKind, ContactSource, CreateContactRequest
from modules.contacts.validation import validate_contact_input
from modules.mailing_lists.models import MailingList

from .exceptions import AlreadySubscribedError
from .models import SubscribeOptions, SubscribeRequest, SubscribeResponse, SubscriptionStatus

logger = logging.getLogger(__name__)

CHECK_EMAIL = "Please check your email to confirm your subscription"
ALREADY_SUBSCRIBED = "You are already subscribed to this list"


class SignupService:
    """Double opt-in signup orchestration."""

    def __init__(
        self,
        contacts: Any,       # IContactService
        mailing_lists: Any,  # IMailingListService
        subscriptions: Any,  # ISubscriptionService
        verification: Any,   # IVerificationService
        mailer: Any,         # IVerificationMailer
    ):
        self._contacts = contacts
        self._mailing_lists = mailing_lists
        self._subscriptions = subscriptions
        self._verification = verification
        self._mailer = mailer

    async def signup(
        self,
        request: SubscribeRequest,
        opt_in_ip: Optional[str] = None,
        opt_in_user_agent: Optional[str] = None,
    ) -> SubscribeResponse:
        """
        Subscribe an email address to a list, pending verification.

        A subscription that is still pending gets a new token (subject to
        the rate limit). One that is already confirmed is reported as such
        without sending anything.

        Raises:
            InvalidContactError: If the email is malformed
            MailingListNotFoundError: If ``mailing_list_id`` is unknown
            MailingListInactiveError: If the list is switched off
            VerificationRateLimitError: If too many links were requested
        """
        contact = await self._capture_contact(request.email)
        mailing_list = await self._resolve_list(request)

        try:
            subscription = await self._subscriptions.subscribe(
                contact.id,
                mailing_list.id,
                SubscribeOptions(opt_in_ip=opt_in_ip, opt_in_user_agent=opt_in_user_agent),
            )
        except AlreadySubscribedError:
            return SubscribeResponse(
                message=ALREADY_SUBSCRIBED,
                status=SubscriptionStatus.SUBSCRIBED,
                contact_id=contact.id,
                mailing_list_id=mailing_list.id,
            )

        token = await self._verification.issue_token(contact.id, mailing_list.id)
        await self._mailer.send_verification(
            contact.value,
            mailing_list,
            self._verification.verification_url(token),
        )

        return SubscribeResponse(
            message=CHECK_EMAIL,
            status=subscription.status,
            contact_id=contact.id,
            mailing_list_id=mailing_list.id,
        )

    async def _capture_contact(self, email: str) -> Contact:
        # Existing contacts keep their source; only new ones are tagged signup_form
        kind, value, source = validate_contact_input(ContactKind.EMAIL, email, ContactSource.SIGNUP_FORM)
        contact = await self._contacts.find_contact(kind, value)
        if contact is not None:
            return contact
        return await self._contacts.create_or_update_contact(
            CreateContactRequest(kind=kind, value=value, source=source)
        )

    async def _resolve_list(self, request: SubscribeRequest) -> MailingList:
        if request.mailing_list_id:
            return await self._mailing_lists.get_list(request.mailing_list_id)
        return await self._mailing_lists.get_or_create_list(request.slug)
