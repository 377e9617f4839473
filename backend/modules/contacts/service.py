"""
Contact store service.

Owns contact identity: normalization, (kind, value) uniqueness, the
one-primary-per-account rule and account linking. Linking a contact to an
account also triggers the account's default list subscriptions, so the
service is wired with the mailing list and subscription services.
"""

import logging
from typing import Any, Optional

from shared.clock import Clock, utc_now
from shared.repository import UniqueViolation
from modules.subscriptions.exceptions import AlreadySubscribedError
from modules.subscriptions.models import SubscribeOptions, SubscriptionStatus

from .exceptions import (
    ContactNotFoundError,
    ContactOwnershipConflictError,
    DuplicateContactError,
    PrimaryContactConflictError,
)
from .interfaces import IContactRepository, IContactService
from .models import Contact, ContactKind, ContactSource, CreateContactRequest, LinkContactRequest
from .repository import PRIMARY_CONSTRAINT
from .validation import normalize_contact, validate_contact_input

logger = logging.getLogger(__name__)


class ContactService(IContactService):
    """
    Contact service.

    Implements IContactService on top of an IContactRepository.
    """

    def __init__(
        self,
        repository: IContactRepository,
        mailing_lists: Any = None,   # IMailingListService - injected
        subscriptions: Any = None,   # ISubscriptionService - injected
        newsletter_slug: str = "newsletter",
        clock: Optional[Clock] = None,
    ):
        self._repository = repository
        self._mailing_lists = mailing_lists
        self._subscriptions = subscriptions
        self._newsletter_slug = newsletter_slug
        self._clock = clock or utc_now

    async def create_contact(self, request: CreateContactRequest) -> Contact:
        """Validate, normalize and insert a new contact."""
        kind, value, source = validate_contact_input(request.kind, request.value, request.source)

        data = {
            "kind": kind,
            "value": value,
            "source": source,
            "owner_account_id": request.owner_account_id,
            "is_primary": request.is_primary,
            "is_verified": request.is_verified,
            "verified_at": self._clock() if request.is_verified else None,
            "metadata": request.metadata,
        }

        try:
            contact = self._repository.insert(data)
        except UniqueViolation as e:
            raise self._conflict(e, kind, value, request.owner_account_id) from e

        logger.info("Created %s contact %s (source=%s)", kind.value, contact.id, source.value)
        return contact

    async def create_or_update_contact(self, request: CreateContactRequest) -> Contact:
        """Upsert by (kind, value), promoting ownership and verification."""
        kind, value, source = validate_contact_input(request.kind, request.value, request.source)

        existing = self._repository.get_by_value(kind, value)
        if existing is None:
            try:
                return await self.create_contact(request)
            except DuplicateContactError:
                # Lost a race with a concurrent insert; fall through to update
                existing = self._repository.get_by_value(kind, value)
                if existing is None:
                    raise

        changes = self._promotions(existing, request, source)
        try:
            updated = self._repository.update(existing.id, changes)
        except UniqueViolation as e:
            raise self._conflict(e, kind, value, request.owner_account_id) from e

        if updated is None:
            raise ContactNotFoundError(existing.id)
        return updated

    async def link_account(self, request: LinkContactRequest) -> Contact:
        """Attach an email to an account and apply its default subscriptions."""
        kind, value, _ = validate_contact_input(ContactKind.EMAIL, request.email, ContactSource.AUTH)

        existing = self._repository.get_by_value(kind, value)
        already_linked = existing is not None and existing.owner_account_id == request.account_id

        # Only the first email an account links becomes its primary
        primary = self._repository.find_primary(request.account_id, kind)
        make_primary = primary is None or (existing is not None and primary.id == existing.id)

        contact = await self.create_or_update_contact(
            CreateContactRequest(
                kind=kind,
                value=value,
                source=ContactSource.AUTH,
                owner_account_id=request.account_id,
                is_primary=make_primary,
                is_verified=request.email_verified,
            )
        )

        if not already_linked:
            logger.info("Linked contact %s to account %s", contact.id, request.account_id)
            await self._subscribe_default_lists(contact)

        if request.newsletter_opt_in:
            await self._subscribe_newsletter(contact)

        return contact

    async def get_contact(self, contact_id: str) -> Contact:
        contact = self._repository.get_by_id(contact_id)
        if contact is None:
            raise ContactNotFoundError(contact_id)
        return contact

    async def find_contact(self, kind: ContactKind, value: str) -> Optional[Contact]:
        return self._repository.get_by_value(kind, normalize_contact(kind, value))

    async def list_account_contacts(self, account_id: str) -> list[Contact]:
        return self._repository.list_by_owner(account_id)

    async def delete_account_contacts(self, account_id: str) -> int:
        return self._repository.delete_by_owner(account_id)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _promotions(
        self,
        existing: Contact,
        request: CreateContactRequest,
        source: ContactSource,
    ) -> dict[str, Any]:
        """Changes that move an existing contact forward; nothing is demoted."""
        changes: dict[str, Any] = {"source": source}

        if request.owner_account_id:
            if existing.owner_account_id and existing.owner_account_id != request.owner_account_id:
                raise ContactOwnershipConflictError(existing.id, request.owner_account_id)
            changes["owner_account_id"] = request.owner_account_id

        if request.is_primary and not existing.is_primary:
            changes["is_primary"] = True

        if request.is_verified and not existing.is_verified:
            changes["is_verified"] = True
            changes["verified_at"] = self._clock()

        if request.metadata:
            changes["metadata"] = {**existing.metadata, **request.metadata}

        return changes

    def _conflict(
        self,
        error: UniqueViolation,
        kind: ContactKind,
        value: str,
        owner_account_id: Optional[str],
    ) -> Exception:
        if error.constraint == PRIMARY_CONSTRAINT:
            return PrimaryContactConflictError(owner_account_id or "", kind.value)
        return DuplicateContactError(kind.value, value)

    async def _subscribe_default_lists(self, contact: Contact) -> None:
        if self._mailing_lists is None or self._subscriptions is None:
            return

        # An earlier opt-out or suppression outranks the default
        opted_out = {
            subscription.mailing_list_id
            for subscription in await self._subscriptions.list_contact_subscriptions(contact.id)
            if subscription.status in (SubscriptionStatus.UNSUBSCRIBED, SubscriptionStatus.BOUNCED)
        }
        for mailing_list in await self._mailing_lists.list_default_lists():
            if mailing_list.id in opted_out:
                logger.info(
                    "Contact %s keeps its opt-out of default list %s", contact.id, mailing_list.slug
                )
                continue
            await self._auto_subscribe(contact, mailing_list.id)

    async def _subscribe_newsletter(self, contact: Contact) -> None:
        if self._mailing_lists is None or self._subscriptions is None:
            return
        newsletter = await self._mailing_lists.get_or_create_list(self._newsletter_slug)
        await self._auto_subscribe(contact, newsletter.id)

    async def _auto_subscribe(self, contact: Contact, mailing_list_id: str) -> None:
        try:
            await self._subscriptions.subscribe(
                contact.id,
                mailing_list_id,
                SubscribeOptions(auto_confirm=True),
            )
        except AlreadySubscribedError:
            logger.debug("Contact %s already subscribed to %s", contact.id, mailing_list_id)
