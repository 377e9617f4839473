"""
Subscription state machine service.

Applies the transitions in ``transitions.py`` to stored subscriptions.
Unknown (contact, list) pairs are reported as not found on every
read-modify operation; rows are only ever created by ``subscribe``.
"""

import logging
from typing import Any, Optional

from shared.clock import Clock, utc_now
from shared.repository import ProcedureError, UniqueViolation
from modules.contacts.exceptions import ContactNotFoundError
from modules.contacts.interfaces import IContactRepository
from modules.mailing_lists.exceptions import MailingListInactiveError

from . import transitions
from .exceptions import SubscriptionNotFoundError
from .interfaces import ISubscriptionRepository, ISubscriptionService
from .models import SubscribeOptions, Subscription, SuppressionReason
from .repository import CONTACT_NOT_FOUND

logger = logging.getLogger(__name__)


class SubscriptionService(ISubscriptionService):
    """
    Subscription service.

    Implements ISubscriptionService on top of an ISubscriptionRepository.
    """

    def __init__(
        self,
        repository: ISubscriptionRepository,
        contacts: IContactRepository,
        mailing_lists: Any,  # IMailingListService - injected
        clock: Optional[Clock] = None,
    ):
        self._repository = repository
        self._contacts = contacts
        self._mailing_lists = mailing_lists
        self._clock = clock or utc_now

    async def subscribe(
        self,
        contact_id: str,
        mailing_list_id: str,
        options: Optional[SubscribeOptions] = None,
    ) -> Subscription:
        options = options or SubscribeOptions()

        if self._contacts.get_by_id(contact_id) is None:
            raise ContactNotFoundError(contact_id)
        mailing_list = await self._mailing_lists.get_list(mailing_list_id)
        if not mailing_list.is_active:
            raise MailingListInactiveError(mailing_list.slug)

        now = self._clock()
        existing = self._repository.get(contact_id, mailing_list_id)
        if existing is None:
            try:
                subscription = self._repository.insert(
                    transitions.new_subscription(contact_id, mailing_list_id, options, now)
                )
            except UniqueViolation:
                # Created concurrently; treat this call as a resubscribe
                existing = self._repository.get(contact_id, mailing_list_id)
                if existing is None:
                    raise
            else:
                logger.info(
                    "Subscription %s created as %s (list=%s)",
                    subscription.id,
                    subscription.status.value,
                    mailing_list.slug,
                )
                return subscription

        changes = transitions.resubscribe(existing, options, now)
        if changes is None:
            return existing

        # Also revokes tokens issued during the previous consent cycle
        updated = self._repository.reopen(existing.id, changes, now)
        if updated is None:
            raise SubscriptionNotFoundError(existing.contact_id, existing.mailing_list_id)
        logger.info(
            "Subscription %s moved %s -> %s",
            existing.id,
            existing.status.value,
            updated.status.value,
        )
        return updated

    async def unsubscribe(
        self,
        contact_id: str,
        mailing_list_id: str,
        reason: Optional[str] = None,
    ) -> Subscription:
        existing = await self.get_subscription(contact_id, mailing_list_id)

        changes = transitions.unsubscribe(existing, reason, self._clock())
        if changes is None:
            logger.debug("Subscription %s already %s", existing.id, existing.status.value)
            return existing

        updated = self._apply(existing, changes)
        logger.info("Subscription %s unsubscribed (reason=%s)", existing.id, updated.metadata.get("reason"))
        return updated

    async def suppress(
        self,
        contact_id: str,
        reason: SuppressionReason,
        mailing_list_id: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> list[Subscription]:
        try:
            suppressed = self._repository.suppress_contact(
                contact_id,
                reason,
                details or {},
                self._clock(),
                mailing_list_id=mailing_list_id,
            )
        except ProcedureError as e:
            if e.reason == CONTACT_NOT_FOUND:
                raise ContactNotFoundError(contact_id) from e
            raise

        logger.info(
            "Suppressed contact %s (%s): %d subscription(s) bounced",
            contact_id,
            reason.value,
            len(suppressed),
        )
        return suppressed

    async def get_subscription(self, contact_id: str, mailing_list_id: str) -> Subscription:
        subscription = self._repository.get(contact_id, mailing_list_id)
        if subscription is None:
            raise SubscriptionNotFoundError(contact_id, mailing_list_id)
        return subscription

    async def list_contact_subscriptions(self, contact_id: str) -> list[Subscription]:
        return self._repository.list_by_contact(contact_id)

    def _apply(self, existing: Subscription, changes: dict[str, Any]) -> Subscription:
        updated = self._repository.update(existing.id, changes)
        if updated is None:
            # Deleted (contact erased) between read and write
            raise SubscriptionNotFoundError(existing.contact_id, existing.mailing_list_id)
        return updated
