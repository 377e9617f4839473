"""
Subscriptions module interfaces.

ISubscriptionService is the subscription state machine as seen by the
API layer, the contact store (default-list auto-subscribe) and the
suppression handler.
"""

from datetime import datetime
from typing import Any, Optional, Protocol, runtime_checkable

from .models import SubscribeOptions, Subscription, SuppressionReason


@runtime_checkable
class ISubscriptionService(Protocol):
    """
    Interface for subscription transitions.
    """

    async def subscribe(
        self,
        contact_id: str,
        mailing_list_id: str,
        options: Optional[SubscribeOptions] = None,
    ) -> Subscription:
        """
        Subscribe a contact to a list.

        Creates a pending row (subscribed with ``auto_confirm``), moves an
        unsubscribed or bounced row back to pending, and returns an
        existing pending row unchanged. Bounced rows are never
        auto-confirmed. Reopening a row revokes the verification tokens
        issued before it.

        Raises:
            ContactNotFoundError: If the contact doesn't exist
            MailingListNotFoundError: If the list doesn't exist
            MailingListInactiveError: If the list is switched off
            AlreadySubscribedError: If the row is already subscribed
        """
        ...

    async def unsubscribe(
        self,
        contact_id: str,
        mailing_list_id: str,
        reason: Optional[str] = None,
    ) -> Subscription:
        """
        Opt a contact out of a list.

        opt_in_at is preserved; the reason is kept in metadata.

        Raises:
            SubscriptionNotFoundError: If no subscription exists
        """
        ...

    async def suppress(
        self,
        contact_id: str,
        reason: SuppressionReason,
        mailing_list_id: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> list[Subscription]:
        """
        Force subscriptions to bounced and mark the contact unverified.

        Applies to every subscription of the contact unless
        ``mailing_list_id`` narrows it. Runs as one atomic operation.

        Raises:
            ContactNotFoundError: If the contact doesn't exist
        """
        ...

    async def get_subscription(self, contact_id: str, mailing_list_id: str) -> Subscription:
        """
        Raises:
            SubscriptionNotFoundError: If no subscription exists
        """
        ...

    async def list_contact_subscriptions(self, contact_id: str) -> list[Subscription]:
        """Every subscription of a contact, oldest first."""
        ...


@runtime_checkable
class ISubscriptionRepository(Protocol):
    """Storage contract for subscriptions."""

    def get(self, contact_id: str, mailing_list_id: str) -> Optional[Subscription]: ...

    def list_by_contact(self, contact_id: str) -> list[Subscription]: ...

    def insert(self, data: dict[str, Any]) -> Subscription: ...

    def update(self, subscription_id: str, changes: dict[str, Any]) -> Optional[Subscription]: ...

    def suppress_contact(
        self,
        contact_id: str,
        reason: SuppressionReason,
        details: dict[str, Any],
        now: datetime,
        mailing_list_id: Optional[str] = None,
    ) -> list[Subscription]: ...

    def reopen(
        self,
        subscription_id: str,
        changes: dict[str, Any],
        now: datetime,
    ) -> Optional[Subscription]:
        """
        Start a new consent cycle: apply ``changes`` and revoke every
        outstanding verification token of the row's (contact, list) pair,
        atomically. None if the row no longer exists.
        """
        ...
