"""
Data rights service (export and right to be forgotten).
"""

import logging
from typing import Any, Optional

from shared.clock import Clock, utc_now
from modules.mailing_lists.models import MailingList

from .exceptions import NoContactDataError
from .interfaces import IDataRightsService
from .models import ContactDataDeletion, ContactDataExport, ContactExport, SubscriptionExport

logger = logging.getLogger(__name__)


class DataRightsService(IDataRightsService):
    """Builds exports and erasures on top of the other modules."""

    def __init__(
        self,
        contacts: Any,       # IContactService - injected
        subscriptions: Any,  # ISubscriptionService - injected
        mailing_lists: Any,  # IMailingListService - injected
        clock: Optional[Clock] = None,
    ):
        self._contacts = contacts
        self._subscriptions = subscriptions
        self._mailing_lists = mailing_lists
        self._clock = clock or utc_now

    async def export_contact_data(self, account_id: str) -> ContactDataExport:
        lists: dict[str, MailingList] = {}
        exported: list[ContactExport] = []

        for contact in await self._contacts.list_account_contacts(account_id):
            subscriptions = []
            for subscription in await self._subscriptions.list_contact_subscriptions(contact.id):
                if subscription.mailing_list_id not in lists:
                    lists[subscription.mailing_list_id] = await self._mailing_lists.get_list(
                        subscription.mailing_list_id
                    )
                mailing_list = lists[subscription.mailing_list_id]
                subscriptions.append(
                    SubscriptionExport(
                        list_name=mailing_list.name,
                        list_slug=mailing_list.slug,
                        status=subscription.status,
                        opt_in_at=subscription.opt_in_at,
                        opt_out_at=subscription.opt_out_at,
                        metadata=subscription.metadata,
                    )
                )

            exported.append(
                ContactExport(
                    value=contact.value,
                    kind=contact.kind,
                    is_verified=contact.is_verified,
                    verified_at=contact.verified_at,
                    source=contact.source,
                    created_at=contact.created_at,
                    subscriptions=subscriptions,
                )
            )

        logger.info("Exported %d contact(s) for account %s", len(exported), account_id)
        return ContactDataExport(
            account_id=account_id,
            export_date=self._clock(),
            contacts=exported,
        )

    async def delete_contact_data(self, account_id: str) -> ContactDataDeletion:
        logger.info("Deleting contact data for account %s", account_id)

        deleted = await self._contacts.delete_account_contacts(account_id)
        if deleted == 0:
            raise NoContactDataError(account_id)

        logger.info("Deleted %d contact(s) for account %s", deleted, account_id)
        return ContactDataDeletion(account_id=account_id, contacts_deleted=deleted)
