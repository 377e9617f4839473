"""
Data rights module interface.
"""

from typing import Protocol, runtime_checkable

from .models import ContactDataDeletion, ContactDataExport


@runtime_checkable
class IDataRightsService(Protocol):
    """
    Interface for data export and erasure.
    """

    async def export_contact_data(self, account_id: str) -> ContactDataExport:
        """
        Export every contact the account owns with its subscriptions.

        Read-only. An account without contacts gets an empty export.
        """
        ...

    async def delete_contact_data(self, account_id: str) -> ContactDataDeletion:
        """
        Hard-delete every contact the account owns.

        Subscriptions and verification tokens are removed by cascade.
        Irreversible.

        Raises:
            NoContactDataError: If the account owns no contacts
        """
        ...
