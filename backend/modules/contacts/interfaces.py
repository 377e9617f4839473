"""
Contacts module interfaces.

IContactService is what the API layer and the other modules depend on.
IContactRepository is the storage contract implemented for Supabase and
for the in-memory database.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from .models import Contact, ContactKind, CreateContactRequest, LinkContactRequest


@runtime_checkable
class IContactService(Protocol):
    """
    Interface for contact operations.
    """

    async def create_contact(self, request: CreateContactRequest) -> Contact:
        """
        Create a new contact.

        The value is normalized and validated before any store access.

        Raises:
            InvalidContactError: If kind, value or source is malformed
            DuplicateContactError: If (kind, value) already exists
            PrimaryContactConflictError: If the owner already has a primary
                contact of this kind
        """
        ...

    async def create_or_update_contact(self, request: CreateContactRequest) -> Contact:
        """
        Create a contact, or update the existing one with the same (kind, value).

        Ownership, primary and verification flags are promoted, never demoted.

        Raises:
            InvalidContactError: If input is malformed
            ContactOwnershipConflictError: If another account owns the contact
            PrimaryContactConflictError: If promotion to primary would clash
        """
        ...

    async def link_account(self, request: LinkContactRequest) -> Contact:
        """
        Attach an email contact to an account.

        When the contact was not owned by this account before, it is
        auto-subscribed (confirmed) to every default mailing list. With
        ``newsletter_opt_in`` it is also subscribed to the newsletter list.
        """
        ...

    async def get_contact(self, contact_id: str) -> Contact:
        """
        Get a contact by ID.

        Raises:
            ContactNotFoundError: If the contact doesn't exist
        """
        ...

    async def find_contact(self, kind: ContactKind, value: str) -> Optional[Contact]:
        """Find a contact by kind and (un-normalized) value."""
        ...

    async def list_account_contacts(self, account_id: str) -> list[Contact]:
        """List every contact owned by an account, oldest first."""
        ...

    async def delete_account_contacts(self, account_id: str) -> int:
        """
        Hard-delete every contact owned by an account.

        Subscriptions and verification tokens go with them (cascade).

        Returns:
            Number of contacts deleted
        """
        ...


@runtime_checkable
class IContactRepository(Protocol):
    """Storage contract for contacts."""

    def get_by_id(self, contact_id: str) -> Optional[Contact]: ...

    def get_by_value(self, kind: ContactKind, value: str) -> Optional[Contact]: ...

    def find_primary(self, owner_account_id: str, kind: ContactKind) -> Optional[Contact]: ...

    def list_by_owner(self, owner_account_id: str) -> list[Contact]: ...

    def insert(self, data: dict[str, Any]) -> Contact: ...

    def update(self, contact_id: str, changes: dict[str, Any]) -> Optional[Contact]: ...

    def delete_by_owner(self, owner_account_id: str) -> int: ...
