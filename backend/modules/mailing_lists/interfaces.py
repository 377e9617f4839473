"""
Mailing lists module interface.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from .models import MailingList, CreateMailingListRequest


@runtime_checkable
class IMailingListService(Protocol):
    """
    Interface for the mailing list registry.
    """

    async def create_list(self, request: CreateMailingListRequest) -> MailingList:
        """
        Create a mailing list.

        Raises:
            DuplicateMailingListError: If the slug is taken
        """
        ...

    async def get_list(self, mailing_list_id: str) -> MailingList:
        """
        Get a mailing list by ID.

        Raises:
            MailingListNotFoundError: If it doesn't exist
        """
        ...

    async def get_list_by_slug(self, slug: str) -> Optional[MailingList]:
        """Get a mailing list by slug, or None."""
        ...

    async def get_or_create_list(self, slug: str, name: Optional[str] = None) -> MailingList:
        """
        Get a list by slug, creating it on first use.

        Lazily created lists are active, not default, and named after the
        slug unless ``name`` is given.

        Raises:
            InvalidSlugError: If the slug is malformed
        """
        ...

    async def list_lists(self, include_inactive: bool = True) -> list[MailingList]:
        """All mailing lists, oldest first."""
        ...

    async def list_default_lists(self) -> list[MailingList]:
        """Active lists every new account is auto-subscribed to."""
        ...

    async def seed_default_lists(self) -> list[MailingList]:
        """
        Create the standard lists that don't exist yet.

        Returns:
            Only the lists created by this call
        """
        ...


@runtime_checkable
class IMailingListRepository(Protocol):
    """Storage contract for mailing lists."""

    def get_by_id(self, mailing_list_id: str) -> Optional[MailingList]: ...

    def get_by_slug(self, slug: str) -> Optional[MailingList]: ...

    def list_all(self, active_only: bool = False, default_only: bool = False) -> list[MailingList]: ...

    def insert(self, data: dict[str, Any]) -> MailingList: ...
