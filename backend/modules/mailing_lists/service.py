"""
Mailing list registry service.
"""

import logging
from typing import Optional

from shared.repository import UniqueViolation

from .exceptions import DuplicateMailingListError, InvalidSlugError, MailingListNotFoundError
from .interfaces import IMailingListRepository, IMailingListService
from .models import (
    DEFAULT_MAILING_LISTS,
    SLUG_REGEX,
    CreateMailingListRequest,
    MailingList,
    name_from_slug,
)

logger = logging.getLogger(__name__)


class MailingListService(IMailingListService):
    """
    Mailing list registry.

    Implements IMailingListService on top of an IMailingListRepository.
    """

    def __init__(self, repository: IMailingListRepository):
        self._repository = repository

    async def create_list(self, request: CreateMailingListRequest) -> MailingList:
        try:
            mailing_list = self._repository.insert(request.model_dump())
        except UniqueViolation as e:
            raise DuplicateMailingListError(request.slug) from e

        logger.info("Created mailing list %s", mailing_list.slug)
        return mailing_list

    async def get_list(self, mailing_list_id: str) -> MailingList:
        mailing_list = self._repository.get_by_id(mailing_list_id)
        if mailing_list is None:
            raise MailingListNotFoundError(mailing_list_id)
        return mailing_list

    async def get_list_by_slug(self, slug: str) -> Optional[MailingList]:
        return self._repository.get_by_slug(slug)

    async def get_or_create_list(self, slug: str, name: Optional[str] = None) -> MailingList:
        """Get a list by slug, creating an active non-default list if absent."""
        if not SLUG_REGEX.match(slug or ""):
            raise InvalidSlugError(slug)

        existing = self._repository.get_by_slug(slug)
        if existing is not None:
            return existing

        try:
            return await self.create_list(
                CreateMailingListRequest(slug=slug, name=name or name_from_slug(slug))
            )
        except DuplicateMailingListError:
            # Created concurrently by another request
            existing = self._repository.get_by_slug(slug)
            if existing is None:
                raise
            return existing

    async def list_lists(self, include_inactive: bool = True) -> list[MailingList]:
        return self._repository.list_all(active_only=not include_inactive)

    async def list_default_lists(self) -> list[MailingList]:
        return self._repository.list_all(active_only=True, default_only=True)

    async def seed_default_lists(self) -> list[MailingList]:
        created: list[MailingList] = []
        for request in DEFAULT_MAILING_LISTS:
            if self._repository.get_by_slug(request.slug) is not None:
                logger.info("Mailing list %s already exists", request.slug)
                continue
            try:
                created.append(await self.create_list(request))
            except DuplicateMailingListError:
                logger.info("Mailing list %s already exists", request.slug)
        return created
