"""
Mailing list repositories (Supabase and in-memory).
"""

from typing import Any, Optional

from shared.memory import MAILING_LISTS, InMemoryDatabase
from shared.repository import BaseRepository, first_row, to_row
from .models import MailingList

TABLE = "mailing_lists"


class MailingListRepository(BaseRepository[MailingList]):
    """Repository for the ``mailing_lists`` table."""

    def get_by_id(self, mailing_list_id: str) -> Optional[MailingList]:
        result = self._execute(self._db.table(TABLE).select("*").eq("id", mailing_list_id))
        row = first_row(result)
        return MailingList.model_validate(row) if row else None

    def get_by_slug(self, slug: str) -> Optional[MailingList]:
        result = self._execute(self._db.table(TABLE).select("*").eq("slug", slug))
        row = first_row(result)
        return MailingList.model_validate(row) if row else None

    def list_all(self, active_only: bool = False, default_only: bool = False) -> list[MailingList]:
        query = self._db.table(TABLE).select("*")
        if active_only:
            query = query.eq("is_active", True)
        if default_only:
            query = query.eq("is_default", True)
        result = self._execute(query.order("created_at"))
        return [MailingList.model_validate(row) for row in result.data]

    def insert(self, data: dict[str, Any]) -> MailingList:
        result = self._execute(self._db.table(TABLE).insert(to_row(data)))
        return MailingList.model_validate(result.data[0])


class InMemoryMailingListRepository:
    """Mailing list repository over the in-memory database."""

    def __init__(self, db: InMemoryDatabase) -> None:
        self._db = db

    def get_by_id(self, mailing_list_id: str) -> Optional[MailingList]:
        row = self._db.get(MAILING_LISTS, mailing_list_id)
        return MailingList.model_validate(row) if row else None

    def get_by_slug(self, slug: str) -> Optional[MailingList]:
        rows = self._db.select(MAILING_LISTS, slug=slug)
        return MailingList.model_validate(rows[0]) if rows else None

    def list_all(self, active_only: bool = False, default_only: bool = False) -> list[MailingList]:
        filters: dict[str, Any] = {}
        if active_only:
            filters["is_active"] = True
        if default_only:
            filters["is_default"] = True
        return [MailingList.model_validate(row) for row in self._db.select(MAILING_LISTS, **filters)]

    def insert(self, data: dict[str, Any]) -> MailingList:
        return MailingList.model_validate(self._db.insert(MAILING_LISTS, data))
