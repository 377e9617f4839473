"""
Contact repositories.

ContactRepository talks to the ``contacts`` table through PostgREST;
InMemoryContactRepository keeps the same contract over the in-memory
database. Both raise ``UniqueViolation`` on (kind, value) and primary
contact clashes and leave the mapping to the service.
"""

from typing import Any, Optional

from shared.memory import CONTACTS, InMemoryDatabase
from shared.repository import BaseRepository, first_row, to_row
from .models import Contact, ContactKind

TABLE = "contacts"

VALUE_CONSTRAINT = "uniq_contacts_value_kind"
PRIMARY_CONSTRAINT = "uniq_contacts_primary_per_owner"


class ContactRepository(BaseRepository[Contact]):
    """
    Repository for contact data access.

    Note: This repository does NOT perform ownership checks.
    The service layer is responsible for them.
    """

    def get_by_id(self, contact_id: str) -> Optional[Contact]:
        result = self._execute(self._db.table(TABLE).select("*").eq("id", contact_id))
        row = first_row(result)
        return Contact.model_validate(row) if row else None

    def get_by_value(self, kind: ContactKind, value: str) -> Optional[Contact]:
        result = self._execute(
            self._db.table(TABLE).select("*").eq("kind", kind.value).eq("value", value)
        )
        row = first_row(result)
        return Contact.model_validate(row) if row else None

    def find_primary(self, owner_account_id: str, kind: ContactKind) -> Optional[Contact]:
        result = self._execute(
            self._db.table(TABLE)
            .select("*")
            .eq("owner_account_id", owner_account_id)
            .eq("kind", kind.value)
            .eq("is_primary", True)
        )
        row = first_row(result)
        return Contact.model_validate(row) if row else None

    def list_by_owner(self, owner_account_id: str) -> list[Contact]:
        result = self._execute(
            self._db.table(TABLE)
            .select("*")
            .eq("owner_account_id", owner_account_id)
            .order("created_at")
        )
        return [Contact.model_validate(row) for row in result.data]

    def insert(self, data: dict[str, Any]) -> Contact:
        result = self._execute(self._db.table(TABLE).insert(to_row(data)))
        return Contact.model_validate(result.data[0])

    def update(self, contact_id: str, changes: dict[str, Any]) -> Optional[Contact]:
        result = self._execute(
            self._db.table(TABLE).update(to_row(changes)).eq("id", contact_id)
        )
        row = first_row(result)
        return Contact.model_validate(row) if row else None

    def delete_by_owner(self, owner_account_id: str) -> int:
        """Delete an account's contacts; the schema cascades the rest."""
        result = self._execute(
            self._db.table(TABLE).delete().eq("owner_account_id", owner_account_id)
        )
        return len(result.data or [])


class InMemoryContactRepository:
    """Contact repository over the in-memory database."""

    def __init__(self, db: InMemoryDatabase) -> None:
        self._db = db

    def get_by_id(self, contact_id: str) -> Optional[Contact]:
        row = self._db.get(CONTACTS, contact_id)
        return Contact.model_validate(row) if row else None

    def get_by_value(self, kind: ContactKind, value: str) -> Optional[Contact]:
        rows = self._db.select(CONTACTS, kind=kind.value, value=value)
        return Contact.model_validate(rows[0]) if rows else None

    def find_primary(self, owner_account_id: str, kind: ContactKind) -> Optional[Contact]:
        rows = self._db.select(
            CONTACTS, owner_account_id=owner_account_id, kind=kind.value, is_primary=True
        )
        return Contact.model_validate(rows[0]) if rows else None

    def list_by_owner(self, owner_account_id: str) -> list[Contact]:
        rows = self._db.select(CONTACTS, owner_account_id=owner_account_id)
        return [Contact.model_validate(row) for row in rows]

    def insert(self, data: dict[str, Any]) -> Contact:
        return Contact.model_validate(self._db.insert(CONTACTS, data))

    def update(self, contact_id: str, changes: dict[str, Any]) -> Optional[Contact]:
        row = self._db.update(CONTACTS, contact_id, changes)
        return Contact.model_validate(row) if row else None

    def delete_by_owner(self, owner_account_id: str) -> int:
        return len(self._db.delete(CONTACTS, owner_account_id=owner_account_id))
