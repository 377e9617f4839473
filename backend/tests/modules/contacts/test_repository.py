"""Tests for the Supabase contact repository."""

import pytest
from unittest.mock import MagicMock
from datetime import datetime, timezone

from postgrest.exceptions import APIError

from modules.contacts.models import ContactKind
from modules.contacts.repository import ContactRepository, PRIMARY_CONSTRAINT
from shared.repository import UniqueViolation


def create_mock_contact_data(
    contact_id: str = "contact-123",
    value: str = "jane@example.com",
    owner_account_id: str | None = None,
) -> dict:
    """Helper to create mock contact data."""
    now = datetime.now(timezone.utc).isoformat()
    return {
        "id": contact_id,
        "kind": "email",
        "value": value,
        "owner_account_id": owner_account_id,
        "is_primary": False,
        "is_verified": False,
        "verified_at": None,
        "source": "signup_form",
        "metadata": {},
        "created_at": now,
        "updated_at": now,
    }


class TestContactRepository:
    def test_get_by_value(self):
        mock_db = MagicMock()
        query = mock_db.table.return_value.select.return_value.eq.return_value.eq.return_value
        query.execute.return_value.data = [create_mock_contact_data()]

        contact = ContactRepository(mock_db).get_by_value(ContactKind.EMAIL, "jane@example.com")

        assert contact.id == "contact-123"
        mock_db.table.assert_called_with("contacts")
        mock_db.table.return_value.select.return_value.eq.assert_called_with("kind", "email")
        mock_db.table.return_value.select.return_value.eq.return_value.eq.assert_called_with(
            "value", "jane@example.com"
        )

    def test_get_by_id_missing(self):
        mock_db = MagicMock()
        mock_db.table.return_value.select.return_value.eq.return_value.execute.return_value.data = []

        assert ContactRepository(mock_db).get_by_id("missing") is None

    def test_insert_serializes_enums(self):
        mock_db = MagicMock()
        mock_db.table.return_value.insert.return_value.execute.return_value.data = [
            create_mock_contact_data()
        ]

        ContactRepository(mock_db).insert({"kind": ContactKind.EMAIL, "value": "jane@example.com"})

        mock_db.table.return_value.insert.assert_called_once_with(
            {"kind": "email", "value": "jane@example.com"}
        )

    def test_insert_unique_violation(self):
        mock_db = MagicMock()
        mock_db.table.return_value.insert.return_value.execute.side_effect = APIError(
            {
                "code": "23505",
                "message": f'duplicate key value violates unique constraint "{PRIMARY_CONSTRAINT}"',
                "details": None,
                "hint": None,
            }
        )

        with pytest.raises(UniqueViolation) as exc_info:
            ContactRepository(mock_db).insert({"kind": ContactKind.EMAIL, "value": "jane@example.com"})

        assert exc_info.value.constraint == PRIMARY_CONSTRAINT

    def test_list_by_owner(self):
        mock_db = MagicMock()
        query = mock_db.table.return_value.select.return_value.eq.return_value.order.return_value
        query.execute.return_value.data = [
            create_mock_contact_data("c1", "a@example.com", "acct-1"),
            create_mock_contact_data("c2", "b@example.com", "acct-1"),
        ]

        contacts = ContactRepository(mock_db).list_by_owner("acct-1")

        assert [c.id for c in contacts] == ["c1", "c2"]
        mock_db.table.return_value.select.return_value.eq.assert_called_with("owner_account_id", "acct-1")

    def test_delete_by_owner_counts_rows(self):
        mock_db = MagicMock()
        mock_db.table.return_value.delete.return_value.eq.return_value.execute.return_value.data = [
            create_mock_contact_data("c1", "a@example.com", "acct-1"),
            create_mock_contact_data("c2", "b@example.com", "acct-1"),
        ]

        assert ContactRepository(mock_db).delete_by_owner("acct-1") == 2


class TestInMemoryContactRepository:
    def test_find_primary(self, container):
        repository = container.contact_repository
        repository.insert({"kind": "email", "value": "a@example.com", "source": "auth",
                           "owner_account_id": "acct-1", "is_primary": False})
        primary = repository.insert({"kind": "email", "value": "b@example.com", "source": "auth",
                                     "owner_account_id": "acct-1", "is_primary": True})

        assert repository.find_primary("acct-1", ContactKind.EMAIL).id == primary.id
        assert repository.find_primary("acct-1", ContactKind.PHONE) is None
