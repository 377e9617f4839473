"""Tests for the Supabase mailing list repository."""

from unittest.mock import MagicMock, call
from datetime import datetime, timezone

from modules.mailing_lists.repository import MailingListRepository


def create_mock_list_data(slug: str = "newsletter", **overrides) -> dict:
    now = datetime.now(timezone.utc).isoformat()
    return {
        "id": f"list-{slug}",
        "slug": slug,
        "name": slug.title(),
        "description": None,
        "is_default": False,
        "is_active": True,
        "created_at": now,
        "updated_at": now,
        **overrides,
    }


class TestMailingListRepository:
    def test_get_by_slug(self):
        mock_db = MagicMock()
        mock_db.table.return_value.select.return_value.eq.return_value.execute.return_value.data = [
            create_mock_list_data()
        ]

        mailing_list = MailingListRepository(mock_db).get_by_slug("newsletter")

        assert mailing_list.id == "list-newsletter"
        mock_db.table.assert_called_with("mailing_lists")
        mock_db.table.return_value.select.return_value.eq.assert_called_with("slug", "newsletter")

    def test_list_all_default_only(self):
        mock_db = MagicMock()
        query = mock_db.table.return_value.select.return_value
        query.eq.return_value = query
        query.order.return_value.execute.return_value.data = [
            create_mock_list_data("order-updates", is_default=True)
        ]

        lists = MailingListRepository(mock_db).list_all(active_only=True, default_only=True)

        assert [m.slug for m in lists] == ["order-updates"]
        assert query.eq.call_args_list == [call("is_active", True), call("is_default", True)]
