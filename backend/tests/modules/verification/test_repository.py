"""Tests for the Supabase verification token repository."""

import pytest
from unittest.mock import MagicMock
from datetime import datetime, timezone

from postgrest.exceptions import APIError

from modules.verification.repository import EXPIRED_TOKEN, VerificationTokenRepository
from shared.repository import ProcedureError

NOW = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


def create_mock_row(**overrides) -> dict:
    now = NOW.isoformat()
    return {
        "id": "row-123",
        "contact_id": "contact-123",
        "mailing_list_id": "list-123",
        "created_at": now,
        "updated_at": now,
        **overrides,
    }


class TestVerificationTokenRepository:
    def test_count_recent(self):
        mock_db = MagicMock()
        query = mock_db.table.return_value.select.return_value.eq.return_value.gt.return_value
        query.execute.return_value.count = 2

        count = VerificationTokenRepository(mock_db).count_recent("contact-123", NOW)

        assert count == 2
        mock_db.table.return_value.select.assert_called_once_with("id", count="exact")
        mock_db.table.return_value.select.return_value.eq.return_value.gt.assert_called_once_with(
            "created_at", NOW.isoformat()
        )

    def test_consume_calls_function(self):
        mock_db = MagicMock()
        mock_db.rpc.return_value.execute.return_value.data = {
            "contact": create_mock_row(
                id="contact-123",
                kind="email",
                value="jane@example.com",
                source="signup_form",
                is_verified=True,
                verified_at=NOW.isoformat(),
            ),
            "subscription": create_mock_row(id="sub-123", status="subscribed", opt_in_at=NOW.isoformat()),
        }

        result = VerificationTokenRepository(mock_db).consume("tok", NOW, "203.0.113.7", None)

        assert result.contact.is_verified is True
        assert result.subscription.id == "sub-123"
        mock_db.rpc.assert_called_once_with(
            "consume_verification_token",
            {
                "p_token": "tok",
                "p_now": NOW.isoformat(),
                "p_opt_in_ip": "203.0.113.7",
                "p_opt_in_user_agent": None,
            },
        )

    def test_consume_expired(self):
        mock_db = MagicMock()
        mock_db.rpc.return_value.execute.side_effect = APIError(
            {"code": "P0001", "message": EXPIRED_TOKEN, "details": None, "hint": None}
        )

        with pytest.raises(ProcedureError) as exc_info:
            VerificationTokenRepository(mock_db).consume("tok", NOW)

        assert exc_info.value.reason == EXPIRED_TOKEN
