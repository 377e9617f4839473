"""
Tests for bearer token authentication on the account endpoints.
"""

import pytest
from datetime import datetime, timezone, timedelta
from fastapi import HTTPException
from jose import jwt
from unittest.mock import patch

from api.middleware.auth import decode_token, get_user_from_payload
from api.models.token import TokenPayload

SECRET = "test-secret-key-for-testing-only"

# Read-only endpoint that requires a signed-in account
EXPORT = "/api/contacts/export"


def sign(secret: str = SECRET, lifetime: timedelta = timedelta(hours=1), **claims) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": "acct-1",
        "email": "jane@example.com",
        "email_confirmed_at": now.isoformat(),
        "aud": "authenticated",
        "exp": int((now + lifetime).timestamp()),
        "iat": int(now.timestamp()),
        **claims,
    }
    return jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture
def jwt_secret():
    with patch("api.middleware.auth.get_settings") as mock_settings:
        mock_settings.return_value.supabase_jwt_secret = SECRET
        yield mock_settings


class TestDecodeToken:
    def test_valid(self, jwt_secret):
        payload = decode_token(sign())

        assert payload.sub == "acct-1"
        assert payload.email_verified is True

    @pytest.mark.parametrize(
        "token,message",
        [
            (sign(lifetime=timedelta(hours=-1)), "Token has expired"),
            (sign(secret="some-other-secret"), "Invalid token"),
            (sign(aud="anon"), "Invalid token"),
            ("not-a-jwt", "Invalid token"),
        ],
    )
    def test_rejected(self, jwt_secret, token, message):
        with pytest.raises(HTTPException) as exc_info:
            decode_token(token)

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail.startswith(message)

    def test_secret_not_configured(self, jwt_secret):
        jwt_secret.return_value.supabase_jwt_secret = ""

        with pytest.raises(HTTPException) as exc_info:
            decode_token(sign())

        assert "not configured" in exc_info.value.detail


class TestAccountEndpoints:
    def test_missing_header(self, client):
        response = client.get(EXPORT)

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    def test_token_identifies_account(self, client):
        response = client.get(EXPORT, headers={"Authorization": f"Bearer {sign(sub='acct-9')}"})

        assert response.status_code == 200
        assert response.json()["accountId"] == "acct-9"

    def test_expired_token(self, client):
        token = sign(lifetime=timedelta(minutes=-5))
        response = client.get(EXPORT, headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert "expired" in response.json()["detail"].lower()

    def test_public_endpoints_need_no_token(self, client):
        assert client.get("/api/mailing-lists").status_code == 200


class TestPayloadConversion:
    def test_verified_provider_email(self):
        payload = TokenPayload(
            sub="acct-1",
            email="jane@example.com",
            email_confirmed_at="2024-01-01T00:00:00Z",
            aud="authenticated",
            exp=9999999999,
            iat=1704067200,
        )

        user = get_user_from_payload(payload)

        assert user.id == "acct-1"
        assert user.email_verified is True
        assert user.last_sign_in == datetime(2024, 1, 1, tzinfo=timezone.utc)

    def test_unconfirmed_provider_email(self):
        payload = TokenPayload(
            sub="acct-2",
            email="sam@example.com",
            aud="authenticated",
            exp=9999999999,
            iat=1704067200,
        )
        assert get_user_from_payload(payload).email_verified is False
