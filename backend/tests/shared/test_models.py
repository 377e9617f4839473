"""AuthenticatedUser is what the auth dependency hands to account routes."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from shared.models import AuthenticatedUser


def make_user(**overrides) -> AuthenticatedUser:
    fields = {"id": "acct-42", "email": "owner@example.com", **overrides}
    return AuthenticatedUser(**fields)


def test_unverified_by_default():
    user = make_user()

    assert (user.id, user.email) == ("acct-42", "owner@example.com")
    assert not user.email_verified
    assert user.last_sign_in is None


def test_keeps_sign_in_time():
    signed_in = datetime(2025, 3, 1, 9, 30, tzinfo=timezone.utc)

    user = make_user(email_verified=True, last_sign_in=signed_in)

    assert user.email_verified
    assert user.last_sign_in == signed_in


@pytest.mark.parametrize("email", ["", "owner", "owner@", "@example.com"])
def test_rejects_malformed_email(email):
    with pytest.raises(ValidationError):
        make_user(email=email)


def test_is_immutable():
    user = make_user()

    with pytest.raises(ValidationError):
        user.email = "someone-else@example.com"


def test_drops_unknown_claims():
    user = make_user(role="authenticated", aud="authenticated")

    assert "role" not in user.model_dump()
