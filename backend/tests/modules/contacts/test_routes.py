"""Tests for the account link endpoint."""

from modules.contacts.models import ContactKind


class TestLinkContact:
    def test_requires_auth(self, client):
        response = client.post("/api/contacts/link", json={})
        assert response.status_code == 401

    def test_links_token_email(self, client, container, mailing_lists, make_auth_headers):
        response = client.post(
            "/api/contacts/link",
            json={"newsletterOptIn": True},
            headers=make_auth_headers(user_id="acct-1", email="Jane@Example.com"),
        )

        assert response.status_code == 200
        data = response.json()
        assert data["value"] == "jane@example.com"
        assert data["owner_account_id"] == "acct-1"
        assert data["is_primary"] is True
        assert data["is_verified"] is True
        assert data["source"] == "auth"

        subscriptions = container.subscription_repository.list_by_contact(data["id"])
        assert {s.mailing_list_id for s in subscriptions} == {
            mailing_lists["order-updates"].id,
            mailing_lists["newsletter"].id,
        }

    def test_unverified_provider_email(self, client, mailing_lists, make_auth_headers):
        response = client.post(
            "/api/contacts/link",
            json={},
            headers=make_auth_headers(user_id="acct-1", email="jane@example.com", email_verified=False),
        )

        assert response.status_code == 200
        assert response.json()["is_verified"] is False

    def test_email_owned_by_other_account(self, client, container, mailing_lists, make_auth_headers):
        client.post("/api/contacts/link", json={}, headers=make_auth_headers(user_id="acct-1"))

        response = client.post("/api/contacts/link", json={}, headers=make_auth_headers(user_id="acct-2"))

        assert response.status_code == 409
        assert response.json()["error"] == "CONTACT_OWNERSHIP_CONFLICT"
        contact = container.contact_repository.get_by_value(ContactKind.EMAIL, "test@example.com")
        assert contact.owner_account_id == "acct-1"
