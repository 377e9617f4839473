"""Tests for the data export and erasure endpoints."""


class TestExportEndpoint:
    def test_requires_auth(self, client):
        assert client.get("/api/contacts/export").status_code == 401

    def test_exports_own_data_only(self, client, mailing_lists, make_auth_headers):
        client.post("/api/contacts/link", json={}, headers=make_auth_headers("acct-1", "jane@example.com"))
        client.post("/api/contacts/link", json={}, headers=make_auth_headers("acct-2", "sam@example.com"))

        response = client.get("/api/contacts/export", headers=make_auth_headers("acct-1", "jane@example.com"))

        assert response.status_code == 200
        data = response.json()
        assert data["accountId"] == "acct-1"
        assert [c["value"] for c in data["contacts"]] == ["jane@example.com"]
        assert data["contacts"][0]["subscriptions"][0]["list"] == "Order Updates"


class TestDeleteEndpoint:
    def test_requires_auth(self, client):
        assert client.delete("/api/contacts").status_code == 401

    def test_deletes(self, client, mailing_lists, make_auth_headers):
        headers = make_auth_headers("acct-1", "jane@example.com")
        client.post("/api/contacts/link", json={}, headers=headers)

        response = client.delete("/api/contacts", headers=headers)

        assert response.status_code == 200
        assert response.json() == {"success": True, "accountId": "acct-1", "contactsDeleted": 1}
        assert client.get("/api/contacts/export", headers=headers).json()["contacts"] == []

    def test_no_data(self, client, auth_headers):
        response = client.delete("/api/contacts", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["error"] == "NO_CONTACT_DATA"
