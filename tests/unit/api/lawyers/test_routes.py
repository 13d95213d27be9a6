# tests/unit/api/lawyers/test_routes.py
import pytest

from casetrack.core.repository import TenantScopedRepository
from casetrack.models import Lawyer


def lawyer_body(**overrides):
    body = {
        "first_name": "Ana",
        "last_name": "Mora",
        "email": "ana.mora@acme.com",
        "phone": "0991234567",
        "lawyer_type": "internal",
        "status": "active",
    }
    body.update(overrides)
    return body


@pytest.fixture
def foreign_lawyer(other_tenant):
    return TenantScopedRepository(Lawyer).create(
        other_tenant.id, **lawyer_body(email="ana@globex.com")
    )


class TestLawyerRoutes:
    def test_requires_token(self, client, host_headers):
        assert client.get("/api/lawyers", headers=host_headers).status_code == 401

    def test_create_lawyer(self, client, tenant, auth_headers):
        response = client.post("/api/lawyers", json=lawyer_body(), headers=auth_headers)

        assert response.status_code == 201
        lawyer = response.json["lawyer"]
        assert lawyer["tenant_id"] == tenant.id
        assert lawyer["lawyer_type"] == "internal"

    def test_create_rejects_unknown_type(self, client, auth_headers):
        response = client.post(
            "/api/lawyers", json=lawyer_body(lawyer_type="partner"), headers=auth_headers
        )

        assert response.status_code == 400
        assert "lawyer_type" in response.json["details"]

    def test_duplicate_email_in_tenant(self, client, auth_headers):
        client.post("/api/lawyers", json=lawyer_body(), headers=auth_headers)
        response = client.post("/api/lawyers", json=lawyer_body(), headers=auth_headers)

        assert response.status_code == 400
        assert response.json["error"] == "Email already registered"

    def test_link_user_of_other_tenant_is_rejected(self, client, auth_headers, other_user):
        response = client.post(
            "/api/lawyers", json=lawyer_body(user_id=other_user.id), headers=auth_headers
        )
        assert response.status_code == 400

    def test_list_filters_by_type(self, client, auth_headers, foreign_lawyer):
        client.post("/api/lawyers", json=lawyer_body(), headers=auth_headers)
        client.post(
            "/api/lawyers",
            json=lawyer_body(email="luis@acme.com", first_name="Luis", lawyer_type="external"),
            headers=auth_headers,
        )

        everyone = client.get("/api/lawyers", headers=auth_headers).json
        external = client.get("/api/lawyers?lawyer_type=external", headers=auth_headers).json

        assert len(everyone) == 2
        assert [lawyer["first_name"] for lawyer in external] == ["Luis"]

    def test_list_rejects_bad_type_filter(self, client, auth_headers):
        response = client.get("/api/lawyers?lawyer_type=partner", headers=auth_headers)
        assert response.status_code == 400

    def test_cannot_read_or_change_foreign_lawyer(self, client, auth_headers, foreign_lawyer):
        url = f"/api/lawyers/{foreign_lawyer.id}"

        assert client.get(url, headers=auth_headers).status_code == 404
        assert client.put(url, json={"phone": "1"}, headers=auth_headers).status_code == 404
        assert client.delete(url, headers=auth_headers).status_code == 404

    def test_update_and_delete(self, client, auth_headers):
        lawyer_id = client.post("/api/lawyers", json=lawyer_body(), headers=auth_headers).json[
            "lawyer"
        ]["id"]

        updated = client.put(
            f"/api/lawyers/{lawyer_id}", json={"status": "suspended"}, headers=auth_headers
        )
        assert updated.status_code == 200
        assert updated.json["lawyer"]["status"] == "suspended"

        deleted = client.delete(f"/api/lawyers/{lawyer_id}", headers=auth_headers)
        assert deleted.status_code == 200
        assert client.get(f"/api/lawyers/{lawyer_id}", headers=auth_headers).status_code == 404
