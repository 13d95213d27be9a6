# tests/unit/api/roles/test_routes.py
from casetrack.extensions import db
from casetrack.models import Role, User
from tests.utils import role_named


class TestRoleRoutes:
    def test_list_roles_is_public_within_tenant(self, client, host_headers):
        response = client.get("/api/roles", headers=host_headers)

        assert response.status_code == 200
        assert [role["name"] for role in response.json] == ["abogado", "admin", "asistente"]

    def test_roles_are_isolated_per_tenant(self, client, tenant, other_tenant, host_headers):
        foreign = role_named(other_tenant, "admin")
        response = client.get(f"/api/roles/{foreign.id}", headers=host_headers)
        assert response.status_code == 404

    def test_create_requires_token(self, client, host_headers):
        response = client.post("/api/roles", json={"name": "auditor"}, headers=host_headers)
        assert response.status_code == 401

    def test_create_role(self, client, tenant, auth_headers):
        response = client.post(
            "/api/roles",
            json={"name": "auditor", "description": "Read-only access"},
            headers=auth_headers,
        )

        assert response.status_code == 201
        assert response.json["role"]["name"] == "auditor"
        assert response.json["role"]["tenant_id"] == tenant.id

    def test_create_duplicate_role(self, client, auth_headers):
        response = client.post("/api/roles", json={"name": "admin"}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json["error"] == "A role with that name already exists"

    def test_same_role_name_in_other_tenant(self, client, tenant, other_tenant, auth_headers):
        client.post("/api/roles", json={"name": "auditor"}, headers=auth_headers)
        assert Role.query.filter_by(name="auditor").count() == 1
        assert Role.query.filter_by(name="admin").count() == 2

    def test_update_role(self, client, tenant, auth_headers):
        role = role_named(tenant, "asistente")
        response = client.put(
            f"/api/roles/{role.id}", json={"description": "Paralegal"}, headers=auth_headers
        )

        assert response.status_code == 200
        assert response.json["role"]["description"] == "Paralegal"

    def test_rename_to_existing_name(self, client, tenant, auth_headers):
        role = role_named(tenant, "asistente")
        response = client.put(f"/api/roles/{role.id}", json={"name": "admin"}, headers=auth_headers)
        assert response.status_code == 400

    def test_delete_role_detaches_users(self, client, tenant, auth_headers, lawyer_user):
        role = role_named(tenant, "abogado")
        response = client.delete(f"/api/roles/{role.id}", headers=auth_headers)

        assert response.status_code == 200
        db.session.expire_all()
        assert db.session.get(User, lawyer_user.id).role_id is None
        assert Role.query.filter_by(tenant_id=tenant.id, name="abogado").first() is None
