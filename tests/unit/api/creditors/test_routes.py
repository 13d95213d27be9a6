# tests/unit/api/creditors/test_routes.py


def creditor_body(**overrides):
    body = {"name": "Banco Andino", "ruc": "1790011223001", "status": "active"}
    body.update(overrides)
    return body


class TestCreditorRoutes:
    def test_reads_need_tenant_only(self, client, host_headers):
        response = client.get("/api/creditors", headers=host_headers)

        assert response.status_code == 200
        assert response.json == []

    def test_writes_need_token(self, client, host_headers):
        response = client.post("/api/creditors", json=creditor_body(), headers=host_headers)
        assert response.status_code == 401

    def test_create_and_list(self, client, auth_headers, host_headers):
        created = client.post("/api/creditors", json=creditor_body(), headers=auth_headers)
        assert created.status_code == 201

        listed = client.get("/api/creditors", headers=host_headers).json
        assert [creditor["ruc"] for creditor in listed] == ["1790011223001"]

    def test_name_is_stored_as_sent(self, client, auth_headers):
        response = client.post(
            "/api/creditors", json=creditor_body(name="Smith & Sons <Holdings>"), headers=auth_headers
        )

        assert response.status_code == 201
        assert response.json["creditor"]["name"] == "Smith & Sons <Holdings>"

    def test_duplicate_ruc(self, client, auth_headers):
        client.post("/api/creditors", json=creditor_body(), headers=auth_headers)
        response = client.post(
            "/api/creditors", json=creditor_body(name="Otro"), headers=auth_headers
        )

        assert response.status_code == 400
        assert response.json["error"] == "RUC already registered"

    def test_same_ruc_in_other_tenant(self, client, auth_headers, other_headers):
        first = client.post("/api/creditors", json=creditor_body(), headers=auth_headers)
        second = client.post("/api/creditors", json=creditor_body(), headers=other_headers)

        assert first.status_code == 201
        assert second.status_code == 201

    def test_other_tenant_cannot_see_creditor(self, client, auth_headers, other_headers):
        creditor_id = client.post(
            "/api/creditors", json=creditor_body(), headers=auth_headers
        ).json["creditor"]["id"]

        assert client.get("/api/creditors", headers=other_headers).json == []
        response = client.get(f"/api/creditors/{creditor_id}", headers=other_headers)
        assert response.status_code == 404

    def test_update_and_delete(self, client, auth_headers):
        creditor_id = client.post(
            "/api/creditors", json=creditor_body(), headers=auth_headers
        ).json["creditor"]["id"]

        updated = client.put(
            f"/api/creditors/{creditor_id}", json={"name": "Banco Andino SA"}, headers=auth_headers
        )
        assert updated.json["creditor"]["name"] == "Banco Andino SA"

        deleted = client.delete(f"/api/creditors/{creditor_id}", headers=auth_headers)
        assert deleted.status_code == 200
        assert deleted.json == {"message": "Creditor deleted"}
