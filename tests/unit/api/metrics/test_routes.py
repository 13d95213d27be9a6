# tests/unit/api/metrics/test_routes.py


def test_metrics_require_token(client, host_headers):
    assert client.get("/api/metrics", headers=host_headers).status_code == 401


def test_metrics_count_requests(client, auth_headers):
    client.get("/api/roles", headers=auth_headers)
    client.get("/api/roles/missing", headers=auth_headers)

    stats = client.get("/api/metrics", headers=auth_headers).json

    assert stats["total_requests"] >= 2
    assert stats["error_count"] >= 1
    assert "roles.list_roles" in stats["endpoints"]
    assert stats["endpoints"]["roles.get_role"]["error_count"] == 1


def test_metrics_report_own_tenant_requests(client, auth_headers, other_headers):
    client.get("/api/roles", headers=other_headers)
    client.get("/api/roles", headers=auth_headers)

    stats = client.get("/api/metrics", headers=auth_headers).json

    assert stats["tenant_requests"] == 1
