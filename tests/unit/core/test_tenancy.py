# tests/unit/core/test_tenancy.py
import threading

import pytest
from sqlalchemy import create_engine, select
from sqlalchemy.orm import Session

from casetrack.core.errors import APIError
from casetrack.core.tenancy import TenantResolver, derive_subdomain, is_valid_subdomain
from casetrack.extensions import db
from casetrack.models import Role, Tenant


@pytest.mark.parametrize(
    "host,expected",
    [
        ("acme.example.com", "acme"),
        ("acme.example.com:8080", "acme"),
        ("a.b", "a"),
        ("a.b.c", "a"),
        ("ACME.Example.COM", "acme"),
        ("acme", "acme"),
        ("localhost", "default"),
        ("localhost:5000", "default"),
        ("127.0.0.1", "default"),
        ("10.0.0.12:8000", "default"),
        ("[::1]:5000", "default"),
        ("", "default"),
        (None, "default"),
    ],
)
def test_derive_subdomain(host, expected):
    assert derive_subdomain(host, "default") == expected


@pytest.mark.parametrize(
    "subdomain,valid",
    [
        ("acme", True),
        ("acme-legal-2", True),
        ("", False),
        ("Acme", False),
        ("acme_legal", False),
        ("a" * 101, False),
    ],
)
def test_is_valid_subdomain(subdomain, valid):
    assert is_valid_subdomain(subdomain) is valid


class TestTenantResolver:
    def test_provision_creates_tenant_with_defaults(self, resolver):
        tenant = resolver.provision("acme")

        assert tenant.name == "Tenant acme"
        assert tenant.subdomain == "acme"
        assert tenant.status == "active"
        assert tenant.settings == {}

    def test_provision_seeds_default_roles(self, resolver):
        tenant = resolver.provision("acme")

        names = {role.name for role in Role.query.filter_by(tenant_id=tenant.id)}
        assert names == {"admin", "abogado", "asistente"}

    def test_provision_is_idempotent(self, resolver):
        first = resolver.provision("acme", name="Acme Legal")
        second = resolver.provision("acme", name="Something Else")

        assert first.id == second.id
        assert second.name == "Acme Legal"
        assert Tenant.query.filter_by(subdomain="acme").count() == 1
        assert Role.query.filter_by(tenant_id=first.id).count() == 3

    def test_concurrent_provisioning_leaves_one_row(self, tmp_path):
        engine = create_engine(
            f"sqlite:///{tmp_path / 'race.db'}", connect_args={"timeout": 30}
        )
        db.metadata.create_all(engine)
        workers = 8
        barrier = threading.Barrier(workers)
        tenant_ids, errors = [], []

        def provision():
            with Session(engine) as session:
                resolver = TenantResolver(session=session)
                barrier.wait()
                try:
                    tenant_ids.append(resolver.provision("race").id)
                except Exception as e:
                    errors.append(e)

        threads = [threading.Thread(target=provision) for _ in range(workers)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        with Session(engine) as session:
            tenants = session.execute(select(Tenant)).scalars().all()
            roles = session.execute(select(Role)).scalars().all()
        engine.dispose()

        assert errors == []
        assert len(tenants) == 1
        assert set(tenant_ids) == {tenants[0].id}
        assert len(roles) == 3

    def test_provision_normalizes_case(self, resolver):
        tenant = resolver.provision("  ACME ")
        assert tenant.subdomain == "acme"

    def test_provision_rejects_invalid_subdomain(self, resolver):
        with pytest.raises(APIError) as exc:
            resolver.provision("not_valid!")

        assert exc.value.status_code == 400
        assert Tenant.query.count() == 0

    def test_lookup_ignores_inactive_tenants(self, resolver):
        tenant = resolver.provision("acme")
        tenant.status = "suspended"
        db.session.commit()

        assert resolver.lookup("acme") is None
        assert resolver.find("acme").id == tenant.id

    def test_resolve_uses_default_for_loopback(self, resolver):
        resolver.provision("localhost")
        assert resolver.resolve("127.0.0.1:5000").subdomain == "localhost"

    def test_from_config(self):
        resolver = TenantResolver.from_config(
            {"DEFAULT_TENANT": "main", "TENANT_AUTO_PROVISION": True}
        )
        assert resolver.default_subdomain == "main"
        assert resolver.auto_provision is True


class TestTenantRequired:
    """Resolution as seen through a tenant-scoped endpoint"""

    def test_unknown_subdomain_is_rejected_without_writing(self, client):
        response = client.get("/api/roles", headers={"Host": "acme.example.com"})

        assert response.status_code == 404
        assert response.json["subdomain"] == "acme"
        assert Tenant.query.count() == 0

    def test_development_auto_provisions_once(self, app, client, resolver):
        resolver.auto_provision = True
        headers = {"Host": "acme.example.com"}

        first = client.get("/api/roles", headers=headers)
        second = client.get("/api/roles", headers=headers)

        assert first.status_code == 200
        assert second.status_code == 200
        tenants = Tenant.query.all()
        assert len(tenants) == 1
        assert tenants[0].name == "Tenant acme"
        assert tenants[0].status == "active"
        assert len(first.json) == 3

    def test_auto_provision_skips_invalid_subdomain(self, client, resolver):
        resolver.auto_provision = True
        response = client.get("/api/roles", headers={"Host": "bad_name.example.com"})

        assert response.status_code == 404
        assert Tenant.query.count() == 0

    def test_malformed_host_is_not_served_as_default_tenant(self, client, resolver):
        resolver.provision("localhost")
        resolver.auto_provision = True

        response = client.get("/api/roles", headers={"Host": "bad_name.example.com"})

        assert response.status_code == 404
        assert Tenant.query.count() == 1

    def test_malformed_host_has_no_optional_tenant(self, client, resolver):
        resolver.provision("localhost")

        response = client.get("/", headers={"Host": "bad_name.example.com"})

        assert response.status_code == 200
        assert response.json["tenant"] is None

    def test_inactive_tenant_is_rejected(self, client, tenant):
        tenant.status = "inactive"
        db.session.commit()

        response = client.get("/api/roles", headers={"Host": "acme.example.com"})
        assert response.status_code == 404

    def test_inactive_tenant_is_forbidden_when_auto_provisioning(self, client, resolver, tenant):
        resolver.auto_provision = True
        tenant.status = "suspended"
        db.session.commit()

        response = client.get("/api/roles", headers={"Host": "acme.example.com"})
        assert response.status_code == 403
        assert Tenant.query.count() == 1

    def test_default_tenant_serves_localhost(self, client, resolver):
        resolver.provision("localhost")
        response = client.get("/api/roles", headers={"Host": "localhost:5000"})
        assert response.status_code == 200
