# tests/utils.py
from casetrack.core.repository import TenantScopedRepository
from casetrack.models import Role, User

TENANT_HOST = "acme.example.com"
OTHER_HOST = "globex.example.com"
PASSWORD = "password123"


def role_named(tenant, name):
    return Role.query.filter_by(tenant_id=tenant.id, name=name).one()


def make_user(tenant, username, role="admin", **overrides):
    """Create an active user straight through the repository"""
    fields = {
        "username": username,
        "email": f"{username}@{tenant.subdomain}.com",
        "password": PASSWORD,
        "first_name": username.capitalize(),
        "last_name": "Tester",
        "role_id": role_named(tenant, role).id if role else None,
    }
    fields.update(overrides)
    return TenantScopedRepository(User).create(tenant.id, **fields)


def headers_for(user, host=TENANT_HOST):
    return {"Host": host, "Authorization": f"Bearer {user.generate_token()}"}
