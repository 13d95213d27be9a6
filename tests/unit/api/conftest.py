# tests/unit/api/conftest.py
import pytest

from casetrack.core.repository import TenantScopedRepository
from casetrack.extensions import db
from casetrack.models import Creditor, JudicialProcess, Lawyer, Maestro, Province


def create_lawyer(tenant, email, lawyer_type):
    return TenantScopedRepository(Lawyer).create(
        tenant.id,
        first_name="Ana",
        last_name="Mora",
        email=email,
        lawyer_type=lawyer_type,
    )


@pytest.fixture
def internal_lawyer(tenant):
    return create_lawyer(tenant, "internal@acme.com", "internal")


@pytest.fixture
def external_lawyer(tenant):
    return create_lawyer(tenant, "external@acme.com", "external")


@pytest.fixture
def creditor(tenant):
    return TenantScopedRepository(Creditor).create(tenant.id, name="Banco Andino", ruc="1790011223001")


@pytest.fixture
def province(app):
    province = Province(name="Pichincha", postal_code="17")
    db.session.add(province)
    db.session.commit()
    return province


@pytest.fixture
def product(app):
    return Maestro.create(value="Credito hipotecario", code_maestro="producto")


@pytest.fixture
def guarantee(app):
    return Maestro.create(value="Hipoteca", code_maestro="garantia")


@pytest.fixture
def process(tenant, admin_user):
    return TenantScopedRepository(JudicialProcess).create(
        tenant.id,
        identification="1712345678",
        full_name="Maria Perez",
        process_type="Ejecutivo",
        case_number="17230-2024-00001",
        status="activo",
        created_by=admin_user.id,
    )


@pytest.fixture
def foreign_process(other_tenant):
    return TenantScopedRepository(JudicialProcess).create(
        other_tenant.id,
        identification="0912345678",
        full_name="Pedro Vera",
        process_type="Ordinario",
        status="activo",
    )
