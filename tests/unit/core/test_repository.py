# tests/unit/core/test_repository.py
import pytest

from casetrack.core.errors import APIError
from casetrack.core.exceptions import TenantScopeViolation
from casetrack.core.repository import TenantScopedRepository
from casetrack.models import Creditor


@pytest.fixture
def creditors(app):
    return TenantScopedRepository(Creditor)


@pytest.fixture
def seeded(creditors, tenant, other_tenant):
    mine = creditors.create(tenant.id, name="Banco Andino", ruc="1790000000001")
    theirs = creditors.create(other_tenant.id, name="Banco Pacifico", ruc="1790000000002")
    return mine, theirs


class TestTenantScopedRepository:
    def test_tenant_id_is_mandatory(self, creditors):
        with pytest.raises(TenantScopeViolation):
            creditors.list(None)
        with pytest.raises(TenantScopeViolation):
            creditors.create("", name="x", ruc="1")

    def test_list_only_returns_own_rows(self, creditors, tenant, seeded):
        mine, _ = seeded
        assert [c.id for c in creditors.list(tenant.id)] == [mine.id]

    def test_get_other_tenant_row_returns_none(self, creditors, tenant, seeded):
        _, theirs = seeded
        assert creditors.get(tenant.id, theirs.id) is None

    def test_get_or_404(self, creditors, tenant, seeded):
        _, theirs = seeded
        with pytest.raises(APIError) as exc:
            creditors.get_or_404(tenant.id, theirs.id, "Creditor not found")
        assert exc.value.status_code == 404
        assert exc.value.message == "Creditor not found"

    def test_create_stamps_tenant(self, creditors, tenant):
        creditor = creditors.create(tenant.id, name="Coop Jep", ruc="0190000000001")
        assert creditor.tenant_id == tenant.id
        assert creditor.status == "active"

    def test_create_for_other_tenant_is_refused(self, creditors, tenant, other_tenant):
        with pytest.raises(TenantScopeViolation):
            creditors.create(tenant.id, tenant_id=other_tenant.id, name="x", ruc="1")
        assert creditors.count(other_tenant.id) == 0

    def test_update_cannot_move_row_to_other_tenant(self, creditors, tenant, other_tenant, seeded):
        mine, _ = seeded
        with pytest.raises(TenantScopeViolation):
            creditors.update(tenant.id, mine, tenant_id=other_tenant.id)
        assert creditors.get(tenant.id, mine.id).tenant_id == tenant.id

    def test_same_tenant_keyword_is_accepted(self, creditors, tenant):
        creditor = creditors.create(tenant.id, tenant_id=tenant.id, name="Coop Jep", ruc="0190000000001")
        assert creditor.tenant_id == tenant.id

    def test_update_foreign_instance_is_refused(self, creditors, tenant, seeded):
        _, theirs = seeded
        with pytest.raises(TenantScopeViolation):
            creditors.update(tenant.id, theirs, name="Hijacked")

    def test_update_by_foreign_id_is_not_found(self, creditors, tenant, seeded):
        _, theirs = seeded
        with pytest.raises(APIError) as exc:
            creditors.update(tenant.id, theirs.id, name="Hijacked")
        assert exc.value.status_code == 404

    def test_delete_foreign_row_is_not_found(self, creditors, tenant, other_tenant, seeded):
        _, theirs = seeded
        with pytest.raises(APIError):
            creditors.delete(tenant.id, theirs.id)
        assert creditors.count(other_tenant.id) == 1

    def test_bulk_update_is_scoped(self, creditors, tenant, other_tenant, seeded):
        changed = creditors.bulk_update(tenant.id, {"status": "inactive"})

        assert changed == 1
        assert creditors.list(tenant.id)[0].status == "inactive"
        assert creditors.list(other_tenant.id)[0].status == "active"

    def test_bulk_update_cannot_move_rows(self, creditors, tenant, other_tenant, seeded):
        with pytest.raises(TenantScopeViolation):
            creditors.bulk_update(tenant.id, {"tenant_id": other_tenant.id})

    def test_bulk_delete_is_scoped(self, creditors, tenant, other_tenant, seeded):
        assert creditors.bulk_delete(tenant.id) == 1
        assert creditors.count(tenant.id) == 0
        assert creditors.count(other_tenant.id) == 1

    def test_bulk_create(self, creditors, tenant):
        rows = creditors.bulk_create(
            tenant.id,
            [
                {"name": "Banco Uno", "ruc": "1"},
                Creditor(name="Banco Dos", ruc="2"),
            ],
        )
        assert {row.tenant_id for row in rows} == {tenant.id}
        assert creditors.count(tenant.id) == 2

    def test_exists_respects_criteria(self, creditors, tenant, seeded):
        mine, _ = seeded
        assert creditors.exists(tenant.id, ruc=mine.ruc)
        assert not creditors.exists(tenant.id, Creditor.id != mine.id, ruc=mine.ruc)
        assert not creditors.exists(tenant.id, ruc="1790000000002")
