# casetrack/core/repository.py
import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from ..extensions import db
from .errors import APIError
from .exceptions import TenantScopeViolation

logger = logging.getLogger(__name__)


class TenantScopedRepository:
    """
    Data access for a tenant-scoped model.

    Every method takes the tenant id as its first, mandatory argument and
    filters or stamps on it; there is no way to reach another tenant's rows
    through this class.
    """

    def __init__(self, model, session=None):
        self.model = model
        self._session = session

    @property
    def session(self):
        return self._session if self._session is not None else db.session

    @property
    def entity_name(self) -> str:
        return self.model.__name__

    def _require_tenant(self, tenant_id) -> str:
        if not tenant_id:
            raise TenantScopeViolation(f"{self.entity_name} access requires a tenant id")
        return str(tenant_id)

    def _check_owner(self, tenant_id: str, instance):
        if instance.tenant_id != tenant_id:
            raise TenantScopeViolation(
                f"{self.entity_name} {instance.id} does not belong to tenant {tenant_id}"
            )

    def _check_fields(self, tenant_id: str, fields: Dict[str, Any]):
        requested = fields.pop("tenant_id", None)
        if requested is not None and str(requested) != tenant_id:
            raise TenantScopeViolation(
                f"Cannot assign {self.entity_name} to tenant {requested} from tenant {tenant_id}"
            )
        return fields

    def _commit(self, commit: bool):
        if not commit:
            self.session.flush()
            return
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

    # Reads

    def query(self, tenant_id):
        tenant_id = self._require_tenant(tenant_id)
        return self.session.query(self.model).filter(self.model.tenant_id == tenant_id)

    def list(self, tenant_id, /, *criteria, order_by: Sequence = (), **filters) -> List[Any]:
        q = self.query(tenant_id).filter(*criteria).filter_by(**filters)
        if order_by:
            q = q.order_by(*order_by)
        return q.all()

    def get(self, tenant_id, id) -> Optional[Any]:
        if not id:
            return None
        return self.query(tenant_id).filter(self.model.id == str(id)).first()

    def get_or_404(self, tenant_id, id, message: Optional[str] = None):
        instance = self.get(tenant_id, id)
        if instance is None:
            raise APIError(message or f"{self.entity_name} not found", status_code=404)
        return instance

    def exists(self, tenant_id, /, *criteria, **filters) -> bool:
        return self.query(tenant_id).filter(*criteria).filter_by(**filters).first() is not None

    def count(self, tenant_id, /, *criteria, **filters) -> int:
        return self.query(tenant_id).filter(*criteria).filter_by(**filters).count()

    # Writes

    def create(self, tenant_id, /, commit: bool = True, **fields):
        tenant_id = self._require_tenant(tenant_id)
        fields = self._check_fields(tenant_id, dict(fields))
        instance = self.model(tenant_id=tenant_id, **fields)
        self.session.add(instance)
        self._commit(commit)
        logger.debug(f"Created {self.entity_name} {instance.id} for tenant {tenant_id}")
        return instance

    def update(self, tenant_id, instance_or_id, /, commit: bool = True, **fields):
        tenant_id = self._require_tenant(tenant_id)
        instance = self._resolve(tenant_id, instance_or_id)
        fields = self._check_fields(tenant_id, dict(fields))
        for key, value in fields.items():
            setattr(instance, key, value)
        self._commit(commit)
        return instance

    def delete(self, tenant_id, instance_or_id, commit: bool = True):
        tenant_id = self._require_tenant(tenant_id)
        instance = self._resolve(tenant_id, instance_or_id)
        self.session.delete(instance)
        self._commit(commit)
        logger.debug(f"Deleted {self.entity_name} {instance.id} for tenant {tenant_id}")
        return instance

    def bulk_create(self, tenant_id, rows: Iterable[Union[Dict[str, Any], Any]], commit: bool = True):
        tenant_id = self._require_tenant(tenant_id)
        instances = []
        for row in rows:
            if isinstance(row, self.model):
                if row.tenant_id is None:
                    row.tenant_id = tenant_id
                self._check_owner(tenant_id, row)
                instance = row
            else:
                fields = self._check_fields(tenant_id, dict(row))
                instance = self.model(tenant_id=tenant_id, **fields)
            instances.append(instance)
        self.session.add_all(instances)
        self._commit(commit)
        return instances

    def bulk_update(self, tenant_id, values: Dict[str, Any], /, *criteria, commit: bool = True, **filters) -> int:
        tenant_id = self._require_tenant(tenant_id)
        values = self._check_fields(tenant_id, dict(values))
        count = (
            self.query(tenant_id)
            .filter(*criteria)
            .filter_by(**filters)
            .update(values, synchronize_session="fetch")
        )
        self._commit(commit)
        return count

    def bulk_delete(self, tenant_id, /, *criteria, commit: bool = True, **filters) -> int:
        tenant_id = self._require_tenant(tenant_id)
        count = (
            self.query(tenant_id)
            .filter(*criteria)
            .filter_by(**filters)
            .delete(synchronize_session="fetch")
        )
        self._commit(commit)
        return count

    def _resolve(self, tenant_id: str, instance_or_id):
        if isinstance(instance_or_id, self.model):
            self._check_owner(tenant_id, instance_or_id)
            return instance_or_id
        return self.get_or_404(tenant_id, instance_or_id)
