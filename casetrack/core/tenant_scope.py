# casetrack/core/tenant_scope.py
"""
Session-level tenant scoping.

Every model that mixes in ``TenantScopedMixin`` carries a ``tenant_id``.
Once a tenant id is bound to a session (the request decorator does this):

* SELECTs touching scoped entities get ``tenant_id = <bound id>`` criteria,
  including relationship and lazy loads;
* new scoped rows without a tenant are stamped with the bound id;
* flushing a new, modified or deleted row that belongs to another tenant
  raises ``TenantScopeViolation``.

Bulk UPDATE/DELETE statements are not rewritten here; they go through
``TenantScopedRepository`` which always filters on the tenant explicitly.
"""
import logging

from sqlalchemy import event
from sqlalchemy.orm import Session, declared_attr, with_loader_criteria

from ..extensions import db
from .exceptions import TenantScopeViolation

logger = logging.getLogger(__name__)

TENANT_SESSION_KEY = "tenant_id"


class TenantScopedMixin:
    """Adds the owning tenant foreign key to a model"""

    @declared_attr
    def tenant_id(cls):
        return db.Column(
            db.String(36),
            db.ForeignKey("tenants.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )


def bind_tenant(session, tenant_id):
    """Bind a tenant to the session; scoped reads and writes follow it"""
    if not tenant_id:
        raise TenantScopeViolation("Cannot bind an empty tenant id")
    session.info[TENANT_SESSION_KEY] = str(tenant_id)


def unbind_tenant(session):
    session.info.pop(TENANT_SESSION_KEY, None)


def bound_tenant(session):
    return session.info.get(TENANT_SESSION_KEY)


def _add_tenant_criteria(execute_state):
    tenant_id = execute_state.session.info.get(TENANT_SESSION_KEY)
    if (
        tenant_id
        and execute_state.is_select
        and not execute_state.is_column_load
        and not execute_state.is_relationship_load
    ):
        execute_state.statement = execute_state.statement.options(
            with_loader_criteria(
                TenantScopedMixin,
                lambda cls: cls.tenant_id == tenant_id,
                include_aliases=True,
            )
        )


def _stamp_and_check(session, flush_context, instances):
    tenant_id = session.info.get(TENANT_SESSION_KEY)
    if not tenant_id:
        return

    for obj in session.new:
        if not isinstance(obj, TenantScopedMixin):
            continue
        if obj.tenant_id is None:
            obj.tenant_id = tenant_id
        elif obj.tenant_id != tenant_id:
            raise TenantScopeViolation(
                f"Refusing to create {type(obj).__name__} for tenant {obj.tenant_id} "
                f"inside tenant {tenant_id}"
            )

    for obj in list(session.dirty) + list(session.deleted):
        if isinstance(obj, TenantScopedMixin) and obj.tenant_id != tenant_id:
            raise TenantScopeViolation(
                f"Refusing to modify {type(obj).__name__} {getattr(obj, 'id', None)} "
                f"of tenant {obj.tenant_id} inside tenant {tenant_id}"
            )


def register_tenant_scope(session_cls=Session):
    """Attach the scoping listeners once per session class"""
    if not event.contains(session_cls, "do_orm_execute", _add_tenant_criteria):
        event.listen(session_cls, "do_orm_execute", _add_tenant_criteria)
    if not event.contains(session_cls, "before_flush", _stamp_and_check):
        event.listen(session_cls, "before_flush", _stamp_and_check)
    logger.debug(f"Tenant scope listeners registered on {session_cls.__name__}")
