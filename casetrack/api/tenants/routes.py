# casetrack/api/tenants/routes.py
from flask import Blueprint, jsonify, g
import logging

from casetrack.extensions import db
from casetrack.models import Tenant
from casetrack.core.constants import DefaultRole
from casetrack.core.errors import APIError
from casetrack.core.middleware import TenantMiddleware, get_current_tenant
from casetrack.core.monitoring import capture_error
from casetrack.core.permissions import require_role
from casetrack.core.security import login_required
from casetrack.core.validation import load_or_400
from .schemas import TenantCreateSchema, TenantUpdateSchema

logger = logging.getLogger(__name__)
tenants_bp = Blueprint("tenants", __name__)

create_schema = TenantCreateSchema()
update_schema = TenantUpdateSchema()

ADMIN = DefaultRole.ADMIN.value


@tenants_bp.route("/current", methods=["GET"])
@TenantMiddleware.tenant_required
@login_required
def current_tenant():
    return jsonify(get_current_tenant().to_dict())


@tenants_bp.route("", methods=["PUT"])
@TenantMiddleware.tenant_required
@login_required
@capture_error
def update_current_tenant():
    """Self-service edit of the caller's own tenant; subdomain and status are not editable"""
    data = load_or_400(update_schema, partial=True)
    tenant = g.tenant
    for key, value in data.items():
        setattr(tenant, key, value)

    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    logger.info(f"Tenant {tenant.subdomain} updated fields: {', '.join(sorted(data))}")
    return jsonify({"message": "Tenant updated", "tenant": tenant.to_dict()})


@tenants_bp.route("", methods=["GET"])
@TenantMiddleware.tenant_required
@login_required
@require_role(ADMIN)
def list_tenants():
    tenants = db.session.execute(db.select(Tenant).order_by(Tenant.subdomain)).scalars().all()
    return jsonify([tenant.to_dict() for tenant in tenants])


@tenants_bp.route("/<tenant_id>", methods=["GET"])
@TenantMiddleware.tenant_required
@login_required
@require_role(ADMIN)
def get_tenant(tenant_id):
    tenant = db.session.get(Tenant, tenant_id)
    if tenant is None:
        raise APIError("Tenant not found", status_code=404)
    return jsonify(tenant.to_dict())


@tenants_bp.route("", methods=["POST"])
@TenantMiddleware.tenant_required
@login_required
@require_role(ADMIN)
@capture_error
def provision_tenant():
    """Explicitly provision a tenant; provisioning an existing subdomain returns it unchanged"""
    data = load_or_400(create_schema)
    resolver = TenantMiddleware.get_resolver()

    subdomain = data.pop("subdomain").lower()
    existed = resolver.find(subdomain) is not None
    tenant = resolver.provision(
        subdomain,
        name=data.pop("name", None),
        settings=data.pop("settings", None),
        **data,
    )

    if existed:
        return jsonify({"message": "Tenant already provisioned", "tenant": tenant.to_dict()}), 200

    logger.info(f"Tenant {subdomain} provisioned by user {g.user_id}")
    return jsonify({"message": "Tenant provisioned successfully", "tenant": tenant.to_dict()}), 201
