# casetrack/api/roles/routes.py
from flask import Blueprint, jsonify, g
import logging

from casetrack.models import Role, User
from casetrack.core.database import integrity_guard
from casetrack.core.errors import APIError
from casetrack.core.middleware import TenantMiddleware
from casetrack.core.monitoring import capture_error
from casetrack.core.repository import TenantScopedRepository
from casetrack.core.security import login_required
from casetrack.core.validation import load_or_400
from .schemas import RoleSchema

logger = logging.getLogger(__name__)
roles_bp = Blueprint("roles", __name__)

roles = TenantScopedRepository(Role)
users = TenantScopedRepository(User)
role_schema = RoleSchema()

DUPLICATE_ROLE = "A role with that name already exists"


@roles_bp.route("", methods=["GET"])
@TenantMiddleware.tenant_required
def list_roles():
    """Roles of the tenant; public so the registration form can offer them"""
    return jsonify([role.to_dict() for role in roles.list(g.tenant_id, order_by=(Role.name,))])


@roles_bp.route("/<role_id>", methods=["GET"])
@TenantMiddleware.tenant_required
def get_role(role_id):
    return jsonify(roles.get_or_404(g.tenant_id, role_id, "Role not found").to_dict())


@roles_bp.route("", methods=["POST"])
@TenantMiddleware.tenant_required
@login_required
@capture_error
def create_role():
    data = load_or_400(role_schema)
    if roles.exists(g.tenant_id, name=data["name"]):
        raise APIError(DUPLICATE_ROLE, status_code=400)

    with integrity_guard(DUPLICATE_ROLE):
        role = roles.create(g.tenant_id, **data)

    return jsonify({"message": "Role created successfully", "role": role.to_dict()}), 201


@roles_bp.route("/<role_id>", methods=["PUT"])
@TenantMiddleware.tenant_required
@login_required
@capture_error
def update_role(role_id):
    role = roles.get_or_404(g.tenant_id, role_id, "Role not found")
    data = load_or_400(role_schema, partial=True)

    if "name" in data and roles.exists(g.tenant_id, Role.id != role.id, name=data["name"]):
        raise APIError(DUPLICATE_ROLE, status_code=400)

    with integrity_guard(DUPLICATE_ROLE):
        roles.update(g.tenant_id, role, **data)

    return jsonify({"message": "Role updated successfully", "role": role.to_dict()})


@roles_bp.route("/<role_id>", methods=["DELETE"])
@TenantMiddleware.tenant_required
@login_required
@capture_error
def delete_role(role_id):
    role = roles.get_or_404(g.tenant_id, role_id, "Role not found")
    detached = users.bulk_update(g.tenant_id, {"role_id": None}, commit=False, role_id=role.id)
    if detached:
        logger.info(f"Role {role.name} removed from {detached} user(s)")

    roles.delete(g.tenant_id, role)
    return jsonify({"message": "Role deleted successfully"})
