# casetrack/api/users/routes.py
from flask import Blueprint, jsonify, g
from sqlalchemy import or_
import logging

from casetrack.extensions import db, limiter, broker
from casetrack.models import User, Role
from casetrack.core.database import integrity_guard
from casetrack.core.errors import APIError
from casetrack.core.middleware import TenantMiddleware
from casetrack.core.monitoring import capture_error
from casetrack.core.repository import TenantScopedRepository
from casetrack.core.security import login_required
from casetrack.core.validation import load_or_400
from .schemas import RegisterSchema, LoginSchema, UserUpdateSchema

logger = logging.getLogger(__name__)
users_bp = Blueprint("users", __name__)

users = TenantScopedRepository(User)
roles = TenantScopedRepository(Role)

register_schema = RegisterSchema()
login_schema = LoginSchema()
user_update_schema = UserUpdateSchema()

DUPLICATE_USER = "Email or username already registered"


def _check_role(tenant_id, role_id):
    if role_id and not roles.exists(tenant_id, id=role_id):
        raise APIError("Role not found in current tenant", status_code=400)


@users_bp.route("/registro", methods=["POST"])
@limiter.limit("10 per minute")
@TenantMiddleware.tenant_required
@capture_error
def register():
    """Register a user in the tenant of the request host"""
    data = load_or_400(register_schema)
    tenant_id = g.tenant_id

    if users.exists(tenant_id, or_(User.email == data["email"], User.username == data["username"])):
        raise APIError(DUPLICATE_USER, status_code=400)
    _check_role(tenant_id, data["role_id"])

    with integrity_guard(DUPLICATE_USER):
        user = users.create(tenant_id, **data)

    logger.info(f"Registered user {user.id}")
    broker.publish_user_created(user)

    return (
        jsonify(
            {
                "message": "User registered successfully",
                "usuario": user.to_dict(),
                "token": user.generate_token(),
            }
        ),
        201,
    )


@users_bp.route("/login", methods=["POST"])
@limiter.limit("5 per minute")
@TenantMiddleware.tenant_required
def login():
    data = load_or_400(login_schema)

    user = users.query(g.tenant_id).filter_by(email=data["email"]).first()
    if not user or not user.verify_password(data["password"]):
        logger.warning(f"Failed login for {data['email']}")
        raise APIError("Invalid credentials", status_code=401)

    if not user.is_active:
        raise APIError("Account is inactive", status_code=401)

    user.update_last_login()
    db.session.commit()

    return jsonify(
        {
            "message": "Login successful",
            "usuario": user.to_dict(),
            "token": user.generate_token(),
        }
    )


@users_bp.route("", methods=["GET"])
@TenantMiddleware.tenant_required
@login_required
def list_users():
    result = users.list(g.tenant_id, order_by=(User.last_name, User.first_name))
    return jsonify([user.to_dict() for user in result])


@users_bp.route("/<user_id>", methods=["GET"])
@TenantMiddleware.tenant_required
@login_required
def get_user(user_id):
    user = users.get_or_404(g.tenant_id, user_id, "User not found")
    return jsonify(user.to_dict())


@users_bp.route("/<user_id>", methods=["PUT"])
@TenantMiddleware.tenant_required
@login_required
@capture_error
def update_user(user_id):
    tenant_id = g.tenant_id
    user = users.get_or_404(tenant_id, user_id, "User not found")
    data = load_or_400(user_update_schema, partial=True)

    clashes = [
        column == data[key]
        for key, column in (("email", User.email), ("username", User.username))
        if key in data
    ]
    if clashes and users.exists(tenant_id, or_(*clashes), User.id != user.id):
        raise APIError(DUPLICATE_USER, status_code=400)
    if "role_id" in data:
        _check_role(tenant_id, data["role_id"])

    with integrity_guard(DUPLICATE_USER):
        users.update(tenant_id, user, **data)

    broker.publish_user_updated(user)
    return jsonify({"message": "User updated", "usuario": user.to_dict()})


@users_bp.route("/<user_id>", methods=["DELETE"])
@TenantMiddleware.tenant_required
@login_required
@capture_error
def delete_user(user_id):
    tenant_id = g.tenant_id
    user = users.get_or_404(tenant_id, user_id, "User not found")
    if user.id == g.user_id:
        raise APIError("You cannot delete your own account", status_code=400)

    users.delete(tenant_id, user)
    broker.publish_user_deleted(user_id, tenant_id)
    return jsonify({"message": "User deleted"})
