# casetrack/api/lawyers/routes.py
from flask import Blueprint, jsonify, request, g

from casetrack.models import Lawyer, User
from casetrack.core.constants import LawyerType, values
from casetrack.core.database import integrity_guard
from casetrack.core.errors import APIError
from casetrack.core.middleware import TenantMiddleware
from casetrack.core.monitoring import capture_error
from casetrack.core.repository import TenantScopedRepository
from casetrack.core.security import login_required
from casetrack.core.validation import load_or_400
from .schemas import LawyerSchema

lawyers_bp = Blueprint("lawyers", __name__)

lawyers = TenantScopedRepository(Lawyer)
users = TenantScopedRepository(User)
lawyer_schema = LawyerSchema()

DUPLICATE_EMAIL = "Email already registered"


def _check_user(tenant_id, data):
    if data.get("user_id") and not users.exists(tenant_id, id=data["user_id"]):
        raise APIError("User not found in current tenant", status_code=400)


@lawyers_bp.route("", methods=["GET"])
@TenantMiddleware.tenant_required
@login_required
def list_lawyers():
    """List lawyers, optionally only one ``lawyer_type``"""
    filters = {}
    lawyer_type = request.args.get("lawyer_type")
    if lawyer_type:
        if lawyer_type not in values(LawyerType):
            raise APIError(f"lawyer_type must be one of: {', '.join(values(LawyerType))}")
        filters["lawyer_type"] = lawyer_type

    result = lawyers.list(g.tenant_id, order_by=(Lawyer.last_name, Lawyer.first_name), **filters)
    return jsonify([lawyer.to_dict() for lawyer in result])


@lawyers_bp.route("/<lawyer_id>", methods=["GET"])
@TenantMiddleware.tenant_required
@login_required
def get_lawyer(lawyer_id):
    return jsonify(lawyers.get_or_404(g.tenant_id, lawyer_id, "Lawyer not found").to_dict())


@lawyers_bp.route("", methods=["POST"])
@TenantMiddleware.tenant_required
@login_required
@capture_error
def create_lawyer():
    data = load_or_400(lawyer_schema)
    if lawyers.exists(g.tenant_id, email=data["email"]):
        raise APIError(DUPLICATE_EMAIL, status_code=400)
    _check_user(g.tenant_id, data)

    with integrity_guard(DUPLICATE_EMAIL):
        lawyer = lawyers.create(g.tenant_id, **data)

    return jsonify({"message": "Lawyer created successfully", "lawyer": lawyer.to_dict()}), 201


@lawyers_bp.route("/<lawyer_id>", methods=["PUT"])
@TenantMiddleware.tenant_required
@login_required
@capture_error
def update_lawyer(lawyer_id):
    lawyer = lawyers.get_or_404(g.tenant_id, lawyer_id, "Lawyer not found")
    data = load_or_400(lawyer_schema, partial=True)

    if "email" in data and lawyers.exists(g.tenant_id, Lawyer.id != lawyer.id, email=data["email"]):
        raise APIError(DUPLICATE_EMAIL, status_code=400)
    _check_user(g.tenant_id, data)

    with integrity_guard(DUPLICATE_EMAIL):
        lawyers.update(g.tenant_id, lawyer, **data)

    return jsonify({"message": "Lawyer updated", "lawyer": lawyer.to_dict()})


@lawyers_bp.route("/<lawyer_id>", methods=["DELETE"])
@TenantMiddleware.tenant_required
@login_required
@capture_error
def delete_lawyer(lawyer_id):
    lawyers.delete(g.tenant_id, lawyer_id)
    return jsonify({"message": "Lawyer deleted"})
