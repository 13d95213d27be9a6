# casetrack/api/creditors/routes.py
from flask import Blueprint, jsonify, g

from casetrack.models import Creditor
from casetrack.core.database import integrity_guard
from casetrack.core.errors import APIError
from casetrack.core.middleware import TenantMiddleware
from casetrack.core.monitoring import capture_error
from casetrack.core.repository import TenantScopedRepository
from casetrack.core.security import login_required
from casetrack.core.validation import load_or_400
from .schemas import CreditorSchema

creditors_bp = Blueprint("creditors", __name__)

creditors = TenantScopedRepository(Creditor)
creditor_schema = CreditorSchema()

DUPLICATE_RUC = "RUC already registered"


@creditors_bp.route("", methods=["GET"])
@TenantMiddleware.tenant_required
def list_creditors():
    return jsonify([c.to_dict() for c in creditors.list(g.tenant_id, order_by=(Creditor.name,))])


@creditors_bp.route("/<creditor_id>", methods=["GET"])
@TenantMiddleware.tenant_required
def get_creditor(creditor_id):
    return jsonify(creditors.get_or_404(g.tenant_id, creditor_id, "Creditor not found").to_dict())


@creditors_bp.route("", methods=["POST"])
@TenantMiddleware.tenant_required
@login_required
@capture_error
def create_creditor():
    data = load_or_400(creditor_schema)
    if creditors.exists(g.tenant_id, ruc=data["ruc"]):
        raise APIError(DUPLICATE_RUC, status_code=400)

    with integrity_guard(DUPLICATE_RUC):
        creditor = creditors.create(g.tenant_id, **data)

    return jsonify({"message": "Creditor created successfully", "creditor": creditor.to_dict()}), 201


@creditors_bp.route("/<creditor_id>", methods=["PUT"])
@TenantMiddleware.tenant_required
@login_required
@capture_error
def update_creditor(creditor_id):
    creditor = creditors.get_or_404(g.tenant_id, creditor_id, "Creditor not found")
    data = load_or_400(creditor_schema, partial=True)

    if "ruc" in data and creditors.exists(g.tenant_id, Creditor.id != creditor.id, ruc=data["ruc"]):
        raise APIError(DUPLICATE_RUC, status_code=400)

    with integrity_guard(DUPLICATE_RUC):
        creditors.update(g.tenant_id, creditor, **data)

    return jsonify({"message": "Creditor updated", "creditor": creditor.to_dict()})


@creditors_bp.route("/<creditor_id>", methods=["DELETE"])
@TenantMiddleware.tenant_required
@login_required
@capture_error
def delete_creditor(creditor_id):
    with integrity_guard("Creditor is still referenced by judicial processes"):
        creditors.delete(g.tenant_id, creditor_id)
    return jsonify({"message": "Creditor deleted"})
