# casetrack/api/judicial_processes/routes.py
from flask import Blueprint, jsonify, request, g, current_app
import logging

from casetrack.extensions import db
from casetrack.models import Creditor, JudicialProcess, Lawyer, Maestro, Province
from casetrack.core.constants import LawyerType, ProcessStatus, values
from casetrack.core.database import integrity_guard
from casetrack.core.errors import APIError
from casetrack.core.middleware import TenantMiddleware
from casetrack.core.monitoring import capture_error
from casetrack.core.repository import TenantScopedRepository
from casetrack.core.security import login_required
from casetrack.core.validation import load_or_400
from .schemas import JudicialProcessSchema

logger = logging.getLogger(__name__)
judicial_processes_bp = Blueprint("judicial_processes", __name__)

processes = TenantScopedRepository(JudicialProcess)
lawyers = TenantScopedRepository(Lawyer)
creditors = TenantScopedRepository(Creditor)
process_schema = JudicialProcessSchema()

DUPLICATE_CASE = "Case number already registered"


def _check_lawyer(tenant_id, lawyer_id, lawyer_type: LawyerType):
    lawyer = lawyers.get(tenant_id, lawyer_id)
    if lawyer is None:
        raise APIError(f"{lawyer_type.value.capitalize()} lawyer not found", status_code=400)
    if lawyer.lawyer_type != lawyer_type.value:
        raise APIError(f"Lawyer {lawyer_id} is not an {lawyer_type.value} lawyer", status_code=400)


def _check_maestro(maestro_id, field, code_maestro):
    entry = db.session.get(Maestro, maestro_id)
    if entry is None or entry.code_maestro != code_maestro:
        raise APIError(
            f"{field} must reference a '{code_maestro}' maestro entry", status_code=400
        )


def validate_references(tenant_id, data):
    """Every id a process points at must exist, in this tenant and of the right kind"""
    if data.get("internal_lawyer_id"):
        _check_lawyer(tenant_id, data["internal_lawyer_id"], LawyerType.INTERNAL)
    if data.get("external_lawyer_id"):
        _check_lawyer(tenant_id, data["external_lawyer_id"], LawyerType.EXTERNAL)
    if data.get("creditor_id") and not creditors.exists(tenant_id, id=data["creditor_id"]):
        raise APIError("Creditor not found", status_code=400)
    if data.get("province_id") and db.session.get(Province, data["province_id"]) is None:
        raise APIError("Province not found", status_code=400)
    if data.get("product"):
        _check_maestro(data["product"], "product", current_app.config["MAESTRO_PRODUCT_CODE"])
    if data.get("guarantee"):
        _check_maestro(data["guarantee"], "guarantee", current_app.config["MAESTRO_GUARANTEE_CODE"])


@judicial_processes_bp.route("", methods=["GET"])
@TenantMiddleware.tenant_required
@login_required
def list_processes():
    filters = {}
    status = request.args.get("status")
    if status:
        if status not in values(ProcessStatus):
            raise APIError(f"status must be one of: {', '.join(values(ProcessStatus))}")
        filters["status"] = status

    result = processes.list(g.tenant_id, order_by=(JudicialProcess.created_at.desc(),), **filters)
    return jsonify([process.to_dict() for process in result])


@judicial_processes_bp.route("/<process_id>", methods=["GET"])
@TenantMiddleware.tenant_required
@login_required
def get_process(process_id):
    process = processes.get_or_404(g.tenant_id, process_id, "Judicial process not found")
    return jsonify(process.to_dict())


@judicial_processes_bp.route("", methods=["POST"])
@TenantMiddleware.tenant_required
@login_required
@capture_error
def create_process():
    data = load_or_400(process_schema)
    tenant_id = g.tenant_id

    if data.get("case_number") and processes.exists(tenant_id, case_number=data["case_number"]):
        raise APIError(DUPLICATE_CASE, status_code=400)
    validate_references(tenant_id, data)

    with integrity_guard(DUPLICATE_CASE):
        process = processes.create(tenant_id, created_by=g.user_id, **data)

    logger.info(f"Created judicial process {process.id}")
    return (
        jsonify({"message": "Judicial process created successfully", "process": process.to_dict()}),
        201,
    )


@judicial_processes_bp.route("/<process_id>", methods=["PUT"])
@TenantMiddleware.tenant_required
@login_required
@capture_error
def update_process(process_id):
    tenant_id = g.tenant_id
    process = processes.get_or_404(tenant_id, process_id, "Judicial process not found")
    data = load_or_400(process_schema, partial=True)

    if data.get("case_number") and processes.exists(
        tenant_id, JudicialProcess.id != process.id, case_number=data["case_number"]
    ):
        raise APIError(DUPLICATE_CASE, status_code=400)
    validate_references(tenant_id, data)

    with integrity_guard(DUPLICATE_CASE):
        processes.update(tenant_id, process, updated_by=g.user_id, **data)

    return jsonify({"message": "Judicial process updated", "process": process.to_dict()})


@judicial_processes_bp.route("/<process_id>", methods=["DELETE"])
@TenantMiddleware.tenant_required
@login_required
@capture_error
def delete_process(process_id):
    processes.delete(g.tenant_id, process_id)
    return jsonify({"message": "Judicial process deleted"})
