# casetrack/api/activities/routes.py
from flask import Blueprint, jsonify, request, g

from casetrack.models import Activity, JudicialProcess, Lawyer
from casetrack.core.constants import ActivityType, Priority, values
from casetrack.core.errors import APIError
from casetrack.core.middleware import TenantMiddleware
from casetrack.core.monitoring import capture_error
from casetrack.core.repository import TenantScopedRepository
from casetrack.core.security import login_required
from casetrack.core.validation import load_or_400
from .schemas import ActivitySchema

activities_bp = Blueprint("activities", __name__)

activities = TenantScopedRepository(Activity)
processes = TenantScopedRepository(JudicialProcess)
lawyers = TenantScopedRepository(Lawyer)
activity_schema = ActivitySchema()

ORDERING = (Activity.activity_date.asc(), Activity.created_at.desc())


def _enum_filter(name, enum_cls):
    value = request.args.get(name)
    if value and value not in values(enum_cls):
        raise APIError(f"{name} must be one of: {', '.join(values(enum_cls))}")
    return value


def _check_references(tenant_id, data):
    if "judicial_process_id" in data and not processes.exists(tenant_id, id=data["judicial_process_id"]):
        raise APIError("Judicial process not found", status_code=400)
    if data.get("assigned_to") and not lawyers.exists(tenant_id, id=data["assigned_to"]):
        raise APIError("Assigned lawyer not found", status_code=400)


@activities_bp.route("", methods=["GET"])
@TenantMiddleware.tenant_required
@login_required
def list_activities():
    filters = {
        "judicial_process_id": request.args.get("judicial_process_id"),
        "activity_type": _enum_filter("activity_type", ActivityType),
        "priority": _enum_filter("priority", Priority),
        "assigned_to": request.args.get("assigned_to"),
    }
    filters = {key: value for key, value in filters.items() if value}

    result = activities.list(g.tenant_id, order_by=ORDERING, **filters)
    return jsonify([activity.to_dict() for activity in result])


@activities_bp.route("/process/<process_id>", methods=["GET"])
@TenantMiddleware.tenant_required
@login_required
def list_process_activities(process_id):
    processes.get_or_404(g.tenant_id, process_id, "Judicial process not found")
    result = activities.list(g.tenant_id, order_by=ORDERING, judicial_process_id=process_id)
    return jsonify([activity.to_dict() for activity in result])


@activities_bp.route("/<activity_id>", methods=["GET"])
@TenantMiddleware.tenant_required
@login_required
def get_activity(activity_id):
    return jsonify(activities.get_or_404(g.tenant_id, activity_id, "Activity not found").to_dict())


@activities_bp.route("", methods=["POST"])
@TenantMiddleware.tenant_required
@login_required
@capture_error
def create_activity():
    data = load_or_400(activity_schema)
    _check_references(g.tenant_id, data)

    activity = activities.create(g.tenant_id, **data)
    return jsonify({"message": "Activity created successfully", "activity": activity.to_dict()}), 201


@activities_bp.route("/<activity_id>", methods=["PUT"])
@TenantMiddleware.tenant_required
@login_required
@capture_error
def update_activity(activity_id):
    activity = activities.get_or_404(g.tenant_id, activity_id, "Activity not found")
    data = load_or_400(activity_schema, partial=True)
    _check_references(g.tenant_id, data)

    activities.update(g.tenant_id, activity, **data)
    return jsonify({"message": "Activity updated", "activity": activity.to_dict()})


@activities_bp.route("/<activity_id>", methods=["DELETE"])
@TenantMiddleware.tenant_required
@login_required
@capture_error
def delete_activity(activity_id):
    activities.delete(g.tenant_id, activity_id)
    return jsonify({"message": "Activity deleted"})
