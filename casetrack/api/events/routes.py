# casetrack/api/events/routes.py
from flask import Blueprint, jsonify, g

from casetrack.models import Event, User
from casetrack.core.errors import APIError
from casetrack.core.middleware import TenantMiddleware
from casetrack.core.monitoring import capture_error
from casetrack.core.repository import TenantScopedRepository
from casetrack.core.security import login_required
from casetrack.core.validation import load_or_400
from .schemas import EventSchema

events_bp = Blueprint("events", __name__)

events = TenantScopedRepository(Event)
users = TenantScopedRepository(User)
event_schema = EventSchema()


@events_bp.route("", methods=["GET"])
@TenantMiddleware.tenant_required
@login_required
def list_events():
    result = events.list(g.tenant_id, order_by=(Event.event_date.asc(),))
    return jsonify([event.to_dict() for event in result])


@events_bp.route("/user/<user_id>", methods=["GET"])
@TenantMiddleware.tenant_required
@login_required
def list_user_events(user_id):
    users.get_or_404(g.tenant_id, user_id, "User not found")
    result = events.list(g.tenant_id, order_by=(Event.event_date.asc(),), user_id=user_id)
    return jsonify([event.to_dict() for event in result])


@events_bp.route("/<event_id>", methods=["GET"])
@TenantMiddleware.tenant_required
@login_required
def get_event(event_id):
    return jsonify(events.get_or_404(g.tenant_id, event_id, "Event not found").to_dict())


@events_bp.route("", methods=["POST"])
@TenantMiddleware.tenant_required
@login_required
@capture_error
def create_event():
    data = load_or_400(event_schema)
    if not users.exists(g.tenant_id, id=data["user_id"]):
        raise APIError("User not found in current tenant", status_code=400)

    event = events.create(g.tenant_id, **data)
    return jsonify({"message": "Event created successfully", "event": event.to_dict()}), 201


@events_bp.route("/<event_id>", methods=["PUT"])
@TenantMiddleware.tenant_required
@login_required
@capture_error
def update_event(event_id):
    event = events.get_or_404(g.tenant_id, event_id, "Event not found")
    data = load_or_400(event_schema, partial=True)
    if data.get("user_id") and not users.exists(g.tenant_id, id=data["user_id"]):
        raise APIError("User not found in current tenant", status_code=400)

    events.update(g.tenant_id, event, **data)
    return jsonify({"message": "Event updated", "event": event.to_dict()})


@events_bp.route("/<event_id>", methods=["DELETE"])
@TenantMiddleware.tenant_required
@login_required
@capture_error
def delete_event(event_id):
    events.delete(g.tenant_id, event_id)
    return jsonify({"message": "Event deleted"})
