# casetrack/api/maestro/routes.py
from flask import Blueprint, jsonify, request

from casetrack.extensions import cache, db
from casetrack.models import Maestro
from casetrack.core.database import integrity_guard
from casetrack.core.errors import APIError
from casetrack.core.middleware import TenantMiddleware
from casetrack.core.monitoring import capture_error
from casetrack.core.security import login_required
from casetrack.core.validation import load_or_400
from .schemas import MaestroSchema

maestro_bp = Blueprint("maestro", __name__)

maestro_schema = MaestroSchema()


@cache.memoize()
def cached_entries(code_maestro=None):
    query = Maestro.query
    if code_maestro:
        query = query.filter(Maestro.code_maestro == code_maestro)
    return [entry.to_dict() for entry in query.order_by(Maestro.code_maestro, Maestro.value).all()]


def _get_or_404(maestro_id):
    entry = db.session.get(Maestro, maestro_id)
    if entry is None:
        raise APIError("Maestro entry not found", status_code=404)
    return entry


@maestro_bp.route("", methods=["GET"])
def list_entries():
    """List catalogue rows, optionally one ``code_maestro`` category"""
    return jsonify(cached_entries(request.args.get("code_maestro") or None))


@maestro_bp.route("/<maestro_id>", methods=["GET"])
def get_entry(maestro_id):
    return jsonify(_get_or_404(maestro_id).to_dict())


@maestro_bp.route("", methods=["POST"])
@TenantMiddleware.tenant_required
@login_required
@capture_error
def create_entry():
    data = load_or_400(maestro_schema)
    entry = Maestro.create(**data)
    cache.delete_memoized(cached_entries)
    return jsonify({"message": "Maestro entry created successfully", "maestro": entry.to_dict()}), 201


@maestro_bp.route("/<maestro_id>", methods=["PUT"])
@TenantMiddleware.tenant_required
@login_required
@capture_error
def update_entry(maestro_id):
    entry = _get_or_404(maestro_id)
    data = load_or_400(maestro_schema, partial=True)
    for key, value in data.items():
        setattr(entry, key, value)
    entry.save()
    cache.delete_memoized(cached_entries)
    return jsonify({"message": "Maestro entry updated", "maestro": entry.to_dict()})


@maestro_bp.route("/<maestro_id>", methods=["DELETE"])
@TenantMiddleware.tenant_required
@login_required
@capture_error
def delete_entry(maestro_id):
    entry = _get_or_404(maestro_id)
    with integrity_guard("Maestro entry is still referenced by judicial processes"):
        entry.delete()
    cache.delete_memoized(cached_entries)
    return jsonify({"message": "Maestro entry deleted"})
