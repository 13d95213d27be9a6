# casetrack/api/provinces/routes.py
import logging

from flask import Blueprint, jsonify

from casetrack.extensions import cache, db
from casetrack.models import Province
from casetrack.core.database import integrity_guard
from casetrack.core.errors import APIError
from casetrack.core.middleware import TenantMiddleware
from casetrack.core.monitoring import capture_error
from casetrack.core.security import login_required
from casetrack.core.validation import load_or_400
from .schemas import ProvinceSchema

logger = logging.getLogger(__name__)
provinces_bp = Blueprint("provinces", __name__)

province_schema = ProvinceSchema()

DUPLICATE_NAME = "Province already registered"


@cache.memoize()
def cached_provinces():
    return [province.to_dict() for province in Province.query.order_by(Province.name).all()]


def _get_or_404(province_id):
    province = db.session.get(Province, province_id)
    if province is None:
        raise APIError("Province not found", status_code=404)
    return province


def _name_taken(name, exclude_id=None):
    query = Province.query.filter(Province.name == name)
    if exclude_id:
        query = query.filter(Province.id != exclude_id)
    return query.first() is not None


@provinces_bp.route("", methods=["GET"])
def list_provinces():
    return jsonify(cached_provinces())


@provinces_bp.route("/<province_id>", methods=["GET"])
def get_province(province_id):
    return jsonify(_get_or_404(province_id).to_dict())


@provinces_bp.route("", methods=["POST"])
@TenantMiddleware.tenant_required
@login_required
@capture_error
def create_province():
    data = load_or_400(province_schema)
    if _name_taken(data["name"]):
        raise APIError(DUPLICATE_NAME, status_code=400)

    province = Province(**data)
    with integrity_guard(DUPLICATE_NAME):
        db.session.add(province)
        db.session.commit()
    cache.delete_memoized(cached_provinces)

    logger.info(f"Created province {province.name}")
    return jsonify({"message": "Province created successfully", "province": province.to_dict()}), 201


@provinces_bp.route("/<province_id>", methods=["PUT"])
@TenantMiddleware.tenant_required
@login_required
@capture_error
def update_province(province_id):
    province = _get_or_404(province_id)
    data = load_or_400(province_schema, partial=True)
    if "name" in data and _name_taken(data["name"], exclude_id=province.id):
        raise APIError(DUPLICATE_NAME, status_code=400)

    with integrity_guard(DUPLICATE_NAME):
        for key, value in data.items():
            setattr(province, key, value)
        db.session.commit()
    cache.delete_memoized(cached_provinces)

    return jsonify({"message": "Province updated", "province": province.to_dict()})


@provinces_bp.route("/<province_id>", methods=["DELETE"])
@TenantMiddleware.tenant_required
@login_required
@capture_error
def delete_province(province_id):
    province = _get_or_404(province_id)
    with integrity_guard("Province is still referenced by judicial processes"):
        db.session.delete(province)
        db.session.commit()
    cache.delete_memoized(cached_provinces)
    return jsonify({"message": "Province deleted"})
