# casetrack/api/metrics/routes.py
from flask import Blueprint, g, jsonify

from casetrack.core.metrics import get_current_metrics
from casetrack.core.middleware import TenantMiddleware
from casetrack.core.security import login_required

metrics_bp = Blueprint("metrics", __name__)


@metrics_bp.route("", methods=["GET"])
@TenantMiddleware.tenant_required
@login_required
def get_metrics():
    """Request metrics, with the request count of the caller's tenant"""
    return jsonify(get_current_metrics(g.tenant_id))
