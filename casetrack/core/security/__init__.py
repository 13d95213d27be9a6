# casetrack/core/security/__init__.py
import logging
from datetime import datetime
from functools import wraps

from flask import g, jsonify
from flask_jwt_extended import (
    create_access_token,
    get_jwt,
    get_jwt_identity,
    verify_jwt_in_request,
)
from werkzeug.security import generate_password_hash, check_password_hash

from ..errors import APIError

logger = logging.getLogger(__name__)


class SecurityMixin:
    @property
    def password(self):
        raise AttributeError("password is not a readable attribute")

    @password.setter
    def password(self, password):
        self.password_hash = generate_password_hash(password)

    def verify_password(self, password):
        return check_password_hash(self.password_hash, password)

    def generate_token(self):
        """Access token bound to the user's tenant and role"""
        return create_access_token(
            identity=self.id,
            additional_claims={
                "email": self.email,
                "tenant_id": self.tenant_id,
                "role": self.role.name if self.role else None,
            },
        )

    def update_last_login(self):
        self.last_login = datetime.utcnow()


def login_required(f):
    """
    Require a valid bearer token issued for the tenant of this request.

    Must sit below ``TenantMiddleware.tenant_required`` so ``g.tenant`` is
    already resolved. Loads the user into ``g.user``.
    """

    @wraps(f)
    def decorated(*args, **kwargs):
        verify_jwt_in_request()
        claims = get_jwt()
        tenant = getattr(g, "tenant", None)

        if tenant is not None and claims.get("tenant_id") != tenant.id:
            logger.warning(
                f"Token for tenant {claims.get('tenant_id')} used against {tenant.subdomain}"
            )
            raise APIError("Token not valid for this tenant", status_code=403)

        from casetrack.extensions import db
        from casetrack.models import User

        user = db.session.get(User, get_jwt_identity())
        if user is None or (tenant is not None and user.tenant_id != tenant.id):
            raise APIError("User not found", status_code=401)
        if not user.is_active:
            raise APIError("Account is inactive", status_code=401)

        g.user = user
        g.user_id = user.id
        g.user_role = claims.get("role")
        return f(*args, **kwargs)

    return decorated


def register_jwt_callbacks(jwt):
    """Answer JWT failures with the API's error body"""

    @jwt.unauthorized_loader
    def missing_token(reason):
        return jsonify({"error": "Access token required"}), 401

    @jwt.invalid_token_loader
    def invalid_token(reason):
        logger.warning(f"Invalid token: {reason}")
        return jsonify({"error": "Invalid token"}), 403

    @jwt.expired_token_loader
    def expired_token(jwt_header, jwt_payload):
        return jsonify({"error": "Token expired"}), 403

    return jwt


__all__ = [
    "SecurityMixin",
    "login_required",
    "register_jwt_callbacks",
]
