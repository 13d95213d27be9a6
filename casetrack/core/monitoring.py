# casetrack/core/monitoring.py

from flask import g, request, has_request_context
import sentry_sdk
from sentry_sdk.integrations.flask import FlaskIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration
from functools import wraps
import logging

logger = logging.getLogger(__name__)


def should_capture_error(exception):
    """Client errors (4xx) are not worth an event"""
    status_code = getattr(exception, "status_code", None)
    if status_code is not None and status_code < 500:
        return False
    return True


def _tag_scope():
    tenant = getattr(g, "tenant", None)
    if tenant is not None:
        sentry_sdk.set_tag("tenant_id", tenant.id)
        sentry_sdk.set_tag("tenant_subdomain", tenant.subdomain)

    user_id = getattr(g, "user_id", None)
    if user_id:
        sentry_sdk.set_user({"id": user_id, "tenant_id": tenant.id if tenant else None})


def init_sentry(app):
    """Initialize Sentry when a DSN is configured"""
    if not app.config.get("SENTRY_DSN"):
        logger.debug("SENTRY_DSN not configured, skipping Sentry initialization")
        return False

    def before_send(event, hint):
        exc_info = hint.get("exc_info")
        if exc_info and not should_capture_error(exc_info[1]):
            return None

        if has_request_context():
            tenant = getattr(g, "tenant", None)
            if tenant is not None:
                event.setdefault("tags", {})["tenant_subdomain"] = tenant.subdomain
            event.setdefault("request", {})
            event["request"]["url"] = request.url
            event["request"]["method"] = request.method

        return event

    sentry_sdk.init(
        dsn=app.config["SENTRY_DSN"],
        integrations=[
            FlaskIntegration(transaction_style="url"),
            SqlalchemyIntegration(),
        ],
        before_send=before_send,
        traces_sample_rate=0.01,
        environment=app.config.get("ENV_NAME", "production"),
        max_breadcrumbs=20,
        send_default_pii=False,
    )
    return True


def capture_error(func):
    """Report unexpected exceptions raised by a view to Sentry, then re-raise"""

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except Exception as e:
            if should_capture_error(e):
                _tag_scope()
                sentry_sdk.capture_exception(e)
            raise

    return wrapper
