from functools import wraps
from flask import request, g, current_app
from werkzeug.middleware.proxy_fix import ProxyFix
import time
import logging
from typing import Any, Callable, Optional

from casetrack.extensions import db
from casetrack.core.exceptions import TenantNotFoundError, InactiveTenantError
from casetrack.core.metrics import metrics
from casetrack.core.tenancy import TenantResolver, is_valid_subdomain
from casetrack.core.tenant_scope import bind_tenant, unbind_tenant

logger = logging.getLogger(__name__)


class MetricsMiddleware:
    """Collects per-endpoint request timings"""

    @staticmethod
    def start_timer() -> None:
        g.start_time = time.time()

    @staticmethod
    def record_metrics(response) -> None:
        if not hasattr(g, "start_time"):
            return

        elapsed_time = time.time() - g.start_time
        metrics.track_request(
            endpoint=request.endpoint or request.path,
            duration=elapsed_time,
            status_code=response.status_code,
            tenant_id=getattr(g, "tenant_id", None),
        )
        logger.debug(
            f"{request.method} {request.path} -> {response.status_code} in {elapsed_time:.3f}s"
        )


class TenantMiddleware:
    """Resolves the tenant of a request from its Host header"""

    @staticmethod
    def get_resolver() -> TenantResolver:
        resolver = current_app.extensions.get("tenant_resolver")
        if resolver is None:
            resolver = TenantResolver.from_config(current_app.config)
            current_app.extensions["tenant_resolver"] = resolver
        return resolver

    @staticmethod
    def attach(tenant) -> None:
        g.tenant = tenant
        g.tenant_id = tenant.id
        bind_tenant(db.session, tenant.id)

    @staticmethod
    def malformed_host() -> Optional[str]:
        """Raw Host header when one was sent but werkzeug rejected it"""
        raw = request.headers.get("Host")
        if raw and not request.host:
            return raw
        return None

    @classmethod
    def get_tenant_from_request(cls):
        """Active tenant for the request host, provisioning it only when enabled"""
        resolver = cls.get_resolver()
        raw = cls.malformed_host()
        if raw is not None:
            logger.warning(f"Malformed Host header: {raw!r}")
            raise TenantNotFoundError(subdomain=resolver.subdomain_for(raw))

        subdomain = resolver.subdomain_for(request.host)

        tenant = resolver.lookup(subdomain)
        if tenant is not None:
            return tenant

        if not resolver.auto_provision or not is_valid_subdomain(subdomain):
            logger.warning(f"No tenant found for subdomain: {subdomain}")
            raise TenantNotFoundError(subdomain=subdomain)

        tenant = resolver.provision(subdomain)
        if not tenant.is_active:
            logger.warning(f"Inactive tenant accessed: {tenant.id}")
            raise InactiveTenantError(f"Tenant {tenant.subdomain} is not active")
        return tenant

    @classmethod
    def tenant_required(cls, f: Callable) -> Callable:
        """Reject the request unless it resolves to an active tenant"""

        @wraps(f)
        def decorated(*args: Any, **kwargs: Any) -> Any:
            cls.attach(cls.get_tenant_from_request())
            return f(*args, **kwargs)

        return decorated

    @classmethod
    def tenant_optional(cls, f: Callable) -> Callable:
        """Attach the tenant when the host resolves to one, carry on otherwise"""

        @wraps(f)
        def decorated(*args: Any, **kwargs: Any) -> Any:
            tenant = None
            if cls.malformed_host() is None:
                tenant = cls.get_resolver().resolve(request.host)
            if tenant is not None:
                cls.attach(tenant)
            else:
                g.tenant = None
                g.tenant_id = None
            return f(*args, **kwargs)

        return decorated


def get_current_tenant():
    tenant = getattr(g, "tenant", None)
    if tenant is None:
        logger.warning("Attempt to access current tenant outside tenant context")
    return tenant


def configure_middleware(app):
    """Configure request hooks shared by every blueprint"""
    # Behind a proxy the original Host arrives as X-Forwarded-Host
    if not app.debug and not app.testing:
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_port=1)

    @app.before_request
    def before_request():
        MetricsMiddleware.start_timer()

    @app.after_request
    def after_request(response):
        MetricsMiddleware.record_metrics(response)
        return response

    @app.teardown_request
    def release_tenant(exc=None):
        unbind_tenant(db.session)

    logger.debug("Middleware configured")
    return app
