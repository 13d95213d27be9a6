# casetrack/__init__.py
import logging

from flask import Flask, g, jsonify, request

from .config import config_by_name, setup_logging
from .extensions import broker, init_extensions, jwt
from .core.errors import register_error_handlers
from .core.middleware import TenantMiddleware, configure_middleware
from .core.monitoring import init_sentry
from .core.security import register_jwt_callbacks
from .core.security.sanitization import sanitize_request
from .core.security.security_headers import init_security_headers
from .core.tenancy import init_tenancy
from .core.tenant_scope import register_tenant_scope
from .api.activities import activities_bp
from .api.creditors import creditors_bp
from .api.documents import documents_bp
from .api.events import events_bp
from .api.health import health_bp
from .api.judicial_processes import judicial_processes_bp
from .api.lawyers import lawyers_bp
from .api.maestro import maestro_bp
from .api.metrics import metrics_bp
from .api.provinces import provinces_bp
from .api.rabbitmq import rabbitmq_bp
from .api.roles import roles_bp
from .api.tenants import tenants_bp
from .api.users import users_bp
from .cli import register_commands, serves_requests

logger = logging.getLogger(__name__)

BLUEPRINTS = [
    (users_bp, "/api/usuarios"),
    (roles_bp, "/api/roles"),
    (lawyers_bp, "/api/lawyers"),
    (creditors_bp, "/api/creditors"),
    (judicial_processes_bp, "/api/judicial-processes"),
    (documents_bp, "/api/documents"),
    (activities_bp, "/api/activities"),
    (events_bp, "/api/events"),
    (provinces_bp, "/api/provincies"),
    (maestro_bp, "/api/maestro"),
    (tenants_bp, "/api/tenants"),
    (rabbitmq_bp, "/api/rabbitmq"),
    (health_bp, "/api/health"),
    (metrics_bp, "/api/metrics"),
]


def create_app(config_name="development"):
    app = Flask(__name__)

    # Load config
    app.config.from_object(config_by_name[config_name])
    if not app.testing:
        setup_logging(app.config["ENV_NAME"], app.config.get("LOG_FILE"))

    # Initialize extensions
    init_extensions(app)
    register_tenant_scope()
    init_tenancy(app)

    register_error_handlers(app)
    register_jwt_callbacks(jwt)
    init_sentry(app)
    init_security_headers(app)
    configure_middleware(app)

    @app.before_request
    @sanitize_request(exempt_paths=[r"/api/documents.*", r"/api/health"])
    def sanitize_api_requests():
        if request.path.startswith("/api/"):
            return None

    # Root endpoint
    @app.route("/")
    @TenantMiddleware.tenant_optional
    def root():
        return jsonify(
            {
                "service": "casetrack API",
                "version": app.config.get("VERSION", "1.0.0"),
                "status": "running",
                "tenant": g.tenant.subdomain if g.tenant else None,
            }
        )

    # Register blueprints
    for blueprint, url_prefix in BLUEPRINTS:
        app.register_blueprint(blueprint, url_prefix=url_prefix)

    register_commands(app)

    if app.config.get("RABBITMQ_CONSUMER_AUTOSTART") and broker.enabled and serves_requests():
        broker.start_consumer()

    logger.info(f"casetrack started with {config_name} configuration")
    return app
