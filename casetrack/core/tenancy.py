# casetrack/core/tenancy.py
"""
Tenant resolution and provisioning.

Resolution is a pure read: the request host is reduced to a subdomain and
looked up among active tenants. Provisioning is a separate, explicit write
(admin endpoint, CLI, or the development-only auto-provisioning in the
request decorator) and is idempotent on the unique ``subdomain`` column.
"""
import ipaddress
import logging
import re
from datetime import datetime
from typing import Optional

from sqlalchemy import insert, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError

from ..extensions import db
from .constants import TenantStatus
from .errors import APIError
from .utils import generate_uuid

logger = logging.getLogger(__name__)

SUBDOMAIN_RE = re.compile(r"^[a-z0-9-]+$")
SUBDOMAIN_MAX_LENGTH = 100
LOOPBACK_HOSTS = {"localhost", "localhost.localdomain"}


def _strip_port(host: str) -> str:
    if host.startswith("["):
        end = host.find("]")
        return host[1:end] if end != -1 else host[1:]
    # A bare IPv6 literal has several colons and no port
    if host.count(":") == 1:
        return host.split(":", 1)[0]
    return host


def _is_ip_literal(host: str) -> bool:
    try:
        ipaddress.ip_address(host)
    except ValueError:
        return False
    return True


def derive_subdomain(host: Optional[str], default_subdomain: str) -> str:
    """
    Map a Host header value to a tenant subdomain candidate.

    ``acme.example.com`` -> ``acme``; ``acme.local:5000`` -> ``acme``;
    ``localhost``, loopback and IP literals (or no host) -> ``default_subdomain``;
    a single label without dots is used as is.
    """
    if not host:
        return default_subdomain

    host = _strip_port(host.strip().lower()).rstrip(".")
    if not host or host in LOOPBACK_HOSTS or _is_ip_literal(host):
        return default_subdomain

    labels = host.split(".")
    candidate = labels[0] if len(labels) >= 2 else host
    return candidate or default_subdomain


def is_valid_subdomain(subdomain: Optional[str]) -> bool:
    return bool(
        subdomain
        and len(subdomain) <= SUBDOMAIN_MAX_LENGTH
        and SUBDOMAIN_RE.match(subdomain)
    )


class TenantResolver:
    """Looks tenants up by subdomain and provisions new ones on request"""

    def __init__(self, default_subdomain: str = "localhost", auto_provision: bool = False, session=None):
        self.default_subdomain = default_subdomain
        self.auto_provision = auto_provision
        self._session = session

    @classmethod
    def from_config(cls, config, session=None):
        return cls(
            default_subdomain=config.get("DEFAULT_TENANT", "localhost"),
            auto_provision=bool(config.get("TENANT_AUTO_PROVISION", False)),
            session=session,
        )

    @property
    def session(self):
        return self._session if self._session is not None else db.session

    def subdomain_for(self, host: Optional[str]) -> str:
        return derive_subdomain(host, self.default_subdomain)

    def find(self, subdomain: str):
        """Tenant with this subdomain, whatever its status"""
        from casetrack.models import Tenant

        return self.session.execute(
            select(Tenant).filter_by(subdomain=subdomain.lower())
        ).scalar_one_or_none()

    def lookup(self, subdomain: str):
        """Active tenant with this subdomain, or None"""
        from casetrack.models import Tenant

        return self.session.execute(
            select(Tenant).filter_by(subdomain=subdomain.lower(), status=TenantStatus.ACTIVE.value)
        ).scalar_one_or_none()

    def resolve(self, host: Optional[str]):
        """Read-only resolution of a request host to an active tenant"""
        subdomain = self.subdomain_for(host)
        tenant = self.lookup(subdomain)
        if tenant is None:
            logger.debug(f"No active tenant for subdomain {subdomain}")
        return tenant

    def provision(self, subdomain: str, name: Optional[str] = None, settings=None, **attrs):
        """
        Create the tenant for ``subdomain`` unless it already exists.

        Safe to call concurrently: the insert is a no-op when another caller
        won the race on the unique subdomain, and the winner's row is returned.
        Default roles are seeded only by the call that created the row.
        """
        from casetrack.models import Role, Tenant

        subdomain = (subdomain or "").strip().lower()
        if not is_valid_subdomain(subdomain):
            raise APIError(
                "Subdomain must be 1-100 characters of lowercase letters, digits or hyphens",
                status_code=400,
                payload={"subdomain": subdomain},
            )

        now = datetime.utcnow()
        values = {
            "id": generate_uuid(),
            "name": name or f"Tenant {subdomain}",
            "subdomain": subdomain,
            "status": TenantStatus.ACTIVE.value,
            "settings": settings if settings is not None else {},
            "created_at": now,
            "updated_at": now,
            **attrs,
        }

        session = self.session
        try:
            created = self._insert_if_absent(session, Tenant, values)
            tenant = session.execute(
                select(Tenant).filter_by(subdomain=subdomain)
            ).scalar_one()

            if created:
                session.execute(
                    insert(Role.__table__),
                    [
                        {
                            "id": generate_uuid(),
                            "tenant_id": tenant.id,
                            "created_at": now,
                            "updated_at": now,
                            **role,
                        }
                        for role in Role.default_roles()
                    ],
                )
            session.commit()
        except Exception:
            session.rollback()
            raise

        if created:
            logger.info(f"Provisioned tenant {subdomain} ({tenant.id})")
        else:
            logger.debug(f"Tenant {subdomain} already provisioned")
        return tenant

    @staticmethod
    def _insert_if_absent(session, model, values) -> bool:
        dialect = session.get_bind().dialect.name
        table = model.__table__

        if dialect in ("postgresql", "sqlite"):
            dialect_insert = postgresql.insert if dialect == "postgresql" else sqlite.insert
            stmt = dialect_insert(table).values(**values).on_conflict_do_nothing(
                index_elements=["subdomain"]
            )
            return session.execute(stmt).rowcount == 1

        try:
            with session.begin_nested():
                session.execute(insert(table).values(**values))
        except IntegrityError:
            return False
        return True


def init_tenancy(app):
    """Install the resolver configured for this app"""
    app.extensions["tenant_resolver"] = TenantResolver.from_config(app.config)
    return app.extensions["tenant_resolver"]
