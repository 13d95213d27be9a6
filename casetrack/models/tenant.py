# casetrack/models/tenant.py
from casetrack.extensions import db
from casetrack.core.database import BaseModel
from casetrack.core.constants import TenantStatus, values
from casetrack.core.utils import generate_uuid

SUBDOMAIN_PATTERN = r"^[a-z0-9-]+$"


class Tenant(BaseModel):
    __tablename__ = "tenants"

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    name = db.Column(db.String(200), nullable=False)
    company_name = db.Column(db.String(255))
    company_description = db.Column(db.Text)
    subdomain = db.Column(db.String(100), unique=True, nullable=False)
    domain = db.Column(db.String(200))
    status = db.Column(
        db.Enum(*values(TenantStatus), name="tenant_status", native_enum=False),
        nullable=False,
        default=TenantStatus.ACTIVE.value,
    )
    settings = db.Column(db.JSON, default=dict)

    __table_args__ = (db.Index("idx_tenants_status", "status"),)

    def __repr__(self):
        return f"<Tenant {self.subdomain}>"

    @property
    def is_active(self):
        return self.status == TenantStatus.ACTIVE.value

    def to_dict(self):
        """Convert tenant to dictionary representation"""
        return {
            "id": self.id,
            "name": self.name,
            "company_name": self.company_name,
            "company_description": self.company_description,
            "subdomain": self.subdomain,
            "domain": self.domain,
            "status": self.status,
            "settings": self.settings or {},
            **self.timestamps(),
        }
