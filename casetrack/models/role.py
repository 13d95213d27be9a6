# casetrack/models/role.py
from casetrack.extensions import db
from casetrack.core.database import BaseModel
from casetrack.core.constants import DefaultRole, DEFAULT_ROLE_DESCRIPTIONS
from casetrack.core.tenant_scope import TenantScopedMixin
from casetrack.core.utils import generate_uuid


class Role(TenantScopedMixin, BaseModel):
    __tablename__ = "roles"

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    name = db.Column(db.String(50), nullable=False)
    description = db.Column(db.String(255))

    __table_args__ = (db.UniqueConstraint("tenant_id", "name", name="uq_role_tenant_name"),)

    def __repr__(self):
        return f"<Role {self.name} for tenant {self.tenant_id}>"

    def to_dict(self):
        """Convert role to dictionary representation"""
        return {
            "id": self.id,
            "tenant_id": self.tenant_id,
            "name": self.name,
            "description": self.description,
            **self.timestamps(),
        }

    @staticmethod
    def default_roles():
        """Rows seeded into every newly provisioned tenant"""
        return [
            {"name": role.value, "description": DEFAULT_ROLE_DESCRIPTIONS[role]}
            for role in DefaultRole
        ]
