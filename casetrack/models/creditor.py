# casetrack/models/creditor.py
from casetrack.extensions import db
from casetrack.core.database import BaseModel
from casetrack.core.constants import RecordStatus, values
from casetrack.core.tenant_scope import TenantScopedMixin
from casetrack.core.utils import generate_uuid


class Creditor(TenantScopedMixin, BaseModel):
    __tablename__ = "creditors"

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    name = db.Column(db.String(150), nullable=False)
    ruc = db.Column(db.String(20), nullable=False)
    status = db.Column(
        db.Enum(*values(RecordStatus), name="creditor_status", native_enum=False),
        nullable=False,
        default=RecordStatus.ACTIVE.value,
    )

    __table_args__ = (db.UniqueConstraint("tenant_id", "ruc", name="uq_creditor_tenant_ruc"),)

    def __repr__(self):
        return f"<Creditor {self.ruc}>"

    def to_dict(self):
        return {
            "id": self.id,
            "tenant_id": self.tenant_id,
            "name": self.name,
            "ruc": self.ruc,
            "status": self.status,
            **self.timestamps(),
        }
