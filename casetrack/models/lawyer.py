# casetrack/models/lawyer.py
from casetrack.extensions import db
from casetrack.core.database import BaseModel
from casetrack.core.constants import LawyerType, RecordStatus, values
from casetrack.core.tenant_scope import TenantScopedMixin
from casetrack.core.utils import generate_uuid


class Lawyer(TenantScopedMixin, BaseModel):
    __tablename__ = "lawyers"

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(150), nullable=False)
    phone = db.Column(db.String(30))
    lawyer_type = db.Column(
        db.Enum(*values(LawyerType), name="lawyer_type", native_enum=False), nullable=False
    )
    status = db.Column(
        db.Enum(*values(RecordStatus), name="lawyer_status", native_enum=False),
        nullable=False,
        default=RecordStatus.ACTIVE.value,
    )
    user_id = db.Column(db.String(36), db.ForeignKey("users.id", ondelete="SET NULL"))

    __table_args__ = (db.UniqueConstraint("tenant_id", "email", name="uq_lawyer_tenant_email"),)

    def __repr__(self):
        return f"<Lawyer {self.email}>"

    def to_dict(self):
        return {
            "id": self.id,
            "tenant_id": self.tenant_id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "email": self.email,
            "phone": self.phone,
            "lawyer_type": self.lawyer_type,
            "status": self.status,
            "user_id": self.user_id,
            **self.timestamps(),
        }

    def to_summary(self):
        return {
            "id": self.id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "email": self.email,
            "phone": self.phone,
        }
