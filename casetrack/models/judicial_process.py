# casetrack/models/judicial_process.py
from casetrack.extensions import db
from casetrack.core.database import BaseModel, isoformat
from casetrack.core.constants import ProcessStatus, values
from casetrack.core.tenant_scope import TenantScopedMixin
from casetrack.core.utils import generate_uuid


class JudicialProcess(TenantScopedMixin, BaseModel):
    """A tracked legal case"""

    __tablename__ = "judicial_processes"

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    internal_lawyer_id = db.Column(db.String(36), db.ForeignKey("lawyers.id", ondelete="SET NULL"))
    external_lawyer_id = db.Column(db.String(36), db.ForeignKey("lawyers.id", ondelete="SET NULL"))
    province_id = db.Column(db.String(36), db.ForeignKey("provinces.id", ondelete="RESTRICT"))
    creditor_id = db.Column(db.String(36), db.ForeignKey("creditors.id", ondelete="RESTRICT"))
    product = db.Column(db.String(36), db.ForeignKey("maestro.id", ondelete="RESTRICT"))
    guarantee = db.Column(db.String(36), db.ForeignKey("maestro.id", ondelete="RESTRICT"))

    identification = db.Column(db.String(13), nullable=False)
    full_name = db.Column(db.String(200), nullable=False)
    operation = db.Column(db.String(150))
    area_assignment_date = db.Column(db.Date)
    internal_assignment_date = db.Column(db.Date)
    external_assignment_date = db.Column(db.Date)
    process_type = db.Column(db.String(150), nullable=False)
    case_number = db.Column(db.String(100))
    procedural_summary = db.Column(db.Text)
    procedural_progress = db.Column(db.Text)
    demand_date = db.Column(db.Date)
    status = db.Column(
        db.Enum(*values(ProcessStatus), name="process_status", native_enum=False),
        nullable=False,
        default=ProcessStatus.ACTIVO.value,
    )
    created_by = db.Column(db.String(36), db.ForeignKey("users.id", ondelete="SET NULL"))
    updated_by = db.Column(db.String(36), db.ForeignKey("users.id", ondelete="SET NULL"))

    __table_args__ = (
        db.UniqueConstraint("tenant_id", "case_number", name="uq_process_tenant_case_number"),
    )

    def __repr__(self):
        return f"<JudicialProcess {self.case_number or self.id}>"

    def to_dict(self):
        return {
            "id": self.id,
            "tenant_id": self.tenant_id,
            "internal_lawyer_id": self.internal_lawyer_id,
            "external_lawyer_id": self.external_lawyer_id,
            "province_id": self.province_id,
            "creditor_id": self.creditor_id,
            "product": self.product,
            "guarantee": self.guarantee,
            "identification": self.identification,
            "full_name": self.full_name,
            "operation": self.operation,
            "area_assignment_date": isoformat(self.area_assignment_date),
            "internal_assignment_date": isoformat(self.internal_assignment_date),
            "external_assignment_date": isoformat(self.external_assignment_date),
            "process_type": self.process_type,
            "case_number": self.case_number,
            "procedural_summary": self.procedural_summary,
            "procedural_progress": self.procedural_progress,
            "demand_date": isoformat(self.demand_date),
            "status": self.status,
            "created_by": self.created_by,
            "updated_by": self.updated_by,
            **self.timestamps(),
        }

    def to_summary(self):
        return {
            "id": self.id,
            "case_number": self.case_number,
            "process_type": self.process_type,
            "full_name": self.full_name,
            "status": self.status,
        }
