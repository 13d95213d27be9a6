# casetrack/models/activity.py
from casetrack.extensions import db
from casetrack.core.database import BaseModel, isoformat
from casetrack.core.constants import ActivityStatus, ActivityType, Priority, values
from casetrack.core.tenant_scope import TenantScopedMixin
from casetrack.core.utils import generate_uuid


class Activity(TenantScopedMixin, BaseModel):
    """A hearing, filing or other dated step on a judicial process"""

    __tablename__ = "activities"

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    judicial_process_id = db.Column(
        db.String(36), db.ForeignKey("judicial_processes.id", ondelete="CASCADE"), nullable=False
    )
    title = db.Column(db.String(200))
    description = db.Column(db.Text)
    activity_type = db.Column(
        db.Enum(*values(ActivityType), name="activity_type", native_enum=False), nullable=False
    )
    activity_date = db.Column(db.DateTime)
    due_date = db.Column(db.DateTime)
    completed_date = db.Column(db.DateTime)
    priority = db.Column(
        db.Enum(*values(Priority), name="activity_priority", native_enum=False),
        nullable=False,
        default=Priority.MEDIA.value,
    )
    status = db.Column(
        db.Enum(*values(ActivityStatus), name="activity_status", native_enum=False),
        nullable=False,
        default=ActivityStatus.PENDIENTE.value,
    )
    assigned_to = db.Column(db.String(36), db.ForeignKey("lawyers.id", ondelete="SET NULL"))
    location = db.Column(db.String(255))
    notes = db.Column(db.Text)

    judicial_process = db.relationship("JudicialProcess", lazy="joined")
    assigned_lawyer = db.relationship("Lawyer", lazy="joined")

    def __repr__(self):
        return f"<Activity {self.activity_type} on {self.judicial_process_id}>"

    def to_dict(self):
        return {
            "id": self.id,
            "tenant_id": self.tenant_id,
            "judicial_process_id": self.judicial_process_id,
            "title": self.title,
            "description": self.description,
            "activity_type": self.activity_type,
            "activity_date": isoformat(self.activity_date),
            "due_date": isoformat(self.due_date),
            "completed_date": isoformat(self.completed_date),
            "priority": self.priority,
            "status": self.status,
            "assigned_to": self.assigned_to,
            "location": self.location,
            "notes": self.notes,
            "judicial_process": self.judicial_process.to_summary() if self.judicial_process else None,
            "assigned_lawyer": self.assigned_lawyer.to_summary() if self.assigned_lawyer else None,
            **self.timestamps(),
        }
