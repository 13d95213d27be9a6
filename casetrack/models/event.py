# casetrack/models/event.py
from casetrack.extensions import db
from casetrack.core.database import BaseModel, isoformat
from casetrack.core.tenant_scope import TenantScopedMixin
from casetrack.core.utils import generate_uuid


class Event(TenantScopedMixin, BaseModel):
    """Calendar entry owned by a user"""

    __tablename__ = "events"

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    user_id = db.Column(db.String(36), db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    event_date = db.Column(db.DateTime, nullable=False)
    description = db.Column(db.Text, nullable=False)
    location = db.Column(db.String(255))

    user = db.relationship("User", lazy="joined")

    def __repr__(self):
        return f"<Event {self.event_date} for {self.user_id}>"

    def to_dict(self):
        return {
            "id": self.id,
            "tenant_id": self.tenant_id,
            "user_id": self.user_id,
            "event_date": isoformat(self.event_date),
            "description": self.description,
            "location": self.location,
            "user": self.user.to_summary() if self.user else None,
            **self.timestamps(),
        }
