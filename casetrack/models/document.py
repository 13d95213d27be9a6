# casetrack/models/document.py
from sqlalchemy.orm import deferred

from casetrack.extensions import db
from casetrack.core.database import BaseModel
from casetrack.core.constants import DocumentStatus, values
from casetrack.core.tenant_scope import TenantScopedMixin
from casetrack.core.utils import generate_uuid


class Document(TenantScopedMixin, BaseModel):
    __tablename__ = "documents"

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    judicial_process_id = db.Column(
        db.String(36), db.ForeignKey("judicial_processes.id", ondelete="CASCADE"), nullable=False
    )
    file_name = db.Column(db.String(255), nullable=False)
    file_type = db.Column(db.String(255), default="application/octet-stream")
    file_size = db.Column(db.BigInteger)
    # Only loaded for downloads
    file_data = deferred(db.Column(db.LargeBinary, nullable=False))
    description = db.Column(db.Text)
    status = db.Column(
        db.Enum(*values(DocumentStatus), name="document_status", native_enum=False),
        nullable=False,
        default=DocumentStatus.ACTIVE.value,
    )

    def __repr__(self):
        return f"<Document {self.file_name}>"

    def to_dict(self):
        """Metadata only, never the file contents"""
        return {
            "id": self.id,
            "tenant_id": self.tenant_id,
            "judicial_process_id": self.judicial_process_id,
            "file_name": self.file_name,
            "file_type": self.file_type,
            "file_size": self.file_size,
            "description": self.description,
            "status": self.status,
            **self.timestamps(),
        }
