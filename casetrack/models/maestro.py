# casetrack/models/maestro.py
from casetrack.extensions import db
from casetrack.core.database import BaseModel
from casetrack.core.constants import MaestroStatus, values
from casetrack.core.utils import generate_uuid


class Maestro(BaseModel):
    """Global catalogue row; ``code_maestro`` names the category it belongs to"""

    __tablename__ = "maestro"

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    value = db.Column(db.String(150), nullable=False)
    code_maestro = db.Column(db.String(100), nullable=False, index=True)
    status = db.Column(
        db.Enum(*values(MaestroStatus), name="maestro_status", native_enum=False),
        nullable=False,
        default=MaestroStatus.ACTIVO.value,
    )

    def __repr__(self):
        return f"<Maestro {self.code_maestro}:{self.value}>"

    def to_dict(self):
        return {
            "id": self.id,
            "value": self.value,
            "code_maestro": self.code_maestro,
            "status": self.status,
            **self.timestamps(),
        }
