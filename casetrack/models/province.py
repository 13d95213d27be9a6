# casetrack/models/province.py
from datetime import datetime

from casetrack.extensions import db
from casetrack.core.utils import generate_uuid


class Province(db.Model):
    """Global lookup table shared by every tenant"""

    __tablename__ = "provinces"

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    name = db.Column(db.String(150), unique=True, nullable=False)
    postal_code = db.Column(db.String(20))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<Province {self.name}>"

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "postal_code": self.postal_code,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


DEFAULT_PROVINCES = [
    ("Azuay", "01"),
    ("Bolivar", "04"),
    ("Carchi", "02"),
    ("Chimborazo", "06"),
    ("Cotopaxi", "03"),
    ("El Oro", "07"),
    ("Galápagos", "23"),
    ("Guayas", "09"),
    ("Imbabura", "10"),
    ("Loja", "11"),
    ("Manabi", "13"),
    ("Napo", "14"),
    ("Orellana", "15"),
    ("Pastaza", "16"),
    ("Pichincha", "17"),
    ("Santa Elena", "26"),
    ("Santo Domingo de los Tsáchilas", "24"),
    ("Sucumbios", "22"),
    ("Tungurahua", "18"),
    ("Zamora-Chinchipe", "20"),
]
