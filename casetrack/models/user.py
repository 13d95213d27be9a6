# casetrack/models/user.py
from casetrack.extensions import db
from casetrack.core.database import BaseModel
from casetrack.core.constants import RecordStatus, values
from casetrack.core.security import SecurityMixin
from casetrack.core.tenant_scope import TenantScopedMixin
from casetrack.core.utils import generate_uuid


class User(TenantScopedMixin, BaseModel, SecurityMixin):
    __tablename__ = 'users'

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    username = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)
    role_id = db.Column(db.String(36), db.ForeignKey('roles.id', ondelete='SET NULL'))
    status = db.Column(
        db.Enum(*values(RecordStatus), name='user_status', native_enum=False),
        nullable=False,
        default=RecordStatus.ACTIVE.value,
    )
    last_login = db.Column(db.DateTime)

    role = db.relationship('Role', lazy='joined')

    __table_args__ = (
        db.UniqueConstraint('tenant_id', 'email', name='uq_user_tenant_email'),
        db.UniqueConstraint('tenant_id', 'username', name='uq_user_tenant_username'),
    )

    def __repr__(self):
        return f'<User {self.email}>'

    @property
    def is_active(self):
        return self.status == RecordStatus.ACTIVE.value

    def to_dict(self):
        """Serialize user without credentials"""
        return {
            'id': self.id,
            'tenant_id': self.tenant_id,
            'username': self.username,
            'first_name': self.first_name,
            'last_name': self.last_name,
            'email': self.email,
            'role_id': self.role_id,
            'role': self.role.name if self.role else None,
            'status': self.status,
            'last_login': self.last_login.isoformat() if self.last_login else None,
            **self.timestamps(),
        }

    def to_summary(self):
        """Short form embedded in calendar events"""
        return {
            'id': self.id,
            'username': self.username,
            'first_name': self.first_name,
            'last_name': self.last_name,
            'email': self.email,
        }

    def to_event_data(self):
        """Payload carried by usuario.* messages"""
        return {
            'id': self.id,
            'tenant_id': self.tenant_id,
            'username': self.username,
            'first_name': self.first_name,
            'last_name': self.last_name,
            'email': self.email,
            'role_id': self.role_id,
            'status': self.status,
        }
