"""initial schema

Revision ID: 3f9a6c1d2e7b
Revises:
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '3f9a6c1d2e7b'
down_revision = None
branch_labels = None
depends_on = None

RECORD_STATUS = ('active', 'inactive', 'suspended')


def timestamps():
    return [
        sa.Column('created_at', sa.DateTime()),
        sa.Column('updated_at', sa.DateTime()),
    ]


def tenant_fk():
    return sa.Column(
        'tenant_id', sa.String(36), sa.ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False
    )


def status_column(name, values, default):
    return sa.Column(
        'status',
        sa.Enum(*values, name=name, native_enum=False),
        nullable=False,
        server_default=default,
    )


def upgrade():
    op.create_table(
        'tenants',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('company_name', sa.String(255)),
        sa.Column('company_description', sa.Text()),
        sa.Column('subdomain', sa.String(100), nullable=False, unique=True),
        sa.Column('domain', sa.String(200)),
        status_column('tenant_status', RECORD_STATUS, 'active'),
        sa.Column('settings', sa.JSON()),
        *timestamps(),
    )
    op.create_index('idx_tenants_status', 'tenants', ['status'])

    op.create_table(
        'roles',
        sa.Column('id', sa.String(36), primary_key=True),
        tenant_fk(),
        sa.Column('name', sa.String(50), nullable=False),
        sa.Column('description', sa.String(255)),
        *timestamps(),
        sa.UniqueConstraint('tenant_id', 'name', name='uq_role_tenant_name'),
    )

    op.create_table(
        'users',
        sa.Column('id', sa.String(36), primary_key=True),
        tenant_fk(),
        sa.Column('username', sa.String(100), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('first_name', sa.String(100), nullable=False),
        sa.Column('last_name', sa.String(100), nullable=False),
        sa.Column('role_id', sa.String(36), sa.ForeignKey('roles.id', ondelete='SET NULL')),
        status_column('user_status', RECORD_STATUS, 'active'),
        sa.Column('last_login', sa.DateTime()),
        *timestamps(),
        sa.UniqueConstraint('tenant_id', 'email', name='uq_user_tenant_email'),
        sa.UniqueConstraint('tenant_id', 'username', name='uq_user_tenant_username'),
    )

    op.create_table(
        'lawyers',
        sa.Column('id', sa.String(36), primary_key=True),
        tenant_fk(),
        sa.Column('first_name', sa.String(100), nullable=False),
        sa.Column('last_name', sa.String(100), nullable=False),
        sa.Column('email', sa.String(150), nullable=False),
        sa.Column('phone', sa.String(30)),
        sa.Column(
            'lawyer_type',
            sa.Enum('internal', 'external', name='lawyer_type', native_enum=False),
            nullable=False,
        ),
        status_column('lawyer_status', RECORD_STATUS, 'active'),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id', ondelete='SET NULL')),
        *timestamps(),
        sa.UniqueConstraint('tenant_id', 'email', name='uq_lawyer_tenant_email'),
    )

    op.create_table(
        'creditors',
        sa.Column('id', sa.String(36), primary_key=True),
        tenant_fk(),
        sa.Column('name', sa.String(150), nullable=False),
        sa.Column('ruc', sa.String(20), nullable=False),
        status_column('creditor_status', RECORD_STATUS, 'active'),
        *timestamps(),
        sa.UniqueConstraint('tenant_id', 'ruc', name='uq_creditor_tenant_ruc'),
    )

    # Global lookup tables
    op.create_table(
        'provinces',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(150), nullable=False, unique=True),
        sa.Column('postal_code', sa.String(20)),
        sa.Column('created_at', sa.DateTime()),
    )

    op.create_table(
        'maestro',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('value', sa.String(150), nullable=False),
        sa.Column('code_maestro', sa.String(100), nullable=False),
        status_column('maestro_status', ('activo', 'inactivo'), 'activo'),
        *timestamps(),
    )
    op.create_index('ix_maestro_code_maestro', 'maestro', ['code_maestro'])

    op.create_table(
        'judicial_processes',
        sa.Column('id', sa.String(36), primary_key=True),
        tenant_fk(),
        sa.Column('internal_lawyer_id', sa.String(36), sa.ForeignKey('lawyers.id', ondelete='SET NULL')),
        sa.Column('external_lawyer_id', sa.String(36), sa.ForeignKey('lawyers.id', ondelete='SET NULL')),
        sa.Column('province_id', sa.String(36), sa.ForeignKey('provinces.id', ondelete='RESTRICT')),
        sa.Column('creditor_id', sa.String(36), sa.ForeignKey('creditors.id', ondelete='RESTRICT')),
        sa.Column('product', sa.String(36), sa.ForeignKey('maestro.id', ondelete='RESTRICT')),
        sa.Column('guarantee', sa.String(36), sa.ForeignKey('maestro.id', ondelete='RESTRICT')),
        sa.Column('identification', sa.String(13), nullable=False),
        sa.Column('full_name', sa.String(200), nullable=False),
        sa.Column('operation', sa.String(150)),
        sa.Column('area_assignment_date', sa.Date()),
        sa.Column('internal_assignment_date', sa.Date()),
        sa.Column('external_assignment_date', sa.Date()),
        sa.Column('process_type', sa.String(150), nullable=False),
        sa.Column('case_number', sa.String(100)),
        sa.Column('procedural_summary', sa.Text()),
        sa.Column('procedural_progress', sa.Text()),
        sa.Column('demand_date', sa.Date()),
        status_column('process_status', ('activo', 'inactivo', 'suspendido'), 'activo'),
        sa.Column('created_by', sa.String(36), sa.ForeignKey('users.id', ondelete='SET NULL')),
        sa.Column('updated_by', sa.String(36), sa.ForeignKey('users.id', ondelete='SET NULL')),
        *timestamps(),
        sa.UniqueConstraint('tenant_id', 'case_number', name='uq_process_tenant_case_number'),
    )

    op.create_table(
        'documents',
        sa.Column('id', sa.String(36), primary_key=True),
        tenant_fk(),
        sa.Column(
            'judicial_process_id',
            sa.String(36),
            sa.ForeignKey('judicial_processes.id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column('file_name', sa.String(255), nullable=False),
        sa.Column('file_type', sa.String(255)),
        sa.Column('file_size', sa.BigInteger()),
        sa.Column('file_data', sa.LargeBinary(), nullable=False),
        sa.Column('description', sa.Text()),
        status_column('document_status', ('active', 'inactive', 'deleted'), 'active'),
        *timestamps(),
    )

    op.create_table(
        'activities',
        sa.Column('id', sa.String(36), primary_key=True),
        tenant_fk(),
        sa.Column(
            'judicial_process_id',
            sa.String(36),
            sa.ForeignKey('judicial_processes.id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column('title', sa.String(200)),
        sa.Column('description', sa.Text()),
        sa.Column(
            'activity_type',
            sa.Enum(
                'audiencia', 'diligencia', 'presentacion', 'notificacion', 'reunion', 'otro',
                name='activity_type', native_enum=False,
            ),
            nullable=False,
        ),
        sa.Column('activity_date', sa.DateTime()),
        sa.Column('due_date', sa.DateTime()),
        sa.Column('completed_date', sa.DateTime()),
        sa.Column(
            'priority',
            sa.Enum('baja', 'media', 'alta', 'urgente', name='activity_priority', native_enum=False),
            nullable=False,
            server_default='media',
        ),
        status_column(
            'activity_status', ('pendiente', 'en_progreso', 'completada', 'cancelada'), 'pendiente'
        ),
        sa.Column('assigned_to', sa.String(36), sa.ForeignKey('lawyers.id', ondelete='SET NULL')),
        sa.Column('location', sa.String(255)),
        sa.Column('notes', sa.Text()),
        *timestamps(),
    )

    op.create_table(
        'events',
        sa.Column('id', sa.String(36), primary_key=True),
        tenant_fk(),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('event_date', sa.DateTime(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('location', sa.String(255)),
        *timestamps(),
    )

    for table in (
        'roles', 'users', 'lawyers', 'creditors', 'judicial_processes',
        'documents', 'activities', 'events',
    ):
        op.create_index(f'ix_{table}_tenant_id', table, ['tenant_id'])


def downgrade():
    # Drop tables in reverse order
    for table in (
        'events', 'activities', 'documents', 'judicial_processes', 'maestro',
        'provinces', 'creditors', 'lawyers', 'users', 'roles', 'tenants',
    ):
        op.drop_table(table)
