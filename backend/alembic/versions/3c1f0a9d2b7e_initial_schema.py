"""Initial schema: users, pending registrations, projects, audit logs

Revision ID: 3c1f0a9d2b7e
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# Revision identifiers used by Alembic
revision: str = '3c1f0a9d2b7e'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


# Project sub-collections stored as JSON arrays / objects
PROJECT_LIST_COLUMNS = (
    'boq', 'variation_orders', 'contract_bills', 'subcontractor_bills', 'subcontractor_payments',
    'measurement_sheets', 'accounting_integrations', 'accounting_transactions',
    'rfis', 'lab_tests', 'ncrs', 'checklists', 'defects', 'compliance_workflows',
    'schedule', 'milestones', 'structures', 'structure_templates', 'linear_works', 'daily_reports',
    'pre_construction', 'pre_construction_tasks', 'hindrances', 'land_parcels', 'map_overlays',
    'kml_data', 'site_photos', 'documents', 'comments', 'audit_logs',
    'agencies', 'agency_payments', 'agency_materials', 'agency_bills', 'materials', 'inventory',
    'purchase_orders', 'inventory_transactions',
    'resources', 'resource_allocations', 'personnel', 'staff_locations', 'vehicles', 'vehicle_logs', 'fleet',
)
PROJECT_OBJECT_COLUMNS = ('environment_registry', 'weather', 'settings')


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('phone', sa.String(), nullable=True),
        sa.Column('password', sa.String(), nullable=True),
        sa.Column('role', sa.String(), nullable=False),
        sa.Column('avatar', sa.String(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    op.create_table(
        'pending_registrations',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('phone', sa.String(), nullable=True),
        sa.Column('requested_role', sa.String(), nullable=False),
        sa.Column('status', sa.String(), server_default='pending', nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_pending_registrations_id'), 'pending_registrations', ['id'], unique=False)
    op.create_index(op.f('ix_pending_registrations_email'), 'pending_registrations', ['email'], unique=True)

    scalar_columns = [
        sa.Column(name, sa.String(), nullable=True)
        for name in ('code', 'location', 'contractor')
    ] + [
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('end_date', sa.DateTime(timezone=True), nullable=True),
    ] + [
        sa.Column(name, sa.String(), nullable=True)
        for name in ('contract_period', 'project_manager', 'supervisor', 'consultant_name', 'client_name',
                     'logo', 'engineer', 'contract_no', 'last_synced', 'spreadsheet_id')
    ]
    op.create_table(
        'projects',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('client', sa.String(), nullable=False),
        *scalar_columns,
        *[sa.Column(name, sa.JSON(), nullable=False) for name in PROJECT_LIST_COLUMNS + PROJECT_OBJECT_COLUMNS],
        sa.Column('version', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_projects_id'), 'projects', ['id'], unique=False)

    op.create_table(
        'logs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('ts', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('user_id', sa.String(), nullable=True),
        sa.Column('action', sa.String(length=50), nullable=True),
        sa.Column('resource', sa.String(length=50), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=True),
        sa.Column('ip', sa.String(length=64), nullable=True),
        sa.Column('meta', sa.JSON(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    for column in ('id', 'ts', 'user_id', 'action', 'resource', 'status'):
        op.create_index(op.f(f'ix_logs_{column}'), 'logs', [column], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('logs')
    op.drop_table('projects')
    op.drop_table('pending_registrations')
    op.drop_table('users')
