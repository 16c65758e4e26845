"""claims schema: users, properties/assets, loss events + reminders, proof of loss, jumpstart

Revision ID: 20251019_claims_schema
Revises:
Create Date: 2025-10-19
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect

# revision identifiers, used by Alembic.
revision = '20251019_claims_schema'
down_revision = None
branch_labels = None
depends_on = None


def _ts(name, nullable=True, **kw):
    return sa.Column(name, sa.DateTime(timezone=True), nullable=nullable, **kw)


def upgrade():
    conn = op.get_bind()
    existing = set(inspect(conn).get_table_names())

    if 'users' not in existing:
        op.create_table(
            'users',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('username', sa.String(), nullable=False, unique=True),
            sa.Column('hashed_password', sa.String(), nullable=False),
            sa.Column('email', sa.String(), nullable=True),
        )

    if 'properties' not in existing:
        op.create_table(
            'properties',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False, index=True),
            sa.Column('name', sa.String(), nullable=False),
            sa.Column('address', sa.String(), nullable=True),
        )

    if 'assets' not in existing:
        op.create_table(
            'assets',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False, index=True),
            sa.Column('property_id', sa.Integer(), sa.ForeignKey('properties.id'), nullable=True, index=True),
            sa.Column('title', sa.String(), nullable=False),
            sa.Column('category', sa.String(), nullable=True),
            sa.Column('room', sa.String(), nullable=True),
            sa.Column('estimated_value', sa.Float(), nullable=True),
            sa.Column('purchase_price', sa.Float(), nullable=True),
        )

    if 'asset_photos' not in existing:
        op.create_table(
            'asset_photos',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('asset_id', sa.Integer(), sa.ForeignKey('assets.id'), nullable=False, index=True),
            sa.Column('storage_path', sa.String(), nullable=False),
            sa.Column('is_primary', sa.Boolean(), nullable=False, server_default=sa.false()),
        )

    if 'loss_events' not in existing:
        op.create_table(
            'loss_events',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False, index=True),
            sa.Column('property_id', sa.Integer(), sa.ForeignKey('properties.id'), nullable=True),
            sa.Column('event_type', sa.String(), nullable=False),
            sa.Column('event_date', sa.Date(), nullable=False),
            sa.Column('discovery_date', sa.Date(), nullable=False),
            sa.Column('description', sa.Text(), nullable=False),
            sa.Column('police_report_number', sa.String(), nullable=True),
            sa.Column('fire_department_report', sa.String(), nullable=True),
            sa.Column('estimated_total_loss', sa.Float(), nullable=True),
            sa.Column('status', sa.String(), nullable=False, server_default='active', index=True),
            sa.Column('deadline_60_days', sa.Date(), nullable=False, index=True),
            sa.Column('deadline_notified', sa.Boolean(), nullable=False, server_default=sa.false()),
            _ts('created_at', nullable=False, server_default=sa.func.now()),
            _ts('updated_at', nullable=False, server_default=sa.func.now()),
        )

    if 'loss_event_reminders' not in existing:
        op.create_table(
            'loss_event_reminders',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('loss_event_id', sa.Integer(), sa.ForeignKey('loss_events.id'), nullable=False, index=True),
            sa.Column('threshold_days', sa.Integer(), nullable=False),
            sa.Column('days_remaining', sa.Integer(), nullable=False),
            sa.Column('sg_message_id', sa.String(), nullable=True),
            _ts('sent_at', nullable=False),
            sa.UniqueConstraint('loss_event_id', 'threshold_days', name='uq_loss_event_threshold'),
        )

    if 'proof_of_loss_forms' not in existing:
        op.create_table(
            'proof_of_loss_forms',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False, index=True),
            sa.Column('loss_event_id', sa.Integer(), sa.ForeignKey('loss_events.id'), nullable=False, index=True),
            sa.Column('insurer_name', sa.String(), nullable=False),
            sa.Column('policy_number', sa.String(), nullable=False),
            sa.Column('claim_number', sa.String(), nullable=True),
            sa.Column('sworn_statement_text', sa.Text(), nullable=False),
            sa.Column('signature_data', sa.Text(), nullable=False),
            _ts('signature_date', nullable=False),
            sa.Column('form_data', sa.JSON(), nullable=False),
            sa.Column('status', sa.String(), nullable=False, server_default='submitted'),
            _ts('submitted_at', nullable=False),
            sa.Column('revision', sa.Integer(), nullable=False, server_default='1'),
            sa.UniqueConstraint('user_id', 'loss_event_id', name='uq_pol_user_event'),
        )

    if 'jumpstart_sessions' not in existing:
        op.create_table(
            'jumpstart_sessions',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False, index=True),
            sa.Column('mode', sa.String(), nullable=False),
            _ts('started_at', nullable=False),
            _ts('completed_at'),
            sa.Column('items_target', sa.Integer(), nullable=False),
            sa.Column('items_completed', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('total_value', sa.Float(), nullable=False, server_default='0'),
            sa.Column('completed', sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column('skipped', sa.Boolean(), nullable=False, server_default=sa.false()),
        )

    if 'jumpstart_prompts' not in existing:
        op.create_table(
            'jumpstart_prompts',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('session_id', sa.Integer(), sa.ForeignKey('jumpstart_sessions.id'), nullable=False, index=True),
            sa.Column('prompt_index', sa.Integer(), nullable=False),
            sa.Column('prompt_id', sa.String(), nullable=False),
            sa.Column('completed', sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column('skipped', sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column('asset_id', sa.Integer(), sa.ForeignKey('assets.id'), nullable=True),
            _ts('completed_at'),
            sa.UniqueConstraint('session_id', 'prompt_index', name='uq_jumpstart_prompt_index'),
        )


def downgrade():
    # children first
    conn = op.get_bind()
    existing = set(inspect(conn).get_table_names())
    for table in (
        'jumpstart_prompts', 'jumpstart_sessions', 'proof_of_loss_forms',
        'loss_event_reminders', 'loss_events', 'asset_photos', 'assets', 'properties', 'users',
    ):
        if table in existing:
            op.drop_table(table)
