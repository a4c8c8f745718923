"""Create authentication tables

Revision ID: 001
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ACTIVE_SESSION_CLAUSE = sa.text("status = 'active'")


def upgrade() -> None:
    """Create users, sessions and verification_codes"""

    # 1. Create users table
    op.create_table('users',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('email', sa.String(320), nullable=False, comment='Normalized (lowercased) email address'),
        sa.Column('hashed_password', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(20), nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('country', sa.String(100), nullable=False),
        sa.Column('city', sa.String(100), nullable=False),
        sa.Column('tenant_type', sa.String(20), nullable=False),
        sa.Column('status', sa.String(32), nullable=False),
        sa.Column('last_login_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('failed_login_attempts', sa.Integer(), nullable=False),
        sa.Column('locked_until', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False),

        sa.PrimaryKeyConstraint('id'),
    )

    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_locked_until', 'users', ['locked_until'])
    op.create_index('ix_users_status_tenant_type', 'users', ['status', 'tenant_type'])

    # 2. Create sessions table
    op.create_table('sessions',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('user_id', sa.String(36), nullable=False),
        sa.Column('device_id', sa.String(255), nullable=False),
        sa.Column('device_meta', sa.JSON(), nullable=False),
        sa.Column('status', sa.String(16), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('refresh_token', sa.String(64), nullable=False),
        sa.Column('last_access_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False),

        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('refresh_token'),
    )

    op.create_index('ix_sessions_user_id', 'sessions', ['user_id'])
    op.create_index('ix_sessions_expires_at', 'sessions', ['expires_at'])
    op.create_index('ix_sessions_user_id_status', 'sessions', ['user_id', 'status'])
    # At most one active session per device
    op.create_index(
        'uq_sessions_active_device',
        'sessions',
        ['user_id', 'device_id'],
        unique=True,
        postgresql_where=ACTIVE_SESSION_CLAUSE,
        sqlite_where=ACTIVE_SESSION_CLAUSE,
    )

    # 3. Create verification_codes table
    op.create_table('verification_codes',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('email', sa.String(320), nullable=False),
        sa.Column('code', sa.String(5), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('is_used', sa.Boolean(), nullable=False),
        sa.Column('attempts', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False),

        sa.PrimaryKeyConstraint('id'),
    )

    op.create_index('ix_verification_codes_email', 'verification_codes', ['email'])
    op.create_index('ix_verification_codes_code', 'verification_codes', ['code'])
    op.create_index('ix_verification_codes_email_is_used', 'verification_codes', ['email', 'is_used'])


def downgrade() -> None:
    """Drop authentication tables"""
    op.drop_table('verification_codes')
    op.drop_table('sessions')
    op.drop_table('users')
