"""Initial schema: users, sessions, challenge enrollments and daily progress

Revision ID: 001
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""
from typing import Sequence, Union

import sqlalchemy as sa
import sqlmodel
from alembic import op

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the four tables."""
    op.create_table('users', sa.Column('id', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('email', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
        sa.Column('phone_number', sqlmodel.sql.sqltypes.AutoString(length=32), nullable=True),
        sa.Column('first_name', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
        sa.Column('last_name', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
        sa.Column('profile_image_url', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
        sa.Column('age', sqlmodel.sql.sqltypes.AutoString(length=16), nullable=True),
        sa.Column('wellness_goals', sa.JSON(), nullable=True),
        sa.Column('preferred_time', sqlmodel.sql.sqltypes.AutoString(length=64), nullable=True),
        sa.Column('motivation', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('preferred_language', sqlmodel.sql.sqltypes.AutoString(length=8), nullable=False,
                  server_default='en'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
    op.create_index(op.f('ix_users_phone_number'), 'users', ['phone_number'], unique=True)

    op.create_table('sessions', sa.Column('sid', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('sess', sa.JSON(), nullable=False),
        sa.Column('user_id', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
        sa.Column('expire', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('sid'))
    op.create_index(op.f('ix_sessions_user_id'), 'sessions', ['user_id'], unique=False)
    op.create_index(op.f('ix_sessions_expire'), 'sessions', ['expire'], unique=False)

    op.create_table('challenge_enrollments', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('challenge_id', sqlmodel.sql.sqltypes.AutoString(length=64), nullable=False),
        sa.Column('start_date', sa.DateTime(), nullable=False),
        sa.Column('last_activity_date', sa.DateTime(), nullable=True),
        sa.Column('completed_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'challenge_id', name='uq_enrollment_user_challenge'))
    op.create_index(op.f('ix_challenge_enrollments_user_id'), 'challenge_enrollments', ['user_id'], unique=False)

    op.create_table('challenge_daily_progress',
        sa.Column('challenge_id', sqlmodel.sql.sqltypes.AutoString(length=64), nullable=False),
        sa.Column('user_id', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('completed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('challenge_id', 'user_id', 'date'))


def downgrade() -> None:
    """Drop the four tables."""
    op.drop_table('challenge_daily_progress')
    op.drop_index(op.f('ix_challenge_enrollments_user_id'), table_name='challenge_enrollments')
    op.drop_table('challenge_enrollments')
    op.drop_index(op.f('ix_sessions_expire'), table_name='sessions')
    op.drop_index(op.f('ix_sessions_user_id'), table_name='sessions')
    op.drop_table('sessions')
    op.drop_index(op.f('ix_users_phone_number'), table_name='users')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_table('users')
