"""initial schema: users, sessions, training content, subscriptions

Revision ID: 001
Revises: 
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create users table
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('username', sa.String(length=64), nullable=False),
        sa.Column('display_name', sa.Text(), nullable=False),
        sa.Column('role', sa.String(length=16), nullable=False),
        sa.Column('skill_level', sa.String(length=16), nullable=True),
        sa.Column('goals', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint('username'),
        sa.CheckConstraint("role IN ('coach', 'player')", name='ck_users_role'),
        sa.CheckConstraint(
            "skill_level IS NULL OR skill_level IN ('beginner', 'intermediate', 'advanced')",
            name='ck_users_skill_level',
        ),
    )

    # Create sessions table
    op.create_table(
        'sessions',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('title', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('scheduled_date', sa.Date(), nullable=True),
        sa.Column('scheduled_time', sa.Time(), nullable=True),
        sa.Column('duration_minutes', sa.Integer(), nullable=True),
        sa.Column('skill_level', sa.String(length=16), nullable=True),
        sa.Column('created_by', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['created_by'], ['users.id']),
    )
    op.create_index('idx_sessions_created_by', 'sessions', ['created_by'])
    op.create_index('idx_sessions_date', 'sessions', ['scheduled_date'])

    # Create training_content table
    op.create_table(
        'training_content',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('session_id', sa.Integer(), nullable=False),
        sa.Column('content_type', sa.String(length=16), nullable=False),
        sa.Column('title', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('duration_minutes', sa.Integer(), nullable=True),
        sa.Column('order_index', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['session_id'], ['sessions.id'], ondelete='CASCADE'),
        sa.CheckConstraint(
            "content_type IN ('drill', 'exercise', 'warmup', 'cooldown')",
            name='ck_training_content_type',
        ),
    )
    op.create_index('idx_training_content_session', 'training_content', ['session_id'])

    # Create subscriptions table
    op.create_table(
        'subscriptions',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('session_id', sa.Integer(), nullable=False),
        sa.Column('subscribed_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('status', sa.String(length=16), server_default='active', nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['session_id'], ['sessions.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('user_id', 'session_id', name='uq_subscriptions_user_session'),
        sa.CheckConstraint(
            "status IN ('active', 'completed', 'cancelled')",
            name='ck_subscriptions_status',
        ),
    )
    op.create_index('idx_subscriptions_user', 'subscriptions', ['user_id'])
    op.create_index('idx_subscriptions_session', 'subscriptions', ['session_id'])


def downgrade() -> None:
    op.drop_index('idx_subscriptions_session', table_name='subscriptions')
    op.drop_index('idx_subscriptions_user', table_name='subscriptions')
    op.drop_table('subscriptions')
    op.drop_index('idx_training_content_session', table_name='training_content')
    op.drop_table('training_content')
    op.drop_index('idx_sessions_date', table_name='sessions')
    op.drop_index('idx_sessions_created_by', table_name='sessions')
    op.drop_table('sessions')
    op.drop_table('users')
