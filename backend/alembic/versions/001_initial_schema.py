"""Initial Aurora schema: users, categories, events, schedule suggestions

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-17

"""
from typing import Sequence, Union
import uuid

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

SYSTEM_CATEGORIES = [
    ("Trabajo", "#2b7fff", "briefcase", 1),
    ("Personal", "#10b981", "user", 2),
    ("Salud", "#ef4444", "heart", 3),
    ("Estudio", "#8b5cf6", "book", 4),
    ("Ocio", "#f59e0b", "smile", 5),
]


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('timezone', sa.String(50), nullable=False),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), default=sa.func.now(), onupdate=sa.func.now()),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    categories = op.create_table(
        'event_categories',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('description', sa.String(500), nullable=True),
        sa.Column('color', sa.String(20), nullable=False),
        sa.Column('icon', sa.String(50), nullable=True),
        sa.Column('is_system_default', sa.Boolean(), default=False),
        sa.Column('sort_order', sa.Integer(), default=0),
        sa.Column('is_active', sa.Boolean(), default=True),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), default=sa.func.now(), onupdate=sa.func.now()),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_event_categories_user_id', 'event_categories', ['user_id'])

    op.create_table(
        'events',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('category_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('start', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end', sa.DateTime(timezone=True), nullable=False),
        sa.Column('is_all_day', sa.Boolean(), default=False),
        sa.Column('location', sa.String(500), nullable=True),
        sa.Column('color', sa.String(20), nullable=True),
        sa.Column('notes', sa.String(500), nullable=True),
        sa.Column('priority', sa.Integer(), default=2),
        sa.Column('is_recurring', sa.Boolean(), default=False),
        sa.Column('recurrence_pattern', sa.String(100), nullable=True),
        sa.Column('mood_rating', sa.SmallInteger(), nullable=True),
        sa.Column('mood_notes', sa.String(500), nullable=True),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), default=sa.func.now(), onupdate=sa.func.now()),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['category_id'], ['event_categories.id'], ondelete='RESTRICT'),
        sa.CheckConstraint('"end" > start', name='ck_events_end_after_start'),
        sa.CheckConstraint('mood_rating BETWEEN 1 AND 5', name='ck_events_mood_rating_range'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_events_user_id', 'events', ['user_id'])
    op.create_index('ix_events_category_id', 'events', ['category_id'])
    op.create_index('ix_events_start', 'events', ['start'])

    op.create_table(
        'schedule_suggestions',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('event_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('type', sa.String(40), nullable=False),
        sa.Column('description', sa.String(500), nullable=False),
        sa.Column('reason', sa.String(1000), nullable=False),
        sa.Column('priority', sa.Integer(), default=3),
        sa.Column('confidence_score', sa.Integer(), default=70),
        sa.Column('suggested_datetime', sa.DateTime(timezone=True), nullable=True),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('responded_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('metadata', postgresql.JSONB(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), default=sa.func.now()),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['event_id'], ['events.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_schedule_suggestions_user_id', 'schedule_suggestions', ['user_id'])
    op.create_index('ix_schedule_suggestions_status', 'schedule_suggestions', ['status'])

    op.bulk_insert(categories, [
        {
            'id': uuid.uuid4(),
            'user_id': None,
            'name': name,
            'color': color,
            'icon': icon,
            'is_system_default': True,
            'sort_order': sort_order,
            'is_active': True,
        }
        for name, color, icon, sort_order in SYSTEM_CATEGORIES
    ])


def downgrade() -> None:
    op.drop_index('ix_schedule_suggestions_status', table_name='schedule_suggestions')
    op.drop_index('ix_schedule_suggestions_user_id', table_name='schedule_suggestions')
    op.drop_table('schedule_suggestions')
    op.drop_index('ix_events_start', table_name='events')
    op.drop_index('ix_events_category_id', table_name='events')
    op.drop_index('ix_events_user_id', table_name='events')
    op.drop_table('events')
    op.drop_index('ix_event_categories_user_id', table_name='event_categories')
    op.drop_table('event_categories')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
