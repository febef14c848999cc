"""Initial production schema

Revision ID: 3f9a2c1d7e41
Revises:
Create Date: 2026-10-19 10:12:31.518204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID


# revision identifiers, used by Alembic.
revision: str = '3f9a2c1d7e41'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id_column() -> sa.Column:
    return sa.Column('id', UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()'))


def _timestamps() -> list:
    return [
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
    ]


SCENE_TEXT_COLUMNS = (
    'content',
    'specific_location',
    'characters_present',
    'speaking_roles',
    'extras',
    'functional_props',
    'decorative_props',
    'camera_movement',
    'framing',
    'lighting',
    'lighting_mood',
    'diegetic_sounds',
    'scene_mood',
    'emotional_arc',
    'primary_action',
    'pacing',
    'shoot_type',
)


def upgrade() -> None:
    # Create users table
    op.create_table(
        'users',
        _id_column(),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('password_hash', sa.String(255), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_users_email', 'users', ['email'])

    # Create profiles table
    op.create_table(
        'profiles',
        _id_column(),
        sa.Column('user_id', UUID(as_uuid=True), nullable=False, unique=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('role', sa.String(100), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
    )
    op.create_index('ix_profiles_user_id', 'profiles', ['user_id'])

    # Create projects table
    op.create_table(
        'projects',
        _id_column(),
        sa.Column('name', sa.String(255), nullable=False, unique=True),
        sa.Column('passkey', sa.String(255), nullable=False),
        sa.Column('creator_id', UUID(as_uuid=True), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['creator_id'], ['users.id']),
    )
    op.create_index('ix_projects_name', 'projects', ['name'])
    op.create_index('ix_projects_creator_id', 'projects', ['creator_id'])

    # Create project_members table
    op.create_table(
        'project_members',
        _id_column(),
        sa.Column('project_id', UUID(as_uuid=True), nullable=False),
        sa.Column('user_id', UUID(as_uuid=True), nullable=False),
        sa.Column('role', sa.String(100), nullable=False, server_default='Owner'),
        sa.Column('joined_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        *_timestamps(),
        sa.ForeignKeyConstraint(['project_id'], ['projects.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.UniqueConstraint('project_id', 'user_id', name='uq_project_members_project_user'),
    )
    op.create_index('ix_project_members_project_id', 'project_members', ['project_id'])
    op.create_index('ix_project_members_user_id', 'project_members', ['user_id'])

    # Create scenes table
    op.create_table(
        'scenes',
        _id_column(),
        sa.Column('project_id', UUID(as_uuid=True), nullable=False),
        sa.Column('scene_number', sa.Integer(), nullable=False),
        sa.Column('heading', sa.Text(), nullable=True),
        sa.Column('location_type', sa.String(50), nullable=True, server_default='INT'),
        sa.Column('time_of_day', sa.String(50), nullable=True, server_default='DAY'),
        *[sa.Column(name, sa.Text(), nullable=True) for name in SCENE_TEXT_COLUMNS],
        sa.Column('status', sa.String(50), nullable=False, server_default='pending'),
        *_timestamps(),
        sa.ForeignKeyConstraint(['project_id'], ['projects.id'], ondelete='CASCADE'),
    )
    op.create_index('ix_scenes_project_id', 'scenes', ['project_id'])
    op.create_index('ix_scenes_project_scene_number', 'scenes', ['project_id', 'scene_number'])

    # Create budget_entries table
    op.create_table(
        'budget_entries',
        _id_column(),
        sa.Column('project_id', UUID(as_uuid=True), nullable=False),
        sa.Column('scene_id', UUID(as_uuid=True), nullable=False),
        sa.Column('department', sa.String(100), nullable=False),
        sa.Column('estimated_cost', sa.Numeric(14, 2), nullable=False, server_default='0'),
        sa.Column('actual_cost', sa.Numeric(14, 2), nullable=False, server_default='0'),
        sa.Column('proof_reason', sa.Text(), nullable=True),
        sa.Column('proof_url', sa.String(1024), nullable=True),
        sa.Column('submitted_by', UUID(as_uuid=True), nullable=False),
        sa.Column('is_finalized', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.ForeignKeyConstraint(['project_id'], ['projects.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['scene_id'], ['scenes.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['submitted_by'], ['users.id'], ondelete='CASCADE'),
        sa.UniqueConstraint(
            'scene_id', 'department', 'submitted_by',
            name='uq_budget_entries_scene_department_submitter',
        ),
    )
    op.create_index('ix_budget_entries_project_id', 'budget_entries', ['project_id'])
    op.create_index('ix_budget_entries_scene_id', 'budget_entries', ['scene_id'])
    op.create_index('ix_budget_entries_submitted_by', 'budget_entries', ['submitted_by'])

    # Create shoot_days table
    op.create_table(
        'shoot_days',
        _id_column(),
        sa.Column('project_id', UUID(as_uuid=True), nullable=False),
        sa.Column('shoot_date', sa.Date(), nullable=False),
        sa.Column('status', sa.String(50), nullable=False, server_default='planned'),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['project_id'], ['projects.id'], ondelete='CASCADE'),
    )
    op.create_index('ix_shoot_days_project_id', 'shoot_days', ['project_id'])

    # Create day_scenes table
    op.create_table(
        'day_scenes',
        _id_column(),
        sa.Column('shoot_day_id', UUID(as_uuid=True), nullable=False),
        sa.Column('scene_id', UUID(as_uuid=True), nullable=False),
        sa.Column('call_time', sa.String(5), nullable=True),
        sa.Column('scene_status', sa.String(50), nullable=False, server_default='scheduled'),
        *_timestamps(),
        sa.ForeignKeyConstraint(['shoot_day_id'], ['shoot_days.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['scene_id'], ['scenes.id'], ondelete='CASCADE'),
    )
    op.create_index('ix_day_scenes_shoot_day_id', 'day_scenes', ['shoot_day_id'])
    op.create_index('ix_day_scenes_scene_id', 'day_scenes', ['scene_id'])

    # Create notifications table
    op.create_table(
        'notifications',
        _id_column(),
        sa.Column('user_id', UUID(as_uuid=True), nullable=False),
        sa.Column('project_id', UUID(as_uuid=True), nullable=True),
        sa.Column('type', sa.String(50), nullable=False, server_default='general'),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('related_scene_id', UUID(as_uuid=True), nullable=True),
        sa.Column('is_read', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['project_id'], ['projects.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['related_scene_id'], ['scenes.id'], ondelete='SET NULL'),
    )
    op.create_index('ix_notifications_user_id', 'notifications', ['user_id'])
    op.create_index('ix_notifications_project_id', 'notifications', ['project_id'])
    op.create_index('ix_notifications_user_unread', 'notifications', ['user_id', 'is_read'])


def downgrade() -> None:
    op.drop_table('notifications')
    op.drop_table('day_scenes')
    op.drop_table('shoot_days')
    op.drop_table('budget_entries')
    op.drop_table('scenes')
    op.drop_table('project_members')
    op.drop_table('projects')
    op.drop_table('profiles')
    op.drop_table('users')
