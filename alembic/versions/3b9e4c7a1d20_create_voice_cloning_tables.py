"""Create users, voice projects, voice samples and generated audio tables

Revision ID: 3b9e4c7a1d20
Revises:
Create Date: 2026-10-19 09:12:44.318027

"""
from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = '3b9e4c7a1d20'
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('hashed_password', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email')
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=False)

    op.create_table(
        'voice_projects',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('user_id', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.CheckConstraint("length(trim(name)) > 0", name='ck_voice_projects_name_not_blank'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_voice_projects_user_id'), 'voice_projects', ['user_id'], unique=False)
    op.create_index(op.f('ix_voice_projects_created_at'), 'voice_projects', ['created_at'], unique=False)

    op.create_table(
        'voice_samples',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('project_id', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('audio_url', sa.String(), nullable=False),
        sa.Column('duration_seconds', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['project_id'], ['voice_projects.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_samples_project_created', 'voice_samples', ['project_id', 'created_at'], unique=False)

    op.create_table(
        'generated_audio',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('project_id', sa.String(), nullable=False),
        sa.Column('text_input', sa.Text(), nullable=False),
        sa.Column('audio_url', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['project_id'], ['voice_projects.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_generated_project_created', 'generated_audio', ['project_id', 'created_at'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('idx_generated_project_created', table_name='generated_audio')
    op.drop_table('generated_audio')
    op.drop_index('idx_samples_project_created', table_name='voice_samples')
    op.drop_table('voice_samples')
    op.drop_index(op.f('ix_voice_projects_created_at'), table_name='voice_projects')
    op.drop_index(op.f('ix_voice_projects_user_id'), table_name='voice_projects')
    op.drop_table('voice_projects')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_table('users')
