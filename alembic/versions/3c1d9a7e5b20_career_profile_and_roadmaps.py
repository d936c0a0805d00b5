"""career_profile_and_roadmaps

Revision ID: 3c1d9a7e5b20
Revises:
Create Date: 2026-10-19 09:30:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3c1d9a7e5b20'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create users, extracted skills, extraction history and roadmaps."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('full_name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('password_hash', sa.String(), nullable=True),
        sa.Column('skills', sa.JSON(), nullable=False),
        sa.Column('target_roles', sa.JSON(), nullable=False),
        sa.Column('projects', sa.JSON(), nullable=False),
        sa.Column('education_level', sa.String(), nullable=True),
        sa.Column('experience_level', sa.String(), nullable=True),
        sa.Column('raw_cv_text', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    op.create_table(
        'extracted_skills',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('skill_name', sa.String(length=255), nullable=False),
        sa.Column('proficiency', sa.String(length=50), nullable=True),
        sa.Column('category', sa.String(length=100), nullable=True),
        sa.Column('source', sa.String(length=50), nullable=False, server_default='ai_extraction'),
        sa.Column('is_verified', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('extracted_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint('user_id', 'skill_name', name='uq_extracted_skills_user_skill'),
    )
    op.create_index(op.f('ix_extracted_skills_id'), 'extracted_skills', ['id'], unique=False)
    op.create_index(op.f('ix_extracted_skills_user_id'), 'extracted_skills', ['user_id'], unique=False)
    op.create_index(op.f('ix_extracted_skills_category'), 'extracted_skills', ['category'], unique=False)

    op.create_table(
        'ai_extractions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('extraction_type', sa.String(length=50), nullable=False),
        sa.Column('input_text', sa.Text(), nullable=True),
        sa.Column('extracted_data', sa.JSON(), nullable=True),
        sa.Column('provider', sa.String(length=50), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index(op.f('ix_ai_extractions_id'), 'ai_extractions', ['id'], unique=False)
    op.create_index(op.f('ix_ai_extractions_user_id'), 'ai_extractions', ['user_id'], unique=False)
    op.create_index(op.f('ix_ai_extractions_extraction_type'), 'ai_extractions', ['extraction_type'], unique=False)
    op.create_index('idx_ai_extractions_user_type', 'ai_extractions', ['user_id', 'extraction_type'], unique=False)

    op.create_table(
        'career_roadmaps',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('target_role', sa.String(length=255), nullable=False),
        sa.Column('roadmap_data', sa.JSON(), nullable=False),
        sa.Column('ai_provider', sa.String(length=50), nullable=False),
        sa.Column('timeframe_months', sa.Integer(), nullable=True),
        sa.Column('learning_hours_per_week', sa.Integer(), nullable=True),
        sa.Column('current_skills', sa.JSON(), nullable=False),
        sa.Column('project_suggestions', sa.JSON(), nullable=False),
        sa.Column('job_application_timing', sa.Text(), nullable=True),
        sa.Column('progress_percentage', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('completed_phases', sa.JSON(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index(op.f('ix_career_roadmaps_id'), 'career_roadmaps', ['id'], unique=False)
    op.create_index(op.f('ix_career_roadmaps_user_id'), 'career_roadmaps', ['user_id'], unique=False)
    op.create_index('idx_roadmaps_user_created', 'career_roadmaps', ['user_id', 'created_at'], unique=False)


def downgrade() -> None:
    """Drop tables in reverse dependency order."""
    op.drop_table('career_roadmaps')
    op.drop_table('ai_extractions')
    op.drop_table('extracted_skills')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_index(op.f('ix_users_id'), table_name='users')
    op.drop_table('users')
