"""baseline_interview_engine

Revision ID: 5c1e7a9d3b20
Revises: 
Create Date: 2026-10-17 09:12:41.118204

Creates interviews, interview_sessions and answers. Skips tables that already exist.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


# revision identifiers, used by Alembic.
revision: str = '5c1e7a9d3b20'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

SESSION_STATUS = sa.Enum('not-started', 'in-progress', 'completed', name='session_status')


def table_exists(table_name: str) -> bool:
    """Check if a table exists in the database."""
    bind = op.get_bind()
    inspector = inspect(bind)
    return table_name in inspector.get_table_names()


def upgrade() -> None:
    if not table_exists('interviews'):
        op.create_table('interviews',
            sa.Column('id', sa.String(length=36), nullable=False),
            sa.Column('owner_id', sa.String(), nullable=False),
            sa.Column('skills', sa.JSON(), nullable=False),
            sa.Column('difficulty', sa.String(), nullable=False),
            sa.Column('questions_per_skill', sa.Integer(), nullable=False),
            sa.Column('context', sa.Text(), nullable=True),
            sa.Column('questions', sa.JSON(), nullable=False),
            sa.Column('total_questions', sa.Integer(), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('idx_interviews_owner_created', 'interviews', ['owner_id', 'created_at'], unique=False)
        op.create_index(op.f('ix_interviews_owner_id'), 'interviews', ['owner_id'], unique=False)
        op.create_index(op.f('ix_interviews_created_at'), 'interviews', ['created_at'], unique=False)

    if not table_exists('interview_sessions'):
        op.create_table('interview_sessions',
            sa.Column('id', sa.String(length=36), nullable=False),
            sa.Column('interview_id', sa.String(length=36), nullable=False),
            sa.Column('owner_id', sa.String(), nullable=False),
            sa.Column('current_question_index', sa.Integer(), nullable=False),
            sa.Column('status', SESSION_STATUS, nullable=False),
            sa.Column('started_at', sa.DateTime(timezone=True), nullable=True),
            sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
            sa.Column('overall_score', sa.Float(), nullable=True),
            sa.Column('reported_overall_score', sa.Float(), nullable=True),
            sa.Column('summary', sa.Text(), nullable=True),
            sa.Column('recommendations', sa.JSON(), nullable=True),
            sa.Column('interview_strengths', sa.JSON(), nullable=True),
            sa.Column('interview_weaknesses', sa.JSON(), nullable=True),
            sa.Column('skill_breakdown', sa.JSON(), nullable=True),
            sa.Column('category_breakdown', sa.JSON(), nullable=True),
            sa.Column('performance_metrics', sa.JSON(), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.ForeignKeyConstraint(['interview_id'], ['interviews.id'], ),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('idx_sessions_owner_created', 'interview_sessions', ['owner_id', 'created_at'], unique=False)
        op.create_index(op.f('ix_interview_sessions_interview_id'), 'interview_sessions', ['interview_id'], unique=False)
        op.create_index(op.f('ix_interview_sessions_owner_id'), 'interview_sessions', ['owner_id'], unique=False)
        op.create_index(op.f('ix_interview_sessions_status'), 'interview_sessions', ['status'], unique=False)
        op.create_index(op.f('ix_interview_sessions_created_at'), 'interview_sessions', ['created_at'], unique=False)

    if not table_exists('answers'):
        op.create_table('answers',
            sa.Column('id', sa.String(length=36), nullable=False),
            sa.Column('session_id', sa.String(length=36), nullable=False),
            sa.Column('question_index', sa.Integer(), nullable=False),
            sa.Column('question_text', sa.Text(), nullable=False),
            sa.Column('transcription', sa.Text(), nullable=False),
            sa.Column('evaluation', sa.JSON(), nullable=True),
            sa.Column('answered_at', sa.DateTime(timezone=True), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.ForeignKeyConstraint(['session_id'], ['interview_sessions.id'], ),
            sa.PrimaryKeyConstraint('id'),
            sa.UniqueConstraint('session_id', 'question_index', name='uq_answers_session_question')
        )
        op.create_index(op.f('ix_answers_session_id'), 'answers', ['session_id'], unique=False)


def downgrade() -> None:
    op.drop_table('answers')
    op.drop_table('interview_sessions')
    op.drop_table('interviews')
    SESSION_STATUS.drop(op.get_bind(), checkfirst=True)
