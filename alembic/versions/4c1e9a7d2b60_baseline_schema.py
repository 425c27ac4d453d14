"""baseline_schema

Revision ID: 4c1e9a7d2b60
Revises:
Create Date: 2026-10-19 09:12:41.118204

Production-safe migration: only creates tables that do not exist yet.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


# revision identifiers, used by Alembic.
revision: str = '4c1e9a7d2b60'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def table_exists(table_name: str) -> bool:
    """Check if a table exists in the database."""
    bind = op.get_bind()
    inspector = inspect(bind)
    return table_name in inspector.get_table_names()


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
    ]


def upgrade() -> None:
    if not table_exists('companies'):
        op.create_table('companies',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('name', sa.String(), nullable=False),
            *_timestamps(),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_companies_id'), 'companies', ['id'], unique=False)
        op.create_index(op.f('ix_companies_name'), 'companies', ['name'], unique=True)

    if not table_exists('users'):
        op.create_table('users',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('email', sa.String(), nullable=False),
            sa.Column('password_hash', sa.String(), nullable=False),
            sa.Column('role', sa.String(), nullable=False),
            sa.Column('company_id', sa.Integer(), nullable=False),
            *_timestamps(),
            sa.ForeignKeyConstraint(['company_id'], ['companies.id'], ),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
        op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
        op.create_index(op.f('ix_users_company_id'), 'users', ['company_id'], unique=False)

    if not table_exists('roles'):
        op.create_table('roles',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('title', sa.String(), nullable=False),
            sa.Column('description', sa.Text(), nullable=True),
            sa.Column('company_id', sa.Integer(), nullable=False),
            *_timestamps(),
            sa.ForeignKeyConstraint(['company_id'], ['companies.id'], ),
            sa.PrimaryKeyConstraint('id'),
            sa.UniqueConstraint('company_id', 'title', name='uq_roles_company_title')
        )
        op.create_index(op.f('ix_roles_id'), 'roles', ['id'], unique=False)
        op.create_index(op.f('ix_roles_company_id'), 'roles', ['company_id'], unique=False)
        op.create_index(op.f('ix_roles_created_at'), 'roles', ['created_at'], unique=False)

    if not table_exists('processes'):
        op.create_table('processes',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('title', sa.String(), nullable=False),
            sa.Column('description', sa.Text(), nullable=True),
            sa.Column('company_id', sa.Integer(), nullable=False),
            sa.Column('questions', sa.JSON(), nullable=False),
            *_timestamps(),
            sa.ForeignKeyConstraint(['company_id'], ['companies.id'], ),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_processes_id'), 'processes', ['id'], unique=False)
        op.create_index(op.f('ix_processes_company_id'), 'processes', ['company_id'], unique=False)
        op.create_index(op.f('ix_processes_created_at'), 'processes', ['created_at'], unique=False)

    if not table_exists('interview_sessions'):
        op.create_table('interview_sessions',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('role_id', sa.Integer(), nullable=False),
            sa.Column('process_id', sa.Integer(), nullable=True),
            sa.Column('status', sa.String(), nullable=False),
            sa.Column('started_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
            *_timestamps(),
            sa.ForeignKeyConstraint(['role_id'], ['roles.id'], ),
            sa.ForeignKeyConstraint(['process_id'], ['processes.id'], ),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_interview_sessions_id'), 'interview_sessions', ['id'], unique=False)
        op.create_index(op.f('ix_interview_sessions_role_id'), 'interview_sessions', ['role_id'], unique=False)
        op.create_index(op.f('ix_interview_sessions_process_id'), 'interview_sessions', ['process_id'], unique=False)
        op.create_index(op.f('ix_interview_sessions_created_at'), 'interview_sessions', ['created_at'], unique=False)
        op.create_index('idx_session_role_process_status', 'interview_sessions', ['role_id', 'process_id', 'status'], unique=False)

    if not table_exists('interview_responses'):
        op.create_table('interview_responses',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('session_id', sa.Integer(), nullable=False),
            sa.Column('question_id', sa.String(), nullable=True),
            sa.Column('question', sa.Text(), nullable=False),
            sa.Column('response', sa.Text(), nullable=True),
            sa.Column('transcript', sa.Text(), nullable=True),
            sa.Column('audio_url', sa.String(), nullable=True),
            sa.Column('screenshot_urls', sa.JSON(), nullable=True),
            *_timestamps(),
            sa.ForeignKeyConstraint(['session_id'], ['interview_sessions.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_interview_responses_id'), 'interview_responses', ['id'], unique=False)
        op.create_index(op.f('ix_interview_responses_session_id'), 'interview_responses', ['session_id'], unique=False)
        op.create_index(op.f('ix_interview_responses_question_id'), 'interview_responses', ['question_id'], unique=False)

    if not table_exists('knowledge_artifacts'):
        op.create_table('knowledge_artifacts',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('title', sa.String(), nullable=False),
            sa.Column('description', sa.Text(), nullable=True),
            sa.Column('type', sa.String(), nullable=False),
            sa.Column('file_url', sa.String(), nullable=True),
            sa.Column('content', sa.Text(), nullable=True),
            sa.Column('role_id', sa.Integer(), nullable=True),
            sa.Column('metadata', sa.JSON(), nullable=True),
            *_timestamps(),
            sa.ForeignKeyConstraint(['role_id'], ['roles.id'], ),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_knowledge_artifacts_id'), 'knowledge_artifacts', ['id'], unique=False)
        op.create_index(op.f('ix_knowledge_artifacts_title'), 'knowledge_artifacts', ['title'], unique=False)
        op.create_index(op.f('ix_knowledge_artifacts_role_id'), 'knowledge_artifacts', ['role_id'], unique=False)
        op.create_index(op.f('ix_knowledge_artifacts_created_at'), 'knowledge_artifacts', ['created_at'], unique=False)
        op.create_index('idx_artifact_role_title', 'knowledge_artifacts', ['role_id', 'title'], unique=False)

    if not table_exists('knowledge_chunks'):
        op.create_table('knowledge_chunks',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('artifact_id', sa.Integer(), nullable=False),
            sa.Column('content', sa.Text(), nullable=False),
            sa.Column('chunk_index', sa.Integer(), nullable=False),
            sa.Column('token_count', sa.Integer(), nullable=False),
            sa.Column('metadata', sa.JSON(), nullable=True),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
            sa.ForeignKeyConstraint(['artifact_id'], ['knowledge_artifacts.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id'),
            sa.UniqueConstraint('artifact_id', 'chunk_index', name='uq_chunk_artifact_index')
        )
        op.create_index(op.f('ix_knowledge_chunks_id'), 'knowledge_chunks', ['id'], unique=False)
        op.create_index(op.f('ix_knowledge_chunks_artifact_id'), 'knowledge_chunks', ['artifact_id'], unique=False)

    if not table_exists('embeddings'):
        op.create_table('embeddings',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('chunk_id', sa.Integer(), nullable=False),
            sa.Column('vector', sa.JSON(), nullable=False),
            sa.Column('model', sa.String(), nullable=False),
            *_timestamps(),
            sa.ForeignKeyConstraint(['chunk_id'], ['knowledge_chunks.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_embeddings_id'), 'embeddings', ['id'], unique=False)
        op.create_index(op.f('ix_embeddings_chunk_id'), 'embeddings', ['chunk_id'], unique=True)


def downgrade() -> None:
    for table in (
        'embeddings',
        'knowledge_chunks',
        'knowledge_artifacts',
        'interview_responses',
        'interview_sessions',
        'processes',
        'roles',
        'users',
        'companies',
    ):
        op.drop_table(table)
