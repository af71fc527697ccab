"""Baseline migration - profiles and IEP records

Revision ID: 0001_baseline
Revises: 
Create Date: 2026-10-17

Creates the child profile table and every record table hanging off it.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '0001_baseline'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

JSON_LIST = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def _id() -> sa.Column:
    return sa.Column('id', sa.Uuid(), primary_key=True)


def _child_id() -> sa.Column:
    return sa.Column(
        'child_id',
        sa.Uuid(),
        sa.ForeignKey('child_profiles.id', ondelete='CASCADE'),
        nullable=False,
    )


def _timestamp(name: str) -> sa.Column:
    return sa.Column(
        name, sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
    )


def upgrade() -> None:
    """Create profile and record tables."""

    # ==========================================================================
    # Profiles
    # ==========================================================================
    op.create_table(
        'child_profiles',
        _id(),
        sa.Column('owner_key', sa.String(64), nullable=False, unique=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('age', sa.Integer(), nullable=True),
        sa.Column('grade', sa.String(50), nullable=True),
        sa.Column('disabilities', JSON_LIST, nullable=False),
        sa.Column('focus_tags', JSON_LIST, nullable=False),
        sa.Column('advocacy_level', sa.String(20), nullable=True),
        sa.Column('primary_goal', sa.Text(), nullable=True),
        sa.Column('state_context', sa.String(100), nullable=True),
        sa.Column('last_iep_date', sa.Date(), nullable=True),
        _timestamp('created_at'),
        _timestamp('updated_at'),
        sa.CheckConstraint(
            "advocacy_level IS NULL OR advocacy_level IN ('Beginner', 'Intermediate', 'Advanced')",
            name='ck_child_profiles_advocacy_level',
        ),
    )

    # ==========================================================================
    # Analyses & documents
    # ==========================================================================
    op.create_table(
        'iep_analyses',
        _id(),
        _child_id(),
        sa.Column('summary', sa.Text(), nullable=False),
        sa.Column('goals', JSON_LIST, nullable=False),
        sa.Column('accommodations', JSON_LIST, nullable=False),
        sa.Column('red_flags', JSON_LIST, nullable=False),
        sa.Column('legal_lens', sa.Text(), nullable=False),
        sa.Column('service_grid', JSON_LIST, nullable=True),
        _timestamp('created_at'),
    )
    op.create_index('ix_iep_analyses_child_id', 'iep_analyses', ['child_id'])
    op.create_index(
        'ix_iep_analyses_child_created', 'iep_analyses', ['child_id', 'created_at']
    )

    op.create_table(
        'iep_documents',
        _id(),
        _child_id(),
        sa.Column('filename', sa.String(255), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column(
            'analysis_id',
            sa.Uuid(),
            sa.ForeignKey('iep_analyses.id', ondelete='SET NULL'),
            nullable=True,
        ),
        _timestamp('created_at'),
    )
    op.create_index('ix_iep_documents_child_id', 'iep_documents', ['child_id'])

    # ==========================================================================
    # Logs
    # ==========================================================================
    op.create_table(
        'compliance_logs',
        _id(),
        _child_id(),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('service_type', sa.String(100), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        _timestamp('created_at'),
        sa.CheckConstraint(
            "status IN ('Received', 'Partial', 'Missed')", name='ck_compliance_logs_status'
        ),
    )
    op.create_index('ix_compliance_logs_child_id', 'compliance_logs', ['child_id'])

    op.create_table(
        'goal_progress',
        _id(),
        _child_id(),
        sa.Column('goal_name', sa.String(255), nullable=False),
        sa.Column('current_value', sa.String(100), nullable=True),
        sa.Column('target_value', sa.String(100), nullable=True),
        sa.Column('status', sa.String(20), nullable=False),
        _timestamp('last_updated'),
        sa.CheckConstraint(
            "status IN ('Emerging', 'Progressing', 'Mastered', 'Regression')",
            name='ck_goal_progress_status',
        ),
    )
    op.create_index('ix_goal_progress_child_id', 'goal_progress', ['child_id'])

    op.create_table(
        'communication_logs',
        _id(),
        _child_id(),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('contact_name', sa.String(255), nullable=False),
        sa.Column('method', sa.String(20), nullable=False),
        sa.Column('summary', sa.Text(), nullable=True),
        sa.Column('follow_up_needed', sa.Boolean(), nullable=False),
        _timestamp('created_at'),
        sa.CheckConstraint(
            "method IN ('Email', 'Phone', 'In-person', 'IEP Meeting')",
            name='ck_communication_logs_method',
        ),
    )
    op.create_index('ix_communication_logs_child_id', 'communication_logs', ['child_id'])

    op.create_table(
        'behavior_logs',
        _id(),
        _child_id(),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('time', sa.Time(), nullable=True),
        sa.Column('antecedent', sa.Text(), nullable=True),
        sa.Column('behavior', sa.Text(), nullable=False),
        sa.Column('consequence', sa.Text(), nullable=True),
        sa.Column('intensity', sa.Integer(), nullable=False),
        sa.Column('duration_minutes', sa.Integer(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        _timestamp('created_at'),
        sa.CheckConstraint('intensity BETWEEN 1 AND 5', name='ck_behavior_logs_intensity'),
    )
    op.create_index('ix_behavior_logs_child_id', 'behavior_logs', ['child_id'])

    # ==========================================================================
    # Letters
    # ==========================================================================
    op.create_table(
        'letter_drafts',
        _id(),
        _child_id(),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('letter_type', sa.String(100), nullable=True),
        _timestamp('last_edited'),
    )
    op.create_index('ix_letter_drafts_child_id', 'letter_drafts', ['child_id'])


def downgrade() -> None:
    """Drop all tables in reverse dependency order."""
    for table in (
        'letter_drafts',
        'behavior_logs',
        'communication_logs',
        'goal_progress',
        'compliance_logs',
        'iep_documents',
        'iep_analyses',
        'child_profiles',
    ):
        op.drop_table(table)
