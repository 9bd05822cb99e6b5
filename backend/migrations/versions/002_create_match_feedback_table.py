"""Create match_feedback table

Revision ID: 002
Revises: 001
Create Date: 2026-10-19 14:00:00.000000
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '002'
down_revision = '001'
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'match_feedback',
        sa.Column('id', postgresql.UUID(as_uuid=True), server_default=sa.text('gen_random_uuid()'), nullable=False),
        sa.Column('match_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('designer_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('client_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('accepted', sa.Boolean(), nullable=False),
        sa.Column('project_started', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('project_completed', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('satisfaction', sa.Integer(), nullable=True),
        sa.Column('delivered_on_time', sa.Boolean(), nullable=True),
        sa.Column('comment', sa.Text(), nullable=True),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('NOW()'), nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('NOW()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['match_id'], ['match.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['designer_id'], ['designer.id'], ondelete='RESTRICT'),
        sa.UniqueConstraint('match_id', name='uq_match_feedback_match'),
        sa.CheckConstraint(
            'satisfaction IS NULL OR (satisfaction >= 1 AND satisfaction <= 5)',
            name='ck_match_feedback_satisfaction'
        ),
    )
    op.create_index('ix_match_feedback_designer_id', 'match_feedback', ['designer_id'])


def downgrade():
    op.drop_index('ix_match_feedback_designer_id', table_name='match_feedback')
    op.drop_table('match_feedback')
