"""Create brief, designer and match tables

Revision ID: 001
Revises:
Create Date: 2026-10-19 09:00:00.000000
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'brief',
        sa.Column('id', postgresql.UUID(as_uuid=True), server_default=sa.text('gen_random_uuid()'), nullable=False),
        sa.Column('client_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('company_name', sa.Text(), nullable=True),
        sa.Column('design_category', sa.Text(), nullable=True),
        sa.Column('industry', sa.Text(), nullable=True),
        sa.Column('budget_range', sa.Text(), nullable=True),
        sa.Column('timeline_type', sa.Text(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('styles', postgresql.JSONB(), server_default=sa.text("'[]'::jsonb"), nullable=False),
        sa.Column('target_audience', sa.Text(), nullable=True),
        sa.Column('brand_personality', sa.Text(), nullable=True),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('NOW()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint(
            "budget_range IS NULL OR budget_range IN ('entry', 'mid', 'premium')",
            name='ck_brief_budget_range'
        ),
        sa.CheckConstraint(
            "timeline_type IS NULL OR timeline_type IN ('urgent', 'standard', 'flexible')",
            name='ck_brief_timeline_type'
        ),
    )
    op.create_index('ix_brief_client_id', 'brief', ['client_id'])

    op.create_table(
        'designer',
        sa.Column('id', postgresql.UUID(as_uuid=True), server_default=sa.text('gen_random_uuid()'), nullable=False),
        sa.Column('first_name', sa.Text(), nullable=False),
        sa.Column('last_name', sa.Text(), nullable=False),
        sa.Column('email', sa.Text(), nullable=False),
        sa.Column('title', sa.Text(), nullable=True),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('city', sa.Text(), nullable=True),
        sa.Column('country', sa.Text(), nullable=True),
        sa.Column('portfolio_url', sa.Text(), nullable=True),
        sa.Column('avatar_url', sa.Text(), nullable=True),
        sa.Column('primary_categories', postgresql.JSONB(), server_default=sa.text("'[]'::jsonb"), nullable=False),
        sa.Column('secondary_categories', postgresql.JSONB(), server_default=sa.text("'[]'::jsonb"), nullable=False),
        sa.Column('style_keywords', postgresql.JSONB(), server_default=sa.text("'[]'::jsonb"), nullable=False),
        sa.Column('industries', postgresql.JSONB(), server_default=sa.text("'[]'::jsonb"), nullable=False),
        sa.Column('preferred_project_sizes', postgresql.JSONB(), server_default=sa.text("'[]'::jsonb"), nullable=False),
        sa.Column('turnaround_times', postgresql.JSONB(), server_default=sa.text("'{}'::jsonb"), nullable=False),
        sa.Column('availability', sa.Text(), server_default='available', nullable=False),
        sa.Column('is_approved', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('is_verified', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('rejection_reason', sa.Text(), nullable=True),
        sa.Column('years_experience', sa.Integer(), server_default='0', nullable=False),
        sa.Column('rating', sa.Float(), server_default='0', nullable=False),
        sa.Column('total_projects', sa.Integer(), server_default='0', nullable=False),
        sa.Column('on_time_delivery_rate', sa.Float(), nullable=True),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('NOW()'), nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('NOW()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email', name='uq_designer_email'),
        sa.CheckConstraint(
            "availability IN ('available', 'busy', 'unavailable')",
            name='ck_designer_availability'
        ),
    )
    # Candidate query filters on approval, verification and availability
    op.create_index(
        'idx_designer_matchable',
        'designer',
        ['availability'],
        postgresql_where=sa.text('is_approved AND is_verified')
    )

    op.create_table(
        'match',
        sa.Column('id', postgresql.UUID(as_uuid=True), server_default=sa.text('gen_random_uuid()'), nullable=False),
        sa.Column('brief_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('designer_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('client_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('score', sa.Integer(), nullable=False),
        sa.Column('reasons', postgresql.JSONB(), server_default=sa.text("'[]'::jsonb"), nullable=False),
        sa.Column('personalized_reasons', postgresql.JSONB(), server_default=sa.text("'[]'::jsonb"), nullable=False),
        sa.Column('confidence', sa.Text(), nullable=True),
        sa.Column('provider', sa.Text(), nullable=True),
        sa.Column('status', sa.Text(), server_default='pending', nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('NOW()'), nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('NOW()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['brief_id'], ['brief.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['designer_id'], ['designer.id'], ondelete='RESTRICT'),
        sa.UniqueConstraint('brief_id', 'designer_id', name='uq_match_brief_designer'),
        sa.CheckConstraint('score >= 0 AND score <= 100', name='ck_match_score_range'),
        sa.CheckConstraint(
            "status IN ('pending', 'unlocked', 'accepted')",
            name='ck_match_status'
        ),
    )
    op.create_index('ix_match_brief_id', 'match', ['brief_id'])
    op.create_index('ix_match_client_id', 'match', ['client_id'])


def downgrade():
    op.drop_index('ix_match_client_id', table_name='match')
    op.drop_index('ix_match_brief_id', table_name='match')
    op.drop_table('match')

    op.drop_index('idx_designer_matchable', table_name='designer')
    op.drop_table('designer')

    op.drop_index('ix_brief_client_id', table_name='brief')
    op.drop_table('brief')
