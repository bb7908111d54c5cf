"""Alembic migration: Initial schema (users, articles, elections, live coverage)."""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '1_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create every table of the site and live coverage engine."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('username', sa.String(100), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('display_name', sa.String(200), nullable=False),
        sa.Column('role', sa.String(20), nullable=False, server_default='editor'),
        sa.Column('avatar_url', sa.Text(), nullable=True),
        sa.Column('title', sa.String(200), nullable=True),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('is_team_member', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('username'),
        sa.CheckConstraint("role IN ('admin', 'editor', 'user')", name='ck_user_role'),
    )
    op.create_index('ix_users_username', 'users', ['username'])

    op.create_table(
        'categories',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('slug', sa.String(120), nullable=False),
        sa.Column('color', sa.String(20), nullable=False, server_default='#FF4D4D'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
        sa.UniqueConstraint('slug'),
    )
    op.create_index('ix_categories_slug', 'categories', ['slug'])

    op.create_table(
        'articles',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('slug', sa.String(255), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('excerpt', sa.Text(), nullable=False, server_default=''),
        sa.Column('image_url', sa.Text(), nullable=True),
        sa.Column('author_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('category_id', sa.Integer(), sa.ForeignKey('categories.id'), nullable=True),
        sa.Column('published', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('featured', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('view_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('sources', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('slug'),
    )
    op.create_index('ix_articles_slug', 'articles', ['slug'])
    op.create_index('ix_articles_author_id', 'articles', ['author_id'])
    op.create_index('ix_articles_category_id', 'articles', ['category_id'])
    op.create_index('ix_articles_created_at', 'articles', ['created_at'])
    op.create_index('idx_article_published_created', 'articles', ['published', 'created_at'])

    op.create_table(
        'elections',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('country', sa.String(100), nullable=False),
        sa.Column('country_code', sa.String(10), nullable=False),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('date', sa.DateTime(), nullable=False),
        sa.Column('type', sa.String(50), nullable=False),
        sa.Column('round', sa.Integer(), nullable=True),
        sa.Column('location', sa.String(200), nullable=True),
        sa.Column('total_votes', sa.Integer(), nullable=True),
        sa.Column('display_type', sa.String(10), nullable=False, server_default='bar'),
        sa.Column('results', sa.JSON(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('upcoming', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_elections_country_code', 'elections', ['country_code'])
    op.create_index('ix_elections_date', 'elections', ['date'])

    op.create_table(
        'live_coverages',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('slug', sa.String(255), nullable=False),
        sa.Column('subject', sa.Text(), nullable=False),
        sa.Column('context', sa.Text(), nullable=False, server_default=''),
        sa.Column('image_url', sa.Text(), nullable=True),
        sa.Column('active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('slug'),
    )
    op.create_index('ix_live_coverages_slug', 'live_coverages', ['slug'])
    op.create_index('ix_live_coverages_active', 'live_coverages', ['active'])

    op.create_table(
        'live_coverage_editors',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('coverage_id', sa.Integer(), sa.ForeignKey('live_coverages.id'), nullable=False),
        sa.Column('editor_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('role', sa.String(100), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('coverage_id', 'editor_id', name='uq_live_coverage_editor'),
    )
    op.create_index('ix_live_coverage_editors_coverage_id', 'live_coverage_editors', ['coverage_id'])
    op.create_index('ix_live_coverage_editors_editor_id', 'live_coverage_editors', ['editor_id'])

    op.create_table(
        'live_coverage_questions',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('coverage_id', sa.Integer(), sa.ForeignKey('live_coverages.id'), nullable=False),
        sa.Column('username', sa.String(100), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('timestamp', sa.DateTime(), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('answered', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint(
            "status IN ('pending', 'approved', 'rejected')",
            name='ck_question_status'
        ),
    )
    op.create_index('ix_live_coverage_questions_coverage_id', 'live_coverage_questions', ['coverage_id'])
    op.create_index(
        'idx_question_coverage_status', 'live_coverage_questions', ['coverage_id', 'status']
    )

    op.create_table(
        'live_coverage_updates',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('coverage_id', sa.Integer(), sa.ForeignKey('live_coverages.id'), nullable=False),
        sa.Column('author_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('timestamp', sa.DateTime(), nullable=False),
        sa.Column('image_url', sa.Text(), nullable=True),
        sa.Column('important', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_answer', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            'question_id', sa.Integer(), sa.ForeignKey('live_coverage_questions.id'), nullable=True
        ),
        sa.Column('update_type', sa.String(20), nullable=False, server_default='normal'),
        sa.Column('youtube_url', sa.Text(), nullable=True),
        sa.Column('article_id', sa.Integer(), sa.ForeignKey('articles.id'), nullable=True),
        sa.Column('election_results', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_live_coverage_updates_coverage_id', 'live_coverage_updates', ['coverage_id'])
    op.create_index(
        'idx_update_coverage_timestamp', 'live_coverage_updates', ['coverage_id', 'timestamp']
    )

    op.create_table(
        'team_applications',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('full_name', sa.String(200), nullable=False),
        sa.Column('email', sa.String(320), nullable=False),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('position', sa.String(200), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('cv_url', sa.Text(), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('submission_date', sa.DateTime(), nullable=False),
        sa.Column('reviewed_at', sa.DateTime(), nullable=True),
        sa.Column('reviewed_by', sa.Integer(), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_team_applications_status', 'team_applications', ['status'])

    op.create_table(
        'site_alerts',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('priority', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('background_color', sa.String(20), nullable=False, server_default='#dc2626'),
        sa.Column('text_color', sa.String(20), nullable=False, server_default='#ffffff'),
        sa.Column('url', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('created_by', sa.Integer(), sa.ForeignKey('users.id'), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('priority BETWEEN 1 AND 10', name='ck_site_alert_priority'),
    )


def downgrade() -> None:
    """Drop every table in reverse dependency order."""
    op.drop_table('site_alerts')
    op.drop_table('team_applications')
    op.drop_table('live_coverage_updates')
    op.drop_table('live_coverage_questions')
    op.drop_table('live_coverage_editors')
    op.drop_table('live_coverages')
    op.drop_table('elections')
    op.drop_table('articles')
    op.drop_table('categories')
    op.drop_table('users')
