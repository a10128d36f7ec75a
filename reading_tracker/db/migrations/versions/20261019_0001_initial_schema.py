"""Initial reading tracker schema.

Revision ID: 0001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
    ]


def upgrade() -> None:
    # Users
    op.create_table(
        'users',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False, server_default=sa.text('gen_random_uuid()')),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('username', sa.String(50), nullable=False),
        sa.Column('display_name', sa.String(100), nullable=False),
        sa.Column('biography', sa.Text(), nullable=True),
        sa.Column('profile_image_url', sa.Text(), nullable=True),
        sa.Column('roles', sa.JSON(), nullable=False, server_default='["user"]'),
        sa.Column('status', sa.String(20), nullable=False, server_default='active'),
        sa.Column('last_login_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_username', 'users', ['username'], unique=True)

    op.create_table(
        'refresh_tokens',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False, server_default=sa.text('gen_random_uuid()')),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('token_hash', sa.String(255), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.Column('revoked_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_refresh_tokens_token_hash', 'refresh_tokens', ['token_hash'])

    # Catalog
    op.create_table(
        'books',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False, server_default=sa.text('gen_random_uuid()')),
        sa.Column('name', sa.String(500), nullable=False),
        sa.Column('author', sa.String(255), nullable=False),
        sa.Column('isbn', sa.String(20), nullable=True),
        sa.Column('cover_image_url', sa.String(500), nullable=True),
        sa.Column('edition', sa.String(100), nullable=True),
        sa.Column('pages', sa.Integer(), nullable=False),
        sa.Column('language', sa.String(10), nullable=False, server_default='en'),
        sa.Column('publication_date', sa.Date(), nullable=True),
        sa.Column('publisher', sa.String(255), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('genres', sa.JSON(), nullable=False, server_default='[]'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('isbn'),
    )
    op.create_index('ix_books_name', 'books', ['name'])
    op.create_index('ix_books_author', 'books', ['author'])

    op.create_table(
        'mangas',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False, server_default=sa.text('gen_random_uuid()')),
        sa.Column('title', sa.String(500), nullable=False),
        sa.Column('author', sa.String(255), nullable=False),
        sa.Column('cover_image_url', sa.String(500), nullable=True),
        sa.Column('volume', sa.Integer(), nullable=False),
        sa.Column('chapters', sa.Integer(), nullable=False),
        sa.Column('demography', sa.String(50), nullable=False),
        sa.Column('genres', sa.JSON(), nullable=False, server_default='[]'),
        sa.Column('publication_date', sa.Date(), nullable=True),
        sa.Column('publisher', sa.String(255), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_mangas_title', 'mangas', ['title'])
    op.create_index('ix_mangas_author', 'mangas', ['author'])
    op.create_index('ix_mangas_demography', 'mangas', ['demography'])

    op.create_table(
        'custom_documents',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False, server_default=sa.text('gen_random_uuid()')),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('title', sa.String(500), nullable=False),
        sa.Column('author', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('file_url', sa.String(500), nullable=True),
        sa.Column('url', sa.String(500), nullable=True),
        sa.Column('tags', sa.JSON(), nullable=False, server_default='[]'),
        sa.Column('category', sa.String(100), nullable=True),
        sa.Column('version', sa.String(50), nullable=True),
        sa.Column('status', sa.String(50), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_custom_documents_user', 'custom_documents', ['user_id', 'id'])

    # Readings
    op.create_table(
        'readings',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False, server_default=sa.text('gen_random_uuid()')),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('document_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('document_name', sa.String(500), nullable=False),
        sa.Column('reading_type', sa.String(20), nullable=False),
        sa.Column('reading_status', sa.String(20), nullable=False, server_default='ongoing'),
        sa.Column('notes', sa.Text(), nullable=False, server_default=''),
        sa.Column('last_record_update', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'document_id', name='uq_reading_user_document'),
        sa.CheckConstraint("reading_type IN ('book', 'manga', 'custom_document')", name='check_reading_type'),
        sa.CheckConstraint("reading_status IN ('ongoing', 'paused', 'completed')", name='check_reading_status'),
    )
    op.create_index('idx_readings_user_created', 'readings', ['user_id', 'created_at'])
    op.create_index('idx_readings_user_type', 'readings', ['user_id', 'reading_type'])
    op.create_index('idx_readings_user_status_updated', 'readings', ['user_id', 'reading_status', 'updated_at'])

    op.create_table(
        'reading_records',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False, server_default=sa.text('gen_random_uuid()')),
        sa.Column('reading_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('progress', sa.String(255), nullable=False),
        sa.Column('notes', sa.Text(), nullable=False, server_default=''),
        sa.Column('recorded_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.ForeignKeyConstraint(['reading_id'], ['readings.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_reading_records_reading_recorded', 'reading_records', ['reading_id', 'recorded_at'])

    # Reading lists
    op.create_table(
        'reading_lists',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False, server_default=sa.text('gen_random_uuid()')),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('description', sa.Text(), nullable=False, server_default=''),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_reading_lists_user', 'reading_lists', ['user_id', 'id'])

    op.create_table(
        'reading_list_entries',
        sa.Column('reading_list_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('reading_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('added_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.ForeignKeyConstraint(['reading_list_id'], ['reading_lists.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['reading_id'], ['readings.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('reading_list_id', 'reading_id'),
    )
    op.create_index('idx_reading_list_entries_reading', 'reading_list_entries', ['reading_id'])


def downgrade() -> None:
    op.drop_table('reading_list_entries')
    op.drop_table('reading_lists')
    op.drop_table('reading_records')
    op.drop_table('readings')
    op.drop_table('custom_documents')
    op.drop_table('mangas')
    op.drop_table('books')
    op.drop_table('refresh_tokens')
    op.drop_table('users')
