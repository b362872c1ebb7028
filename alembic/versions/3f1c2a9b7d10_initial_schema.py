"""Initial schema: users, workspaces, notes, tags, note_tags, shared_notes

Revision ID: 3f1c2a9b7d10
Revises:
Create Date: 2026-10-19 09:12:41.204118

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '3f1c2a9b7d10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _base_columns() -> list:
    return [
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        *_base_columns(),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('username', sa.String(length=100), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('full_name', sa.String(length=100), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('is_verified', sa.Boolean(), nullable=False),
        sa.CheckConstraint('email = lower(email)', name='ck_users_email_lowercase'),
        sa.CheckConstraint('length(username) >= 3', name='ck_users_username_len'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
        sa.UniqueConstraint('username'),
    )

    op.create_table(
        'workspaces',
        *_base_columns(),
        sa.Column('owner_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_workspaces_owner_created', 'workspaces', ['owner_id', 'created_at'])

    op.create_table(
        'notes',
        *_base_columns(),
        sa.Column('owner_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('workspace_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('is_deleted', sa.Boolean(), nullable=False),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['workspace_id'], ['workspaces.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_notes_owner_updated', 'notes', ['owner_id', 'is_deleted', 'updated_at'])
    op.create_index('idx_notes_owner_created', 'notes', ['owner_id', 'created_at'])
    op.create_index('idx_notes_workspace_id', 'notes', ['workspace_id'])
    op.execute(
        "CREATE INDEX idx_notes_search_vector ON notes "
        "USING gin (to_tsvector('english', title || ' ' || content))"
    )

    op.create_table(
        'tags',
        *_base_columns(),
        sa.Column('owner_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.CheckConstraint('name = lower(name)', name='ck_tags_name_lowercase'),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('owner_id', 'name', name='uq_tags_owner_name'),
    )
    op.create_index('idx_tags_owner_id', 'tags', ['owner_id'])

    op.create_table(
        'note_tags',
        *_base_columns(),
        sa.Column('note_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('tag_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.ForeignKeyConstraint(['note_id'], ['notes.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['tag_id'], ['tags.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('note_id', 'tag_id', name='uq_note_tags_note_tag'),
    )
    op.create_index('idx_note_tags_tag_id', 'note_tags', ['tag_id'])

    op.create_table(
        'shared_notes',
        *_base_columns(),
        sa.Column('note_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('shared_with_user_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('shared_by_user_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('permission', sa.String(length=10), nullable=False),
        sa.CheckConstraint("permission IN ('read', 'edit')", name='ck_shared_notes_permission'),
        sa.CheckConstraint(
            'shared_with_user_id <> shared_by_user_id', name='ck_shared_notes_no_self_share'
        ),
        sa.ForeignKeyConstraint(['note_id'], ['notes.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['shared_with_user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['shared_by_user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('note_id', 'shared_with_user_id', name='uq_shared_notes_note_grantee'),
    )
    op.create_index(
        'idx_shared_notes_grantee', 'shared_notes', ['shared_with_user_id', 'created_at']
    )
    op.create_index('idx_shared_notes_granter', 'shared_notes', ['shared_by_user_id', 'created_at'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('shared_notes')
    op.drop_table('note_tags')
    op.drop_table('tags')
    op.execute("DROP INDEX IF EXISTS idx_notes_search_vector")
    op.drop_table('notes')
    op.drop_table('workspaces')
    op.drop_table('users')
