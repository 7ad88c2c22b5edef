"""Create users, posts and vocabulary tables

Revision ID: 001
Revises: None
Create Date: 2024-01-15 00:00:00.000000+00:00

What:  Initial schema: users (unique email), posts (foreign key to users with
       ON DELETE CASCADE) and vocabulary.
How:   Backend-neutral column types (sa.Uuid, DateTime(timezone=True)) so the
       same revision runs on PostgreSQL and SQLite. Every create uses
       if_not_exists, so upgrading a database that ensure_schema() already
       initialized is a no-op.

Rollback: downgrade() drops all three tables (destructive).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
    ]


def upgrade() -> None:
    if op.get_bind().dialect.name == "postgresql":
        # gen_random_uuid() for rows inserted outside the API
        op.execute("CREATE EXTENSION IF NOT EXISTS pgcrypto")

    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="users_pkey"),
        sa.UniqueConstraint("email", name="users_email_key"),
        if_not_exists=True,
    )
    op.create_index("idx_users_email", "users", ["email"], if_not_exists=True)

    op.create_table(
        "posts",
        sa.Column("id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("user_id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("title", sa.String(500), nullable=False),
        sa.Column("content", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="posts_pkey"),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["users.id"],
            name="posts_user_id_fkey",
            ondelete="CASCADE",
        ),
        if_not_exists=True,
    )
    op.create_index("idx_posts_user_id", "posts", ["user_id"], if_not_exists=True)
    op.create_index(
        "idx_posts_created_at",
        "posts",
        [sa.text("created_at DESC")],
        if_not_exists=True,
    )

    op.create_table(
        "vocabulary",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("en_word", sa.String(200), nullable=False),
        sa.Column("ja_word", sa.String(200), nullable=False),
        sa.Column("en_example", sa.Text(), nullable=True),
        sa.Column("ja_example", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="vocabulary_pkey"),
        if_not_exists=True,
    )
    op.create_index("idx_vocabulary_en_word", "vocabulary", ["en_word"], if_not_exists=True)
    op.create_index("idx_vocabulary_ja_word", "vocabulary", ["ja_word"], if_not_exists=True)
    op.create_index(
        "idx_vocabulary_created_at",
        "vocabulary",
        [sa.text("created_at DESC")],
        if_not_exists=True,
    )

    if op.get_bind().dialect.name == "postgresql":
        op.execute("ALTER TABLE users ALTER COLUMN id SET DEFAULT gen_random_uuid()")
        op.execute("ALTER TABLE posts ALTER COLUMN id SET DEFAULT gen_random_uuid()")


def downgrade() -> None:
    op.drop_index("idx_vocabulary_created_at", table_name="vocabulary", if_exists=True)
    op.drop_index("idx_vocabulary_ja_word", table_name="vocabulary", if_exists=True)
    op.drop_index("idx_vocabulary_en_word", table_name="vocabulary", if_exists=True)
    op.drop_table("vocabulary")

    op.drop_index("idx_posts_created_at", table_name="posts", if_exists=True)
    op.drop_index("idx_posts_user_id", table_name="posts", if_exists=True)
    op.drop_table("posts")

    op.drop_index("idx_users_email", table_name="users", if_exists=True)
    op.drop_table("users")
