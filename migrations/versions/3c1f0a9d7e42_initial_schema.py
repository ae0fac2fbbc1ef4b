"""initial_schema

Create the comment tree schema:
- Comments (self-referencing, unlimited depth, soft deletion)
- Generated tsvector column with GIN index for full-text search

Revision ID: 3c1f0a9d7e42
Revises:
Create Date: 2026-10-18 10:12:45.318204

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f0a9d7e42"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # ========================================================================
    # COMMENTS table
    # ========================================================================
    op.create_table(
        "comments",
        sa.Column("id", sa.Integer(), sa.Identity(), nullable=False),
        sa.Column("parent_id", sa.Integer(), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column("deleted_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("author", sa.String(255), nullable=False, server_default=""),
        sa.Column(
            "content_tsv",
            postgresql.TSVECTOR(),
            # Same configuration as SEARCH_CONFIG in commenttree/persistence/tables.py
            sa.Computed("to_tsvector('simple', content)", persisted=True),
            nullable=True,
        ),
        # Hard deletes cascade to every reply below the removed comment
        sa.ForeignKeyConstraint(["parent_id"], ["comments.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_comments_parent_id", "comments", ["parent_id"])
    op.create_index("idx_comments_created_at", "comments", ["created_at"])
    op.create_index("idx_comments_deleted_at", "comments", ["deleted_at"])
    op.create_index(
        "idx_comments_content_tsv",
        "comments",
        ["content_tsv"],
        postgresql_using="gin",
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_comments_content_tsv", table_name="comments")
    op.drop_index("idx_comments_deleted_at", table_name="comments")
    op.drop_index("idx_comments_created_at", table_name="comments")
    op.drop_index("idx_comments_parent_id", table_name="comments")
    op.drop_table("comments")
