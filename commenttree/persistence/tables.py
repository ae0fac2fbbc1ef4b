"""SQLAlchemy table definitions for the comment tree.

These table definitions are used for SQLAlchemy Core queries.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Column,
    Computed,
    ForeignKey,
    Identity,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, TSVECTOR

# Metadata object for all tables
metadata = MetaData()

# Text search configuration of content_tsv; queries must be parsed with the
# same one or stemmed terms never match
SEARCH_CONFIG = "simple"

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", Integer, Identity(), primary_key=True),
    Column(
        "parent_id",
        Integer,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=True,
    ),
    Column("content", Text, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
    Column("author", String(255), nullable=False, server_default=""),
    # Maintained by PostgreSQL, never written by the application
    Column(
        "content_tsv",
        TSVECTOR,
        Computed(f"to_tsvector('{SEARCH_CONFIG}', content)", persisted=True),
    ),
)

Index("idx_comments_parent_id", comments_table.c.parent_id)
Index("idx_comments_created_at", comments_table.c.created_at)
Index("idx_comments_deleted_at", comments_table.c.deleted_at)
Index(
    "idx_comments_content_tsv",
    comments_table.c.content_tsv,
    postgresql_using="gin",
)
