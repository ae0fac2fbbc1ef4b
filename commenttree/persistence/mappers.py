"""Mappers for converting between database rows and domain models.

Domain models are immutable Pydantic models, so rows are mapped by hand
instead of through SQLAlchemy's ORM mapping.
"""

from typing import Any, Dict

from commenttree.domain.model import Comment, NewComment
from commenttree.domain.value import CommentId


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    parent_id = row.get("parent_id")
    return Comment(
        id=CommentId(row["id"]),
        parent_id=CommentId(parent_id) if parent_id is not None else None,
        text=row["content"],
        author=row.get("author") or "",
        created_at=row["created_at"],
        deleted_at=row.get("deleted_at"),
    )


def new_comment_to_dict(new_comment: NewComment) -> Dict[str, Any]:
    """Convert NewComment domain model to database insert values.

    Args:
        new_comment: Comment creation data

    Returns:
        Dict suitable for database insertion
    """
    return {
        "parent_id": new_comment.parent_id,
        "content": new_comment.text,
        "author": new_comment.author,
    }
