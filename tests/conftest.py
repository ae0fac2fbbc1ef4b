"""Test configuration and fixtures."""

from datetime import datetime, timedelta

import logfire

from commenttree.domain.model import Comment
from commenttree.domain.value import CommentId

# Keep telemetry local and quiet; must run before the app module is imported
logfire.configure(send_to_logfire=False, console=False)

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0)


def make_comment(
    comment_id: int,
    parent_id: int | None = None,
    text: str | None = None,
    author: str = "",
    minutes: int = 0,
    deleted: bool = False,
) -> Comment:
    """Helper to build stored comments with predictable timestamps.

    Args:
        comment_id: Comment ID
        parent_id: Parent comment ID (None for roots)
        text: Comment text (defaults to "comment <id>")
        author: Author name
        minutes: Creation time offset from BASE_TIME
        deleted: Whether the comment is soft-deleted

    Returns:
        Comment domain model
    """
    created_at = BASE_TIME + timedelta(minutes=minutes)
    return Comment(
        id=CommentId(comment_id),
        parent_id=CommentId(parent_id) if parent_id is not None else None,
        text=text if text is not None else f"comment {comment_id}",
        author=author,
        created_at=created_at,
        deleted_at=created_at + timedelta(hours=1) if deleted else None,
    )
