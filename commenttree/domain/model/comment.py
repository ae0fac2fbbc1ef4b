"""Comment entity.

Comments form a forest: a comment without a parent is a root, every other
comment hangs off the comment it replies to. Storage keeps the tree as a
plain parent reference per row; nesting is rebuilt on read.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from commenttree.domain.model.common import DomainModel
from commenttree.domain.value import CommentId


class Comment(DomainModel):
    """Comment record as stored.

    Threading is managed through:
    - parent_id: Direct parent comment (None for roots)
    - deleted_at: Soft-delete marker (None while the comment is live)

    Once created, parent_id and created_at never change.
    """

    id: CommentId = Field(gt=0)
    parent_id: Optional[CommentId] = None
    text: str
    author: str = ""
    created_at: datetime = Field(default_factory=datetime.now)
    deleted_at: Optional[datetime] = None

    @property
    def is_deleted(self) -> bool:
        """Whether the comment has been soft-deleted."""
        return self.deleted_at is not None


class NewComment(DomainModel):
    """Data needed to insert a comment.

    Identifier and creation time are assigned by storage.
    """

    parent_id: Optional[CommentId] = None
    text: str
    author: str = ""
