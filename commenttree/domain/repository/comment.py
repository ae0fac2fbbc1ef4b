"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from commenttree.domain.model.comment import Comment, NewComment
from commenttree.domain.value import CommentId, SortDirection, SortField


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the persistence layer.

    A missing comment is reported by ``find_by_id`` returning None. Any
    exception raised by an implementation is an infrastructure failure.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID, deleted or not.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def create(self, new_comment: NewComment) -> Comment:
        """Insert a comment under an optional parent.

        Storage assigns the identifier and creation timestamp.

        Args:
            new_comment: Parent reference, text and author

        Returns:
            The stored comment
        """
        pass

    @abstractmethod
    async def find_roots(
        self,
        limit: int,
        offset: int,
        sort: SortField = SortField.CREATED,
        direction: SortDirection = SortDirection.ASC,
    ) -> List[Comment]:
        """Find one page of root comments (comments without a parent).

        Soft-deleted roots are included; they are masked on presentation.

        Args:
            limit: Maximum number of comments to return
            offset: Number of comments to skip
            sort: Column to sort by
            direction: Sort direction

        Returns:
            List of root comments
        """
        pass

    @abstractmethod
    async def find_subtree(self, comment_id: CommentId) -> List[Comment]:
        """Find a comment together with all of its live descendants.

        Soft-deleted descendants, and everything below them, are skipped.
        The comment itself is returned even when deleted.

        Args:
            comment_id: ID of the subtree root

        Returns:
            Flat list of comments, ordered by parent then creation time
        """
        pass

    @abstractmethod
    async def delete_subtree(self, comment_id: CommentId) -> None:
        """Delete a comment and every descendant (hard delete).

        Args:
            comment_id: ID of the subtree root
        """
        pass

    @abstractmethod
    async def soft_delete(self, comment_id: CommentId) -> None:
        """Mark a single comment as deleted.

        Descendants are left untouched.

        Args:
            comment_id: The comment ID to mark
        """
        pass

    @abstractmethod
    async def search(self, query: str) -> List[Comment]:
        """Run a ranked full-text search over live comment content.

        Args:
            query: Search query text

        Returns:
            Matching comments, best match first
        """
        pass
