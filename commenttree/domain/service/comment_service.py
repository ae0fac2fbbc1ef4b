"""Comment domain service."""

from contextlib import contextmanager
from typing import Any, Iterator

import logfire

from commenttree.config import CommentSettings
from commenttree.domain.error import (
    InternalError,
    InvalidIdError,
    NotFoundError,
    ParentDeletedError,
    ParentNotFoundError,
    ThreadTooDeepError,
)
from commenttree.domain.model import Comment, NewComment, RootListingRequest
from commenttree.domain.repository import CommentRepository
from commenttree.domain.value import CommentId

from .base import Service
from .comment_tree import (
    CommentNode,
    build_tree,
    flatten_for_search,
    to_node,
    tree_depth,
)
from .listing import normalize_root_request


@contextmanager
def _storage_call(failure_message: str, **attributes: Any) -> Iterator[None]:
    """Translate storage failures into InternalError.

    The failure is logged with its cause before translation. Only
    ``Exception`` is caught, so cancellation passes through untouched.
    """
    try:
        yield
    except Exception as e:
        logfire.error(
            failure_message,
            error=str(e),
            error_type=type(e).__name__,
            **attributes,
        )
        raise InternalError() from e


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        comment_settings: CommentSettings | None = None,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            comment_settings: Listing and presentation settings
        """
        self.comment_repository = comment_repository
        self.settings = comment_settings or CommentSettings()

    async def create_comment(self, new_comment: NewComment) -> CommentNode:
        """Create a root comment or a reply to another comment.

        Args:
            new_comment: Parent reference, text and author

        Returns:
            Presentation node of the created comment

        Raises:
            ParentNotFoundError: If the parent comment does not exist
            ParentDeletedError: If the parent comment has been deleted
            InternalError: If storage fails
        """
        parent_id = new_comment.parent_id
        with logfire.span(
            "comment_service.create_comment",
            parent_id=parent_id,
            author=new_comment.author,
        ):
            # Replies are only allowed under an existing, live comment
            if parent_id is not None:
                with _storage_call(
                    "Failed to check parent before creating comment",
                    parent_id=parent_id,
                ):
                    parent = await self.comment_repository.find_by_id(parent_id)
                if parent is None:
                    logfire.warn("Parent comment not found", parent_id=parent_id)
                    raise ParentNotFoundError(parent_id)
                if parent.is_deleted:
                    logfire.warn("Parent comment is deleted", parent_id=parent_id)
                    raise ParentDeletedError(parent_id)

            with _storage_call("Failed to create comment", parent_id=parent_id):
                saved = await self.comment_repository.create(new_comment)

            logfire.info("Comment created", comment_id=saved.id, parent_id=parent_id)
            return to_node(saved, self.settings.deleted_placeholder)

    async def list_root_comments(self, request: RootListingRequest) -> list[CommentNode]:
        """Get one page of root comments.

        Pagination and sorting apply to roots only; replies are not fetched
        (use get_comment_with_children for a thread).

        Args:
            request: Raw listing parameters (normalized in place)

        Returns:
            Root comment nodes in storage order

        Raises:
            InternalError: If storage fails
        """
        normalize_root_request(
            request,
            default_limit=self.settings.default_page_size,
            max_limit=self.settings.max_page_size,
        )
        with logfire.span(
            "comment_service.list_root_comments",
            page=request.page,
            limit=request.limit,
            sort=request.sort.value,
            order=request.order.value,
        ):
            with _storage_call("Failed to fetch root comments"):
                comments = await self.comment_repository.find_roots(
                    limit=request.limit,
                    offset=request.offset,
                    sort=request.sort,
                    direction=request.order,
                )

            logfire.info("Root comments retrieved", count=len(comments))
            return build_tree(comments, placeholder=self.settings.deleted_placeholder)

    async def get_comment_with_children(self, comment_id: CommentId) -> list[CommentNode]:
        """Get a comment with its whole reply tree.

        Args:
            comment_id: ID of the thread root

        Returns:
            Single-element list holding the comment with nested children

        Raises:
            InvalidIdError: If the ID is not positive
            ParentNotFoundError: If the comment does not exist
            ThreadTooDeepError: If replies nest deeper than max_thread_depth
            InternalError: If storage fails or returns an inconsistent subtree
        """
        if comment_id <= 0:
            raise InvalidIdError(comment_id)

        with logfire.span(
            "comment_service.get_comment_with_children", comment_id=comment_id
        ):
            await self._require_comment(
                comment_id,
                not_found=ParentNotFoundError(comment_id),
                failure_message="Failed to check comment before fetching children",
            )

            with _storage_call(
                "Failed to fetch comment subtree", comment_id=comment_id
            ):
                comments = await self.comment_repository.find_subtree(comment_id)

            tree = build_tree(
                comments,
                root_id=comment_id,
                placeholder=self.settings.deleted_placeholder,
            )
            if not tree:
                # Lookup succeeded, so the subtree must contain the root
                logfire.error(
                    "Subtree fetch omitted its root",
                    comment_id=comment_id,
                    count=len(comments),
                )
                raise InternalError()

            depth = tree_depth(tree)
            if depth > self.settings.max_thread_depth:
                logfire.warn(
                    "Comment thread too deep",
                    comment_id=comment_id,
                    depth=depth,
                    max_depth=self.settings.max_thread_depth,
                )
                raise ThreadTooDeepError(
                    comment_id, depth, self.settings.max_thread_depth
                )

            logfire.info(
                "Comment thread retrieved", comment_id=comment_id, count=len(comments)
            )
            return tree

    async def delete_comment(self, comment_id: CommentId, soft: bool) -> None:
        """Delete a comment.

        Soft delete marks only this comment; its replies stay visible under
        a masked parent. Hard delete removes the comment and every
        descendant and cannot be undone.

        Args:
            comment_id: Comment ID
            soft: Soft delete if True, hard delete otherwise

        Raises:
            InvalidIdError: If the ID is not positive
            NotFoundError: If the comment does not exist
            InternalError: If storage fails
        """
        if comment_id <= 0:
            raise InvalidIdError(comment_id)

        with logfire.span(
            "comment_service.delete_comment", comment_id=comment_id, soft=soft
        ):
            await self._require_comment(
                comment_id,
                not_found=NotFoundError("Comment", str(comment_id)),
                failure_message="Failed to check comment before deleting",
            )

            if soft:
                with _storage_call(
                    "Failed to mark comment as deleted", comment_id=comment_id
                ):
                    await self.comment_repository.soft_delete(comment_id)
                logfire.info("Comment soft-deleted", comment_id=comment_id)
            else:
                with _storage_call("Failed to delete comment", comment_id=comment_id):
                    await self.comment_repository.delete_subtree(comment_id)
                logfire.info("Comment subtree deleted", comment_id=comment_id)

    async def search_comments(self, query: str) -> list[CommentNode]:
        """Full-text search over comment content.

        An empty query means no search was performed and yields no results
        rather than an error.

        Args:
            query: Search query text

        Returns:
            Flat list of matching comment nodes, best match first

        Raises:
            InternalError: If storage fails
        """
        if not query or not query.strip():
            return []

        with logfire.span("comment_service.search_comments", query=query):
            with _storage_call("Failed to run search query", query=query):
                comments = await self.comment_repository.search(query)

            logfire.info("Search completed", query=query, count=len(comments))
            return flatten_for_search(comments, self.settings.deleted_placeholder)

    async def _require_comment(
        self,
        comment_id: CommentId,
        not_found: Exception,
        failure_message: str,
    ) -> Comment:
        """Look up a comment that must exist.

        Args:
            comment_id: Comment ID
            not_found: Error raised when the comment is missing
            failure_message: Log message used when storage fails

        Returns:
            The comment

        Raises:
            InternalError: If storage fails
        """
        with _storage_call(failure_message, comment_id=comment_id):
            comment = await self.comment_repository.find_by_id(comment_id)
        if comment is None:
            logfire.warn("Comment not found", comment_id=comment_id)
            raise not_found
        return comment
