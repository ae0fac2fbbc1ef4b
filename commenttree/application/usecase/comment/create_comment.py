"""Create comment use case."""

from pydantic import BaseModel

from commenttree.application.usecase.base import BaseUseCase
from commenttree.domain.model import NewComment
from commenttree.domain.service import CommentService
from commenttree.domain.value import CommentId

from .common import CommentItem


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    content: str
    author: str = ""
    parent_id: int | None = None  # Parent comment ID for replies


class CreateCommentUseCase(BaseUseCase):
    """Use case for creating a root comment or replying to another comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: CreateCommentRequest) -> CommentItem:
        """Execute create comment flow.

        Args:
            request: Create comment request

        Returns:
            The created comment

        Raises:
            ParentNotFoundError: If the parent comment does not exist
            ParentDeletedError: If the parent comment is deleted
            InternalError: If storage fails
        """
        node = await self.comment_service.create_comment(
            NewComment(
                parent_id=(
                    CommentId(request.parent_id)
                    if request.parent_id is not None
                    else None
                ),
                text=request.content,
                author=request.author,
            )
        )
        return CommentItem.from_domain(node)
