"""Delete comment use case."""

from pydantic import BaseModel

from commenttree.application.usecase.base import BaseUseCase
from commenttree.domain.service import CommentService
from commenttree.domain.value import CommentId, DeletionMode


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: int
    mode: DeletionMode


class DeleteCommentUseCase(BaseUseCase):
    """Use case for soft or hard deleting a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize delete comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: DeleteCommentRequest) -> None:
        """Execute delete comment flow.

        Raises:
            InvalidIdError: If the ID is not positive
            NotFoundError: If the comment does not exist
            InternalError: If storage fails
        """
        await self.comment_service.delete_comment(
            CommentId(request.comment_id),
            soft=request.mode == DeletionMode.SOFT,
        )
