"""Get comment thread use case."""

from pydantic import BaseModel

from commenttree.application.usecase.base import BaseUseCase
from commenttree.domain.service import CommentService, count_nodes
from commenttree.domain.value import CommentId

from .common import CommentItem


class GetCommentThreadRequest(BaseModel):
    """Get comment thread request."""

    comment_id: int


class GetCommentThreadResponse(BaseModel):
    """Get comment thread response.

    ``comments`` holds exactly one item: the requested comment with its
    replies nested under it.
    """

    comments: list[CommentItem]
    total: int


class GetCommentThreadUseCase(BaseUseCase):
    """Use case for getting a comment together with its whole reply tree."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize get comment thread use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: GetCommentThreadRequest) -> GetCommentThreadResponse:
        """Execute get comment thread flow.

        Args:
            request: Request with the thread root ID

        Returns:
            The thread and the number of comments in it

        Raises:
            InvalidIdError: If the ID is not positive
            ParentNotFoundError: If the comment does not exist
            ThreadTooDeepError: If replies nest too deeply to render
            InternalError: If storage fails
        """
        nodes = await self.comment_service.get_comment_with_children(
            CommentId(request.comment_id)
        )
        return GetCommentThreadResponse(
            comments=[CommentItem.from_domain(node) for node in nodes],
            total=count_nodes(nodes),
        )
