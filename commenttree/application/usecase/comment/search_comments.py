"""Search comments use case."""

from pydantic import BaseModel

from commenttree.application.usecase.base import BaseUseCase
from commenttree.domain.service import CommentService

from .common import CommentItem


class SearchCommentsRequest(BaseModel):
    """Search comments request."""

    query: str


class SearchCommentsResponse(BaseModel):
    """Search comments response.

    Results are flat and ranked, best match first.
    """

    query: str
    comments: list[CommentItem]
    total: int


class SearchCommentsUseCase(BaseUseCase):
    """Use case for full-text search over comment content."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize search comments use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: SearchCommentsRequest) -> SearchCommentsResponse:
        """Execute search flow."""
        nodes = await self.comment_service.search_comments(request.query)
        items = [CommentItem.from_domain(node) for node in nodes]
        return SearchCommentsResponse(
            query=request.query,
            comments=items,
            total=len(items),
        )
