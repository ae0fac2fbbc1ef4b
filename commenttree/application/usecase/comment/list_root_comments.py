"""List root comments use case."""

from pydantic import BaseModel

from commenttree.application.usecase.base import BaseUseCase
from commenttree.domain.model import RootListingRequest
from commenttree.domain.service import CommentService

from .common import CommentItem


class ListRootCommentsRequest(BaseModel):
    """List root comments request.

    Values are taken as sent; anything unusable falls back to a default.
    """

    page: int = 0
    limit: int = 0
    sort: str = ""
    order: str = ""


class ListRootCommentsResponse(BaseModel):
    """List root comments response.

    Echoes the pagination and sorting actually applied.
    """

    comments: list[CommentItem]
    page: int
    limit: int
    sort: str
    order: str


class ListRootCommentsUseCase(BaseUseCase):
    """Use case for listing one page of root comments."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize list root comments use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: ListRootCommentsRequest) -> ListRootCommentsResponse:
        """Execute list root comments flow.

        Args:
            request: Raw pagination and sorting parameters

        Returns:
            Root comments with the normalized parameters
        """
        listing = RootListingRequest(
            page=request.page,
            limit=request.limit,
            sort=request.sort,
            order=request.order,
        )
        nodes = await self.comment_service.list_root_comments(listing)

        return ListRootCommentsResponse(
            comments=[CommentItem.from_domain(node) for node in nodes],
            page=listing.page,
            limit=listing.limit,
            sort=listing.sort.value,
            order=listing.order.value,
        )
