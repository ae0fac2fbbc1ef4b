"""Comment routes."""

import re

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, Response, status
from pydantic import BaseModel, Field

from commenttree.application.usecase.comment import (
    CommentItem,
    CreateCommentRequest,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentUseCase,
    GetCommentThreadRequest,
    GetCommentThreadResponse,
    GetCommentThreadUseCase,
    ListRootCommentsRequest,
    ListRootCommentsResponse,
    ListRootCommentsUseCase,
    SearchCommentsRequest,
    SearchCommentsResponse,
    SearchCommentsUseCase,
)
from commenttree.domain.value import DeletionMode

router = APIRouter(prefix="/comments", tags=["comments"], route_class=DishkaRoute)


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment."""

    content: str = Field(min_length=1, max_length=10000)
    author: str = Field(default="", max_length=255)
    parent_id: int | None = None  # Parent comment ID for replies


_COMMENT_ID = re.compile(r"[+-]?[0-9]+")


def _parse_comment_id(raw: str) -> int:
    """Parse a path comment ID of ASCII digits with an optional sign.

    ``int()`` alone would also accept underscores, surrounding whitespace
    and non-ASCII digits.
    """
    if not _COMMENT_ID.fullmatch(raw):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="failed to read comment ID",
        )
    return int(raw)


@router.post(
    "",
    response_model=CommentItem,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    request: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
) -> CommentItem:
    """Create a root comment or reply to another comment.

    Args:
        request: Comment creation data
        create_comment_use_case: Create comment use case from DI

    Returns:
        Created comment
    """
    return await create_comment_use_case.execute(
        CreateCommentRequest(
            content=request.content,
            author=request.author,
            parent_id=request.parent_id,
        )
    )


@router.get("", response_model=ListRootCommentsResponse)
async def list_root_comments(
    list_root_comments_use_case: FromDishka[ListRootCommentsUseCase],
    page: int = 0,
    limit: int = 0,
    sort: str = "",
    order: str = "",
) -> ListRootCommentsResponse:
    """List root comments, one page at a time.

    Missing or unusable parameters fall back to page 1, 30 per page,
    oldest first.
    """
    request = ListRootCommentsRequest(page=page, limit=limit, sort=sort, order=order)
    return await list_root_comments_use_case.execute(request)


# Registered before /{comment_id} so "search" is not read as an ID
@router.get("/search", response_model=SearchCommentsResponse)
async def search_comments(
    search_comments_use_case: FromDishka[SearchCommentsUseCase],
    q: str = "",
) -> SearchCommentsResponse:
    """Full-text search over comment content.

    Args:
        search_comments_use_case: Search use case from DI
        q: Search query, web search syntax

    Returns:
        Matching comments, best match first

    Raises:
        HTTPException: If the query is empty
    """
    if not q:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="empty search query",
        )
    return await search_comments_use_case.execute(SearchCommentsRequest(query=q))


@router.get("/{comment_id}", response_model=GetCommentThreadResponse)
async def get_comment_thread(
    comment_id: str,
    get_comment_thread_use_case: FromDishka[GetCommentThreadUseCase],
) -> GetCommentThreadResponse:
    """Get a comment with all of its replies nested under it."""
    request = GetCommentThreadRequest(comment_id=_parse_comment_id(comment_id))
    return await get_comment_thread_use_case.execute(request)


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(
    comment_id: str,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    mode: str = "",
) -> Response:
    """Delete a comment.

    ``mode=soft`` masks the comment and keeps its replies; ``mode=hard``
    removes it together with every reply below it.

    Raises:
        HTTPException: If the ID or mode is invalid
    """
    parsed_id = _parse_comment_id(comment_id)
    try:
        deletion_mode = DeletionMode(mode)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="invalid deletion mode specified",
        )

    await delete_comment_use_case.execute(
        DeleteCommentRequest(comment_id=parsed_id, mode=deletion_mode)
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
