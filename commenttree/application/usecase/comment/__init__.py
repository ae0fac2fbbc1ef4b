"""Comment use cases."""

from .common import CommentItem
from .create_comment import CreateCommentRequest, CreateCommentUseCase
from .delete_comment import DeleteCommentRequest, DeleteCommentUseCase
from .get_comment_thread import (
    GetCommentThreadRequest,
    GetCommentThreadResponse,
    GetCommentThreadUseCase,
)
from .list_root_comments import (
    ListRootCommentsRequest,
    ListRootCommentsResponse,
    ListRootCommentsUseCase,
)
from .search_comments import (
    SearchCommentsRequest,
    SearchCommentsResponse,
    SearchCommentsUseCase,
)

__all__ = [
    "CommentItem",
    "CreateCommentRequest",
    "CreateCommentUseCase",
    "DeleteCommentRequest",
    "DeleteCommentUseCase",
    "GetCommentThreadRequest",
    "GetCommentThreadResponse",
    "GetCommentThreadUseCase",
    "ListRootCommentsRequest",
    "ListRootCommentsResponse",
    "ListRootCommentsUseCase",
    "SearchCommentsRequest",
    "SearchCommentsResponse",
    "SearchCommentsUseCase",
]
