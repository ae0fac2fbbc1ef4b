"""Application layer DI providers."""

from dishka import Scope, provide

from commenttree.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentUseCase,
    GetCommentThreadUseCase,
    ListRootCommentsUseCase,
    SearchCommentsUseCase,
)
from commenttree.domain.service import CommentService
from commenttree.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider."""

    scope = Scope.REQUEST

    @provide
    def get_create_comment_use_case(
        self, comment_service: CommentService
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(comment_service=comment_service)

    @provide
    def get_list_root_comments_use_case(
        self, comment_service: CommentService
    ) -> ListRootCommentsUseCase:
        """Provide list root comments use case."""
        return ListRootCommentsUseCase(comment_service=comment_service)

    @provide
    def get_get_comment_thread_use_case(
        self, comment_service: CommentService
    ) -> GetCommentThreadUseCase:
        """Provide get comment thread use case."""
        return GetCommentThreadUseCase(comment_service=comment_service)

    @provide
    def get_delete_comment_use_case(
        self, comment_service: CommentService
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(comment_service=comment_service)

    @provide
    def get_search_comments_use_case(
        self, comment_service: CommentService
    ) -> SearchCommentsUseCase:
        """Provide search comments use case."""
        return SearchCommentsUseCase(comment_service=comment_service)
