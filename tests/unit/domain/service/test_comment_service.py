"""Unit tests for CommentService."""

import asyncio
from unittest.mock import AsyncMock, patch

import pytest

from commenttree.config import CommentSettings
from commenttree.domain.error import (
    InternalError,
    InvalidIdError,
    NotFoundError,
    ParentDeletedError,
    ParentNotFoundError,
    ThreadTooDeepError,
)
from commenttree.domain.model import NewComment, RootListingRequest
from commenttree.domain.repository import CommentRepository
from commenttree.domain.service import DELETED_PLACEHOLDER, CommentService
from commenttree.domain.value import CommentId, SortDirection, SortField
from commenttree.persistence.repository.inmemory import InMemoryCommentRepository
from tests.conftest import make_comment
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


def _failing_repository(**failures) -> AsyncMock:
    """Repository double whose named methods raise the given exceptions."""
    repo = AsyncMock(spec=CommentRepository)
    for method, error in failures.items():
        getattr(repo, method).side_effect = error
    return repo


class TestCreateComment:
    """Tests for create_comment method."""

    @pytest.mark.asyncio
    async def test_create_root_comment(self, unit_env):
        """Root comment is stored and returned unmasked."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)

        # Act
        node = await comment_service.create_comment(
            NewComment(text="First!", author="ann")
        )

        # Assert
        assert node.id > 0
        assert node.parent_id is None
        assert node.text == "First!"
        assert node.author == "ann"
        assert node.can_reply is True
        assert node.deleted is False

        saved = await comment_repo.find_by_id(node.id)
        assert saved is not None
        assert saved.text == "First!"

    @pytest.mark.asyncio
    async def test_root_comment_skips_parent_lookup(self):
        """No parent means no lookup."""
        # Arrange
        repo = AsyncMock(spec=CommentRepository)
        repo.create.return_value = make_comment(1, text="hi")
        comment_service = CommentService(comment_repository=repo)

        # Act
        await comment_service.create_comment(NewComment(text="hi"))

        # Assert
        repo.find_by_id.assert_not_called()
        repo.create.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_reply(self, unit_env):
        """Reply to a live comment is stored under it."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        parent = await comment_service.create_comment(NewComment(text="parent"))

        # Act
        reply = await comment_service.create_comment(
            NewComment(parent_id=parent.id, text="reply")
        )

        # Assert
        assert reply.parent_id == parent.id
        assert reply.id != parent.id

    @pytest.mark.asyncio
    async def test_reply_to_missing_parent_raises(self, unit_env):
        """Replying to an unknown comment is rejected."""
        # Arrange
        comment_service = await unit_env.get(CommentService)

        # Act & Assert
        with pytest.raises(ParentNotFoundError):
            await comment_service.create_comment(
                NewComment(parent_id=CommentId(404), text="reply")
            )

    @pytest.mark.asyncio
    async def test_reply_to_deleted_parent_raises(self, unit_env):
        """Replying to a soft-deleted comment is rejected and nothing is stored."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        await comment_repo.save(make_comment(1, deleted=True))

        # Act & Assert
        with pytest.raises(ParentDeletedError):
            await comment_service.create_comment(
                NewComment(parent_id=CommentId(1), text="reply")
            )
        assert await comment_repo.find_roots(limit=10, offset=0) == [
            await comment_repo.find_by_id(CommentId(1))
        ]

    @pytest.mark.asyncio
    async def test_parent_lookup_failure_is_internal_error(self):
        """Storage failure during parent lookup is not reported as not-found."""
        # Arrange
        repo = _failing_repository(find_by_id=ConnectionError("db down"))
        comment_service = CommentService(comment_repository=repo)

        # Act & Assert
        with pytest.raises(InternalError) as exc_info:
            await comment_service.create_comment(
                NewComment(parent_id=CommentId(1), text="reply")
            )
        assert isinstance(exc_info.value.__cause__, ConnectionError)
        repo.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_insert_failure_is_internal_error(self):
        """Storage failure during insert becomes InternalError."""
        # Arrange
        repo = _failing_repository(create=RuntimeError("insert failed"))
        comment_service = CommentService(comment_repository=repo)

        # Act & Assert
        with pytest.raises(InternalError):
            await comment_service.create_comment(NewComment(text="hi"))

    @pytest.mark.asyncio
    async def test_cancellation_is_not_translated(self):
        """Cancellation propagates as-is."""
        # Arrange
        repo = _failing_repository(find_by_id=asyncio.CancelledError())
        comment_service = CommentService(comment_repository=repo)

        # Act & Assert
        with pytest.raises(asyncio.CancelledError):
            await comment_service.create_comment(
                NewComment(parent_id=CommentId(1), text="reply")
            )


class TestListRootComments:
    """Tests for list_root_comments method."""

    @pytest.mark.asyncio
    async def test_returns_only_roots(self, unit_env):
        """Replies are not part of a root listing."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        await comment_repo.save(make_comment(1, minutes=0))
        await comment_repo.save(make_comment(2, minutes=1))
        await comment_repo.save(make_comment(3, parent_id=1, minutes=2))

        # Act
        roots = await comment_service.list_root_comments(RootListingRequest())

        # Assert
        assert [node.id for node in roots] == [1, 2]
        assert all(node.children == [] for node in roots)

    @pytest.mark.asyncio
    async def test_request_is_normalized(self, unit_env):
        """Unusable parameters are replaced by defaults before storage is hit."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        request = RootListingRequest(page=-1, limit=1000, sort="bogus", order="")

        # Act
        await comment_service.list_root_comments(request)

        # Assert
        assert request.page == 1
        assert request.limit == 30
        assert request.sort == SortField.CREATED
        assert request.order == SortDirection.ASC

    @pytest.mark.asyncio
    async def test_passes_pagination_and_sorting_to_storage(self):
        """Storage receives the normalized limit, offset, column and direction."""
        # Arrange
        repo = AsyncMock(spec=CommentRepository)
        repo.find_roots.return_value = []
        comment_service = CommentService(comment_repository=repo)

        # Act
        await comment_service.list_root_comments(
            RootListingRequest(page=3, limit=10, sort="auth", order="desc")
        )

        # Assert
        repo.find_roots.assert_awaited_once_with(
            limit=10,
            offset=20,
            sort=SortField.AUTHOR,
            direction=SortDirection.DESC,
        )

    @pytest.mark.asyncio
    async def test_uses_configured_page_sizes(self):
        """Page size defaults come from comment settings."""
        # Arrange
        repo = AsyncMock(spec=CommentRepository)
        repo.find_roots.return_value = []
        comment_service = CommentService(
            comment_repository=repo,
            comment_settings=CommentSettings(default_page_size=5, max_page_size=20),
        )

        # Act
        await comment_service.list_root_comments(RootListingRequest(page=1, limit=21))

        # Assert
        assert repo.find_roots.await_args.kwargs["limit"] == 5

    @pytest.mark.asyncio
    async def test_deleted_roots_are_masked(self, unit_env):
        """Soft-deleted roots are listed with the placeholder."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        await comment_repo.save(make_comment(1, text="gone", deleted=True))

        # Act
        roots = await comment_service.list_root_comments(RootListingRequest())

        # Assert
        assert roots[0].text == DELETED_PLACEHOLDER
        assert roots[0].can_reply is False

    @pytest.mark.asyncio
    async def test_storage_failure_is_internal_error(self):
        """Storage failure becomes InternalError."""
        repo = _failing_repository(find_roots=OSError("timeout"))
        comment_service = CommentService(comment_repository=repo)

        with pytest.raises(InternalError):
            await comment_service.list_root_comments(RootListingRequest())


class TestGetCommentWithChildren:
    """Tests for get_comment_with_children method."""

    @staticmethod
    async def _chain_repository(length: int) -> InMemoryCommentRepository:
        repo = InMemoryCommentRepository()
        for i in range(1, length + 1):
            await repo.save(
                make_comment(i, parent_id=i - 1 if i > 1 else None, minutes=i)
            )
        return repo

    @pytest.mark.asyncio
    async def test_thread_at_depth_limit_is_returned(self):
        """A chain exactly as deep as the limit is rendered."""
        # Arrange
        repo = await self._chain_repository(5)
        comment_service = CommentService(repo, CommentSettings(max_thread_depth=5))

        # Act
        tree = await comment_service.get_comment_with_children(CommentId(1))

        # Assert
        assert tree[0].id == 1

    @pytest.mark.asyncio
    async def test_thread_beyond_depth_limit_raises(self):
        """One level past the limit is rejected."""
        # Arrange
        repo = await self._chain_repository(6)
        comment_service = CommentService(repo, CommentSettings(max_thread_depth=5))

        # Act & Assert
        with pytest.raises(ThreadTooDeepError) as exc_info:
            await comment_service.get_comment_with_children(CommentId(1))
        assert exc_info.value.depth == 6
        assert exc_info.value.max_depth == 5

        # A reply further down is still within reach
        tree = await comment_service.get_comment_with_children(CommentId(2))
        assert tree[0].id == 2

    @pytest.mark.asyncio
    async def test_thousand_level_chain_raises_domain_error(self):
        """A very deep chain fails with a domain error, not RecursionError."""
        # Arrange
        repo = await self._chain_repository(1000)
        comment_service = CommentService(repo)

        # Act & Assert
        with pytest.raises(ThreadTooDeepError):
            await comment_service.get_comment_with_children(CommentId(1))

    @pytest.mark.asyncio
    @pytest.mark.parametrize("comment_id", [0, -1])
    async def test_invalid_id_rejected_before_storage(self, comment_id):
        """Non-positive IDs never reach storage."""
        # Arrange
        repo = AsyncMock(spec=CommentRepository)
        comment_service = CommentService(comment_repository=repo)

        # Act & Assert
        with pytest.raises(InvalidIdError):
            await comment_service.get_comment_with_children(CommentId(comment_id))
        repo.find_by_id.assert_not_called()
        repo.find_subtree.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_comment_raises(self, unit_env):
        """Unknown comment is reported as not found."""
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(ParentNotFoundError):
            await comment_service.get_comment_with_children(CommentId(7))

    @pytest.mark.asyncio
    async def test_returns_nested_thread(self, unit_env):
        """Thread comes back as a single root with nested replies."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        await comment_repo.save(make_comment(1, minutes=0))
        await comment_repo.save(make_comment(2, parent_id=1, minutes=1))
        await comment_repo.save(make_comment(3, parent_id=1, minutes=2))
        await comment_repo.save(make_comment(4, parent_id=2, minutes=3))
        await comment_repo.save(make_comment(5, minutes=4))  # unrelated root

        # Act
        tree = await comment_service.get_comment_with_children(CommentId(1))

        # Assert
        assert len(tree) == 1
        root = tree[0]
        assert root.id == 1
        # Newest reply first
        assert [child.id for child in root.children] == [3, 2]
        assert [child.id for child in root.children[1].children] == [4]

    @pytest.mark.asyncio
    async def test_thread_of_a_reply(self, unit_env):
        """A reply can be fetched as the root of its own thread."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        await comment_repo.save(make_comment(1))
        await comment_repo.save(make_comment(2, parent_id=1, minutes=1))
        await comment_repo.save(make_comment(3, parent_id=2, minutes=2))

        # Act
        tree = await comment_service.get_comment_with_children(CommentId(2))

        # Assert
        assert [node.id for node in tree] == [2]
        assert tree[0].parent_id == 1
        assert [child.id for child in tree[0].children] == [3]

    @pytest.mark.asyncio
    async def test_deleted_root_is_masked_with_replies_kept(self, unit_env):
        """Soft-deleted thread root keeps its replies."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        await comment_repo.save(make_comment(1, text="secret", deleted=True))
        await comment_repo.save(make_comment(2, parent_id=1, minutes=1))

        # Act
        tree = await comment_service.get_comment_with_children(CommentId(1))

        # Assert
        assert tree[0].text == DELETED_PLACEHOLDER
        assert tree[0].can_reply is False
        assert [child.id for child in tree[0].children] == [2]

    @pytest.mark.asyncio
    async def test_inconsistent_subtree_is_internal_error(self):
        """Subtree without its root after a successful lookup is a server fault."""
        # Arrange
        repo = AsyncMock(spec=CommentRepository)
        repo.find_by_id.return_value = make_comment(1)
        repo.find_subtree.return_value = []
        comment_service = CommentService(comment_repository=repo)

        # Act & Assert
        with pytest.raises(InternalError):
            await comment_service.get_comment_with_children(CommentId(1))

    @pytest.mark.asyncio
    async def test_subtree_failure_is_internal_error(self):
        """Storage failure during subtree fetch becomes InternalError."""
        # Arrange
        repo = _failing_repository(find_subtree=RuntimeError("recursion failed"))
        repo.find_by_id.return_value = make_comment(1)
        comment_service = CommentService(comment_repository=repo)

        # Act & Assert
        with pytest.raises(InternalError):
            await comment_service.get_comment_with_children(CommentId(1))


class TestDeleteComment:
    """Tests for delete_comment method."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("soft", [True, False])
    async def test_invalid_id_rejected_before_storage(self, soft):
        """Non-positive IDs never reach storage."""
        # Arrange
        repo = AsyncMock(spec=CommentRepository)
        comment_service = CommentService(comment_repository=repo)

        # Act & Assert
        with pytest.raises(InvalidIdError):
            await comment_service.delete_comment(CommentId(0), soft=soft)
        assert repo.mock_calls == []

    @pytest.mark.asyncio
    async def test_missing_comment_raises_not_found(self, unit_env):
        """Deleting an unknown comment is a not-found error."""
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(NotFoundError):
            await comment_service.delete_comment(CommentId(3), soft=True)

    @pytest.mark.asyncio
    async def test_soft_delete_masks_only_target(self, unit_env):
        """Soft delete marks the comment; replies stay visible and unmasked."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        await comment_repo.save(make_comment(1))
        await comment_repo.save(make_comment(2, parent_id=1, minutes=1))

        # Act
        await comment_service.delete_comment(CommentId(1), soft=True)

        # Assert
        parent = await comment_repo.find_by_id(CommentId(1))
        reply = await comment_repo.find_by_id(CommentId(2))
        assert parent.is_deleted
        assert not reply.is_deleted

        roots = await comment_service.list_root_comments(RootListingRequest())
        assert roots[0].text == DELETED_PLACEHOLDER

    @pytest.mark.asyncio
    async def test_soft_delete_calls_only_soft_delete(self):
        """Soft mode never touches the hard-delete path."""
        # Arrange
        repo = AsyncMock(spec=CommentRepository)
        repo.find_by_id.return_value = make_comment(1)
        comment_service = CommentService(comment_repository=repo)

        # Act
        await comment_service.delete_comment(CommentId(1), soft=True)

        # Assert
        repo.soft_delete.assert_awaited_once_with(CommentId(1))
        repo.delete_subtree.assert_not_called()

    @pytest.mark.asyncio
    async def test_hard_delete_calls_only_delete_subtree(self):
        """Hard mode never touches the soft-delete path."""
        # Arrange
        repo = AsyncMock(spec=CommentRepository)
        repo.find_by_id.return_value = make_comment(1)
        comment_service = CommentService(comment_repository=repo)

        # Act
        await comment_service.delete_comment(CommentId(1), soft=False)

        # Assert
        repo.delete_subtree.assert_awaited_once_with(CommentId(1))
        repo.soft_delete.assert_not_called()

    @pytest.mark.asyncio
    async def test_hard_delete_removes_descendants(self, unit_env):
        """Hard delete removes the comment and every reply below it."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        await comment_repo.save(make_comment(1))
        await comment_repo.save(make_comment(2, parent_id=1, minutes=1))
        await comment_repo.save(make_comment(3, parent_id=2, minutes=2, deleted=True))
        await comment_repo.save(make_comment(4, minutes=3))

        # Act
        await comment_service.delete_comment(CommentId(1), soft=False)

        # Assert
        for removed in (1, 2, 3):
            assert await comment_repo.find_by_id(CommentId(removed)) is None
        assert await comment_repo.find_by_id(CommentId(4)) is not None

    @pytest.mark.asyncio
    async def test_storage_failure_is_internal_error(self):
        """Storage failure during delete becomes InternalError."""
        # Arrange
        repo = _failing_repository(delete_subtree=RuntimeError("locked"))
        repo.find_by_id.return_value = make_comment(1)
        comment_service = CommentService(comment_repository=repo)

        # Act & Assert
        with pytest.raises(InternalError):
            await comment_service.delete_comment(CommentId(1), soft=False)


class TestSearchComments:
    """Tests for search_comments method."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("query", ["", "   ", "\t\n"])
    async def test_blank_query_skips_storage(self, query):
        """Blank query yields no results without a storage call."""
        # Arrange
        repo = AsyncMock(spec=CommentRepository)
        comment_service = CommentService(comment_repository=repo)

        # Act
        result = await comment_service.search_comments(query)

        # Assert
        assert result == []
        repo.search.assert_not_called()

    @pytest.mark.asyncio
    async def test_results_are_flat(self, unit_env):
        """Matching replies are returned alongside their parents, unnested."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        await comment_repo.save(make_comment(1, text="python tips"))
        await comment_repo.save(make_comment(2, parent_id=1, text="more python"))
        await comment_repo.save(make_comment(3, text="unrelated"))

        # Act
        results = await comment_service.search_comments("python")

        # Assert
        assert sorted(node.id for node in results) == [1, 2]
        assert all(node.children == [] for node in results)

    @pytest.mark.asyncio
    async def test_deleted_comments_not_found(self, unit_env):
        """Soft-deleted comments do not show up in search."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        await comment_repo.save(make_comment(1, text="python", deleted=True))

        # Act
        results = await comment_service.search_comments("python")

        # Assert
        assert results == []

    @pytest.mark.asyncio
    async def test_storage_failure_is_internal_error(self):
        """Storage failure during search becomes InternalError."""
        repo = _failing_repository(search=RuntimeError("bad tsquery"))
        comment_service = CommentService(comment_repository=repo)

        with pytest.raises(InternalError):
            await comment_service.search_comments("python")

    @pytest.mark.asyncio
    async def test_failure_is_logged(self):
        """Storage failures are logged before translation."""
        # Arrange
        repo = _failing_repository(search=RuntimeError("bad tsquery"))
        comment_service = CommentService(comment_repository=repo)

        # Act
        with patch("commenttree.domain.service.comment_service.logfire") as logfire_mock:
            with pytest.raises(InternalError):
                await comment_service.search_comments("python")

        # Assert
        logfire_mock.error.assert_called_once()
        assert logfire_mock.error.call_args.kwargs["error_type"] == "RuntimeError"
