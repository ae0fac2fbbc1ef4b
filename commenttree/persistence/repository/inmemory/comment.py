"""In-memory comment repository for testing."""

from datetime import datetime
from typing import Optional

from commenttree.domain.model.comment import Comment, NewComment
from commenttree.domain.repository.comment import CommentRepository
from commenttree.domain.value import CommentId, SortDirection, SortField

_SORT_KEYS = {
    SortField.AUTHOR: lambda c: c.author,
    SortField.CONTENT: lambda c: c.text,
    SortField.CREATED: lambda c: c.created_at,
}


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing.

    Mirrors the PostgreSQL repository's ordering so tests can rely on it.
    """

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}
        self._next_id = 1

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def create(self, new_comment: NewComment) -> Comment:
        """Insert a comment with the next free ID."""
        comment = Comment(
            id=CommentId(self._next_id),
            parent_id=new_comment.parent_id,
            text=new_comment.text,
            author=new_comment.author,
            created_at=datetime.now(),
        )
        self._next_id += 1
        self._comments[comment.id] = comment
        return comment

    async def save(self, comment: Comment) -> Comment:
        """Store a fully built comment as-is (test setup helper)."""
        self._comments[comment.id] = comment
        self._next_id = max(self._next_id, comment.id + 1)
        return comment

    async def find_roots(
        self,
        limit: int,
        offset: int,
        sort: SortField = SortField.CREATED,
        direction: SortDirection = SortDirection.ASC,
    ) -> list[Comment]:
        """Find one page of root comments."""
        roots = [c for c in self._comments.values() if c.parent_id is None]

        key = _SORT_KEYS[sort]
        roots.sort(
            key=lambda c: (key(c), c.id),
            reverse=direction == SortDirection.DESC,
        )

        # Paginate
        return roots[offset : offset + limit]

    async def find_subtree(self, comment_id: CommentId) -> list[Comment]:
        """Find a comment and its live descendants."""
        root = self._comments.get(comment_id)
        if root is None:
            return []

        found = [root]
        frontier = [root.id]
        while frontier:
            children = [
                c
                for c in self._comments.values()
                if c.parent_id in frontier and c.deleted_at is None
            ]
            found.extend(children)
            frontier = [c.id for c in children]

        # Parent ascending, newest first among siblings (root first)
        found.sort(key=lambda c: -c.created_at.timestamp())
        found.sort(key=lambda c: (c.id != comment_id, c.parent_id or 0))
        return found

    async def delete_subtree(self, comment_id: CommentId) -> None:
        """Delete a comment and all descendants."""
        doomed = {comment_id}
        frontier = {comment_id}
        while frontier:
            frontier = {
                c.id for c in self._comments.values() if c.parent_id in frontier
            }
            doomed |= frontier

        for doomed_id in doomed:
            self._comments.pop(doomed_id, None)

    async def soft_delete(self, comment_id: CommentId) -> None:
        """Mark one comment as deleted."""
        comment = self._comments.get(comment_id)
        if comment and comment.deleted_at is None:
            # Create updated comment (since comments are immutable)
            self._comments[comment_id] = comment.model_copy(
                update={"deleted_at": datetime.now()}
            )

    async def search(self, query: str) -> list[Comment]:
        """Match comments containing every query term, ranked by hits."""
        terms = [term.lower() for term in query.split()]
        if not terms:
            return []

        hits: list[tuple[int, Comment]] = []
        for comment in self._comments.values():
            if comment.deleted_at is not None:
                continue
            text = comment.text.lower()
            if all(term in text for term in terms):
                hits.append((sum(text.count(term) for term in terms), comment))

        # Rank descending, newest first on ties
        hits.sort(key=lambda hit: (hit[0], hit[1].created_at), reverse=True)
        return [comment for _, comment in hits]
