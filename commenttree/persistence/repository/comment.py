"""PostgreSQL implementation of Comment repository."""

from typing import List, Optional

import logfire
from sqlalchemy import cast, delete, func, select, update
from sqlalchemy.dialects.postgresql import REGCONFIG
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import ColumnElement

from commenttree.domain.model import Comment, NewComment
from commenttree.domain.repository import CommentRepository
from commenttree.domain.value import CommentId, SortDirection, SortField
from commenttree.persistence.mappers import new_comment_to_dict, row_to_comment
from commenttree.persistence.tables import SEARCH_CONFIG, comments_table


def _comment_columns(table) -> list[ColumnElement]:
    """Columns needed to build a Comment (the search vector is left out)."""
    return [
        table.c.id,
        table.c.parent_id,
        table.c.content,
        table.c.created_at,
        table.c.deleted_at,
        table.c.author,
    ]


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(*_comment_columns(comments_table)).where(
            comments_table.c.id == comment_id
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def create(self, new_comment: NewComment) -> Comment:
        """Insert a comment, letting the database assign id and created_at."""
        stmt = (
            comments_table.insert()
            .values(**new_comment_to_dict(new_comment))
            .returning(*_comment_columns(comments_table))
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_comment(row._asdict())

    async def find_roots(
        self,
        limit: int,
        offset: int,
        sort: SortField = SortField.CREATED,
        direction: SortDirection = SortDirection.ASC,
    ) -> List[Comment]:
        """Find one page of root comments."""
        with logfire.span(
            "comment_repository.find_roots",
            limit=limit,
            offset=offset,
            sort=sort.value,
            direction=direction.value,
        ):
            sort_column = comments_table.c[sort.value]
            if direction == SortDirection.DESC:
                ordering = [sort_column.desc(), comments_table.c.id.desc()]
            else:
                ordering = [sort_column.asc(), comments_table.c.id.asc()]

            stmt = (
                select(*_comment_columns(comments_table))
                .where(comments_table.c.parent_id.is_(None))
                .order_by(*ordering)
                .limit(limit)
                .offset(offset)
            )

            result = await self.session.execute(stmt)
            return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_subtree(self, comment_id: CommentId) -> List[Comment]:
        """Find a comment and its live descendants with a recursive CTE."""
        with logfire.span("comment_repository.find_subtree", comment_id=comment_id):
            tree = (
                select(*_comment_columns(comments_table))
                .where(comments_table.c.id == comment_id)
                .cte("comment_tree", recursive=True)
            )
            child = comments_table.alias("child")
            tree = tree.union_all(
                select(*_comment_columns(child))
                .join(tree, child.c.parent_id == tree.c.id)
                # Deleted replies and everything under them are not walked
                .where(child.c.deleted_at.is_(None))
            )

            stmt = select(tree).order_by(
                tree.c.parent_id.asc().nulls_first(), tree.c.created_at.desc()
            )

            result = await self.session.execute(stmt)
            comments = [row_to_comment(row._asdict()) for row in result.fetchall()]
            logfire.info("Subtree fetched", comment_id=comment_id, count=len(comments))
            return comments

    async def delete_subtree(self, comment_id: CommentId) -> None:
        """Delete a comment and all descendants, deleted ones included."""
        with logfire.span("comment_repository.delete_subtree", comment_id=comment_id):
            tree = (
                select(comments_table.c.id)
                .where(comments_table.c.id == comment_id)
                .cte("doomed", recursive=True)
            )
            child = comments_table.alias("child")
            tree = tree.union_all(
                select(child.c.id).join(tree, child.c.parent_id == tree.c.id)
            )

            stmt = delete(comments_table).where(
                comments_table.c.id.in_(select(tree.c.id))
            )
            result = await self.session.execute(stmt)
            await self.session.flush()
            logfire.info(
                "Subtree deleted", comment_id=comment_id, rows=result.rowcount
            )

    async def soft_delete(self, comment_id: CommentId) -> None:
        """Mark one comment as deleted, keeping the first deletion time."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .where(comments_table.c.deleted_at.is_(None))
            .values(deleted_at=func.now())
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def search(self, query: str) -> List[Comment]:
        """Ranked full-text search over live comments."""
        with logfire.span("comment_repository.search", query=query):
            ts_query = func.websearch_to_tsquery(
                cast(SEARCH_CONFIG, REGCONFIG), query
            )
            rank = func.ts_rank(comments_table.c.content_tsv, ts_query).label("rank")

            stmt = (
                select(*_comment_columns(comments_table), rank)
                .where(comments_table.c.deleted_at.is_(None))
                .where(comments_table.c.content_tsv.op("@@")(ts_query))
                .order_by(rank.desc(), comments_table.c.created_at.desc())
            )

            result = await self.session.execute(stmt)
            return [row_to_comment(row._asdict()) for row in result.fetchall()]
