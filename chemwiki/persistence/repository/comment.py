"""PostgreSQL implementation of Comment repository."""

from typing import Collection, List, Optional

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from chemwiki.domain.error import StaleRecordError
from chemwiki.domain.model import Comment
from chemwiki.domain.repository import CommentRepository
from chemwiki.domain.value import ArticleId, CommentId, CommentStatus
from chemwiki.persistence.mappers import comment_to_dict, row_to_comment
from chemwiki.persistence.tables import comments_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def create(self, comment: Comment) -> Comment:
        """Insert a new comment."""
        stmt = (
            comments_table.insert()
            .values(**comment_to_dict(comment))
            .returning(comments_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_comment(row._asdict()) if row else comment

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_by_article(
        self,
        article_id: ArticleId,
        statuses: Optional[Collection[CommentStatus]] = None,
    ) -> List[Comment]:
        """Find all comments of an article, oldest first."""
        stmt = select(comments_table).where(comments_table.c.article_id == article_id)

        if statuses is not None:
            stmt = stmt.where(
                comments_table.c.status.in_([status.value for status in statuses])
            )

        stmt = stmt.order_by(comments_table.c.created_at, comments_table.c.id)

        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_children(self, parent_id: CommentId) -> List[Comment]:
        """Find direct replies to a comment, in every status."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.parent_id == parent_id)
            .order_by(comments_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_all(
        self,
        status: Optional[CommentStatus] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Comment]:
        """Find comments across all articles, newest first."""
        stmt = select(comments_table)

        if status is not None:
            stmt = stmt.where(comments_table.c.status == status.value)

        stmt = (
            stmt.order_by(desc(comments_table.c.created_at)).limit(limit).offset(offset)
        )

        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def count(self, status: Optional[CommentStatus] = None) -> int:
        """Count comments across all articles."""
        stmt = select(func.count()).select_from(comments_table)
        if status is not None:
            stmt = stmt.where(comments_table.c.status == status.value)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def count_by_article(
        self,
        article_id: ArticleId,
        statuses: Collection[CommentStatus],
    ) -> int:
        """Count an article's comments in the given statuses."""
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(comments_table.c.article_id == article_id)
            .where(comments_table.c.status.in_([status.value for status in statuses]))
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def save(self, comment: Comment) -> Comment:
        """Conditionally update a comment on its version.

        A single ``UPDATE ... WHERE id = :id AND version = :version`` does the
        check and the write, so two concurrent writers cannot both succeed.
        """
        values = comment_to_dict(comment)
        values.pop("id")
        values.pop("created_at")
        values["version"] = comment.version + 1

        stmt = (
            comments_table.update()
            .where(comments_table.c.id == comment.id)
            .where(comments_table.c.version == comment.version)
            .values(**values)
            .returning(comments_table)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()

        if row is None:
            # Missing, or updated by someone else since it was read
            raise StaleRecordError("Comment", str(comment.id), comment.version)

        await self.session.flush()
        return row_to_comment(row._asdict())

    async def delete(self, comment_id: CommentId) -> bool:
        """Hard delete a single comment."""
        stmt = (
            comments_table.delete()
            .where(comments_table.c.id == comment_id)
            .returning(comments_table.c.id)
        )
        result = await self.session.execute(stmt)
        deleted = result.fetchone() is not None
        await self.session.flush()
        return deleted
