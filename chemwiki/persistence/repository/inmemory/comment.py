"""In-memory comment repository for testing."""

from typing import Collection, Optional

from chemwiki.domain.error import StaleRecordError
from chemwiki.domain.model.comment import Comment
from chemwiki.domain.repository.comment import CommentRepository
from chemwiki.domain.value import ArticleId, CommentId, CommentStatus


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing.

    Honours the same version check as the database implementation, so
    write-conflict handling can be exercised without PostgreSQL.
    """

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}

    async def create(self, comment: Comment) -> Comment:
        """Insert a new comment."""
        self._comments[comment.id] = comment
        return comment

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_by_article(
        self,
        article_id: ArticleId,
        statuses: Optional[Collection[CommentStatus]] = None,
    ) -> list[Comment]:
        """Find all comments of an article, oldest first."""
        comments = [c for c in self._comments.values() if c.article_id == article_id]

        # Filter by status
        if statuses is not None:
            comments = [c for c in comments if c.status in statuses]

        comments.sort(key=lambda c: c.created_at)
        return comments

    async def find_children(self, parent_id: CommentId) -> list[Comment]:
        """Find direct replies to a comment, in every status."""
        comments = [c for c in self._comments.values() if c.parent_id == parent_id]
        comments.sort(key=lambda c: c.created_at)
        return comments

    async def find_all(
        self,
        status: Optional[CommentStatus] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Comment]:
        """Find comments across all articles, newest first."""
        comments = list(self._comments.values())

        if status is not None:
            comments = [c for c in comments if c.status == status]

        comments.sort(key=lambda c: c.created_at, reverse=True)

        # Paginate
        return comments[offset : offset + limit]

    async def count(self, status: Optional[CommentStatus] = None) -> int:
        """Count comments across all articles."""
        return sum(
            1 for c in self._comments.values() if status is None or c.status == status
        )

    async def count_by_article(
        self,
        article_id: ArticleId,
        statuses: Collection[CommentStatus],
    ) -> int:
        """Count an article's comments in the given statuses."""
        return sum(
            1
            for c in self._comments.values()
            if c.article_id == article_id and c.status in statuses
        )

    async def save(self, comment: Comment) -> Comment:
        """Conditionally update a comment on its version."""
        stored = self._comments.get(comment.id)
        if stored is None or stored.version != comment.version:
            raise StaleRecordError("Comment", str(comment.id), comment.version)

        saved = comment.model_copy(update={"version": comment.version + 1})
        self._comments[comment.id] = saved
        return saved

    async def delete(self, comment_id: CommentId) -> bool:
        """Hard delete a single comment."""
        return self._comments.pop(comment_id, None) is not None
