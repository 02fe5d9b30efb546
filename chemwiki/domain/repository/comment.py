"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import Collection, List, Optional

from chemwiki.domain.model.comment import Comment
from chemwiki.domain.value import ArticleId, CommentId, CommentStatus


class CommentRepository(ABC):
    """Repository for Comment entity.

    The only component allowed to persist comment state. It holds no
    business rules: callers decide what a comment should look like and the
    repository stores it.

    Writes to existing records are conditional on ``Comment.version``, which
    is what makes read-modify-write cycles in the domain services atomic per
    comment.
    """

    @abstractmethod
    async def create(self, comment: Comment) -> Comment:
        """Insert a new comment.

        Args:
            comment: The comment to insert (``version`` is stored as given)

        Returns:
            The stored comment
        """
        pass

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_article(
        self,
        article_id: ArticleId,
        statuses: Optional[Collection[CommentStatus]] = None,
    ) -> List[Comment]:
        """Find all comments of an article, oldest first.

        Args:
            article_id: The article ID
            statuses: Only return comments in these statuses (None for all)

        Returns:
            Flat list of comments
        """
        pass

    @abstractmethod
    async def find_children(self, parent_id: CommentId) -> List[Comment]:
        """Find direct replies to a comment, in every status.

        Args:
            parent_id: The parent comment ID

        Returns:
            List of child comments, oldest first
        """
        pass

    @abstractmethod
    async def find_all(
        self,
        status: Optional[CommentStatus] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Comment]:
        """Find comments across all articles, newest first.

        Args:
            status: Filter by status (None for all)
            limit: Maximum number of comments to return
            offset: Number of comments to skip

        Returns:
            Page of comments
        """
        pass

    @abstractmethod
    async def count(self, status: Optional[CommentStatus] = None) -> int:
        """Count comments across all articles.

        Args:
            status: Filter by status (None for all)

        Returns:
            Number of comments
        """
        pass

    @abstractmethod
    async def count_by_article(
        self,
        article_id: ArticleId,
        statuses: Collection[CommentStatus],
    ) -> int:
        """Count an article's comments in the given statuses.

        Args:
            article_id: The article ID
            statuses: Statuses to include

        Returns:
            Number of comments
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Update an existing comment if nobody else changed it meanwhile.

        The write only happens when the stored version equals
        ``comment.version``; the stored record then gets ``version + 1``.

        Args:
            comment: The modified comment, carrying the version it was read at

        Returns:
            The stored comment with its new version

        Raises:
            StaleRecordError: If the stored version differs or the comment
                no longer exists
        """
        pass

    @abstractmethod
    async def delete(self, comment_id: CommentId) -> bool:
        """Hard delete a single comment.

        Deleting a missing comment is not an error.

        Args:
            comment_id: The comment ID to delete

        Returns:
            True if a record was removed, False if none existed
        """
        pass
