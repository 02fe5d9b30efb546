"""Article repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from chemwiki.domain.model.article import Article
from chemwiki.domain.value import ArticleId, Slug


class ArticleRepository(ABC):
    """Port to the article host.

    The discussion subsystem never creates or edits articles; it only looks
    them up and pushes back the aggregate comment count.
    """

    @abstractmethod
    async def find_by_id(self, article_id: ArticleId) -> Optional[Article]:
        """Find an article by ID.

        Args:
            article_id: The article's unique identifier

        Returns:
            The article if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_slug(self, slug: Slug) -> Optional[Article]:
        """Find an article by slug.

        Args:
            slug: The article's slug

        Returns:
            The article if found, None otherwise
        """
        pass

    @abstractmethod
    async def update_comment_count(self, article_id: ArticleId, count: int) -> None:
        """Overwrite an article's comment count.

        Args:
            article_id: The article ID
            count: The freshly computed count
        """
        pass
