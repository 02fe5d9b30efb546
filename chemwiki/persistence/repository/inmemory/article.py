"""In-memory article repository for testing."""

from datetime import datetime
from typing import Optional

from chemwiki.domain.model.article import Article
from chemwiki.domain.repository.article import ArticleRepository
from chemwiki.domain.value import ArticleId, Slug


class InMemoryArticleRepository(ArticleRepository):
    """In-memory implementation of ArticleRepository for testing."""

    def __init__(self) -> None:
        self._articles: dict[ArticleId, Article] = {}

    async def save(self, article: Article) -> Article:
        """Store an article (test seeding; the port itself is read-mostly)."""
        self._articles[article.id] = article
        return article

    async def find_by_id(self, article_id: ArticleId) -> Optional[Article]:
        """Find an article by ID."""
        return self._articles.get(article_id)

    async def find_by_slug(self, slug: Slug) -> Optional[Article]:
        """Find an article by slug."""
        for article in self._articles.values():
            if article.slug == slug:
                return article
        return None

    async def update_comment_count(self, article_id: ArticleId, count: int) -> None:
        """Overwrite an article's comment count."""
        article = self._articles.get(article_id)
        if article:
            self._articles[article_id] = article.model_copy(
                update={"comment_count": count, "updated_at": datetime.now()}
            )
