"""PostgreSQL implementation of Article repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from chemwiki.domain.model import Article
from chemwiki.domain.repository import ArticleRepository
from chemwiki.domain.value import ArticleId, Slug
from chemwiki.persistence.mappers import row_to_article
from chemwiki.persistence.tables import articles_table


class PostgresArticleRepository(ArticleRepository):
    """PostgreSQL implementation of ArticleRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, article_id: ArticleId) -> Optional[Article]:
        """Find an article by ID."""
        stmt = select(articles_table).where(articles_table.c.id == article_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_article(row._asdict()) if row else None

    async def find_by_slug(self, slug: Slug) -> Optional[Article]:
        """Find an article by slug."""
        stmt = select(articles_table).where(articles_table.c.slug == slug.root)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_article(row._asdict()) if row else None

    async def update_comment_count(self, article_id: ArticleId, count: int) -> None:
        """Overwrite an article's comment count."""
        stmt = (
            articles_table.update()
            .where(articles_table.c.id == article_id)
            .values(comment_count=count, updated_at=datetime.now())
        )
        await self.session.execute(stmt)
        await self.session.flush()
