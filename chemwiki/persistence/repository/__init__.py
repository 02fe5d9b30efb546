"""PostgreSQL repository implementations."""

from chemwiki.persistence.repository.article import PostgresArticleRepository
from chemwiki.persistence.repository.comment import PostgresCommentRepository
from chemwiki.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresArticleRepository",
    "PostgresCommentRepository",
    "PostgresUserRepository",
]
