"""Repository interfaces for the chemwiki domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from chemwiki.domain.repository.article import ArticleRepository
from chemwiki.domain.repository.comment import CommentRepository
from chemwiki.domain.repository.user import UserRepository

__all__ = [
    "ArticleRepository",
    "CommentRepository",
    "UserRepository",
]
