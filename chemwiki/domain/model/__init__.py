"""Domain models for chemwiki."""

from chemwiki.domain.model.article import Article
from chemwiki.domain.model.comment import Comment, CommentReport
from chemwiki.domain.model.user import User

__all__ = [
    "Article",
    "Comment",
    "CommentReport",
    "User",
]
