"""Domain value objects for chemwiki."""

from chemwiki.domain.value.identifiers import ArticleId, CommentId, UserId
from chemwiki.domain.value.types import (
    VISIBLE_STATUSES,
    CommentSort,
    CommentStatus,
    ModerationAction,
    Principal,
    Slug,
    UserRole,
    VoteDirection,
    VoteTally,
)

__all__ = [
    # Identifiers
    "UserId",
    "ArticleId",
    "CommentId",
    # Types
    "CommentSort",
    "CommentStatus",
    "ModerationAction",
    "Principal",
    "Slug",
    "UserRole",
    "VISIBLE_STATUSES",
    "VoteDirection",
    "VoteTally",
]
