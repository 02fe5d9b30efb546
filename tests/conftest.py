"""Test configuration and helpers."""

from datetime import datetime, timedelta
from uuid import uuid4

from chemwiki.domain.model import Article, Comment, User
from chemwiki.domain.value import (
    ArticleId,
    CommentId,
    CommentStatus,
    Principal,
    Slug,
    UserId,
    UserRole,
)

# Fixed reference time so that sibling ordering in tests is deterministic
BASE_TIME = datetime(2026, 1, 5, 9, 0, 0)


def make_principal(role: UserRole = UserRole.USER) -> Principal:
    """A fresh caller with a random user ID."""
    return Principal(user_id=UserId(uuid4()), role=role)


def make_admin() -> Principal:
    return make_principal(UserRole.ADMIN)


def make_article(slug: str = "sodium", title: str = "Sodium") -> Article:
    """Article record for seeding the in-memory article host."""
    return Article(id=ArticleId(uuid4()), slug=Slug(slug), title=title)


def make_user(user_id: UserId, username: str, role: UserRole = UserRole.USER) -> User:
    return User(id=user_id, username=username, role=role)


def make_comment(
    article_id: ArticleId,
    parent: Comment | None = None,
    content: str = "A comment",
    status: CommentStatus = CommentStatus.APPROVED,
    minutes: int = 0,
    author_id: UserId | None = None,
) -> Comment:
    """Comment record created ``minutes`` after ``BASE_TIME``.

    Args:
        article_id: Owning article
        parent: Parent comment (None for a root)
        content: Stored content
        status: Moderation status
        minutes: Offset of ``created_at`` from ``BASE_TIME``
        author_id: Author (random when omitted)

    Returns:
        Comment record, not yet stored
    """
    created_at = BASE_TIME + timedelta(minutes=minutes)
    return Comment(
        id=CommentId(uuid4()),
        article_id=article_id,
        author_id=author_id or UserId(uuid4()),
        parent_id=parent.id if parent else None,
        content=content,
        status=status,
        created_at=created_at,
        updated_at=created_at,
    )
