"""Domain value objects for chemwiki.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import field_validator

from chemwiki.domain.value.common import RootValueObject, ValueObject
from chemwiki.domain.value.identifiers import UserId


class CommentStatus(str, Enum):
    """Moderation status of a comment.

    Comments start ``approved``. The allowed moves between statuses are
    listed in ``_STATUS_TRANSITIONS``; every status may "move" to itself so
    that moderation actions are idempotent.
    """

    APPROVED = "approved"
    PENDING = "pending"
    SPAM = "spam"
    DELETED = "deleted"

    def can_transition_to(self, target: "CommentStatus") -> bool:
        """Check whether moving from this status to ``target`` is legal."""
        return target in _STATUS_TRANSITIONS[self]

    @property
    def is_visible(self) -> bool:
        """Whether the comment counts towards the article's comment count."""
        return self in VISIBLE_STATUSES

    @property
    def is_hidden(self) -> bool:
        """Whether the comment body is withheld from readers."""
        return self in (CommentStatus.SPAM, CommentStatus.DELETED)


_STATUS_TRANSITIONS: dict[CommentStatus, frozenset[CommentStatus]] = {
    CommentStatus.APPROVED: frozenset(
        {
            CommentStatus.APPROVED,
            CommentStatus.PENDING,
            CommentStatus.SPAM,
            CommentStatus.DELETED,
        }
    ),
    CommentStatus.PENDING: frozenset(
        {
            CommentStatus.APPROVED,
            CommentStatus.PENDING,
            CommentStatus.SPAM,
            CommentStatus.DELETED,
        }
    ),
    CommentStatus.SPAM: frozenset(
        {CommentStatus.APPROVED, CommentStatus.SPAM, CommentStatus.DELETED}
    ),
    CommentStatus.DELETED: frozenset({CommentStatus.DELETED}),
}

VISIBLE_STATUSES: frozenset[CommentStatus] = frozenset(
    {CommentStatus.APPROVED, CommentStatus.PENDING}
)


class VoteDirection(str, Enum):
    """Direction of a vote on a comment."""

    UP = "up"
    DOWN = "down"


class CommentSort(str, Enum):
    """Sibling ordering for comment threads."""

    NEWEST = "newest"
    OLDEST = "oldest"
    TOP = "top"  # Score descending, ties broken by recency


class ModerationAction(str, Enum):
    """Admin moderation actions."""

    APPROVE = "approve"
    REJECT = "reject"


class UserRole(str, Enum):
    """Role carried by an authenticated principal."""

    USER = "user"
    ADMIN = "admin"


class Slug(RootValueObject[str]):
    """URL-safe article slug.

    Must be lowercase, alphanumeric with hyphens, 1-200 characters.
    Examples: 'sodium', 'anion-gap', 'hba1c-reference-intervals'
    """

    @field_validator("root")
    @classmethod
    def validate_slug_format(cls, v: str) -> str:
        """Validate slug format."""
        if len(v) < 1 or len(v) > 200:
            raise ValueError("Slug must be 1-200 characters")
        if not re.match(r"^[a-z0-9]+(?:-[a-z0-9]+)*$", v):
            raise ValueError(
                "Slug must be lowercase alphanumeric with hyphens, "
                "no leading/trailing hyphens or consecutive hyphens"
            )
        return v


class Principal(ValueObject):
    """Authenticated caller as supplied by the identity provider."""

    user_id: UserId
    role: UserRole = UserRole.USER

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class VoteTally(ValueObject):
    """Score of a comment together with one voter's current direction."""

    score: int
    upvotes: int
    downvotes: int
    voter_direction: VoteDirection | None = None
