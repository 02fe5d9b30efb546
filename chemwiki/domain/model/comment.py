"""Comment entity.

Comments form a forest per article: ``parent_id`` points at another comment
of the same article, ``None`` marks a root. The tree itself is never stored;
it is rebuilt from the flat records on every read.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from chemwiki.domain.model.common import DomainModel
from chemwiki.domain.value import (
    ArticleId,
    CommentId,
    CommentStatus,
    UserId,
    VoteDirection,
)


class CommentReport(DomainModel):
    """A single user report against a comment."""

    reporter_id: UserId
    reason: str = Field(min_length=1)
    reported_at: datetime = Field(default_factory=datetime.now)


class Comment(DomainModel):
    """Comment entity.

    Invariants:
    - a user id is in at most one of ``upvoters`` / ``downvoters``
    - a user id appears at most once in ``reports``
    - ``version`` increases by one with every persisted write and is used by
      repositories for conditional updates
    """

    id: CommentId
    article_id: ArticleId
    author_id: UserId
    parent_id: Optional[CommentId] = None
    content: str = Field(min_length=1)  # Stored escaped
    status: CommentStatus = CommentStatus.APPROVED
    upvoters: frozenset[UserId] = frozenset()
    downvoters: frozenset[UserId] = frozenset()
    reports: tuple[CommentReport, ...] = ()
    is_edited: bool = False
    edited_at: Optional[datetime] = None
    version: int = Field(default=1, ge=1)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @model_validator(mode="after")
    def validate_vote_and_report_sets(self) -> "Comment":
        """Enforce the one-vote-per-user and one-report-per-user rules."""
        both = self.upvoters & self.downvoters
        if both:
            raise ValueError(
                f"Voters cannot be in both upvoters and downvoters: {sorted(map(str, both))}"
            )
        reporters = [report.reporter_id for report in self.reports]
        if len(reporters) != len(set(reporters)):
            raise ValueError("A user can report a comment only once")
        return self

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    @property
    def score(self) -> int:
        """Upvotes minus downvotes."""
        return len(self.upvoters) - len(self.downvoters)

    def vote_of(self, user_id: UserId | None) -> VoteDirection | None:
        """Return the direction of ``user_id``'s vote, if any."""
        if user_id is None:
            return None
        if user_id in self.upvoters:
            return VoteDirection.UP
        if user_id in self.downvoters:
            return VoteDirection.DOWN
        return None

    def has_reported(self, user_id: UserId) -> bool:
        return any(report.reporter_id == user_id for report in self.reports)
