"""DTOs and helpers shared by the comment use cases."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from chemwiki.domain.error import NotFoundError
from chemwiki.domain.model import Comment, User
from chemwiki.domain.service import CommentTreeNode
from chemwiki.domain.service.vote_ledger import tally_for
from chemwiki.domain.value import (
    CommentId,
    CommentStatus,
    Principal,
    UserId,
    UserRole,
    VoteDirection,
    VoteTally,
)

# Shown for authors no longer in the user directory
UNKNOWN_AUTHOR = "[deleted]"


class ActorRequest(BaseModel):
    """Base for requests made by an authenticated user."""

    user_id: str  # User ID from the verified token
    role: UserRole = UserRole.USER

    @property
    def principal(self) -> Principal:
        return Principal(user_id=UserId(UUID(self.user_id)), role=self.role)


class CommentItem(BaseModel):
    """Comment as returned to clients."""

    comment_id: str
    article_id: str
    author_id: str
    author_name: str
    parent_id: str | None
    content: str
    status: CommentStatus
    score: int
    upvotes: int
    downvotes: int
    user_vote: VoteDirection | None = None
    is_edited: bool
    edited_at: datetime | None
    created_at: datetime
    updated_at: datetime


class CommentNode(CommentItem):
    """Comment with its nested replies."""

    depth: int
    reply_count: int
    replies: list["CommentNode"] = Field(default_factory=list)


def parse_comment_id(value: str) -> CommentId:
    """Parse a comment ID, treating malformed IDs as unknown comments.

    Raises:
        NotFoundError: If ``value`` is not a UUID
    """
    try:
        return CommentId(UUID(value))
    except ValueError:
        raise NotFoundError("Comment", value)


def author_name(author_id: UserId, authors: dict[UserId, User]) -> str:
    author = authors.get(author_id)
    return author.username if author else UNKNOWN_AUTHOR


def to_comment_item(
    comment: Comment,
    authors: dict[UserId, User],
    tally: VoteTally | None = None,
    content: str | None = None,
) -> CommentItem:
    """Convert a comment record to its response item.

    Args:
        comment: Comment record
        authors: Directory records by user ID
        tally: Vote tally from the viewer's perspective (computed if absent)
        content: Display content overriding the stored one (placeholders)

    Returns:
        Response item
    """
    if tally is None:
        tally = tally_for(comment)
    return CommentItem(
        comment_id=str(comment.id),
        article_id=str(comment.article_id),
        author_id=str(comment.author_id),
        author_name=author_name(comment.author_id, authors),
        parent_id=str(comment.parent_id) if comment.parent_id else None,
        content=comment.content if content is None else content,
        status=comment.status,
        score=tally.score,
        upvotes=tally.upvotes,
        downvotes=tally.downvotes,
        user_vote=tally.voter_direction,
        is_edited=comment.is_edited,
        edited_at=comment.edited_at,
        created_at=comment.created_at,
        updated_at=comment.updated_at,
    )


def to_comment_node(node: CommentTreeNode, authors: dict[UserId, User]) -> CommentNode:
    """Convert a thread node (and its replies) to the response tree."""
    item = to_comment_item(node.comment, authors, node.tally, node.content)
    return CommentNode(
        **item.model_dump(),
        depth=node.depth,
        reply_count=node.child_count,
        replies=[to_comment_node(child, authors) for child in node.children],
    )
