"""Update comment use case."""

from chemwiki.application.usecase.common import (
    ActorRequest,
    CommentItem,
    parse_comment_id,
    to_comment_item,
)
from chemwiki.domain.service import CommentService


class UpdateCommentRequest(ActorRequest):
    """Update comment request."""

    comment_id: str  # UUID string
    content: str | None = None  # Checked and trimmed by the domain


class UpdateCommentUseCase:
    """Use case for editing one's own comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize update comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: UpdateCommentRequest) -> CommentItem:
        """Execute update comment flow.

        Args:
            request: Update comment request

        Returns:
            The edited comment, flagged as edited

        Raises:
            NotFoundError: If the comment does not exist
            ForbiddenError: If the caller is not the author
            InvalidStateError: If the comment is deleted
            ValidationError: If the content is blank or too long
        """
        comment = await self.comment_service.edit(
            comment_id=parse_comment_id(request.comment_id),
            principal=request.principal,
            content=request.content,
        )
        authors = await self.comment_service.get_authors([comment])
        return to_comment_item(comment, authors)
