"""Reply to comment use case."""

from chemwiki.application.usecase.common import (
    ActorRequest,
    CommentItem,
    parse_comment_id,
    to_comment_item,
)
from chemwiki.domain.service import CommentService


class ReplyToCommentRequest(ActorRequest):
    """Reply request."""

    parent_id: str  # UUID string
    content: str | None = None  # Checked and trimmed by the domain


class ReplyToCommentUseCase:
    """Use case for replying to an existing comment."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: ReplyToCommentRequest) -> CommentItem:
        """Execute reply flow.

        Raises:
            NotFoundError: If the parent comment does not exist
            InvalidStateError: If the parent is deleted
            DepthLimitExceededError: If the thread is already at full depth
            ValidationError: If the content is blank or too long
        """
        reply = await self.comment_service.reply(
            parent_id=parse_comment_id(request.parent_id),
            principal=request.principal,
            content=request.content,
        )
        authors = await self.comment_service.get_authors([reply])
        return to_comment_item(reply, authors)
