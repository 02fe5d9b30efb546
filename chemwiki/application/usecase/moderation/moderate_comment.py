"""Moderate comment use case."""

from pydantic import BaseModel

from chemwiki.application.usecase.common import ActorRequest, parse_comment_id
from chemwiki.domain.service import CommentService
from chemwiki.domain.value import CommentStatus, ModerationAction


class ModerateCommentRequest(ActorRequest):
    """Moderation request."""

    comment_id: str  # UUID string
    action: ModerationAction


class ModerateCommentResponse(BaseModel):
    """Moderation response."""

    comment_id: str
    status: CommentStatus
    report_count: int


class ModerateCommentUseCase:
    """Use case for approving or rejecting a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: ModerateCommentRequest) -> ModerateCommentResponse:
        """Execute moderation flow.

        Raises:
            ForbiddenError: If the caller is not an admin
            NotFoundError: If the comment does not exist
            InvalidStateError: If the comment is deleted
        """
        comment = await self.comment_service.moderate(
            comment_id=parse_comment_id(request.comment_id),
            principal=request.principal,
            action=request.action,
        )
        return ModerateCommentResponse(
            comment_id=str(comment.id),
            status=comment.status,
            report_count=len(comment.reports),
        )
