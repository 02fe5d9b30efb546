"""Report comment use case."""

from pydantic import BaseModel

from chemwiki.application.usecase.common import ActorRequest, parse_comment_id
from chemwiki.domain.service import CommentService
from chemwiki.domain.value import CommentStatus


class ReportCommentRequest(ActorRequest):
    """Report comment request."""

    comment_id: str  # UUID string
    reason: str | None = None  # Checked and trimmed by the domain


class ReportCommentResponse(BaseModel):
    """Report comment response."""

    comment_id: str
    report_count: int
    status: CommentStatus


class ReportCommentUseCase:
    """Use case for flagging a comment to moderators."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: ReportCommentRequest) -> ReportCommentResponse:
        """Execute report flow.

        Returns:
            Report count and the (possibly escalated) status

        Raises:
            NotFoundError: If the comment does not exist
            AlreadyReportedError: If the caller already reported it
            InvalidStateError: If the comment is deleted
            ValidationError: If the reason is blank or too long
        """
        comment = await self.comment_service.report(
            comment_id=parse_comment_id(request.comment_id),
            principal=request.principal,
            reason=request.reason,
        )
        return ReportCommentResponse(
            comment_id=str(comment.id),
            report_count=len(comment.reports),
            status=comment.status,
        )
