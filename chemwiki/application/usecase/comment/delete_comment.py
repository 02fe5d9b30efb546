"""Delete comment use case."""

from pydantic import BaseModel

from chemwiki.application.usecase.common import ActorRequest, parse_comment_id
from chemwiki.domain.service import CommentService
from chemwiki.domain.value import CommentStatus


class DeleteCommentRequest(ActorRequest):
    """Delete comment request."""

    comment_id: str  # UUID string


class DeleteCommentResponse(BaseModel):
    """Delete comment response."""

    comment_id: str
    status: CommentStatus


class DeleteCommentUseCase:
    """Use case for soft-deleting a comment.

    The record stays in place so replies keep their parent; readers see a
    placeholder instead of the content.
    """

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete comment flow.

        Raises:
            NotFoundError: If the comment does not exist
            ForbiddenError: If the caller is neither the author nor an admin
        """
        comment = await self.comment_service.soft_delete(
            comment_id=parse_comment_id(request.comment_id),
            principal=request.principal,
        )
        return DeleteCommentResponse(comment_id=str(comment.id), status=comment.status)
