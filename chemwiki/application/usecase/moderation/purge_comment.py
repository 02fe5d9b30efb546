"""Purge comment use case."""

from pydantic import BaseModel

from chemwiki.application.usecase.common import ActorRequest, parse_comment_id
from chemwiki.domain.service import CommentService


class PurgeCommentRequest(ActorRequest):
    """Purge request."""

    comment_id: str  # UUID string


class PurgeCommentResponse(BaseModel):
    """Purge response."""

    comment_id: str
    removed: int
    descendants_removed: int


class PurgeCommentUseCase:
    """Use case for permanently removing a comment and its replies."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: PurgeCommentRequest) -> PurgeCommentResponse:
        """Execute purge flow.

        Raises:
            ForbiddenError: If the caller is not an admin
            NotFoundError: If the comment does not exist
        """
        result = await self.comment_service.purge(
            comment_id=parse_comment_id(request.comment_id),
            principal=request.principal,
        )
        return PurgeCommentResponse(
            comment_id=str(result.comment_id),
            removed=result.removed,
            descendants_removed=result.descendants_removed,
        )
