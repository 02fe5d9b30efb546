"""Admin comment listing use case."""

from datetime import datetime

from pydantic import BaseModel, Field

from chemwiki.application.usecase.common import ActorRequest, author_name
from chemwiki.domain.model import Comment, User
from chemwiki.domain.service import CommentService
from chemwiki.domain.value import CommentStatus, UserId


class ReportItem(BaseModel):
    """A user report, as shown to moderators."""

    reporter_id: str
    reason: str
    reported_at: datetime


class AdminCommentItem(BaseModel):
    """Raw comment record for moderation, including hidden content."""

    comment_id: str
    article_id: str
    author_id: str
    author_name: str
    parent_id: str | None
    content: str
    status: CommentStatus
    score: int
    reports: list[ReportItem]
    created_at: datetime
    updated_at: datetime


class ListCommentsForAdminRequest(ActorRequest):
    """Admin listing request."""

    status: CommentStatus | None = None
    page: int = Field(default=1, ge=1)
    limit: int | None = Field(default=None, ge=1)


class ListCommentsForAdminResponse(BaseModel):
    """Admin listing response."""

    comments: list[AdminCommentItem]
    total: int
    page: int
    limit: int
    pages: int


def _to_admin_item(comment: Comment, authors: dict[UserId, User]) -> AdminCommentItem:
    return AdminCommentItem(
        comment_id=str(comment.id),
        article_id=str(comment.article_id),
        author_id=str(comment.author_id),
        author_name=author_name(comment.author_id, authors),
        parent_id=str(comment.parent_id) if comment.parent_id else None,
        content=comment.content,
        status=comment.status,
        score=comment.score,
        reports=[
            ReportItem(
                reporter_id=str(report.reporter_id),
                reason=report.reason,
                reported_at=report.reported_at,
            )
            for report in comment.reports
        ],
        created_at=comment.created_at,
        updated_at=comment.updated_at,
    )


class ListCommentsForAdminUseCase:
    """Use case for the moderation queue."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(
        self, request: ListCommentsForAdminRequest
    ) -> ListCommentsForAdminResponse:
        """Execute admin listing flow.

        Raises:
            ForbiddenError: If the caller is not an admin
        """
        page = await self.comment_service.list_for_admin(
            principal=request.principal,
            status=request.status,
            page=request.page,
            limit=request.limit,
        )
        authors = await self.comment_service.get_authors(page.items)

        return ListCommentsForAdminResponse(
            comments=[_to_admin_item(comment, authors) for comment in page.items],
            total=page.total,
            page=page.page,
            limit=page.limit,
            pages=page.pages,
        )
