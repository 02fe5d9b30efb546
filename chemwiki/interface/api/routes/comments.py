"""Comment routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, status
from pydantic import BaseModel

from chemwiki.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    GetCommentsRequest,
    GetCommentsResponse,
    GetCommentsUseCase,
    ReplyToCommentRequest,
    ReplyToCommentUseCase,
    ReportCommentRequest,
    ReportCommentResponse,
    ReportCommentUseCase,
    UpdateCommentRequest,
    UpdateCommentUseCase,
)
from chemwiki.application.usecase.common import CommentItem
from chemwiki.domain.service import JWTService
from chemwiki.domain.value import CommentSort
from chemwiki.interface.api.auth import bearer_token, require_principal

router = APIRouter(tags=["comments"], route_class=DishkaRoute)


class CommentContentAPIRequest(BaseModel):
    """API request carrying comment text.

    The field is optional here so that a missing or null value reaches the
    domain, which trims it and reports the same 400 validation_error as for
    blank or oversized text. Wrongly typed values are rejected by FastAPI
    and answered with a 400 validation_error by the API error handlers.
    """

    content: str | None = None


class ReportAPIRequest(BaseModel):
    """API request for reporting a comment."""

    reason: str | None = None


@router.get("/articles/{article_ref}/comments", response_model=GetCommentsResponse)
async def get_comments(
    article_ref: str,
    get_comments_use_case: FromDishka[GetCommentsUseCase],
    sort: CommentSort = CommentSort.NEWEST,
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> GetCommentsResponse:
    """Get an article's discussion as a reply tree.

    Public. When a valid token is sent, each comment carries the caller's
    own vote.

    Args:
        article_ref: Article UUID or slug
        get_comments_use_case: Get comments use case from DI
        sort: newest, oldest or top
        authorization: Bearer token header (optional)
        auth_token: JWT token from cookie (optional)

    Returns:
        Nested comments and the visible comment total
    """
    request = GetCommentsRequest(
        article_ref=article_ref,
        sort=sort,
        auth_token=bearer_token(authorization, auth_token),
    )
    return await get_comments_use_case.execute(request)


@router.post(
    "/articles/{article_ref}/comments",
    response_model=CommentItem,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    article_ref: str,
    request: CommentContentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> CommentItem:
    """Post a new top-level comment on an article.

    Requires authentication.

    Args:
        article_ref: Article UUID or slug
        request: Comment text
        create_comment_use_case: Create comment use case from DI
        jwt_service: JWT service for token verification (injected)
        authorization: Bearer token header
        auth_token: JWT token from cookie

    Returns:
        Created comment
    """
    principal = require_principal(
        jwt_service, authorization, auth_token, "create comments"
    )
    use_case_request = CreateCommentRequest(
        article_ref=article_ref,
        content=request.content,
        user_id=str(principal.user_id),
        role=principal.role,
    )
    return await create_comment_use_case.execute(use_case_request)


@router.post(
    "/comments/{comment_id}/replies",
    response_model=CommentItem,
    status_code=status.HTTP_201_CREATED,
)
async def reply_to_comment(
    comment_id: str,
    request: CommentContentAPIRequest,
    reply_use_case: FromDishka[ReplyToCommentUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> CommentItem:
    """Reply to a comment.

    Requires authentication. Fails with ``depth_limit_exceeded`` once the
    thread is at its maximum depth.
    """
    principal = require_principal(jwt_service, authorization, auth_token, "reply")
    use_case_request = ReplyToCommentRequest(
        parent_id=comment_id,
        content=request.content,
        user_id=str(principal.user_id),
        role=principal.role,
    )
    return await reply_use_case.execute(use_case_request)


@router.patch("/comments/{comment_id}", response_model=CommentItem)
async def update_comment(
    comment_id: str,
    request: CommentContentAPIRequest,
    update_comment_use_case: FromDishka[UpdateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> CommentItem:
    """Edit a comment's content.

    Only the comment author can edit.
    """
    principal = require_principal(
        jwt_service, authorization, auth_token, "edit comments"
    )
    use_case_request = UpdateCommentRequest(
        comment_id=comment_id,
        content=request.content,
        user_id=str(principal.user_id),
        role=principal.role,
    )
    return await update_comment_use_case.execute(use_case_request)


@router.delete("/comments/{comment_id}", response_model=DeleteCommentResponse)
async def delete_comment(
    comment_id: str,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> DeleteCommentResponse:
    """Soft-delete a comment.

    Allowed for the author and for admins. Replies stay visible under a
    placeholder.
    """
    principal = require_principal(
        jwt_service, authorization, auth_token, "delete comments"
    )
    use_case_request = DeleteCommentRequest(
        comment_id=comment_id,
        user_id=str(principal.user_id),
        role=principal.role,
    )
    return await delete_comment_use_case.execute(use_case_request)


@router.post("/comments/{comment_id}/report", response_model=ReportCommentResponse)
async def report_comment(
    comment_id: str,
    request: ReportAPIRequest,
    report_use_case: FromDishka[ReportCommentUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> ReportCommentResponse:
    """Report a comment to moderators.

    Requires authentication. Each user can report a comment once.
    """
    principal = require_principal(
        jwt_service, authorization, auth_token, "report comments"
    )
    use_case_request = ReportCommentRequest(
        comment_id=comment_id,
        reason=request.reason,
        user_id=str(principal.user_id),
        role=principal.role,
    )
    return await report_use_case.execute(use_case_request)
