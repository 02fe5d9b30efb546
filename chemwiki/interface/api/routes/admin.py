"""Moderation routes (admin only)."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, Query

from chemwiki.application.usecase.moderation import (
    ListCommentsForAdminRequest,
    ListCommentsForAdminResponse,
    ListCommentsForAdminUseCase,
    ModerateCommentRequest,
    ModerateCommentResponse,
    ModerateCommentUseCase,
    PurgeCommentRequest,
    PurgeCommentResponse,
    PurgeCommentUseCase,
)
from chemwiki.domain.service import JWTService
from chemwiki.domain.value import CommentStatus, ModerationAction
from chemwiki.interface.api.auth import require_principal

router = APIRouter(prefix="/admin/comments", tags=["admin"], route_class=DishkaRoute)


@router.get("", response_model=ListCommentsForAdminResponse)
async def list_comments(
    list_use_case: FromDishka[ListCommentsForAdminUseCase],
    jwt_service: FromDishka[JWTService],
    status: CommentStatus | None = None,
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> ListCommentsForAdminResponse:
    """List comments across all articles, newest first.

    Args:
        list_use_case: Admin listing use case from DI
        jwt_service: JWT service for token verification (injected)
        status: Only comments in this status
        page: 1-based page number
        limit: Page size (capped by configuration)
        authorization: Bearer token header
        auth_token: JWT token from cookie

    Returns:
        Page of raw comments with their reports
    """
    principal = require_principal(
        jwt_service, authorization, auth_token, "moderate comments"
    )
    request = ListCommentsForAdminRequest(
        status=status,
        page=page,
        limit=limit,
        user_id=str(principal.user_id),
        role=principal.role,
    )
    return await list_use_case.execute(request)


async def _moderate(
    comment_id: str,
    action: ModerationAction,
    moderate_use_case: ModerateCommentUseCase,
    jwt_service: JWTService,
    authorization: str | None,
    auth_token: str | None,
) -> ModerateCommentResponse:
    principal = require_principal(
        jwt_service, authorization, auth_token, "moderate comments"
    )
    request = ModerateCommentRequest(
        comment_id=comment_id,
        action=action,
        user_id=str(principal.user_id),
        role=principal.role,
    )
    return await moderate_use_case.execute(request)


@router.put("/{comment_id}/approve", response_model=ModerateCommentResponse)
async def approve_comment(
    comment_id: str,
    moderate_use_case: FromDishka[ModerateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> ModerateCommentResponse:
    """Approve a comment. Existing reports are kept."""
    return await _moderate(
        comment_id,
        ModerationAction.APPROVE,
        moderate_use_case,
        jwt_service,
        authorization,
        auth_token,
    )


@router.put("/{comment_id}/reject", response_model=ModerateCommentResponse)
async def reject_comment(
    comment_id: str,
    moderate_use_case: FromDishka[ModerateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> ModerateCommentResponse:
    """Mark a comment as spam."""
    return await _moderate(
        comment_id,
        ModerationAction.REJECT,
        moderate_use_case,
        jwt_service,
        authorization,
        auth_token,
    )


@router.delete("/{comment_id}", response_model=PurgeCommentResponse)
async def purge_comment(
    comment_id: str,
    purge_use_case: FromDishka[PurgeCommentUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> PurgeCommentResponse:
    """Permanently delete a comment and every reply below it."""
    principal = require_principal(
        jwt_service, authorization, auth_token, "purge comments"
    )
    request = PurgeCommentRequest(
        comment_id=comment_id,
        user_id=str(principal.user_id),
        role=principal.role,
    )
    return await purge_use_case.execute(request)
