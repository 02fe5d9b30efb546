"""Vote routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header

from chemwiki.application.usecase.vote import (
    RemoveVoteRequest,
    RemoveVoteUseCase,
    VoteCommentRequest,
    VoteCommentUseCase,
    VoteResponse,
)
from chemwiki.domain.service import JWTService
from chemwiki.domain.value import VoteDirection
from chemwiki.interface.api.auth import require_principal

router = APIRouter(prefix="/comments", tags=["votes"], route_class=DishkaRoute)


async def _vote(
    comment_id: str,
    direction: VoteDirection,
    vote_use_case: VoteCommentUseCase,
    jwt_service: JWTService,
    authorization: str | None,
    auth_token: str | None,
) -> VoteResponse:
    principal = require_principal(jwt_service, authorization, auth_token, "vote")
    request = VoteCommentRequest(
        comment_id=comment_id,
        direction=direction,
        user_id=str(principal.user_id),
        role=principal.role,
    )
    return await vote_use_case.execute(request)


@router.post("/{comment_id}/upvote", response_model=VoteResponse)
async def upvote_comment(
    comment_id: str,
    vote_use_case: FromDishka[VoteCommentUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> VoteResponse:
    """Upvote a comment, or withdraw an existing upvote.

    Requires authentication.

    Args:
        comment_id: Comment UUID
        vote_use_case: Vote use case from DI
        jwt_service: JWT service for token verification (injected)
        authorization: Bearer token header
        auth_token: JWT token from cookie

    Returns:
        New score and the caller's resulting vote
    """
    return await _vote(
        comment_id, VoteDirection.UP, vote_use_case, jwt_service, authorization, auth_token
    )


@router.post("/{comment_id}/downvote", response_model=VoteResponse)
async def downvote_comment(
    comment_id: str,
    vote_use_case: FromDishka[VoteCommentUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> VoteResponse:
    """Downvote a comment, or withdraw an existing downvote.

    Requires authentication.
    """
    return await _vote(
        comment_id,
        VoteDirection.DOWN,
        vote_use_case,
        jwt_service,
        authorization,
        auth_token,
    )


@router.delete("/{comment_id}/vote", response_model=VoteResponse)
async def remove_vote(
    comment_id: str,
    remove_vote_use_case: FromDishka[RemoveVoteUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> VoteResponse:
    """Remove the caller's vote from a comment.

    Requires authentication. Succeeds when there is no vote to remove.
    """
    principal = require_principal(
        jwt_service, authorization, auth_token, "remove a vote"
    )
    request = RemoveVoteRequest(
        comment_id=comment_id,
        user_id=str(principal.user_id),
        role=principal.role,
    )
    return await remove_vote_use_case.execute(request)
